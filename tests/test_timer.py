import threading
import time

from wgtools.timer import Timer


def test_fires_after_mod():
    fired = threading.Event()
    timer = Timer(fired.set)
    timer.mod(0.01)
    assert timer.is_pending()
    assert fired.wait(2.0)
    time.sleep(0.02)
    assert not timer.is_pending()


def test_new_timer_is_not_pending():
    timer = Timer(lambda: None)
    assert timer.is_pending() is False


def test_delete_prevents_firing():
    fired = threading.Event()
    timer = Timer(fired.set)
    timer.mod(0.05)
    timer.delete()
    assert not timer.is_pending()
    assert not fired.wait(0.2)


def test_re_arm_fires_once():
    calls = []
    done = threading.Event()

    def callback():
        calls.append(1)
        done.set()

    timer = Timer(callback)
    timer.mod(0.05)
    timer.mod(0.05)
    timer.mod(0.05)
    assert timer.is_pending() is True
    assert done.wait(2.0)
    time.sleep(0.15)
    assert len(calls) == 1
    assert timer.is_pending() is False


def test_can_fire_again_after_firing():
    calls = []
    timer = Timer(lambda: calls.append(1))
    timer.mod(0.01)
    time.sleep(0.1)
    timer.mod(0.01)
    time.sleep(0.1)
    assert len(calls) == 2


def test_delete_sync_waits_for_running_callback():
    started = threading.Event()
    finished = threading.Event()

    def callback():
        started.set()
        time.sleep(0.1)
        finished.set()

    timer = Timer(callback)
    timer.mod(0.0)
    assert started.wait(2.0)
    timer.delete_sync()
    assert finished.is_set()
    assert not timer.is_pending()