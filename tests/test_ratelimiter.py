import ipaddress
import time

import pytest

from wgtools.ratelimiter import PACKETS_BURSTABLE, PACKETS_PER_SECOND, Ratelimiter

SECOND = 1_000_000_000

IPS = [
    ipaddress.ip_address(text)
    for text in (
        "127.0.0.1",
        "192.168.1.1",
        "172.167.2.3",
        "97.231.252.215",
        "248.97.91.167",
        "188.208.233.47",
        "104.2.183.179",
        "72.129.46.120",
        "2001:0db8:0a0b:12f0:0000:0000:0000:0001",
        "f5c2:818f:c052:655a:9860:b136:6894:25f0",
        "b2d7:15ab:48a7:b07c:a541:f144:a9fe:54fc",
        "a47b:786e:1671:a22b:d6f9:4ab0:abc7:c918",
        "ea1e:d155:7f7a:98fb:2bf5:9483:80f6:5445",
        "3f0e:54a2:f5b4:cd19:a21d:58e1:3746:84c4",
    )
]


class FakeClock:
    def __init__(self):
        self.now = time.monotonic_ns()

    def __call__(self):
        return self.now


def _expected_results():
    results = [(True, "initial burst", 0)] * PACKETS_BURSTABLE
    results += [
        (False, "after burst", 0),
        (True, "filling tokens for single packet", SECOND // PACKETS_PER_SECOND),
        (False, "not having refilled enough", 0),
        (True, "filling tokens for two packet burst", 2 * (SECOND // PACKETS_PER_SECOND)),
        (True, "second packet in 2 packet burst", 0),
        (False, "packet following 2 packet burst", 0),
    ]
    return results


def test_ratelimiter():
    clock = FakeClock()
    rate = Ratelimiter(clock)
    rate.init()
    try:
        for index, (allowed, text, wait) in enumerate(_expected_results()):
            clock.now += wait + 1
            rate.cleanup()
            for ip in IPS:
                assert rate.allow(ip) is allowed, f"{index}: {text}: {ip}"
    finally:
        rate.close()


def test_allow_before_init_raises():
    rate = Ratelimiter(FakeClock())
    with pytest.raises(RuntimeError):
        rate.allow(IPS[0])


def test_cleanup_removes_idle_entries():
    clock = FakeClock()
    with Ratelimiter(clock) as rate:
        for _ in range(PACKETS_BURSTABLE):
            rate.allow(IPS[0])
        assert rate.allow(IPS[0]) is False
        assert rate.cleanup() is False
        clock.now += 2 * SECOND
        assert rate.cleanup() is True
        assert rate.allow(IPS[0]) is True


def test_reinit_clears_table():
    clock = FakeClock()
    with Ratelimiter(clock) as rate:
        for _ in range(PACKETS_BURSTABLE):
            rate.allow(IPS[0])
        assert rate.allow(IPS[0]) is False
        rate.init()
        assert rate.allow(IPS[0]) is True