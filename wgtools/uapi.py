"""Unix-socket listener for the configuration protocol."""

from __future__ import annotations

import errno
import os
import queue
import socket
import threading
from typing import Union

SOCKET_DIRECTORY = "/var/run/wireguard"


def sock_path(iface: str, directory: str = SOCKET_DIRECTORY) -> str:
    """Path of the control socket for interface ``iface``."""
    return f"{directory}/{iface}.sock"


def _listen(path: str) -> socket.socket:
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.bind(path)
        sock.listen()
    except OSError:
        sock.close()
        raise
    return sock


def _in_use(path: str) -> bool:
    probe = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        probe.connect(path)
    except OSError:
        return False
    finally:
        probe.close()
    return True


def uapi_open(name: str, directory: str = SOCKET_DIRECTORY) -> socket.socket:
    """Create and return a listening control socket for interface ``name``.

    A leftover socket file that nobody listens on is replaced; a socket
    that is still served raises OSError(EADDRINUSE).
    """
    os.makedirs(directory, mode=0o755, exist_ok=True)
    path = sock_path(name, directory)
    old_umask = os.umask(0o077)
    try:
        try:
            return _listen(path)
        except OSError:
            pass
        if _in_use(path):
            raise OSError(errno.EADDRINUSE, "unix socket in use")
        os.remove(path)
        return _listen(path)
    finally:
        os.umask(old_umask)


def _closed_error() -> OSError:
    return OSError(errno.EBADF, "use of closed network connection")


class UAPIListener:
    """Accepts control connections and fails once its socket file vanishes."""

    POLL_INTERVAL = 0.1

    def __init__(
        self, name: str, sock: socket.socket, directory: str = SOCKET_DIRECTORY
    ) -> None:
        self.path = sock_path(name, directory)
        self._sock = sock
        self._address = sock.getsockname()
        self._events: queue.Queue = queue.Queue()
        self._stop = threading.Event()
        self._close_lock = threading.Lock()
        self._closed = False
        sock.settimeout(self.POLL_INTERVAL)
        threading.Thread(target=self._watch, daemon=True).start()
        threading.Thread(target=self._serve, daemon=True).start()

    def __enter__(self) -> UAPIListener:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _watch(self) -> None:
        while not self._stop.is_set():
            try:
                os.lstat(self.path)
            except FileNotFoundError as err:
                self._events.put(err)
                return
            except OSError:
                pass
            self._stop.wait(self.POLL_INTERVAL)

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except TimeoutError:
                continue
            except OSError as err:
                if not self._stop.is_set():
                    self._events.put(err)
                    return
                break
            self._events.put(conn)
        self._events.put(_closed_error())

    def accept(self) -> socket.socket:
        """Wait for the next connection; raise once the listener has failed."""
        item: Union[socket.socket, BaseException] = self._events.get()
        if isinstance(item, BaseException):
            self._events.put(item)
            raise item
        return item

    def close(self) -> None:
        """Stop listening and remove the socket file."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._stop.set()
        self._sock.close()
        try:
            os.unlink(self.path)
        except FileNotFoundError:
            pass

    def addr(self) -> str:
        """Address the listener is bound to."""
        return self._address