"""Cancellable reads and writes on a non-blocking file descriptor."""

from __future__ import annotations

import errno
import os
import select

_RETRY_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK, errno.EINTR})


def retry_after_error(err: BaseException) -> bool:
    """Return True if ``err`` means the operation should simply be retried."""
    return isinstance(err, OSError) and err.errno in _RETRY_ERRNOS


def _closed_error() -> OSError:
    return OSError(errno.EBADF, "file already closed")


class RWCancel:
    """Wraps a descriptor so that blocked reads and writes can be cancelled."""

    def __init__(self, fd: int) -> None:
        os.set_blocking(fd, False)
        self.fd = fd
        self._closing_reader, self._closing_writer = os.pipe()
        self._closed = False

    def __enter__(self) -> RWCancel:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _wait(self, event: int) -> bool:
        poller = select.poll()
        poller.register(self.fd, event)
        poller.register(self._closing_reader, select.POLLIN)
        while True:
            try:
                ready = dict(poller.poll())
                break
            except OSError as err:
                if not retry_after_error(err):
                    return False
        if ready.get(self._closing_reader):
            return False
        return bool(ready.get(self.fd))

    def ready_read(self) -> bool:
        """Wait until the descriptor is readable; False if cancelled."""
        return self._wait(select.POLLIN)

    def ready_write(self) -> bool:
        """Wait until the descriptor is writable; False if cancelled."""
        return self._wait(select.POLLOUT)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes, raising OSError(EBADF) if cancelled."""
        while True:
            try:
                return os.read(self.fd, size)
            except OSError as err:
                if not retry_after_error(err):
                    raise
            if not self.ready_read():
                raise _closed_error()

    def write(self, data: bytes) -> int:
        """Write ``data``, raising OSError(EBADF) if cancelled."""
        while True:
            try:
                return os.write(self.fd, data)
            except OSError as err:
                if not retry_after_error(err):
                    raise
            if not self.ready_write():
                raise _closed_error()

    def cancel(self) -> None:
        """Wake any waiting reader or writer and make it fail."""
        os.write(self._closing_writer, b"\0")

    def close(self) -> None:
        """Release the cancellation pipe."""
        if self._closed:
            return
        self._closed = True
        for fd in (self._closing_reader, self._closing_writer):
            try:
                os.close(fd)
            except OSError:
                pass