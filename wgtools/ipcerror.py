"""Errors reported over the configuration protocol, with their errno codes."""

from __future__ import annotations

import enum
import errno
from typing import Union


class IpcErrorCode(enum.IntEnum):
    """Negative errno values sent back as ``errno=`` in protocol replies."""

    IO = -errno.EIO
    PROTOCOL = -errno.EPROTO
    INVALID = -errno.EINVAL
    PORT_IN_USE = -errno.EADDRINUSE
    UNKNOWN = -55  # ENOANO


def _normalise(code: Union[IpcErrorCode, int]) -> Union[IpcErrorCode, int]:
    try:
        return IpcErrorCode(int(code))
    except ValueError:
        return int(code)


class IPCError(Exception):
    """A configuration-protocol failure carrying the code to report.

    Wrap an underlying exception by raising with ``from``; it is then
    available as ``__cause__``.
    """

    def __init__(self, code: Union[IpcErrorCode, int], message: str) -> None:
        super().__init__(message)
        self.code = _normalise(code)
        self.message = message

    @property
    def error_code(self) -> int:
        """The numeric code written in the protocol reply."""
        return int(self.code)

    def __str__(self) -> str:
        return f"IPC error {int(self.code)}: {self.message}"