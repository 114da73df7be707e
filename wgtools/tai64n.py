"""TAI64N timestamps with whitened sub-second precision."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

TIMESTAMP_SIZE = 12
_BASE = 0x400000000000000A
_WHITENER_MASK = 0x1000000 - 1
_NANOS_PER_SECOND = 1_000_000_000
_LAYOUT = struct.Struct(">QI")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Timestamp:
    """A 12-byte big-endian TAI64N label; byte order equals time order."""

    raw: bytes = bytes(TIMESTAMP_SIZE)

    def __post_init__(self) -> None:
        raw = bytes(self.raw)
        if len(raw) != TIMESTAMP_SIZE:
            raise ValueError(f"timestamp must be {TIMESTAMP_SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    def __bytes__(self) -> bytes:
        return self.raw

    @property
    def seconds(self) -> int:
        """Seconds since the Unix epoch."""
        return _LAYOUT.unpack(self.raw)[0] - _BASE

    @property
    def nanoseconds(self) -> int:
        """Whitened nanosecond part."""
        return _LAYOUT.unpack(self.raw)[1]

    def after(self, other: Timestamp) -> bool:
        """Return True if this timestamp is strictly later than ``other``."""
        return self.raw > other.raw

    def __str__(self) -> str:
        nanos = self.nanoseconds
        moment = _EPOCH + timedelta(seconds=self.seconds)
        fraction = f".{nanos:09d}".rstrip("0") if nanos else ""
        return f"{moment:%Y-%m-%d %H:%M:%S}{fraction} +0000 UTC"


def stamp(unix_nanos: int) -> Timestamp:
    """Build a timestamp from nanoseconds since the Unix epoch."""
    secs, nanos = divmod(unix_nanos, _NANOS_PER_SECOND)
    nanos &= ~_WHITENER_MASK
    return Timestamp(_LAYOUT.pack((_BASE + secs) & 0xFFFFFFFFFFFFFFFF, nanos))


def now() -> Timestamp:
    """Timestamp for the current wall-clock time."""
    return stamp(time.time_ns())