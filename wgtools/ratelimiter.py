"""Per-address token-bucket rate limiter with background garbage collection."""

from __future__ import annotations

import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, Hashable, Optional

PACKETS_PER_SECOND = 20
PACKETS_BURSTABLE = 5
GARBAGE_COLLECT_TIME = 1_000_000_000
PACKET_COST = 1_000_000_000 // PACKETS_PER_SECOND
MAX_TOKENS = PACKET_COST * PACKETS_BURSTABLE

_RESET = "reset"
_STOP = "stop"
_TICK_SECONDS = 1.0


@dataclass
class _Entry:
    last_time: int
    tokens: int


class Ratelimiter:
    """Allows a short burst per source address, then a steady rate.

    ``clock`` returns the current time in nanoseconds.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self.clock = clock or time.monotonic_ns
        self._lock = threading.Lock()
        self._table: Optional[dict[Hashable, _Entry]] = None
        self._control: Optional[queue.Queue] = None

    def __enter__(self) -> Ratelimiter:
        self.init()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def init(self) -> None:
        """Clear the table and (re)start the garbage collector."""
        with self._lock:
            if self._control is not None:
                self._control.put(_STOP)
            control: queue.Queue = queue.Queue()
            self._control = control
            self._table = {}
        threading.Thread(target=self._collect, args=(control,), daemon=True).start()

    def close(self) -> None:
        """Stop the garbage collector."""
        with self._lock:
            if self._control is not None:
                self._control.put(_STOP)
                self._control = None

    def _collect(self, control: queue.Queue) -> None:
        ticking = False
        deadline = 0.0
        while True:
            try:
                if ticking:
                    message = control.get(timeout=max(0.0, deadline - time.monotonic()))
                else:
                    message = control.get()
            except queue.Empty:
                deadline += _TICK_SECONDS
                if self.cleanup():
                    ticking = False
                continue
            if message == _STOP:
                return
            ticking = True
            deadline = time.monotonic() + _TICK_SECONDS

    def cleanup(self) -> bool:
        """Drop idle entries; return True if the table is now empty."""
        with self._lock:
            if not self._table:
                return True
            current = self.clock()
            stale = [
                key
                for key, entry in self._table.items()
                if current - entry.last_time > GARBAGE_COLLECT_TIME
            ]
            for key in stale:
                del self._table[key]
            return not self._table

    def allow(self, ip: Hashable) -> bool:
        """Return True if a packet from ``ip`` may be processed now."""
        with self._lock:
            if self._table is None:
                raise RuntimeError("rate limiter has not been initialised")
            current = self.clock()
            entry = self._table.get(ip)
            if entry is None:
                self._table[ip] = _Entry(current, MAX_TOKENS - PACKET_COST)
                if len(self._table) == 1 and self._control is not None:
                    self._control.put(_RESET)
                return True
            entry.tokens = min(entry.tokens + current - entry.last_time, MAX_TOKENS)
            entry.last_time = current
            if entry.tokens > PACKET_COST:
                entry.tokens -= PACKET_COST
                return True
            return False