"""Object pool that blocks callers once a fixed number of items is out."""

from __future__ import annotations

import threading
from typing import Any, Callable


class WaitPool:
    """Hands out reusable objects, limiting how many are in use at once.

    A ``max_count`` of 0 means no limit.
    """

    def __init__(self, max_count: int, factory: Callable[[], Any]) -> None:
        if max_count < 0:
            raise ValueError("max_count must not be negative")
        self.max_count = max_count
        self._factory = factory
        self._free: list[Any] = []
        self._free_lock = threading.Lock()
        self._cond = threading.Condition()
        self._count = 0

    @property
    def in_use(self) -> int:
        """Number of items taken and not yet returned (tracked when limited)."""
        with self._cond:
            return self._count

    def get(self) -> Any:
        """Take an item, waiting while the limit is reached."""
        if self.max_count:
            with self._cond:
                self._cond.wait_for(lambda: self._count < self.max_count)
                self._count += 1
        with self._free_lock:
            if self._free:
                return self._free.pop()
        return self._factory()

    def put(self, item: Any) -> None:
        """Return an item to the pool."""
        with self._free_lock:
            self._free.append(item)
        if not self.max_count:
            return
        with self._cond:
            self._count -= 1
            self._cond.notify()