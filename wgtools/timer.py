"""Restartable one-shot timers with pending-state tracking."""

from __future__ import annotations

import threading
from typing import Callable, Optional


class Timer:
    """A one-shot timer that can be re-armed, cancelled and waited for.

    ``callback`` is called with no arguments on a worker thread when the
    timer expires while still pending.
    """

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._modifying = threading.Lock()
        self._running = threading.Lock()
        self._pending = False
        self._generation = 0
        self._thread: Optional[threading.Timer] = None

    def _stop_locked(self) -> None:
        if self._thread is not None:
            self._thread.cancel()
            self._thread = None

    def _fire(self, generation: int) -> None:
        with self._running:
            with self._modifying:
                if not self._pending or generation != self._generation:
                    return
                self._pending = False
                self._thread = None
            self._callback()

    def mod(self, delay: float) -> None:
        """Arm (or re-arm) the timer to fire after ``delay`` seconds."""
        with self._modifying:
            self._stop_locked()
            self._pending = True
            self._generation += 1
            thread = threading.Timer(delay, self._fire, args=(self._generation,))
            thread.daemon = True
            self._thread = thread
            thread.start()

    def delete(self) -> None:
        """Cancel the timer if it is pending."""
        with self._modifying:
            self._pending = False
            self._generation += 1
            self._stop_locked()

    def delete_sync(self) -> None:
        """Cancel the timer and wait for a running callback to finish."""
        self.delete()
        with self._running:
            self.delete()

    def is_pending(self) -> bool:
        """Return True if the timer is armed and has not fired yet."""
        with self._modifying:
            return self._pending