"""Record identifier generation.

Generated ids come from an explicit counter owned by whoever builds
records (the mock database), never from process-wide state. Tests can
reset or seed it to get deterministic ids.
"""

from __future__ import annotations

import threading


class IdCounter:
    """Auto-incrementing id source.

    Thread-safe. The first id handed out is ``start + 1``.

    Usage:
        counter = IdCounter()
        counter.next()  # 1
        counter.next()  # 2
        counter.reset(start=100)
        counter.next()  # 101
    """

    def __init__(self, start: int = 0) -> None:
        self._lock = threading.Lock()
        self._current = start

    @property
    def current(self) -> int:
        """The last id handed out (or the seed, if none yet)."""
        with self._lock:
            return self._current

    def next(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    def reset(self, start: int = 0) -> None:
        """Reseed the counter."""
        with self._lock:
            self._current = start
