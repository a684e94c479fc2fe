"""A small monotonic stopwatch for measuring frame intervals."""

from __future__ import annotations

import time
from typing import Callable


class Timer:
    """Measures seconds elapsed since construction or the last mark."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._last = clock()

    def mark(self) -> float:
        """Return seconds since the previous mark and start a new interval."""
        old = self._last
        self._last = self._clock()
        return self._last - old

    def peek(self) -> float:
        """Return seconds since the previous mark without resetting it."""
        return self._clock() - self._last