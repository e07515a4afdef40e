"""A stoppable high-resolution timer measured in counter ticks."""

from __future__ import annotations

import time as _time
from collections.abc import Callable

_NANOSECONDS_PER_SECOND = 1_000_000_000


class SystemTimer:
    """Measures running time and per-frame elapsed time from a tick counter.

    The timer starts out stopped; call :meth:`reset` or :meth:`start` to run it.
    A recorded stop time of zero means "not stopped", as the counter never
    reads zero in practice.
    """

    def __init__(
        self,
        clock: Callable[[], int] | None = None,
        ticks_per_second: int | None = None,
    ) -> None:
        if clock is None:
            clock = _time.perf_counter_ns
            if ticks_per_second is None:
                ticks_per_second = _NANOSECONDS_PER_SECOND
        if ticks_per_second is None:
            raise ValueError("ticks_per_second is required with a custom clock")
        if ticks_per_second <= 0:
            raise ValueError("ticks_per_second must be positive")
        self._clock = clock
        self._ticks_per_second = ticks_per_second
        self._stopped = True
        self._stop_time = 0
        self._last_elapsed = 0
        self._base = 0

    def _adjusted_now(self) -> int:
        """The stop time while stopped, otherwise the current counter."""
        return self._stop_time if self._stop_time != 0 else self._clock()

    def reset(self) -> None:
        """Restart measurement from now and run the timer."""
        now = self._adjusted_now()
        self._base = self._last_elapsed = now
        self._stop_time = 0
        self._stopped = False

    def start(self) -> None:
        """Run the timer, leaving out the time it spent stopped."""
        now = self._clock()
        if self._stopped:
            self._base += now - self._stop_time
        self._stop_time = 0
        self._last_elapsed = now
        self._stopped = False

    def stop(self) -> None:
        """Freeze the timer at the current counter value."""
        if self._stopped:
            return
        now = self._clock()
        self._last_elapsed = self._stop_time = now
        self._stopped = True

    def advance(self) -> None:
        """Move a stopped timer forward by a tenth of a second."""
        self._stop_time += self._ticks_per_second // 10

    def time(self) -> float:
        """Seconds measured since the last reset, excluding stopped periods."""
        return (self._adjusted_now() - self._base) / self._ticks_per_second

    def absolute_time(self) -> float:
        """The raw counter in seconds."""
        return self._clock() / self._ticks_per_second

    def elapsed_time(self) -> float:
        """Seconds since the previous call; never negative."""
        now = self._adjusted_now()
        elapsed = (now - self._last_elapsed) / self._ticks_per_second
        self._last_elapsed = now
        return max(elapsed, 0.0)

    def is_stopped(self) -> bool:
        return self._stopped