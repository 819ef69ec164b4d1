# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Fire-and-forget scheduling of deferred engine actions.

Two implementations share the ``call_later`` signature. ``ThreadingScheduler``
runs callbacks on daemon timer threads for live matches, which keeps working
while the host is paused and no ticks arrive. ``ManualScheduler`` only runs
callbacks when told to, which keeps tests and headless replays
deterministic. Neither supports cancellation.
"""
import heapq
import itertools
import threading
import time
from typing import Callable, List, Optional, Protocol, Tuple


class Scheduler(Protocol):
    """Anything able to run a callback later."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` after ``delay`` seconds.

        Parameters
        ----------
        delay : float
            Seconds to wait.
        callback : Callable[[], None]
            Action to run.
        """
        ...


class SimulatedClock:
    """Clock advanced by hand, for headless replays and tests.

    Parameters
    ----------
    start : float, optional
        Initial reading in seconds.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        """Move the clock forward.

        Parameters
        ----------
        seconds : float
            Amount to add; must not be negative.

        Returns
        -------
        float
            The new reading.
        """
        if seconds < 0:
            raise ValueError("A clock cannot run backwards")
        self.now += seconds
        return self.now


class ThreadingScheduler:
    """Run each deferred callback on its own daemon :class:`threading.Timer`."""

    def __init__(self) -> None:
        self._timers: List[threading.Timer] = []
        self._lock = threading.Lock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` after ``delay`` seconds on a timer thread.

        Parameters
        ----------
        delay : float
            Seconds to wait.
        callback : Callable[[], None]
            Action to run. It must take the engine lock itself.
        """
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        with self._lock:
            self._timers = [t for t in self._timers if t.is_alive()]
            self._timers.append(timer)
        timer.start()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for outstanding timers, mainly for clean shutdown.

        Parameters
        ----------
        timeout : float | None, optional
            Per-timer wait limit in seconds.
        """
        with self._lock:
            timers = list(self._timers)
        for timer in timers:
            timer.join(timeout)


class ManualScheduler:
    """Queue callbacks and run them when :meth:`run_due` is called.

    Parameters
    ----------
    clock : Callable[[], float], optional
        Clock used to compute due times; shared with the engine in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self.clock = clock
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Queue ``callback`` to run once the clock passes ``now + delay``.

        Parameters
        ----------
        delay : float
            Seconds to wait.
        callback : Callable[[], None]
            Action to run.
        """
        heapq.heappush(self._queue, (self.clock() + delay, next(self._counter), callback))

    def run_due(self, now: Optional[float] = None) -> int:
        """Run every queued callback whose due time has been reached.

        Parameters
        ----------
        now : float | None, optional
            Time to compare against; the scheduler clock when omitted.

        Returns
        -------
        int
            Number of callbacks executed.
        """
        current = self.clock() if now is None else now
        executed = 0
        while self._queue and self._queue[0][0] <= current:
            _, _, callback = heapq.heappop(self._queue)
            callback()
            executed += 1
        return executed

    @property
    def pending(self) -> int:
        """Return the number of callbacks still waiting."""
        return len(self._queue)
