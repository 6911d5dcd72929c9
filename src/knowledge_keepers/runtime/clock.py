"""Single cooperative scheduler shared by the tick loop and every emission timer."""

from __future__ import annotations

from typing import Callable

from pyglet.clock import Clock


class ManualTime:
    """Time source that only moves when told to, for tests and headless runs."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"cannot move time backwards by {seconds}")
        self.now += seconds


class SimulationClock:
    """Event queue ordered by next-fire time.

    Callbacks run one at a time from :meth:`tick`, so the tick loop and the
    emission timers never touch shared state concurrently.
    """

    def __init__(self, time_function: Callable[[], float] | None = None):
        self.manual_time = time_function if isinstance(time_function, ManualTime) else None
        if time_function is None:
            self._clock = Clock()
        else:
            self._clock = Clock(time_function=time_function)

    @classmethod
    def manual(cls, start: float = 0.0) -> "SimulationClock":
        return cls(ManualTime(start))

    def time(self) -> float:
        return self._clock.time()

    def now_ms(self) -> float:
        return self._clock.time() * 1000.0

    def schedule_once(self, func: Callable, delay_seconds: float) -> None:
        self._clock.schedule_once(func, delay_seconds)

    def schedule_interval(self, func: Callable, interval_seconds: float) -> None:
        self._clock.schedule_interval(func, interval_seconds)

    def unschedule(self, func: Callable) -> None:
        """Drop every pending call to ``func``; unknown callbacks are ignored."""
        self._clock.unschedule(func)

    def tick(self) -> float:
        """Run every callback that is due and return the elapsed time."""
        return self._clock.tick()

    def seconds_until_next(self) -> float | None:
        return self._clock.get_sleep_time(True)

    def advance(self, seconds: float, step: float) -> None:
        """Fast-forward a manual clock in ``step`` increments, ticking after each."""
        if self.manual_time is None:
            raise RuntimeError("advance() needs a clock built on ManualTime")
        remaining = seconds
        while remaining > 1e-9:
            increment = min(step, remaining)
            self.manual_time.advance(increment)
            self._clock.tick()
            remaining -= increment
