# shaderpass/core/timing.py
import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class ElapsedClock:
    """
    Seconds elapsed since the clock was started.

    Starts on construction. `time_fn` can be swapped for a fixed source to
    make time-dependent shaders deterministic.
    """

    time_fn: Callable[[], float] = time.perf_counter

    _start: float = field(init=False, default=0.0)

    def __post_init__(self):
        self.start()

    def start(self) -> None:
        """Reset the origin to now."""
        self._start = self.time_fn()

    @property
    def elapsed(self) -> float:
        return self.time_fn() - self._start


def frozen_clock(seconds: float = 0.0) -> ElapsedClock:
    """A clock that always reports `seconds` elapsed."""
    clock = ElapsedClock(time_fn=lambda: 0.0)
    clock._start = -seconds
    return clock
