"""
Simulation Clock
================

Advances and wraps simulation time for the frame-driven demos.

    advance(dt):  time += max(dt, 0) * speed        (only while running)
                  time  = time mod wrap_period      (if wrap_period is set)

Pausing freezes time; the caller skips recomputation and the last frame
stays valid. reset() zeroes time and notifies registered collaborators
(plot history, probe trace) so they can drop accumulated samples.

Oct 2026
"""

import math
from typing import Callable, List, Optional


class SimulationClock:
    """
    Monotonic (or wrapped) simulation time.

    Attributes:
        time: current time, >= 0
        speed: time advanced per unit of host dt, > 0
        running: False freezes time
        wrap_period: if set, time stays in [0, wrap_period)
        wrapped: True if the most recent advance wrapped around
    """

    def __init__(self, speed: float = 1.0,
                 wrap_period: Optional[float] = None,
                 running: bool = True):
        if not speed > 0:
            raise ValueError(f"Clock speed must be > 0, got {speed}")
        if wrap_period is not None and not wrap_period > 0:
            raise ValueError(f"wrap_period must be > 0 or None, got {wrap_period}")

        self.time = 0.0
        self.speed = float(speed)
        self.running = running
        self.wrap_period = wrap_period
        self.wrapped = False
        self._reset_callbacks: List[Callable[[], None]] = []

    def advance(self, dt: float) -> float:
        """
        Advance by dt * speed. Negative dt is clamped to 0.

        Returns:
            the new time
        """
        self.wrapped = False
        if not self.running:
            return self.time

        t = self.time + max(float(dt), 0.0) * self.speed
        if self.wrap_period is not None and t >= self.wrap_period:
            t = math.fmod(t, self.wrap_period)
            self.wrapped = True
        self.time = t
        return t

    def set_running(self, running: bool):
        self.running = bool(running)

    def toggle(self) -> bool:
        self.running = not self.running
        return self.running

    def set_wrap_period(self, wrap_period: Optional[float]):
        """Change the wrap period, reducing the current time into it."""
        if wrap_period is not None and not wrap_period > 0:
            raise ValueError(f"wrap_period must be > 0 or None, got {wrap_period}")
        self.wrap_period = wrap_period
        if wrap_period is not None and self.time >= wrap_period:
            self.time = math.fmod(self.time, wrap_period)

    def on_reset(self, callback: Callable[[], None]):
        """Register a collaborator to clear on reset()."""
        self._reset_callbacks.append(callback)

    def reset(self):
        self.time = 0.0
        self.wrapped = False
        for callback in self._reset_callbacks:
            callback()
