"""
Simulation clock: simulation time, pause flag and time-speed multiplier.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClockSnapshot:
    """Immutable view of the clock, taken once per tick for readers."""

    time: float
    paused: bool
    time_speed: float


class SimulationClock:
    """
    Single-writer simulation clock.

    Time only moves forward through ``advance``; ``set_time`` is the one
    operation that rebases it directly (a "jump to date").

    Args:
        time: Initial simulation time (s)
        paused: Initial pause flag
        time_speed: Simulation seconds per wall-clock second, must be > 0
    """

    def __init__(self, time: float = 0.0, paused: bool = False, time_speed: float = 1.0):
        if time_speed <= 0.0:
            raise ValueError(f"time_speed must be positive, got {time_speed}")
        self._time = float(time)
        self._paused = bool(paused)
        self._time_speed = float(time_speed)

    @property
    def time(self) -> float:
        return self._time

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def time_speed(self) -> float:
        return self._time_speed

    def advance(self, dt: float) -> float:
        """
        Advance by ``dt`` wall-clock seconds scaled by the time speed.
        Does nothing while paused. Returns the new simulation time.
        """
        if dt < 0.0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if not self._paused:
            self._time += dt * self._time_speed
        return self._time

    def set_paused(self, paused: bool) -> None:
        self._paused = bool(paused)

    def set_time_speed(self, time_speed: float) -> None:
        if time_speed <= 0.0:
            raise ValueError(f"time_speed must be positive, got {time_speed}")
        self._time_speed = float(time_speed)

    def set_time(self, time: float) -> None:
        logger.info("Simulation time set to %.3f s (was %.3f s)", time, self._time)
        self._time = float(time)

    def snapshot(self) -> ClockSnapshot:
        return ClockSnapshot(time=self._time, paused=self._paused, time_speed=self._time_speed)

    def __repr__(self) -> str:
        return f"SimulationClock(time={self._time}, paused={self._paused}, time_speed={self._time_speed})"


def time_for_date(target: datetime, start: Optional[datetime] = None) -> float:
    """
    Simulation time (s) that shows ``target`` when simulation time zero is ``start``.

    Naive datetimes are taken to be UTC; ``start`` defaults to now.
    """
    if target.tzinfo is None:
        target = target.replace(tzinfo=timezone.utc)
    if start is None:
        start = datetime.now(timezone.utc)
    elif start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    return (target - start).total_seconds()


def date_for_time(sim_time: float, start: datetime) -> datetime:
    """Calendar moment shown at ``sim_time`` when simulation time zero is ``start``."""
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(start.timestamp() + sim_time, tz=timezone.utc)
