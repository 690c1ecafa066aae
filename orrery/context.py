"""
Simulation context: the clock, the journey state machine and the config,
owned by the main loop and passed to every tick.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .bodies import body_position
from .clock import ClockSnapshot, SimulationClock
from .config import DEFAULT_CONFIG, SimulationConfig
from .epoch import ReferenceEpoch
from .intercept import InterceptSolution, plan_intercept
from .journey import Journey, JourneyStateMachine, JourneyStatus
from .kinematics import make_travel_time_fn
from .propulsion import PropulsionProfile


@dataclass(frozen=True, slots=True)
class TickSnapshot:
    """Consistent view of clock and journey after one tick."""

    clock: ClockSnapshot
    journey: Journey


class SimulationContext:
    """
    Args:
        config: Simulation constants; its time speed seeds the clock
        epoch: Reference epoch for body phases (defaults to the process-wide cache)
        bodies: Body catalog used to resolve moon parents
    """

    def __init__(self, config: SimulationConfig = DEFAULT_CONFIG, epoch: Optional[ReferenceEpoch] = None,
                 bodies: Optional[dict] = None):
        self.config = config
        self.epoch = epoch
        self.bodies = bodies
        self.clock = SimulationClock(time_speed=config.time_speed)
        self.journeys = JourneyStateMachine(self.clock, config)

    @property
    def distance_scale(self) -> float:
        return self.config.distance_scale

    def tick(self, dt: float) -> TickSnapshot:
        """
        Advance the clock, then the journey. Journey progress is frozen while
        the clock is paused.
        """
        self.clock.advance(dt)
        if self.journeys.status is JourneyStatus.TRAVELING and not self.clock.paused:
            self.journeys.update(dt)
        return self.snapshot()

    def snapshot(self) -> TickSnapshot:
        return TickSnapshot(clock=self.clock.snapshot(), journey=self.journeys.snapshot())

    def position(self, body, sim_time: Optional[float] = None) -> np.ndarray:
        """Scene position of ``body`` at ``sim_time`` (defaults to now)."""
        t = self.clock.time if sim_time is None else sim_time
        return np.asarray(
            body_position(body, t, self.distance_scale, epoch=self.epoch,
                          n_iter=self.config.kepler_iterations, bodies=self.bodies,
                          method=self.config.kepler_method),
            dtype=float,
        )

    def plan(self, origin, destination, propulsion: PropulsionProfile, use_flip_and_burn: bool = True) -> InterceptSolution:
        """Plan an intercept departing at the current simulation time."""
        return plan_intercept(
            origin,
            destination,
            self.clock.time,
            self.distance_scale,
            make_travel_time_fn(propulsion, use_flip_and_burn, self.config),
            epoch=self.epoch,
            max_rounds=self.config.intercept_max_rounds,
            tolerance=self.config.intercept_tolerance,
            n_iter=self.config.kepler_iterations,
            bodies=self.bodies,
            method=self.config.kepler_method,
        )

    def plan_journey(self, origin, destination, propulsion: PropulsionProfile,
                     use_flip_and_burn: bool = True) -> InterceptSolution:
        """
        Walk the selection steps, plan the intercept and start the journey.

        Any journey in progress is cancelled first.
        """
        self.journeys.cancel()
        self.journeys.select_origin(origin)
        self.journeys.select_destination(destination)
        solution = self.plan(origin, destination, propulsion, use_flip_and_burn)
        self.journeys.start(
            origin,
            destination,
            propulsion,
            use_flip_and_burn,
            solution.distance,
            solution.arrival_time,
            solution.destination_position,
        )
        return solution

    def spacecraft_position(self) -> Optional[np.ndarray]:
        """
        Scene position of the traveler.

        Interpolates from the origin's departure position to the
        destination's predicted arrival position by distance progress. Sits at
        the destination once arrived, and at the selected origin otherwise.
        Returns None when no origin is selected.
        """
        j = self.journeys.journey
        if j.status in (JourneyStatus.TRAVELING, JourneyStatus.ARRIVED):
            start = self.position(j.origin, j.start_time)
            end = np.asarray(j.destination_position, dtype=float)
            return start + (end - start) * self.journeys.progress()
        if j.origin is not None:
            return self.position(j.origin)
        return None
