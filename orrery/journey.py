"""
Journey lifecycle state machine.

    Idle -> SelectingDestination -> SelectingPropulsion -> Traveling -> Arrived
      ^                                                                  |
      +---------------- cancel (any non-Idle) / reset (Arrived) ---------+

The machine is driven by a per-frame loop that does not track state itself,
so calls from the wrong state are ignored with a warning. With
``strict=True`` they raise InvalidJourneyTransition instead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Tuple

from .clock import SimulationClock
from .config import DEFAULT_CONFIG, SimulationConfig
from .errors import InvalidJourneyTransition
from .kinematics import FlightPhase, KinematicProfile, kinematic_profile
from .propulsion import PropulsionProfile

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


class JourneyStatus(str, Enum):
    IDLE = 'idle'
    SELECTING_DESTINATION = 'selecting-destination'
    SELECTING_PROPULSION = 'selecting-propulsion'
    TRAVELING = 'traveling'
    ARRIVED = 'arrived'


@dataclass(slots=True)
class Journey:
    """Mutable journey record, owned by a JourneyStateMachine."""

    status: JourneyStatus = JourneyStatus.IDLE
    origin: Optional[Any] = None
    destination: Optional[Any] = None
    propulsion: Optional[PropulsionProfile] = None
    use_flip_and_burn: bool = True
    start_time: float = 0.0  # simulation time at departure (s)
    elapsed_time: float = 0.0  # simulation seconds since departure
    total_distance: float = 0.0  # surface-to-surface (km)
    arrival_time: float = 0.0  # predicted simulation time of arrival (s)
    destination_position: Optional[Vec3] = None  # destination at arrival (scene units)


class JourneyStateMachine:
    """
    Args:
        clock: The simulation clock this journey reads time from and pauses
        config: Arrival thresholds, kinematic constants and the strict flag
    """

    def __init__(self, clock: SimulationClock, config: SimulationConfig = DEFAULT_CONFIG):
        self.clock = clock
        self.config = config
        self._journey = Journey()
        self._paused_before_selection: Optional[bool] = None

    @property
    def journey(self) -> Journey:
        return self._journey

    @property
    def status(self) -> JourneyStatus:
        return self._journey.status

    def snapshot(self) -> Journey:
        """Copy of the journey record for readers outside the tick loop."""
        return replace(self._journey)

    def _invalid(self, operation: str, expected: JourneyStatus) -> None:
        msg = f"{operation}() requires status '{expected.value}', journey is '{self.status.value}'"
        if self.config.strict:
            raise InvalidJourneyTransition(msg)
        logger.warning("Ignoring %s", msg)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_origin(self, origin) -> None:
        """Idle -> SelectingDestination."""
        if self.status is not JourneyStatus.IDLE:
            return self._invalid('select_origin', JourneyStatus.IDLE)
        self._journey.origin = origin
        self._journey.status = JourneyStatus.SELECTING_DESTINATION

    def select_destination(self, destination) -> None:
        """SelectingDestination -> SelectingPropulsion; pauses the clock."""
        if self.status is not JourneyStatus.SELECTING_DESTINATION:
            return self._invalid('select_destination', JourneyStatus.SELECTING_DESTINATION)
        self._journey.destination = destination
        self._journey.status = JourneyStatus.SELECTING_PROPULSION
        self._paused_before_selection = self.clock.paused
        self.clock.set_paused(True)

    # ------------------------------------------------------------------
    # Travel
    # ------------------------------------------------------------------

    def start(
        self,
        origin,
        destination,
        propulsion: PropulsionProfile,
        use_flip_and_burn: bool,
        distance: float,
        arrival_time: float,
        destination_position: Vec3,
    ) -> None:
        """SelectingPropulsion -> Traveling. Captures the departure time and unpauses the clock."""
        if self.status is not JourneyStatus.SELECTING_PROPULSION:
            return self._invalid('start', JourneyStatus.SELECTING_PROPULSION)
        self._journey = Journey(
            status=JourneyStatus.TRAVELING,
            origin=origin,
            destination=destination,
            propulsion=propulsion,
            use_flip_and_burn=bool(use_flip_and_burn),
            start_time=self.clock.time,
            elapsed_time=0.0,
            total_distance=float(distance),
            arrival_time=float(arrival_time),
            destination_position=tuple(float(x) for x in destination_position),
        )
        self._paused_before_selection = None
        self.clock.set_paused(False)
        logger.info("Journey %s -> %s started with %s (%.6e km)",
                    origin, destination, propulsion.id, distance)

    def update(self, dt: float) -> JourneyStatus:
        """
        Advance the journey by ``dt`` wall-clock seconds and check for arrival.

        The frame loop calls this every tick whatever the state, so outside
        Traveling it is a no-op logged at DEBUG (strict mode still raises).
        """
        if self.status is not JourneyStatus.TRAVELING:
            if self.config.strict:
                self._invalid('update', JourneyStatus.TRAVELING)
            logger.debug("Ignoring update() while journey is '%s'", self.status.value)
            return self.status

        journey = self._journey
        journey.elapsed_time += dt * self.clock.time_speed

        if self._has_arrived():
            journey.status = JourneyStatus.ARRIVED
            logger.info("Journey %s -> %s arrived after %.3f s",
                        journey.origin, journey.destination, journey.elapsed_time)
        return journey.status

    def _profile(self) -> KinematicProfile:
        j = self._journey
        return kinematic_profile(j.total_distance, j.propulsion, j.use_flip_and_burn, self.config)

    def _has_arrived(self) -> bool:
        kp = self._profile()
        elapsed = self._journey.elapsed_time
        traveled = kp.distance_at(elapsed)
        if kp.decelerates:
            return (kp.speed(elapsed) < self.config.arrival_speed
                    and traveled >= self.config.flip_arrival_fraction * kp.distance)
        return traveled >= self.config.coast_arrival_fraction * kp.distance

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Any non-Idle state -> Idle, restoring the pause flag held before propulsion selection."""
        if self.status is JourneyStatus.IDLE:
            return
        if self._paused_before_selection is not None:
            self.clock.set_paused(self._paused_before_selection)
        logger.info("Journey cancelled from '%s'", self.status.value)
        self._clear()

    def reset(self) -> None:
        """Arrived -> Idle."""
        if self.status is not JourneyStatus.ARRIVED:
            return self._invalid('reset', JourneyStatus.ARRIVED)
        logger.info("Journey %s -> %s reset", self._journey.origin, self._journey.destination)
        self._clear()

    def _clear(self) -> None:
        self._journey = Journey()
        self._paused_before_selection = None

    # ------------------------------------------------------------------
    # Read-throughs for the rendering layer
    # ------------------------------------------------------------------

    def _in_flight(self) -> bool:
        return self.status in (JourneyStatus.TRAVELING, JourneyStatus.ARRIVED)

    def current_speed(self) -> float:
        if not self._in_flight():
            return 0.0
        return self._profile().speed(self._journey.elapsed_time)

    def distance_traveled(self) -> float:
        if not self._in_flight():
            return 0.0
        return self._profile().distance_at(self._journey.elapsed_time)

    def flight_phase(self) -> Optional[FlightPhase]:
        if not self._in_flight():
            return None
        return self._profile().phase(self._journey.elapsed_time)

    def progress(self) -> float:
        if not self._in_flight():
            return 0.0
        kp = self._profile()
        if kp.distance <= 0.0:
            return 1.0
        return min(1.0, kp.distance_at(self._journey.elapsed_time) / kp.distance)

    def travel_time(self) -> float:
        if not self._in_flight():
            return 0.0
        return self._profile().total_time
