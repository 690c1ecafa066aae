"""
Propulsion kinematics: travel time, speed, distance covered and flight phase.

All four public functions are evaluated from one KinematicProfile, which
fixes the regime and the phase boundary times for a (distance, profile,
flip-and-burn) triple. Elapsed time is clamped to [0, total_time], so a
finished journey reports its arrival state rather than extrapolating.

Units: distances in km, times in seconds, speeds in km/s.
"""
from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .config import DEFAULT_CONFIG, SimulationConfig
from .constants import AU_TO_KM
from .propulsion import PropulsionProfile, check_profile

logger = logging.getLogger(__name__)


class FlightPhase(str, Enum):
    ACCELERATING = 'accelerating'
    CRUISING = 'cruising'
    DECELERATING = 'decelerating'


class KinematicRegime(str, Enum):
    INSTANTANEOUS = 'instantaneous'
    CONSTANT_VELOCITY = 'constant-velocity'
    LOW_THRUST = 'low-thrust'
    BURN_COAST = 'burn-coast'
    FLIP_AND_BURN = 'flip-and-burn'


@dataclass(frozen=True, slots=True)
class KinematicProfile:
    """
    Phase boundaries of one journey.

    Attributes:
        regime: Kinematic model in use
        distance: Total distance (km), floored at zero
        max_speed: Profile speed cap (km/s)
        accel: Acceleration (km/s^2); zero for the special cases
        time_to_max_speed: max_speed / accel (s); zero when accel is zero
        accel_distance: Distance covered reaching max speed (km)
        total_time: Travel time (s)
        accel_end_time: Time at which thrusting stops (s)
        decel_start_time: Time at which deceleration starts (s); infinite
            when the journey never decelerates
        cruise_speed: Speed held between accel_end_time and decel_start_time (km/s)
    """
    regime: KinematicRegime
    distance: float
    max_speed: float
    accel: float
    time_to_max_speed: float
    accel_distance: float
    total_time: float
    accel_end_time: float
    decel_start_time: float
    cruise_speed: float

    @property
    def decelerates(self) -> bool:
        return self.regime is KinematicRegime.FLIP_AND_BURN

    @property
    def linear(self) -> bool:
        """Distance grows linearly with time (special cases and low thrust)."""
        return self.regime in (
            KinematicRegime.INSTANTANEOUS,
            KinematicRegime.CONSTANT_VELOCITY,
            KinematicRegime.LOW_THRUST,
        )

    def clamp(self, elapsed: float) -> float:
        return min(max(float(elapsed), 0.0), self.total_time)

    def phase(self, elapsed: float) -> FlightPhase:
        t = self.clamp(elapsed)
        if t < self.accel_end_time:
            return FlightPhase.ACCELERATING
        if t < self.decel_start_time:
            return FlightPhase.CRUISING
        return FlightPhase.DECELERATING

    def speed(self, elapsed: float) -> float:
        t = self.clamp(elapsed)
        if self.regime in (KinematicRegime.INSTANTANEOUS, KinematicRegime.CONSTANT_VELOCITY):
            return self.max_speed
        if t < self.accel_end_time:
            v = self.accel * t
        elif t < self.decel_start_time:
            v = self.cruise_speed
        else:
            v = self.cruise_speed - self.accel * (t - self.decel_start_time)
        return min(max(v, 0.0), self.max_speed)

    def distance_at(self, elapsed: float) -> float:
        t = self.clamp(elapsed)
        if self.linear:
            if self.total_time <= 0.0:
                return self.distance
            return self.distance * min(1.0, t / self.total_time)

        a = self.accel
        if t < self.accel_end_time:
            d = 0.5 * a * t * t
        else:
            d = 0.5 * a * self.accel_end_time**2
            if t < self.decel_start_time:
                d += self.cruise_speed * (t - self.accel_end_time)
            else:
                tau = t - self.decel_start_time
                d += self.cruise_speed * (self.decel_start_time - self.accel_end_time)
                d += self.cruise_speed * tau - 0.5 * a * tau * tau
        return min(max(d, 0.0), self.distance)


def kinematic_profile(
    total_distance: float,
    profile: PropulsionProfile,
    use_flip_and_burn: bool = True,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> KinematicProfile:
    """
    Compute the regime and phase boundaries for a journey.

    Args:
        total_distance: Surface-to-surface distance (km)
        profile: Propulsion profile
        use_flip_and_burn: Request a decelerate-to-rest arrival; ignored when
            the profile does not support it

    Raises:
        InvalidPropulsionProfile: if the profile cannot be flown
    """
    # Scalars arrive as numpy or jax 0-d arrays, which the cache cannot hash
    return _kinematic_profile(float(total_distance), profile, bool(use_flip_and_burn), config)


@functools.lru_cache(maxsize=256)
def _kinematic_profile(
    d: float,
    profile: PropulsionProfile,
    use_flip_and_burn: bool,
    config: SimulationConfig,
) -> KinematicProfile:
    check_profile(profile)

    if d < 0.0:
        logger.debug("Negative distance %.3f km for %s clamped to zero", d, profile.id)
        d = 0.0
    v = float(profile.max_speed)

    if profile.kind == 'instantaneous':
        T = (d / AU_TO_KM) * config.instantaneous_seconds_per_au
        return KinematicProfile(KinematicRegime.INSTANTANEOUS, d, v, 0.0, 0.0, 0.0, T, 0.0, math.inf, v)

    if profile.kind == 'constant-velocity':
        T = d / v
        return KinematicProfile(KinematicRegime.CONSTANT_VELOCITY, d, v, 0.0, 0.0, 0.0, T, 0.0, math.inf, v)

    a = profile.acceleration / 1000.0  # m/s^2 to km/s^2

    # Thrust too low to matter within mission timescales: cruise at max speed
    if profile.acceleration < config.low_thrust_threshold or a == 0.0:
        t_max = v / a if a > 0.0 else 0.0
        T = d / v
        return KinematicProfile(KinematicRegime.LOW_THRUST, d, v, a, t_max, 0.5 * a * t_max**2, T, t_max, math.inf, v)

    # v = a*t, d = 0.5*a*t^2
    t_max = v / a
    d_acc = 0.5 * a * t_max * t_max

    if not (use_flip_and_burn and profile.supports_flip_and_burn):
        if d <= d_acc:
            T = math.sqrt(2.0 * d / a)
        else:
            T = t_max + (d - d_acc) / v
        return KinematicProfile(KinematicRegime.BURN_COAST, d, v, a, t_max, d_acc, T, t_max, math.inf, v)

    if d <= 2.0 * d_acc:
        # Never reaches max speed: accelerate to the midpoint, then brake
        half = math.sqrt(d / a)
        T = 2.0 * half
        return KinematicProfile(KinematicRegime.FLIP_AND_BURN, d, v, a, t_max, d_acc, T, half, half, a * half)

    T = 2.0 * t_max + (d - 2.0 * d_acc) / v
    return KinematicProfile(KinematicRegime.FLIP_AND_BURN, d, v, a, t_max, d_acc, T, t_max, T - t_max, v)


def travel_time(
    total_distance: float,
    profile: PropulsionProfile,
    use_flip_and_burn: bool = True,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> float:
    """Total travel time (s) for a journey of ``total_distance`` km."""
    return kinematic_profile(total_distance, profile, use_flip_and_burn, config).total_time


def current_speed(
    elapsed: float,
    total_distance: float,
    profile: PropulsionProfile,
    use_flip_and_burn: bool = True,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> float:
    """Instantaneous speed (km/s), clamped to [0, max_speed]."""
    return kinematic_profile(total_distance, profile, use_flip_and_burn, config).speed(elapsed)


def distance_traveled(
    elapsed: float,
    total_distance: float,
    profile: PropulsionProfile,
    use_flip_and_burn: bool = True,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> float:
    """Distance covered (km) after ``elapsed`` seconds, clamped to [0, total_distance]."""
    return kinematic_profile(total_distance, profile, use_flip_and_burn, config).distance_at(elapsed)


def flight_phase(
    elapsed: float,
    total_distance: float,
    profile: PropulsionProfile,
    use_flip_and_burn: bool = True,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> FlightPhase:
    """Flight phase after ``elapsed`` seconds."""
    return kinematic_profile(total_distance, profile, use_flip_and_burn, config).phase(elapsed)


def progress(
    elapsed: float,
    total_distance: float,
    profile: PropulsionProfile,
    use_flip_and_burn: bool = True,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> float:
    """Fraction of the distance covered, in [0, 1]."""
    kp = kinematic_profile(total_distance, profile, use_flip_and_burn, config)
    if kp.distance <= 0.0:
        return 1.0
    return min(1.0, kp.distance_at(elapsed) / kp.distance)


def make_travel_time_fn(
    profile: PropulsionProfile,
    use_flip_and_burn: bool = True,
    config: Optional[SimulationConfig] = None,
) -> Callable[[float], float]:
    """Bind a profile into a ``distance_km -> seconds`` function for the intercept planner."""
    config = config or DEFAULT_CONFIG

    def _travel_time(distance_km: float) -> float:
        return travel_time(distance_km, profile, use_flip_and_burn, config)

    return _travel_time
