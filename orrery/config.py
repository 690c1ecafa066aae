from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from orrery.constants import SCALE_FACTORS

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_KEPLER_ITERATIONS = 5
DEFAULT_KEPLER_METHOD = "newton"  # "fixed-point" reproduces the plain E <- M + e*sin(E) iteration
DEFAULT_INTERCEPT_MAX_ROUNDS = 10
DEFAULT_INTERCEPT_TOLERANCE = 1.0e-3  # relative change in distance between rounds
DEFAULT_LOW_THRUST_THRESHOLD = 0.001  # m/s^2; below this thrust is treated as cruise-only
DEFAULT_INSTANTANEOUS_SECONDS_PER_AU = 1.0
DEFAULT_ARRIVAL_SPEED = 1.0  # km/s; "at rest" for flip-and-burn arrivals
DEFAULT_FLIP_ARRIVAL_FRACTION = 0.99
DEFAULT_COAST_ARRIVAL_FRACTION = 0.999
DEFAULT_SCALE_MODE = "visual"
DEFAULT_TIME_SPEED = 1.0

KEPLER_METHODS = ("newton", "fixed-point")


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    kepler_iterations: int = DEFAULT_KEPLER_ITERATIONS
    kepler_method: str = DEFAULT_KEPLER_METHOD
    intercept_max_rounds: int = DEFAULT_INTERCEPT_MAX_ROUNDS
    intercept_tolerance: float = DEFAULT_INTERCEPT_TOLERANCE
    low_thrust_threshold: float = DEFAULT_LOW_THRUST_THRESHOLD
    instantaneous_seconds_per_au: float = DEFAULT_INSTANTANEOUS_SECONDS_PER_AU
    arrival_speed: float = DEFAULT_ARRIVAL_SPEED
    flip_arrival_fraction: float = DEFAULT_FLIP_ARRIVAL_FRACTION
    coast_arrival_fraction: float = DEFAULT_COAST_ARRIVAL_FRACTION
    scale_mode: str = DEFAULT_SCALE_MODE
    time_speed: float = DEFAULT_TIME_SPEED
    strict: bool = False

    @property
    def distance_scale(self) -> float:
        """Scene units per AU for the configured scale mode."""
        return SCALE_FACTORS[self.scale_mode]


DEFAULT_CONFIG = SimulationConfig()


def make_config(
    *,
    kepler_iterations: int = DEFAULT_KEPLER_ITERATIONS,
    kepler_method: str = DEFAULT_KEPLER_METHOD,
    intercept_max_rounds: int = DEFAULT_INTERCEPT_MAX_ROUNDS,
    intercept_tolerance: float = DEFAULT_INTERCEPT_TOLERANCE,
    low_thrust_threshold: float = DEFAULT_LOW_THRUST_THRESHOLD,
    instantaneous_seconds_per_au: float = DEFAULT_INSTANTANEOUS_SECONDS_PER_AU,
    arrival_speed: float = DEFAULT_ARRIVAL_SPEED,
    flip_arrival_fraction: float = DEFAULT_FLIP_ARRIVAL_FRACTION,
    coast_arrival_fraction: float = DEFAULT_COAST_ARRIVAL_FRACTION,
    scale_mode: Optional[str] = None,
    time_speed: float = DEFAULT_TIME_SPEED,
    strict: bool = False,
) -> SimulationConfig:
    if kepler_iterations < 1:
        raise ValueError("kepler_iterations must be at least 1.")
    if kepler_method not in KEPLER_METHODS:
        raise ValueError(f"Unknown Kepler method '{kepler_method}'. Use one of: {', '.join(KEPLER_METHODS)}.")
    if intercept_max_rounds < 1:
        raise ValueError("intercept_max_rounds must be at least 1.")
    if not 0.0 < intercept_tolerance < 1.0:
        raise ValueError("intercept_tolerance must be in (0, 1).")
    if low_thrust_threshold < 0.0:
        raise ValueError("low_thrust_threshold must be non-negative.")
    if instantaneous_seconds_per_au <= 0.0:
        raise ValueError("instantaneous_seconds_per_au must be positive.")
    if arrival_speed <= 0.0:
        raise ValueError("arrival_speed must be positive.")
    if not 0.0 < flip_arrival_fraction <= 1.0:
        raise ValueError("flip_arrival_fraction must be in (0, 1].")
    if not 0.0 < coast_arrival_fraction <= 1.0:
        raise ValueError("coast_arrival_fraction must be in (0, 1].")
    if time_speed <= 0.0:
        raise ValueError("time_speed must be positive.")
    mode = (scale_mode or DEFAULT_SCALE_MODE).lower()
    if mode not in SCALE_FACTORS:
        raise ValueError(f"Unknown scale mode '{scale_mode}'. Use one of: {', '.join(SCALE_FACTORS)}.")
    return SimulationConfig(
        kepler_iterations=int(kepler_iterations),
        kepler_method=kepler_method,
        intercept_max_rounds=int(intercept_max_rounds),
        intercept_tolerance=float(intercept_tolerance),
        low_thrust_threshold=float(low_thrust_threshold),
        instantaneous_seconds_per_au=float(instantaneous_seconds_per_au),
        arrival_speed=float(arrival_speed),
        flip_arrival_fraction=float(flip_arrival_fraction),
        coast_arrival_fraction=float(coast_arrival_fraction),
        scale_mode=mode,
        time_speed=float(time_speed),
        strict=bool(strict),
    )
