"""
Intercept planning against a moving destination.

The traveler departs now; the destination keeps moving along its orbit while
the traveler is in flight. The planner iterates

    arrival_time -> destination position -> distance -> travel time -> arrival_time

to a fixed point. The iteration has a hard round cap and does not raise when
the cap is reached; the final relative change is reported instead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from orrery.bodies import body_position
from orrery.config import (
    DEFAULT_INTERCEPT_MAX_ROUNDS,
    DEFAULT_INTERCEPT_TOLERANCE,
    DEFAULT_KEPLER_ITERATIONS,
    DEFAULT_KEPLER_METHOD,
)
from orrery.constants import AU_TO_KM
from orrery.epoch import ReferenceEpoch

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]
TravelTimeFn = Callable[[float], float]


@dataclass(frozen=True, slots=True)
class InterceptSolution:
    """Self-consistent departure/arrival geometry for one journey."""

    distance: float  # surface-to-surface distance (km); may be negative for overlapping bodies
    departure_time: float  # simulation time at departure (s)
    arrival_time: float  # simulation time at arrival (s)
    origin_position: Vec3  # origin at departure (scene units)
    destination_position: Vec3  # destination at arrival (scene units)
    rounds: int  # fixed-point rounds performed
    relative_change: float  # |d_k - d_{k-1}| / d_{k-1} over the last round
    converged: bool

    @property
    def travel_time(self) -> float:
        return self.arrival_time - self.departure_time


def surface_distance(r_origin: np.ndarray, r_destination: np.ndarray, distance_scale: float,
                     origin_radius: float, destination_radius: float) -> float:
    """
    Surface-to-surface distance (km) between two bodies given their scene positions.
    """
    center_km = float(np.linalg.norm(r_destination - r_origin)) / distance_scale * AU_TO_KM
    return center_km - origin_radius - destination_radius


def plan_intercept(
    origin,
    destination,
    departure_time: float,
    distance_scale: float,
    travel_time_fn: TravelTimeFn,
    epoch: Optional[ReferenceEpoch] = None,
    max_rounds: int = DEFAULT_INTERCEPT_MAX_ROUNDS,
    tolerance: float = DEFAULT_INTERCEPT_TOLERANCE,
    n_iter: int = DEFAULT_KEPLER_ITERATIONS,
    bodies: Optional[dict] = None,
    method: str = DEFAULT_KEPLER_METHOD,
) -> InterceptSolution:
    """
    Find where ``destination`` will be when a traveler leaving ``origin`` at
    ``departure_time`` arrives.

    Args:
        origin: Departure body
        destination: Target body
        departure_time: Simulation time of departure (s)
        distance_scale: Scene units per AU used for the returned positions
        travel_time_fn: Maps a surface-to-surface distance (km) to a travel time (s)
        epoch: Reference epoch cache for body phases
        max_rounds: Hard cap on fixed-point rounds
        tolerance: Stop once the distance changes by less than this fraction
        method: Kepler solve used for body positions

    Returns:
        InterceptSolution; distances are not clamped, so overlapping bodies
        produce a negative distance the caller must treat as degenerate.
    """
    if distance_scale <= 0.0:
        raise ValueError("distance_scale must be positive")
    if max_rounds < 1:
        raise ValueError("max_rounds must be at least 1")

    r_origin = np.asarray(
        body_position(origin, departure_time, distance_scale, epoch=epoch, n_iter=n_iter, bodies=bodies,
                      method=method),
        dtype=float,
    )

    arrival_time = float(departure_time)
    distance = None
    r_destination = None
    relative_change = float('inf')
    converged = False
    rounds = 0

    for rounds in range(1, max_rounds + 1):
        r_destination = np.asarray(
            body_position(destination, arrival_time, distance_scale, epoch=epoch, n_iter=n_iter, bodies=bodies,
                          method=method),
            dtype=float,
        )
        new_distance = surface_distance(r_origin, r_destination, distance_scale, origin.radius, destination.radius)
        arrival_time = float(departure_time) + float(travel_time_fn(new_distance))

        if distance is not None:
            if distance != 0.0:
                relative_change = abs(new_distance - distance) / abs(distance)
            else:
                relative_change = 0.0 if new_distance == 0.0 else float('inf')
        distance = new_distance

        logger.debug("Intercept round %d: distance=%.6e km, arrival=%.6e s, change=%.3e",
                     rounds, distance, arrival_time, relative_change)

        if relative_change < tolerance:
            converged = True
            break

    if not converged:
        logger.warning("Intercept %s -> %s did not converge in %d rounds (last change %.3e)",
                       origin.name, destination.name, rounds, relative_change)

    return InterceptSolution(
        distance=distance,
        departure_time=float(departure_time),
        arrival_time=arrival_time,
        origin_position=tuple(float(x) for x in r_origin),
        destination_position=tuple(float(x) for x in r_destination),
        rounds=rounds,
        relative_change=relative_change,
        converged=converged,
    )
