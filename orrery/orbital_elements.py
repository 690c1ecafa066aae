"""
Orbital elements representation for catalog bodies.
"""
from typing import NamedTuple

import math

from .errors import InvalidOrbitElements


class OrbitElements(NamedTuple):
    """
    Mean orbital elements for a body on a fixed ellipse.

    The tuple is a jax pytree, so it can be passed straight into jitted
    propagation code. All angular quantities are in radians.

    Attributes:
        a: Semi-major axis (AU)
        period: Orbital period (seconds)
        e: Eccentricity (dimensionless, 0 <= e < 1)
        i: Inclination relative to the ecliptic (radians)
        L0: Mean longitude at the J2000.0 epoch (radians)
        L_rate: Rate of change of mean longitude (radians per Julian century)
    """
    a: float  # semi-major axis (AU)
    period: float  # orbital period (s)
    e: float  # eccentricity
    i: float  # inclination (rad)
    L0: float = 0.0  # mean longitude at J2000 (rad)
    L_rate: float = 0.0  # mean longitude rate (rad/century)


def check_elements(elements: OrbitElements) -> OrbitElements:
    """
    Validate a set of orbital elements before propagation.

    Raises:
        InvalidOrbitElements: if the period is not positive and finite, the
            eccentricity is outside [0, 1), or the semi-major axis is negative.
    """
    period = float(elements.period)
    e = float(elements.e)
    a = float(elements.a)
    if not math.isfinite(period) or period <= 0.0:
        raise InvalidOrbitElements(f"period must be positive, got {period}")
    if not math.isfinite(e) or e < 0.0 or e >= 1.0:
        raise InvalidOrbitElements(f"eccentricity must be in [0, 1), got {e}")
    if not math.isfinite(a) or a < 0.0:
        raise InvalidOrbitElements(f"semi-major axis must be non-negative, got {a}")
    return elements
