"""
Reference epoch handling for orbital phase offsets.

Simulation time zero corresponds to the start of the current UTC day. Each
body's mean longitude is advanced from J2000.0 to that day so that at
``sim_time = 0`` it sits at its real-world position. The day offset is cached
and only recomputed when the UTC date rolls over.
"""
import logging
import math
from datetime import date, datetime, time, timezone
from typing import Callable, Optional, Tuple

from .constants import DAY, DAYS_PER_CENTURY, J2000_JD, UNIX_EPOCH_JD
from .orbital_elements import OrbitElements

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def julian_date(moment: datetime) -> float:
    """
    Julian date of a datetime. Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return UNIX_EPOCH_JD + moment.timestamp() / DAY


def centuries_since_j2000(moment: datetime) -> float:
    """Julian centuries elapsed between J2000.0 and ``moment``."""
    return (julian_date(moment) - J2000_JD) / DAYS_PER_CENTURY


class ReferenceEpoch:
    """
    Read-mostly cache of the reference day and its J2000 century offset.

    Args:
        today: Callable returning the current UTC date. Tests pass a fixed
            date so that positions do not depend on the wall clock.
    """

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self._today = today or _utc_today
        self._state: Optional[Tuple[date, float]] = None

    @property
    def reference_date(self) -> date:
        return self._current()[0]

    @property
    def reference_datetime(self) -> datetime:
        """Midnight UTC of the reference date (simulation time zero)."""
        return datetime.combine(self.reference_date, time(0, 0), tzinfo=timezone.utc)

    def centuries(self) -> float:
        """Julian centuries from J2000.0 to the reference date."""
        return self._current()[1]

    def _current(self) -> Tuple[date, float]:
        today = self._today()
        state = self._state
        if state is None or state[0] != today:
            midnight = datetime.combine(today, time(0, 0), tzinfo=timezone.utc)
            state = (today, centuries_since_j2000(midnight))
            # Single assignment keeps concurrent readers on a consistent pair.
            self._state = state
            logger.debug("Reference epoch set to %s (T = %.8f centuries)", today, state[1])
        return state

    def __repr__(self) -> str:
        return f"ReferenceEpoch(date={self.reference_date.isoformat()})"


default_epoch = ReferenceEpoch()


def phase_offset(elements: OrbitElements, epoch: Optional[ReferenceEpoch] = None) -> float:
    """
    Mean longitude of a body at the reference date, normalized to [0, 2*pi).

    Args:
        elements: Orbital elements with J2000 mean longitude and its rate
        epoch: Reference epoch cache (defaults to the process-wide one)

    Returns:
        Phase offset in radians to add to the mean anomaly
    """
    epoch = epoch or default_epoch
    mean_longitude = float(elements.L0) + float(elements.L_rate) * epoch.centuries()
    return mean_longitude % TWO_PI
