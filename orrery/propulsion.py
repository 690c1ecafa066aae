"""
Propulsion profiles and the static propulsion catalog.

Speeds are in km/s and accelerations in m/s^2, as the catalog lists them.
"""
import csv
import math
from pathlib import Path
from typing import Dict, Literal, Optional

import pydantic
from pydantic import ConfigDict, Field, model_validator

from .errors import InvalidPropulsionProfile, UnknownPropulsion

ProfileKind = Literal['thrust', 'constant-velocity', 'instantaneous']


class PropulsionProfile(pydantic.BaseModel):
    """
    Kinematic description of a propulsion system.

    Attributes:
        id: Catalog identifier (e.g., "chemical-rocket")
        name: Display name
        category: Technology readiness bucket used by the UI
        kind: "thrust" for accelerating craft, or one of the two special
            cases: "constant-velocity" (already at max speed) and
            "instantaneous" (fixed time per AU)
        max_speed: Maximum speed (km/s)
        acceleration: Acceleration magnitude (m/s^2)
        supports_flip_and_burn: Whether the craft can turn around and
            decelerate to rest at the destination
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ''
    category: str = ''
    kind: ProfileKind = 'thrust'
    max_speed: float = Field(..., description="Maximum speed (km/s)")
    acceleration: float = Field(default=0.0, description="Acceleration (m/s^2)")
    supports_flip_and_burn: bool = False

    @model_validator(mode='after')
    def validate_kinematics(self):
        problem = profile_problem(self)
        if problem is not None:
            raise InvalidPropulsionProfile(problem)
        return self

    @property
    def is_special(self) -> bool:
        return self.kind != 'thrust'

    def __str__(self) -> str:
        return self.name or self.id


def profile_problem(profile: PropulsionProfile) -> Optional[str]:
    """Describe why a profile cannot be flown, or return None if it can."""
    if not math.isfinite(profile.max_speed) or not math.isfinite(profile.acceleration):
        return f"{profile.id}: max_speed and acceleration must be finite"
    if profile.kind == 'instantaneous':
        if profile.max_speed < 0.0:
            return f"{profile.id}: max_speed must be non-negative, got {profile.max_speed}"
        return None
    if profile.max_speed <= 0.0:
        return f"{profile.id}: max_speed must be positive, got {profile.max_speed}"
    if profile.kind == 'thrust' and profile.acceleration < 0.0:
        return f"{profile.id}: acceleration must be non-negative, got {profile.acceleration}"
    return None


def check_profile(profile: PropulsionProfile) -> PropulsionProfile:
    """
    Raises:
        InvalidPropulsionProfile: if the profile has unusable speed or acceleration
    """
    problem = profile_problem(profile)
    if problem is not None:
        raise InvalidPropulsionProfile(problem)
    return profile


def load_propulsion_data() -> Dict[str, PropulsionProfile]:
    """
    Load the propulsion catalog from CSV.

    Returns:
        Dictionary mapping propulsion id to profile, in catalog order
    """
    filepath = Path(__file__).parent / 'data' / 'propulsion.csv'
    profiles = {}
    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            profile = PropulsionProfile(
                id=row['Propulsion ID'],
                name=row['Name'],
                category=row['Category'],
                kind=row['Kind'],
                max_speed=float(row['Max Speed (km/s)']),
                acceleration=float(row['Acceleration (m/s2)']),
                supports_flip_and_burn=row['Supports Flip And Burn'].strip().lower() == 'true',
            )
            profiles[profile.id] = profile
    return profiles


propulsion_data = load_propulsion_data()


def get_propulsion_by_id(propulsion_id: str, profiles: Optional[dict] = None) -> PropulsionProfile:
    """
    Raises:
        UnknownPropulsion: if the id is not in the catalog
    """
    profiles = propulsion_data if profiles is None else profiles
    try:
        return profiles[propulsion_id]
    except KeyError:
        raise UnknownPropulsion(f"Propulsion '{propulsion_id}' not found in catalog") from None


def format_duration(seconds: float) -> str:
    """
    Human-readable duration, picking the largest sensible unit.

    >>> format_duration(45)
    '45 seconds'
    >>> format_duration(3 * 86400)
    '3.0 days'
    """
    if seconds < 60:
        return f"{round(seconds)} seconds"

    minutes = seconds / 60
    if minutes < 60:
        return f"{round(minutes)} minutes"

    hours = minutes / 60
    if hours < 24:
        return f"{hours:.1f} hours"

    days = hours / 24
    if days < 365:
        return f"{days:.1f} days"

    years = days / 365.25
    if years < 1000:
        return f"{years:.1f} years"

    return f"{years / 1000:.1f} thousand years"
