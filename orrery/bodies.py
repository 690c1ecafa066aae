import csv
import math
from pathlib import Path
from typing import Annotated, Dict, Literal, Optional, Union

import jax.numpy as jnp
import pydantic
from pydantic import ConfigDict, Field, field_validator

from orrery.astrodynamics import elements_to_position
from orrery.config import DEFAULT_KEPLER_ITERATIONS, DEFAULT_KEPLER_METHOD
from orrery.constants import AU_TO_KM, DAY, YEAR
from orrery.epoch import ReferenceEpoch
from orrery.errors import UnknownBody
from orrery.orbital_elements import OrbitElements, check_elements


class _Body(pydantic.BaseModel):
    """
    Fields shared by every catalog body.

    Attributes:
        name: Name of the body (e.g., "Mars", "Europa")
        diameter: Physical diameter (km)
        elements: Orbital elements (AU, seconds, radians)
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)  # Allow OrbitElements (NamedTuple)

    name: str
    diameter: float = Field(..., gt=0.0)
    elements: OrbitElements

    @field_validator('elements')
    @classmethod
    def validate_elements(cls, v):
        return check_elements(v)

    @property
    def radius(self) -> float:
        """Physical radius (km)."""
        return 0.5 * self.diameter

    @property
    def orbital_period(self) -> float:
        """Orbital period (seconds)."""
        return self.elements.period

    def get_period(self, units: str = 'day') -> float:
        """
        Orbital period of the body.

        Args:
            units: 's'/'seconds', 'day'/'days' (default) or 'year'/'years'
        """
        units_lower = units.lower()
        if units_lower in ('s', 'seconds'):
            return self.elements.period
        elif units_lower in ('day', 'days'):
            return self.elements.period / DAY
        elif units_lower in ('year', 'years'):
            return self.elements.period / YEAR
        else:
            raise ValueError(f"Invalid units '{units}'. Must be one of: 's', 'day', 'year'")

    def get_position(self, t: float, distance_scale: float = 1.0, epoch: Optional[ReferenceEpoch] = None):
        """Position at simulation time ``t`` (seconds) in scene units."""
        return body_position(self, t, distance_scale, epoch=epoch)

    def __str__(self) -> str:
        return self.name


class Planet(_Body):
    """A planet orbiting the Sun."""
    kind: Literal['planet'] = 'planet'
    type: str = ''


class Asteroid(_Body):
    """A minor body orbiting the Sun."""
    kind: Literal['asteroid'] = 'asteroid'
    type: str = ''


class Moon(_Body):
    """
    A natural satellite. Its elements describe the orbit around ``parent``
    and carry no J2000 mean longitude, so its phase at t=0 is zero.
    """
    kind: Literal['moon'] = 'moon'
    parent: str


CelestialBody = Annotated[Union[Planet, Moon, Asteroid], Field(discriminator='kind')]


def load_bodies_data() -> Dict[str, Union[Planet, Moon, Asteroid]]:
    """
    Load all bodies (planets, asteroids, moons) from the CSV catalogs.

    Returns:
        Dictionary mapping body name to body
    """
    data_dir = Path(__file__).parent / 'data'
    bodies = {}

    body_configs = [
        {
            'filename': 'planets.csv',
            'model': Planet,
            'period_key': 'Orbital Period (days)',
            'period_factor': DAY,
        },
        {
            'filename': 'asteroids.csv',
            'model': Asteroid,
            'period_key': 'Orbital Period (years)',
            'period_factor': YEAR,
        },
        {
            'filename': 'moons.csv',
            'model': Moon,
            'period_key': 'Orbital Period (days)',
            'period_factor': DAY,
        },
    ]

    for config in body_configs:
        filepath = data_dir / config['filename']
        if not filepath.exists():
            continue

        with open(filepath, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            for row in reader:
                model = config['model']
                period = float(row[config['period_key']]) * config['period_factor']

                if model is Moon:
                    elements = OrbitElements(
                        a=float(row['Distance From Planet (km)']) / AU_TO_KM,
                        period=period,
                        e=float(row['Eccentricity ()']),
                        i=math.radians(float(row['Inclination (deg)'])),
                    )
                    body = Moon(
                        name=row['Name'],
                        parent=row['Parent Planet'],
                        diameter=float(row['Diameter (km)']),
                        elements=elements,
                    )
                else:
                    elements = OrbitElements(
                        a=float(row['Semi-Major Axis (AU)']),
                        period=period,
                        e=float(row['Eccentricity ()']),
                        i=math.radians(float(row['Inclination (deg)'])),
                        L0=math.radians(float(row['Mean Longitude J2000 (deg)'])),
                        L_rate=math.radians(float(row['Mean Longitude Rate (deg/century)'])),
                    )
                    body = model(
                        name=row['Name'],
                        type=row['Type'],
                        diameter=float(row['Diameter (km)']),
                        elements=elements,
                    )
                bodies[body.name] = body

    return bodies


bodies_data = load_bodies_data()


def get_body(name: str, bodies: Optional[dict] = None):
    """
    Look up a body by name (case-insensitive).

    Raises:
        UnknownBody: if the name is not in the catalog
    """
    bodies = bodies_data if bodies is None else bodies
    if name in bodies:
        return bodies[name]
    folded = name.casefold()
    for key, body in bodies.items():
        if key.casefold() == folded:
            return body
    raise UnknownBody(f"Body '{name}' not found in catalog")


def body_position(
    body,
    sim_time: float,
    distance_scale: float = 1.0,
    epoch: Optional[ReferenceEpoch] = None,
    n_iter: int = DEFAULT_KEPLER_ITERATIONS,
    bodies: Optional[dict] = None,
    method: str = DEFAULT_KEPLER_METHOD,
) -> jnp.ndarray:
    """
    Heliocentric position of any catalog body at simulation time ``sim_time``.

    Moons are propagated around their parent and offset by the parent's
    heliocentric position.
    """
    r = elements_to_position(body.elements, sim_time, distance_scale, epoch=epoch, n_iter=n_iter, method=method)
    if isinstance(body, Moon):
        parent = get_body(body.parent, bodies)
        r = r + body_position(parent, sim_time, distance_scale, epoch=epoch, n_iter=n_iter, bodies=bodies,
                              method=method)
    return r
