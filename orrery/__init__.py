# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .orbital_elements import OrbitElements, check_elements

from .constants import (
    # Constants
    AU_TO_KM,
    SPEED_OF_LIGHT,
    DAY,
    YEAR,
    J2000_JD,
    SCALE_FACTORS,
)

from .errors import (
    OrreryError,
    InvalidOrbitElements,
    InvalidPropulsionProfile,
    InvalidJourneyTransition,
    UnknownBody,
    UnknownPropulsion,
)

from .config import SimulationConfig, DEFAULT_CONFIG, KEPLER_METHODS, make_config

from .epoch import ReferenceEpoch, default_epoch, phase_offset, julian_date, centuries_since_j2000

from .astrodynamics import (
    # Functions
    solve_kepler,
    solve_kepler_fixed_point,
    kepler_residual,
    elements_to_position,
    elements_to_positions,
    orbit_path,
)

from .bodies import (
    # Body models
    Planet,
    Moon,
    Asteroid,
    CelestialBody,
    load_bodies_data,
    bodies_data,
    get_body,
    body_position,
)

from .propulsion import (
    PropulsionProfile,
    check_profile,
    load_propulsion_data,
    propulsion_data,
    get_propulsion_by_id,
    format_duration,
)

from .kinematics import (
    FlightPhase,
    KinematicRegime,
    KinematicProfile,
    kinematic_profile,
    travel_time,
    current_speed,
    distance_traveled,
    flight_phase,
    progress,
    make_travel_time_fn,
)

from .intercept import InterceptSolution, plan_intercept

from .clock import SimulationClock, ClockSnapshot, time_for_date, date_for_time

from .journey import Journey, JourneyStatus, JourneyStateMachine

from .context import SimulationContext, TickSnapshot

__all__ = [
    # Constants
    "AU_TO_KM",
    "SPEED_OF_LIGHT",
    "DAY",
    "YEAR",
    "J2000_JD",
    "SCALE_FACTORS",

    # Errors
    "OrreryError",
    "InvalidOrbitElements",
    "InvalidPropulsionProfile",
    "InvalidJourneyTransition",
    "UnknownBody",
    "UnknownPropulsion",

    # Configuration
    "SimulationConfig",
    "DEFAULT_CONFIG",
    "KEPLER_METHODS",
    "make_config",

    # Named tuples
    "OrbitElements",
    "check_elements",

    # Reference epoch
    "ReferenceEpoch",
    "default_epoch",
    "phase_offset",
    "julian_date",
    "centuries_since_j2000",

    # Orbit propagation
    "solve_kepler",
    "solve_kepler_fixed_point",
    "kepler_residual",
    "elements_to_position",
    "elements_to_positions",
    "orbit_path",

    # Bodies
    "Planet",
    "Moon",
    "Asteroid",
    "CelestialBody",
    "load_bodies_data",
    "bodies_data",
    "get_body",
    "body_position",

    # Propulsion
    "PropulsionProfile",
    "check_profile",
    "load_propulsion_data",
    "propulsion_data",
    "get_propulsion_by_id",
    "format_duration",

    # Kinematics
    "FlightPhase",
    "KinematicRegime",
    "KinematicProfile",
    "kinematic_profile",
    "travel_time",
    "current_speed",
    "distance_traveled",
    "flight_phase",
    "progress",
    "make_travel_time_fn",

    # Intercept
    "InterceptSolution",
    "plan_intercept",

    # Clock and journey
    "SimulationClock",
    "ClockSnapshot",
    "time_for_date",
    "date_for_time",
    "Journey",
    "JourneyStatus",
    "JourneyStateMachine",
    "SimulationContext",
    "TickSnapshot",
]
