"""
Exceptions raised by the orrery core.
"""


class OrreryError(Exception):
    """Base class for all orrery errors."""


class InvalidOrbitElements(OrreryError, ValueError):
    """Raised when orbital elements describe no bound, periodic orbit."""


class InvalidPropulsionProfile(OrreryError, ValueError):
    """Raised when a propulsion profile has unusable speed or acceleration."""


class InvalidJourneyTransition(OrreryError):
    """Raised in strict mode when a journey operation is called from the wrong state."""


class UnknownBody(OrreryError, KeyError):
    """Raised when a body name is not in the catalog."""


class UnknownPropulsion(OrreryError, KeyError):
    """Raised when a propulsion id is not in the catalog."""
