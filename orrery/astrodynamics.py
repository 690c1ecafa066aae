import functools
from typing import Optional, Sequence

import jax
import jax.numpy as jnp
from jax import jit

from .config import DEFAULT_KEPLER_ITERATIONS, DEFAULT_KEPLER_METHOD
from .epoch import ReferenceEpoch, phase_offset
from .orbital_elements import OrbitElements, check_elements


def solve_kepler(M, e, n_iter: int = DEFAULT_KEPLER_ITERATIONS):
    """
    Solve Kepler's equation M = E - e*sin(E) for eccentric anomaly E
    using a fixed number of Newton-Raphson iterations with jax.lax.scan.

    No convergence check is made; use kepler_residual to inspect the result.
    """
    M = jnp.asarray(M, dtype=float)

    def body_fn(E, _):
        f = E - e * jnp.sin(E) - M
        fp = 1.0 - e * jnp.cos(E)
        E_new = E - f / fp
        return E_new, None

    E_final, _ = jax.lax.scan(body_fn, M, None, length=n_iter)
    return E_final


def solve_kepler_fixed_point(M, e, n_iter: int = DEFAULT_KEPLER_ITERATIONS):
    """
    Solve Kepler's equation by plain fixed-point iteration E <- M + e*sin(E).

    Converges linearly with rate e, so after n_iter rounds the error is of
    order e**(n_iter + 1). Kept for comparison against the Newton solve.
    """
    M = jnp.asarray(M, dtype=float)

    def body_fn(E, _):
        return M + e * jnp.sin(E), None

    E_final, _ = jax.lax.scan(body_fn, M, None, length=n_iter)
    return E_final


def kepler_residual(E, M, e):
    """Absolute residual |E - e*sin(E) - M| of a Kepler solution (radians)."""
    return jnp.abs(E - e * jnp.sin(E) - M)


_KEPLER_SOLVERS = {
    'newton': solve_kepler,
    'fixed-point': solve_kepler_fixed_point,
}


def _check_method(method: str) -> str:
    if method not in _KEPLER_SOLVERS:
        raise ValueError(f"Unknown Kepler method '{method}'. Use one of: {', '.join(_KEPLER_SOLVERS)}.")
    return method


@functools.partial(jit, static_argnames=('n_iter', 'method'))
def _elements_to_position(elements: OrbitElements, t, phase, distance_scale, n_iter: int = DEFAULT_KEPLER_ITERATIONS,
                         method: str = DEFAULT_KEPLER_METHOD):
    a, period, e, i = elements.a, elements.period, elements.e, elements.i

    # Mean anomaly at time t, shifted to the reference epoch
    M = 2.0 * jnp.pi * t / period + phase

    E = _KEPLER_SOLVERS[method](M, e, n_iter)

    # True anomaly
    theta = 2.0 * jnp.arctan2(
        jnp.sqrt(1.0 + e) * jnp.sin(E / 2.0),
        jnp.sqrt(1.0 - e) * jnp.cos(E / 2.0)
    )

    # Distance from the focus, in scene units
    r_mag = a * (1.0 - e**2) / (1.0 + e * jnp.cos(theta)) * distance_scale

    # Inclination tilts the second in-plane axis into the vertical (y) axis
    x = r_mag * jnp.cos(theta)
    y = r_mag * jnp.sin(theta) * jnp.sin(i)
    z = r_mag * jnp.sin(theta) * jnp.cos(i)

    return jnp.stack([x, y, z])


def elements_to_position(
    elements: OrbitElements,
    t: float,
    distance_scale: float = 1.0,
    epoch: Optional[ReferenceEpoch] = None,
    n_iter: int = DEFAULT_KEPLER_ITERATIONS,
    method: str = DEFAULT_KEPLER_METHOD,
) -> jnp.ndarray:
    """
    Convert orbital elements to a position at simulation time t.

    Args:
        elements: Orbital elements of the body
        t: Simulation time in seconds (0 is the reference epoch)
        distance_scale: Scene units per AU
        epoch: Reference epoch cache used for the phase offset
        n_iter: Number of Kepler iterations
        method: Kepler solve, "newton" or "fixed-point"

    Returns:
        Position [x, y, z] in scene units (y is the out-of-plane axis)

    Raises:
        InvalidOrbitElements: if the elements are degenerate
    """
    check_elements(elements)
    _check_method(method)
    phase = phase_offset(elements, epoch)
    return _elements_to_position(elements, t, phase, distance_scale, n_iter=n_iter, method=method)


def elements_to_positions(
    elements: Sequence[OrbitElements],
    t: float,
    distance_scale: float = 1.0,
    epoch: Optional[ReferenceEpoch] = None,
    n_iter: int = DEFAULT_KEPLER_ITERATIONS,
    method: str = DEFAULT_KEPLER_METHOD,
) -> jnp.ndarray:
    """
    Positions of many bodies at the same simulation time.

    Parameters
    ----------
    elements : Sequence[OrbitElements]
        Orbital elements of each body.
    t : float
        Simulation time in seconds.
    distance_scale : float
        Scene units per AU.

    Returns
    -------
    r : jnp.ndarray
        Array of shape (n, 3); each row is [x, y, z] for one body.
    """
    for el in elements:
        check_elements(el)
    phases = jnp.array([phase_offset(el, epoch) for el in elements])
    stacked = OrbitElements(*(jnp.array(field) for field in zip(*elements)))
    kernel = functools.partial(_elements_to_position, n_iter=n_iter, method=_check_method(method))
    return jax.vmap(kernel, in_axes=(0, None, 0, None))(stacked, t, phases, distance_scale)


def orbit_path(
    elements: OrbitElements,
    distance_scale: float = 1.0,
    segments: int = 128,
    n_iter: int = DEFAULT_KEPLER_ITERATIONS,
    method: str = DEFAULT_KEPLER_METHOD,
) -> jnp.ndarray:
    """
    Closed polyline tracing one full orbit, shape (segments + 1, 3).

    The first and last points coincide. The path does not depend on the
    reference epoch since it spans a whole period.
    """
    check_elements(elements)
    if segments < 1:
        raise ValueError("segments must be at least 1")
    times = jnp.linspace(0.0, elements.period, segments + 1)
    kernel = functools.partial(_elements_to_position, n_iter=n_iter, method=_check_method(method))
    return jax.vmap(kernel, in_axes=(None, 0, None, None))(elements, times, 0.0, distance_scale)
