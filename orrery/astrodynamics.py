"""
Closed-form Keplerian ephemeris for the orrery.

Every function here is a pure function of its arguments: elapsed time is
passed in explicitly and nothing is cached between calls, so the functions
can be jit-compiled, vmapped over bodies and called at any cadence.
"""
from functools import partial

import jax
import jax.numpy as jnp
from jax import jit

from .orbital_elements import OrbitalElements
from .constants import (
    TWO_PI, DEG_TO_RAD,
    MAX_ECCENTRICITY, DENOMINATOR_EPS,
    KEPLER_TOL, KEPLER_MAX_ITER,
)


def clamp_eccentricity(e):
    """Clamp eccentricity into [0, 0.9999], the range the ellipse formulas accept."""
    return jnp.clip(e, 0.0, MAX_ECCENTRICITY)


def normalize_angle(angle):
    """Wrap an angle in radians into [0, 2π)."""
    wrapped = jnp.mod(angle, TWO_PI)
    # mod of a tiny negative angle can round up to exactly 2π
    return jnp.where(wrapped >= TWO_PI, wrapped - TWO_PI, wrapped)


@jit
def solve_kepler(M: float, e: float, tol: float = KEPLER_TOL, max_iter: int = KEPLER_MAX_ITER) -> float:
    """
    Solve Kepler's equation M = E - e*sin(E) for eccentric anomaly E.

    The mean anomaly is wrapped into [0, 2π) and the iteration is seeded with
    the third-order series E0 = M + e*sin(M)*(1 + e*cos(M)). Newton-Raphson
    steps run under jax.lax.while_loop until the step falls below ``tol`` or
    ``max_iter`` steps have been taken.

    Kepler's equation is monotonic in E, so every iterate tightens a bracket
    around the root (starting from [0, 2π]). A Newton step that would leave
    the bracket is replaced by bisection; near-parabolic orbits close to
    periapsis otherwise throw plain Newton far off and let it diverge.

    If the Newton denominator 1 - e*cos(E) collapses (only possible for e -> 1
    near periapsis) the current estimate is returned as is. The function never
    raises and always returns a finite value.

    Args:
        M: Mean anomaly (radians, any real value)
        e: Eccentricity, clamped to [0, 0.9999]
        tol: Step size below which the iteration stops (radians)
        max_iter: Maximum number of Newton steps

    Returns:
        E: Eccentric anomaly (radians)
    """
    e = clamp_eccentricity(jnp.asarray(e, dtype=float))
    M = normalize_angle(jnp.asarray(M, dtype=float))

    E0 = M + e * jnp.sin(M) * (1.0 + e * jnp.cos(M))

    def cond_fn(state):
        i, _, _, _, done = state
        return (i < max_iter) & jnp.logical_not(done)

    def body_fn(state):
        i, E, lo, hi, _ = state
        f = E - e * jnp.sin(E) - M
        fp = 1.0 - e * jnp.cos(E)

        # f is increasing in E, so its sign says which side of the root E is on
        lo = jnp.where(f < 0.0, E, lo)
        hi = jnp.where(f > 0.0, E, hi)

        stop = (jnp.abs(fp) < DENOMINATOR_EPS) | (f == 0.0)
        E_newton = E - f / jnp.where(stop, 1.0, fp)
        outside = (E_newton < lo) | (E_newton > hi)
        E_new = jnp.where(outside, 0.5 * (lo + hi), E_newton)
        E_new = jnp.where(stop, E, E_new)

        done = stop | (jnp.abs(E_new - E) < tol)
        return i + 1, E_new, lo, hi, done

    init = (
        jnp.asarray(0),
        E0,
        jnp.zeros_like(E0),
        jnp.full_like(E0, TWO_PI),
        jnp.zeros_like(E0, dtype=bool),
    )
    _, E_final, _, _, _ = jax.lax.while_loop(cond_fn, body_fn, init)
    return E_final


# Vectorized version using vmap
# Note: vmap over first two arguments (M and e arrays), broadcast tol and max_iter
_solve_kepler_vec = jax.vmap(solve_kepler, in_axes=(0, 0, None, None))

def solve_kepler_vec(M, e, tol=KEPLER_TOL, max_iter=KEPLER_MAX_ITER):
    """
    Vectorized version of solve_kepler that handles arrays of M and e.

    Parameters
    ----------
    M : jnp.ndarray
        Array of mean anomalies
    e : jnp.ndarray
        Array of eccentricities
    tol : float, optional
        Tolerance for convergence
    max_iter : int, optional
        Maximum number of iterations

    Returns
    -------
    E : jnp.ndarray
        Array of eccentric anomalies
    """
    M = jnp.atleast_1d(jnp.asarray(M, dtype=float))
    e = jnp.broadcast_to(jnp.asarray(e, dtype=float), M.shape)
    return _solve_kepler_vec(M, e, tol, max_iter)


@jit
def true_anomaly(E: float, e: float) -> float:
    """True anomaly (radians) from eccentric anomaly, using the same eccentricity clamp."""
    e = clamp_eccentricity(e)
    return 2.0 * jnp.arctan2(
        jnp.sqrt(1.0 + e) * jnp.sin(E / 2.0),
        jnp.sqrt(1.0 - e) * jnp.cos(E / 2.0)
    )


@jit
def orbital_radius(a: float, e: float, v: float) -> float:
    """
    Distance from the focus at true anomaly ``v``: a(1 - e²) / (1 + e cos v).

    Falls back to ``a`` when the denominator vanishes, which can only happen
    for e -> 1 at v -> π.
    """
    e = clamp_eccentricity(e)
    a = jnp.asarray(a, dtype=float)
    denom = 1.0 + e * jnp.cos(v)
    degenerate = jnp.abs(denom) < DENOMINATOR_EPS
    r = a * (1.0 - e**2) / jnp.where(degenerate, 1.0, denom)
    return jnp.where(degenerate, a, r)


def _project(r, v, inclination):
    # Orbital plane tilted about the x-axis; the node line is the x-axis.
    inc = inclination * DEG_TO_RAD
    x = r * jnp.cos(v)
    y = r * jnp.sin(v) * jnp.cos(inc)
    z = r * jnp.sin(v) * jnp.sin(inc)
    return x, y, z


@jit
def position(a: float, e: float, inclination: float, mean_anomaly: float,
             period: float, elapsed_days: float) -> jnp.ndarray:
    """
    Heliocentric position of a body at ``elapsed_days`` past epoch.

    Args:
        a: Semi-major axis (any length unit; the result is in the same unit)
        e: Eccentricity
        inclination: Orbital plane tilt about the x-axis (degrees)
        mean_anomaly: Mean anomaly at epoch (degrees)
        period: Orbital period (days). If period <= 0 the body sits at (a, 0, 0).
        elapsed_days: Simulated days since epoch, may be negative or fractional

    Returns:
        jnp.ndarray of shape (3,) with [x, y, z]
    """
    a = jnp.asarray(a, dtype=float)
    valid = period > 0.0

    # Mean motion (rad/day)
    n = TWO_PI / jnp.where(valid, period, 1.0)

    # Mean anomaly at time t
    M = mean_anomaly * DEG_TO_RAD + n * elapsed_days

    E = solve_kepler(M, e)
    v = true_anomaly(E, e)
    r = orbital_radius(a, e, v)

    x, y, z = _project(r, v, inclination)

    fallback = jnp.stack([a, jnp.zeros_like(a), jnp.zeros_like(a)])
    return jnp.where(valid, jnp.stack([x, y, z]), fallback)


def elements_to_position(elements: OrbitalElements, t: float) -> jnp.ndarray:
    """
    Convert orbital elements to a Cartesian position at time t.
    t is time since epoch in days.
    """
    return position(elements.a, elements.e, elements.inclination,
                    elements.mean_anomaly, elements.period, t)


_position_vec = jax.vmap(position, in_axes=(0, 0, 0, 0, 0, None))

def propagate_many(elements, t: float) -> jnp.ndarray:
    """
    Positions of many bodies at the same time t.

    Parameters
    ----------
    elements : array_like or OrbitalElements
        Either an (n, 5) table whose columns follow the OrbitalElements field
        order (a, e, inclination, mean_anomaly, period), or an OrbitalElements
        whose fields are length-n arrays.
    t : float
        Days since epoch.

    Returns
    -------
    r : jnp.ndarray
        Array of shape (n, 3); each row is [x, y, z] for one body.
    """
    if isinstance(elements, OrbitalElements):
        columns = [jnp.atleast_1d(jnp.asarray(f, dtype=float)) for f in elements]
    else:
        table = jnp.asarray(elements, dtype=float).reshape(-1, len(OrbitalElements._fields))
        columns = [table[:, k] for k in range(table.shape[1])]
    return _position_vec(*columns, t)


@partial(jit, static_argnames=('segments',))
def orbit_path(a: float, e: float, inclination: float, segments: int = 128) -> jnp.ndarray:
    """
    Closed polyline of the orbit for display.

    True anomaly is sampled uniformly over [0, 2π], so this traces the
    geometric ellipse rather than equal-time steps. The result has
    ``segments + 1`` rows and the last point repeats the first.
    """
    v = jnp.linspace(0.0, TWO_PI, segments + 1)
    r = orbital_radius(a, e, v)
    x, y, z = _project(r, v, inclination)
    return jnp.stack([x, y, z], axis=1)
