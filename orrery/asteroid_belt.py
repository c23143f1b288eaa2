"""
Main-belt asteroid particles.

Particles are given Keplerian elements drawn from a seeded generator, so the
same seed always yields the same belt, and they are propagated with the same
closed-form ephemeris as the planets.
"""
import numpy as np
import jax.numpy as jnp

from .astrodynamics import propagate_many
from .config import DEFAULT_ASTEROID_COUNT, DEFAULT_ASTEROID_SEED
from .constants import YEAR_DAYS
from .orbital_elements import OrbitalElements
from .scale import ScaleMode, scene_distance

BELT_INNER_AU = 2.2
BELT_OUTER_AU = 3.2
MAX_BELT_ECCENTRICITY = 0.1
MAX_BELT_INCLINATION = 3.0  # degrees either side of the reference plane


def belt_elements(count: int = DEFAULT_ASTEROID_COUNT, seed: int = DEFAULT_ASTEROID_SEED,
                  inner_au: float = BELT_INNER_AU, outer_au: float = BELT_OUTER_AU) -> OrbitalElements:
    """
    Draw orbital elements for ``count`` belt particles.

    Periods follow Kepler's third law for the Sun, T = 365.25 * a^1.5 days.

    Returns:
        OrbitalElements whose fields are numpy arrays of length ``count``
    """
    rng = np.random.default_rng(seed)
    a = rng.uniform(inner_au, outer_au, count)
    return OrbitalElements(
        a=a,
        e=rng.uniform(0.0, MAX_BELT_ECCENTRICITY, count),
        inclination=rng.uniform(-MAX_BELT_INCLINATION, MAX_BELT_INCLINATION, count),
        mean_anomaly=rng.uniform(0.0, 360.0, count),
        period=YEAR_DAYS * a**1.5,
    )


def belt_positions(elements: OrbitalElements, elapsed_days: float,
                   mode=ScaleMode.REALISTIC) -> jnp.ndarray:
    """
    Particle positions at ``elapsed_days``, shape (count, 3).

    In realistic mode the positions are in AU; otherwise each heliocentric
    distance is remapped through the scale mapper.
    """
    r = propagate_many(elements, elapsed_days)
    if ScaleMode(mode) is ScaleMode.REALISTIC:
        return r
    dist = jnp.linalg.norm(r, axis=1)
    return r * (scene_distance(dist, mode) / dist)[:, None]
