"""
Scale mapping from physical distances and radii to scene units.

1 AU is 1 scene unit in realistic mode. Exaggerated mode compresses the
outer system with a concave power law so the inner planets stay separated.
"""
from enum import Enum

import numpy as np

from .constants import MKM_PER_AU, KM_PER_AU, EARTH_RADIUS_KM


class ScaleMode(str, Enum):
    REALISTIC = "realistic"
    EXAGGERATED = "exaggerated"


def _as_mode(mode) -> ScaleMode:
    # Accepts the enum or its string value; anything else raises ValueError
    return mode if isinstance(mode, ScaleMode) else ScaleMode(mode)


def scene_distance(au, mode=ScaleMode.EXAGGERATED):
    """
    Map a heliocentric distance in AU to scene units.

    Realistic mode is the identity. Exaggerated mode is 2 + au^0.55 * 4,
    which is strictly increasing for au >= 0. Negative inputs are treated
    as 0 in exaggerated mode.
    """
    if _as_mode(mode) is ScaleMode.REALISTIC:
        return au
    return 2.0 + np.power(np.maximum(au, 0.0), 0.55) * 4.0


def scene_distance_mkm(distance_mkm, mode=ScaleMode.EXAGGERATED):
    """Same as scene_distance for a distance given in million km."""
    return scene_distance(np.divide(distance_mkm, MKM_PER_AU), mode)


def exaggerated_radius(radius_km):
    """Logarithmic display radius relative to Earth; always > 0.06 for positive radii."""
    ratio = np.divide(radius_km, EARTH_RADIUS_KM)
    return 0.06 + np.log1p(ratio) * 0.08


def realistic_radius(radius_km):
    """Physical radius in AU, magnified 100x so it is visible at all."""
    return np.divide(radius_km, KM_PER_AU) * 100.0


def body_radius(radius_km, mode=ScaleMode.EXAGGERATED):
    if _as_mode(mode) is ScaleMode.REALISTIC:
        return realistic_radius(radius_km)
    return exaggerated_radius(radius_km)
