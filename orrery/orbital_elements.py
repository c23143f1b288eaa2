"""
Orbital elements representation for bodies orbiting the Sun.
"""
from typing import NamedTuple


class OrbitalElements(NamedTuple):
    """
    Keplerian orbital elements for a body in the simplified orrery model.

    The orbital plane is tilted about the reference x-axis, so there is no
    longitude of the ascending node or argument of periapsis; periapsis
    always lies on the +x axis.

    Attributes:
        a: Semi-major axis (AU, million km or scene units; never mixed)
        e: Eccentricity (dimensionless, clamped to [0, 0.9999] when used)
        inclination: Tilt of the orbital plane about the x-axis (degrees)
        mean_anomaly: Mean anomaly at epoch (degrees)
        period: Orbital period (days). A value <= 0 pins the body at (a, 0, 0).
    """
    a: float  # semi-major axis
    e: float  # eccentricity
    inclination: float  # inclination (deg)
    mean_anomaly: float  # mean anomaly at epoch (deg)
    period: float  # orbital period (days)
