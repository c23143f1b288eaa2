"""
Physical and unit constants for the orrery.

This module contains all constants used by the ephemeris, the transfer
calculator and the scale mapper.
"""

import jax.numpy as jnp

# Basic astronomical and time constants
KM_PER_AU = 149597870.7  # km per AU
MKM_PER_AU = 149.6  # million km per AU, as used by the planet catalogue
MU_SUN = 1.327124e11  # km^3/s^2 (gravitational parameter of the Sun)
DAY = 86400.0  # seconds per day
YEAR_DAYS = 365.25  # days per Julian year
EARTH_RADIUS_KM = 6371.0

# Angles
TWO_PI = 2.0 * jnp.pi
DEG_TO_RAD = jnp.pi / 180.0

# Numerical guards
MAX_ECCENTRICITY = 0.9999  # closed-form ellipse solution only holds for e < 1
DENOMINATOR_EPS = 1e-12  # below this a divisor is treated as zero
KEPLER_TOL = 1e-8  # radians
KEPLER_MAX_ITER = 50
