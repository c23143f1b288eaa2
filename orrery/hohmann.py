"""
Hohmann transfer calculator.

Computes the parameters of a minimum-energy, two-impulse transfer between two
circular (or near-circular) heliocentric orbits, and samples the transfer
ellipse for display.
"""
import logging

import jax.numpy as jnp
import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .astrodynamics import orbital_radius
from .config import DEFAULT_TRANSFER_SEGMENTS
from .constants import MU_SUN, KM_PER_AU, DAY

logger = logging.getLogger(__name__)


class TransferResult(BaseModel):
    """
    One Hohmann transfer between two circular orbits.

    Origin and destination keep the order the caller supplied; the shape of
    the transfer ellipse is always computed from the inner to the outer radius.
    """
    model_config = ConfigDict(frozen=True)

    transfer_sma: float = Field(..., description="Semi-major axis of the transfer ellipse (AU)")
    transfer_eccentricity: float = Field(..., description="Eccentricity of the transfer ellipse")
    delta_v1: float = Field(..., description="Delta-v at the inner radius (km/s)")
    delta_v2: float = Field(..., description="Delta-v at the outer radius (km/s)")
    total_delta_v: float = Field(..., description="Total delta-v (km/s)")
    transfer_days: float = Field(..., description="Time of flight, half the transfer period (days)")
    phase_angle: float = Field(..., description="Lead of the outer body at departure (degrees)")
    origin_au: float = Field(..., description="Departure orbit radius (AU)")
    destination_au: float = Field(..., description="Arrival orbit radius (AU)")
    inner_au: float = Field(..., description="Smaller of the two radii (AU)")
    outer_au: float = Field(..., description="Larger of the two radii (AU)")

    @property
    def outbound(self) -> bool:
        """True when the destination orbit lies outside the origin orbit."""
        return self.destination_au > self.origin_au

    @property
    def departure_delta_v(self) -> float:
        """Delta-v of the burn performed at the origin orbit (km/s)"""
        return self.delta_v1 if self.destination_au >= self.origin_au else self.delta_v2

    @property
    def arrival_delta_v(self) -> float:
        """Delta-v of the burn performed at the destination orbit (km/s)"""
        return self.delta_v2 if self.destination_au >= self.origin_au else self.delta_v1

    def summary(self) -> str:
        direction = "outbound" if self.outbound else "inbound"
        return (
            f"Hohmann transfer {self.origin_au:.3f} AU -> {self.destination_au:.3f} AU ({direction})\n"
            f"  transfer a     : {self.transfer_sma:.4f} AU\n"
            f"  eccentricity   : {self.transfer_eccentricity:.4f}\n"
            f"  departure dv   : {self.departure_delta_v:.3f} km/s\n"
            f"  arrival dv     : {self.arrival_delta_v:.3f} km/s\n"
            f"  total dv       : {self.total_delta_v:.3f} km/s\n"
            f"  time of flight : {self.transfer_days:.1f} days\n"
            f"  phase angle    : {self.phase_angle:.2f} deg"
        )


def compute_hohmann(r1_mkm: float, r2_mkm: float, mu: float = MU_SUN) -> TransferResult:
    """
    Compute a Hohmann transfer between two orbits given their radii.

    Args:
        r1_mkm: Origin orbit radius (million km)
        r2_mkm: Destination orbit radius (million km)
        mu: Gravitational parameter of the central body (km^3/s^2)

    Returns:
        TransferResult. Equal radii give zero delta-v and zero eccentricity.
        A non-positive radius gives an all-zero result.
    """
    r1 = float(r1_mkm) * 1e6  # km
    r2 = float(r2_mkm) * 1e6  # km

    if r1 <= 0.0 or r2 <= 0.0:
        logger.warning("Non-positive transfer radius (r1=%g, r2=%g Mkm); returning an empty transfer",
                       r1_mkm, r2_mkm)
        return TransferResult(
            transfer_sma=0.0, transfer_eccentricity=0.0,
            delta_v1=0.0, delta_v2=0.0, total_delta_v=0.0,
            transfer_days=0.0, phase_angle=0.0,
            origin_au=r1 / KM_PER_AU, destination_au=r2 / KM_PER_AU,
            inner_au=min(r1, r2) / KM_PER_AU, outer_au=max(r1, r2) / KM_PER_AU,
        )

    # Canonical inner-to-outer geometry
    inner = min(r1, r2)
    outer = max(r1, r2)

    # Transfer orbit semi-major axis
    a_transfer = (inner + outer) / 2.0

    # Circular orbit velocities
    v1_circ = np.sqrt(mu / inner)
    v2_circ = np.sqrt(mu / outer)

    # Vis-viva at periapsis and apoapsis of the transfer ellipse
    v_peri = np.sqrt(mu * (2.0 / inner - 1.0 / a_transfer))
    v_apo = np.sqrt(mu * (2.0 / outer - 1.0 / a_transfer))

    dv1 = abs(v_peri - v1_circ)
    dv2 = abs(v2_circ - v_apo)

    # Half the period of the transfer ellipse
    transfer_time = np.pi * np.sqrt(a_transfer**3 / mu)

    e_transfer = (outer - inner) / (outer + inner)

    # Angle the outer body sweeps during the transfer
    outer_period = 2.0 * np.pi * np.sqrt(outer**3 / mu)
    phase_angle = 180.0 - (transfer_time / outer_period) * 360.0

    return TransferResult(
        transfer_sma=a_transfer / KM_PER_AU,
        transfer_eccentricity=e_transfer,
        delta_v1=float(dv1),
        delta_v2=float(dv2),
        total_delta_v=float(dv1 + dv2),
        transfer_days=float(transfer_time / DAY),
        phase_angle=float(phase_angle),
        origin_au=r1 / KM_PER_AU,
        destination_au=r2 / KM_PER_AU,
        inner_au=inner / KM_PER_AU,
        outer_au=outer / KM_PER_AU,
    )


def hohmann_path(r1: float, r2: float, segments: int = DEFAULT_TRANSFER_SEGMENTS) -> jnp.ndarray:
    """
    Sample the transfer arc for display.

    Only the half-ellipse from periapsis (v = 0) to apoapsis (v = π) is
    returned, in the (x, z) plane with y = 0, always starting at the inner
    radius. The unit of the points is the unit of ``r1`` and ``r2``.
    A non-positive radius gives ``segments + 1`` copies of the origin, matching
    the empty result of compute_hohmann.

    Returns:
        Array of shape (segments + 1, 3)
    """
    inner = min(r1, r2)
    outer = max(r1, r2)
    if inner <= 0.0:
        logger.warning("Non-positive transfer radius (r1=%g, r2=%g); returning an empty arc", r1, r2)
        return jnp.zeros((segments + 1, 3))

    a = (inner + outer) / 2.0
    e = (outer - inner) / (outer + inner)

    v = jnp.linspace(0.0, jnp.pi, segments + 1)
    r = orbital_radius(a, e, v)

    x = r * jnp.cos(v)
    z = r * jnp.sin(v)
    return jnp.stack([x, jnp.zeros_like(x), z], axis=1)
