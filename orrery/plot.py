"""
Static 3D plot of the orrery (orbits, bodies, asteroid belt, transfer arc)
"""
import logging
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from orrery.asteroid_belt import belt_elements, belt_positions
from orrery.bodies import Body, bodies_data
from orrery.config import DEFAULT_SCALE_MODE, DEFAULT_TRANSFER_SEGMENTS, SimulationConfig
from orrery.hohmann import hohmann_path
from orrery.scale import scene_distance

logger = logging.getLogger(__name__)


def _rescale(points: np.ndarray, mode) -> np.ndarray:
    """Push each point along its heliocentric direction through the scale mapper."""
    dist = np.linalg.norm(points, axis=1)
    safe = np.where(dist > 0.0, dist, 1.0)
    return points * (np.where(dist > 0.0, scene_distance(safe, mode) / safe, 1.0))[:, None]


def transfer_arc(origin: Body, destination: Body, elapsed_days: float,
                 segments: int = DEFAULT_TRANSFER_SEGMENTS, mode=DEFAULT_SCALE_MODE) -> np.ndarray:
    """
    Hohmann transfer arc between two bodies in scene units.

    The half-ellipse is laid in the reference (x, y) plane and rotated so that
    periapsis points at whichever of the two bodies has the inner orbit at
    ``elapsed_days``.
    """
    arc = np.asarray(hohmann_path(origin.elements.a, destination.elements.a, segments))
    # The sampled arc lies in (x, 0, z); map it onto the reference plane
    planar = np.stack([arc[:, 0], arc[:, 2], np.zeros(len(arc))], axis=1)

    inner = origin if origin.elements.a <= destination.elements.a else destination
    r_inner = inner.position(elapsed_days)
    theta = np.arctan2(r_inner[1], r_inner[0])
    c, s = np.cos(theta), np.sin(theta)
    rotation = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
    return _rescale(planar @ rotation.T, mode)


def plot_orrery(
    elapsed_days: float = 0.0,
    bodies=None,
    config: Optional[SimulationConfig] = None,
    transfer=None,
    filename=None,
):
    """
    Plot orbit paths and current body positions.

    Args:
        elapsed_days: Days past J2000 at which bodies are drawn
        bodies: Iterable of Body; defaults to the full catalogue
        config: SimulationConfig supplying the scale mode, orbit and transfer
            resolution and the asteroid belt size and seed (0 asteroids for none)
        transfer: Optional (origin, destination) pair of bodies
        filename: If given, the figure is saved there

    Returns:
        (fig, ax)
    """
    bodies = list(bodies_data.values()) if bodies is None else list(bodies)
    config = config if config is not None else SimulationConfig()
    mode = config.scale_mode

    fig = plt.figure(figsize=(10, 10))
    ax = fig.add_subplot(111, projection='3d')

    ax.scatter([0.0], [0.0], [0.0], color='gold', s=120, label='Sun')

    max_dist = 0.0
    for body in bodies:
        path = body.orbit_path(segments=config.orbit_segments, mode=mode)
        pos = body.scene_position(elapsed_days, mode)
        color = 'tab:blue' if body.is_planet() else 'tab:gray'
        linestyle = '-' if body.is_planet() else ':'
        ax.plot(path[:, 0], path[:, 1], path[:, 2], color=color, linestyle=linestyle, linewidth=0.8)
        ax.scatter([pos[0]], [pos[1]], [pos[2]], color=color, s=20)
        ax.text(pos[0], pos[1], pos[2], f" {body.name}", fontsize=8)
        if body.is_planet():
            max_dist = max(max_dist, float(np.max(np.abs(path))))

    if config.asteroid_count > 0:
        elements = belt_elements(config.asteroid_count, config.asteroid_seed)
        belt = np.asarray(belt_positions(elements, elapsed_days, mode))
        ax.scatter(belt[:, 0], belt[:, 1], belt[:, 2], color='#8B7355', s=0.5, alpha=0.6)

    if transfer is not None:
        origin, destination = transfer
        arc = transfer_arc(origin, destination, elapsed_days, segments=config.transfer_segments, mode=mode)
        ax.plot(arc[:, 0], arc[:, 1], arc[:, 2], color='tab:red', linewidth=1.5,
                label=f"{origin.name} -> {destination.name}")

    max_dist = max_dist * 1.1 if max_dist > 0.0 else 1.0
    ax.set_xlim([-max_dist, max_dist])
    ax.set_ylim([-max_dist, max_dist])
    ax.set_zlim([-max_dist, max_dist])
    ax.set_title(f"t = {elapsed_days:.1f} days past J2000 ({mode.value} scale)")
    ax.legend(loc='upper right')

    if filename is not None:
        fig.savefig(filename, dpi=100)
        logger.info("Saved orrery plot to %s", filename)

    return fig, ax
