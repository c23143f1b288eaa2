"""
Alignment scoring between bodies.

This module contains the continuous eclipse/transit alignment proxy used by
the eclipse scanner. It ignores body radii; it only measures how close to
collinear two bodies are as seen from the Sun.
"""
import jax.numpy as jnp
from jax import jit

from .constants import DENOMINATOR_EPS

DEFAULT_ALIGNMENT_THRESHOLD = 0.05  # radians


@jit
def alignment_score(inner_pos: jnp.ndarray, outer_pos: jnp.ndarray,
                    threshold: float = DEFAULT_ALIGNMENT_THRESHOLD) -> float:
    """
    Compute the alignment score of two bodies relative to the common focus.

    Args:
        inner_pos: position of the body expected to be nearer the focus
        outer_pos: position of the body expected to be farther from the focus
        threshold: angular separation (radians) at which the score reaches 0

    Returns:
        score in [0, 1]: 1 for perfect alignment with inner_pos nearer the
        focus, falling linearly to 0 at ``threshold``. The score is 0 when
        inner_pos is not strictly nearer, or either position sits on the focus.
    """
    inner_pos = jnp.asarray(inner_pos, dtype=float)
    outer_pos = jnp.asarray(outer_pos, dtype=float)

    inner_dist = jnp.linalg.norm(inner_pos)
    outer_dist = jnp.linalg.norm(outer_pos)

    degenerate = (inner_dist < DENOMINATOR_EPS) | (outer_dist < DENOMINATOR_EPS)
    ordered = (inner_dist < outer_dist) & jnp.logical_not(degenerate)

    inner_hat = inner_pos / jnp.where(degenerate, 1.0, inner_dist)
    outer_hat = outer_pos / jnp.where(degenerate, 1.0, outer_dist)

    cos_angle = jnp.clip(jnp.dot(inner_hat, outer_hat), -1.0, 1.0)
    angle = jnp.arccos(cos_angle)

    score = jnp.where(angle < threshold, 1.0 - angle / threshold, 0.0)
    return jnp.where(ordered, score, 0.0)
