# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .orbital_elements import OrbitalElements

from .constants import (
    # Constants
    KM_PER_AU,
    MKM_PER_AU,
    MU_SUN,
    DAY,
    YEAR_DAYS,
)

from .astrodynamics import (
    # Functions
    clamp_eccentricity,
    solve_kepler,
    solve_kepler_vec,
    true_anomaly,
    orbital_radius,
    position,
    elements_to_position,
    propagate_many,
    orbit_path,
)

from .scoring import alignment_score

from .hohmann import (
    # Transfer calculator
    TransferResult,
    compute_hohmann,
    hohmann_path,
)

from .scale import (
    ScaleMode,
    scene_distance,
    scene_distance_mkm,
    exaggerated_radius,
    realistic_radius,
    body_radius,
)

from .config import SimulationConfig

from .bodies import (
    # Body class
    Body,
    load_bodies_data,
    bodies_data,
    get_body,
)

from .eclipses import (
    EclipseEvent,
    EclipseLog,
    EclipseMonitor,
    scan_alignments,
)

from .timeline import (
    TimeEvent,
    TIME_EVENTS,
    SPEED_OPTIONS,
    j2000_days,
    advance,
)

# Alias for compatibility with the scene convention of 1 AU per unit
AU = 1.0

__all__ = [
    # Constants
    "AU",
    "KM_PER_AU",
    "MKM_PER_AU",
    "MU_SUN",
    "DAY",
    "YEAR_DAYS",

    # Named tuples
    "OrbitalElements",

    # Ephemeris
    "clamp_eccentricity",
    "solve_kepler",
    "solve_kepler_vec",
    "true_anomaly",
    "orbital_radius",
    "position",
    "elements_to_position",
    "propagate_many",
    "orbit_path",

    # Scoring
    "alignment_score",

    # Hohmann
    "TransferResult",
    "compute_hohmann",
    "hohmann_path",

    # Scale
    "ScaleMode",
    "scene_distance",
    "scene_distance_mkm",
    "exaggerated_radius",
    "realistic_radius",
    "body_radius",

    # Configuration
    "SimulationConfig",

    # Bodies
    "Body",
    "load_bodies_data",
    "bodies_data",
    "get_body",

    # Eclipses
    "EclipseEvent",
    "EclipseLog",
    "EclipseMonitor",
    "scan_alignments",

    # Timeline
    "TimeEvent",
    "TIME_EVENTS",
    "SPEED_OPTIONS",
    "j2000_days",
    "advance",
]
