import csv
import datetime
import logging
from pathlib import Path
from typing import Literal, Optional

import numpy as np
import pydantic
from pydantic import ConfigDict, field_validator

from orrery.astrodynamics import elements_to_position, orbit_path
from orrery.config import DEFAULT_ORBIT_SEGMENTS, DEFAULT_SCALE_MODE
from orrery.constants import MKM_PER_AU
from orrery.orbital_elements import OrbitalElements
from orrery.scale import scene_distance

logger = logging.getLogger(__name__)


class Body(pydantic.BaseModel):
    """
    Represents a planet or comet in the orrery catalogue.

    Attributes:
        name: Name of the body (e.g., "Earth", "Encke")
        kind: "planet" or "comet"
        radius: Physical radius of the body (km)
        elements: Orbital elements, semi-major axis in AU
        perihelion: Closest approach to the Sun (AU), comets only
        last_perihelion: Date of the most recent perihelion, comets only
        description: Free text shown in info panels
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)  # Allow OrbitalElements (NamedTuple)

    name: str
    kind: Literal["planet", "comet"]
    radius: float
    elements: OrbitalElements
    perihelion: Optional[float] = None
    last_perihelion: Optional[datetime.date] = None
    description: str = ""

    @field_validator('elements')
    @classmethod
    def validate_elements(cls, v):
        if not 0.0 <= v.e < 1.0:
            raise ValueError(f"eccentricity must be in [0, 1), got {v.e}")
        if v.a <= 0.0:
            raise ValueError(f"semi-major axis must be positive, got {v.a}")
        return v

    @property
    def distance_mkm(self) -> float:
        """Semi-major axis in million km, the unit the transfer calculator takes."""
        return self.elements.a * MKM_PER_AU

    def position(self, elapsed_days: float) -> np.ndarray:
        """Heliocentric position in AU at ``elapsed_days`` past J2000."""
        return np.asarray(elements_to_position(self.elements, elapsed_days))

    def distance_to_sun(self, elapsed_days: float) -> float:
        """Heliocentric distance in AU at ``elapsed_days`` past J2000."""
        return float(np.linalg.norm(self.position(elapsed_days)))

    def scene_position(self, elapsed_days: float, mode=DEFAULT_SCALE_MODE) -> np.ndarray:
        """
        Position in scene units.

        The direction from the Sun is kept and the heliocentric distance is
        passed through the scale mapper, so distance ordering is preserved.
        """
        r = self.position(elapsed_days)
        dist = np.linalg.norm(r)
        if dist == 0.0:
            return r
        return r * (scene_distance(dist, mode) / dist)

    def orbit_path(self, segments: int = DEFAULT_ORBIT_SEGMENTS, mode=DEFAULT_SCALE_MODE) -> np.ndarray:
        """Closed orbit polyline in scene units, shape (segments + 1, 3)."""
        path = np.asarray(orbit_path(self.elements.a, self.elements.e,
                                     self.elements.inclination, segments=segments))
        dist = np.linalg.norm(path, axis=1)
        return path * (scene_distance(dist, mode) / dist)[:, None]

    def is_planet(self) -> bool:
        return self.kind == "planet"

    def is_comet(self) -> bool:
        return self.kind == "comet"

    def __repr__(self) -> str:
        return f"Body(name='{self.name}', kind='{self.kind}')"

    def __str__(self) -> str:
        return self.name


def _read_rows(filepath: Path):
    with open(filepath, 'r', encoding='utf-8') as f:
        yield from csv.DictReader(f)


def load_bodies_data(data_dir: Optional[Path] = None) -> dict[str, Body]:
    """
    Load all bodies (planets, comets) from the CSV files.

    Planet distances are stored in million km and converted to AU with the
    catalogue's 149.6 Mkm/AU; comet elements are already in AU.

    Returns:
        Dictionary mapping body name to Body object, planets first in order
        of distance from the Sun, then comets.
    """
    # Hardcode data directory to be in the same directory as this file
    data_dir = Path(data_dir) if data_dir is not None else Path(__file__).parent / 'data'
    bodies = {}

    for row in _read_rows(data_dir / 'planets.csv'):
        elements = OrbitalElements(
            a=float(row['Distance from Sun (Mkm)']) / MKM_PER_AU,
            e=float(row['Eccentricity ()']),
            inclination=float(row['Inclination (deg)']),
            mean_anomaly=float(row['Mean Anomaly at J2000 (deg)']),
            period=float(row['Orbital Period (days)']),
        )
        bodies[row['Name']] = Body(
            name=row['Name'],
            kind="planet",
            radius=float(row['Radius (km)']),
            elements=elements,
        )

    comets_file = data_dir / 'comets.csv'
    # Skip if file doesn't exist (only planets file is required)
    if comets_file.exists():
        for row in _read_rows(comets_file):
            elements = OrbitalElements(
                a=float(row['Semi-Major Axis (AU)']),
                e=float(row['Eccentricity ()']),
                inclination=float(row['Inclination (deg)']),
                mean_anomaly=float(row['Mean Anomaly at J2000 (deg)']),
                period=float(row['Orbital Period (days)']),
            )
            bodies[row['Name']] = Body(
                name=row['Name'],
                kind="comet",
                radius=float(row['Radius (km)']),
                elements=elements,
                perihelion=float(row['Perihelion (AU)']),
                last_perihelion=datetime.date.fromisoformat(row['Last Perihelion']),
                description=row['Description'],
            )
    else:
        logger.info("No comet catalogue at %s", comets_file)

    logger.debug("Loaded %d bodies from %s", len(bodies), data_dir)
    return bodies


def get_body(name: str) -> Body:
    """Look up a catalogue body by name (case-insensitive)."""
    for body_name, body in bodies_data.items():
        if body_name.lower() == name.lower():
            return body
    raise KeyError(f"Unknown body '{name}'. Known bodies: {', '.join(bodies_data)}")


def planets() -> list[Body]:
    return [b for b in bodies_data.values() if b.is_planet()]


def comets() -> list[Body]:
    return [b for b in bodies_data.values() if b.is_comet()]


bodies_data = load_bodies_data()
