"""
Simulated time: J2000 day arithmetic, the simulation speed presets and a
catalogue of notable events a viewer can jump to.
"""
import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import DAY

J2000 = datetime.datetime(2000, 1, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)

# Simulation speed multipliers (simulated days per wall-clock second)
SPEED_OPTIONS = (1, 10, 50, 100, 500, 1000, 5000, 10000)

PLANET_NAMES = ("Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune")


def j2000_days(year: int, month: int, day: int) -> float:
    """Days from the J2000 epoch (2000-01-01 12:00 UTC) to noon UTC on the given date."""
    date = datetime.datetime(year, month, day, 12, 0, 0, tzinfo=datetime.timezone.utc)
    return (date - J2000).total_seconds() / DAY


def date_from_j2000_days(elapsed_days: float) -> datetime.datetime:
    """Inverse of j2000_days, for labelling the simulation clock."""
    return J2000 + datetime.timedelta(days=elapsed_days)


def advance(elapsed_days: float, wall_seconds: float, speed: float) -> float:
    """
    New simulated time after ``wall_seconds`` of real time at ``speed`` days/second.

    The orrery never advances time itself; the host loop calls this and passes
    the result to the ephemeris functions.
    """
    return elapsed_days + wall_seconds * speed


class TimeEvent(BaseModel):
    """A notable astronomical event."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    date: datetime.date
    description: str = Field(..., min_length=20)
    category: Literal["comet", "transit", "eclipse", "alignment", "opposition", "historic"]
    focus_planet: Optional[str] = None

    @field_validator('focus_planet')
    @classmethod
    def validate_focus_planet(cls, v):
        if v is not None and v not in PLANET_NAMES:
            raise ValueError(f"focus_planet must be one of {PLANET_NAMES}, got '{v}'")
        return v

    @property
    def elapsed_days(self) -> float:
        return j2000_days(self.date.year, self.date.month, self.date.day)


TIME_EVENTS: List[TimeEvent] = [
    TimeEvent(
        id="halley-1986",
        name="Halley's Comet Return",
        date=datetime.date(1986, 2, 9),
        description="Halley's Comet reached perihelion at 0.586 AU from the Sun. Five spacecraft flew past to study it.",
        category="comet",
    ),
    TimeEvent(
        id="shoemaker-levy-1994",
        name="Shoemaker-Levy 9 Impact",
        date=datetime.date(1994, 7, 16),
        description="Fragments of comet Shoemaker-Levy 9 collided with Jupiter over six days, the first observed collision between solar system bodies.",
        category="historic",
        focus_planet="Jupiter",
    ),
    TimeEvent(
        id="mars-opposition-2003",
        name="Mars Closest Approach",
        date=datetime.date(2003, 8, 27),
        description="Mars came within 55.76 million km of Earth, the closest approach in nearly 60,000 years.",
        category="opposition",
        focus_planet="Mars",
    ),
    TimeEvent(
        id="venus-transit-2004",
        name="Transit of Venus",
        date=datetime.date(2004, 6, 8),
        description="Venus crossed the face of the Sun as seen from Earth, the first transit since 1882.",
        category="transit",
        focus_planet="Venus",
    ),
    TimeEvent(
        id="venus-transit-2012",
        name="Last Transit of Venus",
        date=datetime.date(2012, 6, 5),
        description="The second transit of the pair; the next one will not happen until December 2117.",
        category="transit",
        focus_planet="Venus",
    ),
    TimeEvent(
        id="jupiter-saturn-2020",
        name="Great Conjunction",
        date=datetime.date(2020, 12, 21),
        description="Jupiter and Saturn appeared only 0.1 degrees apart in the sky, the closest since 1623.",
        category="alignment",
        focus_planet="Jupiter",
    ),
    TimeEvent(
        id="total-eclipse-2024",
        name="Great American Eclipse",
        date=datetime.date(2024, 4, 8),
        description="A total solar eclipse swept across Mexico, the United States and Canada.",
        category="eclipse",
        focus_planet="Earth",
    ),
    TimeEvent(
        id="planetary-parade-2025",
        name="Planetary Parade",
        date=datetime.date(2025, 2, 28),
        description="All seven other planets gathered on the same side of the Sun as seen from Earth.",
        category="alignment",
    ),
    TimeEvent(
        id="mercury-transit-2032",
        name="Transit of Mercury",
        date=datetime.date(2032, 11, 13),
        description="Mercury will cross the face of the Sun, visible from Europe, Africa and Asia.",
        category="transit",
        focus_planet="Mercury",
    ),
    TimeEvent(
        id="halley-2061",
        name="Halley's Comet Return",
        date=datetime.date(2061, 7, 28),
        description="Halley's Comet will return to perihelion, much better placed for viewing than in 1986.",
        category="comet",
    ),
]


def get_event(event_id: str) -> TimeEvent:
    for event in TIME_EVENTS:
        if event.id == event_id:
            return event
    raise KeyError(f"Unknown event '{event_id}'")
