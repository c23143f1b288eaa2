"""
Eclipse and transit detection across the catalogue.

``scan_alignments`` is a pure function of the bodies and the time. The
``EclipseLog`` and ``EclipseMonitor`` classes hold the caller-side policy:
how often to scan and how many events to keep.
"""
from collections import deque
from itertools import combinations
import logging
from typing import Iterable, List, Optional

import numpy as np
from pydantic import BaseModel, Field

from .astrodynamics import propagate_many
from .bodies import Body
from .config import (
    DEFAULT_ECLIPSE_THRESHOLD, DEFAULT_ECLIPSE_CUTOFF,
    DEFAULT_ECLIPSE_INTERVAL_DAYS, DEFAULT_ECLIPSE_HISTORY,
)
from .scoring import alignment_score

logger = logging.getLogger(__name__)


class EclipseEvent(BaseModel):
    """An alignment observed at one simulated time."""
    time: float = Field(..., description="Elapsed days since J2000")
    inner_body: str = Field(..., description="Body nearer the Sun")
    outer_body: str = Field(..., description="Body farther from the Sun")
    alignment: float = Field(..., ge=0.0, le=1.0, description="Alignment score")

    def __str__(self) -> str:
        return f"t={self.time:.1f} d  {self.inner_body} / {self.outer_body}  alignment={self.alignment:.3f}"


def scan_alignments(
    bodies: Iterable[Body],
    elapsed_days: float,
    threshold: float = DEFAULT_ECLIPSE_THRESHOLD,
    cutoff: float = DEFAULT_ECLIPSE_CUTOFF,
) -> List[EclipseEvent]:
    """
    Score every pair of bodies at one time and keep those above ``cutoff``.

    Within each pair the body currently nearer the Sun is scored as the inner
    body. Positions are evaluated in AU; the scale mapper keeps directions and
    distance ordering, so the scores are the same in scene units.

    Returns:
        Events with alignment > cutoff, in catalogue pair order
    """
    bodies = list(bodies)
    if len(bodies) < 2:
        return []

    table = np.array([b.elements for b in bodies], dtype=float)
    positions = np.asarray(propagate_many(table, elapsed_days))
    distances = np.linalg.norm(positions, axis=1)

    events = []
    for i, j in combinations(range(len(bodies)), 2):
        inner, outer = (i, j) if distances[i] <= distances[j] else (j, i)
        score = float(alignment_score(positions[inner], positions[outer], threshold))
        if score > cutoff:
            event = EclipseEvent(
                time=elapsed_days,
                inner_body=bodies[inner].name,
                outer_body=bodies[outer].name,
                alignment=score,
            )
            logger.debug("Alignment found: %s", event)
            events.append(event)
    return events


class EclipseLog:
    """Most recent eclipse events, oldest dropped first."""

    def __init__(self, max_events: int = DEFAULT_ECLIPSE_HISTORY):
        self._events = deque(maxlen=max_events)

    def add(self, event: EclipseEvent) -> None:
        self._events.append(event)

    def extend(self, events: Iterable[EclipseEvent]) -> None:
        self._events.extend(events)

    def clear(self) -> None:
        self._events.clear()

    @property
    def events(self) -> List[EclipseEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)


class EclipseMonitor:
    """
    Throttled eclipse scanning for a running simulation.

    ``update`` is meant to be called every frame; it only scans when the
    simulated clock has moved at least ``interval_days`` (in either direction)
    since the last scan.
    """

    def __init__(
        self,
        bodies: Iterable[Body],
        interval_days: float = DEFAULT_ECLIPSE_INTERVAL_DAYS,
        threshold: float = DEFAULT_ECLIPSE_THRESHOLD,
        cutoff: float = DEFAULT_ECLIPSE_CUTOFF,
        log: Optional[EclipseLog] = None,
    ):
        self.bodies = list(bodies)
        self.interval_days = interval_days
        self.threshold = threshold
        self.cutoff = cutoff
        self.log = log if log is not None else EclipseLog()
        self._last_scan: Optional[float] = None

    @classmethod
    def from_config(cls, bodies: Iterable[Body], config) -> "EclipseMonitor":
        return cls(
            bodies,
            interval_days=config.eclipse_interval_days,
            threshold=config.eclipse_threshold,
            cutoff=config.eclipse_cutoff,
            log=EclipseLog(config.eclipse_history),
        )

    def update(self, elapsed_days: float) -> List[EclipseEvent]:
        """Scan if due and return the newly recorded events."""
        if self._last_scan is not None and abs(elapsed_days - self._last_scan) < self.interval_days:
            return []
        self._last_scan = elapsed_days
        events = scan_alignments(self.bodies, elapsed_days, self.threshold, self.cutoff)
        self.log.extend(events)
        return events
