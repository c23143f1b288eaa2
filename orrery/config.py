from __future__ import annotations

from dataclasses import dataclass

from orrery.scale import ScaleMode

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_SCALE_MODE = ScaleMode.EXAGGERATED
DEFAULT_ECLIPSE_THRESHOLD = 0.08  # radians, angular falloff used by the scanner
DEFAULT_ECLIPSE_CUTOFF = 0.3  # minimum score recorded as an event
DEFAULT_ECLIPSE_INTERVAL_DAYS = 10.0  # simulated days between scans
DEFAULT_ECLIPSE_HISTORY = 20
DEFAULT_ORBIT_SEGMENTS = 128
DEFAULT_TRANSFER_SEGMENTS = 64
DEFAULT_ASTEROID_COUNT = 3000
DEFAULT_ASTEROID_SEED = 0


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    scale_mode: ScaleMode = DEFAULT_SCALE_MODE
    eclipse_threshold: float = DEFAULT_ECLIPSE_THRESHOLD
    eclipse_cutoff: float = DEFAULT_ECLIPSE_CUTOFF
    eclipse_interval_days: float = DEFAULT_ECLIPSE_INTERVAL_DAYS
    eclipse_history: int = DEFAULT_ECLIPSE_HISTORY
    orbit_segments: int = DEFAULT_ORBIT_SEGMENTS
    transfer_segments: int = DEFAULT_TRANSFER_SEGMENTS
    asteroid_count: int = DEFAULT_ASTEROID_COUNT
    asteroid_seed: int = DEFAULT_ASTEROID_SEED

    def __post_init__(self) -> None:
        # Allow plain strings for the mode, as passed from the command line
        if not isinstance(self.scale_mode, ScaleMode):
            object.__setattr__(self, "scale_mode", ScaleMode(self.scale_mode))
        if self.eclipse_threshold <= 0.0:
            raise ValueError("eclipse_threshold must be positive")
        if self.orbit_segments < 1 or self.transfer_segments < 1:
            raise ValueError("segment counts must be at least 1")
        if self.eclipse_history < 1:
            raise ValueError("eclipse_history must be at least 1")
        if self.asteroid_count < 0:
            raise ValueError("asteroid_count must not be negative")
