"""Runtime helpers for Knowledge Keepers."""

from .clock import ManualTime, SimulationClock
from .geometry import Rect, clamp

__all__ = [
    "ManualTime",
    "SimulationClock",
    "Rect",
    "clamp",
]
