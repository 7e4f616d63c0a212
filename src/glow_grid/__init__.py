"""
glow-grid: seamless looping glow animations on a 3x3 grid.

Provides:
- A fixed catalog of trigger-schedule and seeded random patterns
- A pure, seekable intensity function for any instant
- Realtime and export-driven time sources
- An export bridge and capture driver for frame-exact loop renders
"""

from .grid import NUM_CELLS, GRID_SIZE, CENTER_CELL
from .patterns import (
    Pattern,
    Event,
    breath_pulse,
    compute_intensities,
    get_pattern,
    list_patterns,
)
from .engine import GlowEngine
from .config import GlowConfig

__version__ = "0.1.0"

__all__ = [
    "NUM_CELLS",
    "GRID_SIZE",
    "CENTER_CELL",
    "Pattern",
    "Event",
    "breath_pulse",
    "compute_intensities",
    "get_pattern",
    "list_patterns",
    "GlowEngine",
    "GlowConfig",
]
