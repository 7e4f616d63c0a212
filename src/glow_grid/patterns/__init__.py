"""
Pattern engine core for glow-grid.

This package provides:
- Pattern descriptors and the built-in catalog
- The breath envelope
- Seeded random schedules
- The pure intensity function
"""

from .types import Pattern, Event, AccentPulse, RandomSpec
from .envelope import BreathEnvelope, breath_pulse, BREATH_EXPONENT
from .random_events import Mulberry32, seed_to_uint32, generate_events
from .intensity import compute_intensities, fold_loop_time
from .catalog import (
    PATTERNS,
    DEFAULT_PATTERN,
    DEFAULT_SEED,
    PULSE_MS,
    register_pattern,
    get_pattern,
    resolve_pattern,
    list_patterns,
)
from .preview import PatternPreview, get_preview, all_previews

__all__ = [
    # Types
    "Pattern",
    "Event",
    "AccentPulse",
    "RandomSpec",
    # Envelope
    "BreathEnvelope",
    "breath_pulse",
    "BREATH_EXPONENT",
    # Random schedules
    "Mulberry32",
    "seed_to_uint32",
    "generate_events",
    # Intensity
    "compute_intensities",
    "fold_loop_time",
    # Catalog
    "PATTERNS",
    "DEFAULT_PATTERN",
    "DEFAULT_SEED",
    "PULSE_MS",
    "register_pattern",
    "get_pattern",
    "resolve_pattern",
    "list_patterns",
    # Previews
    "PatternPreview",
    "get_preview",
    "all_previews",
]
