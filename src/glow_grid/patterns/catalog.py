"""
Pattern registry with the built-in catalog.

Usage:
    from glow_grid.patterns.catalog import get_pattern, PATTERNS

    spiral = get_pattern("spiralOuter")
    rnd = get_pattern("random", seed="123")
    print(PATTERNS.keys())  # Available pattern ids

Loop lengths are all multiples of 50ms, so that a 60fps export has a whole
number of frames (frames = loop_ms * 3 / 50).
"""

from .random_events import generate_for_spec
from .types import AccentPulse, Pattern, RandomSpec

# Breath length shared by every built-in pattern (longer than any beat)
PULSE_MS = 900.0

DEFAULT_PATTERN = "spiralOuter"
DEFAULT_SEED = "123"

# Global pattern registry
PATTERNS: dict[str, Pattern] = {}

# (pattern id, seed) -> seeded procedural pattern
_SEEDED: dict[tuple[str, str], Pattern] = {}


def register_pattern(pattern: Pattern) -> None:
    """Register a pattern in the global registry. Ids must be unique."""
    if pattern.id in PATTERNS:
        raise ValueError(f"Pattern '{pattern.id}' is already registered")
    PATTERNS[pattern.id] = pattern


def list_patterns() -> list[str]:
    """Get list of all registered pattern ids."""
    return list(PATTERNS.keys())


def get_pattern(name: str, seed: str = DEFAULT_SEED) -> Pattern | None:
    """
    Get a pattern by id.

    Procedural patterns come back seeded: their events are generated once
    per (id, seed) and reused afterwards. Schedule patterns ignore ``seed``.
    """
    pattern = PATTERNS.get(name)
    if pattern is None or not pattern.is_procedural:
        return pattern

    key = (name, seed)
    seeded = _SEEDED.get(key)
    if seeded is None:
        events = generate_for_spec(seed, pattern.loop_ms, pattern.beat_ms, pattern.random)
        seeded = pattern.with_events(seed, events)
        _SEEDED[key] = seeded
    return seeded


def resolve_pattern(name: str | None, seed: str = DEFAULT_SEED) -> tuple[Pattern, bool]:
    """
    Get a pattern, falling back to the default for unknown ids.

    Returns:
        (pattern, found) - ``found`` is False when the fallback was used
    """
    pattern = get_pattern(name, seed) if name else None
    if pattern is not None:
        return pattern, True
    return get_pattern(DEFAULT_PATTERN, seed), False


# Built-in pattern definitions
# 0..8 indexing:
#   0 1 2
#   3 4 5
#   6 7 8
_BUILTINS: list[Pattern] = [
    # Outer spiral (center excluded), center breathes on its own
    Pattern(
        id="spiralOuter",
        frames=((0,), (1,), (2,), (5,), (8,), (7,), (6,), (3,)),
        beat_ms=200,
        pulse_ms=PULSE_MS,
        accent=AccentPulse(cell=4, period_ms=1600, amplitude=0.9),
    ),
    # Diagonal wave: top-left -> bottom-right
    Pattern(
        id="waveDiagonal",
        frames=((0,), (1, 3), (2, 4, 6), (5, 7), (8,)),
        beat_ms=130,
        pulse_ms=PULSE_MS,
    ),
    # Center ripple outwards
    Pattern(
        id="pulse",
        frames=((4,), (1, 3, 5, 7), (0, 2, 6, 8)),
        beat_ms=200,
        pulse_ms=PULSE_MS,
    ),
    # Seeded sparkle, one precomputed loop per seed
    Pattern(
        id="random",
        beat_ms=100,
        loop_ms=2000,
        pulse_ms=PULSE_MS,
        random=RandomSpec(min_count=1, max_count=4, min_amp=0.35, max_amp=1.0),
    ),
]

# Register all built-in patterns on module import
for _pattern in _BUILTINS:
    register_pattern(_pattern)
