"""
Idle-state previews for the pattern gallery.

Each pattern gets a phase offset (where in its loop a still preview is
taken) and a snapshot of the intensities at that phase. Derived and cached,
never fed back into live rendering.
"""

from dataclasses import dataclass

from .catalog import DEFAULT_SEED, get_pattern, list_patterns
from .intensity import compute_intensities

# Per-pattern overrides; everything else previews at half a breath
PHASE_OFFSETS_MS: dict[str, float] = {
    "waveDiagonal": 520.0,
}

_PREVIEWS: dict[tuple[str, str], "PatternPreview"] = {}


@dataclass(frozen=True)
class PatternPreview:
    """A still of one pattern at a fixed phase."""
    pattern_id: str
    phase_offset_ms: float
    snapshot: tuple[float, ...]


def phase_offset(pattern_id: str) -> float:
    """Phase (ms into the loop) at which a pattern's preview is taken."""
    if pattern_id in PHASE_OFFSETS_MS:
        return PHASE_OFFSETS_MS[pattern_id]
    pattern = get_pattern(pattern_id)
    if pattern is None:
        raise KeyError(pattern_id)
    return pattern.pulse_ms / 2


def get_preview(pattern_id: str, seed: str = DEFAULT_SEED) -> PatternPreview:
    """Get (and cache) the preview for a pattern."""
    key = (pattern_id, seed)
    preview = _PREVIEWS.get(key)
    if preview is None:
        pattern = get_pattern(pattern_id, seed)
        if pattern is None:
            raise KeyError(pattern_id)
        offset = phase_offset(pattern_id)
        preview = PatternPreview(
            pattern_id=pattern_id,
            phase_offset_ms=offset,
            snapshot=tuple(compute_intensities(offset, pattern)),
        )
        _PREVIEWS[key] = preview
    return preview


def all_previews(seed: str = DEFAULT_SEED) -> list[PatternPreview]:
    """Previews for the whole catalog, in catalog order."""
    return [get_preview(name, seed) for name in list_patterns()]
