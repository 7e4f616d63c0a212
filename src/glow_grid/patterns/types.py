"""
Core data structures for glow patterns.

- Event: one procedural trigger (time in loop, cell, amplitude)
- AccentPulse: optional always-on decorative breath on one cell
- RandomSpec: parameters for procedurally generated schedules
- Pattern: immutable pattern descriptor
"""

from dataclasses import dataclass, field, replace
import math
from typing import NamedTuple

from ..grid import CENTER_CELL, is_valid_cell, validate_step
from .envelope import BreathEnvelope


class Event(NamedTuple):
    """
    A single timed trigger of a procedural pattern.

    Attributes:
        t: Offset within one loop in ms
        cell: Cell index 0..8
        amplitude: Peak brightness of this trigger (0.0-1.0)
    """
    t: float
    cell: int
    amplitude: float


@dataclass(frozen=True)
class AccentPulse:
    """
    Decorative breath on a fixed cell, independent of the trigger schedule.

    Evaluated from absolute time modulo ``period_ms`` (not loop-folded),
    with an envelope as long as the period itself.
    """
    cell: int = CENTER_CELL
    period_ms: float = 1600.0
    amplitude: float = 0.9

    def __post_init__(self):
        if not is_valid_cell(self.cell):
            raise ValueError(f"Accent cell {self.cell!r} out of range")
        if not self.period_ms > 0:
            raise ValueError(f"Accent period must be positive, got {self.period_ms}")

    @property
    def envelope(self) -> BreathEnvelope:
        """One breath spanning the whole period."""
        return BreathEnvelope(self.period_ms, self.amplitude)

    def intensity_at(self, t_abs: float) -> float:
        """Accent brightness at absolute time (plain modulo, negative times stay dark)."""
        return self.envelope.get_intensity(math.fmod(t_abs, self.period_ms))


@dataclass(frozen=True)
class RandomSpec:
    """Parameters for a seeded random schedule (per-step cell count and amplitude range)."""
    min_count: int = 1
    max_count: int = 4
    min_amp: float = 0.35
    max_amp: float = 1.0

    def __post_init__(self):
        if not (0 <= self.min_count <= self.max_count <= 9):
            raise ValueError(
                f"Cell count range [{self.min_count}, {self.max_count}] must lie within 0..9"
            )
        if not (0.0 <= self.min_amp <= self.max_amp <= 1.0):
            raise ValueError(
                f"Amplitude range [{self.min_amp}, {self.max_amp}] must lie within 0..1"
            )


@dataclass(frozen=True)
class Pattern:
    """
    Immutable pattern descriptor.

    Schedule patterns have ``frames`` (one tuple of cells per step) and a
    loop of exactly ``len(frames) * beat_ms``. Procedural patterns carry
    ``random`` settings and an explicit ``loop_ms``; their ``events`` are filled
    in by ``with_events()`` once a seed is known.

    Attributes:
        id: Unique pattern key
        frames: Steps, each a tuple of cells triggered together
        beat_ms: Spacing between consecutive steps
        loop_ms: Loop period in ms
        pulse_ms: Breath duration of every trigger (may exceed beat_ms)
        accent: Optional decorative pulse
        random: Procedural parameters (None for schedule patterns)
        seed: Seed the events were generated from
        events: Precomputed procedural events
    """
    id: str
    frames: tuple[tuple[int, ...], ...] = ()
    beat_ms: float = 200.0
    loop_ms: float = 0.0
    pulse_ms: float = 900.0
    accent: AccentPulse | None = None
    random: RandomSpec | None = None
    seed: str | None = None
    events: tuple[Event, ...] = field(default=(), repr=False)

    def __post_init__(self):
        object.__setattr__(self, "frames", tuple(validate_step(step) for step in self.frames))
        object.__setattr__(self, "events", tuple(Event(*e) for e in self.events))

        if not self.id:
            raise ValueError("Pattern id must not be empty")
        if not self.beat_ms > 0:
            raise ValueError(f"{self.id}: beat_ms must be positive")
        if not self.pulse_ms > 0:
            raise ValueError(f"{self.id}: pulse_ms must be positive")

        if self.random is None:
            if not self.frames:
                raise ValueError(f"{self.id}: schedule pattern needs at least one step")
            expected = len(self.frames) * self.beat_ms
            if self.loop_ms == 0:
                object.__setattr__(self, "loop_ms", expected)
            elif self.loop_ms != expected:
                raise ValueError(
                    f"{self.id}: loop_ms={self.loop_ms} but {len(self.frames)} steps "
                    f"x {self.beat_ms}ms = {expected}"
                )
        else:
            if self.frames:
                raise ValueError(f"{self.id}: procedural pattern cannot also define frames")
            if not self.loop_ms > 0:
                raise ValueError(f"{self.id}: procedural pattern needs an explicit loop_ms")

        for event in self.events:
            if not is_valid_cell(event.cell):
                raise ValueError(f"{self.id}: event cell {event.cell!r} out of range")

    @property
    def is_procedural(self) -> bool:
        return self.random is not None

    @property
    def step_count(self) -> int:
        """Number of trigger steps in one loop."""
        if self.is_procedural:
            return math.ceil(self.loop_ms / self.beat_ms)
        return len(self.frames)

    def with_events(self, seed: str, events: "tuple[Event, ...] | list[Event]") -> "Pattern":
        """Return a seeded copy of a procedural pattern."""
        if not self.is_procedural:
            raise ValueError(f"{self.id}: only procedural patterns take events")
        return replace(self, seed=seed, events=tuple(events))
