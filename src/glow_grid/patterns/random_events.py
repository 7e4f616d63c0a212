"""
Seeded, loopable random schedules.

One loop worth of events is generated up front from a string seed, so the
"random" pattern repeats exactly and two runs with the same seed produce
identical output. The draw order (count, then distinct cells, then one
amplitude per chosen cell, step by step) is part of the output contract.
"""

import math

from ..grid import NUM_CELLS
from .types import Event, RandomSpec

_MASK32 = 0xFFFFFFFF

# 32-bit FNV-1a parameters
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619

MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32x32-bit multiply."""
    return (a * b) & _MASK32


def seed_to_uint32(seed: str) -> int:
    """
    Hash a seed string to an unsigned 32-bit integer (FNV-1a).

    Characters are consumed as UTF-16 code units so that seeds outside the
    Basic Multilingual Plane hash the same as they do in browser builds.
    Lone surrogates (e.g. undecodable command-line bytes) are hashed as-is.
    """
    h = FNV_OFFSET_BASIS
    data = seed.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, FNV_PRIME)
    return h


class Mulberry32:
    """
    Counter-based 32-bit PRNG.

    Each ``next()`` advances the state by a fixed increment and mixes it
    into a float in [0, 1).
    """

    def __init__(self, seed: int):
        self.state = seed & _MASK32

    def next(self) -> float:
        self.state = (self.state + MULBERRY_INCREMENT) & _MASK32
        x = self.state
        x = _imul(x ^ (x >> 15), x | 1)
        x ^= (x + _imul(x ^ (x >> 7), x | 61)) & _MASK32
        return ((x ^ (x >> 14)) & _MASK32) / 4294967296

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high], inclusive."""
        return math.floor(low + self.next() * (high - low + 1))

    def uniform(self, low: float, high: float) -> float:
        """Float in [low, high)."""
        return low + self.next() * (high - low)

    @classmethod
    def from_string(cls, seed: str) -> "Mulberry32":
        return cls(seed_to_uint32(seed))


def generate_events(
    seed: str,
    loop_ms: float,
    beat_ms: float,
    min_count: int = 1,
    max_count: int = 4,
    min_amp: float = 0.35,
    max_amp: float = 1.0,
) -> list[Event]:
    """
    Build one loop of random triggers.

    Args:
        seed: Any string (empty included)
        loop_ms: Loop period; steps run from 0 up to, not including, this
        beat_ms: Spacing between steps
        min_count: Fewest cells triggered per step
        max_count: Most cells triggered per step (at most 9)
        min_amp: Lowest trigger amplitude
        max_amp: Highest trigger amplitude

    Returns:
        Events ordered by step, then by the order cells were drawn
    """
    if not beat_ms > 0:
        raise ValueError(f"beat_ms must be positive, got {beat_ms}")
    if max_count > NUM_CELLS:
        raise ValueError(f"Cannot pick {max_count} distinct cells out of {NUM_CELLS}")

    rng = Mulberry32.from_string(seed)
    events: list[Event] = []

    t = 0
    while t < loop_ms:
        count = rng.randint(min_count, max_count)

        # Distinct cells by rejection; insertion order is kept
        chosen: list[int] = []
        while len(chosen) < count:
            idx = rng.randint(0, NUM_CELLS - 1)
            if idx not in chosen:
                chosen.append(idx)

        for idx in chosen:
            events.append(Event(t, idx, rng.uniform(min_amp, max_amp)))

        t += beat_ms

    return events


def generate_for_spec(seed: str, loop_ms: float, beat_ms: float, spec: RandomSpec) -> list[Event]:
    """``generate_events`` with the ranges taken from a RandomSpec."""
    return generate_events(
        seed,
        loop_ms,
        beat_ms,
        min_count=spec.min_count,
        max_count=spec.max_count,
        min_amp=spec.min_amp,
        max_amp=spec.max_amp,
    )
