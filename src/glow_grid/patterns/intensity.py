"""
Per-cell intensity computation.

Turns a pattern and an absolute time into the 9-cell brightness vector.
Everything here is a pure function of its arguments: the same
``(t_abs, pattern)`` always gives the same vector, which is what makes
frame-exact export and seamless loops possible.
"""

import math

from ..grid import blank_intensities
from .envelope import breath_pulse
from .types import Pattern


def fold_loop_time(t_abs: float, loop_ms: float) -> float:
    """
    Reduce absolute time into [0, loop_ms).

    Negative times fold forward, so the result is never negative.
    """
    return math.fmod(math.fmod(t_abs, loop_ms) + loop_ms, loop_ms)


def wrapped_delay(t_loop: float, event_time: float, loop_ms: float) -> float:
    """Time since ``event_time``, wrapping into the previous loop iteration."""
    dt = t_loop - event_time
    if dt < 0:
        dt += loop_ms
    return dt


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def compute_intensities(t_abs: float, pattern: Pattern) -> list[float]:
    """
    Compute the intensity of every cell at absolute time ``t_abs`` (ms).

    Contributions to the same cell combine by maximum, never by sum, so
    overlapping breaths cannot push a cell past the brightest of them.

    Args:
        t_abs: Absolute time in ms
        pattern: Schedule pattern, or a seeded procedural pattern

    Returns:
        List of 9 floats in [0, 1], indexed by cell
    """
    a = blank_intensities()
    loop_ms = pattern.loop_ms
    t_loop = fold_loop_time(t_abs, loop_ms)

    if pattern.is_procedural:
        for event in pattern.events:
            dt = wrapped_delay(t_loop, event.t, loop_ms)
            v = breath_pulse(dt, pattern.pulse_ms, event.amplitude)
            if v > a[event.cell]:
                a[event.cell] = v
    else:
        for step, cells in enumerate(pattern.frames):
            dt = wrapped_delay(t_loop, step * pattern.beat_ms, loop_ms)
            v = breath_pulse(dt, pattern.pulse_ms, 1.0)
            for idx in cells:
                a[idx] = max(a[idx], v)

    accent = pattern.accent
    if accent is not None:
        # Absolute time, not loop-folded
        a[accent.cell] = max(a[accent.cell], accent.intensity_at(t_abs))

    return [clamp_unit(v) for v in a]
