"""
Breath envelope for triggered cells.

A trigger starts a symmetric 0 -> peak -> 0 curve shaped by a fixed
exponent. Overlap between consecutive triggers (pulse longer than the
beat) is what gives the grid its "breathy" look.
"""

from dataclasses import dataclass
import math

# Attack/decay shaping. Must stay exactly 1.45 for parity with reference renders.
BREATH_EXPONENT = 1.45


def breath_pulse(dt: float, duration_ms: float, amplitude: float = 1.0) -> float:
    """
    Brightness of a breath started ``dt`` ms ago.

    Args:
        dt: Time since the trigger in ms (negative = not started yet)
        duration_ms: Length of the whole breath in ms
        amplitude: Peak value, reached at ``duration_ms / 2``

    Returns:
        Value in [0, amplitude]; 0 outside [0, duration_ms]
    """
    if dt < 0 or dt > duration_ms:
        return 0.0
    x = dt / duration_ms
    # sin(pi) is a tiny positive float, but keep the base non-negative for pow()
    s = max(0.0, math.sin(math.pi * x))
    return amplitude * math.pow(s, BREATH_EXPONENT)


@dataclass(frozen=True)
class BreathEnvelope:
    """
    A breath of fixed duration and peak.

    Example:
        env = BreathEnvelope(duration_ms=900)
        env.get_intensity(450)  # 1.0
    """
    duration_ms: float
    amplitude: float = 1.0

    def __post_init__(self):
        if not self.duration_ms > 0:
            raise ValueError(f"Envelope duration must be positive, got {self.duration_ms}")

    def get_intensity(self, dt: float) -> float:
        """Intensity ``dt`` ms after the trigger."""
        return breath_pulse(dt, self.duration_ms, self.amplitude)
