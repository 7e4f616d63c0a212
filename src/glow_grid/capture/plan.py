"""
Frame plan for exporting exactly one loop.

Frames are taken at t = 0, dt, 2dt, ... (frame_count - 1) * dt with
dt = 1000 / fps. The timestamp t = loop_ms is never requested since it
is the same picture as frame 0.
"""

from dataclasses import dataclass
from typing import Iterator
import math

# How far loop_ms * fps / 1000 may sit from an integer before warning
FRAME_COUNT_TOLERANCE = 1e-6


class InvalidLoopDurationError(ValueError):
    """Loop duration is unusable for capture (non-finite or not positive)."""


@dataclass(frozen=True)
class CapturePlan:
    """Timestamps for one seamless loop at a given frame rate."""
    loop_ms: float
    fps: float
    frame_count: int
    frame_count_exact: float

    @classmethod
    def from_loop(cls, loop_ms: float, fps: float) -> "CapturePlan":
        """
        Build a plan, rejecting loop durations a capture cannot use.

        Raises:
            InvalidLoopDurationError: loop_ms is non-finite or <= 0
            ValueError: fps is non-finite or <= 0
        """
        try:
            loop_ms = float(loop_ms)
        except (TypeError, ValueError):
            raise InvalidLoopDurationError(f"Invalid loopMs: {loop_ms!r}")
        if not math.isfinite(loop_ms) or loop_ms <= 0:
            raise InvalidLoopDurationError(f"Invalid loopMs: {loop_ms}")
        if not math.isfinite(fps) or fps <= 0:
            raise ValueError(f"Invalid fps: {fps}")

        exact = loop_ms * fps / 1000
        return cls(
            loop_ms=loop_ms,
            fps=fps,
            frame_count=round(exact),
            frame_count_exact=exact,
        )

    @property
    def interval_ms(self) -> float:
        return 1000 / self.fps

    @property
    def residual(self) -> float:
        """Distance of the exact frame count from the rounded one."""
        return abs(self.frame_count_exact - self.frame_count)

    @property
    def is_seamless(self) -> bool:
        return self.residual <= FRAME_COUNT_TOLERANCE

    def frame_time(self, index: int) -> float:
        return index * self.interval_ms

    def frame_times(self) -> Iterator[float]:
        for i in range(self.frame_count):
            yield self.frame_time(i)

    def validate(self) -> list[str]:
        """Validate the plan and return a list of warnings."""
        warnings = []
        if not self.is_seamless:
            message = (
                f"loopMs={self.loop_ms:g}ms at fps={self.fps:g} gives non-integer frames "
                f"({self.frame_count_exact:g}). Loop may have a tiny seam."
            )
            if float(self.fps).is_integer():
                step = 1000 // math.gcd(1000, int(self.fps))
                message += f" Consider making loopMs a multiple of {step}ms."
            warnings.append(message)
        if self.frame_count == 0:
            warnings.append(f"loopMs={self.loop_ms:g}ms is shorter than one frame at fps={self.fps:g}")
        return warnings
