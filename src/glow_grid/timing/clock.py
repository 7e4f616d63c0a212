"""
Time sources driving the intensity function.

Exactly one of two modes is chosen at startup:

- REALTIME: a render thread samples a monotonic clock every frame and
  publishes the elapsed milliseconds.
- EXPORT: time never moves on its own; an external driver injects exact
  timestamps and the last one is held until the next.
"""

from enum import Enum
from typing import Callable
import math
import threading
import time

# Realtime sampling rate (one publish per frame)
FRAME_HZ = 60


class TimeMode(Enum):
    REALTIME = "realtime"
    EXPORT = "export"


class TimeSource:
    """Holds the most recently published absolute time (ms)."""

    mode: TimeMode

    def __init__(self, on_tick: Callable[[float], None] | None = None):
        self._lock = threading.Lock()
        self._t_abs = 0.0
        self._on_tick = on_tick

    @property
    def t_abs(self) -> float:
        with self._lock:
            return self._t_abs

    def _publish(self, t_abs: float) -> None:
        with self._lock:
            self._t_abs = t_abs
        if self._on_tick:
            self._on_tick(t_abs)

    def start(self) -> None:
        """Begin producing time (no-op unless overridden)."""

    def stop(self) -> None:
        """Stop producing time (no-op unless overridden)."""


class RealtimeClock(TimeSource):
    """
    Continuous clock driven by a background render thread.

    One tick is in flight at a time: the thread publishes, then sleeps
    until the next frame boundary. ``stop()`` cancels the loop and joins.
    """

    mode = TimeMode.REALTIME

    def __init__(
        self,
        on_tick: Callable[[float], None] | None = None,
        fps: float = FRAME_HZ,
        clock: Callable[[], float] = time.perf_counter,
    ):
        super().__init__(on_tick)
        if not fps > 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.fps = fps
        self.frame_interval = 1.0 / fps
        self._clock = clock
        self._start_time = 0.0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sample(self) -> float:
        """Read the clock once and publish ``now - start`` in ms."""
        t_abs = (self._clock() - self._start_time) * 1000.0
        self._publish(t_abs)
        return t_abs

    def start(self) -> None:
        if self.running:
            return
        self._start_time = self._clock()
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="RealtimeClock")
        self._thread.start()
        print(f"[CLOCK] Realtime clock started at {self.fps:g} fps")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            frame_start = time.perf_counter()
            self.sample()

            elapsed = time.perf_counter() - frame_start
            sleep_time = self.frame_interval - elapsed
            if sleep_time > 0:
                self._stop_event.wait(sleep_time)

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
            print("[CLOCK] Realtime clock stopped")


class ExportClock(TimeSource):
    """Externally driven clock; holds the last injected time indefinitely."""

    mode = TimeMode.EXPORT

    def set_time(self, ms: float) -> None:
        ms = float(ms)
        if not math.isfinite(ms):
            raise ValueError(f"Export time must be finite, got {ms}")
        self._publish(ms)


def create_time_source(
    export: bool,
    on_tick: Callable[[float], None] | None = None,
    fps: float = FRAME_HZ,
) -> TimeSource:
    """Build the time source for the mode selected at startup."""
    if export:
        return ExportClock(on_tick)
    return RealtimeClock(on_tick, fps=fps)
