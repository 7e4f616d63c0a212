"""
Glow engine - ties selection, pattern, time source and export bridge together.

The GlowEngine:
- Resolves the selected pattern (falling back to the default)
- Builds the time source for the selected mode
- In export mode, registers the export bridge for its lifetime
- Evaluates the intensity function at the published time

Usage:
    with GlowEngine(GlowConfig(pattern="pulse")) as engine:
        intensities = engine.current_intensities()
"""

from typing import Callable

from .config import GlowConfig
from .patterns import Pattern, compute_intensities, resolve_pattern
from .timing import (
    BridgeRegistry,
    ExportBridge,
    ExportClock,
    TimeMode,
    TimeSource,
    create_time_source,
)


class GlowEngine:
    """Runtime state for one glow grid."""

    def __init__(
        self,
        config: GlowConfig | None = None,
        registry: BridgeRegistry | None = None,
        on_tick: Callable[[float], None] | None = None,
    ):
        self.config = config or GlowConfig()

        pattern, found = resolve_pattern(self.config.pattern, self.config.seed)
        if not found:
            print(
                f"[ENGINE] Warning: unknown pattern '{self.config.pattern}', "
                f"using '{pattern.id}'"
            )
        self.pattern: Pattern = pattern

        self.registry = registry or BridgeRegistry()
        self.time_source: TimeSource = create_time_source(
            self.config.export,
            on_tick=on_tick,
            fps=self.config.render.fps,
        )
        self.bridge: ExportBridge | None = None
        self._started = False

    @property
    def mode(self) -> TimeMode:
        return self.time_source.mode

    @property
    def export_mode(self) -> bool:
        return self.mode is TimeMode.EXPORT

    @property
    def loop_ms(self) -> float:
        return self.pattern.loop_ms

    @property
    def t_abs(self) -> float:
        return self.time_source.t_abs

    def start(self) -> "GlowEngine":
        """Enter the selected mode (start the clock or register the bridge)."""
        if self._started:
            return self
        if isinstance(self.time_source, ExportClock):
            self.bridge = ExportBridge(self.registry, self.time_source, self.pattern.loop_ms)
            self.bridge.register()
        else:
            self.time_source.start()
        self._started = True
        print(f"[ENGINE] Pattern '{self.pattern.id}' in {self.mode.value} mode")
        return self

    def close(self) -> None:
        """Leave the mode: cancel the realtime loop and dispose the bridge."""
        if not self._started:
            return
        self.time_source.stop()
        if self.bridge is not None:
            self.bridge.dispose()
            self.bridge = None
        self._started = False

    def intensities_at(self, t_abs: float) -> list[float]:
        """Intensities at an arbitrary time (does not touch the time source)."""
        return compute_intensities(t_abs, self.pattern)

    def current_intensities(self) -> list[float]:
        """Intensities at the most recently published time."""
        return compute_intensities(self.time_source.t_abs, self.pattern)

    def get_status(self) -> dict:
        """Get current engine status for display."""
        t_abs = self.time_source.t_abs
        return {
            "pattern": self.pattern.id,
            "mode": self.mode.value,
            "seed": self.pattern.seed,
            "theme": self.config.theme,
            "tAbs": t_abs,
            "loopMs": self.pattern.loop_ms,
            "intensities": compute_intensities(t_abs, self.pattern),
        }

    def __enter__(self) -> "GlowEngine":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
