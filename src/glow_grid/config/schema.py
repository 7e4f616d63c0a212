"""Configuration dataclasses."""

from dataclasses import dataclass, field
from typing import Optional

from ..patterns.catalog import DEFAULT_PATTERN, DEFAULT_SEED


@dataclass
class ServerConfig:
    """Control server configuration."""
    host: str = "localhost"
    port: int = 9877
    status_hz: float = 10.0


@dataclass
class RenderConfig:
    """Realtime clock configuration."""
    fps: float = 60.0


@dataclass
class CaptureConfig:
    """Frame capture and encoding settings."""
    fps: int = 60
    output_dir: str = "renders"
    cell_px: int = 96
    gap_px: int = 12
    codec: str = "hevc_videotoolbox"
    encode: bool = False


@dataclass
class GlowConfig:
    """Main application configuration (selection inputs read once at load)."""
    pattern: str = DEFAULT_PATTERN
    export: bool = False
    seed: str = DEFAULT_SEED
    theme: Optional[str] = None  # Only consumed by the rendering layer
    server: ServerConfig = field(default_factory=ServerConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    capture: CaptureConfig = field(default_factory=CaptureConfig)
