"""Configuration schema and loading."""

from .schema import (
    GlowConfig,
    ServerConfig,
    RenderConfig,
    CaptureConfig,
)
from .loader import load_config, save_config, parse_selection

__all__ = [
    "GlowConfig",
    "ServerConfig",
    "RenderConfig",
    "CaptureConfig",
    "load_config",
    "save_config",
    "parse_selection",
]
