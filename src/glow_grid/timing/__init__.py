"""Time sources and the export bridge."""

from .clock import (
    FRAME_HZ,
    TimeMode,
    TimeSource,
    RealtimeClock,
    ExportClock,
    create_time_source,
)
from .bridge import (
    SET_EXPORT_TIME,
    GET_LOOP_DURATION,
    BridgeNotActiveError,
    BridgeRegistry,
    ExportBridge,
)

__all__ = [
    "FRAME_HZ",
    "TimeMode",
    "TimeSource",
    "RealtimeClock",
    "ExportClock",
    "create_time_source",
    "SET_EXPORT_TIME",
    "GET_LOOP_DURATION",
    "BridgeNotActiveError",
    "BridgeRegistry",
    "ExportBridge",
]
