"""Frame-exact loop capture."""

from .plan import CapturePlan, InvalidLoopDurationError, FRAME_COUNT_TOLERANCE
from .frames import FrameWriter, frame_name, encode_command, output_video_name
from .driver import (
    BridgeClient,
    LocalBridgeClient,
    HttpBridgeClient,
    CaptureDriver,
    CaptureResult,
)

__all__ = [
    "CapturePlan",
    "InvalidLoopDurationError",
    "FRAME_COUNT_TOLERANCE",
    "FrameWriter",
    "frame_name",
    "encode_command",
    "output_video_name",
    "BridgeClient",
    "LocalBridgeClient",
    "HttpBridgeClient",
    "CaptureDriver",
    "CaptureResult",
]
