"""
Capture driver: steps an export-mode engine through one loop, frame by frame.

The driver is the only writer of time during capture. Each frame is fully
sampled and written before the next timestamp is sent, so there is never
a race between "time changed" and "frame sampled".

Two clients are provided:
- LocalBridgeClient: an in-process GlowEngine
- HttpBridgeClient: a glow-grid control server over HTTP (aiohttp)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from aiohttp import ClientSession

from ..engine import GlowEngine
from ..timing import GET_LOOP_DURATION, SET_EXPORT_TIME
from .frames import FrameWriter
from .plan import CapturePlan


class BridgeClient(Protocol):
    """What the driver needs from the thing it is capturing."""

    async def get_loop_duration(self) -> float: ...

    async def set_export_time(self, ms: float) -> None: ...

    async def sample(self) -> list[float]: ...


class LocalBridgeClient:
    """Drives an in-process engine through its export bridge."""

    def __init__(self, engine: GlowEngine):
        if not engine.export_mode:
            raise ValueError("Engine must be in export mode to be captured")
        self.engine = engine

    async def get_loop_duration(self) -> float:
        return self.engine.registry.call(GET_LOOP_DURATION)

    async def set_export_time(self, ms: float) -> None:
        self.engine.registry.call(SET_EXPORT_TIME, ms)

    async def sample(self) -> list[float]:
        return self.engine.current_intensities()


class HttpBridgeClient:
    """Drives a running control server (started with export mode on)."""

    def __init__(self, base_url: str, session: ClientSession | None = None):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "HttpBridgeClient":
        if self._session is None:
            self._session = ClientSession()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError("HttpBridgeClient used outside 'async with'")
        return self._session

    async def get_loop_duration(self) -> float:
        async with self.session.get(f"{self.base_url}/api/loop") as resp:
            resp.raise_for_status()
            data = await resp.json()
        return data.get("loopMs")

    async def set_export_time(self, ms: float) -> None:
        async with self.session.post(f"{self.base_url}/api/time", json={"ms": ms}) as resp:
            resp.raise_for_status()

    async def sample(self) -> list[float]:
        async with self.session.get(f"{self.base_url}/api/frame") as resp:
            resp.raise_for_status()
            data = await resp.json()
        return data["intensities"]


@dataclass
class CaptureResult:
    """Summary of a finished capture."""
    plan: CapturePlan
    frames: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def frame_count(self) -> int:
        return len(self.frames)


class CaptureDriver:
    """Captures exactly one loop through a bridge client."""

    def __init__(self, client: BridgeClient, writer: FrameWriter, fps: float = 60):
        self.client = client
        self.writer = writer
        self.fps = fps

    async def plan(self) -> CapturePlan:
        """Ask the engine for its loop and build the frame plan (fatal if invalid)."""
        loop_ms = await self.client.get_loop_duration()
        return CapturePlan.from_loop(loop_ms, self.fps)

    async def capture(self) -> CaptureResult:
        plan = await self.plan()
        result = CaptureResult(plan=plan, warnings=plan.validate())
        for warning in result.warnings:
            print(f"[CAPTURE] Warning: {warning}")

        print(
            f"[CAPTURE] {plan.frame_count} frames at {plan.fps:g}fps "
            f"(loop {plan.loop_ms:g}ms) -> {self.writer.output_dir}"
        )

        for i, t in enumerate(plan.frame_times()):
            await self.client.set_export_time(t)
            intensities = await self.client.sample()
            result.frames.append(self.writer.write(i, intensities))

        print(f"[CAPTURE] Wrote {result.frame_count} frames")
        return result

