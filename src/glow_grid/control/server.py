"""HTTP/WebSocket control server for glow-grid.

Exposes the engine status, the current frame and (in export mode) the
export bridge on localhost:9877. Designed to run alongside a render loop
in a separate thread, or directly in the foreground.
"""

import asyncio
import json
import math
import threading
from typing import TYPE_CHECKING, Any

from aiohttp import web, WSMsgType

from ..patterns import all_previews
from ..timing import BridgeNotActiveError, GET_LOOP_DURATION, SET_EXPORT_TIME

if TYPE_CHECKING:
    from ..engine import GlowEngine

# Default port for control server
DEFAULT_PORT = 9877
STATUS_BROADCAST_HZ = 10


class ControlServer:
    """HTTP + WebSocket surface over a GlowEngine."""

    def __init__(
        self,
        engine: "GlowEngine",
        host: str = "localhost",
        port: int = DEFAULT_PORT,
        status_hz: float = STATUS_BROADCAST_HZ,
    ):
        self.engine = engine
        self.host = host
        self.port = port
        self.status_interval = 1.0 / status_hz

        self._app: web.Application | None = None
        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None
        self._clients: set[web.WebSocketResponse] = set()
        self._running = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self._status_task: asyncio.Task | None = None

    def create_app(self) -> web.Application:
        """Build the aiohttp application (also used directly by tests)."""
        app = web.Application()
        app.router.add_get("/api/status", self._handle_status)
        app.router.add_get("/api/loop", self._handle_get_loop)
        app.router.add_post("/api/time", self._handle_set_time)
        app.router.add_get("/api/frame", self._handle_frame)
        app.router.add_get("/api/previews", self._handle_previews)
        app.router.add_get("/ws", self._handle_websocket)
        return app

    # -- bridge access -------------------------------------------------

    def _get_loop_ms(self) -> float:
        return self.engine.registry.call(GET_LOOP_DURATION)

    def _set_export_time(self, ms: Any) -> None:
        if isinstance(ms, bool) or not isinstance(ms, (int, float)):
            raise ValueError(f"'ms' must be a number, got {ms!r}")
        self.engine.registry.call(SET_EXPORT_TIME, ms)

    def _get_frame(self) -> dict:
        return {
            "tAbs": self.engine.t_abs,
            "intensities": self.engine.current_intensities(),
        }

    # -- HTTP handlers -------------------------------------------------

    async def _handle_status(self, request: web.Request) -> web.Response:
        return web.json_response(self.engine.get_status())

    async def _handle_get_loop(self, request: web.Request) -> web.Response:
        try:
            return web.json_response({"loopMs": self._get_loop_ms()})
        except BridgeNotActiveError as e:
            return web.json_response({"error": str(e)}, status=404)

    async def _handle_set_time(self, request: web.Request) -> web.Response:
        try:
            data = await request.json()
        except json.JSONDecodeError:
            return web.json_response({"error": "Invalid JSON"}, status=400)
        if not isinstance(data, dict) or "ms" not in data:
            return web.json_response({"error": "Missing 'ms'"}, status=400)

        try:
            self._set_export_time(data["ms"])
        except BridgeNotActiveError as e:
            return web.json_response({"error": str(e)}, status=404)
        except ValueError as e:
            return web.json_response({"error": str(e)}, status=400)
        return web.json_response({"tAbs": self.engine.t_abs})

    async def _handle_frame(self, request: web.Request) -> web.Response:
        """Current frame, or any instant with ?t=<ms> (time source untouched)."""
        t = request.query.get("t")
        if t is None:
            return web.json_response(self._get_frame())
        try:
            t_abs = float(t)
        except ValueError:
            return web.json_response({"error": f"Invalid t: {t!r}"}, status=400)
        if not math.isfinite(t_abs):
            return web.json_response({"error": f"Invalid t: {t!r}"}, status=400)
        return web.json_response({
            "tAbs": t_abs,
            "intensities": self.engine.intensities_at(t_abs),
        })

    async def _handle_previews(self, request: web.Request) -> web.Response:
        """Idle-state stills for every pattern (gallery)."""
        seed = request.query.get("seed", self.engine.config.seed)
        return web.json_response([
            {
                "pattern": p.pattern_id,
                "phaseOffsetMs": p.phase_offset_ms,
                "snapshot": list(p.snapshot),
            }
            for p in all_previews(seed)
        ])

    # -- WebSocket -----------------------------------------------------

    async def _handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle incoming WebSocket connection."""
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._clients.add(ws)
        print(f"[SERVER] Client connected ({len(self._clients)} total)")

        try:
            await ws.send_json({"type": "status", **self.engine.get_status()})

            async for msg in ws:
                if msg.type == WSMsgType.TEXT:
                    try:
                        data = json.loads(msg.data)
                    except json.JSONDecodeError:
                        await ws.send_json({"type": "error", "message": "Invalid JSON"})
                        continue
                    await self._handle_command(data, ws)
                elif msg.type == WSMsgType.ERROR:
                    print(f"[SERVER] WebSocket error: {ws.exception()}")
        finally:
            self._clients.discard(ws)
            print(f"[SERVER] Client disconnected ({len(self._clients)} total)")

        return ws

    async def _handle_command(self, data: dict, ws: web.WebSocketResponse) -> None:
        """Handle a command from client."""
        cmd_type = data.get("type") if isinstance(data, dict) else None

        try:
            if cmd_type == "set_export_time":
                self._set_export_time(data.get("ms"))
                await ws.send_json({"type": "time_set", "tAbs": self.engine.t_abs})

            elif cmd_type == "get_loop_ms":
                await ws.send_json({"type": "loop_ms", "loopMs": self._get_loop_ms()})

            elif cmd_type == "get_frame":
                await ws.send_json({"type": "frame", **self._get_frame()})

            elif cmd_type == "get_status":
                await ws.send_json({"type": "status", **self.engine.get_status()})

            else:
                await ws.send_json({"type": "error", "message": f"Unknown command: {cmd_type}"})
        except (BridgeNotActiveError, ValueError) as e:
            await ws.send_json({"type": "error", "message": str(e)})

    async def _broadcast_status(self) -> None:
        """Broadcast status to all connected clients."""
        if not self._clients:
            return

        status = {"type": "status", **self.engine.get_status()}
        dead_clients = set()

        for ws in self._clients:
            try:
                await ws.send_json(status)
            except ConnectionResetError:
                dead_clients.add(ws)

        self._clients -= dead_clients

    async def _status_loop(self) -> None:
        """Periodically broadcast status to all clients."""
        while self._running:
            await self._broadcast_status()
            await asyncio.sleep(self.status_interval)

    # -- lifecycle -----------------------------------------------------

    async def start_async(self) -> None:
        """Start the server (async)."""
        self._app = self.create_app()

        self._runner = web.AppRunner(self._app)
        await self._runner.setup()

        self._site = web.TCPSite(self._runner, self.host, self.port)
        await self._site.start()

        self._running = True
        print(f"[SERVER] Listening on http://{self.host}:{self.port} (ws at /ws)")

        self._status_task = asyncio.create_task(self._status_loop())

    async def stop_async(self) -> None:
        """Stop the server (async)."""
        self._running = False

        if self._status_task is not None:
            self._status_task.cancel()
            try:
                await self._status_task
            except asyncio.CancelledError:
                pass
            self._status_task = None

        for ws in list(self._clients):
            await ws.close()
        self._clients.clear()

        if self._runner:
            await self._runner.cleanup()
            self._runner = None

    def start_in_thread(self) -> threading.Thread:
        """Start the control server in a background thread.

        Returns the thread so caller can join it on shutdown.
        """
        def run():
            self._loop = asyncio.new_event_loop()
            asyncio.set_event_loop(self._loop)

            try:
                self._loop.run_until_complete(self.start_async())
                self._loop.run_forever()
            finally:
                self._loop.run_until_complete(self.stop_async())
                self._loop.close()

        thread = threading.Thread(target=run, daemon=True, name="ControlServer")
        thread.start()
        return thread

    def stop(self) -> None:
        """Signal the server to stop."""
        self._running = False
        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)
