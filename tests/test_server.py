"""
Control server tests using aiohttp's test utilities.

Run:
    python -m pytest tests/test_server.py -v
"""

import asyncio

import pytest
from aiohttp import test_utils
from PIL import Image

from glow_grid.capture import CaptureDriver, FrameWriter, HttpBridgeClient
from glow_grid.config import GlowConfig
from glow_grid.control import ControlServer
from glow_grid.engine import GlowEngine
from glow_grid.patterns import compute_intensities


def run_with_client(engine, scenario):
    """Start a test server for ``engine`` and run ``scenario(client)``."""
    async def main():
        app = ControlServer(engine).create_app()
        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            return await scenario(client)
    return asyncio.run(main())


@pytest.fixture
def export_engine(capsys):
    engine = GlowEngine(GlowConfig(pattern="pulse", export=True)).start()
    yield engine
    engine.close()


@pytest.fixture
def realtime_engine():
    # Not started: no render thread, no bridge
    return GlowEngine(GlowConfig(pattern="pulse"))


class TestBridgeEndpoints:

    def test_loop_and_time(self, export_engine):
        async def scenario(client):
            resp = await client.get("/api/loop")
            assert resp.status == 200
            assert (await resp.json()) == {"loopMs": 600}

            resp = await client.post("/api/time", json={"ms": 100})
            assert resp.status == 200
            assert (await resp.json())["tAbs"] == 100

            resp = await client.get("/api/frame")
            return await resp.json()

        frame = run_with_client(export_engine, scenario)
        assert frame["tAbs"] == 100
        assert frame["intensities"] == pytest.approx(
            compute_intensities(100, export_engine.pattern)
        )

    def test_not_available_in_realtime(self, realtime_engine):
        async def scenario(client):
            loop = await client.get("/api/loop")
            time_set = await client.post("/api/time", json={"ms": 5})
            return loop.status, time_set.status

        assert run_with_client(realtime_engine, scenario) == (404, 404)

    @pytest.mark.parametrize(
        "body",
        ["not json", '{"other": 1}', '{"ms": "abc"}', '{"ms": true}', "[1, 2]"],
    )
    def test_bad_time_requests(self, export_engine, body):
        async def scenario(client):
            resp = await client.post(
                "/api/time", data=body, headers={"Content-Type": "application/json"}
            )
            return resp.status

        assert run_with_client(export_engine, scenario) == 400
        assert export_engine.t_abs == 0.0

    def test_seek_does_not_move_time(self, realtime_engine):
        async def scenario(client):
            ok = await client.get("/api/frame", params={"t": "1250"})
            bad = await client.get("/api/frame", params={"t": "soon"})
            return await ok.json(), bad.status

        frame, bad_status = run_with_client(realtime_engine, scenario)
        assert frame["tAbs"] == 1250
        assert frame["intensities"] == pytest.approx(
            compute_intensities(1250, realtime_engine.pattern)
        )
        assert bad_status == 400
        assert realtime_engine.t_abs == 0.0

    def test_previews(self, realtime_engine):
        async def scenario(client):
            resp = await client.get("/api/previews")
            return await resp.json()

        previews = run_with_client(realtime_engine, scenario)
        assert [p["pattern"] for p in previews] == ["spiralOuter", "waveDiagonal", "pulse", "random"]
        assert all(len(p["snapshot"]) == 9 for p in previews)

    def test_status(self, export_engine):
        async def scenario(client):
            resp = await client.get("/api/status")
            return await resp.json()

        status = run_with_client(export_engine, scenario)
        assert status["pattern"] == "pulse"
        assert status["mode"] == "export"
        assert status["loopMs"] == 600


class TestWebSocket:

    def test_commands(self, export_engine):
        async def scenario(client):
            ws = await client.ws_connect("/ws")
            replies = [await ws.receive_json()]
            for command in (
                {"type": "get_loop_ms"},
                {"type": "set_export_time", "ms": 450},
                {"type": "get_frame"},
                {"type": "bogus"},
            ):
                await ws.send_json(command)
                replies.append(await ws.receive_json())
            await ws.send_str("{broken")
            replies.append(await ws.receive_json())
            await ws.close()
            return replies

        status, loop, time_set, frame, unknown, broken = run_with_client(export_engine, scenario)
        assert status["type"] == "status"
        assert loop == {"type": "loop_ms", "loopMs": 600}
        assert time_set["tAbs"] == 450
        assert frame["intensities"][4] == pytest.approx(1.0)
        assert unknown["type"] == "error"
        assert broken == {"type": "error", "message": "Invalid JSON"}

    def test_bridge_errors_reported(self, realtime_engine, capsys):
        async def scenario(client):
            ws = await client.ws_connect("/ws")
            await ws.receive_json()
            await ws.send_json({"type": "set_export_time", "ms": 1})
            reply = await ws.receive_json()
            await ws.close()
            return reply

        reply = run_with_client(realtime_engine, scenario)
        assert reply["type"] == "error"
        assert "not registered" in reply["message"]


class TestHttpCapture:

    def test_capture_over_http(self, export_engine, tmp_path, capsys):
        writer = FrameWriter(tmp_path, cell_px=2, gap_px=1)

        async def scenario(client):
            base_url = str(client.make_url("/")).rstrip("/")
            bridge = HttpBridgeClient(base_url, session=client.session)
            return await CaptureDriver(bridge, writer, fps=60).capture()

        result = run_with_client(export_engine, scenario)
        assert result.frame_count == 36
        with Image.open(tmp_path / "00018.png") as frame:
            assert frame.tobytes() == writer.render(
                compute_intensities(18 * (1000 / 60), export_engine.pattern)
            ).tobytes()
