"""Run the glow-grid control server.

Realtime mode animates continuously; export mode (--export) holds time
until a capture driver sets it through the bridge endpoints.
"""

import argparse
import asyncio

from ..control import ControlServer
from ..engine import GlowEngine
from .common import add_selection_args, build_config


def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--pattern", "-p", default=None, help="Pattern id")
    parser.add_argument("--seed", default=None, help="Seed for the random pattern")
    parser.add_argument(
        "--export",
        action="store_true",
        help="Export mode: time only moves when set through the bridge",
    )
    parser.add_argument("--host", default=None, help="Host to bind to (default: localhost)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: 9877)")
    add_selection_args(parser)


async def run_server(engine: GlowEngine, server: ControlServer) -> None:
    """Run until cancelled."""
    await server.start_async()
    try:
        while True:
            await asyncio.sleep(1)
    except asyncio.CancelledError:
        pass
    finally:
        await server.stop_async()


def run(args: argparse.Namespace) -> int:
    try:
        config = build_config(args)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1

    if args.export:
        config.export = True
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    print("=" * 60)
    print("  Glow Grid Server")
    print("=" * 60)

    with GlowEngine(config) as engine:
        server = ControlServer(
            engine,
            host=config.server.host,
            port=config.server.port,
            status_hz=config.server.status_hz,
        )
        try:
            asyncio.run(run_server(engine, server))
        except KeyboardInterrupt:
            print("\n[SERVER] Shutting down...")
    return 0
