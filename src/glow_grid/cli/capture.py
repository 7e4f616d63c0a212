"""Capture one seamless loop of a pattern as numbered frames.

By default the pattern is rendered in-process. With --url the frames are
pulled from a control server running in export mode instead.
"""

import argparse
import asyncio
import subprocess
from pathlib import Path

from aiohttp import ClientError

from ..capture import (
    CaptureDriver,
    CaptureResult,
    FrameWriter,
    HttpBridgeClient,
    InvalidLoopDurationError,
    LocalBridgeClient,
    encode_command,
    output_video_name,
)
from ..engine import GlowEngine
from .common import add_selection_args, build_config


def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pattern", nargs="?", default=None, help="Pattern id (default: spiralOuter)")
    parser.add_argument("fps", nargs="?", type=int, default=None, help="Frames per second (default: 60)")
    parser.add_argument("seed", nargs="?", default=None, help="Seed, only used by 'random' (default: 123)")
    parser.add_argument("--url", default=None, help="Capture from a running server instead of in-process")
    parser.add_argument("--out", type=Path, default=None, help="Frames root directory (default: renders)")
    parser.add_argument("--encode", action="store_true", help="Encode the frames with ffmpeg afterwards")
    parser.add_argument("--codec", default=None, help="ffmpeg video codec (default: hevc_videotoolbox)")
    add_selection_args(parser)


async def capture_local(engine: GlowEngine, writer: FrameWriter, fps: int) -> CaptureResult:
    driver = CaptureDriver(LocalBridgeClient(engine), writer, fps=fps)
    return await driver.capture()


async def capture_remote(url: str, writer: FrameWriter, fps: int) -> CaptureResult:
    async with HttpBridgeClient(url) as client:
        driver = CaptureDriver(client, writer, fps=fps)
        return await driver.capture()


def run(args: argparse.Namespace) -> int:
    try:
        config = build_config(args)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1

    config.export = True
    capture = config.capture
    fps = args.fps if args.fps is not None else capture.fps
    codec = args.codec or capture.codec
    out_root = args.out if args.out is not None else Path(capture.output_dir)

    try:
        if args.url:
            pattern_id = config.pattern
            seed = config.seed if pattern_id == "random" else None
            out_dir = out_root / pattern_id
            writer = FrameWriter(out_dir, cell_px=capture.cell_px, gap_px=capture.gap_px)
            result = asyncio.run(capture_remote(args.url, writer, fps))
        else:
            with GlowEngine(config) as engine:
                pattern_id = engine.pattern.id
                seed = engine.pattern.seed
                out_dir = out_root / pattern_id
                writer = FrameWriter(out_dir, cell_px=capture.cell_px, gap_px=capture.gap_px)
                result = asyncio.run(capture_local(engine, writer, fps))
    except InvalidLoopDurationError as e:
        print(f"[CAPTURE] Error: {e}")
        return 1
    except ClientError as e:
        print(f"[CAPTURE] Error: cannot drive {args.url}: {e}")
        return 1

    if args.encode or capture.encode:
        output = Path(output_video_name(pattern_id, seed))
        cmd = encode_command(out_dir, fps, output, codec=codec)
        print(f"[CAPTURE] Encoding: {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True)
        except (OSError, subprocess.CalledProcessError) as e:
            print(f"[CAPTURE] Error: encoding failed: {e}")
            return 1
        print(f"\n[CAPTURE] Wrote {output}")

    print(f"[CAPTURE] Done: {result.frame_count} frames in {out_dir}")
    return 0
