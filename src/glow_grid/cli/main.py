"""Entry point for the glow-grid command."""

import argparse
import sys

from ..capture import CapturePlan
from ..patterns import get_pattern, list_patterns
from . import capture, serve


def list_command(args: argparse.Namespace) -> int:
    """Print the catalog with timing and frame counts."""
    for name in list_patterns():
        pattern = get_pattern(name)
        plan = CapturePlan.from_loop(pattern.loop_ms, args.fps)
        kind = "random" if pattern.is_procedural else f"{pattern.step_count} steps"
        seam = "" if plan.is_seamless else "  (seam)"
        print(
            f"  {name:<14} {kind:<9} beat={pattern.beat_ms:g}ms loop={pattern.loop_ms:g}ms "
            f"pulse={pattern.pulse_ms:g}ms frames@{args.fps}fps={plan.frame_count}{seam}"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glow-grid",
        description="Seamless looping glow patterns on a 3x3 grid",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("patterns", help="List available patterns")
    p_list.add_argument("--fps", type=int, default=60, help="Frame rate for frame counts (default: 60)")
    p_list.set_defaults(func=list_command)

    p_serve = sub.add_parser("serve", help="Run the control server")
    serve.add_arguments(p_serve)
    p_serve.set_defaults(func=serve.run)

    p_capture = sub.add_parser("capture", help="Capture one loop as numbered frames")
    capture.add_arguments(p_capture)
    p_capture.set_defaults(func=capture.run)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
