"""Argument helpers shared by the glow-grid commands."""

import argparse
from pathlib import Path

from ..config import GlowConfig, load_config, parse_selection


def add_selection_args(parser: argparse.ArgumentParser) -> None:
    """Options selecting what to render (all optional, override config)."""
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: built-in defaults)",
    )
    parser.add_argument(
        "--query",
        default=None,
        help="Selection as a query string, e.g. '?p=random&export=1&seed=42'",
    )
    parser.add_argument("--theme", default=None, help="Color theme (rendering layer only)")


def build_config(args: argparse.Namespace) -> GlowConfig:
    """Config file, then query string, then explicit flags."""
    config = load_config(args.config) if args.config else GlowConfig()
    if args.query:
        config = parse_selection(args.query, base=config)

    if getattr(args, "pattern", None) is not None:
        config.pattern = args.pattern
    if getattr(args, "seed", None) is not None:
        config.seed = args.seed
    if getattr(args, "theme", None) is not None:
        config.theme = args.theme
    return config
