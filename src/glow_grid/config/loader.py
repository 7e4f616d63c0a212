"""Configuration file loading and saving."""

from pathlib import Path
from typing import Any
from urllib.parse import parse_qs
import yaml

from .schema import CaptureConfig, GlowConfig, RenderConfig, ServerConfig


def load_config(config_path: Path) -> GlowConfig:
    """Load configuration from YAML file."""
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    defaults = GlowConfig()

    server_data = data.get("server") or {}
    server = ServerConfig(
        host=server_data.get("host", defaults.server.host),
        port=int(server_data.get("port", defaults.server.port)),
        status_hz=float(server_data.get("status_hz", defaults.server.status_hz)),
    )

    render_data = data.get("render") or {}
    render = RenderConfig(fps=float(render_data.get("fps", defaults.render.fps)))

    capture_data = data.get("capture") or {}
    capture = CaptureConfig(
        fps=int(capture_data.get("fps", defaults.capture.fps)),
        output_dir=str(capture_data.get("output_dir", defaults.capture.output_dir)),
        cell_px=int(capture_data.get("cell_px", defaults.capture.cell_px)),
        gap_px=int(capture_data.get("gap_px", defaults.capture.gap_px)),
        codec=capture_data.get("codec", defaults.capture.codec),
        encode=bool(capture_data.get("encode", defaults.capture.encode)),
    )

    # Seeds are strings; YAML would read `seed: 123` as an int
    seed = data.get("seed", defaults.seed)

    return GlowConfig(
        pattern=data.get("pattern", defaults.pattern),
        export=bool(data.get("export", defaults.export)),
        seed=str(seed) if seed is not None else defaults.seed,
        theme=data.get("theme"),
        server=server,
        render=render,
        capture=capture,
    )


def save_config(config: GlowConfig, config_path: Path) -> None:
    """Save configuration to YAML file."""
    data: dict[str, Any] = {
        "pattern": config.pattern,
        "export": config.export,
        "seed": config.seed,
        "server": {
            "host": config.server.host,
            "port": config.server.port,
            "status_hz": config.server.status_hz,
        },
        "render": {"fps": config.render.fps},
        "capture": {
            "fps": config.capture.fps,
            "output_dir": config.capture.output_dir,
            "cell_px": config.capture.cell_px,
            "gap_px": config.capture.gap_px,
            "codec": config.capture.codec,
            "encode": config.capture.encode,
        },
    }

    if config.theme:
        data["theme"] = config.theme

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def parse_selection(query: str, base: GlowConfig | None = None) -> GlowConfig:
    """
    Read selection inputs from a query string.

    Recognised parameters (same as the web build):
        p       pattern id
        export  "1" enables export mode
        seed    seed for procedural patterns
        theme   color theme (rendering layer only)

    Example:
        parse_selection("?p=random&export=1&seed=42")
    """
    base = base or GlowConfig()
    params = parse_qs(query.lstrip("?"), keep_blank_values=True)

    def first(key: str) -> str | None:
        values = params.get(key)
        return values[0] if values else None

    pattern = first("p")
    seed = first("seed")
    theme = first("theme")

    return GlowConfig(
        pattern=pattern if pattern is not None else base.pattern,
        export=first("export") == "1" if "export" in params else base.export,
        seed=seed if seed is not None else base.seed,
        theme=theme if theme is not None else base.theme,
        server=base.server,
        render=base.render,
        capture=base.capture,
    )
