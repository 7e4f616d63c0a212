"""
CLI entry points for glow-grid.

- patterns: list the catalog
- serve: control server (realtime or export mode)
- capture: frame-exact loop capture
"""

from .main import main

__all__ = ["main"]
