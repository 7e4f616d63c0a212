"""Remote control surface."""

from .server import ControlServer, DEFAULT_PORT

__all__ = ["ControlServer", "DEFAULT_PORT"]
