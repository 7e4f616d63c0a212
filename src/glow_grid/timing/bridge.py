"""
Export bridge: the surface a capture driver uses to drive time.

Handlers are installed into a ``BridgeRegistry`` when the bridge is
registered and removed again when it is disposed, so exposure is scoped to
export mode and separate engines never share hooks.

Usage:
    registry = BridgeRegistry()
    with ExportBridge(registry, clock, loop_ms=1600):
        registry.call(SET_EXPORT_TIME, 16.666)
        registry.call(GET_LOOP_DURATION)  # 1600
"""

from typing import Any, Callable

from .clock import ExportClock

SET_EXPORT_TIME = "set_export_time"
GET_LOOP_DURATION = "get_loop_duration"


class BridgeNotActiveError(RuntimeError):
    """Raised when calling a bridge handler that is not registered."""


class BridgeRegistry:
    """Named handler table a driver can call into."""

    def __init__(self):
        self._handlers: dict[str, Callable[..., Any]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    @property
    def names(self) -> list[str]:
        return list(self._handlers.keys())

    def install(self, name: str, handler: Callable[..., Any]) -> None:
        if name in self._handlers:
            raise ValueError(f"Bridge handler '{name}' is already installed")
        self._handlers[name] = handler

    def remove(self, name: str, handler: Callable[..., Any]) -> None:
        """Remove ``name`` only if it is still bound to ``handler``."""
        if self._handlers.get(name) is handler:
            del self._handlers[name]

    def call(self, name: str, *args: Any) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise BridgeNotActiveError(f"Bridge handler '{name}' is not registered")
        return handler(*args)


class ExportBridge:
    """
    Revocable registration of the export handlers.

    Construct on entering export mode, ``dispose()`` on exit.
    """

    def __init__(self, registry: BridgeRegistry, clock: ExportClock, loop_ms: float):
        self.registry = registry
        self.clock = clock
        self.loop_ms = loop_ms
        self._installed: dict[str, Callable[..., Any]] = {}

    @property
    def active(self) -> bool:
        return bool(self._installed)

    def set_export_time(self, ms: float) -> None:
        self.clock.set_time(ms)

    def get_loop_duration(self) -> float:
        return self.loop_ms

    def register(self) -> "ExportBridge":
        if self.active:
            raise RuntimeError("Export bridge is already registered")
        handlers = {
            SET_EXPORT_TIME: self.set_export_time,
            GET_LOOP_DURATION: self.get_loop_duration,
        }
        for name, handler in handlers.items():
            try:
                self.registry.install(name, handler)
            except ValueError:
                self.dispose()
                raise
            self._installed[name] = handler
        print(f"[BRIDGE] Registered (loop {self.loop_ms:g}ms)")
        return self

    def dispose(self) -> None:
        if not self._installed:
            return
        for name, handler in self._installed.items():
            self.registry.remove(name, handler)
        self._installed.clear()
        print("[BRIDGE] Disposed")

    def __enter__(self) -> "ExportBridge":
        return self.register()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
