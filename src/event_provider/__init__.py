"""Top-level package for event-provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import ensure_config_dir, load_config
    from .events import EventBus, EventProvider, event_bus
    from .exceptions import ConfigValidationError, EventProviderError
    from .logging_utils import configure_logging

__all__ = [
    "ConfigValidationError",
    "EventBus",
    "EventProvider",
    "EventProviderError",
    "configure_logging",
    "ensure_config_dir",
    "event_bus",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols so importing the bus does not pull in pydantic."""
    if name in {"EventBus", "EventProvider", "event_bus"}:
        from .events import EventBus, EventProvider, event_bus

        return {
            "EventBus": EventBus,
            "EventProvider": EventProvider,
            "event_bus": event_bus,
        }[name]
    if name in {"ensure_config_dir", "load_config"}:
        from .config import ensure_config_dir, load_config

        return {"ensure_config_dir": ensure_config_dir, "load_config": load_config}[name]
    if name in {"ConfigValidationError", "EventProviderError"}:
        from .exceptions import ConfigValidationError, EventProviderError

        return {
            "ConfigValidationError": ConfigValidationError,
            "EventProviderError": EventProviderError,
        }[name]
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
