"""Mixin that gives an owning object its own event namespace."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .bus import EventBus


class EventProvider:
    """Add ``subscribe``/``unsubscribe``/``fire`` to any class.

    Each instance lazily creates its own :class:`EventBus` the first time it
    is used, so instances never share subscribers even though the methods
    come from a shared base class.

    Example::

        class Session(EventProvider):
            def login(self, user):
                self.fire("auth.login", user)

        session = Session()
        session.subscribe("auth.login", print)
    """

    _event_bus: EventBus | None = None

    @property
    def events(self) -> EventBus:
        """The instance's bus, created on first access."""
        if self._event_bus is None:
            self._event_bus = self._create_event_bus()
        return self._event_bus

    def _create_event_bus(self) -> EventBus:
        """Override to construct the bus with non-default options."""
        return EventBus()

    def subscribe(self, event_name: str, handler: Callable[..., Any]) -> None:
        self.events.subscribe(event_name, handler)

    def unsubscribe(self, event_name: str, handler: Callable[..., Any]) -> None:
        self.events.unsubscribe(event_name, handler)

    def fire(self, event_name: str, *args: Any) -> None:
        self.events.fire(event_name, *args)

    def subscribers(self, event_name: str) -> list[Callable[..., Any]]:
        return self.events.subscribers(event_name)
