"""Named-event bus with positionally stable subscriber slots.

Usage:
    bus = EventBus()

    def on_session_change(response):
        print(f"Session: {response['session']}")

    bus.subscribe("auth.sessionChange", on_session_change)
    bus.fire("auth.sessionChange", {"session": None})

    # Later, stop listening with the same name and function.
    bus.unsubscribe("auth.sessionChange", on_session_change)
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
import inspect
import logging
import threading
from typing import Any

LOGGER = logging.getLogger(__name__)


@dataclass
class _Subscriber:
    callback: Callable[..., Any]


def _same_handler(stored: Callable[..., Any], handler: Callable[..., Any]) -> bool:
    """Match by identity, treating re-bound methods of one object as the same.

    Never calls ``__eq__`` on user callables.
    """
    if stored is handler:
        return True
    if inspect.ismethod(stored) and inspect.ismethod(handler):
        return stored.__self__ is handler.__self__ and stored.__func__ is handler.__func__
    if inspect.isbuiltin(stored) and inspect.isbuiltin(handler):
        return stored.__self__ is handler.__self__ and stored.__name__ == handler.__name__
    return False


class EventBus:
    """Synchronous publish/subscribe keyed by event name.

    Each event name maps to an ordered list of slots. Unsubscribing replaces a
    slot with a tombstone (``None``) instead of removing it, so a ``fire`` pass
    that is walking the same list never skips or repeats a handler. Tombstones
    are compacted away once no pass is running.

    Handler exceptions are not caught: they end the current pass and reach the
    caller of :meth:`fire`.
    """

    def __init__(self, *, thread_safe: bool = False, compact: bool = True) -> None:
        self._subscribers: dict[str, list[_Subscriber | None]] = {}
        self._lock: threading.RLock | None = threading.RLock() if thread_safe else None
        self._compact = compact
        self._fire_depth = 0
        self._dirty: set[str] = set()

    @classmethod
    def from_config(cls, events_config: dict[str, Any]) -> EventBus:
        """Build a bus from the validated ``[events]`` config section."""
        return cls(
            thread_safe=bool(events_config.get("thread_safe", False)),
            compact=bool(events_config.get("compact", True)),
        )

    @property
    def thread_safe(self) -> bool:
        return self._lock is not None

    @property
    def compact(self) -> bool:
        return self._compact

    def slot_count(self, event_name: str) -> int:
        """Return the number of slots for ``event_name``, tombstones included."""
        with self._guard():
            return len(self._subscribers.get(event_name, ()))

    def _guard(self) -> AbstractContextManager[Any]:
        # Re-entrant so handlers may subscribe or unsubscribe mid-fire.
        return self._lock if self._lock is not None else nullcontext()

    def subscribe(self, event_name: str, handler: Callable[..., Any]) -> None:
        """Bind ``handler`` to ``event_name``.

        The same handler may be subscribed more than once; it is then called
        once per subscription.

        Args:
            event_name: Event to listen for (e.g., "auth.sessionChange")
            handler: Callable invoked with the arguments passed to fire()
        """
        with self._guard():
            self._subscribers.setdefault(event_name, []).append(_Subscriber(handler))
        LOGGER.debug(
            "events.subscribe",
            extra={"event": "events.subscribe", "event_name": event_name},
        )

    def unsubscribe(self, event_name: str, handler: Callable[..., Any]) -> None:
        """Remove every subscription of ``handler`` under ``event_name``.

        Unknown names and handlers that were never subscribed are ignored.

        Args:
            event_name: Event to stop listening to
            handler: The handler previously passed to subscribe()
        """
        removed = 0
        with self._guard():
            slots = self._subscribers.get(event_name)
            if not slots:
                return
            for index, slot in enumerate(slots):
                if slot is not None and _same_handler(slot.callback, handler):
                    slots[index] = None
                    removed += 1
            if removed:
                self._dirty.add(event_name)
                if self._fire_depth == 0:
                    self._compact_pending()
        if removed:
            LOGGER.debug(
                "events.unsubscribe",
                extra={
                    "event": "events.unsubscribe",
                    "event_name": event_name,
                    "removed": removed,
                },
            )

    def fire(self, event_name: str, *args: Any) -> None:
        """Call every live handler for ``event_name`` with ``args``, in order.

        Handlers subscribed during the pass are not called until the next
        fire. Handlers unsubscribed during the pass are skipped if not yet
        reached.

        Args:
            event_name: Event name
            *args: Positional arguments forwarded to each handler
        """
        with self._guard():
            slots = self._subscribers.get(event_name)
            if slots is None:
                return
            count = len(slots)
            LOGGER.debug(
                "events.fire",
                extra={"event": "events.fire", "event_name": event_name, "slots": count},
            )
            self._fire_depth += 1
            try:
                for index in range(count):
                    slot = slots[index]
                    if slot is not None:
                        slot.callback(*args)
            finally:
                self._fire_depth -= 1
                if self._fire_depth == 0:
                    self._compact_pending()

    def subscribers(self, event_name: str) -> list[Callable[..., Any]]:
        """Return the live handlers for ``event_name`` in call order."""
        with self._guard():
            return [
                slot.callback
                for slot in self._subscribers.get(event_name, ())
                if slot is not None
            ]

    def has_subscribers(self, event_name: str) -> bool:
        with self._guard():
            return any(slot is not None for slot in self._subscribers.get(event_name, ()))

    def event_names(self) -> list[str]:
        """Return names that currently have at least one live handler."""
        with self._guard():
            return [
                name
                for name, slots in self._subscribers.items()
                if any(slot is not None for slot in slots)
            ]

    def clear(self, event_name: str | None = None) -> None:
        """Clear subscribers.

        Args:
            event_name: Specific event to clear, or None for all
        """
        with self._guard():
            names = [event_name] if event_name is not None else list(self._subscribers)
            for name in names:
                slots = self._subscribers.pop(name, None)
                if slots is None:
                    continue
                # A pass still walking this list must stop calling its handlers.
                for index in range(len(slots)):
                    slots[index] = None
                self._dirty.discard(name)
        LOGGER.debug(
            "events.clear",
            extra={"event": "events.clear", "event_name": event_name},
        )

    def _compact_pending(self) -> None:
        """Drop tombstones from lists touched since the last compaction.

        Only safe while no fire pass is running.
        """
        if self._compact:
            for name in self._dirty:
                slots = self._subscribers.get(name)
                if slots is None:
                    continue
                slots[:] = [slot for slot in slots if slot is not None]
                if not slots:
                    del self._subscribers[name]
        self._dirty.clear()


# Global event bus instance
event_bus = EventBus()
