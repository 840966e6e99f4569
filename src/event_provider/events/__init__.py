"""Named-event publish/subscribe.

Synchronous, in-process dispatch keyed by event name.
"""

from .bus import EventBus, event_bus
from .provider import EventProvider

__all__ = ["EventBus", "EventProvider", "event_bus"]
