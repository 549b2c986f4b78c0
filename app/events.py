"""Event bus connecting the store, the persistence mirror, the host bridge
and the menu bar UI.

None of these hold references to each other; they publish and subscribe
to ``EventType`` notifications instead.

Usage:
    from app.events import EventBus, EventType

    bus = EventBus()
    bus.subscribe(EventType.STORE_CHANGED, lambda e: print(e.data["snapshot"]))
    bus.publish(EventType.STORE_CHANGED, {"snapshot": {"2024-0-15": "100"}})
"""
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

from config import get_logger

logger = get_logger(__name__)


class EventType(Enum):
    """Notifications exchanged inside the app."""

    # Store contents changed (data: reason, snapshot, key)
    STORE_CHANGED = auto()

    # Displayed month changed (data: year, month)
    MONTH_CHANGED = auto()

    # One-shot channels from the desktop host
    EXPORT_REQUESTED = auto()
    IMPORT_COMPLETED = auto()

    # Export/import outcome (data: operation, result, entries)
    TRANSFER_FINISHED = auto()
    # Durable backup write failed (data: entries)
    BACKUP_WRITE_FAILED = auto()

    APP_STARTING = auto()
    APP_STOPPING = auto()


@dataclass
class Event:
    """A published notification.

    Attributes:
        event_type: What happened.
        data: Payload, specific to the event type.
        timestamp: Creation time.
        source: Name of the publishing component.
    """
    event_type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    source: Optional[str] = None

    def __str__(self) -> str:
        return f"Event({self.event_type.name}, source={self.source})"


EventHandler = Callable[[Event], None]


class EventBus:
    """Thread-safe publish/subscribe bus.

    Handlers run inside ``publish`` on the caller's thread, so a user
    edit on the AppKit thread refreshes the menu before the callback
    returns. Work that must not block (the backup write) starts its own
    thread in the handler.

    Example:
        >>> bus = EventBus()
        >>> bus.subscribe(EventType.MONTH_CHANGED, lambda e: print(e.data))
        >>> bus.publish(EventType.MONTH_CHANGED, {"year": 2024, "month": 0})
    """

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        with self._lock:
            self._handlers[event_type].append(handler)
        logger.debug(f"Subscribed to {event_type.name}")

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """Remove ``handler``. Returns False if it was not subscribed."""
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
        return True

    def publish(self, event_type: EventType, data: Optional[Dict[str, Any]] = None,
                source: Optional[str] = None) -> None:
        """Deliver an event to every subscriber of ``event_type``.

        One failing handler is logged and does not stop the rest.
        """
        event = Event(event_type=event_type, data=data or {}, source=source)
        logger.debug(f"Publishing {event}")
        with self._lock:
            handlers = list(self._handlers.get(event_type, ()))

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Handler for {event_type.name} failed: {e}", exc_info=True)

    def get_subscriber_count(self, event_type: EventType) -> int:
        with self._lock:
            return len(self._handlers.get(event_type, ()))

    def shutdown(self) -> None:
        """Drop every subscription; later publishes reach nobody."""
        with self._lock:
            self._handlers.clear()
        logger.debug("EventBus shut down")
