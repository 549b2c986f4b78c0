"""Application module for Day Tally.

Contains the main application components:
- events: EventBus used between store, mirror, bridge and UI
- dependencies: AppDependencies container and factory
- controller: CalendarController with the user-facing operations
- views: menu, icons and the year chart

Only the event bus is imported here; core modules depend on it.
"""

from app.events import Event, EventBus, EventType

__all__ = [
    "Event",
    "EventBus",
    "EventType",
]
