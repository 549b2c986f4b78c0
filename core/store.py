"""In-memory day value store.

The store is the single source of truth for the UI. Every effective change
is announced on the event bus as ``STORE_CHANGED`` carrying a snapshot, which
is how the persistence mirror and the menu learn about it.
"""
import threading
from typing import Dict, Iterable, Mapping, Optional

from app.events import EventBus, EventType
from config import get_logger

logger = get_logger(__name__)


def _is_blank(text) -> bool:
    return not isinstance(text, str) or not text.strip()


def merge(base: Mapping[str, str], overlay: Mapping[str, str]) -> Dict[str, str]:
    """Combine two mappings, overlay winning on key collisions.

    Neither input is modified.
    """
    merged = dict(base)
    merged.update(overlay)
    return merged


def clean_mapping(mapping: Mapping) -> Dict[str, str]:
    """Drop entries that would break the no-blank-values rule."""
    cleaned = {}
    for key, value in mapping.items():
        if not isinstance(key, str) or _is_blank(value):
            logger.debug(f"Dropping unusable entry {key!r}")
            continue
        cleaned[key] = value
    return cleaned


class DayValueStore:
    """Mapping from day key to the note typed for that day.

    Attributes:
        event_bus: Optional bus receiving ``STORE_CHANGED`` events.
    """

    merge = staticmethod(merge)

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus
        self._lock = threading.Lock()
        self._values: Dict[str, str] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._values)

    def get(self, key: str) -> Optional[str]:
        """Value for ``key``, or None when the day has no entry."""
        with self._lock:
            return self._values.get(key)

    def snapshot(self) -> Dict[str, str]:
        """Copy of the current contents."""
        with self._lock:
            return dict(self._values)

    def set(self, key: str, text: str) -> None:
        """Store ``text`` for ``key``; blank text removes the key instead."""
        if _is_blank(text):
            self.remove(key)
            return

        with self._lock:
            if self._values.get(key) == text:
                return
            self._values[key] = text
            snapshot = dict(self._values)
        self._notify("set", snapshot, key=key)

    def remove(self, key: str) -> None:
        """Delete ``key``. Removing an absent key is not an error."""
        with self._lock:
            if key not in self._values:
                return
            del self._values[key]
            snapshot = dict(self._values)
        self._notify("remove", snapshot, key=key)

    def replace_all(self, new_mapping: Mapping[str, str]) -> None:
        """Discard everything and take ``new_mapping`` (import)."""
        self._replace(new_mapping, "replace")

    def load(self, mapping: Mapping[str, str]) -> None:
        """Populate from persisted data at startup."""
        self._replace(mapping, "load")

    def _replace(self, mapping: Mapping[str, str], reason: str) -> None:
        cleaned = clean_mapping(mapping)
        with self._lock:
            self._values = cleaned
            snapshot = dict(cleaned)
        logger.info(f"Store {reason}: {len(snapshot)} entries")
        self._notify(reason, snapshot)

    def _notify(self, reason: str, snapshot: Dict[str, str], key: str = None) -> None:
        if self.event_bus is None:
            return
        data = {"reason": reason, "snapshot": snapshot}
        if key is not None:
            data["key"] = key
        self.event_bus.publish(EventType.STORE_CHANGED, data, source="store")
