"""Persistence mirror: keeps the day value store durable across restarts.

Two sinks cooperate:
- local storage (fast, always present) holds the raw mapping as JSON
- the host bridge backup file (durable, desktop only) holds an envelope

Usage:
    mirror = PersistenceMirror(local_storage, bridge)
    store.load(mirror.load())
    mirror.attach(event_bus)  # write-through on every STORE_CHANGED
"""
import json
import threading
from typing import TYPE_CHECKING, Dict, List, Optional

from app.events import Event, EventBus, EventType
from config import STORAGE, get_logger
from config.exceptions import StorageError
from config.logging_config import LogContext, log_exception
from core.store import merge
from storage.local_storage import LocalStorage

if TYPE_CHECKING:
    from service.host_bridge import HostBridge

logger = get_logger(__name__)


class PersistenceMirror:
    """Write-through persistence for the day value store.

    Attributes:
        local_storage: The fast sink.
        bridge: Desktop host bridge, or None when running without one.
        storage_key: Local storage key holding the serialized store.
    """

    def __init__(
        self,
        local_storage: LocalStorage,
        bridge: Optional["HostBridge"] = None,
        event_bus: Optional[EventBus] = None,
        storage_key: str = STORAGE.LOCAL_STORAGE_KEY,
    ):
        self.local_storage = local_storage
        self.bridge = bridge
        self.event_bus = event_bus
        self.storage_key = storage_key
        self._pending: List[threading.Thread] = []
        self._pending_lock = threading.Lock()
        # Backup writes run one at a time, newest snapshot last
        self._write_lock = threading.Lock()
        self._generation = 0
        self._written_generation = 0

    def attach(self, event_bus: EventBus) -> None:
        """Persist every store change published on ``event_bus``."""
        self.event_bus = event_bus
        event_bus.subscribe(EventType.STORE_CHANGED, self._on_store_changed)

    def _on_store_changed(self, event: Event) -> None:
        self.write_through(event.data.get("snapshot", {}))

    # === Startup ===

    def load(self) -> Dict[str, str]:
        """Read both sinks and merge them, the durable backup winning.

        A sink that cannot be read or parsed contributes nothing.
        """
        with LogContext(logger, "Startup load"):
            fast = self._load_fast()
            durable = self._load_durable()
        merged = merge(fast, durable)
        logger.info(
            f"Loaded {len(fast)} local and {len(durable)} backup entries "
            f"({len(merged)} after merge)"
        )
        return merged

    def _load_fast(self) -> Dict[str, str]:
        try:
            raw = self.local_storage.get_item(self.storage_key)
        except StorageError as e:
            logger.warning(f"Could not read local storage: {e}")
            return {}
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable local storage data: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring local storage data that is not a mapping")
            return {}
        return data

    def _load_durable(self) -> Dict[str, str]:
        if self.bridge is None:
            return {}
        try:
            result = self.bridge.load_backup()
        except Exception as e:
            log_exception(logger, "Could not load backup file", e)
            return {}
        if not result.success or not isinstance(result.data, dict):
            logger.debug(f"No usable backup file: {result.error or 'not found'}")
            return {}
        return result.data

    # === Write-through ===

    def write_through(self, snapshot: Dict[str, str]) -> None:
        """Persist ``snapshot`` to local storage, then to the backup file.

        An empty snapshot is never written, so an empty store seen before
        loading finishes cannot wipe previously saved data. The backup
        write runs on a detached thread and its failures are only logged.
        """
        if not snapshot:
            logger.debug("Skipping persistence of empty store")
            return

        try:
            self.local_storage.set_item(self.storage_key, json.dumps(snapshot, ensure_ascii=False))
        except StorageError as e:
            logger.error(f"Local storage write failed: {e}")

        if self.bridge is not None:
            with self._pending_lock:
                self._generation += 1
                generation = self._generation
            thread = threading.Thread(
                target=self._save_durable,
                args=(dict(snapshot), generation),
                daemon=True,
                name="BackupMirror-Writer",
            )
            with self._pending_lock:
                self._pending = [t for t in self._pending if t.is_alive()]
                self._pending.append(thread)
            thread.start()

    def _save_durable(self, snapshot: Dict[str, str], generation: int) -> None:
        """Background backup write (runs on its own thread)."""
        with self._write_lock:
            if generation < self._written_generation:
                logger.debug(f"Skipping stale backup snapshot {generation}")
                return
            try:
                ok = self.bridge.save_backup(snapshot)
            except Exception as e:
                ok = False
                log_exception(logger, "Backup mirror write failed", e)
            if ok:
                self._written_generation = generation
        if not ok:
            logger.warning("Backup mirror was not updated")
            if self.event_bus is not None:
                self.event_bus.publish(
                    EventType.BACKUP_WRITE_FAILED, {"entries": len(snapshot)}, source="mirror"
                )

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait for pending backup writes. Returns True if none remain."""
        with self._pending_lock:
            pending = list(self._pending)
        for thread in pending:
            thread.join(timeout)
        return not any(t.is_alive() for t in pending)
