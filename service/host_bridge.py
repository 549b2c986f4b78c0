"""Desktop host bridge.

The optional capability object giving the core access to desktop-only
features: the durable backup file and native file dialogs. The app checks
for it once at startup; everything downstream receives either a bridge or
None.
"""
import shutil
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from app.events import EventBus, EventType
from config import get_logger
from config.exceptions import HostBridgeError, InvalidBackupError, StorageError
from config.paths import AppPaths
from service.dialogs import JSON_FILE_TYPES, FileDialogs
from storage.backup import BackupEnvelope, export_filename, read_envelope, write_envelope

logger = get_logger(__name__)

INVALID_BACKUP_MESSAGE = "Invalid backup file"


@dataclass
class BridgeResult:
    """Outcome of a bridge operation.

    Attributes:
        success: True when the operation completed.
        data: Loaded mapping (load/import).
        path: File involved (export/import).
        error: Message when the operation failed.
        cancelled: The user dismissed the dialog; not an error.
        invalid: The chosen file is not a usable backup.
    """
    success: bool
    data: Optional[Dict[str, str]] = None
    path: Optional[str] = None
    error: Optional[str] = None
    cancelled: bool = False
    invalid: bool = False


class HostBridge(ABC):
    """Operations only a desktop host can provide.

    Besides the request/response operations, the host has two one-shot
    notification channels delivered over the event bus:
    ``EXPORT_REQUESTED`` and ``IMPORT_COMPLETED``.
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus

    @abstractmethod
    def save_backup(self, mapping: Dict[str, str]) -> bool:
        """Write the durable backup; True on success."""

    @abstractmethod
    def load_backup(self) -> BridgeResult:
        """Read the durable backup."""

    @abstractmethod
    def export_data(self, mapping: Dict[str, str]) -> BridgeResult:
        """Prompt for a destination and write an export file."""

    @abstractmethod
    def import_data(self, allow_all_files: bool = False) -> BridgeResult:
        """Prompt for a source file and read a backup from it."""

    @abstractmethod
    def get_backup_path(self) -> str:
        """Location of the durable backup file."""

    def request_export(self) -> None:
        """Ask the app to export its data (host menu or shortcut)."""
        self._publish(EventType.EXPORT_REQUESTED, {})

    def run_import(self, allow_all_files: bool = False) -> BridgeResult:
        """Host-initiated import; the result goes out on ``IMPORT_COMPLETED``."""
        result = self.import_data(allow_all_files=allow_all_files)
        self._publish(EventType.IMPORT_COMPLETED, {"result": result})
        return result

    def _publish(self, event_type: EventType, data: dict) -> None:
        if self.event_bus is None:
            logger.warning(f"No event bus, dropping {event_type.name}")
            return
        self.event_bus.publish(event_type, data, source="host")


class DesktopHostBridge(HostBridge):
    """Host bridge for the macOS desktop app.

    Attributes:
        paths: Resolved application paths (backup location).
        dialogs: Native file dialog provider.
    """

    def __init__(
        self,
        paths: AppPaths,
        dialogs: Optional[FileDialogs] = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(event_bus)
        self.paths = paths
        self.dialogs = dialogs or FileDialogs()

    def get_backup_path(self) -> str:
        return str(self.paths.backup_file)

    def save_backup(self, mapping: Dict[str, str]) -> bool:
        try:
            write_envelope(self.paths.backup_file, BackupEnvelope.capture(mapping))
        except StorageError as e:
            logger.error(f"Error saving backup: {e}")
            return False
        logger.debug(f"Backup saved to {self.paths.backup_file}")
        return True

    def load_backup(self) -> BridgeResult:
        backup_file = self.paths.backup_file
        if not backup_file.exists():
            return BridgeResult(success=False, error="No backup file")
        try:
            envelope = read_envelope(backup_file)
        except (StorageError, InvalidBackupError) as e:
            logger.warning(f"Could not load backup: {e}")
            return BridgeResult(success=False, error=str(e))
        return BridgeResult(success=True, data=envelope.data, path=str(backup_file))

    def export_data(self, mapping: Dict[str, str]) -> BridgeResult:
        try:
            path = self.dialogs.choose_save_path(export_filename())
        except HostBridgeError as e:
            logger.error(f"Export dialog error: {e}")
            return BridgeResult(success=False, error=e.message)
        if path is None:
            return BridgeResult(success=False, cancelled=True)

        if not path.suffix:
            path = path.with_suffix('.json')

        try:
            write_envelope(path, BackupEnvelope.for_export(mapping))
        except StorageError as e:
            logger.error(f"Export error: {e}")
            return BridgeResult(success=False, error=e.message, path=str(path))

        logger.info(f"Exported {len(mapping)} entries to {path}")
        return BridgeResult(success=True, path=str(path))

    def import_data(self, allow_all_files: bool = False) -> BridgeResult:
        file_types = None if allow_all_files else JSON_FILE_TYPES
        try:
            path = self.dialogs.choose_open_path(file_types)
        except HostBridgeError as e:
            logger.error(f"Import dialog error: {e}")
            return BridgeResult(success=False, error=e.message)
        if path is None:
            return BridgeResult(success=False, cancelled=True)

        try:
            envelope = read_envelope(path)
        except InvalidBackupError:
            logger.warning(f"Rejected import of {path}: not a backup file")
            return BridgeResult(
                success=False, error=INVALID_BACKUP_MESSAGE, invalid=True, path=str(path)
            )
        except StorageError as e:
            logger.error(f"Import error: {e}")
            return BridgeResult(success=False, error=e.message, path=str(path))

        logger.info(f"Read {len(envelope.data)} entries from {path}")
        return BridgeResult(success=True, data=envelope.data, path=str(path))


def detect_host_bridge(
    paths: AppPaths,
    event_bus: Optional[EventBus] = None,
) -> Optional[HostBridge]:
    """Desktop bridge if this process runs on a macOS desktop, else None."""
    if sys.platform != "darwin" or shutil.which("osascript") is None:
        logger.info("No desktop host available, running without backup mirror")
        return None
    logger.info(f"Desktop host available, backups at {paths.backup_file}")
    return DesktopHostBridge(paths, event_bus=event_bus)
