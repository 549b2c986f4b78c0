"""Import/export of the whole calendar.

One-shot, user-initiated operations that bypass the persistence mirror.
With a desktop host the native dialogs pick the files; without one, an
export is saved to the Downloads folder the way a browser download would
be, and an import reads a file the caller already chose.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from config import get_logger
from config.exceptions import InvalidBackupError, StorageError
from config.paths import AppPaths
from service.host_bridge import INVALID_BACKUP_MESSAGE, BridgeResult, HostBridge
from storage.backup import BackupEnvelope, export_filename, read_envelope, write_envelope

logger = get_logger(__name__)


class TransferStatus(Enum):
    """How an import or export ended."""
    SUCCESS = "success"
    CANCELLED = "cancelled"
    ERROR = "error"
    INVALID_BACKUP = "invalid_backup"


@dataclass
class TransferResult:
    """Outcome of ``export_all`` / ``import_all``."""
    status: TransferStatus
    path: Optional[str] = None
    data: Optional[Dict[str, str]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is TransferStatus.SUCCESS

    @classmethod
    def from_bridge(cls, result: BridgeResult) -> 'TransferResult':
        if result.success:
            return cls(TransferStatus.SUCCESS, path=result.path, data=result.data)
        if result.cancelled:
            return cls(TransferStatus.CANCELLED)
        if result.invalid:
            return cls(TransferStatus.INVALID_BACKUP, path=result.path, error=INVALID_BACKUP_MESSAGE)
        return cls(TransferStatus.ERROR, path=result.path, error=result.error or "Unknown error")


class ImportExportGateway:
    """Exports the store to a file and reads a store back from one.

    Attributes:
        paths: Resolved application paths (Downloads folder).
        bridge: Desktop host bridge, or None.
    """

    def __init__(
        self,
        paths: AppPaths,
        bridge: Optional[HostBridge] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.paths = paths
        self.bridge = bridge
        self._clock = clock

    # === Export ===

    def export_all(self, mapping: Dict[str, str]) -> TransferResult:
        """Write every entry to a user-chosen file."""
        if self.bridge is not None:
            result = TransferResult.from_bridge(self.bridge.export_data(dict(mapping)))
        else:
            result = self._download(mapping)
        logger.info(f"Export finished: {result.status.value}")
        return result

    def _download(self, mapping: Dict[str, str]) -> TransferResult:
        """Save the export document to Downloads, browser style."""
        target = self._unique_download_path(export_filename(self._clock()))
        try:
            write_envelope(target, BackupEnvelope.for_export(dict(mapping)))
        except StorageError as e:
            logger.error(f"Download export failed: {e}")
            return TransferResult(TransferStatus.ERROR, path=str(target), error=e.message)
        return TransferResult(TransferStatus.SUCCESS, path=str(target))

    def _unique_download_path(self, filename: str) -> Path:
        """``name.json``, then ``name (1).json``, ``name (2).json``..."""
        candidate = self.paths.downloads_dir / filename
        stem, suffix = candidate.stem, candidate.suffix
        counter = 1
        while candidate.exists():
            candidate = candidate.with_name(f"{stem} ({counter}){suffix}")
            counter += 1
        return candidate

    # === Import ===

    def import_all(self, source: Optional[Path] = None, allow_all_files: bool = False) -> TransferResult:
        """Read a backup document.

        Args:
            source: File already chosen by the caller. When None, the host
                bridge prompts for one.
            allow_all_files: Let the prompt show non-JSON files too.

        Returns:
            SUCCESS with ``data`` set, CANCELLED, INVALID_BACKUP or ERROR.
            The store is not touched here.
        """
        if source is not None:
            result = self._read_file(Path(source))
        elif self.bridge is not None:
            result = TransferResult.from_bridge(self.bridge.import_data(allow_all_files=allow_all_files))
        else:
            result = TransferResult(TransferStatus.ERROR, error="No file selected for import")
        logger.info(f"Import finished: {result.status.value}")
        return result

    def _read_file(self, path: Path) -> TransferResult:
        try:
            envelope = read_envelope(path)
        except InvalidBackupError:
            return TransferResult(
                TransferStatus.INVALID_BACKUP, path=str(path), error=INVALID_BACKUP_MESSAGE
            )
        except StorageError as e:
            return TransferResult(TransferStatus.ERROR, path=str(path), error=e.message)
        return TransferResult(TransferStatus.SUCCESS, path=str(path), data=envelope.data)
