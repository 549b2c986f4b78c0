"""Backup envelope: a timestamped, versioned snapshot of the store.

The same document shape is used for the durable mirror file and for
user exports; exports also carry a description.
"""
import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from config import BACKUP, get_logger
from config.exceptions import InvalidBackupError, StorageError

logger = get_logger(__name__)


@dataclass
class BackupEnvelope:
    """A full store snapshot as written to disk."""
    data: Dict[str, str]
    timestamp: str
    version: str = BACKUP.VERSION
    description: Optional[str] = None

    @classmethod
    def capture(cls, mapping: Dict[str, str], description: Optional[str] = None) -> 'BackupEnvelope':
        """Envelope for ``mapping`` stamped with the current time."""
        return cls(
            data=dict(mapping),
            timestamp=datetime.now().astimezone().isoformat(),
            description=description,
        )

    @classmethod
    def for_export(cls, mapping: Dict[str, str]) -> 'BackupEnvelope':
        """Envelope written to user-chosen export files."""
        return cls.capture(mapping, description=BACKUP.EXPORT_DESCRIPTION)

    def to_dict(self) -> dict:
        result = {
            "data": self.data,
            "timestamp": self.timestamp,
            "version": self.version,
        }
        if self.description is not None:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, obj) -> 'BackupEnvelope':
        """Validate a parsed document.

        Raises:
            InvalidBackupError: If ``obj`` has no mapping ``data`` field.
        """
        if not isinstance(obj, dict) or not isinstance(obj.get("data"), dict):
            raise InvalidBackupError("Invalid backup file")
        return cls(
            data=obj["data"],
            timestamp=obj.get("timestamp", ""),
            version=obj.get("version", BACKUP.VERSION),
            description=obj.get("description"),
        )


def export_filename(now: Optional[datetime] = None) -> str:
    """Suggested export file name, e.g. ``day-tally-backup-2024-01-15.json``."""
    return (now or datetime.now()).strftime(BACKUP.EXPORT_FILENAME_PATTERN)


def write_envelope(path: Path, envelope: BackupEnvelope) -> None:
    """Write ``envelope`` to ``path`` atomically.

    The parent directory is created if needed.

    Raises:
        StorageError: On any filesystem failure.
    """
    path = Path(path)
    temp_file = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(envelope.to_dict(), f, indent=2, ensure_ascii=False)
        temp_file.replace(path)
    except OSError as e:
        raise StorageError(f"Failed to write backup: {e}", {"path": str(path)})
    logger.debug(f"Wrote {len(envelope.data)} entries to {path}")


def read_envelope(path: Path) -> BackupEnvelope:
    """Read and validate a backup document.

    Raises:
        StorageError: If the file cannot be read.
        InvalidBackupError: If it is not JSON or lacks a mapping ``data``.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise StorageError(f"Failed to read backup: {e}", {"path": str(path)})

    try:
        obj = json.loads(raw)
    except ValueError:
        raise InvalidBackupError("Invalid backup file", {"path": str(path)})
    return BackupEnvelope.from_dict(obj)
