"""Filesystem locations used by Day Tally.

Resolved once at startup and handed to the components that need them, so
nothing else reads ``Path.home()`` or the environment on its own.

Usage:
    from config.paths import resolve_paths

    paths = resolve_paths()
    paths.backup_file  # ~/Documents/Day Tally Backups/calendar_backup.json
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config.constants import BACKUP, STORAGE
from config.exceptions import ConfigurationError

HOME_ENV_VAR = "DAY_TALLY_HOME"


@dataclass(frozen=True)
class AppPaths:
    """Process-wide file locations.

    Attributes:
        data_dir: Profile directory holding local storage and logs.
        backup_dir: Folder for the durable backup mirror.
        downloads_dir: Where exports land when no desktop host is available.
    """
    data_dir: Path
    backup_dir: Path
    downloads_dir: Path

    @property
    def local_storage_file(self) -> Path:
        return self.data_dir / STORAGE.LOCAL_STORAGE_FILE

    @property
    def backup_file(self) -> Path:
        return self.backup_dir / BACKUP.BACKUP_FILE

    @property
    def log_file(self) -> Path:
        return self.data_dir / STORAGE.LOG_FILE


def resolve_paths(home: Optional[Path] = None) -> AppPaths:
    """Build the application paths.

    Args:
        home: User home directory. Defaults to ``Path.home()``.

    Returns:
        AppPaths for this process. ``DAY_TALLY_HOME`` overrides the data dir.

    Raises:
        ConfigurationError: If the override points at an existing file.
    """
    home = home or Path.home()

    override = os.environ.get(HOME_ENV_VAR)
    if override:
        data_dir = Path(override).expanduser()
        if data_dir.exists() and not data_dir.is_dir():
            raise ConfigurationError(
                f"{HOME_ENV_VAR} is not a directory", {"path": str(data_dir)}
            )
    else:
        data_dir = home / STORAGE.DATA_DIR_NAME

    return AppPaths(
        data_dir=data_dir,
        backup_dir=home / BACKUP.DOCUMENTS_DIR_NAME / BACKUP.BACKUP_DIR_NAME,
        downloads_dir=home / BACKUP.DOWNLOADS_DIR_NAME,
    )
