"""Centralized constants and configuration for Day Tally.

Usage:
    from config.constants import STORAGE, BACKUP, UI

    key = STORAGE.LOCAL_STORAGE_KEY
    version = BACKUP.VERSION
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class StorageConfig:
    """Storage and file-related configuration."""
    # Directory and file names
    DATA_DIR_NAME: str = ".day-tally"
    LOCAL_STORAGE_FILE: str = "local_storage.db"
    LOG_FILE: str = "day_tally.log"

    # Key under which the whole store lives in local storage
    LOCAL_STORAGE_KEY: str = "calendarValues"

    # Log rotation
    LOG_MAX_BYTES: int = 2_000_000  # 2MB
    LOG_BACKUP_COUNT: int = 3

    # Temp directories
    ICON_TEMP_DIR: str = "daytally-icons"
    CHART_TEMP_DIR: str = "daytally-charts"


@dataclass(frozen=True)
class BackupConfig:
    """Durable backup and export file configuration."""
    DOCUMENTS_DIR_NAME: str = "Documents"
    DOWNLOADS_DIR_NAME: str = "Downloads"
    BACKUP_DIR_NAME: str = "Day Tally Backups"
    BACKUP_FILE: str = "calendar_backup.json"

    VERSION: str = "1.0.0"
    EXPORT_DESCRIPTION: str = "Day Tally backup - calendar values"

    # strftime pattern, the date is the day of the export
    EXPORT_FILENAME_PATTERN: str = "day-tally-backup-%Y-%m-%d.json"

    # Seconds to wait for a pending backup write on shutdown
    SHUTDOWN_WAIT_SECONDS: float = 2.0

    # Seconds to wait for the user to answer a file dialog
    DIALOG_TIMEOUT_SECONDS: float = 600.0


@dataclass(frozen=True)
class UIConfig:
    """UI-related configuration."""
    APP_NAME: str = "Day Tally"

    MONTH_NAMES: Tuple[str, ...] = (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    )
    # Weeks start on Sunday
    WEEKDAY_NAMES: Tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

    # Icon sizes
    STATUS_ICON_SIZE: int = 18

    # Text truncation for day values shown in the menu
    MAX_VALUE_PREVIEW_LENGTH: int = 30


@dataclass(frozen=True)
class Colors:
    """Color definitions for UI elements.

    RGBA tuples (0-255) for PIL and hex strings for matplotlib.
    """
    HEADER_RGBA: Tuple[int, int, int, int] = (249, 115, 22, 255)    # orange
    PAGE_RGBA: Tuple[int, int, int, int] = (255, 255, 255, 255)
    TEXT_RGBA: Tuple[int, int, int, int] = (30, 41, 59, 255)        # slate
    OUTLINE_RGBA: Tuple[int, int, int, int] = (15, 118, 110, 255)   # teal

    BAR_HEX: str = "#0D9488"
    HIGHLIGHT_HEX: str = "#F97316"
    GRID_HEX: str = "#94A3B8"


# Global instances - import these
STORAGE = StorageConfig()
BACKUP = BackupConfig()
UI = UIConfig()
COLORS = Colors()
