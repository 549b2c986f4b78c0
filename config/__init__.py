"""Configuration module for Day Tally.

Provides centralized constants, paths, logging and exceptions.
"""
from config.constants import (
    BACKUP,
    COLORS,
    STORAGE,
    UI,
    BackupConfig,
    Colors,
    StorageConfig,
    UIConfig,
)
from config.exceptions import (
    ConfigurationError,
    DayTallyError,
    HostBridgeError,
    InvalidBackupError,
    InvalidDayKeyError,
    StorageError,
)
from config.logging_config import get_logger, setup_logging
from config.paths import AppPaths, resolve_paths

__all__ = [
    # Constants
    "STORAGE",
    "BACKUP",
    "UI",
    "COLORS",
    "StorageConfig",
    "BackupConfig",
    "UIConfig",
    "Colors",
    # Paths
    "AppPaths",
    "resolve_paths",
    # Exceptions
    "DayTallyError",
    "StorageError",
    "InvalidBackupError",
    "InvalidDayKeyError",
    "HostBridgeError",
    "ConfigurationError",
    # Logging
    "setup_logging",
    "get_logger",
]
