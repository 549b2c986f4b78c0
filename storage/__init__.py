"""Data persistence components."""

from .backup import BackupEnvelope, export_filename, read_envelope, write_envelope
from .local_storage import LocalStorage
from .mirror import PersistenceMirror

__all__ = [
    "BackupEnvelope",
    "LocalStorage",
    "export_filename",
    "PersistenceMirror",
    "read_envelope",
    "write_envelope",
]
