"""Exceptions raised by Day Tally.

Everything derives from ``DayTallyError`` so the menu bar layer can catch
one type and show the message to the user.
"""

from typing import Optional


class DayTallyError(Exception):
    """Root of the Day Tally exceptions.

    Attributes:
        message: Text suitable for a notification.
        details: Extra context for the log (paths, exit codes, ...).
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} (details: {self.details})"


class StorageError(DayTallyError):
    """The local database or a backup/export file could not be read or written.

        >>> raise StorageError("Failed to write backup", {"path": str(backup_file)})
    """


class InvalidBackupError(DayTallyError):
    """File is not JSON, or its ``data`` field is missing or not an object."""


class InvalidDayKeyError(DayTallyError):
    """Key not of the form ``{year}-{month}-{day}``."""


class HostBridgeError(DayTallyError):
    """A native dialog (osascript) failed or timed out.

    Only the program name of ``command`` and the first 500 characters of
    ``stderr`` go into ``details``.
    """

    def __init__(
        self,
        message: str,
        command: Optional[list] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        context = dict(details or {})
        if command:
            context["command"] = command[0]
        if returncode is not None:
            context["returncode"] = returncode
        if stderr:
            context["stderr"] = stderr[:500]
        super().__init__(message, context)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class ConfigurationError(DayTallyError):
    """Unusable data directory override."""
