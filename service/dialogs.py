"""Native macOS file dialogs driven through ``osascript``.

Usage:
    dialogs = FileDialogs()
    path = dialogs.choose_save_path("day-tally-backup-2024-01-15.json")
    if path is None:
        ...  # user cancelled
"""
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from config import BACKUP, get_logger
from config.exceptions import HostBridgeError

logger = get_logger(__name__)

# AppleScript error number for "User canceled."
USER_CANCELED = "-128"

JSON_FILE_TYPES = ("public.json",)


def _quote(text: str) -> str:
    """Quote ``text`` as an AppleScript string literal."""
    return '"' + text.replace('\\', '\\\\').replace('"', '\\"') + '"'


class FileDialogs:
    """Save/open panels shown by System Events.

    Attributes:
        timeout: Seconds to wait for the user before giving up.
    """

    def __init__(self, timeout: float = BACKUP.DIALOG_TIMEOUT_SECONDS):
        self.timeout = timeout

    def _run(self, script: str) -> Optional[str]:
        """Run ``script`` and return its output, or None if the user cancelled.

        Raises:
            HostBridgeError: If the dialog could not be shown.
        """
        command = ['osascript', '-e', script]
        try:
            result = subprocess.run(
                command, capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            raise HostBridgeError("File dialog timed out", command=command)
        except OSError as e:
            raise HostBridgeError(f"Could not run osascript: {e}", command=command)

        if result.returncode != 0:
            if USER_CANCELED in (result.stderr or ""):
                logger.debug("File dialog cancelled")
                return None
            raise HostBridgeError(
                "File dialog failed",
                command=command,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        output = result.stdout.strip()
        return output or None

    def choose_save_path(self, default_name: str, prompt: str = "Export calendar data") -> Optional[Path]:
        """Ask for a destination file. None means the user cancelled."""
        script = (
            'tell application "System Events" to return POSIX path of '
            f'(choose file name with prompt {_quote(prompt)} '
            f'default name {_quote(default_name)} '
            'default location (path to documents folder))'
        )
        output = self._run(script)
        return Path(output) if output else None

    def choose_open_path(
        self,
        file_types: Optional[Sequence[str]] = JSON_FILE_TYPES,
        prompt: str = "Import calendar data",
    ) -> Optional[Path]:
        """Ask for a source file.

        Args:
            file_types: Uniform type identifiers to accept; None allows all files.
            prompt: Text shown in the panel.
        """
        type_clause = ""
        if file_types:
            type_clause = " of type {" + ", ".join(_quote(t) for t in file_types) + "}"
        script = (
            'tell application "System Events" to return POSIX path of '
            f'(choose file with prompt {_quote(prompt)}{type_clause})'
        )
        output = self._run(script)
        return Path(output) if output else None
