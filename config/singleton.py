"""Singleton lock for ensuring a single Day Tally instance.

Two menu bar instances would each hold their own copy of the calendar and
overwrite each other's local storage, so a new launch takes over from the
running one. The lock uses fcntl and is released by the OS when the process
exits, even on crash.

Usage:
    from config.singleton import SingletonLock

    lock = SingletonLock(paths.data_dir)
    if not lock.acquire():
        lock.kill_existing()
        lock.acquire()
"""
import fcntl
import os
import signal
import time
from pathlib import Path
from typing import IO, Optional

from config.logging_config import get_logger

logger = get_logger(__name__)


class SingletonLock:
    """Ensures only one instance of the application runs at a time.

    Attributes:
        lock_file: Path of the flock'ed file.
        pid_file: Path holding the owner's PID.
    """

    def __init__(self, lock_dir: Path, lock_name: str = "day-tally"):
        self.lock_file = Path(lock_dir) / f"{lock_name}.lock"
        self.pid_file = self.lock_file.with_suffix('.pid')
        self._lock_fd: Optional[IO] = None

    @property
    def held(self) -> bool:
        return self._lock_fd is not None

    def get_running_pid(self) -> Optional[int]:
        """PID of the running instance, None if there is none."""
        try:
            pid = int(self.pid_file.read_text().strip())
            os.kill(pid, 0)  # Signal 0 = existence check
            return pid
        except (ValueError, ProcessLookupError, PermissionError, OSError):
            return None

    def kill_existing(self, timeout: float = 3.0) -> bool:
        """Stop a running instance, escalating to SIGKILL after ``timeout``.

        Returns:
            True if nothing was running or the instance was stopped.
        """
        pid = self.get_running_pid()
        if pid is None or pid == os.getpid():
            return True

        logger.info(f"Taking over from running instance {pid}")
        try:
            # SIGTERM first so the other instance flushes its backup
            os.kill(pid, signal.SIGTERM)
            if not self._wait_for_exit(pid, timeout):
                logger.warning(f"Instance {pid} ignored SIGTERM, sending SIGKILL")
                os.kill(pid, signal.SIGKILL)
                self._wait_for_exit(pid, 0.5)
        except ProcessLookupError:
            pass
        except PermissionError:
            logger.error(f"Not allowed to stop instance {pid}")
            return False

        self._remove_pid()
        return True

    @staticmethod
    def _wait_for_exit(pid: int, timeout: float) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            try:
                os.kill(pid, 0)
            except ProcessLookupError:
                return True
            time.sleep(0.1)
        return False

    def acquire(self) -> bool:
        """Try to take the lock.

        Returns:
            True when this process is now the only instance.
        """
        if self.held:
            return True
        self.lock_file.parent.mkdir(parents=True, exist_ok=True)
        fd = open(self.lock_file, 'w')
        try:
            fcntl.flock(fd.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            fd.close()
            return False
        self._lock_fd = fd
        self._write_pid()
        logger.debug(f"Singleton lock acquired: {self.lock_file}")
        return True

    def release(self) -> None:
        """Release the lock; safe to call more than once."""
        if not self.held:
            return
        self._remove_pid()
        try:
            fcntl.flock(self._lock_fd.fileno(), fcntl.LOCK_UN)
        finally:
            self._lock_fd.close()
            self._lock_fd = None
        logger.debug("Singleton lock released")

    def _write_pid(self) -> None:
        try:
            self.pid_file.write_text(str(os.getpid()))
        except OSError as e:
            logger.warning(f"Could not write pid file: {e}")

    def _remove_pid(self) -> None:
        try:
            self.pid_file.unlink(missing_ok=True)
        except OSError as e:
            logger.debug(f"Could not remove pid file: {e}")
