"""Inter-process locks that keep a command from running twice at once."""

import fcntl
import logging
import os
import pathlib
import re
from gettext import gettext as _

from cmdchain import settings

logger = logging.getLogger(__name__)


def lock_id(name: str, env: str | None = None) -> str:
    """Get the lock identifier of a command, namespaced by environment."""
    return f"{name}:{env}" if name and env else name


class CommandLock:
    """
    A file lock identified by a command name (and optional environment).

    Acquisition is non-blocking unless `blocking` is set, and `force`
    bypasses the lock entirely.
    """

    def __init__(
        self,
        name: str,
        env: str | None = None,
        *,
        blocking: bool = False,
        force: bool = False,
        lock_dir: pathlib.Path | None = None,
    ):
        self.name = lock_id(name, env)
        self.blocking = blocking
        self.force = force
        self.lock_dir = pathlib.Path(lock_dir or settings.LOCK_DIR)
        self._fd: int | None = None

    @property
    def path(self) -> pathlib.Path:
        """Get the path of the lock file."""
        safe_name = re.sub(r"[^A-Za-z0-9_.-]", "_", self.name)
        return self.lock_dir / f"{safe_name}.lock"

    @property
    def locked(self) -> bool:
        """Return True if this instance holds the lock."""
        return self._fd is not None

    def acquire(self) -> bool:
        """
        Try to take the lock.

        Returns False when another process holds it and this lock is not
        blocking. Forced locks always succeed without touching the file.
        """
        if self.force:
            logger.debug(_("Lock %(name)s bypassed by force."), {"name": self.name})
            return True
        if self.locked:
            return True

        self.lock_dir.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o600)
        flags = fcntl.LOCK_EX if self.blocking else fcntl.LOCK_EX | fcntl.LOCK_NB
        try:
            fcntl.flock(fd, flags)
        except BlockingIOError:
            os.close(fd)
            logger.warning(
                _("The command %(name)s is already running in another process."),
                {"name": self.name},
            )
            return False
        self._fd = fd
        logger.debug(_("Lock %(name)s acquired."), {"name": self.name})
        return True

    def release(self):
        """Release the lock. Does nothing if it is not held."""
        if self._fd is None:
            return
        try:
            fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None
        logger.debug(_("Lock %(name)s released."), {"name": self.name})

    def __enter__(self) -> bool:
        return self.acquire()

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()
