"""Sudo authentication and credential keep-alive."""

import logging
import shutil
import subprocess
from gettext import gettext as _

from cmdchain import settings, shell_utils
from cmdchain.exit_codes import ExitCode
from cmdchain.options import CommandOptions

logger = logging.getLogger(__name__)


class SudoError(Exception):
    """Exception raised when sudo is missing or authentication fails."""


def authenticate(
    options: CommandOptions | None = None,
    *,
    silent: bool = False,
    verbose: bool = False,
) -> int:
    """
    Prompt for the sudo password once so later commands reuse the credentials.

    Does nothing when the options do not ask for sudo.

    Raises:
        SudoError: if sudo is not installed or authentication failed.
    """
    options = CommandOptions.resolve(options)
    if not options.sudo:
        if verbose:
            logger.info(_("[!] sudo is not required here."))
        return ExitCode.SUCCESS

    if not shutil.which("sudo"):
        raise SudoError(_("sudo command not found on this system."))

    if verbose:
        logger.info(_("[*] Starting sudo authentication."))
    try:
        shell_utils.system("sudo -v", silent=silent, verbose=verbose)
    except shell_utils.ExecutionError as error:
        raise SudoError(_("Sudo authentication failed or was cancelled.")) from error
    if verbose:
        logger.info(_("[+] Sudo authentication succeeded."))
    return ExitCode.SUCCESS


def start_keep_alive(
    interval: int = settings.SUDO_KEEP_ALIVE_INTERVAL,
) -> subprocess.Popen:
    """
    Start a background process that refreshes sudo credentials periodically.

    The caller owns the returned handle and must pass it to `stop_keep_alive`.
    """
    script = f"while true; do sudo -n -v; sleep {int(interval)}; done"
    handle = subprocess.Popen(  # noqa: S603
        ["sh", "-c", script],  # noqa: S607
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
    logger.debug(
        _("Background sudo keep-alive process %(pid)s started."), {"pid": handle.pid}
    )
    return handle


def stop_keep_alive(handle: subprocess.Popen | None, timeout: float = 5) -> bool:
    """Stop a keep-alive process. Return True if it is no longer running."""
    if handle is None:
        logger.debug(_("No sudo keep-alive process to stop."))
        return False
    if handle.poll() is not None:
        return True
    handle.terminate()
    try:
        handle.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning(
            _("Sudo keep-alive process %(pid)s did not stop, killing it."),
            {"pid": handle.pid},
        )
        handle.kill()
        handle.wait()
    logger.debug(
        _("Sudo keep-alive process %(pid)s stopped."), {"pid": handle.pid}
    )
    return True
