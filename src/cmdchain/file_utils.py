"""Create and delete files through the shell, with optional sudo."""

import logging
import pathlib
from gettext import gettext as _

from cmdchain import shell_utils
from cmdchain.command_builder import quote
from cmdchain.exit_codes import ExitCode
from cmdchain.options import CommandOptions

logger = logging.getLogger(__name__)


class FileCommandError(Exception):
    """Exception raised when a file could not be created or deleted."""


def delete_file(  # noqa: PLR0913
    file_path: str | pathlib.Path,
    options: CommandOptions | None = None,
    *,
    verbose: bool = False,
    assertable: bool = False,
    sudo: bool = False,
    dry_run: bool = False,
) -> int:
    """
    Delete a file with `rm -f`.

    With `assertable`, the file must exist beforehand and a failure raises
    FileCommandError instead of ExecutionError.
    """
    if assertable and not pathlib.Path(file_path).is_file():
        raise FileCommandError(
            _("The file %(file_path)s does not exist.") % {"file_path": file_path}
        )
    try:
        shell_utils.system(
            f"rm -f {quote(file_path)}",
            options=options,
            silent=True,
            verbose=verbose,
            sudo=sudo,
            dry_run=dry_run,
        )
    except shell_utils.ExecutionError as error:
        if not assertable:
            raise
        raise FileCommandError(
            _("Failed to delete the file %(file_path)s.") % {"file_path": file_path}
        ) from error
    return ExitCode.SUCCESS


def make_file(  # noqa: PLR0913
    file_path: str | pathlib.Path | None,
    content: str | None = "",
    options: CommandOptions | None = None,
    *,
    verbose: bool = False,
    sudo: bool = False,
    dry_run: bool = False,
) -> int:
    """
    Write content to a file, creating its parent directory when missing.

    The content is piped from printf into tee so the write can run with sudo.
    """
    if not file_path:
        raise FileCommandError(_("Failed to write an empty or null file path."))

    directory = pathlib.Path(file_path).parent
    if not directory.is_dir():
        logger.debug(
            _("Creating directory %(directory)s."), {"directory": directory}
        )
        try:
            shell_utils.system(
                f"mkdir -p {quote(directory)}",
                options=options,
                silent=True,
                verbose=verbose,
                sudo=sudo,
                dry_run=dry_run,
            )
        except shell_utils.ExecutionError as error:
            raise FileCommandError(
                _("Failed to create directory %(directory)s.")
                % {"directory": directory}
            ) from error

    try:
        shell_utils.system(
            f"tee {quote(file_path)}",
            options=options,
            silent=True,
            verbose=verbose,
            pipe_before=f"printf '%s' {quote(content or '')}",
            sudo=sudo,
            dry_run=dry_run,
        )
    except shell_utils.ExecutionError as error:
        raise FileCommandError(
            _("Failed to write the file %(file_path)s.") % {"file_path": file_path}
        ) from error
    return ExitCode.SUCCESS
