"""Utilities for interacting with user's shell and external programs."""

import dataclasses
import json
import logging
import os
import subprocess
from dataclasses import dataclass
from gettext import gettext as _

from cmdchain import command_builder, settings
from cmdchain.command_builder import Tokens
from cmdchain.exit_codes import ExitCode
from cmdchain.options import CommandOptions

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """Exception raised when a shell command exits with a non-zero status."""

    def __init__(self, returncode: int, command: str, message: str | None = None):
        self.returncode = returncode
        self.command = command
        if message is None:
            message = _(
                "The command `%(command)s` failed with exit code %(returncode)s."
            ) % {"command": command, "returncode": returncode}
        super().__init__(message)


class ProcessSpawnError(Exception):
    """Exception raised when a process could not be created at all."""


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of a command run with `proc`."""

    output: str | None = None
    error: str | None = None
    status: int | None = None

    @property
    def succeeded(self) -> bool:
        """Return True if the process exited cleanly."""
        return self.status == ExitCode.SUCCESS

    def to_dict(self) -> dict:
        """Get the result as a plain dict."""
        return dataclasses.asdict(self)

    def to_json(self, **kwargs) -> str:
        """Get the result as a JSON document."""
        return json.dumps(self.to_dict(), ensure_ascii=False, **kwargs)


def get_env(name: str) -> str | None:
    """Get the value of the specified environment variable."""
    if value := os.environ.get(name):
        logger.debug(_("Environment variable '%(name)s' found."), {"name": name})
        return value
    else:
        logger.debug(_("Environment variable '%(name)s' not found."), {"name": name})
        return None


def confirm(prompt: str | None = None) -> bool:
    """Present a typical [y/n] confirmation prompt."""
    if settings.runtime.yes:
        return True
    if settings.runtime.quiet:
        return False

    user_input = None
    if not prompt:
        prompt = _("Do you want to continue?")
    while user_input is None:
        prompt_with_yn = _("%(question)s [y/n] ") % {"question": prompt}
        user_input = input(prompt_with_yn).lower()
        if user_input == _("y"):
            return True
        elif user_input != _("n"):
            print(_("Please answer with 'y' or 'n'."))
            user_input = None
    return False


def _resolve_timeout(timeout: float | None) -> float | None:
    if timeout is None:
        return settings.DEFAULT_SUBPROCESS_WAIT_TIMEOUT
    return timeout


def render(
    strategy: str,
    command: Tokens,
    args: Tokens = None,
    *,
    options: CommandOptions | None = None,
    verbose: bool = False,
    pipe_before: str | None = None,
    pipe_after: str | None = None,
    sudo: bool = False,
) -> tuple[str, str]:
    """
    Render a command for one of the execution strategies.

    Returns the full command and the text safe to show in error messages:
    the full command when verbose, else only the base command.
    """
    if sudo:
        options = CommandOptions.elevated()
    full_command = command_builder.make_command(
        command, args, options, pipe_before, pipe_after
    )
    if verbose:
        logger.info(
            _("[▶] %(strategy)s: %(command)s"),
            {"strategy": strategy, "command": full_command},
        )
        return full_command, full_command
    base_command = command_builder.join_tokens(command)
    if not base_command and full_command:
        base_command = full_command.split()[0]
    return full_command, base_command


def _run_shell(
    full_command: str, *, timeout: float | None = None, **kwargs
) -> subprocess.CompletedProcess:
    timeout = _resolve_timeout(timeout)
    try:
        return subprocess.run(  # noqa: S602
            full_command,
            shell=True,
            text=True,
            check=False,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired as error:
        logger.error(
            _("Shell command timed out after %(timeout)s seconds."),
            {"timeout": timeout},
        )
        raise error


def exec_output(  # noqa: PLR0913
    command: Tokens,
    args: Tokens = None,
    *,
    options: CommandOptions | None = None,
    silent: bool = False,
    verbose: bool = False,
    pipe_before: str | None = None,
    pipe_after: str | None = None,
    sudo: bool = False,
    dry_run: bool = False,
    timeout: float | None = None,
) -> str:
    """
    Run a shell command and return its trimmed output.

    With `silent`, stderr is merged into the returned output instead of
    reaching the console. A dry run returns a placeholder without running anything.

    Raises:
        ExecutionError: if the command produced no output or exited non-zero.
    """
    full_command, shown = render(
        "exec",
        command,
        args,
        options=options,
        verbose=verbose,
        pipe_before=pipe_before,
        pipe_after=pipe_after,
        sudo=sudo,
    )
    if dry_run:
        logger.debug(_("Dry run, not executing: %(command)s"), {"command": shown})
        return settings.DRY_RUN_OUTPUT

    completed = _run_shell(
        full_command,
        timeout=timeout,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT if silent else None,
    )
    returncode = ExitCode.from_returncode(completed.returncode)
    output = (completed.stdout or "").strip()
    if returncode != ExitCode.SUCCESS:
        raise ExecutionError(returncode, shown)
    if not output:
        raise ExecutionError(
            returncode,
            shown,
            _("The command `%(command)s` returned no output.") % {"command": shown},
        )
    return output


def system(  # noqa: PLR0913
    command: Tokens,
    args: Tokens = None,
    *,
    options: CommandOptions | None = None,
    silent: bool = False,
    verbose: bool = False,
    pipe_before: str | None = None,
    pipe_after: str | None = None,
    sudo: bool = False,
    dry_run: bool = False,
    timeout: float | None = None,
) -> int:
    """
    Run a shell command, letting its output go straight to the console.

    Returns the exit status, which is always success because a non-zero
    status raises ExecutionError. A dry run returns success without running.
    """
    full_command, shown = render(
        "system",
        command,
        args,
        options=options,
        verbose=verbose,
        pipe_before=pipe_before,
        pipe_after=pipe_after,
        sudo=sudo,
    )
    if dry_run:
        logger.debug(_("Dry run, not executing: %(command)s"), {"command": shown})
        return ExitCode.SUCCESS

    if silent:
        full_command = command_builder.silent(full_command)
    completed = _run_shell(full_command, timeout=timeout)
    returncode = ExitCode.from_returncode(completed.returncode)
    if returncode != ExitCode.SUCCESS:
        logger.debug(
            _("Command %(command)s failed with exit code %(exit_code)s"),
            {"command": shown, "exit_code": returncode},
        )
        raise ExecutionError(returncode, shown)
    return returncode


def proc(  # noqa: PLR0913
    command: Tokens,
    args: Tokens = None,
    *,
    options: CommandOptions | None = None,
    verbose: bool = False,
    pipe_before: str | None = None,
    pipe_after: str | None = None,
    sudo: bool = False,
    dry_run: bool = False,
    timeout: float | None = None,
) -> ProcessResult:
    """
    Run a shell command capturing stdout, stderr, and the exit status.

    A non-zero status is reported in the result, never raised.

    Raises:
        ProcessSpawnError: if the process could not be started.
    """
    full_command, shown = render(
        "proc",
        command,
        args,
        options=options,
        verbose=verbose,
        pipe_before=pipe_before,
        pipe_after=pipe_after,
        sudo=sudo,
    )
    if dry_run:
        return ProcessResult(
            output=settings.DRY_RUN_OUTPUT, error="", status=int(ExitCode.SUCCESS)
        )

    try:
        process = subprocess.Popen(  # noqa: S602
            full_command,
            shell=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as error:
        raise ProcessSpawnError(
            _("Failed to execute the command `%(command)s`.") % {"command": shown}
        ) from error

    timeout = _resolve_timeout(timeout)
    try:
        stdout, stderr = process.communicate(timeout=timeout)
    except subprocess.TimeoutExpired as error:
        process.kill()
        process.communicate()
        logger.error(
            _("Command %(command)s timed out after %(timeout)s seconds."),
            {"command": shown, "timeout": timeout},
        )
        raise error

    return ProcessResult(
        output=(stdout or "").strip(),
        error=(stderr or "").strip(),
        status=int(ExitCode.from_returncode(process.returncode)),
    )


def clear_console(clear: bool = True) -> bool:
    """Clear the terminal. Return True if it was cleared."""
    if not clear:
        return False
    try:
        system("cls" if os.name == "nt" else "clear")
    except ExecutionError:
        logger.debug(_("Could not clear the terminal."))
        return False
    return True
