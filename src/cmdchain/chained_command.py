"""Commands built from before, run, and after chains."""

import argparse
import logging
import sys
import time
from collections.abc import Mapping
from gettext import gettext as _
from typing import Any, TextIO

from cmdchain import lock_utils, settings, shell_utils, sudo_utils
from cmdchain.chain import ConfigurationError, Dispatcher, StepFunction
from cmdchain.exit_codes import ExitCode
from cmdchain.options import CommandOptions
from cmdchain.orchestrator import PhaseOrchestrator

logger = logging.getLogger(__name__)


def shell_step(entry: Mapping[str, Any]) -> StepFunction:
    """
    Turn a `{"shell": ...}` chain entry into a chain function.

    The function runs the command with the owning command's options and
    returns the exit code instead of raising when the command fails.
    """
    command = entry["shell"]
    if not command or not isinstance(command, str | list):
        raise ConfigurationError(
            _("A shell chain entry needs a command line. Got: %r") % (command,)
        )
    silent = bool(entry.get("silent", False))
    sudo = bool(entry.get("sudo", False))

    def run_shell_step(args, output, owner) -> int:
        options = owner.resolve_options(args) if owner is not None else None
        try:
            return shell_utils.system(
                command,
                options=options,
                silent=silent,
                sudo=sudo,
                verbose=settings.runtime.verbose,
                dry_run=settings.runtime.dry_run,
            )
        except shell_utils.ExecutionError as error:
            logger.error(error)
            return error.returncode

    return run_shell_step


class ChainedCommand:
    """A named command whose work is its before, run, and after chains."""

    def __init__(  # noqa: PLR0913
        self,
        name: str,
        orchestrator: PhaseOrchestrator | None = None,
        *,
        options: CommandOptions | None = None,
        help: str | None = None,  # noqa: A002
        description: str | None = None,
        lock: bool = False,
        keep_sudo_alive: bool = False,
    ):
        self.name = name
        self.orchestrator = orchestrator or PhaseOrchestrator()
        self.options = options or CommandOptions()
        self.help = help
        self.description = description
        self.lock = lock
        self.keep_sudo_alive = keep_sudo_alive

    @classmethod
    def from_definition(
        cls, name: str, definition: Mapping[str, Any]
    ) -> "ChainedCommand":
        """Build a command from its configuration definition."""
        return cls(
            name,
            PhaseOrchestrator.from_init(definition, shell_step_factory=shell_step),
            options=CommandOptions.create(definition.get("options")),
            help=definition.get("help"),
            description=definition.get("description"),
            lock=bool(definition.get("lock", False)),
            keep_sudo_alive=bool(definition.get("keep_sudo_alive", False)),
        )

    def get_help(self) -> str:
        """Get the help text of this command."""
        return self.help or _("Run the '%(name)s' command chain.") % {
            "name": self.name
        }

    def get_description(self) -> str | None:
        """Get the longer description of this command."""
        return self.description

    def setup_parser(self, parser: argparse.ArgumentParser) -> None:
        """Add the standard chained command arguments to a parser."""
        parser.add_argument(
            "--clear",
            action="store_true",
            default=False,
            help=_("Clear the terminal before running"),
        )
        parser.add_argument(
            "--force",
            action="store_true",
            default=False,
            help=_("Run even if another process is running this command"),
        )
        parser.add_argument(
            "--wait",
            action="store_true",
            default=False,
            help=_("Wait for another process running this command to finish"),
        )
        parser.add_argument(
            "--env",
            default=None,
            help=_("Environment name used to namespace the command lock"),
        )
        parser.add_argument(
            "--sudo",
            action="store_true",
            default=None,
            help=_("Run shell commands with sudo"),
        )
        parser.add_argument(
            "--owner",
            default=None,
            help=_("User to run shell commands as (with --sudo)"),
        )

    def resolve_options(self, args: Any = None) -> CommandOptions:
        """Get the options for this call: --sudo/--owner override the defaults."""
        sudo = getattr(args, "sudo", None)
        owner = getattr(args, "owner", None)
        override = None
        if sudo or owner:
            override = self.options.replace(
                sudo=bool(sudo) or self.options.sudo,
                owner=owner or self.options.owner,
            )
        return CommandOptions.resolve(self.options, override)

    def execute(
        self,
        args: Any,
        output: TextIO | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> int:
        """Run the command lifecycle and return its exit code."""
        output = output or sys.stdout
        options = self.resolve_options(args)
        if getattr(args, "clear", False) or options.clear:
            shell_utils.clear_console()

        command_lock = None
        if self.lock:
            command_lock = lock_utils.CommandLock(
                self.name,
                getattr(args, "env", None),
                blocking=bool(getattr(args, "wait", False)),
                force=bool(getattr(args, "force", False)),
            )
            if not command_lock.acquire():
                logger.warning(
                    _("Skipping %(name)s because it is already running."),
                    {"name": self.name},
                )
                return ExitCode.SUCCESS

        keep_alive = None
        started = time.monotonic()
        logger.info(_("Starting %(name)s."), {"name": self.name})
        try:
            if (
                self.keep_sudo_alive
                and options.sudo
                and not settings.runtime.dry_run
            ):
                sudo_utils.authenticate(options, verbose=settings.runtime.verbose)
                keep_alive = sudo_utils.start_keep_alive()
            code = self.orchestrator.execute(args, output, self, dispatcher)
        finally:
            if keep_alive is not None:
                sudo_utils.stop_keep_alive(keep_alive)
            if command_lock is not None:
                command_lock.release()

        logger.info(
            _("Finished %(name)s with exit code %(exit_code)s in %(elapsed).2f s."),
            {
                "name": self.name,
                "exit_code": code,
                "elapsed": time.monotonic() - started,
            },
        )
        return code
