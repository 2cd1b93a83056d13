"""Resolve command names to runnable commands."""

import argparse
import logging
import sys
from collections.abc import Mapping
from gettext import gettext as _
from types import ModuleType
from typing import Any, TextIO

from cmdchain import argparse_utils, settings
from cmdchain.chained_command import ChainedCommand
from cmdchain.exit_codes import ExitCode

logger = logging.getLogger(__name__)

Command = ModuleType | ChainedCommand


class CommandNotFoundError(Exception):
    """Exception raised when no command is registered under a name."""


class Application:
    """
    The set of commands the CLI knows about.

    Built-in commands are modules from the `cmdchain.commands` package
    (returning True on success); chained commands come from configuration
    (returning an exit code). `dispatch` runs either kind by name and is
    what chained commands use to run their named chain entries.
    """

    def __init__(
        self,
        commands: Mapping[str, ModuleType] | None = None,
        chains: Mapping[str, ChainedCommand] | None = None,
        *,
        global_args: argparse.Namespace | None = None,
        output: TextIO | None = None,
    ):
        self.commands = dict(commands or {})
        self.chains = dict(chains or {})
        self.global_args = global_args or argparse.Namespace(
            verbosity=0, quiet=False, yes=False, dry_run=False, config=None
        )
        self.output = output or sys.stdout

    @property
    def names(self) -> list[str]:
        """Get the names of all registered commands."""
        return sorted(self.commands.keys() | self.chains.keys())

    def find(self, name: str) -> Command:
        """Get a command by name."""
        if name in self.commands:
            return self.commands[name]
        if name in self.chains:
            return self.chains[name]
        raise CommandNotFoundError(
            _("Command '%(name)s' is not defined.") % {"name": name}
        )

    def create_command_parser(self, name: str) -> argparse.ArgumentParser:
        """Create a standalone parser for one command's arguments."""
        command = self.find(name)
        parser = argparse_utils.RaisingArgumentParser(
            prog=f"{settings.PROGRAM_NAME} {name}", add_help=False
        )
        if hasattr(command, "setup_parser"):
            command.setup_parser(parser)
        return parser

    def parse_args(
        self, name: str, args: Mapping[str, Any] | None = None
    ) -> argparse.Namespace:
        """Build the namespace a command receives from an argument mapping."""
        namespace = argparse.Namespace(**vars(self.global_args))
        namespace.command = name
        parser = self.create_command_parser(name)
        return parser.parse_args(argparse_utils.mapping_to_argv(args), namespace)

    def run(self, name: str, args: argparse.Namespace) -> int:
        """Run a command with already parsed arguments."""
        command = self.find(name)
        if isinstance(command, ChainedCommand):
            return command.execute(args, self.output, self)
        return ExitCode.SUCCESS if command.run(args) else ExitCode.FAILURE

    def dispatch(self, name: str, args: Mapping[str, Any] | None = None) -> int:
        """
        Run a command by name with an argument mapping.

        Raises:
            CommandNotFoundError: if no command has that name.
        """
        self.find(name)
        try:
            namespace = self.parse_args(name, args)
        except argparse.ArgumentError as error:
            logger.error(
                _("Invalid arguments for command '%(name)s': %(error)s"),
                {"name": name, "error": error},
            )
            return ExitCode.INVALID
        logger.debug(_("Running command '%(name)s'."), {"name": name})
        return self.run(name, namespace)
