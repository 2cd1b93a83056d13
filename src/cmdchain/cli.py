"""Main command-line entrypoint."""

import argparse
import importlib
import logging
import pkgutil
import sys
from gettext import gettext as _
from types import ModuleType

from . import application, config, settings, shell_utils
from .chained_command import ChainedCommand
from .exit_codes import ExitCode

logger = logging.getLogger(__name__)

GLOBAL_ARG_NAMES = ("verbosity", "quiet", "yes", "dry_run", "config")


def load_commands() -> dict[str, ModuleType]:
    """Dynamically load command modules."""
    commands = {}
    for __, module_name, __ in pkgutil.iter_modules([settings.COMMANDS_PACKAGE_PATH]):
        module = importlib.import_module(f"cmdchain.commands.{module_name}")
        if not getattr(module, "NOT_A_COMMAND", False):
            commands[module_name] = module
    return commands


def load_chains(
    config_path: str | None, reserved_names=()
) -> dict[str, ChainedCommand]:
    """Build the chained commands defined in the configuration file."""
    chains = {}
    for name, definition in config.load_config(config_path).items():
        if name in reserved_names:
            logger.warning(
                _("Ignoring chained command '%(name)s': the name is reserved."),
                {"name": name},
            )
            continue
        chains[name] = ChainedCommand.from_definition(name, definition)
    return chains


def add_global_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the arguments shared by every command."""
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        dest="verbosity",
        default=0,
        help=_("Increase verbose output (shows shell commands before running)"),
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        dest="quiet",
        default=False,
        help=_("Quiet output (overrides `-v`/`--verbose`)"),
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        dest="yes",
        default=False,
        help=_("Answer yes to all confirmation prompts"),
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        default=False,
        help=_("Show what would run without running shell commands"),
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="config",
        default=None,
        help=_("Path to the chained commands configuration file (default: %s)")
        % settings.DEFAULT_CONFIG_PATH,
    )


def create_parser(
    commands: dict[str, ModuleType], chains: dict[str, ChainedCommand] | None = None
) -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(prog=settings.PROGRAM_NAME)
    add_global_arguments(parser)

    subparsers = parser.add_subparsers(dest="command")
    all_commands = {**(chains or {}), **commands}
    for command_name in sorted(all_commands):
        command = all_commands[command_name]
        description = (
            command.get_description() if hasattr(command, "get_description") else None
        )
        command_parser = subparsers.add_parser(
            command_name, help=command.get_help(), description=description
        )
        if hasattr(command, "setup_parser"):
            command.setup_parser(command_parser)

    return parser


def configure_logging(verbosity: int = 0, quiet: bool = False) -> int:
    """
    Configure the base logger.

    Returns the calculated level used to configure the logging module.
    """
    log_level = (
        logging.CRITICAL
        if quiet
        else max(logging.DEBUG, settings.DEFAULT_LOG_LEVEL - (verbosity * 10))
    )
    log_format = (
        "%(asctime)s %(levelname)s: %(message)s"
        if verbosity > 2  # noqa: PLR2004
        else "%(levelname)s: %(message)s"
    )
    logging.basicConfig(
        format=log_format,
        level=log_level,
        encoding="utf-8",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return log_level


def run():  # noqa: C901
    """Run the program with arguments from the CLI."""
    commands = load_commands()

    # The config path decides which chained commands exist, so read it first.
    pre_parser = argparse.ArgumentParser(prog=settings.PROGRAM_NAME, add_help=False)
    add_global_arguments(pre_parser)
    pre_args, __ = pre_parser.parse_known_args()
    configure_logging(pre_args.verbosity, pre_args.quiet)

    try:
        chains = load_chains(pre_args.config, reserved_names=commands.keys())
    except config.ChainConfigError as e:
        logger.error(e)
        sys.exit(1)

    parser = create_parser(commands, chains)
    args = parser.parse_args()
    settings.runtime.update(
        quiet=args.quiet,
        yes=args.yes,
        verbose=args.verbosity > 0 and not args.quiet,
        dry_run=args.dry_run,
    )

    if not args.command:
        parser.print_help()
        return

    app = application.Application(
        commands,
        chains,
        global_args=argparse.Namespace(
            **{name: getattr(args, name) for name in GLOBAL_ARG_NAMES}
        ),
        output=sys.stdout,
    )
    try:
        exit_code = app.run(args.command, args)
        if exit_code != ExitCode.SUCCESS:
            sys.exit(exit_code)
    except SystemExit:
        raise
    except KeyboardInterrupt:  # can occur via control-c input
        print()  # new line for cleaner output before logger
        logger.error(_("Exiting due to keyboard interrupt."))
        sys.exit(ExitCode.SIGINT)
    except EOFError:  # can occur via control-d input
        print()  # new line for cleaner output before logger
        logger.error(_("Input closed unexpectedly."))
        sys.exit(1)
    except shell_utils.ExecutionError as e:
        logger.error(e)
        sys.exit(e.returncode)
    except application.CommandNotFoundError as e:
        logger.error(e)
        sys.exit(ExitCode.COMMAND_NOT_FOUND)
    except Exception as e:  # noqa: BLE001
        print()  # new line for cleaner output before logger
        logger.exception(e)
        sys.exit(1)


if __name__ == "__main__":
    run()
