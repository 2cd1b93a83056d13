"""Run a shell command with one of the execution strategies."""

import argparse
import logging
import sys
import textwrap
from gettext import gettext as _

from cmdchain import argparse_utils, settings, shell_utils
from cmdchain.options import CommandOptions

logger = logging.getLogger(__name__)

MODES = ("system", "exec", "proc")


def get_help() -> str:
    """Get the help/docstring for this command."""
    return _("Run a shell command.")


def get_description() -> str:
    """Get the longer description of this command."""
    return _(
        textwrap.dedent(
            """
            Run a shell command line. The `system` mode (default) streams the
            output to the console and fails on a non-zero exit status. The
            `exec` mode prints the captured output and fails when there is
            none. The `proc` mode captures stdout and stderr separately and
            reports the exit status without failing early.
            """
        )
    )


def setup_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments to this command's argparse subparser."""
    parser.add_argument(
        "shell_command",
        metavar="COMMAND",
        nargs="+",
        help=_("Command line to run (use `--` before it if it has options)"),
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=MODES,
        default="system",
        help=_("Execution strategy (default: %(default)s)"),
    )
    parser.add_argument(
        "--sudo",
        action="store_true",
        default=False,
        help=_("Prefix the command with sudo"),
    )
    parser.add_argument(
        "--owner",
        default=None,
        help=_("User to run the command as (with --sudo)"),
    )
    parser.add_argument(
        "-s",
        "--silent",
        action="store_true",
        default=False,
        help=_("Hide the command output (system mode) or merge stderr (exec mode)"),
    )
    parser.add_argument(
        "--pipe-before",
        default=None,
        help=_("Command whose output is piped into COMMAND"),
    )
    parser.add_argument(
        "--pipe-after",
        default=None,
        help=_("Command COMMAND's output is piped into"),
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=argparse_utils.non_negative_integer,
        default=None,
        help=_("Seconds to wait for the command (default: no limit)"),
    )


def run(args: argparse.Namespace) -> bool:
    """Run the shell command."""
    command = " ".join(args.shell_command)
    options = CommandOptions(sudo=args.sudo, owner=args.owner)
    common = {
        "options": options,
        "verbose": settings.runtime.verbose,
        "pipe_before": args.pipe_before,
        "pipe_after": args.pipe_after,
        "timeout": args.timeout or None,
    }

    if args.mode == "exec":
        try:
            output = shell_utils.exec_output(
                command,
                silent=args.silent,
                dry_run=settings.runtime.dry_run,
                **common,
            )
        except shell_utils.ExecutionError as error:
            logger.error(error)
            return False
        print(output)
        return True

    if args.mode == "proc":
        result = shell_utils.proc(command, dry_run=settings.runtime.dry_run, **common)
        if result.output:
            print(result.output)
        if result.error:
            print(result.error, file=sys.stderr)
        if not result.succeeded:
            logger.error(
                _("The command exited with status %(status)s."),
                {"status": result.status},
            )
        return result.succeeded

    try:
        shell_utils.system(
            command,
            silent=args.silent,
            dry_run=settings.runtime.dry_run,
            **common,
        )
    except shell_utils.ExecutionError as error:
        logger.error(error)
        return False
    return True
