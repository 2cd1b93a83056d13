"""Delete a file."""

import argparse
import logging
from gettext import gettext as _

from cmdchain import file_utils, settings, shell_utils
from cmdchain.options import CommandOptions

logger = logging.getLogger(__name__)


def get_help() -> str:
    """Get the help/docstring for this command."""
    return _("Delete a file.")


def setup_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments to this command's argparse subparser."""
    parser.add_argument("path", help=_("File to delete"))
    parser.add_argument(
        "--must-exist",
        action="store_true",
        default=False,
        help=_("Fail if the file does not exist (default: ignore missing files)"),
    )
    parser.add_argument(
        "--sudo",
        action="store_true",
        default=False,
        help=_("Delete the file with sudo"),
    )


def run(args: argparse.Namespace) -> bool:
    """Delete the file after confirmation."""
    if not shell_utils.confirm(
        _("Are you sure you want to delete %(path)s?") % {"path": args.path}
    ):
        logger.info(_("Not deleting %(path)s."), {"path": args.path})
        return False
    try:
        file_utils.delete_file(
            args.path,
            CommandOptions(sudo=args.sudo),
            verbose=settings.runtime.verbose,
            assertable=args.must_exist,
            dry_run=settings.runtime.dry_run,
        )
    except (file_utils.FileCommandError, shell_utils.ExecutionError) as error:
        logger.error(error)
        return False
    return True
