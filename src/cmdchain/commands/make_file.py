"""Write a file, creating its directory if needed."""

import argparse
import logging
from gettext import gettext as _

from cmdchain import file_utils, settings
from cmdchain.options import CommandOptions

logger = logging.getLogger(__name__)


def get_help() -> str:
    """Get the help/docstring for this command."""
    return _("Write content to a file, creating its directory if needed.")


def setup_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments to this command's argparse subparser."""
    parser.add_argument("path", help=_("File to write"))
    parser.add_argument(
        "--content",
        default="",
        help=_("Text to write (default: empty file)"),
    )
    parser.add_argument(
        "--sudo",
        action="store_true",
        default=False,
        help=_("Write the file with sudo"),
    )
    parser.add_argument(
        "--owner",
        default=None,
        help=_("User to write the file as (with --sudo)"),
    )


def run(args: argparse.Namespace) -> bool:
    """Write the file."""
    try:
        file_utils.make_file(
            args.path,
            args.content,
            CommandOptions(sudo=args.sudo, owner=args.owner),
            verbose=settings.runtime.verbose,
            dry_run=settings.runtime.dry_run,
        )
    except file_utils.FileCommandError as error:
        logger.error(error)
        return False
    if not args.quiet:
        print(_("Wrote %(path)s.") % {"path": args.path})
    return True
