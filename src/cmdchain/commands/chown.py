"""Change the owner and/or group of a path."""

import argparse
import logging
from gettext import gettext as _

from cmdchain import chown_utils, settings, shell_utils

logger = logging.getLogger(__name__)


def get_help() -> str:
    """Get the help/docstring for this command."""
    return _("Change the owner and/or group of a path.")


def setup_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments to this command's argparse subparser."""
    parser.add_argument("path", help=_("Path to change"))
    parser.add_argument("-o", "--owner", default=None, help=_("New owner"))
    parser.add_argument("-g", "--group", default=None, help=_("New group"))
    parser.add_argument(
        "-R",
        "--recursive",
        action="store_true",
        default=False,
        help=_("Operate on files and directories recursively"),
    )
    parser.add_argument(
        "--no-dereference",
        action="store_true",
        default=False,
        help=_("Affect symbolic links instead of the files they point to"),
    )
    parser.add_argument(
        "--from",
        dest="from_",
        default=None,
        metavar="CURRENT_OWNER:CURRENT_GROUP",
        help=_("Only change paths currently owned by this owner and/or group"),
    )
    parser.add_argument(
        "--reference",
        default=None,
        metavar="RFILE",
        help=_("Use the owner and group of RFILE"),
    )
    parser.add_argument(
        "--sudo",
        action="store_true",
        default=False,
        help=_("Run chown with sudo"),
    )


def run(args: argparse.Namespace) -> bool:
    """Change the ownership of the path."""
    options = chown_utils.ChownOptions(
        from_=args.from_,
        reference=args.reference,
        recursive=args.recursive,
        no_dereference=args.no_dereference,
        sudo=args.sudo,
    )
    try:
        chown_utils.chown(
            args.path,
            args.owner,
            args.group,
            options,
            verbose=settings.runtime.verbose,
            dry_run=settings.runtime.dry_run,
        )
    except chown_utils.ChownError as error:
        logger.error(error)
        return False
    except shell_utils.ExecutionError as error:
        logger.error(
            _("Could not change the ownership of %(path)s: %(error)s"),
            {"path": args.path, "error": error},
        )
        return False
    return True
