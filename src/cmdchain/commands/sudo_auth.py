"""Authenticate with sudo once so later commands reuse the credentials."""

import argparse
import logging
from gettext import gettext as _

from cmdchain import settings, sudo_utils
from cmdchain.options import CommandOptions

logger = logging.getLogger(__name__)


def get_help() -> str:
    """Get the help/docstring for this command."""
    return _("Authenticate with sudo and cache the credentials.")


def setup_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments to this command's argparse subparser."""
    parser.add_argument(
        "-s",
        "--silent",
        action="store_true",
        default=False,
        help=_("Hide the output of sudo"),
    )


def run(args: argparse.Namespace) -> bool:
    """Authenticate with sudo."""
    if settings.runtime.dry_run:
        logger.info(_("Dry run, skipping sudo authentication."))
        return True
    try:
        sudo_utils.authenticate(
            CommandOptions.elevated(),
            silent=args.silent,
            verbose=settings.runtime.verbose,
        )
    except sudo_utils.SudoError as error:
        logger.error(error)
        return False
    return True
