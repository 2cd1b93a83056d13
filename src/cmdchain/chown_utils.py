"""Change file ownership through the shell."""

import logging
import pathlib
from dataclasses import dataclass
from gettext import gettext as _

from cmdchain import shell_utils
from cmdchain.command_builder import quote
from cmdchain.exit_codes import ExitCode

logger = logging.getLogger(__name__)

CHOWN_COMMAND = "chown"


class ChownError(Exception):
    """Exception raised for an incomplete chown request in strict mode."""


@dataclass(frozen=True)
class ChownOptions:
    """Default arguments of a chown operation."""

    path: str | None = None
    owner: str | None = None
    group: str | None = None
    from_: str | None = None  # only change if currently owned by "owner:group"
    reference: str | None = None  # copy ownership from this file
    recursive: bool = False
    no_dereference: bool = False
    verbose: bool = False
    sudo: bool = False

    @classmethod
    def create(cls, init: dict | None = None) -> "ChownOptions":
        """Build options from a mapping, accepting `from` for `from_`."""
        init = dict(init or {})
        if "from" in init:
            init["from_"] = init.pop("from")
        names = cls.__dataclass_fields__.keys()
        return cls(**{key: value for key, value in init.items() if key in names})

    def flags(self) -> list[str]:
        """Render the chown flags (not the owner, group, or path)."""
        flags = []
        if self.from_:
            flags.append(f"--from={quote(self.from_)}")
        if self.no_dereference:
            flags.append("--no-dereference")
        if self.recursive:
            flags.append("--recursive")
        if self.reference:
            flags.append(f"--reference={quote(self.reference)}")
        if self.verbose:
            flags.append("--verbose")
        return flags


def current_ownership(path: str) -> tuple[str | None, str | None]:
    """Get the owner and group names of a path, or None where unknown."""
    target = pathlib.Path(path)
    try:
        owner = target.owner()
    except (OSError, KeyError):
        owner = None
    try:
        group = target.group()
    except (OSError, KeyError):
        group = None
    return owner, group


def _incomplete(message: str, strict: bool) -> int:
    if strict:
        raise ChownError(message)
    logger.warning(message)
    return ExitCode.SUCCESS


def chown(  # noqa: PLR0913
    path: str | None = None,
    owner: str | None = None,
    group: str | None = None,
    options: ChownOptions | None = None,
    *,
    silent: bool = False,
    verbose: bool = False,
    strict: bool = True,
    sudo: bool | None = None,
    dry_run: bool = False,
) -> int:
    """
    Change the owner and/or group of a path.

    Succeeds without running anything when the path already has the
    requested ownership.

    Raises:
        ChownError: in strict mode, if the path or both owner and group
            are missing.
        shell_utils.ExecutionError: if chown fails.
    """
    options = options or ChownOptions()
    path = path if path is not None else options.path
    owner = owner if owner is not None else options.owner
    group = group if group is not None else options.group

    if not owner and not group:
        return _incomplete(
            _("You must provide at least an owner or a group for chown."), strict
        )
    if not path:
        return _incomplete(_("Missing `path` for chown operation."), strict)

    current_owner, current_group = current_ownership(path)
    needs_owner = bool(owner) and owner != current_owner
    needs_group = bool(group) and group != current_group
    if not needs_owner and not needs_group:
        logger.info(
            _(
                "Ownership of '%(path)s' already matches: %(owner)s:%(group)s. "
                "Skipping chown."
            ),
            {"path": path, "owner": current_owner, "group": current_group},
        )
        return ExitCode.SUCCESS

    who = ":".join(quote(part) for part in (owner, group) if part)
    if not owner:
        who = f":{who}"
    args = [*options.flags(), who, quote(path)]

    return shell_utils.system(
        CHOWN_COMMAND,
        args,
        silent=silent,
        verbose=verbose,
        sudo=options.sudo if sudo is None else sudo,
        dry_run=dry_run,
    )
