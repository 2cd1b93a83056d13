"""Run ordered chains of commands, stopping at the first failure."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from gettext import gettext as _
from types import MappingProxyType
from typing import Any, Protocol

from cmdchain.exit_codes import ExitCode, is_success

logger = logging.getLogger(__name__)

StepFunction = Callable[[Any, Any, Any], int | bool | None]
ShellStepFactory = Callable[[Mapping[str, Any]], StepFunction]


class ConfigurationError(Exception):
    """Exception raised for a chain entry that cannot be turned into a spec."""


class Dispatcher(Protocol):
    """Anything able to run a named command with arguments."""

    def dispatch(self, name: str, args: Mapping[str, Any]) -> int:
        """Run the named command and return its exit code."""


class SpecKind(Enum):
    """Discriminant of a CommandSpec."""

    CALLABLE = "callable"
    REFERENCE = "reference"


@dataclass(frozen=True)
class CommandSpec:
    """A single entry of a chain: an inline function or a named command."""

    kind: SpecKind
    function: StepFunction | None = None
    name: str | None = None
    args: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.kind is SpecKind.CALLABLE:
            if not callable(self.function) or self.name is not None:
                raise ConfigurationError(
                    _("A callable chain entry needs a function and no name.")
                )
        elif self.kind is SpecKind.REFERENCE:
            if self.function is not None:
                raise ConfigurationError(
                    _("A named chain entry cannot also have a function.")
                )
            if self.name is not None and not isinstance(self.name, str):
                raise ConfigurationError(
                    _("Chain entry name must be a string. Got: %r") % (self.name,)
                )
            if not isinstance(self.args, Mapping):
                raise ConfigurationError(
                    _("Chain entry args must be a mapping. Got: %r") % (self.args,)
                )
            # freeze a private copy so later changes to the init data do not leak in
            object.__setattr__(self, "args", MappingProxyType(dict(self.args)))
        else:
            raise ConfigurationError(_("Unknown chain entry kind: %r") % (self.kind,))

    @classmethod
    def from_callable(cls, function: StepFunction) -> "CommandSpec":
        """Build a spec for an inline function."""
        return cls(SpecKind.CALLABLE, function=function)

    @classmethod
    def from_reference(
        cls, name: str | None, args: Mapping[str, Any] | None = None
    ) -> "CommandSpec":
        """Build a spec for a named command."""
        return cls(SpecKind.REFERENCE, name=name, args=args or {})

    @classmethod
    def parse(
        cls, entry: Any, shell_step_factory: ShellStepFactory | None = None
    ) -> "CommandSpec":
        """
        Build a spec from initialization data.

        Accepted entries are a CommandSpec, a callable, a mapping with
        `name` (and optional `args`), or, when a factory is given, a mapping
        with a `shell` command line.
        """
        if isinstance(entry, CommandSpec):
            return entry
        if callable(entry):
            return cls.from_callable(entry)
        if isinstance(entry, Mapping):
            if "shell" in entry:
                if shell_step_factory is None:
                    raise ConfigurationError(
                        _("Shell chain entries are not supported here.")
                    )
                return cls.from_callable(shell_step_factory(entry))
            if "name" in entry:
                return cls.from_reference(entry["name"], entry.get("args") or {})
        raise ConfigurationError(_("Unrecognized chain entry: %r") % (entry,))

    @property
    def skipped(self) -> bool:
        """Return True for a named entry without a name, which never runs."""
        return self.kind is SpecKind.REFERENCE and not self.name


def parse_chain(
    entries: Iterable[Any] | None,
    shell_step_factory: ShellStepFactory | None = None,
) -> tuple[CommandSpec, ...]:
    """Build chain specs from initialization data, skipping malformed entries."""
    specs = []
    for index, entry in enumerate(entries or ()):
        try:
            specs.append(CommandSpec.parse(entry, shell_step_factory))
        except ConfigurationError as error:
            logger.warning(
                _("Skipping chain entry %(index)s: %(error)s"),
                {"index": index, "error": error},
            )
    return tuple(specs)


def _result_code(result: Any) -> int:
    """Interpret the value returned by a callable chain entry."""
    if isinstance(result, bool):
        return ExitCode.SUCCESS if result else ExitCode.FAILURE
    if isinstance(result, int):
        return result
    return ExitCode.SUCCESS


def _run_spec(
    spec: CommandSpec, args: Any, output: Any, owner: Any, dispatcher: Dispatcher
) -> int:
    if spec.kind is SpecKind.CALLABLE:
        return _result_code(spec.function(args, output, owner))
    logger.debug(_("Dispatching chained command '%(name)s'."), {"name": spec.name})
    return dispatcher.dispatch(spec.name, spec.args)


def run_chain(
    specs: Iterable[CommandSpec],
    args: Any,
    output: Any,
    owner: Any = None,
    dispatcher: Dispatcher | None = None,
) -> int:
    """
    Run chain entries in order and return the first non-success exit code.

    Entries after a failure are never started. Named entries need a
    dispatcher; without one the chain fails before anything runs. A chain
    holding only inline functions (or unnamed entries) runs without one.
    """
    specs = tuple(specs)
    if not specs:
        return ExitCode.SUCCESS

    if dispatcher is None and any(
        spec.kind is SpecKind.REFERENCE and not spec.skipped for spec in specs
    ):
        logger.error(
            _("Cannot run named chain entries: no command dispatcher is available.")
        )
        return ExitCode.FAILURE

    for spec in specs:
        if spec.skipped:
            logger.debug(_("Skipping chain entry without a name."))
            continue
        code = _run_spec(spec, args, output, owner, dispatcher)
        if not is_success(code):
            logger.debug(
                _("Chain stopped with exit code %(exit_code)s."), {"exit_code": code}
            )
            return code
    return ExitCode.SUCCESS
