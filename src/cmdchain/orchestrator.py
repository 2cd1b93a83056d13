"""Run the before, run, and after chains of a command as one lifecycle."""

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from gettext import gettext as _
from typing import Any

from cmdchain import chain
from cmdchain.chain import CommandSpec, Dispatcher, ShellStepFactory
from cmdchain.exit_codes import ExitCode, is_success

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Named chains of a command lifecycle, in execution order."""

    BEFORE = "before"
    RUN = "run"
    AFTER = "after"


class LifecycleState(Enum):
    """States of a PhaseOrchestrator execution."""

    IDLE = "idle"
    RUNNING_BEFORE = "running_before"
    RUNNING_MAIN = "running_main"
    RUNNING_AFTER = "running_after"
    DONE = "done"


_RUNNING_STATES = {
    Phase.BEFORE: LifecycleState.RUNNING_BEFORE,
    Phase.RUN: LifecycleState.RUNNING_MAIN,
    Phase.AFTER: LifecycleState.RUNNING_AFTER,
}


class PhaseOrchestrator:
    """
    Sequence the before, run, and after chains with short-circuit semantics.

    The run chain starts only if the before chain succeeded, and the after
    chain only if the run chain succeeded. The result is the first
    non-success code, or success when every phase succeeded.
    """

    def __init__(
        self,
        before: Iterable[CommandSpec] = (),
        run: Iterable[CommandSpec] = (),
        after: Iterable[CommandSpec] = (),
    ):
        self._chains = {
            Phase.BEFORE: tuple(before),
            Phase.RUN: tuple(run),
            Phase.AFTER: tuple(after),
        }
        self._state = LifecycleState.IDLE
        self._result: int | None = None

    @classmethod
    def from_init(
        cls,
        init: Mapping[str, Any] | None = None,
        shell_step_factory: ShellStepFactory | None = None,
    ) -> "PhaseOrchestrator":
        """Build the three chains from the `before`, `run`, and `after` keys."""
        init = init or {}
        return cls(
            **{
                phase.value: chain.parse_chain(init.get(phase.value), shell_step_factory)
                for phase in Phase
            }
        )

    @property
    def state(self) -> LifecycleState:
        """Get the current lifecycle state."""
        return self._state

    @property
    def result(self) -> int | None:
        """Get the exit code of the last completed execution."""
        return self._result

    def phase(self, phase: Phase) -> tuple[CommandSpec, ...]:
        """Get the chain of a phase."""
        return self._chains[phase]

    def run_phase(
        self,
        phase: Phase,
        args: Any,
        output: Any,
        owner: Any = None,
        dispatcher: Dispatcher | None = None,
    ) -> int:
        """Run the chain of a single phase."""
        return chain.run_chain(self._chains[phase], args, output, owner, dispatcher)

    def execute(
        self,
        args: Any,
        output: Any,
        owner: Any = None,
        dispatcher: Dispatcher | None = None,
    ) -> int:
        """Run the whole lifecycle once and return its exit code."""
        if self._state not in (LifecycleState.IDLE, LifecycleState.DONE):
            raise RuntimeError(_("The command lifecycle is already running."))

        self._state = LifecycleState.IDLE
        self._result = None
        code = ExitCode.SUCCESS
        try:
            for phase in Phase:
                self._state = _RUNNING_STATES[phase]
                logger.debug(_("Running the %(phase)s phase."), {"phase": phase.value})
                code = self.run_phase(phase, args, output, owner, dispatcher)
                if not is_success(code):
                    logger.debug(
                        _("The %(phase)s phase failed with exit code %(exit_code)s."),
                        {"phase": phase.value, "exit_code": code},
                    )
                    break
        finally:
            self._state = LifecycleState.DONE
        self._result = code
        return code
