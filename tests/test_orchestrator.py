"""Test the orchestrator module."""

from unittest import mock

import pytest

from cmdchain import orchestrator as orchestrator_module
from cmdchain.chain import CommandSpec, SpecKind
from cmdchain.exit_codes import ExitCode
from cmdchain.orchestrator import LifecycleState, Phase, PhaseOrchestrator


def make_orchestrator(recorder, before=0, run=0, after=0):
    """Build an orchestrator with one recording step per phase."""
    return PhaseOrchestrator(
        before=[CommandSpec.from_callable(recorder.step("before", before))],
        run=[CommandSpec.from_callable(recorder.step("run", run))],
        after=[CommandSpec.from_callable(recorder.step("after", after))],
    )


def test_execute_runs_all_phases_in_order(recorder, output):
    """Test every phase runs when all succeed."""
    orchestrator = make_orchestrator(recorder)
    assert orchestrator.state is LifecycleState.IDLE
    assert orchestrator.result is None

    assert orchestrator.execute(None, output) == ExitCode.SUCCESS
    assert recorder.calls == ["before", "run", "after"]
    assert orchestrator.state is LifecycleState.DONE
    assert orchestrator.result == ExitCode.SUCCESS


@pytest.mark.parametrize(
    "codes,expected_calls,expected_code",
    (
        ({"before": 3}, ["before"], 3),
        ({"run": 4}, ["before", "run"], 4),
        ({"after": 5}, ["before", "run", "after"], 5),
        ({"before": False}, ["before"], ExitCode.FAILURE),
    ),
)
def test_execute_short_circuits(recorder, output, codes, expected_calls, expected_code):
    """Test a failing phase stops the lifecycle and gives its exit code."""
    orchestrator = make_orchestrator(recorder, **codes)
    assert orchestrator.execute(None, output) == expected_code
    assert recorder.calls == expected_calls
    assert orchestrator.state is LifecycleState.DONE
    assert orchestrator.result == expected_code


def test_execute_checks_each_phase_with_is_success(mocker, recorder, output):
    """Test every phase result is judged by is_success."""
    spy = mocker.spy(orchestrator_module, "is_success")
    assert make_orchestrator(recorder, run=6).execute(None, output) == 6
    assert [call.args for call in spy.call_args_list] == [(0,), (6,)]


def test_execute_empty_phases(output):
    """Test a command with no chains succeeds."""
    assert PhaseOrchestrator().execute(None, output) == ExitCode.SUCCESS


def test_execute_twice(recorder, output):
    """Test a finished lifecycle can run again."""
    orchestrator = make_orchestrator(recorder, run=2)
    assert orchestrator.execute(None, output) == 2
    assert orchestrator.execute(None, output) == 2
    assert recorder.calls == ["before", "run", "before", "run"]


def test_state_while_running(output):
    """Test the state follows the running phase."""
    seen = []

    def orchestrator_state(args, output, owner):
        seen.append(orchestrator.state)

    step = CommandSpec.from_callable(orchestrator_state)
    orchestrator = PhaseOrchestrator(before=[step], run=[step], after=[step])
    orchestrator.execute(None, output)
    assert seen == [
        LifecycleState.RUNNING_BEFORE,
        LifecycleState.RUNNING_MAIN,
        LifecycleState.RUNNING_AFTER,
    ]


def test_reentrant_execute_raises(output):
    """Test a step cannot restart the lifecycle that is running it."""

    def reenter(args, output, owner):
        orchestrator.execute(args, output, owner)

    orchestrator = PhaseOrchestrator(run=[CommandSpec.from_callable(reenter)])
    with pytest.raises(RuntimeError):
        orchestrator.execute(None, output)
    assert orchestrator.state is LifecycleState.DONE


def test_execute_passes_context_and_dispatcher(output):
    """Test steps get the same context and named entries use the dispatcher."""
    function = mock.Mock(return_value=0)
    dispatcher = mock.Mock()
    dispatcher.dispatch.return_value = 0
    args, owner = object(), object()
    orchestrator = PhaseOrchestrator(
        before=[CommandSpec.from_callable(function)],
        after=[CommandSpec.from_reference("cache:flush", {"--all": True})],
    )
    assert orchestrator.execute(args, output, owner, dispatcher) == 0
    function.assert_called_once_with(args, output, owner)
    dispatcher.dispatch.assert_called_once_with("cache:flush", {"--all": True})


def test_run_phase(recorder, output):
    """Test a single phase can run on its own."""
    orchestrator = make_orchestrator(recorder, after=7)
    assert orchestrator.run_phase(Phase.AFTER, None, output) == 7
    assert recorder.calls == ["after"]
    assert orchestrator.state is LifecycleState.IDLE


def test_from_init():
    """Test chains are built from the phase keys, skipping bad entries."""
    step = mock.Mock()
    factory = mock.Mock(return_value=step)
    orchestrator = PhaseOrchestrator.from_init(
        {
            "before": [{"name": "maintenance:on"}],
            "run": [{"shell": "make"}, 42],
            "colour": [{"name": "ignored"}],
        },
        factory,
    )
    (before,) = orchestrator.phase(Phase.BEFORE)
    assert before.name == "maintenance:on"
    (run,) = orchestrator.phase(Phase.RUN)
    assert run.kind is SpecKind.CALLABLE
    assert run.function is step
    assert orchestrator.phase(Phase.AFTER) == ()


@pytest.mark.parametrize("init", (None, {}))
def test_from_init_empty(init):
    """Test missing init data gives empty chains."""
    orchestrator = PhaseOrchestrator.from_init(init)
    assert all(orchestrator.phase(phase) == () for phase in Phase)
