"""Shared fixtures for pytest tests."""

import argparse
import io
import pathlib

import pytest

from cmdchain import settings


@pytest.fixture(autouse=True)
def runtime_settings(monkeypatch) -> settings.RuntimeSettings:
    """Give every test its own fresh global runtime settings."""
    runtime = settings.RuntimeSettings()
    monkeypatch.setattr(settings, "runtime", runtime)
    return runtime


@pytest.fixture
def temp_lock_dir(tmp_path: pathlib.Path, monkeypatch) -> pathlib.Path:
    """Temporarily swap the directory holding command lock files."""
    lock_dir = tmp_path / "locks"
    monkeypatch.setattr(settings, "LOCK_DIR", lock_dir)
    return lock_dir


@pytest.fixture
def output() -> io.StringIO:
    """Get a text buffer standing in for the console output."""
    return io.StringIO()


@pytest.fixture
def chain_args() -> argparse.Namespace:
    """Get the arguments a chained command receives when none are given."""
    return argparse.Namespace(
        verbosity=0,
        quiet=False,
        yes=False,
        dry_run=False,
        config=None,
        clear=False,
        force=False,
        wait=False,
        env=None,
        sudo=None,
        owner=None,
    )


class StepRecorder:
    """Build chain functions that record their calls in a shared list."""

    def __init__(self):
        self.calls = []

    def step(self, label: str, result=None):
        """Get a chain function that records `label` and returns `result`."""

        def record(args, output, owner):
            self.calls.append(label)
            return result

        return record


@pytest.fixture
def recorder() -> StepRecorder:
    """Get a recorder for chain function calls."""
    return StepRecorder()
