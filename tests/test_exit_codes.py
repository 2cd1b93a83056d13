"""Test the exit_codes module."""

import signal

import pytest

from cmdchain.exit_codes import ExitCode, is_success


@pytest.mark.parametrize(
    "signum,expected",
    (
        (signal.SIGINT, ExitCode.SIGINT),
        (signal.SIGKILL, ExitCode.SIGKILL),
        (signal.SIGTERM, ExitCode.SIGTERM),
    ),
)
def test_from_signal(signum, expected):
    """Test signal terminations map to 128 + signal number."""
    assert ExitCode.from_signal(signum) == expected


@pytest.mark.parametrize(
    "returncode,expected", ((0, 0), (1, 1), (127, 127), (-2, 130), (-15, 143))
)
def test_from_returncode(returncode, expected):
    """Test subprocess return codes convert to shell exit statuses."""
    assert ExitCode.from_returncode(returncode) == expected


def test_known_values():
    """Test a few well-known exit codes."""
    assert ExitCode.SUCCESS == 0
    assert ExitCode.FAILURE == 1
    assert ExitCode.CANNOT_EXECUTE == 126
    assert ExitCode.COMMAND_NOT_FOUND == 127


@pytest.mark.parametrize("code,expected", ((0, True), (1, False), (None, False)))
def test_is_success(code, expected):
    """Test is_success only accepts the success code."""
    assert is_success(code) is expected
