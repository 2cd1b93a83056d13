"""Test the "shell" command."""

import argparse

import pytest

from cmdchain import shell_utils
from cmdchain.commands import shell
from cmdchain.options import CommandOptions
from cmdchain.shell_utils import ProcessResult


def parse(argv):
    """Parse argv with the shell command's parser."""
    parser = argparse.ArgumentParser()
    shell.setup_parser(parser)
    return parser.parse_args(argv)


def test_get_help():
    """Test the get_help and get_description return appropriate strings."""
    assert shell.get_help() == "Run a shell command."
    for mode in shell.MODES:
        assert f"`{mode}` mode" in shell.get_description()


def test_setup_parser():
    """Test the arguments of the shell command."""
    args = parse(["--", "ls", "-la"])
    assert args.shell_command == ["ls", "-la"]
    assert args.mode == "system"
    assert args.timeout is None
    args = parse(
        ["-m", "proc", "--sudo", "--owner", "bob", "-s", "-t", "5"]
        + ["--pipe-after", "wc -l", "ls"]
    )
    assert (args.mode, args.sudo, args.owner, args.silent) == ("proc", True, "bob", True)
    assert args.timeout == 5
    assert args.pipe_after == "wc -l"
    with pytest.raises(SystemExit):
        parse(["-m", "nope", "ls"])


def test_run_system(mocker, runtime_settings):
    """Test the default mode streams the command with system."""
    runtime_settings.update(verbose=True, dry_run=True)
    mock_system = mocker.patch.object(shell.shell_utils, "system", return_value=0)
    assert shell.run(parse(["--sudo", "--", "ls", "-la"]))
    mock_system.assert_called_once_with(
        "ls -la",
        silent=False,
        dry_run=True,
        options=CommandOptions(sudo=True),
        verbose=True,
        pipe_before=None,
        pipe_after=None,
        timeout=None,
    )


def test_run_system_failure(mocker, caplog):
    """Test a failing command makes the shell command fail."""
    mocker.patch.object(
        shell.shell_utils, "system", side_effect=shell_utils.ExecutionError(2, "ls")
    )
    assert not shell.run(parse(["ls"]))
    assert "failed with exit code 2" in caplog.text


def test_run_exec(mocker, capsys):
    """Test exec mode prints the captured output."""
    mock_exec = mocker.patch.object(
        shell.shell_utils, "exec_output", return_value="1\n2"
    )
    assert shell.run(parse(["-m", "exec", "-s", "-t", "3", "seq", "2"]))
    assert capsys.readouterr().out == "1\n2\n"
    assert mock_exec.call_args.args == ("seq 2",)
    assert mock_exec.call_args.kwargs["silent"] is True
    assert mock_exec.call_args.kwargs["timeout"] == 3


def test_run_exec_dry_run(tmp_path, capsys, runtime_settings):
    """Test exec mode runs nothing in a dry run."""
    runtime_settings.update(dry_run=True)
    marker = tmp_path / "marker"
    assert shell.run(
        parse(["-m", "exec", "--", "touch", str(marker), "&&", "echo", "x"])
    )
    assert not marker.exists()
    assert capsys.readouterr().out == "<do nothing>\n"


def test_run_exec_no_output(mocker):
    """Test exec mode fails when the command prints nothing."""
    mocker.patch.object(
        shell.shell_utils,
        "exec_output",
        side_effect=shell_utils.ExecutionError(0, "true", "no output"),
    )
    assert not shell.run(parse(["-m", "exec", "true"]))


@pytest.mark.parametrize("status,expected", ((0, True), (4, False)))
def test_run_proc(mocker, capsys, status, expected):
    """Test proc mode prints both streams and reports the status."""
    mocker.patch.object(
        shell.shell_utils,
        "proc",
        return_value=ProcessResult(output="out", error="err", status=status),
    )
    assert shell.run(parse(["-m", "proc", "make"])) is expected
    captured = capsys.readouterr()
    assert captured.out == "out\n"
    assert captured.err == "err\n"


def test_run_real_commands(capsys):
    """Test each mode against a real shell."""
    assert shell.run(parse(["-m", "exec", "--", "printf", "hello"]))
    assert capsys.readouterr().out == "hello\n"
    assert shell.run(parse(["-m", "proc", "--pipe-after", "tr a-z A-Z", "echo", "hi"]))
    assert capsys.readouterr().out == "HI\n"
    assert not shell.run(parse(["false"]))
