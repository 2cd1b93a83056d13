"""Test the "delete_file" command."""

import argparse
from unittest import mock

from cmdchain import shell_utils
from cmdchain.commands import delete_file


def parse(argv):
    """Parse argv with the delete_file command's parser."""
    parser = argparse.ArgumentParser()
    delete_file.setup_parser(parser)
    return parser.parse_args(argv)


def test_get_help():
    """Test the get_help returns an appropriate string."""
    assert delete_file.get_help() == "Delete a file."


def test_run(tmp_path, runtime_settings):
    """Test the file is deleted without prompting in "yes" mode."""
    runtime_settings.update(yes=True)
    path = tmp_path / "old.txt"
    path.write_text("x")
    assert delete_file.run(parse([str(path)]))
    assert not path.exists()


@mock.patch("builtins.input")
def test_run_declined(mock_input, tmp_path):
    """Test the file is kept when the user declines."""
    mock_input.return_value = "n"
    path = tmp_path / "keep.txt"
    path.write_text("x")
    assert not delete_file.run(parse([str(path)]))
    assert path.exists()
    assert str(path) in mock_input.call_args.args[0]


def test_run_must_exist(tmp_path, runtime_settings, caplog):
    """Test a missing file fails only with --must-exist."""
    runtime_settings.update(yes=True)
    path = tmp_path / "nope.txt"
    assert delete_file.run(parse([str(path)]))
    assert not delete_file.run(parse([str(path), "--must-exist"]))
    assert "does not exist" in caplog.text


def test_run_failure(mocker, runtime_settings):
    """Test a failing rm makes the command fail."""
    runtime_settings.update(yes=True)
    mocker.patch.object(
        delete_file.file_utils.shell_utils,
        "system",
        side_effect=shell_utils.ExecutionError(1, "rm"),
    )
    assert not delete_file.run(parse(["/etc/motd", "--sudo"]))
