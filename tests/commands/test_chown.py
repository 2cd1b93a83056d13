"""Test the "chown" command."""

import argparse

from cmdchain import shell_utils
from cmdchain.chown_utils import ChownError, ChownOptions
from cmdchain.commands import chown


def parse(argv):
    """Parse argv with the chown command's parser."""
    parser = argparse.ArgumentParser()
    chown.setup_parser(parser)
    return parser.parse_args(argv)


def test_get_help():
    """Test the get_help returns an appropriate string."""
    assert "owner" in chown.get_help()


def test_run(mocker, runtime_settings):
    """Test the arguments are passed through to chown_utils."""
    runtime_settings.update(verbose=True)
    mock_chown = mocker.patch.object(chown.chown_utils, "chown", return_value=0)
    args = parse(
        ["/srv/www", "-o", "www-data", "-g", "web", "-R", "--from", "root", "--sudo"]
    )
    assert chown.run(args)
    mock_chown.assert_called_once_with(
        "/srv/www",
        "www-data",
        "web",
        ChownOptions(from_="root", recursive=True, sudo=True),
        verbose=True,
        dry_run=False,
    )


def test_run_incomplete(mocker, caplog):
    """Test an incomplete request fails with its message logged."""
    mocker.patch.object(
        chown.chown_utils, "chown", side_effect=ChownError("needs an owner")
    )
    assert not chown.run(parse(["/srv/www"]))
    assert "needs an owner" in caplog.messages


def test_run_command_failure(mocker, caplog):
    """Test a failing chown makes the command fail."""
    mocker.patch.object(
        chown.chown_utils,
        "chown",
        side_effect=shell_utils.ExecutionError(1, "chown"),
    )
    assert not chown.run(parse(["/srv/www", "-o", "bob"]))
    assert "Could not change the ownership of /srv/www" in caplog.text


def test_run_already_owned(tmp_path, mocker):
    """Test a path that already has the requested owner needs no chown."""
    mock_system = mocker.patch.object(chown.chown_utils.shell_utils, "system")
    path = tmp_path / "file.txt"
    path.write_text("x")
    assert chown.run(parse([str(path), "-o", path.owner(), "-g", path.group()]))
    mock_system.assert_not_called()
