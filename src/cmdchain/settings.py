"""Global configuration settings for cmdchain."""

import logging
import pathlib
import tempfile

PROGRAM_NAME = "cmdchain"  # this program's executable command
ENV_VAR_PREFIX = "CMDCHAIN_"  # used to construct env vars that override defaults
CONFIG_ENV_VAR = f"{ENV_VAR_PREFIX}CONFIG"

COMMANDS_PACKAGE_PATH = str(pathlib.Path(__file__).parent.resolve() / "commands")

DEFAULT_LOG_LEVEL = logging.WARNING

_home = pathlib.Path.home()
DEFAULT_CONFIG_PATH = _home / f".config/{PROGRAM_NAME}/commands.json"
LOCK_DIR = pathlib.Path(tempfile.gettempdir()) / f"{PROGRAM_NAME}-locks"

# None means "block until the subprocess exits".
DEFAULT_SUBPROCESS_WAIT_TIMEOUT: int | None = None

SUDO_KEEP_ALIVE_INTERVAL = 60  # seconds between `sudo -v` refreshes
DRY_RUN_OUTPUT = "<do nothing>"

# Keys recognized in a chained command definition.
CHAIN_PHASE_KEYS = ("before", "run", "after")


class RuntimeSettings:
    """A class to hold and manage global runtime settings."""

    def __init__(self):
        self._quiet: bool = False
        self._yes: bool = False
        self._verbose: bool = False
        self._dry_run: bool = False

    def update(
        self,
        *,
        quiet: bool | None = None,
        yes: bool | None = None,
        verbose: bool | None = None,
        dry_run: bool | None = None,
    ):
        """Update the global runtime settings."""
        if isinstance(quiet, bool):
            self._quiet = quiet
        if isinstance(yes, bool):
            self._yes = yes
        if isinstance(verbose, bool):
            self._verbose = verbose
        if isinstance(dry_run, bool):
            self._dry_run = dry_run

    @property
    def quiet(self) -> bool:
        """Get the 'quiet' mode."""
        return self._quiet

    @property
    def yes(self) -> bool:
        """Get the 'yes' mode."""
        return self._yes

    @property
    def verbose(self) -> bool:
        """Get the 'verbose' mode (echo rendered shell commands)."""
        return self._verbose

    @property
    def dry_run(self) -> bool:
        """Get the 'dry run' mode (simulate shell commands)."""
        return self._dry_run


runtime = RuntimeSettings()
