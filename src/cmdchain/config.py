"""Load chained command definitions from a JSON configuration file."""

import json
import logging
import pathlib
from collections.abc import Mapping
from gettext import gettext as _
from typing import Any

from cmdchain import settings, shell_utils

logger = logging.getLogger(__name__)


class ChainConfigError(Exception):
    """Exception raised when the configuration file cannot be used."""


def get_config_path(override: str | pathlib.Path | None = None) -> pathlib.Path:
    """Get the configuration path from the CLI, the environment, or the default."""
    if override:
        return pathlib.Path(override)
    if env_path := shell_utils.get_env(settings.CONFIG_ENV_VAR):
        return pathlib.Path(env_path)
    return settings.DEFAULT_CONFIG_PATH


def validate_definition(name: str, definition: Any) -> dict[str, Any]:
    """Check the shape of one chained command definition."""
    if not isinstance(definition, Mapping):
        raise ChainConfigError(
            _("The definition of command '%(name)s' must be an object.")
            % {"name": name}
        )
    for key in settings.CHAIN_PHASE_KEYS:
        if key in definition and not isinstance(definition[key], list):
            raise ChainConfigError(
                _("The '%(key)s' chain of command '%(name)s' must be a list.")
                % {"key": key, "name": name}
            )
    if "options" in definition and not isinstance(definition["options"], Mapping):
        raise ChainConfigError(
            _("The options of command '%(name)s' must be an object.") % {"name": name}
        )
    return dict(definition)


def parse_config(data: Any) -> dict[str, dict[str, Any]]:
    """Get the validated command definitions from decoded configuration data."""
    if not isinstance(data, Mapping):
        raise ChainConfigError(_("The configuration must be a JSON object."))
    commands = data.get("commands", {})
    if not isinstance(commands, Mapping):
        raise ChainConfigError(_("The 'commands' entry must be a JSON object."))
    return {
        name: validate_definition(name, definition)
        for name, definition in commands.items()
    }


def load_config(
    path: str | pathlib.Path | None = None,
) -> dict[str, dict[str, Any]]:
    """
    Load the chained command definitions.

    A missing file is an error only when its path was explicitly requested.
    """
    config_path = get_config_path(path)
    explicit = bool(path) or config_path != settings.DEFAULT_CONFIG_PATH
    if not config_path.exists():
        if explicit:
            raise ChainConfigError(
                _("Configuration file %(path)s does not exist.")
                % {"path": config_path}
            )
        logger.debug(
            _("No configuration file at %(path)s."), {"path": config_path}
        )
        return {}

    logger.debug(_("Loading configuration from %(path)s."), {"path": config_path})
    try:
        with config_path.open(encoding="utf-8") as config_file:
            data = json.load(config_file)
    except (OSError, json.JSONDecodeError) as error:
        raise ChainConfigError(
            _("Could not read configuration file %(path)s: %(error)s")
            % {"path": config_path, "error": error}
        ) from error
    return parse_config(data)
