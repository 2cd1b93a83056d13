"""Helper functions to support argparse."""

import argparse
from collections.abc import Mapping
from gettext import gettext as _
from typing import Any


class RaisingArgumentParser(argparse.ArgumentParser):
    """An ArgumentParser that raises ArgumentError instead of exiting."""

    def error(self, message):
        """Raise instead of printing usage and exiting."""
        raise argparse.ArgumentError(None, message)


def non_negative_integer(value: str) -> int:
    """Enforce non-negative integer value."""
    error_msg = _("invalid non-negative integer value: '%(value)s'") % {"value": value}
    try:
        int_value = int(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(error_msg) from error
    if int_value < 0:
        raise argparse.ArgumentTypeError(error_msg)
    return int_value


def mapping_to_argv(args: Mapping[str, Any] | None) -> list[str]:
    """
    Convert an argument mapping to an argv list.

    Keys starting with '-' are options: True adds the bare flag, False and
    None leave it out, lists repeat the option. Other keys are positional
    arguments, kept in mapping order (a list value adds several).
    """
    options: list[str] = []
    positionals: list[str] = []
    for key, value in (args or {}).items():
        if key.startswith("-"):
            if value is True:
                options.append(key)
            elif value is False or value is None:
                continue
            elif isinstance(value, list | tuple):
                for item in value:
                    options.extend((key, str(item)))
            else:
                options.extend((key, str(value)))
        elif isinstance(value, list | tuple):
            positionals.extend(str(item) for item in value)
        elif value is not None:
            positionals.append(str(value))
    if positionals:
        # "--" keeps positional values that look like options from being parsed
        return [*options, "--", *positionals]
    return options
