"""Global invocation modifiers shared by shell commands."""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CommandOptions:
    """
    Options applied to every shell command a command runs.

    Only `sudo` and `owner` affect the rendered command prefix. The other
    fields are carried for the commands that use them (e.g. `clear` to
    clear the terminal before a chained command starts).
    """

    sudo: bool = False
    owner: str | None = None
    config: str | None = None
    dir: str | None = None
    clear: bool = False

    @classmethod
    def create(cls, init: Mapping[str, Any] | None = None) -> "CommandOptions":
        """Build options from a mapping, ignoring unknown keys."""
        if not init:
            return cls()
        names = {field.name for field in dataclasses.fields(cls)}
        values = {key: value for key, value in init.items() if key in names}
        for flag in ("sudo", "clear"):
            if flag in values:
                values[flag] = bool(values[flag])
        return cls(**values)

    @classmethod
    def elevated(cls) -> "CommandOptions":
        """Get options that run a command with a bare `sudo` prefix."""
        return cls(sudo=True)

    @staticmethod
    def resolve(
        default: "CommandOptions | None", override: "CommandOptions | None" = None
    ) -> "CommandOptions":
        """Pick the per-call override, else the command default, else blank."""
        if override is not None:
            return override
        if default is not None:
            return default
        return CommandOptions()

    def replace(self, **changes) -> "CommandOptions":
        """Get a copy of these options with some fields changed."""
        return dataclasses.replace(self, **changes)

    def prefix(self) -> str:
        """Render the command prefix, e.g. 'sudo -u www-data' or ''."""
        if not self.sudo:
            return ""
        owner = self.owner.strip() if isinstance(self.owner, str) else ""
        return f"sudo -u {owner}" if owner else "sudo"

    def __str__(self) -> str:
        return self.prefix()
