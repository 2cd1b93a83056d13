"""Assemble shell command strings."""

import os
import shlex
from collections.abc import Iterable

from cmdchain.options import CommandOptions

PIPE_SEPARATOR = " | "
NULL_DEVICE = "NUL" if os.name == "nt" else "/dev/null"

Tokens = str | Iterable[str | None] | None


def join_tokens(tokens: Tokens) -> str:
    """Join command tokens with single spaces, dropping None and blank tokens."""
    if tokens is None:
        return ""
    if isinstance(tokens, str):
        return tokens.strip()
    return " ".join(
        str(token) for token in tokens if token is not None and str(token).strip()
    )


def make_command(
    command: Tokens,
    args: Tokens = None,
    options: CommandOptions | None = None,
    pipe_before: str | None = None,
    pipe_after: str | None = None,
) -> str:
    """
    Build a single shell command string.

    The result is `[pipe_before] | [options] command [args] | [pipe_after]`,
    with empty segments left out. When `command` is empty, `args` and
    `options` are ignored and only the pipe segments are joined.

    Nothing is escaped here. Use `quote` on any untrusted value first.
    """
    pipeline = []
    if pipe_before and pipe_before.strip():
        pipeline.append(pipe_before.strip())

    main_command = join_tokens(command)
    if main_command:
        parts = []
        if options is not None and (prefix := options.prefix()):
            parts.append(prefix)
        parts.append(main_command)
        if rendered_args := join_tokens(args):
            parts.append(rendered_args)
        pipeline.append(" ".join(parts))

    if pipe_after and pipe_after.strip():
        pipeline.append(pipe_after.strip())

    return PIPE_SEPARATOR.join(pipeline).strip()


def quote(value: object) -> str:
    """
    Quote a single value for safe use as one shell word.

    This is the only place cmdchain escapes shell input.
    """
    return shlex.quote(str(value))


def silent(command: str | None) -> str | None:
    """Redirect both stdout and stderr of a command to the null device."""
    if not command:
        return command
    return f"{command} > {NULL_DEVICE} 2>&1"
