"""Argument marshalling for git invocations.

Turns an options mapping into command-line flags and flattens nested
positional arguments:

    >>> options_to_argv({"a": True, "m": "fix", "max_count": 5, "amend": False})
    ['-a', '-m', 'fix', '--max-count', '5']
    >>> flatten_args([["a", "b"], "c"])
    ['a', 'b', 'c']

Single-character keys become short flags, longer keys become long flags.
``True`` yields a bare flag, ``False``/``None`` omit the flag, and any other
value is emitted as a separate argument right after its flag.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import TypeAlias, Union

from gitwrap.exceptions import UsageError

__all__ = [
    "ArgTree",
    "OptionValue",
    "build_argv",
    "flatten_args",
    "format_flag",
    "options_to_argv",
]

OptionValue: TypeAlias = bool | str | int | float | os.PathLike[str] | None

ArgTree: TypeAlias = Union[str, os.PathLike[str], int, Iterable["ArgTree"], None]


def format_flag(key: str) -> str:
    """Format an option key as a short or long flag.

    Underscores in long keys are written as dashes, so ``max_count`` and
    ``max-count`` both become ``--max-count``.

    Raises:
        UsageError: If the key is empty or starts with a dash.
    """
    if not key:
        raise UsageError("Option name cannot be empty")
    if key.startswith("-"):
        raise UsageError(f"Option name must not include leading dashes: {key}")
    if len(key) == 1:
        return f"-{key}"
    return "--" + key.replace("_", "-")


def options_to_argv(options: Mapping[str, OptionValue] | None) -> list[str]:
    """Convert an options mapping into flags, in the mapping's order."""
    argv: list[str] = []
    if not options:
        return argv
    for key, value in options.items():
        if value is None or value is False:
            continue
        flag = format_flag(key)
        if value is True:
            argv.append(flag)
        else:
            argv.extend([flag, _to_arg(value)])
    return argv


def flatten_args(args: ArgTree) -> list[str]:
    """Flatten arbitrarily nested positional arguments into one ordered list.

    Strings and path-like objects are leaves; any other iterable (lists,
    tuples, generators, sets) is walked depth-first in iteration order.
    ``None`` contributes nothing.
    """
    if args is None:
        return []
    if isinstance(args, Iterable) and not isinstance(args, (str, os.PathLike)):
        flat: list[str] = []
        for item in args:
            flat.extend(flatten_args(item))
        return flat
    return [_to_arg(args)]


def build_argv(
    binary: str,
    subcommand: str,
    options: Mapping[str, OptionValue] | None = None,
    args: ArgTree = None,
) -> list[str]:
    """Build the full command line: binary, subcommand, flags, positionals."""
    if not subcommand or not subcommand.strip():
        raise UsageError("Git subcommand cannot be empty")
    return [binary, subcommand, *options_to_argv(options), *flatten_args(args)]


def _to_arg(value: object) -> str:
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)
