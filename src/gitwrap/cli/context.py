"""CLI context and utilities for gitwrap.

This module provides the shared command context, exit codes, and the
bridge from Click's synchronous interface to repository coroutines.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar

import click

from gitwrap.cli.output import format_error
from gitwrap.config import GitwrapConfig
from gitwrap.exceptions import GitwrapError
from gitwrap.repository import Repository

__all__ = [
    "ExitCode",
    "CLIContext",
    "async_command",
]


class ExitCode(IntEnum):
    """Exit codes for the gitwrap CLI.

    - 0 for success
    - 1 for any gitwrap error
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options shared by every subcommand.

    Attributes:
        config: Loaded gitwrap configuration.
        repo_path: Repository the commands operate on.
        bare: Treat ``repo_path`` as a bare repository.
    """

    config: GitwrapConfig
    repo_path: Path = Path(".")
    bare: bool = False

    def repository(self) -> Repository:
        return Repository(self.repo_path, bare=self.bare, config=self.config)


F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Decorator to run async Click commands with asyncio.run().

    Gitwrap errors are reported as ``Error: <message>`` on stderr and the
    command exits with ExitCode.FAILURE.

    Example:
        >>> @cli.command()
        >>> @click.pass_obj
        >>> @async_command
        >>> async def status(cli_ctx: CLIContext) -> None:
        >>>     print(await cli_ctx.repository().status())
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return asyncio.run(f(*args, **kwargs))
        except GitwrapError as e:
            click.echo(format_error(e.message), err=True)
            raise SystemExit(ExitCode.FAILURE) from e
        except KeyboardInterrupt:
            raise SystemExit(ExitCode.INTERRUPTED) from None

    return wrapper  # type: ignore[return-value]
