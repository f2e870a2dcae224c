"""Data models for git command execution.

Both models are frozen dataclasses: a CommandInvocation describes one git
call, and a CommandResult holds what that single call produced.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from gitwrap.runners.options import (
    ArgTree,
    OptionValue,
    build_argv,
    flatten_args,
)

__all__ = ["CommandInvocation", "CommandResult"]


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    """One git call: subcommand, options mapping and flat positionals.

    Attributes:
        subcommand: Git subcommand name (e.g. "rev-list").
        options: Flag mapping, marshalled in insertion order.
        args: Positional arguments, already flattened.
    """

    subcommand: str
    options: Mapping[str, OptionValue] = field(
        default_factory=lambda: MappingProxyType({})
    )
    args: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        subcommand: str,
        options: Mapping[str, OptionValue] | None = None,
        args: ArgTree = None,
    ) -> CommandInvocation:
        """Build an invocation, flattening nested positional arguments."""
        return cls(
            subcommand=subcommand,
            options=MappingProxyType(dict(options or {})),
            args=tuple(flatten_args(args)),
        )

    def argv(self, binary: str = "git") -> list[str]:
        """Full command line for this invocation.

        Raises:
            UsageError: If the subcommand or an option name is empty.
        """
        return build_argv(binary, self.subcommand, self.options, list(self.args))


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of executing a single command.

    Attributes:
        returncode: Exit code from the command (0 = success).
        stdout: Standard output captured from the command.
        stderr: Standard error captured from the command.
        duration_ms: Execution time in milliseconds.
        timed_out: True if the command exceeded its timeout limit.
    """

    returncode: int
    stdout: str
    stderr: str
    duration_ms: int
    timed_out: bool = False

    @property
    def success(self) -> bool:
        """True if command completed successfully (returncode 0, no timeout)."""
        return self.returncode == 0 and not self.timed_out

    @property
    def lines(self) -> list[str]:
        """Non-empty lines of stdout."""
        return [line for line in self.stdout.splitlines() if line.strip()]
