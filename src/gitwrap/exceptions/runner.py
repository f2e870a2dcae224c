from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from gitwrap.exceptions.base import GitwrapError


class CommandError(GitwrapError):
    """A git process exited with a nonzero status.

    The message is exactly the standard error text captured from the
    process, so callers can surface it verbatim.

    Attributes:
        message: Captured standard error of the failed command.
        command: Full argv of the failed command.
        returncode: Exit status reported by the process.
        stdout: Captured standard output (often empty).
        stderr: Captured standard error.
        timed_out: True if the process was terminated after a timeout.
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        timed_out: bool = False,
    ) -> None:
        """Initialize the CommandError.

        Args:
            message: Human-readable error message (the captured stderr).
            command: Full argv of the failed command.
            returncode: Exit status reported by the process.
            stdout: Captured standard output.
            stderr: Captured standard error.
            timed_out: True if the process was terminated after a timeout.
        """
        self.command = list(command) if command is not None else None
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.timed_out = timed_out
        super().__init__(message)


class GitNotFoundError(CommandError):
    """The git executable could not be found or executed."""

    def __init__(
        self,
        message: str = "Git CLI not found",
        command: Sequence[str] | None = None,
    ) -> None:
        super().__init__(message, command=command, returncode=127, stderr=message)


class WorkingDirectoryError(CommandError):
    """Working directory does not exist or is not accessible.

    Attributes:
        message: Human-readable error message.
        path: The path that was not found.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        """Initialize the WorkingDirectoryError.

        Args:
            message: Human-readable error message.
            path: The path that was not found.
        """
        self.path = path
        super().__init__(message)
