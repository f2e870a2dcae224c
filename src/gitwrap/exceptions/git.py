from __future__ import annotations

from gitwrap.exceptions.base import GitwrapError


class UsageError(GitwrapError, ValueError):
    """An operation was called with missing or invalid arguments.

    Raised before any git process is spawned. It signals a programming
    mistake, so it is never wrapped as a CommandError.
    """


class ParseError(GitwrapError):
    """Output from git did not have the expected shape.

    Kept distinct from CommandError so callers can tell "git failed" apart
    from "the output was not understood".

    Attributes:
        message: Human-readable error message.
        command: Git subcommand whose output was being parsed.
        output: Offending fragment of the output.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        output: str | None = None,
    ) -> None:
        """Initialize the ParseError.

        Args:
            message: Human-readable error message.
            command: Git subcommand whose output was being parsed.
            output: Offending fragment of the output.
        """
        self.command = command
        self.output = output
        super().__init__(message)


class NotFoundError(GitwrapError):
    """A named object was looked up and does not exist."""


class BranchNotFoundError(NotFoundError):
    """No local branch with the requested name exists.

    Attributes:
        message: Human-readable error message.
        branch_name: The name that was looked up.
    """

    def __init__(self, branch_name: str, message: str | None = None) -> None:
        """Initialize the BranchNotFoundError.

        Args:
            branch_name: The name that was looked up.
            message: Optional override for the default message.
        """
        self.branch_name = branch_name
        super().__init__(message or f"No such branch: {branch_name}")
