from __future__ import annotations


class GitwrapError(Exception):
    """Base exception class for all gitwrap errors.

    Catch this at application boundaries to handle every failure raised by
    the library while letting system exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            commits = await repo.commits("main")
        except GitwrapError as e:
            print(f"gitwrap error: {e.message}")
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the GitwrapError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
