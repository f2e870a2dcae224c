"""gitwrap exception hierarchy.

All exceptions can be imported from this package:
    from gitwrap.exceptions import CommandError, ParseError, UsageError
"""

from __future__ import annotations

from gitwrap.exceptions.base import GitwrapError
from gitwrap.exceptions.config import ConfigError
from gitwrap.exceptions.git import (
    BranchNotFoundError,
    NotFoundError,
    ParseError,
    UsageError,
)
from gitwrap.exceptions.runner import (
    CommandError,
    GitNotFoundError,
    WorkingDirectoryError,
)

__all__ = [
    "GitwrapError",
    "ConfigError",
    "UsageError",
    "ParseError",
    "NotFoundError",
    "BranchNotFoundError",
    "CommandError",
    "GitNotFoundError",
    "WorkingDirectoryError",
]
