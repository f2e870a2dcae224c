"""Asynchronous Python wrapper around the git command line.

Example:
    ```python
    from gitwrap import Repository

    repo = Repository("/srv/project")
    head = await repo.branch()
    print(head.name, head.commit.id)
    ```
"""

from __future__ import annotations

from gitwrap.config import GitwrapConfig, load_config
from gitwrap.exceptions import (
    BranchNotFoundError,
    CommandError,
    ConfigError,
    GitNotFoundError,
    GitwrapError,
    NotFoundError,
    ParseError,
    UsageError,
    WorkingDirectoryError,
)
from gitwrap.models import (
    Actor,
    Blob,
    Commit,
    CommitOptions,
    Diff,
    FileStatus,
    Head,
    Ref,
    RemoveOptions,
    Status,
    Submodule,
    Tag,
    Tree,
)
from gitwrap.repository import Repository

__all__ = [
    # Façade
    "Repository",
    # Entities
    "Actor",
    "Blob",
    "Commit",
    "CommitOptions",
    "Diff",
    "FileStatus",
    "Head",
    "Ref",
    "RemoveOptions",
    "Status",
    "Submodule",
    "Tag",
    "Tree",
    # Configuration
    "GitwrapConfig",
    "load_config",
    # Errors
    "GitwrapError",
    "BranchNotFoundError",
    "CommandError",
    "ConfigError",
    "GitNotFoundError",
    "NotFoundError",
    "ParseError",
    "UsageError",
    "WorkingDirectoryError",
]

__version__ = "0.1.0"
