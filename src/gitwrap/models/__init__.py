"""Entities returned by repository operations.

All entities are frozen dataclasses compared by value. Entities that can
issue follow-up queries (commits, trees, blobs, tags) keep a reference to
their Repository that is excluded from equality and repr.
"""

from __future__ import annotations

from gitwrap.models.actor import Actor
from gitwrap.models.commit import Commit
from gitwrap.models.diff import Diff
from gitwrap.models.options import CommitOptions, RemoveOptions
from gitwrap.models.ref import Head, Ref, Tag
from gitwrap.models.status import FileStatus, Status
from gitwrap.models.tree import Blob, Submodule, Tree, TreeEntry

__all__ = [
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
    "TreeEntry",
]
