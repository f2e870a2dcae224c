"""Output formatting helpers for the gitwrap CLI."""

from __future__ import annotations

from rich.markup import escape

from gitwrap.models import Blob, FileStatus, Submodule, TreeEntry

__all__ = [
    "format_error",
    "format_status_line",
    "format_tree_entry",
]


def format_error(message: str, details: list[str] | None = None) -> str:
    """Format an error message with optional detail lines.

    Example:
        >>> print(format_error("No such branch: dev"))
        Error: No such branch: dev
    """
    lines = [f"Error: {message}"]
    if details:
        for detail in details:
            lines.append(f"  {detail}")
    return "\n".join(lines)


def format_status_line(entry: FileStatus) -> str:
    """Render one status entry the way ``git status --short`` does."""
    if entry.orig_path is not None:
        return f"{entry.code} {escape(entry.orig_path)} -> {escape(entry.path)}"
    return f"{entry.code} {escape(entry.path)}"


def format_tree_entry(entry: TreeEntry) -> str:
    """Render one tree entry in ``git ls-tree`` layout."""
    if isinstance(entry, Blob):
        kind = "blob"
    elif isinstance(entry, Submodule):
        kind = "commit"
    else:
        kind = "tree"
    return f"{entry.mode} {kind} {entry.id}\t{escape(entry.name)}"
