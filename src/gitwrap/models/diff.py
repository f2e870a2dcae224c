from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Diff"]


@dataclass(frozen=True, slots=True)
class Diff:
    """Changes to one file between two trees.

    Paths are repository-relative without the ``a/`` or ``b/`` prefixes.
    For an added file ``a_path`` equals ``b_path``; for a deleted file
    ``b_path`` equals ``a_path``.

    Attributes:
        a_path: Path before the change.
        b_path: Path after the change.
        a_blob: Abbreviated blob id before the change, if reported.
        b_blob: Abbreviated blob id after the change, if reported.
        a_mode: File mode before the change, if reported.
        b_mode: File mode after the change, if reported.
        new_file: The file was added.
        deleted_file: The file was removed.
        renamed_file: The file was renamed (``a_path != b_path``).
        similarity: Rename/copy similarity percentage, if reported.
        binary: Git reported a binary change.
        added: Number of added lines.
        removed: Number of removed lines.
        diff: Unified diff text for this file, headers included.
    """

    a_path: str
    b_path: str
    a_blob: str | None = None
    b_blob: str | None = None
    a_mode: str | None = None
    b_mode: str | None = None
    new_file: bool = False
    deleted_file: bool = False
    renamed_file: bool = False
    similarity: int | None = None
    binary: bool = False
    added: int = 0
    removed: int = 0
    diff: str = ""
