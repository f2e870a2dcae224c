"""Parser for ``git ls-tree -z`` output: ``<mode> <type> <id>\\t<name>``."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from gitwrap.exceptions import ParseError
from gitwrap.models.tree import Blob, Submodule, Tree, TreeEntry
from gitwrap.parsers._common import split_nul

if TYPE_CHECKING:
    from gitwrap.repository import Repository

__all__ = ["parse_ls_tree"]

_ENTRY_RE = re.compile(
    r"^(?P<mode>[0-7]{6}) (?P<type>blob|tree|commit) "
    r"(?P<id>[0-9a-f]{40}|[0-9a-f]{64})\t(?P<name>.+)$",
    re.DOTALL,
)


def parse_ls_tree(text: str, repo: Repository | None = None) -> list[TreeEntry]:
    """Parse NUL-separated ls-tree records into tree entries.

    Raises:
        ParseError: If a record does not match the ls-tree format.
    """
    entries: list[TreeEntry] = []
    for record in split_nul(text):
        match = _ENTRY_RE.match(record)
        if not match:
            raise ParseError(
                f"Malformed ls-tree entry: {record!r}", command="ls-tree", output=record
            )
        mode, kind, object_id, name = match.group("mode", "type", "id", "name")
        if kind == "blob":
            entries.append(Blob(id=object_id, name=name, mode=mode, repo=repo))
        elif kind == "tree":
            entries.append(Tree(id=object_id, name=name, mode=mode, repo=repo))
        else:
            entries.append(Submodule(id=object_id, name=name, mode=mode))
    return entries
