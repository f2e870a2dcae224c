from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from gitwrap.exceptions import UsageError

if TYPE_CHECKING:
    from gitwrap.repository import Repository

__all__ = ["Blob", "Submodule", "Tree", "TreeEntry"]


@dataclass(frozen=True, slots=True)
class Blob:
    """File content object inside a tree.

    Attributes:
        id: Blob object id.
        name: File name within its parent tree.
        mode: Octal file mode, e.g. ``100644``.
    """

    id: str
    name: str = ""
    mode: str = "100644"
    repo: Repository | None = field(default=None, compare=False, repr=False)

    async def data(self) -> str:
        """Contents of the blob, decoded as UTF-8."""
        if self.repo is None:
            raise UsageError(f"Blob {self.id[:7]} is not bound to a repository")
        return await self.repo.blob_data(self.id)


@dataclass(frozen=True, slots=True)
class Submodule:
    """Gitlink entry: a commit of another repository pinned in a tree."""

    id: str
    name: str = ""
    mode: str = "160000"


@dataclass(frozen=True, slots=True)
class Tree:
    """Directory listing at a treeish.

    Constructing a Tree never runs git; the listing is read on demand by
    ``contents()`` and the helpers built on it.

    Attributes:
        id: Treeish the tree is bound to (tree id, commit, branch or tag).
        name: Directory name within its parent tree, empty for a root tree.
        mode: Octal mode of the entry.
    """

    id: str
    name: str = ""
    mode: str = "040000"
    repo: Repository | None = field(default=None, compare=False, repr=False)

    async def contents(self) -> list[TreeEntry]:
        """Entries directly under this tree, in ``git ls-tree`` order."""
        if self.repo is None:
            raise UsageError(f"Tree {self.id} is not bound to a repository")
        return await self.repo.tree_contents(self.id)

    async def blobs(self) -> list[Blob]:
        return [entry for entry in await self.contents() if isinstance(entry, Blob)]

    async def trees(self) -> list[Tree]:
        return [entry for entry in await self.contents() if isinstance(entry, Tree)]

    async def find(self, path: str) -> TreeEntry | None:
        """Walk ``a/b/c`` down from this tree; None if any segment is missing."""
        parts = [part for part in path.split("/") if part]
        if not parts:
            return self
        current: TreeEntry = self
        for part in parts:
            if not isinstance(current, Tree):
                return None
            match = next(
                (entry for entry in await current.contents() if entry.name == part),
                None,
            )
            if match is None:
                return None
            current = match
        return current


TreeEntry: TypeAlias = "Tree | Blob | Submodule"
