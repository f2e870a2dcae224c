from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from gitwrap.exceptions import UsageError
from gitwrap.models.actor import Actor
from gitwrap.models.tree import Tree

if TYPE_CHECKING:
    from gitwrap.repository import Repository

__all__ = ["Commit"]


@dataclass(frozen=True, slots=True)
class Commit:
    """A commit as reported by ``git rev-list --pretty=raw``.

    A commit may be a bare handle holding only ``id`` (for example the
    target of a ref); the other fields are filled when it was parsed from
    raw commit output.

    Attributes:
        id: Full object id.
        parent_ids: Ids of the parent commits, in order.
        tree_id: Id of the root tree.
        author: Author identity.
        authored_date: Author timestamp with its original UTC offset.
        committer: Committer identity.
        committed_date: Committer timestamp with its original UTC offset.
        message: Full message, indentation removed.
        repo: Repository used for follow-up queries. Not part of equality.
    """

    id: str
    parent_ids: tuple[str, ...] = ()
    tree_id: str | None = None
    author: Actor | None = None
    authored_date: datetime | None = None
    committer: Actor | None = None
    committed_date: datetime | None = None
    message: str = ""
    repo: Repository | None = field(default=None, compare=False, repr=False)

    @property
    def short_id(self) -> str:
        return self.id[:7]

    @property
    def subject(self) -> str:
        """First line of the message."""
        return self.message.split("\n", 1)[0]

    async def parents(self) -> list[Commit]:
        """Load the parent commits, one lookup per parent."""
        repo = self._require_repo()
        return [await repo.get_commit(parent_id) for parent_id in self.parent_ids]

    def tree(self) -> Tree:
        """Root tree of this commit (lazy)."""
        return Tree(id=self.tree_id or self.id, repo=self._require_repo())

    def _require_repo(self) -> Repository:
        if self.repo is None:
            raise UsageError(f"Commit {self.short_id} is not bound to a repository")
        return self.repo
