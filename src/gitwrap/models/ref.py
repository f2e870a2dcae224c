from __future__ import annotations

from dataclasses import dataclass

from gitwrap.exceptions import UsageError
from gitwrap.models.commit import Commit

__all__ = ["Head", "Ref", "Tag"]


@dataclass(frozen=True, slots=True)
class Ref:
    """A named pointer to a commit.

    Attributes:
        name: Short name, e.g. ``origin/master`` for a remote-tracking ref.
        commit: Commit handle the ref points at (id only).
    """

    name: str
    commit: Commit


@dataclass(frozen=True, slots=True)
class Head(Ref):
    """A local branch."""


@dataclass(frozen=True, slots=True)
class Tag(Ref):
    """A tag; ``commit`` is the peeled target for annotated tags.

    Attributes:
        annotated: True if the tag is a tag object with its own message.
    """

    annotated: bool = False

    async def message(self) -> str:
        """Message of an annotated tag; empty for lightweight tags."""
        if not self.annotated:
            return ""
        if self.commit.repo is None:
            raise UsageError(f"Tag {self.name} is not bound to a repository")
        return await self.commit.repo.tag_message(self.name)
