"""Typed option sets for façade operations that accept flags.

Each option set lists every flag the operation understands and converts
itself into the options mapping consumed by the git runner.
"""

from __future__ import annotations

from dataclasses import dataclass

from gitwrap.models.actor import Actor
from gitwrap.runners.options import OptionValue

__all__ = ["CommitOptions", "RemoveOptions"]


@dataclass(frozen=True, slots=True)
class CommitOptions:
    """Flags for ``git commit``.

    Attributes:
        amend: Replace the tip of the current branch (``--amend``).
        all: Stage modified and deleted tracked files first (``-a``).
        allow_empty: Record a commit with no changes (``--allow-empty``).
        author: Override the commit author (``--author``).
    """

    amend: bool = False
    all: bool = False
    allow_empty: bool = False
    author: Actor | str | None = None

    def to_options(self) -> dict[str, OptionValue]:
        return {
            "a": self.all,
            "amend": self.amend,
            "allow_empty": self.allow_empty,
            "author": str(self.author) if self.author is not None else None,
        }


@dataclass(frozen=True, slots=True)
class RemoveOptions:
    """Flags for ``git rm``.

    Attributes:
        cached: Only unstage; keep the file in the working tree (``--cached``).
        recursive: Allow removing directories (``-r``).
        force: Override the up-to-date check (``-f``).
    """

    cached: bool = False
    recursive: bool = False
    force: bool = False

    def to_options(self) -> dict[str, OptionValue]:
        return {
            "cached": self.cached,
            "r": self.recursive,
            "f": self.force,
        }
