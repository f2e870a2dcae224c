from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = ["FileStatus", "Status"]


@dataclass(frozen=True, slots=True)
class FileStatus:
    """Porcelain status of one path.

    Attributes:
        path: Repository-relative path (the new path for renames).
        code: Raw two-letter ``XY`` code, e.g. ``"M "``, ``" M"``, ``"??"``.
        staged: The index differs from HEAD for this path.
        tracked: The path is known to git (not ``??``).
        orig_path: Source path of a rename or copy.
    """

    path: str
    code: str
    staged: bool
    tracked: bool
    orig_path: str | None = None

    @property
    def type(self) -> str:
        """Status letters without padding, e.g. ``"M"``, ``"AM"``, ``"??"``."""
        return self.code.replace(" ", "")


@dataclass(frozen=True, slots=True)
class Status:
    """Working tree status keyed by path."""

    files: Mapping[str, FileStatus] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def clean(self) -> bool:
        return not self.files

    def __getitem__(self, path: str) -> FileStatus:
        return self.files[path]

    def __contains__(self, path: object) -> bool:
        return path in self.files

    def __iter__(self) -> Iterator[FileStatus]:
        return iter(self.files.values())

    def __len__(self) -> int:
        return len(self.files)

    @property
    def staged(self) -> list[FileStatus]:
        return [f for f in self.files.values() if f.staged]

    @property
    def untracked(self) -> list[FileStatus]:
        return [f for f in self.files.values() if not f.tracked]
