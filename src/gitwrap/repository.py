"""Repository façade over the git command line.

Every operation returns an awaitable that runs one git process per logical
step and either returns a value or raises. Nothing is cached: each query
rebuilds its entities from fresh git output.

Arguments are checked when an operation is called, before anything is
awaited: a UsageError is raised at the call site, while git failures
surface from the await.

Example:
    ```python
    from gitwrap import Repository

    repo = Repository("/path/to/repo")
    for commit in await repo.commits("main", 5):
        print(commit.short_id, commit.subject)

    await repo.add(["README.md", "setup.cfg"])
    await repo.commit("docs: refresh readme")
    ```
"""

from __future__ import annotations

import os
from collections.abc import Coroutine, Iterable, Mapping
from pathlib import Path
from typing import Any

from gitwrap.config import GitwrapConfig, load_config
from gitwrap.exceptions import BranchNotFoundError, NotFoundError, UsageError
from gitwrap.models import (
    Actor,
    Commit,
    CommitOptions,
    Diff,
    Head,
    Ref,
    RemoveOptions,
    Status,
    Tag,
    Tree,
    TreeEntry,
)
from gitwrap.parsers import (
    REF_FORMAT,
    parse_commits,
    parse_diff,
    parse_heads,
    parse_ls_tree,
    parse_remote_refs,
    parse_status,
    parse_tag_message,
    parse_tags,
)
from gitwrap.runners import GitRunner
from gitwrap.runners.options import ArgTree, OptionValue

__all__ = ["Repository", "PathArg", "Treeish"]

PathArg = str | os.PathLike[str]

Treeish = str | Commit | Ref

# rev-list only accepts the format in attached form
_RAW_PRETTY = "--pretty=raw"

_DIFF_OPTIONS = {"p": True, "M": True, "no_color": True, "no_ext_diff": True}


class Repository:
    """A git repository on disk.

    Holds the working path, the metadata directory and the bare flag, and
    owns one GitRunner for its lifetime. Instances are immutable.

    Attributes:
        path: Working directory (the repository root for bare repos).
        dot_git: Metadata directory (``path/.git``, or ``path`` if bare).
        bare: True for a repository without a working tree.
        config: Settings used for the runner and for argument defaults.

    Raises:
        ConfigError: If no config is passed and the loaded settings are
            invalid.
    """

    def __init__(
        self,
        path: PathArg,
        *,
        bare: bool = False,
        config: GitwrapConfig | None = None,
    ) -> None:
        self._path = Path(path)
        self._bare = bare
        self._dot_git = self._path if bare else self._path / ".git"
        self._config = config if config is not None else load_config()
        self._git = GitRunner(
            self._path,
            self._dot_git,
            bare=bare,
            binary=self._config.git.binary,
            timeout=self._config.git.timeout,
            env=self._config.git.env,
        )

    @classmethod
    async def init(
        cls,
        path: PathArg,
        *,
        bare: bool = False,
        config: GitwrapConfig | None = None,
    ) -> Repository:
        """Create (or reinitialise) a repository at ``path`` with ``git init``."""
        Path(path).mkdir(parents=True, exist_ok=True)
        repo = cls(path, bare=bare, config=config)
        await repo.git.run("init", {"bare": bare, "q": True})
        return repo

    def __repr__(self) -> str:
        return f"Repository(path={str(self._path)!r}, bare={self._bare})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dot_git(self) -> Path:
        return self._dot_git

    @property
    def bare(self) -> bool:
        return self._bare

    @property
    def config(self) -> GitwrapConfig:
        return self._config

    @property
    def git(self) -> GitRunner:
        """Runner used for every command this repository issues."""
        return self._git
    async def _exec(
        self,
        subcommand: str,
        options: Mapping[str, OptionValue] | None = None,
        args: ArgTree = None,
    ) -> None:
        await self._git.run(subcommand, options, args)

    # -------------------------------------------------------------------------
    # Commits and trees
    # -------------------------------------------------------------------------

    def commits(
        self,
        start: Treeish | None = None,
        max_count: int | None = None,
        skip: int = 0,
    ) -> Coroutine[Any, Any, list[Commit]]:
        """List commits reachable from ``start``, most recent first.

        Args:
            start: Starting point. Defaults to the configured branch
                ("master").
            max_count: Maximum commits to return. Defaults to the configured
                count (10).
            skip: Number of commits to skip before listing.
        """
        revision = (
            _treeish(start) if start is not None else self._config.defaults.branch
        )
        count = max_count if max_count is not None else self._config.defaults.max_count
        _check_counts(count, skip)
        return self._rev_list([revision], max_count=count, skip=skip)

    def commits_since(
        self,
        since: Treeish,
        start: Treeish | None = None,
        max_count: int | None = None,
        skip: int = 0,
    ) -> Coroutine[Any, Any, list[Commit]]:
        """Commits reachable from ``start`` but not from ``since``."""
        base = _treeish(since)
        tip = _treeish(start) if start is not None else self._config.defaults.branch
        count = max_count if max_count is not None else self._config.defaults.max_count
        _check_counts(count, skip)
        return self._rev_list([f"{base}..{tip}"], max_count=count, skip=skip)

    def get_commit(self, ref: Treeish) -> Coroutine[Any, Any, Commit]:
        """Resolve a single commit.

        Raises:
            CommandError: If git cannot resolve ``ref``.
            NotFoundError: If ``ref`` resolves to nothing.
        """
        return self._get_commit(_treeish(ref))

    async def _get_commit(self, revision: str) -> Commit:
        found = await self._rev_list([revision], max_count=1, skip=0)
        if not found:
            raise NotFoundError(f"No such commit: {revision}")
        return found[0]

    async def current_commit(self) -> Commit:
        """The commit checked out at HEAD."""
        return await self._get_commit("HEAD")

    async def _rev_list(
        self, revisions: list[str], *, max_count: int, skip: int
    ) -> list[Commit]:
        result = await self._git.run(
            "rev-list",
            {"max_count": max_count, "skip": skip},
            [_RAW_PRETTY, revisions, "--"],
        )
        return parse_commits(result.stdout, self)

    def tree(self, treeish: Treeish | None = None) -> Tree:
        """Tree bound to ``treeish`` (default branch when omitted).

        No git process runs until the tree's contents are requested.
        """
        target = (
            _treeish(treeish) if treeish is not None else self._config.defaults.branch
        )
        return Tree(id=target, repo=self)

    def tree_contents(self, treeish: Treeish) -> Coroutine[Any, Any, list[TreeEntry]]:
        """Entries directly under ``treeish``."""
        return self._ls_tree(_treeish(treeish))

    async def _ls_tree(self, treeish: str) -> list[TreeEntry]:
        result = await self._git.run("ls-tree", {"z": True}, [treeish])
        return parse_ls_tree(result.stdout, self)

    def blob_data(self, blob_id: str) -> Coroutine[Any, Any, str]:
        """Raw contents of a blob."""
        _require_text(blob_id, "blob id")
        return self._cat_blob(blob_id)

    async def _cat_blob(self, blob_id: str) -> str:
        result = await self._git.run("cat-file", {"p": True}, [blob_id], trim=False)
        return result.stdout

    def diff(
        self,
        commit_a: Treeish,
        commit_b: Treeish,
        paths: PathArg | Iterable[PathArg] | None = None,
    ) -> Coroutine[Any, Any, list[Diff]]:
        """Per-file changes between two commits.

        Args:
            commit_a: Old side of the comparison.
            commit_b: New side of the comparison.
            paths: Optional path filter; one path or several.
        """
        filters = [] if paths is None else _normalize_paths(paths, allow_empty=True)
        return self._diff([_treeish(commit_a), _treeish(commit_b), "--", filters])

    async def _diff(self, args: list[Any]) -> list[Diff]:
        result = await self._git.run("diff", _DIFF_OPTIONS, args, trim=False)
        return parse_diff(result.stdout)

    # -------------------------------------------------------------------------
    # Remotes
    # -------------------------------------------------------------------------

    async def remotes(self) -> list[Ref]:
        """Remote-tracking refs, e.g. ``origin/master``."""
        result = await self._git.run(
            "for-each-ref", {"format": REF_FORMAT}, ["refs/remotes"]
        )
        return parse_remote_refs(result.stdout, self)

    async def remote_list(self) -> list[str]:
        """Names of the configured remotes."""
        return await self._git.remote_names()

    def remote_add(self, name: str, url: str) -> Coroutine[Any, Any, None]:
        _require_text(name, "remote name")
        _require_text(url, "remote url")
        return self._exec("remote", None, ["add", name, url])

    def remote_fetch(self, name: str) -> Coroutine[Any, Any, None]:
        _require_text(name, "remote name")
        return self._exec("fetch", None, [name])

    # -------------------------------------------------------------------------
    # Working tree
    # -------------------------------------------------------------------------

    async def status(self) -> Status:
        """Status of the index and working tree."""
        result = await self._git.run("status", {"porcelain": True, "z": True})
        return parse_status(result.stdout)

    def checkout(self, treeish: Treeish) -> Coroutine[Any, Any, None]:
        return self._exec("checkout", None, [_treeish(treeish)])

    def commit(
        self, message: str, options: CommitOptions | None = None
    ) -> Coroutine[Any, Any, None]:
        """Record a commit with ``message``.

        Args:
            message: Commit message, passed as ``-m``.
            options: Extra commit flags (amend, all, allow_empty, author).
        """
        _require_text(message, "commit message")
        flags = (options or CommitOptions()).to_options()
        flags["m"] = message
        return self._exec("commit", flags)

    def add(self, files: PathArg | Iterable[PathArg]) -> Coroutine[Any, Any, None]:
        """Stage one path or several."""
        return self._exec("add", None, ["--", _normalize_paths(files)])

    def remove(
        self,
        files: PathArg | Iterable[PathArg],
        options: RemoveOptions | None = None,
    ) -> Coroutine[Any, Any, None]:
        """Remove one path or several from the index (and working tree)."""
        paths = _normalize_paths(files)
        flags = (options or RemoveOptions()).to_options()
        return self._exec("rm", flags, ["--", paths])

    def identify(self, actor: Actor) -> Coroutine[Any, Any, None]:
        """Set ``user.name`` and ``user.email`` in the repository config."""
        _require_text(actor.name, "actor name")
        return self._identify(actor)

    async def _identify(self, actor: Actor) -> None:
        await self._git.run("config", None, ["user.name", actor.name])
        await self._git.run("config", None, ["user.email", actor.email])

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    async def tags(self) -> list[Tag]:
        """Tags ordered by name."""
        result = await self._git.run(
            "for-each-ref", {"format": REF_FORMAT}, ["refs/tags"]
        )
        return parse_tags(result.stdout, self)

    def tag_message(self, name: str) -> Coroutine[Any, Any, str]:
        """Message of the annotated tag ``name``."""
        _require_text(name, "tag name")
        return self._tag_message(name)

    async def _tag_message(self, name: str) -> str:
        result = await self._git.run("cat-file", None, ["tag", f"refs/tags/{name}"])
        return parse_tag_message(result.stdout)

    def create_tag(
        self, name: str, message: str | None = None
    ) -> Coroutine[Any, Any, None]:
        """Create an annotated tag; the message defaults to the tag name."""
        _require_text(name, "tag name")
        return self._exec("tag", {"a": True, "m": message or name}, [name])

    def delete_tag(self, name: str) -> Coroutine[Any, Any, None]:
        _require_text(name, "tag name")
        return self._exec("tag", {"d": True}, [name])

    # -------------------------------------------------------------------------
    # Branches
    # -------------------------------------------------------------------------

    async def branches(self) -> list[Head]:
        """Local branches ordered by name."""
        result = await self._git.run(
            "for-each-ref", {"format": REF_FORMAT}, ["refs/heads"]
        )
        return parse_heads(result.stdout, self)

    def create_branch(
        self, name: str, start: Treeish | None = None
    ) -> Coroutine[Any, Any, None]:
        """Create branch ``name`` at ``start`` (HEAD when omitted)."""
        _require_text(name, "branch name")
        start_point = _treeish(start) if start is not None else None
        return self._exec("branch", None, [name, start_point])

    def delete_branch(self, name: str) -> Coroutine[Any, Any, None]:
        """Delete branch ``name`` even if it is not merged."""
        _require_text(name, "branch name")
        return self._exec("branch", {"D": True}, [name])

    def branch(self, name: str | None = None) -> Coroutine[Any, Any, Head]:
        """Look up a local branch; the checked-out branch when ``name`` is None.

        Raises:
            BranchNotFoundError: If no branch has that name, or HEAD points
                at a branch with no commits yet.
            CommandError: If HEAD is detached while resolving the current
                branch.
        """
        if name is not None:
            _require_text(name, "branch name")
        return self._find_branch(name)

    async def _find_branch(self, name: str | None) -> Head:
        if name is None:
            result = await self._git.run("symbolic-ref", {"short": True}, ["HEAD"])
            name = result.stdout
        for head in await self.branches():
            if head.name == name:
                return head
        raise BranchNotFoundError(name)


def _treeish(value: Treeish) -> str:
    if isinstance(value, Commit):
        return value.id
    if isinstance(value, Ref):
        return value.name
    _require_text(value, "treeish")
    return value


def _require_text(value: object, what: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise UsageError(f"A non-empty {what} is required")


def _check_counts(max_count: int, skip: int) -> None:
    if max_count < 0 or skip < 0:
        raise UsageError("max_count and skip must not be negative")


def _normalize_paths(
    files: PathArg | Iterable[PathArg], *, allow_empty: bool = False
) -> list[str]:
    """Turn one path or an iterable of paths into a list of strings."""
    if isinstance(files, (str, os.PathLike)):
        paths = [os.fspath(files)]
    else:
        paths = [os.fspath(path) for path in files]
    if not paths and not allow_empty:
        raise UsageError("At least one path is required")
    for path in paths:
        _require_text(path, "path")
    return paths
