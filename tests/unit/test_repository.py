"""Tests for the Repository façade.

Argument resolution is checked against a mocked subprocess layer; the
remaining tests drive real temporary git repositories.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gitwrap import (
    Actor,
    Blob,
    BranchNotFoundError,
    CommandError,
    Commit,
    CommitOptions,
    ConfigError,
    GitwrapConfig,
    RemoveOptions,
    Repository,
    Tree,
    UsageError,
)

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_process() -> MagicMock:
    process = MagicMock()
    process.returncode = 0
    process.communicate = AsyncMock(return_value=(b"", b""))
    process.wait = AsyncMock()
    return process


@pytest.fixture
def exec_mock(mock_process: MagicMock) -> Iterator[AsyncMock]:
    """Patch subprocess creation and expose the mock to record argv."""
    mock = AsyncMock(return_value=mock_process)
    with patch("asyncio.create_subprocess_exec", mock):
        yield mock


def _argv(exec_mock: AsyncMock, call: int = -1) -> list[str]:
    return list(exec_mock.call_args_list[call].args)


@pytest.fixture
def repo(git_repo: Path, clean_env: None) -> Repository:
    return Repository(git_repo)


# =============================================================================
# Argument resolution (no git required)
# =============================================================================


class TestArgumentResolution:
    """How façade arguments become git command lines."""

    @pytest.mark.asyncio
    async def test_commits_defaults(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        await Repository(tmp_path).commits()

        assert _argv(exec_mock) == [
            "git",
            "rev-list",
            "--max-count",
            "10",
            "--skip",
            "0",
            "--pretty=raw",
            "master",
            "--",
        ]

    @pytest.mark.asyncio
    async def test_commits_explicit_arguments(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        await Repository(tmp_path).commits("dev", 3, skip=6)

        assert _argv(exec_mock)[2:] == [
            "--max-count",
            "3",
            "--skip",
            "6",
            "--pretty=raw",
            "dev",
            "--",
        ]

    @pytest.mark.asyncio
    async def test_commits_defaults_come_from_config(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        config = GitwrapConfig(defaults={"branch": "main", "max_count": 5})
        await Repository(tmp_path, config=config).commits()

        argv = _argv(exec_mock)
        assert argv[2:4] == ["--max-count", "5"]
        assert "main" in argv

    @pytest.mark.asyncio
    async def test_add_single_path_same_as_list(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        repo = Repository(tmp_path)
        await repo.add("f.txt")
        await repo.add(["f.txt"])

        assert _argv(exec_mock, 0) == _argv(exec_mock, 1) == [
            "git",
            "add",
            "--",
            "f.txt",
        ]

    @pytest.mark.asyncio
    async def test_commit_message_and_options(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        await Repository(tmp_path).commit("msg", CommitOptions(all=True, amend=True))
        assert _argv(exec_mock) == ["git", "commit", "-a", "--amend", "-m", "msg"]

    @pytest.mark.asyncio
    async def test_remove_with_options(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        await Repository(tmp_path).remove(
            ["a", Path("b")], RemoveOptions(cached=True, recursive=True)
        )
        assert _argv(exec_mock) == ["git", "rm", "--cached", "-r", "--", "a", "b"]

    @pytest.mark.asyncio
    async def test_create_tag_message_defaults_to_name(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        await Repository(tmp_path).create_tag("v2.0")
        assert _argv(exec_mock) == ["git", "tag", "-a", "-m", "v2.0", "v2.0"]

    @pytest.mark.asyncio
    async def test_diff_command_line(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        commit = Commit(id="1" * 40)
        await Repository(tmp_path).diff(commit, "HEAD", "src")

        argv = _argv(exec_mock)
        assert argv[:2] == ["git", "diff"]
        assert argv[-4:] == ["1" * 40, "HEAD", "--", "src"]

    @pytest.mark.asyncio
    async def test_bare_repository_sets_git_dir(
        self, tmp_path: Path, exec_mock: AsyncMock, clean_env: None
    ) -> None:
        await Repository(tmp_path, bare=True).status()
        assert exec_mock.call_args.kwargs["env"]["GIT_DIR"] == str(tmp_path)

    @pytest.mark.parametrize(
        "call",
        [
            lambda r: r.commit(""),
            lambda r: r.add([]),
            lambda r: r.remove(""),
            lambda r: r.create_branch(""),
            lambda r: r.delete_tag("  "),
            lambda r: r.remote_add("origin", ""),
            lambda r: r.commits(max_count=-1),
            lambda r: r.branch(""),
            lambda r: r.blob_data(""),
            lambda r: r.identify(Actor("")),
        ],
    )
    def test_usage_errors_raise_at_call_site(
        self,
        tmp_path: Path,
        exec_mock: AsyncMock,
        clean_env: None,
        call: Callable[[Repository], object],
    ) -> None:
        # Raised when the operation is called, without awaiting it
        with pytest.raises(UsageError):
            call(Repository(tmp_path))
        exec_mock.assert_not_called()

    def test_invalid_env_config_raises_config_error(
        self, tmp_path: Path, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITWRAP_DEFAULTS__MAX_COUNT", "0")

        with pytest.raises(ConfigError) as exc_info:
            Repository(tmp_path)
        assert exc_info.value.field == "defaults.max_count"

    def test_invalid_project_config_raises_config_error(
        self, tmp_path: Path, clean_env: None
    ) -> None:
        Path("gitwrap.yaml").write_text("git:\n  timeout: -1\n")

        with pytest.raises(ConfigError):
            Repository(tmp_path)

    def test_properties(self, tmp_path: Path, clean_env: None) -> None:
        repo = Repository(tmp_path)
        assert repo.path == tmp_path
        assert repo.dot_git == tmp_path / ".git"
        assert repo.bare is False

        bare = Repository(tmp_path, bare=True)
        assert bare.dot_git == tmp_path
        assert bare.git.bare is True

    def test_tree_is_lazy(self, tmp_path: Path, clean_env: None) -> None:
        with patch("asyncio.create_subprocess_exec") as exec_mock:
            tree = Repository(tmp_path).tree()
        assert isinstance(tree, Tree)
        assert tree.id == "master"
        exec_mock.assert_not_called()


# =============================================================================
# Commits, trees and blobs
# =============================================================================


class TestCommits:
    """Commit queries against a real repository."""

    @pytest.mark.asyncio
    async def test_initial_commit(self, repo: Repository) -> None:
        (commit,) = await repo.commits()

        assert commit.message == "Initial commit"
        assert commit.author == Actor("Test User", "test@example.com")
        assert commit.parent_ids == ()
        assert commit.repo is repo

    @pytest.mark.asyncio
    async def test_newest_first_with_skip_and_count(
        self, repo: Repository, git_repo: Path, commit: Callable[..., str]
    ) -> None:
        second = commit(git_repo, "a.txt", "a\n", "Second")
        third = commit(git_repo, "b.txt", "b\n", "Third")

        assert [c.id for c in await repo.commits()][:2] == [third, second]
        assert [c.id for c in await repo.commits("master", 1, skip=1)] == [second]

    @pytest.mark.asyncio
    async def test_parents_and_get_commit(
        self, repo: Repository, git_repo: Path, commit: Callable[..., str]
    ) -> None:
        first = (await repo.current_commit()).id
        second = commit(git_repo, "a.txt", "a\n", "Second")

        head = await repo.get_commit("HEAD")
        assert head.id == second
        assert [p.id for p in await head.parents()] == [first]

    @pytest.mark.asyncio
    async def test_commits_since(
        self, repo: Repository, git_repo: Path, commit: Callable[..., str]
    ) -> None:
        base = await repo.current_commit()
        newer = commit(git_repo, "a.txt", "a\n", "Second")

        since = await repo.commits_since(base)
        assert [c.id for c in since] == [newer]

    @pytest.mark.asyncio
    async def test_unknown_revision_raises_with_stderr(self, repo: Repository) -> None:
        with pytest.raises(CommandError) as exc_info:
            await repo.commits("no-such-branch")

        error = exc_info.value
        assert "no-such-branch" in error.message
        assert error.message == error.stderr
        assert error.returncode != 0

    @pytest.mark.asyncio
    async def test_tree_and_blob(
        self, repo: Repository, git_repo: Path, commit: Callable[..., str]
    ) -> None:
        commit(git_repo, "src/app.py", "print('hi')\n", "Add app")

        tree = (await repo.current_commit()).tree()
        names = sorted(entry.name for entry in await tree.contents())
        assert names == ["README.md", "src"]

        app = await tree.find("src/app.py")
        assert isinstance(app, Blob)
        assert await app.data() == "print('hi')\n"

    @pytest.mark.asyncio
    async def test_tree_by_branch_name(self, repo: Repository) -> None:
        blobs = await repo.tree("master").blobs()
        assert [b.name for b in blobs] == ["README.md"]


# =============================================================================
# Working tree
# =============================================================================


class TestWorkingTree:
    """Status, add, remove, commit and checkout."""

    @pytest.mark.asyncio
    async def test_clean_status(self, repo: Repository) -> None:
        assert (await repo.status()).clean is True

    @pytest.mark.asyncio
    async def test_status_codes(self, repo: Repository, git_repo: Path) -> None:
        (git_repo / "README.md").write_text("# Changed\n")
        (git_repo / "new.txt").write_text("new\n")
        (git_repo / "staged.txt").write_text("staged\n")
        await repo.add("staged.txt")

        status = await repo.status()

        assert status["README.md"].code == " M"
        assert status["new.txt"].code == "??"
        assert status["staged.txt"].code == "A "
        assert status["staged.txt"].staged is True

    @pytest.mark.asyncio
    async def test_add_and_commit(self, repo: Repository, git_repo: Path) -> None:
        (git_repo / "one.txt").write_text("1\n")
        (git_repo / "two.txt").write_text("2\n")

        await repo.add(["one.txt", git_repo / "two.txt"])
        await repo.commit("Add numbers")

        (latest, _) = await repo.commits()
        assert latest.subject == "Add numbers"
        assert (await repo.status()).clean is True

    @pytest.mark.asyncio
    async def test_commit_with_nothing_staged_fails(self, repo: Repository) -> None:
        with pytest.raises(CommandError):
            await repo.commit("Nothing here")

    @pytest.mark.asyncio
    async def test_allow_empty_commit(self, repo: Repository) -> None:
        await repo.commit("Empty", CommitOptions(allow_empty=True))
        assert (await repo.current_commit()).subject == "Empty"

    @pytest.mark.asyncio
    async def test_remove_cached_keeps_file(
        self, repo: Repository, git_repo: Path, git: Callable[..., str]
    ) -> None:
        await repo.remove("README.md", RemoveOptions(cached=True))

        assert git(git_repo, "ls-files") == ""
        assert (git_repo / "README.md").exists()

    @pytest.mark.asyncio
    async def test_remove_deletes_file(self, repo: Repository, git_repo: Path) -> None:
        await repo.remove(["README.md"])

        assert (await repo.status())["README.md"].code == "D "
        assert not (git_repo / "README.md").exists()

    @pytest.mark.asyncio
    async def test_identify_writes_repository_config(
        self, repo: Repository, git_repo: Path, git: Callable[..., str]
    ) -> None:
        await repo.identify(Actor("Ada Lovelace", "ada@example.com"))

        assert git(git_repo, "config", "user.name") == "Ada Lovelace"
        assert git(git_repo, "config", "user.email") == "ada@example.com"

    @pytest.mark.asyncio
    async def test_commit_author_option(self, repo: Repository, git_repo: Path) -> None:
        (git_repo / "notes.txt").write_text("notes\n")
        await repo.add("notes.txt")
        author = Actor("Ada Lovelace", "ada@example.com")
        await repo.commit("Notes", CommitOptions(author=author))

        assert (await repo.current_commit()).author == author

    @pytest.mark.asyncio
    async def test_checkout_switches_branch(self, repo: Repository) -> None:
        await repo.create_branch("dev")
        await repo.checkout("dev")
        assert (await repo.branch()).name == "dev"


# =============================================================================
# Diffs
# =============================================================================


class TestDiff:
    """Diffs between two commits."""

    @pytest.mark.asyncio
    async def test_diff_between_commits(
        self, repo: Repository, git_repo: Path, commit: Callable[..., str]
    ) -> None:
        first = await repo.current_commit()
        commit(git_repo, "README.md", "# Test Repo\nmore\n", "Extend readme")
        second = commit(git_repo, "added.txt", "x\n", "Add file")

        diffs = await repo.diff(first, second)
        by_path = {d.b_path: d for d in diffs}

        assert by_path["README.md"].added == 1
        assert by_path["added.txt"].new_file is True

    @pytest.mark.asyncio
    async def test_diff_path_filter(
        self, repo: Repository, git_repo: Path, commit: Callable[..., str]
    ) -> None:
        first = await repo.current_commit()
        commit(git_repo, "a.txt", "a\n", "A")
        second = commit(git_repo, "b.txt", "b\n", "B")

        diffs = await repo.diff(first, second, ["b.txt"])
        assert [d.b_path for d in diffs] == ["b.txt"]

    @pytest.mark.asyncio
    async def test_diff_detects_rename(
        self, repo: Repository, git_repo: Path, git: Callable[..., str]
    ) -> None:
        first = await repo.current_commit()
        git(git_repo, "mv", "README.md", "INTRO.md")
        git(git_repo, "commit", "-q", "-m", "Rename")

        (diff,) = await repo.diff(first, "HEAD")
        assert diff.renamed_file is True
        assert (diff.a_path, diff.b_path) == ("README.md", "INTRO.md")

    @pytest.mark.asyncio
    async def test_non_ascii_path(
        self, repo: Repository, git_repo: Path, commit: Callable[..., str]
    ) -> None:
        first = await repo.current_commit()
        second = commit(git_repo, "café.txt", "bonjour\n", "Add café")

        diffs = await repo.diff(first, second)

        assert [(d.a_path, d.b_path) for d in diffs] == [("café.txt", "café.txt")]
        assert diffs[0].new_file is True

    @pytest.mark.asyncio
    async def test_identical_commits(self, repo: Repository) -> None:
        assert await repo.diff("HEAD", "HEAD") == []


# =============================================================================
# Branches and tags
# =============================================================================


class TestBranches:
    """Branch listing and lookup."""

    @pytest.mark.asyncio
    async def test_current_branch(self, repo: Repository) -> None:
        head = await repo.branch()
        assert head.name == "master"
        assert head.commit.id == (await repo.current_commit()).id

    @pytest.mark.asyncio
    async def test_missing_branch_names_the_branch(self, repo: Repository) -> None:
        with pytest.raises(BranchNotFoundError) as exc_info:
            await repo.branch("dev")
        assert "dev" in str(exc_info.value)
        assert exc_info.value.branch_name == "dev"

    @pytest.mark.asyncio
    async def test_create_lookup_delete(self, repo: Repository) -> None:
        await repo.create_branch("dev")
        await repo.create_branch("feature/x", "master")

        assert [h.name for h in await repo.branches()] == [
            "dev",
            "feature/x",
            "master",
        ]
        assert (await repo.branch("dev")).commit.id == (await repo.branch()).commit.id

        await repo.delete_branch("dev")
        with pytest.raises(BranchNotFoundError):
            await repo.branch("dev")


class TestTags:
    """Tag round-trip."""

    @pytest.mark.asyncio
    async def test_create_list_delete(self, repo: Repository) -> None:
        head = await repo.current_commit()
        await repo.create_tag("v1.0", "First release")

        (tag,) = await repo.tags()
        assert tag.name == "v1.0"
        assert tag.annotated is True
        assert tag.commit.id == head.id
        assert await tag.message() == "First release"

        await repo.delete_tag("v1.0")
        assert await repo.tags() == []

    @pytest.mark.asyncio
    async def test_lightweight_tag(
        self, repo: Repository, git_repo: Path, git: Callable[..., str]
    ) -> None:
        git(git_repo, "tag", "light")

        (tag,) = await repo.tags()
        assert tag.annotated is False
        assert await tag.message() == ""


# =============================================================================
# Remotes and bare repositories
# =============================================================================


class TestRemotes:
    """Remote configuration and remote-tracking refs."""

    @pytest.mark.asyncio
    async def test_add_fetch_and_list(
        self, repo: Repository, git_repo: Path, tmp_path: Path, git: Callable[..., str]
    ) -> None:
        upstream = tmp_path / "upstream.git"
        git(tmp_path, "clone", "-q", "--bare", str(git_repo), str(upstream))

        assert await repo.remote_list() == []
        assert await repo.remotes() == []

        await repo.remote_add("origin", str(upstream))
        await repo.remote_fetch("origin")

        assert await repo.remote_list() == ["origin"]
        assert "origin/master" in [ref.name for ref in await repo.remotes()]

    @pytest.mark.asyncio
    async def test_fetch_unknown_remote(self, repo: Repository) -> None:
        with pytest.raises(CommandError) as exc_info:
            await repo.remote_fetch("nowhere")
        assert exc_info.value.message == exc_info.value.stderr


class TestBareRepository:
    """Operations on a repository without a working tree."""

    @pytest.mark.asyncio
    async def test_read_operations(
        self,
        git_repo: Path,
        tmp_path: Path,
        clean_env: None,
        git: Callable[..., str],
    ) -> None:
        bare_path = tmp_path / "bare.git"
        git(tmp_path, "clone", "-q", "--bare", str(git_repo), str(bare_path))

        bare = Repository(bare_path, bare=True)

        (commit,) = await bare.commits()
        assert commit.subject == "Initial commit"
        assert [h.name for h in await bare.branches()] == ["master"]
        assert [e.name for e in await bare.tree().contents()] == ["README.md"]

    @pytest.mark.asyncio
    async def test_init(self, tmp_path: Path, clean_env: None) -> None:
        if shutil.which("git") is None:
            pytest.skip("git executable not available")
        bare = await Repository.init(tmp_path / "new.git", bare=True)
        assert bare.bare is True
        assert (tmp_path / "new.git" / "HEAD").exists()

        work = await Repository.init(tmp_path / "work")
        assert (tmp_path / "work" / ".git").is_dir()
        assert (await work.status()).clean is True
