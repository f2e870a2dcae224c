from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from click.testing import CliRunner

# Keep the developer's global git config out of test repositories
_GIT_TEST_ENV = {
    "GIT_CONFIG_NOSYSTEM": "1",
    "GIT_AUTHOR_NAME": "Test User",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test User",
    "GIT_COMMITTER_EMAIL": "test@example.com",
}


def run_git(cwd: Path, *args: str) -> str:
    """Run git synchronously for test setup and return stripped stdout."""
    completed = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
        env={**os.environ, **_GIT_TEST_ENV},
    )
    return completed.stdout.strip()


def commit_file(repo_path: Path, name: str, content: str, message: str) -> str:
    """Write a file, commit it, and return the new commit id."""
    target = repo_path / name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content)
    run_git(repo_path, "add", "--", name)
    run_git(repo_path, "commit", "-q", "-m", message)
    return run_git(repo_path, "rev-parse", "HEAD")


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog to write to stderr at WARNING for every test."""
    from gitwrap.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def clean_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Remove GITWRAP_ variables and hide any user or project config file."""
    for key in list(os.environ):
        if key.startswith("GITWRAP_"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a repository on branch master with one commit of README.md."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    for key, value in _GIT_TEST_ENV.items():
        monkeypatch.setenv(key, value)

    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    run_git(repo_path, "init", "-q")
    run_git(repo_path, "symbolic-ref", "HEAD", "refs/heads/master")
    run_git(repo_path, "config", "user.name", "Test User")
    run_git(repo_path, "config", "user.email", "test@example.com")
    run_git(repo_path, "config", "commit.gpgsign", "false")
    run_git(repo_path, "config", "tag.gpgsign", "false")
    commit_file(repo_path, "README.md", "# Test Repo\n", "Initial commit")
    return repo_path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def git() -> Callable[..., str]:
    """``git(cwd, *args)`` runs git synchronously for test setup."""
    return run_git


@pytest.fixture
def commit() -> Callable[[Path, str, str, str], str]:
    """``commit(repo_path, name, content, message)`` returns the new commit id."""
    return commit_file
