"""Async runner for git subprocesses.

GitRunner turns a structured invocation (subcommand, options mapping,
positional arguments) into exactly one ``git`` process, waits for it
without blocking the event loop, and returns the captured output.
"""

from __future__ import annotations

import asyncio
import os
import time
from collections.abc import Mapping, Sequence
from pathlib import Path

from gitwrap.exceptions import (
    CommandError,
    GitNotFoundError,
    WorkingDirectoryError,
)
from gitwrap.logging import get_logger
from gitwrap.runners.models import CommandInvocation, CommandResult
from gitwrap.runners.options import ArgTree, OptionValue

__all__ = ["GitRunner", "GIT_DIR_ENV_VAR"]

logger = get_logger(__name__)

#: Environment variable git reads to locate the metadata directory
GIT_DIR_ENV_VAR = "GIT_DIR"

# Seconds to wait after SIGTERM before SIGKILL on timeout
TERMINATION_GRACE_PERIOD: float = 2.0


class GitRunner:
    """Execute git subcommands for one repository.

    Every call spawns a single process with the repository path as its
    working directory. For bare repositories the metadata directory is
    exported as ``GIT_DIR``. There are no retries: a nonzero exit raises
    CommandError carrying the captured standard error.

    Attributes:
        path: Working directory for every git process.
        dot_git: Metadata directory of the repository.
        bare: True if the repository has no separate working tree.
        binary: Git executable name or path.
        timeout: Seconds before a process is terminated (None = never).

    Example:
        ```python
        runner = GitRunner(Path("/srv/project"))
        result = await runner.run("log", {"max_count": 1, "format": "%H"})
        print(result.stdout)
        ```
    """

    def __init__(
        self,
        path: Path,
        dot_git: Path | None = None,
        *,
        bare: bool = False,
        binary: str = "git",
        timeout: float | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._path = path
        self._dot_git = dot_git if dot_git is not None else path / ".git"
        self._bare = bare
        self._binary = binary
        self._timeout = timeout
        self._extra_env = dict(env or {})

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
    def binary(self) -> str:
        return self._binary

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def _validate_cwd(self) -> None:
        """Validate working directory exists.

        Raises:
            WorkingDirectoryError: If directory does not exist.
        """
        if not self._path.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {self._path}",
                path=self._path,
            )

    def build_env(self) -> dict[str, str]:
        """Build the process environment: parent env, extra env, GIT_DIR."""
        env = os.environ.copy()
        env.update(self._extra_env)
        if self._bare:
            env[GIT_DIR_ENV_VAR] = str(self._dot_git)
        return env

    async def run(
        self,
        subcommand: str,
        options: Mapping[str, OptionValue] | None = None,
        args: ArgTree = None,
        *,
        trim: bool = True,
    ) -> CommandResult:
        """Run one git subcommand and return its output.

        Args:
            subcommand: Git subcommand name (e.g. "status").
            options: Flags to marshal; see ``options_to_argv``.
            args: Positional arguments, possibly nested.
            trim: Strip trailing whitespace from stdout. Callers
                that need byte-exact output (patches, blob contents) pass
                False.

        Returns:
            CommandResult of the successful process.

        Raises:
            UsageError: If the subcommand or an option name is empty.
            WorkingDirectoryError: If the repository path does not exist.
            GitNotFoundError: If the git executable cannot be started.
            CommandError: If git exits with a nonzero status.
        """
        invocation = CommandInvocation.create(subcommand, options, args)
        return await self.run_invocation(invocation, trim=trim)

    async def run_invocation(
        self,
        invocation: CommandInvocation,
        *,
        trim: bool = True,
    ) -> CommandResult:
        """Run a prepared invocation. See ``run`` for the error contract."""
        command = invocation.argv(self._binary)
        self._validate_cwd()

        logger.debug("git_command_started", command=command, cwd=str(self._path))
        result = await self._execute_once(command, self.build_env(), trim=trim)

        if not result.success:
            logger.debug(
                "git_command_failed",
                command=command,
                returncode=result.returncode,
                timed_out=result.timed_out,
                duration_ms=result.duration_ms,
            )
            message = result.stderr
            if result.timed_out:
                message = (
                    f"git {invocation.subcommand} timed out after {self._timeout}s"
                )
            raise CommandError(
                message,
                command=command,
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
                timed_out=result.timed_out,
            )

        logger.debug(
            "git_command_finished",
            command=command,
            returncode=result.returncode,
            duration_ms=result.duration_ms,
        )
        return result

    async def remote_names(self) -> list[str]:
        """Names of the configured remotes, one per ``git remote`` line."""
        result = await self.run("remote")
        return result.lines

    async def _execute_once(
        self,
        command: Sequence[str],
        env: dict[str, str],
        *,
        trim: bool,
    ) -> CommandResult:
        """Execute a command once and capture its output.

        Raises:
            GitNotFoundError: If the executable is missing or not runnable.
        """
        start_time = time.monotonic()
        timed_out = False

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._path,
                env=env,
            )
        except FileNotFoundError as e:
            raise GitNotFoundError(
                f"Command not found: {command[0]}", command=command
            ) from e
        except PermissionError as e:
            raise GitNotFoundError(
                f"Permission denied: {command[0]}", command=command
            ) from e

        stdout_bytes = b""
        stderr_bytes = b""
        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(),
                timeout=self._timeout,
            )
            returncode = process.returncode or 0
        except TimeoutError:
            # Graceful termination: SIGTERM first, SIGKILL after grace period
            timed_out = True
            process.terminate()
            try:
                await asyncio.wait_for(
                    process.wait(), timeout=TERMINATION_GRACE_PERIOD
                )
            except TimeoutError:
                process.kill()
                await process.wait()
            returncode = -1

        stdout_str = stdout_bytes.decode("utf-8", errors="replace")
        stderr_str = stderr_bytes.decode("utf-8", errors="replace").rstrip()
        if trim:
            stdout_str = stdout_str.rstrip()

        return CommandResult(
            returncode=returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration_ms=int((time.monotonic() - start_time) * 1000),
            timed_out=timed_out,
        )
