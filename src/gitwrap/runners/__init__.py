"""Subprocess execution for git.

GitRunner spawns one git process per call; options_to_argv and
flatten_args implement the argument marshalling rules.
"""

from __future__ import annotations

from gitwrap.runners.git import GIT_DIR_ENV_VAR, GitRunner
from gitwrap.runners.models import CommandInvocation, CommandResult
from gitwrap.runners.options import (
    build_argv,
    flatten_args,
    format_flag,
    options_to_argv,
)

__all__ = [
    "CommandInvocation",
    "CommandResult",
    "GitRunner",
    "GIT_DIR_ENV_VAR",
    "build_argv",
    "flatten_args",
    "format_flag",
    "options_to_argv",
]
