"""Subcommands registered on the ``gitwrap`` group."""

from __future__ import annotations

from gitwrap.cli.commands.diff import diff
from gitwrap.cli.commands.log import log
from gitwrap.cli.commands.refs import branches, remotes, tags
from gitwrap.cli.commands.status import status
from gitwrap.cli.commands.tree import tree

__all__ = ["branches", "diff", "log", "remotes", "status", "tags", "tree"]
