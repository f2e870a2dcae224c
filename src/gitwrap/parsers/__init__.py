"""Pure parsers from git's textual output to entities.

Parsers never run git. Input they cannot recognise raises ParseError
instead of producing partial records.
"""

from __future__ import annotations

from gitwrap.parsers.commits import parse_actor_line, parse_commits
from gitwrap.parsers.diff import parse_diff
from gitwrap.parsers.refs import (
    REF_FORMAT,
    parse_heads,
    parse_remote_refs,
    parse_tag_message,
    parse_tags,
)
from gitwrap.parsers.status import parse_status
from gitwrap.parsers.tree import parse_ls_tree

__all__ = [
    "REF_FORMAT",
    "parse_actor_line",
    "parse_commits",
    "parse_diff",
    "parse_heads",
    "parse_ls_tree",
    "parse_remote_refs",
    "parse_status",
    "parse_tag_message",
    "parse_tags",
]
