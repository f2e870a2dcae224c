"""Parser for ``git rev-list --pretty=raw`` output.

Each commit is a block of the form::

    commit <id>
    tree <id>
    parent <id>            (zero or more)
    author <name> <<email>> <epoch> <tz>
    committer <name> <<email>> <epoch> <tz>
    <other headers, continuation lines start with a space>

        <message, indented by four spaces>
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from gitwrap.exceptions import ParseError
from gitwrap.models.actor import Actor
from gitwrap.models.commit import Commit
from gitwrap.parsers._common import is_object_id

if TYPE_CHECKING:
    from gitwrap.repository import Repository

__all__ = ["parse_actor_line", "parse_commits"]

_ACTOR_LINE_RE = re.compile(
    r"^(?P<actor>.*<[^<>]*>) (?P<epoch>-?\d+) "
    r"(?P<tz>[+-])(?P<hh>\d{2})(?P<mm>\d{2})$"
)

_REQUIRED_HEADERS = ("tree", "author", "committer")

MESSAGE_INDENT = "    "


def parse_actor_line(value: str) -> tuple[Actor, datetime]:
    """Parse ``Name <email> 1700000000 +0200`` into an actor and timestamp.

    The timestamp keeps the offset recorded in the commit.

    Raises:
        ParseError: If the value does not have that shape.
    """
    match = _ACTOR_LINE_RE.match(value.strip())
    if not match:
        raise ParseError(f"Malformed actor line: {value!r}", output=value)
    offset = timedelta(hours=int(match["hh"]), minutes=int(match["mm"]))
    if match["tz"] == "-":
        offset = -offset
    date = datetime.fromtimestamp(int(match["epoch"]), tz=timezone(offset))
    return Actor.from_string(match["actor"]), date


def parse_commits(text: str, repo: Repository | None = None) -> list[Commit]:
    """Parse raw rev-list output into commits, preserving order.

    Raises:
        ParseError: On any block that is not a well-formed raw commit.
    """
    lines = text.splitlines()
    commits: list[Commit] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue
        if not line.startswith("commit "):
            raise ParseError(
                f"Expected 'commit <id>', got: {line!r}",
                command="rev-list",
                output=line,
            )
        fields = line.split()
        commit_id = fields[1] if len(fields) > 1 else ""
        if not is_object_id(commit_id):
            raise ParseError(
                f"Invalid commit id: {commit_id!r}", command="rev-list", output=line
            )
        i += 1

        headers: dict[str, list[str]] = {}
        while i < len(lines) and lines[i] != "":
            header = lines[i]
            i += 1
            if header.startswith(" "):
                # Continuation of a multi-line header (gpgsig, mergetag)
                if not headers:
                    raise ParseError(
                        f"Continuation line before any header in {commit_id}",
                        command="rev-list",
                        output=header,
                    )
                continue
            key, _, value = header.partition(" ")
            headers.setdefault(key, []).append(value)

        message_lines: list[str] = []
        while i < len(lines) and not lines[i].startswith("commit "):
            body_line = lines[i]
            if body_line.startswith(MESSAGE_INDENT):
                message_lines.append(body_line[len(MESSAGE_INDENT) :])
            elif body_line.strip():
                raise ParseError(
                    f"Unindented message line in {commit_id}: {body_line!r}",
                    command="rev-list",
                    output=body_line,
                )
            else:
                message_lines.append("")
            i += 1

        commits.append(_build_commit(commit_id, headers, message_lines, repo))
    return commits


def _build_commit(
    commit_id: str,
    headers: dict[str, list[str]],
    message_lines: list[str],
    repo: Repository | None,
) -> Commit:
    missing = [key for key in _REQUIRED_HEADERS if key not in headers]
    if missing:
        raise ParseError(
            f"Commit {commit_id} is missing headers: {', '.join(missing)}",
            command="rev-list",
        )
    tree_id = headers["tree"][0]
    parent_ids = tuple(headers.get("parent", ()))
    for object_id in (tree_id, *parent_ids):
        if not is_object_id(object_id):
            raise ParseError(
                f"Invalid object id in commit {commit_id}: {object_id!r}",
                command="rev-list",
                output=object_id,
            )
    author, authored_date = parse_actor_line(headers["author"][0])
    committer, committed_date = parse_actor_line(headers["committer"][0])
    return Commit(
        id=commit_id,
        parent_ids=parent_ids,
        tree_id=tree_id,
        author=author,
        authored_date=authored_date,
        committer=committer,
        committed_date=committed_date,
        message="\n".join(message_lines).strip("\n"),
        repo=repo,
    )
