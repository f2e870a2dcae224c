"""Parsers for ``git for-each-ref`` listings.

Listings are produced with ``REF_FORMAT``, giving one line per ref::

    <objectname> <objecttype> <refname> <peeled objectname>

The peeled id is only present for annotated tags.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from gitwrap.exceptions import ParseError
from gitwrap.models.commit import Commit
from gitwrap.models.ref import Head, Ref, Tag
from gitwrap.parsers._common import is_object_id

if TYPE_CHECKING:
    from gitwrap.repository import Repository

__all__ = [
    "HEADS_PREFIX",
    "REF_FORMAT",
    "REMOTES_PREFIX",
    "TAGS_PREFIX",
    "parse_heads",
    "parse_remote_refs",
    "parse_tag_message",
    "parse_tags",
]

REF_FORMAT = "%(objectname) %(objecttype) %(refname) %(*objectname)"

HEADS_PREFIX = "refs/heads/"
TAGS_PREFIX = "refs/tags/"
REMOTES_PREFIX = "refs/remotes/"


def _iter_refs(text: str, prefix: str) -> Iterator[tuple[str, str, str, str]]:
    """Yield ``(short_name, object_id, object_type, peeled_id)`` per line."""
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = line.split(" ")
        if len(parts) not in (3, 4):
            raise ParseError(
                f"Malformed ref line: {line!r}", command="for-each-ref", output=line
            )
        object_id, object_type, refname = parts[:3]
        peeled_id = parts[3] if len(parts) == 4 else ""
        if not is_object_id(object_id) or (peeled_id and not is_object_id(peeled_id)):
            raise ParseError(
                f"Invalid object id in ref line: {line!r}",
                command="for-each-ref",
                output=line,
            )
        if not refname.startswith(prefix) or refname == prefix:
            raise ParseError(
                f"Unexpected ref {refname!r}, expected {prefix}*",
                command="for-each-ref",
                output=line,
            )
        yield refname[len(prefix) :], object_id, object_type, peeled_id


def parse_heads(text: str, repo: Repository | None = None) -> list[Head]:
    return [
        Head(name=name, commit=Commit(id=object_id, repo=repo))
        for name, object_id, _, _ in _iter_refs(text, HEADS_PREFIX)
    ]


def parse_remote_refs(text: str, repo: Repository | None = None) -> list[Ref]:
    return [
        Ref(name=name, commit=Commit(id=object_id, repo=repo))
        for name, object_id, _, _ in _iter_refs(text, REMOTES_PREFIX)
    ]


def parse_tags(text: str, repo: Repository | None = None) -> list[Tag]:
    """Parse tag refs; annotated tags point at their peeled commit."""
    tags: list[Tag] = []
    for name, object_id, object_type, peeled_id in _iter_refs(text, TAGS_PREFIX):
        annotated = object_type == "tag"
        target = peeled_id if annotated and peeled_id else object_id
        tags.append(
            Tag(name=name, commit=Commit(id=target, repo=repo), annotated=annotated)
        )
    return tags


def parse_tag_message(text: str) -> str:
    """Extract the message from ``git cat-file tag`` output.

    Raises:
        ParseError: If the text is not a tag object.
    """
    header, separator, body = text.partition("\n\n")
    if not header.startswith("object ") or "\ntag " not in header:
        raise ParseError(
            "Output is not a tag object", command="cat-file", output=text[:200]
        )
    if not separator:
        return ""
    return body.strip("\n")
