"""Parser for ``git diff -p`` output.

Files and hunks are split with ``unidiff``; the git extended header lines
(``index``, ``new file mode``, ``rename from`` ...) that unidiff keeps in
each file's patch info are read here.
"""

from __future__ import annotations

import re

from unidiff import PatchedFile, PatchSet
from unidiff.errors import UnidiffParseError

from gitwrap.exceptions import ParseError
from gitwrap.models.diff import Diff
from gitwrap.parsers._common import unquote_path

__all__ = ["parse_diff"]

DEV_NULL = "/dev/null"

_INDEX_RE = re.compile(
    r"^index (?P<a>[0-9a-f]+)\.\.(?P<b>[0-9a-f]+)(?: (?P<mode>\d+))?$"
)
_NEW_FILE_RE = re.compile(r"^new file mode (?P<mode>\d+)$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode (?P<mode>\d+)$")
_OLD_MODE_RE = re.compile(r"^old mode (?P<mode>\d+)$")
_NEW_MODE_RE = re.compile(r"^new mode (?P<mode>\d+)$")
_SIMILARITY_RE = re.compile(r"^similarity index (?P<percent>\d+)%$")
_RENAME_FROM_RE = re.compile(r"^rename from (?P<path>.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (?P<path>.+)$")


def _strip_prefix(path: str, prefix: str) -> str | None:
    path = unquote_path(path)
    if path == DEV_NULL:
        return None
    if path.startswith(prefix):
        return path[len(prefix) :]
    return path


def _to_diff(patched_file: PatchedFile) -> Diff:
    a_blob = b_blob = a_mode = b_mode = None
    new_file = deleted_file = False
    similarity: int | None = None
    rename_from = rename_to = None

    for raw_line in patched_file.patch_info:
        line = raw_line.rstrip("\r\n")
        if match := _INDEX_RE.match(line):
            a_blob, b_blob = match["a"], match["b"]
            if match["mode"]:
                a_mode = b_mode = match["mode"]
        elif match := _NEW_FILE_RE.match(line):
            new_file = True
            b_mode = match["mode"]
        elif match := _DELETED_FILE_RE.match(line):
            deleted_file = True
            a_mode = match["mode"]
        elif match := _OLD_MODE_RE.match(line):
            a_mode = match["mode"]
        elif match := _NEW_MODE_RE.match(line):
            b_mode = match["mode"]
        elif match := _SIMILARITY_RE.match(line):
            similarity = int(match["percent"])
        elif match := _RENAME_FROM_RE.match(line):
            rename_from = unquote_path(match["path"])
        elif match := _RENAME_TO_RE.match(line):
            rename_to = unquote_path(match["path"])

    a_path = rename_from or _strip_prefix(patched_file.source_file or "", "a/")
    b_path = rename_to or _strip_prefix(patched_file.target_file or "", "b/")
    if new_file or a_path is None:
        a_path = b_path
    if deleted_file or b_path is None:
        b_path = a_path
    if not a_path or not b_path:
        raise ParseError(
            "Diff entry without a file path",
            command="diff",
            output=str(patched_file),
        )

    return Diff(
        a_path=a_path,
        b_path=b_path,
        a_blob=a_blob,
        b_blob=b_blob,
        a_mode=a_mode,
        b_mode=b_mode,
        new_file=new_file,
        deleted_file=deleted_file,
        renamed_file=a_path != b_path,
        similarity=similarity,
        binary=patched_file.is_binary_file,
        added=patched_file.added,
        removed=patched_file.removed,
        diff=str(patched_file),
    )


def parse_diff(text: str) -> list[Diff]:
    """Split a multi-file patch into one Diff per file, in output order.

    Raises:
        ParseError: If unidiff rejects the patch, or non-empty output
            contains no file sections.
    """
    if not text.strip():
        return []
    try:
        patch = PatchSet.from_string(text)
    except UnidiffParseError as e:
        raise ParseError(f"Malformed diff: {e}", command="diff") from e
    if not len(patch):
        raise ParseError(
            "Diff output contains no file sections", command="diff", output=text[:200]
        )
    return [_to_diff(patched_file) for patched_file in patch]
