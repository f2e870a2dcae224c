"""Parser for ``git status --porcelain -z`` (format v1).

Records are ``XY <path>``; renames and copies are followed by an extra
record holding the source path.
"""

from __future__ import annotations

from types import MappingProxyType

from gitwrap.exceptions import ParseError
from gitwrap.models.status import FileStatus, Status
from gitwrap.parsers._common import split_nul

__all__ = ["parse_status"]

_STATUS_CODES = frozenset(" MTADRCU?!")


def parse_status(text: str) -> Status:
    """Parse porcelain records into a Status keyed by path.

    Raises:
        ParseError: On a record without a valid ``XY`` prefix.
    """
    files: dict[str, FileStatus] = {}
    records = iter(split_nul(text))
    for record in records:
        code, path = record[:2], record[3:]
        if (
            len(record) < 4
            or record[2] != " "
            or not set(code) <= _STATUS_CODES
            or code == "  "
        ):
            raise ParseError(
                f"Malformed status entry: {record!r}", command="status", output=record
            )
        orig_path = None
        if code[0] in "RC" or code[1] in "RC":
            orig_path = next(records, None)
            if orig_path is None:
                raise ParseError(
                    f"Rename entry without source path: {record!r}",
                    command="status",
                    output=record,
                )
        files[path] = FileStatus(
            path=path,
            code=code,
            staged=code[0] not in " ?!",
            tracked=code != "??",
            orig_path=orig_path,
        )
    return Status(files=MappingProxyType(files))
