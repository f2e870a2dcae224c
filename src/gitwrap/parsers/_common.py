from __future__ import annotations

import re

# SHA-1 (40) or SHA-256 (64) object ids
OBJECT_ID_RE = re.compile(r"^(?:[0-9a-f]{40}|[0-9a-f]{64})$")


def is_object_id(value: str) -> bool:
    return bool(OBJECT_ID_RE.match(value))


def split_nul(text: str) -> list[str]:
    """Split ``-z`` output into records, dropping empty trailing fields."""
    return [record for record in text.split("\0") if record]


_C_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}

_OCTAL_DIGITS = frozenset("01234567")


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of a path (``core.quotePath``).

    Unquoted paths are returned as-is. Octal escapes are the UTF-8 bytes
    of the original name.
    """
    if len(path) < 2 or path[0] != '"' or path[-1] != '"':
        return path
    body = path[1:-1]
    raw = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            octal = body[i + 1 : i + 4]
            if len(octal) == 3 and set(octal) <= _OCTAL_DIGITS:
                raw.append(int(octal, 8))
                i += 4
                continue
            escaped = _C_ESCAPES.get(body[i + 1])
            if escaped is not None:
                raw.append(escaped)
                i += 2
                continue
        raw.extend(char.encode("utf-8"))
        i += 1
    return raw.decode("utf-8", errors="surrogateescape")
