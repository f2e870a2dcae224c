from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["Actor"]

_ACTOR_RE = re.compile(r"^(?P<name>.*?)\s*<(?P<email>[^<>]*)>$")


@dataclass(frozen=True, slots=True)
class Actor:
    """Author or committer identity.

    Attributes:
        name: Display name.
        email: Email address, empty when unknown.
    """

    name: str
    email: str = ""

    @classmethod
    def from_string(cls, text: str) -> Actor:
        """Parse ``Name <email>``; text without an address becomes the name.

        Examples:
            >>> Actor.from_string("Ada Lovelace <ada@example.com>")
            Actor(name='Ada Lovelace', email='ada@example.com')
            >>> Actor.from_string("ada")
            Actor(name='ada', email='')
        """
        text = text.strip()
        match = _ACTOR_RE.match(text)
        if match:
            return cls(name=match.group("name"), email=match.group("email"))
        return cls(name=text)

    def __str__(self) -> str:
        if self.email:
            return f"{self.name} <{self.email}>"
        return self.name
