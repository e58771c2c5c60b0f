"""RFC 6901 JSON Pointer syntax.

Only the syntax lives here: a pointer string becomes an ordered tuple of
unescaped reference tokens. Resolving tokens against a document is the job of
the scanner.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import PointerSyntaxError


_BAD_ESCAPE_RE = re.compile(r"~(?![01])")


def escape_token(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    # ~1 must be handled before ~0 so "~01" decodes to "~1", not "/".
    return token.replace("~1", "/").replace("~0", "~")


@dataclass(frozen=True, slots=True)
class JsonPointer:
    raw: str
    tokens: tuple[str, ...]

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "JsonPointer":
        toks = tuple(tokens)
        return cls(raw="".join("/" + escape_token(t) for t in toks), tokens=toks)

    @property
    def is_root(self) -> bool:
        return not self.tokens

    def __str__(self) -> str:
        return self.raw


def parse_pointer(s: str) -> JsonPointer:
    if s == "":
        return JsonPointer(raw=s, tokens=())
    if not s.startswith("/"):
        raise PointerSyntaxError(s, "must be empty or start with '/'")
    parts = s[1:].split("/")
    for part in parts:
        m = _BAD_ESCAPE_RE.search(part)
        if m:
            raise PointerSyntaxError(s, f"'~' at index {m.start()} of {part!r} must be followed by 0 or 1")
    return JsonPointer(raw=s, tokens=tuple(unescape_token(p) for p in parts))


def as_pointer(p: str | JsonPointer) -> JsonPointer:
    if isinstance(p, JsonPointer):
        return p
    if isinstance(p, str):
        return parse_pointer(p)
    raise TypeError(f"expected str or JsonPointer, got {type(p)!r}")
