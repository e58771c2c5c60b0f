from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    # Literals
    STRING = "STRING"
    NUMBER = "NUMBER"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    COLON = ":"
    COMMA = ","

    EOF = "EOF"


SCALARS = frozenset(
    {TokenKind.STRING, TokenKind.NUMBER, TokenKind.TRUE, TokenKind.FALSE, TokenKind.NULL}
)
VALUE_START = SCALARS | {TokenKind.LBRACE, TokenKind.LBRACKET}


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed JSON token.

    ``value`` is the decoded text for strings and the raw lexeme otherwise.
    ``start``/``end`` are offsets into the source, half-open.
    """

    kind: TokenKind
    value: str
    start: int
    end: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, {self.start}:{self.end})"
