from __future__ import annotations

import json
import re
from dataclasses import dataclass

from .errors import JSONSyntaxError
from .tokens import VALUE_START, Token, TokenKind


_WS_RE = re.compile(r"[ \t\r\n]*")
_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_LITERALS = {
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "null": TokenKind.NULL,
}

_PUNCT = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}

_CLOSERS = {
    TokenKind.LBRACE: TokenKind.RBRACE,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
}


def _display(tok: Token) -> str:
    if tok.kind is TokenKind.EOF:
        return "end of input"
    if tok.kind in (TokenKind.STRING, TokenKind.NUMBER):
        return f"{tok.kind.value.lower()} {tok.value!r}"
    return repr(tok.kind.value)


@dataclass(slots=True)
class TokenStream:
    """Lazy JSON tokenizer over an in-memory document.

    Tokens are produced one at a time on demand; nothing is materialized beyond
    a single lookahead token. ``offset`` is the position just past the last
    consumed token.
    """

    src: str
    file: str = "<memory>"
    i: int = 0
    _peeked: Token | None = None

    @property
    def offset(self) -> int:
        return self.i

    def peek(self) -> Token:
        if self._peeked is None:
            self._peeked = self._lex(_WS_RE.match(self.src, self.i).end())
        return self._peeked

    def next(self) -> Token:
        tok = self.peek()
        self._peeked = None
        self.i = tok.end
        return tok

    def expect(self, kind: TokenKind, what: str) -> Token:
        tok = self.next()
        if tok.kind is not kind:
            raise self.unexpected(tok, expected=what)
        return tok

    def skip_value(self) -> int:
        """Consume one complete JSON value without interpreting it.

        The value is still checked for well-formedness. Returns the end offset.
        """
        closers: list[TokenKind] = []
        tok = self.value_token()
        while True:
            closer = _CLOSERS.get(tok.kind)
            if closer is not None:
                if self.peek().kind is closer:
                    self.next()
                else:
                    closers.append(closer)
                    if closer is TokenKind.RBRACE:
                        self.member_key()
                    tok = self.value_token()
                    continue

            # A complete value was consumed; close any containers it ends.
            while closers:
                tok = self.next()
                if tok.kind is TokenKind.COMMA:
                    break
                if tok.kind is closers[-1]:
                    closers.pop()
                    continue
                raise self.unexpected(tok, expected=f"',' or '{closers[-1].value}'")
            else:
                return self.offset

            if closers[-1] is TokenKind.RBRACE:
                self.member_key()
            tok = self.value_token()

    def unexpected(self, tok: Token, *, expected: str) -> JSONSyntaxError:
        return self.error(tok.start, tok.end, f"unexpected {_display(tok)}", hint=f"expected {expected}")

    def error(self, start: int, end: int, msg: str, hint: str | None = None) -> JSONSyntaxError:
        return JSONSyntaxError.at(self.src, start, end, msg, file=self.file, hint=hint)

    def value_token(self) -> Token:
        """Consume the first token of a value, rejecting anything that cannot start one."""
        tok = self.next()
        if tok.kind not in VALUE_START:
            raise self.unexpected(tok, expected="a value")
        return tok

    def member_key(self) -> Token:
        """Consume `"key" :` and return the key token."""
        key = self.expect(TokenKind.STRING, "an object key string")
        self.expect(TokenKind.COLON, "':'")
        return key

    def _lex(self, start: int) -> Token:
        src = self.src
        if start >= len(src):
            return Token(TokenKind.EOF, "", len(src), len(src))

        ch = src[start]

        k = _PUNCT.get(ch)
        if k is not None:
            return Token(k, ch, start, start + 1)

        if ch == '"':
            try:
                value, end = json.decoder.scanstring(src, start + 1, True)
            except json.JSONDecodeError as e:
                raise self.error(start, e.pos, e.msg, hint="check quotes and escape sequences") from None
            return Token(TokenKind.STRING, value, start, end)

        if ch in "-0123456789":
            m = _NUMBER_RE.match(src, start)
            end = m.end() if m else start + 1
            if m is None or (end < len(src) and src[end] in "0123456789.eE+-"):
                raise self.error(start, end, "invalid number literal", hint="numbers follow RFC 8259 grammar")
            return Token(TokenKind.NUMBER, m.group(0), start, end)

        m = _WORD_RE.match(src, start)
        if m:
            kind = _LITERALS.get(m.group(0))
            if kind is None:
                raise self.error(
                    start,
                    m.end(),
                    f"unexpected word {m.group(0)!r}",
                    hint="bare words must be true, false or null",
                )
            return Token(kind, m.group(0), start, m.end())

        raise self.error(start, start + 1, f"unexpected character {ch!r}")
