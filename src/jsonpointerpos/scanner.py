from __future__ import annotations

from dataclasses import dataclass

from .lexer import TokenStream
from .tokens import TokenKind
from .trie import PointerTrie


_CLOSERS = {
    TokenKind.LBRACE: TokenKind.RBRACE,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
}


@dataclass(slots=True)
class _Container:
    node: PointerTrie
    closer: TokenKind
    index: int = 0


def scan_value(stream: TokenStream, node: PointerTrie) -> int:
    """Scan one JSON value, recording offsets of values addressed by ``node``'s children.

    The stream must be positioned before the value. Members that match a child
    get the child's ``offset`` set to the first character of the member value;
    the scanner only descends into a member when the matching child has
    children of its own, everything else is skipped structurally. Open
    containers are kept on an explicit stack, so pointer depth is not bounded
    by the interpreter's recursion limit.

    Returns the length of the value's text, from its first character to just
    past its last.
    """
    start = stream.peek().start
    top = _open(stream, node)
    stack = [top] if top is not None else []
    while stack:
        cur = stack[-1]
        if cur.closer is TokenKind.RBRACE:
            key = stream.member_key().value
        else:
            key = str(cur.index)

        child = cur.node.children.get(key)
        # Duplicate object keys: the first occurrence wins, later ones are skipped.
        if child is None or child.offset is not None:
            stream.skip_value()
        else:
            child.offset = stream.peek().start
            if child.children:
                inner = _open(stream, child)
                if inner is not None:
                    stack.append(inner)
                    continue
            else:
                stream.skip_value()

        # A member value is complete; close every container it ends.
        while stack:
            cur = stack[-1]
            tok = stream.next()
            if tok.kind is TokenKind.COMMA:
                cur.index += 1
                break
            if tok.kind is cur.closer:
                stack.pop()
                continue
            raise stream.unexpected(tok, expected=f"',' or '{cur.closer.value}'")
    return stream.offset - start


def _open(stream: TokenStream, node: PointerTrie) -> _Container | None:
    # None for scalars and empty containers: there is nothing to match inside.
    tok = stream.value_token()
    closer = _CLOSERS.get(tok.kind)
    if closer is None:
        return None
    if stream.peek().kind is closer:
        stream.next()
        return None
    return _Container(node=node, closer=closer)
