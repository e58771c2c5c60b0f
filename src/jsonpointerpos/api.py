from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .errors import JSONSyntaxError
from .lexer import TokenStream
from .pointer import JsonPointer, as_pointer
from .scanner import scan_value
from .spans import LineIndex, Position
from .tokens import TokenKind
from .trie import PointerTrie


log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PointerPosition:
    pointer: str
    tokens: tuple[str, ...]
    position: Position


def _decode(src: bytes, file: str) -> str:
    try:
        return src.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        text = src[: e.start].decode("utf-8-sig")
        raise JSONSyntaxError.at(
            text,
            len(text),
            len(text),
            f"invalid UTF-8 byte 0x{src[e.start]:02x}",
            file=file,
            hint="document must be UTF-8",
        ) from None


def build_trie(pointers: Iterable[str | JsonPointer]) -> PointerTrie:
    root = PointerTrie()
    for p in pointers:
        ptr = as_pointer(p)
        root.insert(ptr.tokens, ptr.raw)
    return root


def get_positions(
    src: str | bytes,
    pointers: Iterable[str | JsonPointer] | None,
    *,
    file: str = "<memory>",
) -> dict[str, PointerPosition] | None:
    """Locate the values addressed by ``pointers`` in the JSON text ``src``.

    Returns ``None`` when no pointers were given. Otherwise returns a mapping
    from each raw pointer string to the position of the first character of its
    value; pointers with no value in the document are left out, so the mapping
    may be empty.

    Offsets and columns count code points of the decoded text.
    Raises ``JSONSyntaxError`` if the document is not well-formed JSON
    or, for byte input, not valid UTF-8.
    """
    if isinstance(pointers, (str, bytes)):
        raise TypeError(f"pointers must be a collection of pointers, not a single {type(pointers).__name__}")
    ptrs = [as_pointer(p) for p in pointers or ()]
    if not ptrs:
        return None
    if isinstance(src, bytes):
        src = _decode(src, file)

    trie = build_trie(ptrs)
    log.debug("resolving %d pointer(s) over %d trie node(s) in %s", len(ptrs), len(trie), file)

    stream = TokenStream(src, file=file)
    trie.offset = stream.peek().start
    scan_value(stream, trie)
    tail = stream.next()
    if tail.kind is not TokenKind.EOF:
        raise stream.unexpected(tail, expected="end of input after the top-level value")

    index = LineIndex(src)
    out: dict[str, PointerPosition] = {}
    for path, node in trie.walk():
        if node.offset is None:
            continue
        pos = index.position(node.offset)
        for raw in node.pointers:
            out[raw] = PointerPosition(pointer=raw, tokens=path, position=pos)

    log.debug("resolved %d of %d pointer(s) in %s", len(out), len(ptrs), file)
    return out


def get_positions_file(
    path: str | Path,
    pointers: Iterable[str | JsonPointer] | None,
) -> dict[str, PointerPosition] | None:
    p = Path(path).expanduser().resolve()
    # Bytes keep line endings untranslated so offsets match the file.
    return get_positions(p.read_bytes(), pointers, file=str(p))
