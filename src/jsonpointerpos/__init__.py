from __future__ import annotations

from .api import PointerPosition, build_trie, get_positions, get_positions_file
from .errors import JSONSyntaxError, PointerSyntaxError
from .pointer import JsonPointer, parse_pointer
from .spans import LineIndex, Position, Span
from .trie import PointerTrie

__all__ = [
    "JSONSyntaxError",
    "JsonPointer",
    "LineIndex",
    "PointerPosition",
    "PointerSyntaxError",
    "PointerTrie",
    "Position",
    "Span",
    "build_trie",
    "get_positions",
    "get_positions_file",
    "parse_pointer",
]
