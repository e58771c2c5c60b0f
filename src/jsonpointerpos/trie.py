from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(slots=True)
class PointerTrie:
    """Prefix tree of pointer token paths.

    Each node is keyed by one reference token. ``offset`` is filled in by the
    scanner once a value is found at the node's exact path; ``pointers`` lists
    the raw pointer strings that end at this node.
    """

    token: str = ""
    children: dict[str, PointerTrie] = field(default_factory=dict)
    offset: int | None = None
    pointers: list[str] = field(default_factory=list)

    @classmethod
    def build(cls, paths: Iterable[Iterable[str]]) -> "PointerTrie":
        root = cls()
        for path in paths:
            root.insert(path)
        return root

    def insert(self, path: Iterable[str], pointer: str | None = None) -> "PointerTrie":
        node = self
        for tok in path:
            child = node.children.get(tok)
            if child is None:
                child = node.children[tok] = PointerTrie(token=tok)
            node = child
        if pointer is not None and pointer not in node.pointers:
            node.pointers.append(pointer)
        return node

    def walk(self) -> Iterator[tuple[tuple[str, ...], PointerTrie]]:
        """Yield (path, node) pairs depth first, this node first."""
        stack: list[tuple[tuple[str, ...], PointerTrie]] = [((), self)]
        while stack:
            path, node = stack.pop()
            yield path, node
            for tok, child in reversed(node.children.items()):
                stack.append((path + (tok,), child))

    def depth(self) -> int:
        return max(len(path) for path, _ in self.walk())

    def __len__(self) -> int:
        # Node count excluding this node.
        return sum(1 for _ in self.walk()) - 1
