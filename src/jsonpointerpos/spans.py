from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Position:
    """A concrete source position.

    Offsets are 0-based code point indices; line/column are 1-based for user-facing messages.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single document."""

    file: str
    start: Position
    end: Position

    def format(self) -> str:
        return f"{self.file}:{self.start.line}:{self.start.column}"


@dataclass(slots=True)
class LineIndex:
    """Offset -> Position lookup built from one linear pass over the text."""

    src: str
    _starts: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        starts = [0]
        i = self.src.find("\n")
        while i != -1:
            starts.append(i + 1)
            i = self.src.find("\n", i + 1)
        self._starts = starts

    def position(self, offset: int) -> Position:
        if offset < 0:
            raise ValueError(f"negative offset: {offset}")
        offset = min(offset, len(self.src))
        line = bisect_right(self._starts, offset)
        return Position(offset=offset, line=line, column=offset - self._starts[line - 1] + 1)

    def span(self, start: int, end: int, *, file: str = "<memory>") -> Span:
        return Span(file=file, start=self.position(start), end=self.position(max(start, end)))
