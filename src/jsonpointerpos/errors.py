from __future__ import annotations

from dataclasses import dataclass

from .spans import LineIndex, Span


@dataclass(slots=True)
class JSONSyntaxError(Exception):
    """Malformed document text, located by the span of the offending input."""

    span: Span
    message: str
    hint: str | None = None

    @classmethod
    def at(
        cls,
        src: str,
        start: int,
        end: int,
        message: str,
        *,
        file: str = "<memory>",
        hint: str | None = None,
    ) -> "JSONSyntaxError":
        return cls(span=LineIndex(src).span(start, end, file=file), message=message, hint=hint)

    @property
    def offset(self) -> int:
        return self.span.start.offset

    def __str__(self) -> str:
        loc = self.span.format()
        if self.hint:
            return f"{loc}: {self.message}\nhint: {self.hint}"
        return f"{loc}: {self.message}"


class PointerSyntaxError(ValueError):
    """Raised for strings that are not valid RFC 6901 JSON Pointers."""

    def __init__(self, pointer: str, message: str) -> None:
        super().__init__(f"invalid JSON pointer {pointer!r}: {message}")
        self.pointer = pointer
