"""Capability boundary between the editing core and its host text view."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

from textedit_engine.runtime import telemetry


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """``location``/``length`` pair in UTF-16 code units.

    A zero-length range is a caret, anything longer is a selection.
    """

    location: int
    length: int = 0

    def __post_init__(self) -> None:
        if self.location < 0:
            raise ValueError(f"location must be non-negative, got {self.location}")
        if self.length < 0:
            raise ValueError(f"length must be non-negative, got {self.length}")

    @classmethod
    def caret(cls, offset: int) -> "TextRange":
        return cls(offset, 0)

    @classmethod
    def spanning(cls, first: int, second: int) -> "TextRange":
        start, end = min(first, second), max(first, second)
        return cls(start, end - start)

    @property
    def end(self) -> int:
        return self.location + self.length

    @property
    def is_caret(self) -> bool:
        return self.length == 0

    def clamped(self, limit: int) -> "TextRange":
        start = min(self.location, limit)
        return TextRange(start, min(self.end, limit) - start)

    def overlaps(self, other: "TextRange") -> bool:
        if self.is_caret and other.is_caret:
            return self.location == other.location
        if self.is_caret:
            return other.location < self.location < other.end
        if other.is_caret:
            return self.location < other.location < self.end
        return self.location < other.end and other.location < self.end


class TextSurface(Protocol):
    """Buffer, selection, and transaction capabilities a host provides."""

    def length(self) -> int:
        """Buffer length in UTF-16 code units."""
        ...

    def substring(self, text_range: TextRange) -> str:
        """Return the text covered by ``text_range``."""
        ...

    def replace_characters(self, text_range: TextRange, text: str) -> None:
        """Replace ``text_range`` with ``text`` (insert when it is a caret)."""
        ...

    def begin_editing(self) -> None:
        """Start deferring change notifications."""
        ...

    def end_editing(self) -> None:
        """Flush the deferred change notification."""
        ...

    def current_primary_selection(self) -> TextRange:
        ...

    def set_primary_selection(self, text_range: TextRange) -> None:
        ...


class SurfaceError(RuntimeError):
    """Raised by surfaces asked to touch text outside the buffer."""

    def __init__(self, message: str, *, text_range: TextRange | None = None) -> None:
        super().__init__(message)
        self.text_range = text_range


@contextmanager
def edit_transaction(
    surface: TextSurface,
    label: str,
    *,
    logger_name: Optional[str] = None,
) -> Iterator[telemetry.SpanHandle]:
    """Group edits so the host sees a single change notification."""

    with telemetry.span(
        f"surface::{label}",
        logger_name=logger_name,
        component="surface",
        metadata={"label": label},
    ) as handle:
        surface.begin_editing()
        try:
            yield handle
        finally:
            surface.end_editing()


__all__ = ["TextRange", "TextSurface", "SurfaceError", "edit_transaction"]
