"""Immutable collection of carets and selections over one buffer."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from textedit_engine.buffer import TextRange
from textedit_engine.runtime import telemetry


@dataclass(frozen=True, slots=True)
class CursorSet:
    """One primary range plus ordered additional ranges.

    Owns offsets only, never text. No two ranges are equal; overlapping
    ranges are allowed unless ``reject_overlaps`` is set, in which case an
    overlapping addition is ignored like a duplicate. Every transition
    returns a new ``CursorSet``.
    """

    primary: TextRange = field(default_factory=lambda: TextRange.caret(0))
    additional: tuple[TextRange, ...] = ()
    reject_overlaps: bool = False

    @classmethod
    def from_ranges(
        cls, ranges: Iterable[TextRange], *, reject_overlaps: bool = False
    ) -> "CursorSet":
        """First range becomes primary; later duplicates are dropped."""

        items = list(ranges)
        if not items:
            return cls(reject_overlaps=reject_overlaps)
        cursors = cls(primary=items[0], reject_overlaps=reject_overlaps)
        for text_range in items[1:]:
            cursors = cursors.add_range(text_range)
        return cursors

    @property
    def has_multiple_cursors(self) -> bool:
        return bool(self.additional)

    @property
    def last_location(self) -> int:
        """Location of the most recently added cursor, or the primary's."""

        if self.additional:
            return self.additional[-1].location
        return self.primary.location

    def all_selections(self) -> list[TextRange]:
        return sorted((self.primary, *self.additional), key=lambda r: r.location)

    def contains(self, text_range: TextRange) -> bool:
        return text_range == self.primary or text_range in self.additional

    def add_range(self, text_range: TextRange) -> "CursorSet":
        if self.contains(text_range):
            telemetry.record_event(
                "cursors.duplicate_ignored", data={"range": text_range}
            )
            return self
        if self.reject_overlaps and any(
            text_range.overlaps(existing) for existing in (self.primary, *self.additional)
        ):
            telemetry.record_event(
                "cursors.overlap_ignored", data={"range": text_range}
            )
            return self
        return replace(self, additional=self.additional + (text_range,))

    def add_cursor(self, offset: int) -> "CursorSet":
        return self.add_range(TextRange.caret(offset))

    def add_selection(self, endpoint: int, anchor: Optional[int] = None) -> "CursorSet":
        other = self.last_location if anchor is None else anchor
        return self.add_range(TextRange.spanning(other, endpoint))

    def clear_additional(self) -> "CursorSet":
        if not self.additional:
            return self
        return replace(self, additional=())

    def with_primary(self, text_range: TextRange) -> "CursorSet":
        """Move the primary range, dropping any additional range equal to it."""

        remaining = tuple(r for r in self.additional if r != text_range)
        return replace(self, primary=text_range, additional=remaining)


__all__ = ["CursorSet"]
