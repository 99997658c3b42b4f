"""Fan-out editing across every cursor of a ``CursorSet``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from textedit_engine.buffer import TextRange, TextSurface, edit_transaction
from textedit_engine.buffer.units import utf16_length
from textedit_engine.runtime import EngineConfig, telemetry
from textedit_engine.styling import StyleBit, toggle

from .cursor_set import CursorSet


@dataclass(slots=True)
class EditResult:
    """Outcome of an editor command.

    ``consumed=False`` hands the event back to the host, which applies its
    own single-caret behaviour.
    """

    consumed: bool
    status: str = "ok"
    cursors: Optional[CursorSet] = None
    message: Optional[str] = None


def deletion_target(surface: TextSurface, text_range: TextRange) -> Optional[TextRange]:
    """Range a backward delete removes for ``text_range``, or ``None`` if nothing.

    A caret at offset 0 and a selection lying wholly past the end of the
    buffer both remove nothing.
    """

    limit = surface.length()
    if not text_range.is_caret and text_range.location >= limit:
        return None
    target = text_range.clamped(limit)
    if not target.is_caret:
        return target
    if target.location == 0:
        return None
    # A surrogate pair before the caret is one character.
    if target.location >= 2:
        pair = TextRange(target.location - 2, 2)
        if len(surface.substring(pair)) == 1:
            return pair
    return TextRange(target.location - 1, 1)


class MultiCursorEditor:
    """Owns a ``CursorSet`` and applies edits to all of its ranges at once.

    Ranges are mutated rightmost first so earlier offsets stay valid, inside a
    single edit transaction so the host observes one change. New carets are
    then computed left to right with a running offset.
    """

    def __init__(
        self,
        surface: TextSurface,
        cursors: Optional[CursorSet] = None,
        *,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.surface = surface
        self.config = config or EngineConfig()
        self._logger_name = f"{self.config.logger_name}.cursors"
        self._cursors = cursors or CursorSet(
            primary=surface.current_primary_selection(),
            reject_overlaps=self.config.reject_overlapping_selections,
        )

    @property
    def cursors(self) -> CursorSet:
        return self._cursors

    @property
    def has_multiple_cursors(self) -> bool:
        return self._cursors.has_multiple_cursors

    def sync_primary(self) -> CursorSet:
        """Adopt the host's primary selection, which it may have moved itself."""

        current = self.surface.current_primary_selection()
        if current != self._cursors.primary:
            self._cursors = self._cursors.with_primary(current)
        return self._cursors

    def clamp_offset(self, offset: int) -> int:
        return max(0, min(offset, self.surface.length()))

    def add_cursor(self, offset: int) -> CursorSet:
        self.sync_primary()
        return self._transition(
            self._cursors.add_cursor(self.clamp_offset(offset)), "add_cursor"
        )

    def add_selection(self, endpoint: int, anchor: Optional[int] = None) -> CursorSet:
        self.sync_primary()
        other = self._cursors.last_location if anchor is None else anchor
        if min(other, endpoint) >= self.surface.length() and other != endpoint:
            telemetry.record_event(
                "cursors.out_of_range_ignored",
                data={"anchor": other, "endpoint": endpoint},
                logger_name=self._logger_name,
            )
            return self._cursors
        return self._transition(
            self._cursors.add_selection(
                self.clamp_offset(endpoint), self.clamp_offset(other)
            ),
            "add_selection",
        )

    def clear_additional(self) -> CursorSet:
        return self._transition(self._cursors.clear_additional(), "clear_additional")

    def replace_cursors(self, cursors: CursorSet, reason: str = "replace") -> CursorSet:
        return self._transition(cursors, reason)

    def insert(self, text: str) -> EditResult:
        self.sync_primary()
        if not self.has_multiple_cursors:
            return EditResult(consumed=False, status="single_cursor")

        ranges = self._cursors.all_selections()
        inserted = utf16_length(text)
        targets: List[TextRange] = list(ranges)

        with edit_transaction(
            self.surface, "multi_insert", logger_name=self._logger_name
        ) as handle:
            handle.add_metadata("cursors", len(ranges))
            for index in range(len(ranges) - 1, -1, -1):
                target = ranges[index].clamped(self.surface.length())
                self.surface.replace_characters(target, text)
                targets[index] = target

        carets: List[TextRange] = []
        offset = 0
        for target in targets:
            carets.append(TextRange.caret(max(0, target.location - offset + inserted)))
            offset += target.length - inserted

        return self._finish(carets, "multi_insert")

    def delete_backward(self) -> EditResult:
        self.sync_primary()
        if not self.has_multiple_cursors:
            return EditResult(consumed=False, status="single_cursor")

        ranges = self._cursors.all_selections()
        removed: List[int] = [0] * len(ranges)

        with edit_transaction(
            self.surface, "multi_delete_backward", logger_name=self._logger_name
        ) as handle:
            handle.add_metadata("cursors", len(ranges))
            for index in range(len(ranges) - 1, -1, -1):
                target = deletion_target(self.surface, ranges[index])
                if target is None:
                    handle.note("cursor::noop", location=ranges[index].location)
                    continue
                self.surface.replace_characters(target, "")
                removed[index] = target.length

        carets: List[TextRange] = []
        offset = 0
        for text_range, count in zip(ranges, removed):
            back = count if text_range.is_caret else 0
            carets.append(TextRange.caret(max(0, text_range.location - offset - back)))
            offset += count

        return self._finish(carets, "multi_delete_backward")

    def restyle(self, bit: StyleBit) -> EditResult:
        """Toggle ``bit`` on every non-empty selection, each decided on its own."""

        self.sync_primary()
        originals = [self._cursors.primary, *self._cursors.additional]
        ranges = self._cursors.all_selections()
        if all(text_range.is_caret for text_range in ranges):
            return EditResult(consumed=False, status="no_selection")

        label = f"restyle_{bit.name.lower()}"
        targets: List[TextRange] = list(ranges)
        new_lengths: Dict[int, int] = {}
        with edit_transaction(
            self.surface, label, logger_name=self._logger_name
        ) as handle:
            handle.add_metadata("cursors", len(ranges))
            for index in range(len(ranges) - 1, -1, -1):
                target = ranges[index].clamped(self.surface.length())
                targets[index] = target
                if target.is_caret:
                    continue
                styled = toggle(self.surface.substring(target), bit)
                self.surface.replace_characters(target, styled)
                new_lengths[index] = utf16_length(styled)

        moved: Dict[TextRange, TextRange] = {}
        delta = 0
        for index, (text_range, target) in enumerate(zip(ranges, targets)):
            location = target.location + delta
            if index in new_lengths:
                moved[text_range] = TextRange(location, new_lengths[index])
                delta += new_lengths[index] - target.length
            else:
                moved[text_range] = TextRange.caret(location)

        result = self._transition(
            CursorSet.from_ranges(
                (moved[text_range] for text_range in originals),
                reject_overlaps=self._cursors.reject_overlaps,
            ),
            label,
        )
        return EditResult(consumed=True, status="restyled", cursors=result)

    def _finish(self, carets: List[TextRange], reason: str) -> EditResult:
        limit = self.surface.length()
        bounded = [caret.clamped(limit) for caret in carets]
        result = self._transition(
            CursorSet.from_ranges(
                bounded, reject_overlaps=self._cursors.reject_overlaps
            ),
            reason,
        )
        return EditResult(consumed=True, status=reason, cursors=result)

    def _transition(self, cursors: CursorSet, reason: str) -> CursorSet:
        previous = self._cursors
        self._cursors = cursors
        if cursors.primary != self.surface.current_primary_selection():
            self.surface.set_primary_selection(cursors.primary)
        if cursors != previous:
            telemetry.record_event(
                "cursors.changed",
                data={
                    "reason": reason,
                    "primary": cursors.primary,
                    "additional": len(cursors.additional),
                },
                logger_name=self._logger_name,
            )
        return cursors


__all__ = ["EditResult", "MultiCursorEditor", "deletion_target"]
