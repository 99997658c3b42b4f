"""Pointer and keyboard gestures that reshape a ``CursorSet``."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from textedit_engine.buffer import TextRange

from .cursor_set import CursorSet


class GestureKind(str, enum.Enum):
    CLICK = "click"
    SECONDARY_CLICK = "secondary_click"
    SECONDARY_EXTEND = "secondary_extend"
    ESCAPE = "escape"


@dataclass(frozen=True, slots=True)
class Gesture:
    kind: GestureKind
    offset: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is not GestureKind.ESCAPE and self.offset is None:
            raise ValueError(f"{self.kind.value} gesture requires an offset")

    @classmethod
    def click(cls, offset: int) -> "Gesture":
        return cls(GestureKind.CLICK, offset)

    @classmethod
    def secondary_click(cls, offset: int) -> "Gesture":
        return cls(GestureKind.SECONDARY_CLICK, offset)

    @classmethod
    def secondary_extend(cls, offset: int) -> "Gesture":
        return cls(GestureKind.SECONDARY_EXTEND, offset)

    @classmethod
    def escape(cls) -> "Gesture":
        return cls(GestureKind.ESCAPE)


@dataclass(frozen=True, slots=True)
class GestureOutcome:
    cursors: CursorSet
    consumed: bool


def apply_gesture(cursors: CursorSet, gesture: Gesture) -> GestureOutcome:
    """Translate one gesture into the matching cursor-set transition.

    A plain click collapses to a single caret. Escape only claims the event
    while extra cursors exist, otherwise the host keeps its own handling.
    """

    if gesture.kind is GestureKind.ESCAPE:
        if not cursors.has_multiple_cursors:
            return GestureOutcome(cursors, consumed=False)
        return GestureOutcome(cursors.clear_additional(), consumed=True)

    offset = int(gesture.offset or 0)
    if gesture.kind is GestureKind.SECONDARY_CLICK:
        return GestureOutcome(cursors.add_cursor(offset), consumed=True)
    if gesture.kind is GestureKind.SECONDARY_EXTEND:
        return GestureOutcome(cursors.add_selection(offset), consumed=True)

    collapsed = cursors.clear_additional().with_primary(TextRange.caret(offset))
    return GestureOutcome(collapsed, consumed=True)


__all__ = ["Gesture", "GestureKind", "GestureOutcome", "apply_gesture"]
