"""In-memory text surface used by the session and the Textual host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from .surface import SurfaceError, TextRange
from .units import join_units, split_units


@dataclass(frozen=True, slots=True)
class RecordedEdit:
    range: TextRange
    text: str


@dataclass(frozen=True, slots=True)
class DocumentChange:
    """Summary delivered to listeners when the outermost edit scope closes."""

    version: int
    text: str
    edits: tuple[RecordedEdit, ...]


ChangeListener = Callable[[DocumentChange], None]


class TextDocument:
    """``TextSurface`` over a string of UTF-16 code units.

    Edits made between ``begin_editing`` and the matching ``end_editing``
    are coalesced: listeners hear about them once, when the outermost scope
    closes. Edits made outside any scope notify immediately.
    """

    def __init__(self, text: str = "", *, selection: TextRange | None = None) -> None:
        self._units = split_units(text)
        self._selection = TextRange.caret(0)
        self._version = 0
        self._depth = 0
        self._pending: List[RecordedEdit] = []
        self._listeners: List[ChangeListener] = []
        if selection is not None:
            self.set_primary_selection(selection)

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(text)

    @property
    def text(self) -> str:
        return join_units(self._units)

    @property
    def version(self) -> int:
        return self._version

    @property
    def selection(self) -> TextRange:
        return self._selection

    @property
    def editing(self) -> bool:
        return self._depth > 0

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def length(self) -> int:
        return len(self._units)

    def substring(self, text_range: TextRange) -> str:
        self._check(text_range)
        return join_units(self._units[text_range.location : text_range.end])

    def replace_characters(self, text_range: TextRange, text: str) -> None:
        self._check(text_range)
        units = split_units(text)
        self._units = (
            self._units[: text_range.location] + units + self._units[text_range.end :]
        )
        self._version += 1
        self._pending.append(RecordedEdit(range=text_range, text=text))
        if self._depth == 0:
            self._flush()

    def begin_editing(self) -> None:
        self._depth += 1

    def end_editing(self) -> None:
        if self._depth == 0:
            raise SurfaceError("end_editing called without begin_editing")
        self._depth -= 1
        if self._depth == 0:
            self._flush()

    def current_primary_selection(self) -> TextRange:
        return self._selection

    def set_primary_selection(self, text_range: TextRange) -> None:
        self._selection = text_range.clamped(self.length())

    def _check(self, text_range: TextRange) -> None:
        if text_range.end > len(self._units):
            raise SurfaceError(
                f"range {text_range} exceeds buffer length {len(self._units)}",
                text_range=text_range,
            )

    def _flush(self) -> None:
        if not self._pending:
            return
        change = DocumentChange(
            version=self._version, text=self.text, edits=tuple(self._pending)
        )
        self._pending.clear()
        for listener in list(self._listeners):
            listener(change)


__all__ = ["TextDocument", "DocumentChange", "RecordedEdit", "ChangeListener"]
