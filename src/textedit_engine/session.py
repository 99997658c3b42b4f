"""Editor session: an in-memory document, its cursors, and an event bus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from textedit_engine.buffer import (
    DocumentChange,
    TextDocument,
    TextRange,
    edit_transaction,
    utf16_length,
)
from textedit_engine.cursors import (
    CursorSet,
    EditResult,
    Gesture,
    MultiCursorEditor,
    apply_gesture,
    deletion_target,
)
from textedit_engine.runtime import EngineConfig, telemetry
from textedit_engine.styling import StyleBit


class EventBus:
    """Minimal event bus the session uses to notify its host."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class SessionView:
    """Host-friendly snapshot of the session."""

    text: str
    version: int
    primary: TextRange
    selections: tuple[TextRange, ...]

    @property
    def has_multiple_cursors(self) -> bool:
        return len(self.selections) > 1


class EditorSession:
    """Plays the host role for ``MultiCursorEditor``.

    Multi-cursor edits go through the editor. When it declines an edit
    (single-cursor mode) the session applies the usual single-caret
    behaviour to the primary selection.
    """

    def __init__(
        self,
        text: str = "",
        *,
        config: Optional[EngineConfig] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.document = TextDocument(text)
        self.bus = bus or EventBus()
        self.editor = MultiCursorEditor(self.document, config=self.config)
        self.document.subscribe(self._on_document_change)

    @property
    def cursors(self) -> CursorSet:
        return self.editor.cursors

    def snapshot(self) -> SessionView:
        cursors = self.editor.sync_primary()
        return SessionView(
            text=self.document.text,
            version=self.document.version,
            primary=cursors.primary,
            selections=tuple(cursors.all_selections()),
        )

    def select(self, first: int, second: int) -> CursorSet:
        """Set the primary selection, as a host drag or shift-arrow would."""

        limit = self.document.length()
        text_range = TextRange.spanning(min(first, limit), min(second, limit))
        self.document.set_primary_selection(text_range)
        return self._changed(self.editor.sync_primary(), "select")

    def handle_gesture(self, gesture: Gesture) -> bool:
        if gesture.offset is not None:
            gesture = Gesture(gesture.kind, self.editor.clamp_offset(gesture.offset))
        outcome = apply_gesture(self.editor.sync_primary(), gesture)
        if outcome.consumed:
            self._changed(
                self.editor.replace_cursors(outcome.cursors, gesture.kind.value),
                gesture.kind.value,
            )
        return outcome.consumed

    def type_text(self, text: str) -> EditResult:
        result = self.editor.insert(text)
        if not result.consumed:
            result = self._single_insert(text)
        self._changed(self.editor.cursors, result.status)
        return result

    def backspace(self) -> EditResult:
        result = self.editor.delete_backward()
        if not result.consumed:
            result = self._single_delete_backward()
        self._changed(self.editor.cursors, result.status)
        return result

    def toggle_bold(self) -> EditResult:
        return self._restyle(StyleBit.BOLD)

    def toggle_italic(self) -> EditResult:
        return self._restyle(StyleBit.ITALIC)

    def _restyle(self, bit: StyleBit) -> EditResult:
        result = self.editor.restyle(bit)
        if result.consumed:
            self.bus.emit("style.toggled", {"bit": bit.name, "cursors": result.cursors})
            self._changed(self.editor.cursors, result.status)
        return result

    def _single_insert(self, text: str) -> EditResult:
        selection = self.document.current_primary_selection().clamped(
            self.document.length()
        )
        with edit_transaction(self.document, "insert", logger_name=self.config.logger_name):
            self.document.replace_characters(selection, text)
        caret = TextRange.caret(selection.location + utf16_length(text))
        cursors = self.editor.replace_cursors(self.cursors.with_primary(caret), "insert")
        return EditResult(consumed=True, status="insert", cursors=cursors)

    def _single_delete_backward(self) -> EditResult:
        selection = self.document.current_primary_selection()
        target = deletion_target(self.document, selection)
        if target is None:
            return EditResult(consumed=True, status="noop", cursors=self.cursors)
        with edit_transaction(
            self.document, "delete_backward", logger_name=self.config.logger_name
        ):
            self.document.replace_characters(target, "")
        cursors = self.editor.replace_cursors(
            self.cursors.with_primary(TextRange.caret(target.location)),
            "delete_backward",
        )
        return EditResult(consumed=True, status="delete_backward", cursors=cursors)

    def _changed(self, cursors: CursorSet, reason: str) -> CursorSet:
        self.bus.emit("cursors.changed", {"reason": reason, "cursors": cursors})
        return cursors

    def _on_document_change(self, change: DocumentChange) -> None:
        telemetry.record_event(
            "buffer.changed",
            data={"version": change.version, "edits": len(change.edits)},
            logger_name=self.config.logger_name,
        )
        self.bus.emit("buffer.changed", change)


__all__ = ["EditorSession", "EventBus", "SessionView"]
