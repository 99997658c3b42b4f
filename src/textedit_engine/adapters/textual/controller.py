"""Textual-facing adapter that turns key and mouse events into session calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Literal, Optional, Tuple

from textedit_engine.buffer.units import code_point_index, unit_offset
from textedit_engine.cursors import Gesture
from textedit_engine.session import EditorSession, SessionView

SegmentKind = Literal["text", "selected", "caret"]

# ctrl+i reaches terminal apps as tab, so italic also answers to ctrl+t.
KEY_COMMANDS: Dict[str, str] = {
    "ctrl+b": "toggle_bold",
    "ctrl+i": "toggle_italic",
    "ctrl+t": "toggle_italic",
    "backspace": "backspace",
    "escape": "escape",
    "left": "move_left",
    "right": "move_right",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[SessionView], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


def offset_for_cell(text: str, row: int, column: int) -> int:
    """UTF-16 offset of the character drawn at ``(row, column)``.

    Assumes unwrapped lines and one cell per character; clicks past the end
    of a line land at its end.
    """

    lines = text.split("\n")
    row = max(0, min(row, len(lines) - 1))
    index = sum(len(line) + 1 for line in lines[:row])
    index += max(0, min(column, len(lines[row])))
    return unit_offset(text, index)


def _append(
    segments: List[Tuple[str, SegmentKind]], chunk: str, kind: SegmentKind
) -> None:
    if segments and segments[-1][1] == kind and kind != "caret":
        segments[-1] = (segments[-1][0] + chunk, kind)
    else:
        segments.append((chunk, kind))


def render_segments(view: SessionView) -> List[Tuple[str, SegmentKind]]:
    """Split the buffer into runs of plain, selected, and caret characters."""

    text = view.text
    carets = set()
    selected = [False] * len(text)
    for text_range in view.selections:
        start = code_point_index(text, text_range.location)
        if text_range.is_caret:
            carets.add(start)
            continue
        for index in range(start, code_point_index(text, text_range.end)):
            selected[index] = True

    segments: List[Tuple[str, SegmentKind]] = []
    for index, char in enumerate(text):
        kind: SegmentKind = "text"
        if index in carets:
            kind = "caret"
        elif selected[index]:
            kind = "selected"
        if char == "\n" and kind != "text":
            _append(segments, " ", kind)
            _append(segments, char, "text")
        else:
            _append(segments, char, kind)
    if len(text) in carets:
        _append(segments, " ", "caret")
    return segments


class TextualEditorAdapter:
    """Bridges an ``EditorSession`` to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.session.bus.subscribe("style.toggled", self._on_style_toggled)
        self._refresh_buffer()

    def handle_textual_key(self, key: str, *, character: Optional[str] = None) -> bool:
        """Dispatch a Textual key; returns whether the adapter consumed it."""

        self._log_state("key ->", key=key, character=character)
        command = KEY_COMMANDS.get(key)
        if command is not None:
            consumed = self._run_command(command)
        elif key == "enter":
            consumed = self.session.type_text("\n").consumed
        elif character and character.isprintable():
            consumed = self.session.type_text(character).consumed
        else:
            consumed = False

        if consumed:
            self._refresh_buffer()
        self._log_state("result <-", consumed=consumed)
        return consumed

    def handle_click(
        self, row: int, column: int, *, secondary: bool = False, extend: bool = False
    ) -> bool:
        offset = offset_for_cell(self.session.document.text, row, column)
        if not secondary:
            gesture = Gesture.click(offset)
        elif extend:
            gesture = Gesture.secondary_extend(offset)
        else:
            gesture = Gesture.secondary_click(offset)
        consumed = self.session.handle_gesture(gesture)
        self._log_state("click ->", gesture=gesture.kind.value, offset=offset)
        if consumed:
            self._refresh_buffer()
        return consumed

    def _run_command(self, command: str) -> bool:
        if command == "toggle_bold":
            return self.session.toggle_bold().consumed
        if command == "toggle_italic":
            return self.session.toggle_italic().consumed
        if command == "backspace":
            return self.session.backspace().consumed
        if command == "escape":
            consumed = self.session.handle_gesture(Gesture.escape())
            if consumed:
                self.hooks.update_status("single cursor")
            return consumed
        if command in {"move_left", "move_right"}:
            return self._move_primary(-1 if command == "move_left" else 1)
        raise KeyError(f"Unknown command '{command}'")

    def _move_primary(self, step: int) -> bool:
        if self.session.cursors.has_multiple_cursors:
            return False
        primary = self.session.cursors.primary
        text = self.session.document.text
        edge = primary.location if step < 0 else primary.end
        index = code_point_index(text, edge)
        if primary.is_caret:
            index = max(0, min(len(text), index + step))
        offset = unit_offset(text, index)
        self.session.select(offset, offset)
        return True

    def _on_style_toggled(self, payload: object | None) -> None:
        if isinstance(payload, dict):
            self.hooks.update_status(f"toggled {str(payload.get('bit', '')).lower()}")

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.session.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        cursors = self.session.cursors
        snapshot: Dict[str, object] = {
            "primary": (cursors.primary.location, cursors.primary.length),
            "cursors": 1 + len(cursors.additional),
            "version": self.session.document.version,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = [
    "KEY_COMMANDS",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "offset_for_cell",
    "render_segments",
]
