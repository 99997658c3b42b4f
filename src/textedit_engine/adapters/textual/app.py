"""Executable Textual app hosting the multi-cursor editing engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

try:  # pragma: no cover - imported only when the demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use textedit_engine.adapters.textual.app"
    ) from exc

from textedit_engine.runtime import EngineConfig, telemetry
from textedit_engine.session import EditorSession, SessionView

from .controller import TextualEditorAdapter, TextualUIHooks, render_segments

SEGMENT_STYLES = {
    "text": "",
    "selected": "black on cyan",
    "caret": "reverse",
}

ClickHandler = Callable[[int, int, bool, bool], None]


@dataclass
class UIState:
    status_text: str = ""
    cursor_count: int = 1
    log_lines: int = 0


class BufferView(Static):
    """Static buffer rendering that forwards clicks as (row, column) cells."""

    def __init__(self, on_cell_click: ClickHandler, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._on_cell_click = on_cell_click

    def on_click(self, event: events.Click) -> None:
        offset = event.get_content_offset(self)
        if offset is None:
            return
        secondary = bool(event.ctrl or event.meta)
        self._on_cell_click(offset.y, offset.x, secondary, bool(event.shift))
        event.stop()


class TextEditApp(App[None]):
    """Minimal Textual UI embedding the editing engine.

    Ctrl+click adds a cursor, ctrl+shift+click adds a selection from the last
    cursor, escape drops the extra cursors, ctrl+b and ctrl+t toggle bold and
    italic on the selections.
    """

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = "", config: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self._state = UIState()
        self.session = EditorSession(text, config=config or EngineConfig.from_env())
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: BufferView | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = BufferView(self._handle_cell_click, id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if self.adapter.handle_textual_key(event.key, character=event.character):
            event.stop()

    def _handle_cell_click(self, row: int, column: int, secondary: bool, extend: bool) -> None:
        if self.adapter:
            self.adapter.handle_click(row, column, secondary=secondary, extend=extend)

    def _update_buffer(self, view: SessionView) -> None:
        rendered = Text()
        for chunk, kind in render_segments(view):
            rendered.append(chunk, style=SEGMENT_STYLES[kind])
        if self._buffer_widget:
            self._buffer_widget.update(rendered)
        self._state.cursor_count = len(view.selections)
        self._update_status(self._state.status_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._state.cursor_count > 1:
            status = f"{status}  [{self._state.cursor_count} cursors]"
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self._state.log_lines += 1
        telemetry.record_event("app.log", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the textedit_engine Textual demo.")
    parser.add_argument(
        "path",
        nargs="?",
        help="Optional UTF-8 text file whose contents seed the buffer",
    )
    parser.add_argument(
        "--preset",
        choices=("development", "production", "performance"),
        help="Telemetry preset to activate before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.preset:
        telemetry.configure(preset=args.preset)
    text = ""
    if args.path:
        with open(args.path, encoding="utf-8") as handle:
            text = handle.read()
    TextEditApp(text=text).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
