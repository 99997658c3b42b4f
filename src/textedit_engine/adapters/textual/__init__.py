"""Textual host adapter for the editing engine."""

from .controller import (
    KEY_COMMANDS,
    TextualEditorAdapter,
    TextualUIHooks,
    offset_for_cell,
    render_segments,
)

__all__ = [
    "KEY_COMMANDS",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "offset_for_cell",
    "render_segments",
]
