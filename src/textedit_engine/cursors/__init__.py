"""Multi-cursor state and edit coordination."""

from .cursor_set import CursorSet
from .editor import EditResult, MultiCursorEditor, deletion_target
from .gestures import Gesture, GestureKind, GestureOutcome, apply_gesture

__all__ = [
    "CursorSet",
    "EditResult",
    "MultiCursorEditor",
    "deletion_target",
    "Gesture",
    "GestureKind",
    "GestureOutcome",
    "apply_gesture",
]
