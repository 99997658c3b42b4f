"""Text surface capability, UTF-16 helpers, and the in-memory document."""

from .document import ChangeListener, DocumentChange, RecordedEdit, TextDocument
from .surface import SurfaceError, TextRange, TextSurface, edit_transaction
from .units import join_units, split_units, utf16_length

__all__ = [
    "TextDocument",
    "DocumentChange",
    "RecordedEdit",
    "ChangeListener",
    "TextRange",
    "TextSurface",
    "SurfaceError",
    "edit_transaction",
    "join_units",
    "split_units",
    "utf16_length",
]
