"""Unicode bold/italic styling encoded in code points."""

from .codepoints import (
    StyleBit,
    StyleRange,
    detect_style,
    is_styleable,
    supports,
    to_normal,
)
from .transform import (
    apply,
    apply_text,
    normalize,
    style_of,
    toggle,
    toggle_bold,
    toggle_italic,
)

__all__ = [
    "StyleBit",
    "StyleRange",
    "detect_style",
    "is_styleable",
    "supports",
    "to_normal",
    "apply",
    "apply_text",
    "normalize",
    "style_of",
    "toggle",
    "toggle_bold",
    "toggle_italic",
]
