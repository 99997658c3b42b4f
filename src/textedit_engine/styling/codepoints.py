"""Code-point classification for Mathematical Alphanumeric styling.

Style lives in the character itself: a bold ``a`` is U+1D5EE, not an ``a``
with a font attribute. This module maps single characters between the plain
ASCII letters/digits and the Sans-Serif Bold, Italic and Bold Italic blocks.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


class StyleBit(enum.IntFlag):
    """Rendered style of a character; a two-bit set."""

    NORMAL = 0
    BOLD = 1
    ITALIC = 2
    BOLD_ITALIC = BOLD | ITALIC


@dataclass(frozen=True, slots=True)
class StyleRange:
    """Inclusive code-point block and the ASCII code point its first member mirrors."""

    style: StyleBit
    first: int
    last: int
    base: int

    def __contains__(self, code: int) -> bool:
        return self.first <= code <= self.last


UPPER_BASE = ord("A")
LOWER_BASE = ord("a")
DIGIT_BASE = ord("0")

# Detection order; first hit wins.
STYLE_RANGES: Tuple[StyleRange, ...] = (
    StyleRange(StyleBit.BOLD_ITALIC, 0x1D63C, 0x1D655, UPPER_BASE),
    StyleRange(StyleBit.BOLD_ITALIC, 0x1D656, 0x1D66F, LOWER_BASE),
    StyleRange(StyleBit.BOLD, 0x1D5D4, 0x1D5ED, UPPER_BASE),
    StyleRange(StyleBit.BOLD, 0x1D5EE, 0x1D607, LOWER_BASE),
    StyleRange(StyleBit.BOLD, 0x1D7EC, 0x1D7F5, DIGIT_BASE),
    StyleRange(StyleBit.ITALIC, 0x1D608, 0x1D621, UPPER_BASE),
    StyleRange(StyleBit.ITALIC, 0x1D622, 0x1D63B, LOWER_BASE),
)

# (style, ASCII base) -> first code point of the destination block.
DESTINATIONS: Dict[Tuple[StyleBit, int], int] = {
    (block.style, block.base): block.first for block in STYLE_RANGES
}

_PLAIN_SPANS: Tuple[Tuple[int, int], ...] = (
    (UPPER_BASE, ord("Z")),
    (LOWER_BASE, ord("z")),
    (DIGIT_BASE, ord("9")),
)


def _code(char: str) -> int:
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    return ord(char)


def find_range(char: str) -> Optional[StyleRange]:
    code = _code(char)
    for block in STYLE_RANGES:
        if code in block:
            return block
    return None


def plain_base(char: str) -> Optional[int]:
    """Return the ASCII base (``A``, ``a`` or ``0``) of a plain character, if any."""

    code = _code(char)
    for first, last in _PLAIN_SPANS:
        if first <= code <= last:
            return first
    return None


def detect_style(char: str) -> StyleBit:
    block = find_range(char)
    return block.style if block else StyleBit.NORMAL


def to_normal(char: str) -> str:
    block = find_range(char)
    if block is None:
        return char
    return chr(block.base + ord(char) - block.first)


def is_styleable(char: str) -> bool:
    return plain_base(to_normal(char)) is not None


def supports(style: StyleBit, char: str) -> bool:
    """Whether ``char`` has a code point in ``style`` once normalized."""

    base = plain_base(to_normal(char))
    if base is None:
        return False
    if style == StyleBit.NORMAL:
        return True
    return (StyleBit(style), base) in DESTINATIONS


__all__ = [
    "StyleBit",
    "StyleRange",
    "STYLE_RANGES",
    "DESTINATIONS",
    "find_range",
    "plain_base",
    "detect_style",
    "to_normal",
    "is_styleable",
    "supports",
]
