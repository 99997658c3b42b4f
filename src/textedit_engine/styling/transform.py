"""Re-styling and whole-string bold/italic toggles."""

from __future__ import annotations

from textedit_engine.runtime import telemetry

from .codepoints import (
    DESTINATIONS,
    StyleBit,
    detect_style,
    is_styleable,
    plain_base,
    supports,
    to_normal,
)

TOGGLE_BITS = (StyleBit.BOLD, StyleBit.ITALIC)


def apply(style: StyleBit, char: str) -> str:
    """Render ``char`` in ``style``.

    The character is normalized first, so re-styling bold to italic works.
    Combinations without code points (italic or bold-italic digits) degrade to
    the plain character.
    """

    plain = to_normal(char)
    base = plain_base(plain)
    if base is None or style == StyleBit.NORMAL:
        return plain
    first = DESTINATIONS.get((StyleBit(style), base))
    if first is None:
        return plain
    return chr(first + ord(plain) - base)


def apply_text(style: StyleBit, text: str) -> str:
    return "".join(apply(style, char) for char in text)


def normalize(text: str) -> str:
    return "".join(to_normal(char) for char in text)


def style_of(text: str) -> StyleBit:
    """Bits shared by every styleable character of ``text``."""

    shared: StyleBit | None = None
    for char in text:
        if not is_styleable(char):
            continue
        current = detect_style(char)
        shared = current if shared is None else shared & current
    return shared if shared is not None else StyleBit.NORMAL


def _carries_bit(text: str, bit: StyleBit) -> bool:
    # Characters that cannot take the bit (italic digits) do not vote.
    return all(
        bit in detect_style(char) for char in text if supports(bit, char)
    )


def toggle(text: str, bit: StyleBit) -> str:
    """Add ``bit`` to every styleable character, or remove it if all carry it.

    The other bit of each character is preserved, so toggling bold on an
    italic run yields bold italic. Unstyleable characters pass through, and
    so do characters that have no code point for ``bit``.
    """

    if bit not in TOGGLE_BITS:
        raise ValueError(f"toggle expects BOLD or ITALIC, got {bit!r}")

    remove = _carries_bit(text, bit)
    rendered = []
    for char in text:
        if not supports(bit, char):
            rendered.append(char)
            continue
        current = detect_style(char)
        target = current & ~bit if remove else current | bit
        rendered.append(apply(target, char))
    result = "".join(rendered)

    telemetry.record_event(
        "style.toggle",
        data={"bit": bit.name, "removed": remove, "length": len(text)},
    )
    return result


def toggle_bold(text: str) -> str:
    return toggle(text, StyleBit.BOLD)


def toggle_italic(text: str) -> str:
    return toggle(text, StyleBit.ITALIC)


__all__ = [
    "apply",
    "apply_text",
    "normalize",
    "style_of",
    "toggle",
    "toggle_bold",
    "toggle_italic",
]
