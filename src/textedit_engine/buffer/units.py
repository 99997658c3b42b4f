"""UTF-16 code-unit helpers.

Hosts measure offsets in UTF-16 code units, while Python strings count code
points. Styled letters live outside the BMP and take two units each, so the
buffer layer stores text as one Python character per code unit.
"""

from __future__ import annotations

_SURROGATE_OFFSET = 0x10000


def utf16_length(text: str) -> int:
    return sum(2 if ord(char) >= _SURROGATE_OFFSET else 1 for char in text)


def split_units(text: str) -> str:
    """Return ``text`` with every astral character split into a surrogate pair."""

    units = []
    for char in text:
        code = ord(char)
        if code < _SURROGATE_OFFSET:
            units.append(char)
            continue
        code -= _SURROGATE_OFFSET
        units.append(chr(0xD800 + (code >> 10)))
        units.append(chr(0xDC00 + (code & 0x3FF)))
    return "".join(units)


def join_units(units: str) -> str:
    """Inverse of ``split_units``; unpaired surrogates are kept as they are."""

    return units.encode("utf-16-le", "surrogatepass").decode(
        "utf-16-le", "surrogatepass"
    )


def code_point_index(text: str, offset: int) -> int:
    """Index into ``text`` of the character starting at UTF-16 ``offset``.

    Offsets past the end map to ``len(text)``; an offset inside a surrogate
    pair maps to the character that owns it.
    """

    units = 0
    for index, char in enumerate(text):
        width = 2 if ord(char) >= _SURROGATE_OFFSET else 1
        if units + width > offset:
            return index
        units += width
    return len(text)


def unit_offset(text: str, index: int) -> int:
    """UTF-16 offset of ``text[index]``."""

    return utf16_length(text[:index])


__all__ = [
    "code_point_index",
    "unit_offset",
    "utf16_length",
    "split_units",
    "join_units",
]
