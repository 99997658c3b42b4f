import pytest

from textedit_engine.styling import (
    StyleBit,
    detect_style,
    is_styleable,
    supports,
    to_normal,
)

BOLD_A = chr(0x1D5D4)
BOLD_LOWER_Z = chr(0x1D607)
BOLD_FIVE = chr(0x1D7EC + 5)
ITALIC_B = chr(0x1D609)
BOLD_ITALIC_LOWER_C = chr(0x1D656 + 2)


def test_detect_style_per_block() -> None:
    assert detect_style("a") == StyleBit.NORMAL
    assert detect_style(BOLD_A) == StyleBit.BOLD
    assert detect_style(BOLD_LOWER_Z) == StyleBit.BOLD
    assert detect_style(BOLD_FIVE) == StyleBit.BOLD
    assert detect_style(ITALIC_B) == StyleBit.ITALIC
    assert detect_style(BOLD_ITALIC_LOWER_C) == StyleBit.BOLD_ITALIC


def test_detect_style_block_edges() -> None:
    # Last italic lowercase sits right before the first bold-italic uppercase.
    assert detect_style(chr(0x1D63B)) == StyleBit.ITALIC
    assert detect_style(chr(0x1D63C)) == StyleBit.BOLD_ITALIC
    assert detect_style(chr(0x1D66F)) == StyleBit.BOLD_ITALIC
    assert detect_style(chr(0x1D670)) == StyleBit.NORMAL


def test_to_normal_maps_back_to_ascii() -> None:
    assert to_normal(BOLD_A) == "A"
    assert to_normal(BOLD_LOWER_Z) == "z"
    assert to_normal(BOLD_FIVE) == "5"
    assert to_normal(ITALIC_B) == "B"
    assert to_normal(BOLD_ITALIC_LOWER_C) == "c"


def test_unmapped_characters_pass_through() -> None:
    for char in ("é", "!", " ", "\n", "中", chr(0x1F600)):
        assert to_normal(char) == char
        assert detect_style(char) == StyleBit.NORMAL
        assert is_styleable(char) is False


def test_is_styleable_covers_letters_digits_and_styled_forms() -> None:
    assert is_styleable("Q")
    assert is_styleable("q")
    assert is_styleable("0")
    assert is_styleable(BOLD_FIVE)
    assert is_styleable(BOLD_ITALIC_LOWER_C)


def test_supports_reflects_missing_digit_blocks() -> None:
    assert supports(StyleBit.BOLD, "5")
    assert supports(StyleBit.NORMAL, BOLD_FIVE)
    assert not supports(StyleBit.ITALIC, "5")
    assert not supports(StyleBit.BOLD_ITALIC, BOLD_FIVE)
    assert supports(StyleBit.BOLD_ITALIC, "x")
    assert not supports(StyleBit.BOLD, "?")


def test_character_api_rejects_strings() -> None:
    with pytest.raises(ValueError):
        detect_style("ab")
    with pytest.raises(ValueError):
        to_normal("")
