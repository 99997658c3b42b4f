from __future__ import annotations

from typing import List

import pytest

from textedit_engine.buffer import (
    DocumentChange,
    SurfaceError,
    TextDocument,
    TextRange,
    edit_transaction,
    join_units,
    split_units,
    utf16_length,
)
from textedit_engine.buffer.units import code_point_index, unit_offset

BOLD_B = chr(0x1D5EF)


def make_document(text: str) -> tuple[TextDocument, List[DocumentChange]]:
    document = TextDocument.from_text(text)
    changes: List[DocumentChange] = []
    document.subscribe(changes.append)
    return document, changes


def test_text_range_normalizes_and_validates() -> None:
    assert TextRange.spanning(9, 4) == TextRange(4, 5)
    assert TextRange.caret(3).is_caret
    assert TextRange(2, 3).end == 5
    with pytest.raises(ValueError):
        TextRange(-1)
    with pytest.raises(ValueError):
        TextRange(0, -2)


def test_text_range_clamp_and_overlap() -> None:
    assert TextRange(8, 4).clamped(10) == TextRange(8, 2)
    assert TextRange(12, 1).clamped(10) == TextRange(10, 0)
    assert TextRange(2, 5).overlaps(TextRange.caret(4))
    assert not TextRange(2, 5).overlaps(TextRange.caret(7))
    assert not TextRange(2, 5).overlaps(TextRange(7, 1))
    assert TextRange(2, 5).overlaps(TextRange(6, 3))


def test_utf16_helpers() -> None:
    text = "a" + BOLD_B + "c"

    assert utf16_length(text) == 4
    assert len(split_units(text)) == 4
    assert join_units(split_units(text)) == text
    assert join_units("\ud835") == "\ud835"
    assert code_point_index(text, 2) == 1
    assert code_point_index(text, 3) == 2
    assert code_point_index(text, 10) == 3
    assert unit_offset(text, 2) == 3


def test_document_offsets_are_utf16_units() -> None:
    document, _ = make_document("a" + BOLD_B + "c")

    assert document.length() == 4
    assert document.substring(TextRange(1, 2)) == BOLD_B
    assert document.substring(TextRange(3, 1)) == "c"

    document.replace_characters(TextRange(1, 2), "b")

    assert document.text == "abc"
    assert document.length() == 3


def test_document_rejects_out_of_range_edits() -> None:
    document, _ = make_document("abc")

    with pytest.raises(SurfaceError) as info:
        document.replace_characters(TextRange(2, 5), "")

    assert info.value.text_range == TextRange(2, 5)
    assert document.text == "abc"


def test_nested_edit_scopes_notify_once() -> None:
    document, changes = make_document("abc")

    document.begin_editing()
    document.replace_characters(TextRange.caret(3), "d")
    document.begin_editing()
    document.replace_characters(TextRange.caret(0), "_")
    document.end_editing()
    assert changes == []
    document.end_editing()

    assert len(changes) == 1
    assert changes[0].text == "_abcd"
    assert len(changes[0].edits) == 2
    assert changes[0].version == document.version == 2


def test_edit_outside_scope_notifies_immediately() -> None:
    document, changes = make_document("abc")

    document.replace_characters(TextRange(0, 1), "A")

    assert [change.text for change in changes] == ["Abc"]


def test_empty_scope_does_not_notify() -> None:
    document, changes = make_document("abc")

    with edit_transaction(document, "noop"):
        pass

    assert changes == []
    assert not document.editing


def test_end_editing_without_begin_raises() -> None:
    document, _ = make_document("abc")

    with pytest.raises(SurfaceError):
        document.end_editing()


def test_transaction_closes_scope_on_error() -> None:
    document, changes = make_document("abc")

    with pytest.raises(SurfaceError):
        with edit_transaction(document, "broken"):
            document.replace_characters(TextRange.caret(0), "x")
            document.replace_characters(TextRange(10, 1), "")

    assert not document.editing
    assert [change.text for change in changes] == ["xabc"]


def test_primary_selection_is_clamped() -> None:
    document, _ = make_document("abc")

    document.set_primary_selection(TextRange(2, 9))

    assert document.current_primary_selection() == TextRange(2, 1)
