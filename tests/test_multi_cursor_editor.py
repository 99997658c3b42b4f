from __future__ import annotations

from typing import List, Optional

from textedit_engine.buffer import DocumentChange, TextDocument, TextRange
from textedit_engine.cursors import CursorSet, MultiCursorEditor
from textedit_engine.runtime import EngineConfig
from textedit_engine.styling import StyleBit, apply_text


def make_editor(
    text: str,
    primary: TextRange,
    *offsets: int,
    config: Optional[EngineConfig] = None,
) -> tuple[MultiCursorEditor, TextDocument, List[DocumentChange]]:
    document = TextDocument.from_text(text)
    changes: List[DocumentChange] = []
    document.subscribe(changes.append)
    document.set_primary_selection(primary)
    editor = MultiCursorEditor(document, config=config)
    for offset in offsets:
        editor.add_cursor(offset)
    return editor, document, changes


def carets(editor: MultiCursorEditor) -> list[int]:
    selections = editor.cursors.all_selections()
    assert all(text_range.is_caret for text_range in selections)
    return [text_range.location for text_range in selections]


def test_insert_compensates_offsets_left_to_right() -> None:
    editor, document, changes = make_editor("abcdefghijkl", TextRange.caret(2), 5, 9)

    result = editor.insert("X")

    assert result.consumed is True
    assert document.text == "abXcdeXfghiXjkl"
    assert carets(editor) == [3, 7, 12]
    assert len(changes) == 1


def test_insert_makes_leftmost_caret_primary() -> None:
    editor, document, _ = make_editor("abcdefghijkl", TextRange.caret(9), 2, 5)

    editor.insert("--")

    assert document.text == "ab--cde--fghi--jkl"
    assert editor.cursors.primary == TextRange.caret(4)
    assert document.current_primary_selection() == TextRange.caret(4)
    assert editor.cursors.additional == (TextRange.caret(9), TextRange.caret(15))


def test_insert_overwrites_selections() -> None:
    editor, document, _ = make_editor("hello world", TextRange(0, 5), 11)

    editor.insert("HEY")

    assert document.text == "HEY worldHEY"
    assert carets(editor) == [3, 12]


def test_insert_counts_utf16_units() -> None:
    bold_x = apply_text(StyleBit.BOLD, "x")
    editor, document, _ = make_editor("ab", TextRange.caret(0), 1, 2)

    editor.insert(bold_x)

    assert document.text == bold_x + "a" + bold_x + "b" + bold_x
    assert carets(editor) == [2, 5, 8]


def test_insert_in_single_cursor_mode_is_left_to_host() -> None:
    editor, document, changes = make_editor("abc", TextRange.caret(1))

    result = editor.insert("X")

    assert result.consumed is False
    assert result.status == "single_cursor"
    assert document.text == "abc"
    assert changes == []


def test_insert_clamps_ranges_past_the_end() -> None:
    document = TextDocument.from_text("abc")
    editor = MultiCursorEditor(
        document,
        CursorSet(primary=TextRange.caret(0), additional=(TextRange.caret(50),)),
    )

    editor.insert("X")

    assert document.text == "XabcX"
    assert carets(editor) == [1, 5]


def test_delete_backward_skips_caret_at_zero() -> None:
    editor, document, changes = make_editor("abcdef", TextRange.caret(0), 3, 6)

    result = editor.delete_backward()

    assert result.consumed is True
    assert document.text == "abde"
    assert carets(editor) == [0, 2, 4]
    assert len(changes) == 1


def test_delete_backward_removes_selections() -> None:
    editor, document, _ = make_editor("hello world", TextRange(0, 6), 11)

    editor.delete_backward()

    assert document.text == "worl"
    assert carets(editor) == [0, 4]


def test_delete_backward_treats_surrogate_pair_as_one_character() -> None:
    bold_b = apply_text(StyleBit.BOLD, "b")
    editor, document, _ = make_editor("a" + bold_b + "c", TextRange.caret(3), 4)

    editor.delete_backward()

    assert document.text == "a"
    # Both carets land on offset 1 and collapse into one.
    assert editor.cursors == CursorSet(primary=TextRange.caret(1))
    assert editor.has_multiple_cursors is False


def test_delete_backward_in_single_cursor_mode_is_left_to_host() -> None:
    editor, document, _ = make_editor("abc", TextRange.caret(2))

    assert editor.delete_backward().consumed is False
    assert document.text == "abc"


def test_editor_follows_host_primary_moves() -> None:
    editor, document, _ = make_editor("abcdef", TextRange.caret(0), 4)

    document.set_primary_selection(TextRange.caret(2))
    editor.insert("|")

    assert document.text == "ab|cd|ef"
    assert carets(editor) == [3, 6]


def test_restyle_toggles_each_selection_and_keeps_it_selected() -> None:
    editor, document, changes = make_editor("bold and more", TextRange(0, 4))
    editor.add_selection(13, anchor=9)

    result = editor.restyle(StyleBit.BOLD)

    bold = apply_text(StyleBit.BOLD, "bold")
    more = apply_text(StyleBit.BOLD, "more")
    assert result.consumed is True
    assert document.text == bold + " and " + more
    assert editor.cursors.primary == TextRange(0, 8)
    assert editor.cursors.additional == (TextRange(13, 8),)
    assert document.current_primary_selection() == TextRange(0, 8)
    assert len(changes) == 1


def test_restyle_twice_restores_text_and_lengths() -> None:
    editor, document, _ = make_editor("make it so", TextRange(5, 2))

    editor.restyle(StyleBit.ITALIC)
    editor.restyle(StyleBit.ITALIC)

    assert document.text == "make it so"
    assert editor.cursors.primary == TextRange(5, 2)


def test_restyle_shifts_carets_after_selections() -> None:
    editor, document, _ = make_editor("ab cd", TextRange(0, 2), 5)

    editor.restyle(StyleBit.BOLD)

    assert document.text == apply_text(StyleBit.BOLD, "ab") + " cd"
    assert editor.cursors.additional == (TextRange.caret(7),)


def test_restyle_without_selection_is_not_consumed() -> None:
    editor, document, _ = make_editor("abc", TextRange.caret(1), 2)

    result = editor.restyle(StyleBit.BOLD)

    assert result.consumed is False
    assert result.status == "no_selection"
    assert document.text == "abc"


def test_strict_config_rejects_overlapping_cursors() -> None:
    config = EngineConfig(reject_overlapping_selections=True)
    editor, _, _ = make_editor("abcdefgh", TextRange(1, 4), 3, 6, config=config)

    assert editor.cursors.additional == (TextRange.caret(6),)


def test_delete_backward_skips_selection_past_the_end() -> None:
    document = TextDocument.from_text("abc")
    editor = MultiCursorEditor(
        document,
        CursorSet(primary=TextRange.caret(1), additional=(TextRange(5, 3),)),
    )

    result = editor.delete_backward()

    assert result.consumed is True
    assert document.text == "bc"
    assert carets(editor) == [0, 2]


def test_selection_wholly_past_the_end_is_not_added() -> None:
    editor, document, changes = make_editor("abc", TextRange.caret(0))

    editor.add_selection(8, anchor=5)

    assert editor.has_multiple_cursors is False
    assert editor.delete_backward().consumed is False
    assert document.text == "abc"
    assert changes == []


def test_added_offsets_are_clamped_to_buffer() -> None:
    editor, document, _ = make_editor("abc", TextRange.caret(0), 50)
    editor.add_selection(40, anchor=1)

    assert editor.cursors.additional == (TextRange.caret(3), TextRange(1, 2))
    assert all(r.end <= document.length() for r in editor.cursors.all_selections())
