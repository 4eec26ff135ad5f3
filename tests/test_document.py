from __future__ import annotations

import pytest

from list_renumber.document import TextDocument, TextSelection, read_lines
from list_renumber.exceptions import InvalidLineRangeError, InvalidPositionError
from list_renumber.models import LineRecord


class _ScriptedLinesDocument(TextDocument):
    """Document reporting a fixed, possibly inconsistent, set of lines."""

    def __init__(self, text: str, scripted_lines: list[tuple[int, int, str]]):
        super().__init__(text)
        self._scripted_lines = scripted_lines

    def lines(self):
        yield from self._scripted_lines


def test_lines_include_trailing_empty_line():
    document = TextDocument("1. a\n1. b\n")

    assert list(document.lines()) == [(0, 5, "1. a\n"), (5, 10, "1. b\n"), (10, 10, "")]


def test_lines_without_trailing_break():
    assert list(TextDocument("abc").lines()) == [(0, 3, "abc")]


def test_lines_of_empty_document():
    assert list(TextDocument("").lines()) == []


def test_lines_split_on_all_line_break_styles():
    document = TextDocument("a\r\nb\rc\nd")

    assert list(document.lines()) == [(0, 3, "a\r\n"), (3, 5, "b\r"), (5, 7, "c\n"), (7, 8, "d")]


def test_lines_enumeration_is_restartable():
    document = TextDocument("x\ny")

    assert list(document.lines()) == list(document.lines())


def test_replace_span():
    document = TextDocument("10. a\n")
    document.replace(0, 4, "1. ")

    assert document.text == "1. a\n"
    assert len(document) == 5


def test_replace_bottom_up_edits_are_spliced_together():
    document = TextDocument("10. a\n10. b\n10. c\n")
    document.replace(12, 16, "3. ")
    document.replace(6, 10, "2. ")

    assert len(document) == 16
    assert document.offset_position(0, 4) == 4
    document.replace(0, 4, "1. ")

    assert document.text == "1. a\n2. b\n3. c\n"
    assert list(document.lines())[-2:] == [(10, 15, "3. c\n"), (15, 15, "")]


def test_replace_top_down_edits_apply_in_order():
    document = TextDocument("1. a\n1. b\n")
    document.replace(0, 1, "10")
    document.replace(6, 7, "20")

    assert document.text == "10. a\n20. b\n"


def test_offset_position_sees_edits_on_its_own_line():
    document = TextDocument("10. a\n10. b\n")
    document.replace(6, 10, "2. ")

    assert document.offset_position(6, 4) == 10
    assert document.offset_position(6, 5) is None
    assert document.offset_position(0, 5) == 5
    assert document.text == "10. a\n2. b\n"


def test_insertions_at_the_same_position_keep_their_order():
    document = TextDocument("x")
    document.replace(0, 0, "b")
    document.replace(0, 0, "a")

    assert document.text == "abx"


def test_offset_position_inside_crlf_is_at_the_line_break():
    document = TextDocument("ab\r\ncd")

    assert document.offset_position(3, 0) == 3
    assert document.offset_position(3, 1) is None


@pytest.mark.parametrize(("start", "end"), [(-1, 2), (0, 99), (3, 1)])
def test_replace_rejects_invalid_span(start: int, end: int):
    document = TextDocument("abcd")

    with pytest.raises(InvalidPositionError):
        document.replace(start, end, "x")
    assert document.text == "abcd"


def test_offset_position_stays_within_line():
    document = TextDocument("abc\r\ndef")

    assert document.offset_position(0, 3) == 3
    assert document.offset_position(0, 4) is None
    assert document.offset_position(5, 3) == 8
    assert document.offset_position(5, 4) is None
    assert document.offset_position(1, -1) is None


def test_offset_position_rejects_foreign_positions():
    with pytest.raises(InvalidPositionError):
        TextDocument("abc").offset_position(10, 0)

    with pytest.raises(TypeError):
        TextDocument("abc").offset_position("0", 0)


def test_distance_and_end_position():
    document = TextDocument("hello\nworld")

    assert document.distance(2, 8) == 6
    assert document.distance(8, 2) == -6
    assert document.end_position() == 11


def test_read_lines_returns_records():
    assert read_lines(TextDocument("a\nb")) == [
        LineRecord(start=0, end=2, text="a\n"),
        LineRecord(start=2, end=3, text="b"),
    ]


def test_read_lines_rejects_line_ending_before_start():
    document = _ScriptedLinesDocument("abcdef", [(3, 1, "ab")])

    with pytest.raises(InvalidLineRangeError) as excinfo:
        read_lines(document)

    assert excinfo.value.line_index == 0
    assert "ends before it starts" in str(excinfo.value)


def test_read_lines_rejects_gaps_between_lines():
    document = _ScriptedLinesDocument("abcdef", [(0, 2, "ab"), (3, 6, "def")])

    with pytest.raises(InvalidLineRangeError) as excinfo:
        read_lines(document)

    assert excinfo.value.line_index == 1


def test_read_lines_rejects_text_length_mismatch():
    document = _ScriptedLinesDocument("abcdef", [(0, 3, "ab")])

    with pytest.raises(InvalidLineRangeError):
        read_lines(document)


def test_text_selection_select_orders_bounds():
    selection = TextSelection()
    selection.select(9, 4)

    assert (selection.start, selection.end) == (4, 9)
    assert selection.is_empty is False


def test_text_selection_collapsed_follows_caret():
    selection = TextSelection.collapsed(3)
    selection.set_caret(7)

    assert selection.is_empty is True
    assert (selection.start, selection.end, selection.caret) == (7, 7, 7)


def test_text_selection_range_survives_caret_move():
    selection = TextSelection(start=2, end=5, caret=5)
    selection.set_caret(2)

    assert (selection.start, selection.end, selection.caret) == (2, 5, 2)
