from __future__ import annotations

import string
import time

import pytest

from list_renumber.document import TextDocument, TextSelection, read_lines
from list_renumber.exceptions import DocumentContractError, InvalidLineRangeError
from list_renumber.models import ListKind, PrefixEdit
from list_renumber.renumber import (
    find_blocks,
    marker_for,
    plan_edits,
    renumber_lists,
    renumber_text,
)


def _blocks(text: str):
    return find_blocks(read_lines(TextDocument(text)))


def test_renumbers_repeated_numbers():
    assert renumber_text("1. a\n1. b\n1. c\n") == "1. a\n2. b\n3. c\n"


def test_renumbers_skipped_letters():
    assert renumber_text("a) x\nc) y\n") == "a) x\nb) y\n"


def test_bullet_interrupts_numbered_block():
    assert renumber_text("1. a\n* b\n2. c\n") == "1. a\n* b\n1. c\n"


def test_blank_line_interrupts_block():
    assert renumber_text("1. a\n\n4. b\n9. c") == "1. a\n\n1. b\n2. c"


def test_plain_text_interrupts_block():
    assert renumber_text("3. a\nsome text\n3. b\n") == "1. a\nsome text\n1. b\n"


def test_unpunctuated_markers_are_not_renumbered():
    assert renumber_text("1. a\n7 b\n3. c\n") == "1. a\n7 b\n1. c\n"


def test_kind_change_starts_new_block():
    text = "1. a\n2. b\na. c\nc. d\n3. e\n"

    assert renumber_text(text) == "1. a\n2. b\na. c\nb. d\n1. e\n"


def test_letter_case_follows_first_line():
    assert renumber_text("B) x\nc) y\nz) w\n") == "A) x\nB) y\nC) w\n"
    assert renumber_text("a. x\nB. y\n") == "a. x\nb. y\n"


def test_letters_clamp_at_z():
    text = "".join("a. item\n" for _ in range(28))
    expected = "".join(f"{letter}. item\n" for letter in string.ascii_lowercase + "zz")

    assert renumber_text(text) == expected


def test_marker_width_may_grow_and_shrink():
    text = "".join("5. x\n" for _ in range(12))
    expected = "".join(f"{number}. x\n" for number in range(1, 13))

    assert renumber_text(text) == expected
    assert renumber_text("100) a\n100) b\n") == "1) a\n2) b\n"


def test_prefix_parts_other_than_marker_are_preserved():
    text = "  5)   first\n\t9.\tsecond\n"

    assert renumber_text(text) == "  1)   first\n\t2.\tsecond\n"


def test_indentation_does_not_restart_numbering():
    text = "1. Parent\n    5. Child\n    9. Second child\n3. Next parent\n"

    assert renumber_text(text) == "1. Parent\n    2. Child\n    3. Second child\n4. Next parent\n"


def test_line_breaks_are_preserved():
    assert renumber_text("3. a\r\n3. b\r\n") == "1. a\r\n2. b\r\n"
    assert renumber_text("3. a\r3. b") == "1. a\r2. b"


def test_content_that_looks_like_a_marker_is_untouched():
    assert renumber_text("4. 4. four\n4. b) bee\n") == "1. 4. four\n2. b) bee\n"


def test_lines_without_spacing_are_not_list_lines():
    assert renumber_text("1.\n5.\n") == "1.\n5.\n"


def test_empty_document_is_a_no_op():
    document = TextDocument("")
    selection = TextSelection(start=0, end=0, caret=0)

    renumber_lists(document, selection)

    assert document.text == ""
    assert selection == TextSelection(start=0, end=0, caret=0)


def test_renumbering_is_idempotent():
    once = renumber_text("2. a\nb) x\nd) y\n\n- q\n7. z\n7. w\n")

    assert renumber_text(once) == once


def test_find_blocks_reports_boundaries():
    blocks = _blocks("1. a\n* b\n2. c\n3. d\nx) e\n")

    assert [(block.kind, block.start_line, block.end_line) for block in blocks] == [
        (ListKind.NUMBERED, 0, 1),
        (ListKind.NUMBERED, 2, 4),
        (ListKind.LETTERED, 4, 5),
    ]
    assert [match.marker for match in blocks[1].matches] == ["2", "3"]


def test_find_blocks_on_document_without_lists():
    assert _blocks("hello\n\n- bullet\n") == []


def test_marker_for_positions():
    numbered, lettered = _blocks("1. a\n\nC. b\n")

    assert [marker_for(numbered, index) for index in range(3)] == ["1", "2", "3"]
    assert [marker_for(lettered, index) for index in (0, 1, 30)] == ["A", "B", "Z"]


def test_plan_edits_skips_canonical_lines():
    edits = plan_edits(_blocks("1. a\n1. b\n3. c\n"))

    assert edits == [PrefixEdit(line_index=1, old_prefix="1. ", new_prefix="2. ")]


def test_plan_edits_empty_for_canonical_document():
    assert plan_edits(_blocks("1. a\n2. b\n\na) c\nb) d\n")) == []


class _UnresolvableDocument(TextDocument):
    def offset_position(self, position, count):
        return None


def test_unresolvable_prefix_raises():
    document = _UnresolvableDocument("2. a\n")

    with pytest.raises(DocumentContractError):
        renumber_lists(document)
    assert document.text == "2. a\n"


class _BrokenLinesDocument(TextDocument):
    def lines(self):
        yield 0, 4, "2. a"
        yield 6, 9, "2. b"


def test_inconsistent_lines_raise_before_any_edit():
    document = _BrokenLinesDocument("2. a\n\n2. b")

    with pytest.raises(InvalidLineRangeError):
        renumber_lists(document)
    assert document.text == "2. a\n\n2. b"


def _fastest_run(text: str) -> float:
    timings = []
    for _ in range(3):
        started = time.perf_counter()
        renumber_text(text)
        timings.append(time.perf_counter() - started)
    return min(timings)


def test_renumber_text_time_grows_linearly_with_line_count():
    small = _fastest_run("7. item\n" * 20_000)
    large = _fastest_run("7. item\n" * 80_000)

    assert large / small < 8


def test_renumber_text_handles_large_documents():
    text = "7. item\n" * 50_000

    lines = renumber_text(text).splitlines()

    assert lines[0] == "1. item"
    assert lines[-1] == "50000. item"
