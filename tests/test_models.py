import pytest

from list_renumber.models import Block, LineRecord, ListKind, OrderedListMatch, ParsedListLine
from list_renumber.parser import normalize_line


def _match(kind: ListKind, marker: str, uppercase: bool = False) -> OrderedListMatch:
    return OrderedListMatch(
        kind=kind,
        prefix=f"{marker}. ",
        indent="",
        marker=marker,
        punctuation=".",
        spacing=" ",
        is_uppercase_letter=uppercase,
    )


def test_list_kind_members():
    assert list(ListKind) == [ListKind.NUMBERED, ListKind.LETTERED, ListKind.BULLET]


def test_line_record_normalized_text_strips_line_breaks():
    assert LineRecord(start=0, end=6, text="1. a\r\n").normalized_text == "1. a"
    assert LineRecord(start=0, end=0, text="").normalized_text == ""


@pytest.mark.parametrize("text", ["1. a\n", "1. a\r", "b) x\n\r\n", "\n1. a", "plain \x85\n", " "])
def test_line_record_normalized_text_matches_parser(text: str):
    record = LineRecord(start=0, end=len(text), text=text)

    assert record.normalized_text == normalize_line(text)


def test_parsed_list_line_prefix():
    parsed = ParsedListLine(
        indent="  ",
        indent_level=0,
        kind=ListKind.BULLET,
        marker="-",
        punctuation="",
        spacing="  ",
        content="item",
        line_break="\n",
        is_uppercase_letter=False,
    )

    assert parsed.prefix == "  -  "


def test_block_end_line():
    block = Block(
        kind=ListKind.NUMBERED,
        start_line=3,
        matches=(_match(ListKind.NUMBERED, "1"), _match(ListKind.NUMBERED, "2")),
    )

    assert block.end_line == 5
    assert block.use_uppercase is False


def test_block_case_follows_first_line():
    upper_first = Block(
        kind=ListKind.LETTERED,
        start_line=0,
        matches=(_match(ListKind.LETTERED, "A", True), _match(ListKind.LETTERED, "b")),
    )
    lower_first = Block(
        kind=ListKind.LETTERED,
        start_line=0,
        matches=(_match(ListKind.LETTERED, "a"), _match(ListKind.LETTERED, "B", True)),
    )

    assert upper_first.use_uppercase is True
    assert lower_first.use_uppercase is False
