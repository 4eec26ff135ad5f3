"""List line recognition.

Two grammars are recognised, and they are deliberately kept apart:

* the general list grammar used by `is_list_line` and `parse_list_line`:
  optional whitespace, a number, a single letter or a bullet (``*``/``-``),
  optional punctuation (``.``/``)``), then at least one whitespace character;
* the ordered grammar used by `match_ordered_list_prefix`: the same shape
  restricted to numbers and letters, with mandatory punctuation.

So ``"a thing"`` is a lettered list line for general parsing, while only
``"a. thing"`` or ``"a) thing"`` is eligible for renumbering.
"""

from __future__ import annotations

from typing import NamedTuple

from .constants import (
    ALPHABET_SIZE,
    BULLET_CHARS,
    DIGITS,
    INDENT_SPACES_PER_LEVEL,
    LETTERS,
    LINE_BREAK_CHARS,
    PUNCTUATION_CHARS,
    TAB_WIDTH,
)
from .models import ListKind, OrderedListMatch, ParsedListLine


class _PrefixScan(NamedTuple):
    indent: str
    kind: ListKind
    marker: str
    punctuation: str
    spacing: str

    @property
    def prefix(self) -> str:
        return build_prefix(self.indent, self.marker, self.punctuation, self.spacing)


def normalize_line(text: str) -> str:
    """Strip trailing carriage returns and line feeds.

    Args:
        text: A line of text, possibly ending with a line break.

    Returns:
        str: The line without its trailing ``\\r``/``\\n`` characters.

    Examples:
        normalize_line("1. item\\r\\n")  # "1. item"
    """
    return text.rstrip(LINE_BREAK_CHARS)


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _scan_prefix(line: str, *, ordered_only: bool) -> _PrefixScan | None:
    """Scan the list prefix at the start of a normalized line.

    Args:
        line: Line without its line break.
        ordered_only: When True, bullets are rejected and punctuation is
            required (the ordered grammar). Otherwise the general grammar
            applies.

    Returns:
        _PrefixScan | None: The prefix parts, or None when the line does not
            match the grammar.
    """
    marker_start = _skip_whitespace(line, 0)
    if marker_start >= len(line):
        return None

    first = line[marker_start]
    marker_end = marker_start + 1
    if first in DIGITS:
        kind = ListKind.NUMBERED
        while marker_end < len(line) and line[marker_end] in DIGITS:
            marker_end += 1
    elif first in LETTERS:
        kind = ListKind.LETTERED
    elif first in BULLET_CHARS and not ordered_only:
        kind = ListKind.BULLET
    else:
        return None

    punctuation_end = marker_end
    if punctuation_end < len(line) and line[punctuation_end] in PUNCTUATION_CHARS:
        punctuation_end += 1
    elif ordered_only:
        return None

    spacing_end = _skip_whitespace(line, punctuation_end)
    if spacing_end == punctuation_end:
        return None

    return _PrefixScan(
        indent=line[:marker_start],
        kind=kind,
        marker=line[marker_start:marker_end],
        punctuation=line[marker_end:punctuation_end],
        spacing=line[punctuation_end:spacing_end],
    )


def is_list_line(text: str) -> bool:
    """Check whether a line starts with a list marker.

    Args:
        text: Line to inspect; trailing line breaks are ignored.

    Returns:
        bool: True when the line matches the general list grammar.

    Examples:
        is_list_line("  - item\\n")  # True
        is_list_line("a thing")  # True, lettered without punctuation
        is_list_line("   ")  # False
    """
    return _scan_prefix(normalize_line(text), ordered_only=False) is not None


def parse_list_line(text: str) -> ParsedListLine | None:
    """Decompose a list line into its parts.

    The line break is stripped before matching and kept verbatim in
    `ParsedListLine.line_break`, so the original text can be rebuilt exactly.

    Args:
        text: Line to parse.

    Returns:
        ParsedListLine | None: The decomposition, or None when the line is not
            a list line.

    Examples:
        parse_list_line("\\t3) Buy milk\\n").content  # "Buy milk"
    """
    normalized = normalize_line(text)
    scan = _scan_prefix(normalized, ordered_only=False)
    if scan is None:
        return None

    return ParsedListLine(
        indent=scan.indent,
        indent_level=indent_level_from_indent(scan.indent),
        kind=scan.kind,
        marker=scan.marker,
        punctuation=scan.punctuation,
        spacing=scan.spacing,
        content=normalized[len(scan.prefix) :],
        line_break=text[len(normalized) :],
        is_uppercase_letter=scan.kind is ListKind.LETTERED and scan.marker.isupper(),
    )


def match_ordered_list_prefix(text: str) -> OrderedListMatch | None:
    """Match a numbered or lettered prefix with mandatory punctuation.

    Bullet lines never match; they are left alone by renumbering.

    Args:
        text: Line to inspect; trailing line breaks are ignored.

    Returns:
        OrderedListMatch | None: The matched prefix, or None.

    Examples:
        match_ordered_list_prefix("2. second").marker  # "2"
        match_ordered_list_prefix("a second")  # None, punctuation missing
    """
    scan = _scan_prefix(normalize_line(text), ordered_only=True)
    if scan is None:
        return None

    return OrderedListMatch(
        kind=scan.kind,
        prefix=scan.prefix,
        indent=scan.indent,
        marker=scan.marker,
        punctuation=scan.punctuation,
        spacing=scan.spacing,
        is_uppercase_letter=scan.kind is ListKind.LETTERED and scan.marker.isupper(),
    )


def indent_level_from_indent(indent: str) -> int:
    """Convert raw indentation into a nesting level.

    Every tab counts as a full level, whatever column it starts at; other
    whitespace characters count as one column each.

    Args:
        indent: Leading whitespace of a line.

    Returns:
        int: Indentation width divided by four, truncated.

    Examples:
        indent_level_from_indent("\\t")  # 1
        indent_level_from_indent("  \\t  ")  # 2
    """
    width = sum(TAB_WIDTH if character == "\t" else 1 for character in indent)
    return width // INDENT_SPACES_PER_LEVEL


def indent_level(text: str) -> int:
    """Return the indentation level of a list line, or 0 for other lines."""
    parsed = parse_list_line(text)
    return parsed.indent_level if parsed is not None else 0


def set_indent_level(text: str, level: int) -> str:
    """Re-indent a list line to the given level.

    Args:
        text: Line to re-indent.
        level: Target nesting level.

    Returns:
        str: The line indented with ``level * 4`` spaces. Lines that are not
            list lines are returned unchanged.

    Raises:
        ValueError: If `level` is negative.

    Examples:
        set_indent_level("\\t- item\\n", 2)  # "        - item\\n"
    """
    if level < 0:
        raise ValueError(f"Indentation level must be >= 0, got {level}")

    parsed = parse_list_line(text)
    if parsed is None:
        return text

    normalized = normalize_line(text)
    remainder = normalized[len(parsed.indent) :]
    return " " * (level * INDENT_SPACES_PER_LEVEL) + remainder + parsed.line_break


def build_letter_marker(index: int, uppercase: bool) -> str:
    """Map a one-based position to a letter marker.

    Positions past 26 are clamped to ``z``/``Z``; there are no two-letter
    markers.

    Args:
        index: One-based position in the list.
        uppercase: Whether to use uppercase letters.

    Returns:
        str: A single letter.

    Examples:
        build_letter_marker(3, uppercase=False)  # "c"
        build_letter_marker(40, uppercase=True)  # "Z"
    """
    base = "A" if uppercase else "a"
    offset = min(max(0, index - 1), ALPHABET_SIZE - 1)
    return chr(ord(base) + offset)


def build_prefix(indent: str, marker: str, punctuation: str, spacing: str) -> str:
    return indent + marker + punctuation + spacing


def renumbered_prefix(match: OrderedListMatch, marker: str) -> str:
    """Rebuild a matched prefix with a different marker.

    Indentation, punctuation and spacing are kept exactly as matched.

    Examples:
        renumbered_prefix(match_ordered_list_prefix("  7) x"), "1")  # "  1) "
    """
    return build_prefix(match.indent, marker, match.punctuation, match.spacing)
