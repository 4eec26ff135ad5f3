"""Data models for list-renumber."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

P = TypeVar("P")


class ListKind(Enum):
    """Kinds of list marker recognised at the start of a line.

    Attributes:
        NUMBERED: Decimal markers such as ``1.`` or ``12)``.
        LETTERED: Single-letter markers such as ``a.`` or ``B)``.
        BULLET: ``*`` or ``-`` markers. Recognised, never renumbered.
    """

    NUMBERED = auto()
    LETTERED = auto()
    BULLET = auto()


@dataclass(frozen=True)
class ParsedListLine:
    """Full decomposition of a list line.

    Attributes:
        indent: Leading whitespace, verbatim.
        indent_level: Nesting depth derived from `indent`.
        kind: Kind of marker found.
        marker: Marker text (digits, a letter, or a bullet character).
        punctuation: ``"."``, ``")"``, or ``""`` when absent.
        spacing: Whitespace run separating the marker from the content.
        content: Remainder of the line, without the line break.
        line_break: Trailing ``\\r``/``\\n`` characters stripped before parsing.
        is_uppercase_letter: True for lettered markers written in uppercase.
    """

    indent: str
    indent_level: int
    kind: ListKind
    marker: str
    punctuation: str
    spacing: str
    content: str
    line_break: str
    is_uppercase_letter: bool

    @property
    def prefix(self) -> str:
        return self.indent + self.marker + self.punctuation + self.spacing


@dataclass(frozen=True)
class OrderedListMatch:
    """Prefix match for a numbered or lettered line.

    Attributes:
        kind: `ListKind.NUMBERED` or `ListKind.LETTERED`.
        prefix: The matched prefix text, from line start through the spacing.
        indent: Leading whitespace.
        marker: Number or letter.
        punctuation: ``"."`` or ``")"``.
        spacing: Whitespace following the punctuation.
        is_uppercase_letter: True for uppercase lettered markers.
    """

    kind: ListKind
    prefix: str
    indent: str
    marker: str
    punctuation: str
    spacing: str
    is_uppercase_letter: bool


@dataclass(frozen=True)
class LineRecord(Generic[P]):
    """One line of a document snapshot.

    Positions are only meaningful for the snapshot they were read from.

    Attributes:
        start: Position of the first character of the line.
        end: Position just past the line, line break included.
        text: Literal text of the line.
    """

    start: P
    end: P
    text: str

    @property
    def normalized_text(self) -> str:
        from .parser import normalize_line  # parser imports this module

        return normalize_line(self.text)


@dataclass(frozen=True)
class Block:
    """Maximal run of consecutive ordered list lines of one kind.

    Attributes:
        kind: Kind shared by every line in the block.
        start_line: Zero-based index of the block's first line.
        matches: Prefix match of each line, in document order.
    """

    kind: ListKind
    start_line: int
    matches: tuple[OrderedListMatch, ...]

    @property
    def end_line(self) -> int:
        return self.start_line + len(self.matches)

    @property
    def use_uppercase(self) -> bool:
        # The first line decides the case of the whole block.
        return self.kind is ListKind.LETTERED and self.matches[0].is_uppercase_letter


@dataclass(frozen=True)
class PrefixEdit:
    """Planned replacement of one line's list prefix.

    Attributes:
        line_index: Zero-based index of the line to edit.
        old_prefix: Prefix currently in the document.
        new_prefix: Prefix to write in its place.
    """

    line_index: int
    old_prefix: str
    new_prefix: str


@dataclass(frozen=True)
class LinePosition:
    """Position expressed relative to a line start."""

    line_index: int
    offset: int


@dataclass(frozen=True)
class SelectionSnapshot:
    """Selection and caret captured as line-relative positions.

    Attributes:
        start: Selection start.
        end: Selection end.
        caret: Caret position.
        is_empty: Whether the selection was collapsed.
    """

    start: LinePosition
    end: LinePosition
    caret: LinePosition
    is_empty: bool
