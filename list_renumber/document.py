"""Document and selection collaborators used by the renumbering pass."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, TypeVar

from .constants import LINE_BREAK_PATTERN
from .exceptions import InvalidLineRangeError, InvalidPositionError
from .models import LineRecord

P = TypeVar("P")


class Document(Protocol[P]):
    """Editable text addressed through opaque positions.

    Positions before a replaced span must stay valid after the edit. Positions
    inside the span become invalid; positions after it may shift or not,
    since edits are applied from the bottom of the document upwards.
    """

    def lines(self) -> Iterable[tuple[P, P, str]]:
        """Yield ``(start, end, text)`` for every line, in order.

        `end` is exclusive and includes the line break. Calling this again
        starts a fresh enumeration.
        """
        ...

    def replace(self, start: P, end: P, text: str) -> None: ...

    def offset_position(self, position: P, count: int) -> P | None:
        """Return `position` moved `count` characters forward within its line.

        Returns None when `count` exceeds what is left of the line before its
        line break.
        """
        ...

    def distance(self, start: P, end: P) -> int: ...

    def end_position(self) -> P: ...


class Selection(Protocol[P]):
    """Selection and caret of the editing surface showing a `Document`."""

    @property
    def start(self) -> P: ...

    @property
    def end(self) -> P: ...

    @property
    def caret(self) -> P: ...

    @property
    def is_empty(self) -> bool: ...

    def select(self, start: P, end: P) -> None: ...

    def set_caret(self, position: P) -> None: ...


def read_lines(document: Document[P]) -> list[LineRecord[P]]:
    """Read a fresh snapshot of a document's lines.

    Args:
        document: Document to enumerate.

    Returns:
        list[LineRecord]: One record per line, in document order. Empty for an
            empty document.

    Raises:
        InvalidLineRangeError: If a line ends before it starts, does not begin
            where the previous line ended, or reports text whose length
            disagrees with its range.

    Examples:
        read_lines(TextDocument("a\\nb"))  # [LineRecord(0, 2, "a\\n"), LineRecord(2, 3, "b")]
    """
    records: list[LineRecord[P]] = []
    for index, (start, end, text) in enumerate(document.lines()):
        span = document.distance(start, end)
        if span < 0:
            raise InvalidLineRangeError(index, start, end, "line ends before it starts")
        if records and document.distance(records[-1].end, start) != 0:
            raise InvalidLineRangeError(
                index, start, end, "line does not start where the previous line ended"
            )
        if span != len(text):
            raise InvalidLineRangeError(
                index, start, end, f"text has {len(text)} characters but the range spans {span}"
            )
        records.append(LineRecord(start=start, end=end, text=text))
    return records


class TextDocument:
    """In-memory `Document` over a string, using integer offsets as positions.

    Lines end after ``\\n``, ``\\r\\n`` or a lone ``\\r``. Text ending with a
    line break has a final empty line, as an editor would show it; the empty
    document has no lines at all.

    Integer positions do not shift on edits, so a position after a replaced
    span is only still valid if the caller edits from the bottom up. Such
    bottom-up replacements are queued and spliced in with a single join the
    next time the text or its lines are read, which keeps a whole pass linear
    in the size of the document.

    Examples:
        document = TextDocument("1. a\\n1. b\\n")
        list(document.lines())  # [(0, 5, "1. a\\n"), (5, 10, "1. b\\n"), (10, 10, "")]
    """

    def __init__(self, text: str = ""):
        self._text = text
        self._length = len(text)
        # (start, end, text) in the order received; each lies before the previous one.
        self._pending: list[tuple[int, int, str]] = []
        self._line_table: tuple[list[int], list[int], list[int]] | None = None

    @property
    def text(self) -> str:
        self._flush()
        return self._text

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"TextDocument({self.text!r})"

    def lines(self) -> Iterator[tuple[int, int, str]]:
        self._flush()
        text = self._text
        starts, _, ends = self._lines_index()
        for start, end in zip(starts, ends):
            yield start, end, text[start:end]

    def replace(self, start: int, end: int, text: str) -> None:
        self._check_position(start)
        self._check_position(end)
        if end < start:
            raise InvalidPositionError(end, self._length)
        if self._pending and end > self._pending[-1][0]:
            self._flush()
        self._pending.append((start, end, text))
        self._length += len(text) - (end - start)

    def offset_position(self, position: int, count: int) -> int | None:
        self._check_position(position)
        if count < 0:
            return None
        if self._pending and position >= self._pending[-1][0]:
            self._flush()
        content_end = self._content_end(position)
        if self._pending and content_end >= self._pending[-1][0]:
            self._flush()
            content_end = self._content_end(position)
        if count > content_end - position:
            return None
        return position + count

    def distance(self, start: int, end: int) -> int:
        self._check_position(start)
        self._check_position(end)
        return end - start

    def end_position(self) -> int:
        return self._length

    def _lines_index(self) -> tuple[list[int], list[int], list[int]]:
        """Line starts, text ends and line ends of the unspliced text."""
        if self._line_table is None:
            starts: list[int] = []
            content_ends: list[int] = []
            ends: list[int] = []
            start = 0
            for match in LINE_BREAK_PATTERN.finditer(self._text):
                starts.append(start)
                content_ends.append(match.start())
                ends.append(match.end())
                start = match.end()
            if self._text:
                starts.append(start)
                content_ends.append(len(self._text))
                ends.append(len(self._text))
            self._line_table = (starts, content_ends, ends)
        return self._line_table

    def _content_end(self, position: int) -> int:
        """Index of the first line break at or after `position`, or the text end."""
        starts, content_ends, _ = self._lines_index()
        if not starts:
            return len(self._text)
        index = bisect_right(starts, position) - 1
        # A position between "\r" and "\n" is itself at a line break.
        return max(content_ends[index], position)

    def _flush(self) -> None:
        if not self._pending:
            return
        pieces: list[str] = []
        cursor = 0
        for start, end, text in reversed(self._pending):
            pieces.append(self._text[cursor:start])
            pieces.append(text)
            cursor = end
        pieces.append(self._text[cursor:])
        self._text = "".join(pieces)
        self._pending.clear()
        self._line_table = None

    def _check_position(self, position: int) -> None:
        if isinstance(position, bool) or not isinstance(position, int):
            raise TypeError(f"Positions must be integers, got {position!r}")
        if not 0 <= position <= self._length:
            raise InvalidPositionError(position, self._length)


@dataclass
class TextSelection:
    """In-memory `Selection` holding integer positions into a `TextDocument`.

    Attributes:
        start: Selection start offset.
        end: Selection end offset.
        caret: Caret offset.
    """

    start: int = 0
    end: int = 0
    caret: int = 0

    @classmethod
    def collapsed(cls, position: int) -> TextSelection:
        return cls(start=position, end=position, caret=position)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def select(self, start: int, end: int) -> None:
        self.start, self.end = min(start, end), max(start, end)

    def set_caret(self, position: int) -> None:
        # A collapsed selection travels with the caret.
        if self.is_empty:
            self.start = self.end = position
        self.caret = position
