"""Caret and selection preservation across a renumbering pass.

Absolute positions cannot survive the pass: replacing a prefix with a wider
or narrower one shifts everything after it. Positions are therefore recorded
as (line index, offset in line) before any edit and resolved again against
the edited document afterwards.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .document import Document, Selection, read_lines
from .exceptions import InvalidLineRangeError
from .models import LinePosition, LineRecord, SelectionSnapshot

P = TypeVar("P")


def capture_position(
    document: Document[P], lines: Sequence[LineRecord[P]], position: P
) -> LinePosition:
    """Express a position relative to the start of its line.

    Args:
        document: Document the position belongs to.
        lines: Line snapshot of `document`.
        position: Position to capture.

    Returns:
        LinePosition: Index of the last line starting at or before `position`
            and the distance from that line's start, never negative.

    Examples:
        document = TextDocument("1. a\\n2. b\\n")
        capture_position(document, read_lines(document), 7)  # LinePosition(1, 2)
    """
    line_index = 0
    for index, line in enumerate(lines):
        if document.distance(line.start, position) < 0:
            break
        line_index = index

    if not lines:
        return LinePosition(line_index=0, offset=0)

    offset = document.distance(lines[line_index].start, position)
    return LinePosition(line_index=line_index, offset=max(0, offset))


def restore_position(
    document: Document[P], lines: Sequence[LineRecord[P]], line_position: LinePosition
) -> P:
    """Resolve a line-relative position against the current document.

    Args:
        document: Document to resolve against.
        lines: Fresh line snapshot of `document`.
        line_position: Position captured before the document changed.

    Returns:
        Position: The resolved position. Clamped to the document end when the
            line no longer exists, and to the end of the line's text when the
            line became shorter than the offset.

    Raises:
        InvalidLineRangeError: If the end of the target line cannot be
            resolved from its start.
    """
    if line_position.line_index >= len(lines):
        return document.end_position()

    line = lines[line_position.line_index]
    if line_position.offset == 0:
        return line.start

    position = document.offset_position(line.start, line_position.offset)
    if position is not None:
        return position

    line_end = document.offset_position(line.start, len(line.normalized_text))
    if line_end is None:
        raise InvalidLineRangeError(
            line_position.line_index, line.start, line.end, "line end is not reachable"
        )
    return line_end


def capture_selection(
    document: Document[P], selection: Selection[P], lines: Sequence[LineRecord[P]]
) -> SelectionSnapshot:
    """Record the selection and caret as line-relative positions.

    Must be called before the document is modified.
    """
    return SelectionSnapshot(
        start=capture_position(document, lines, selection.start),
        end=capture_position(document, lines, selection.end),
        caret=capture_position(document, lines, selection.caret),
        is_empty=selection.is_empty,
    )


def restore_selection(
    document: Document[P],
    selection: Selection[P],
    snapshot: SelectionSnapshot,
    lines: Sequence[LineRecord[P]] | None = None,
) -> None:
    """Re-apply a captured selection to a modified document.

    A collapsed selection only gets its caret back. Otherwise the range is
    selected first and the caret placed afterwards.

    Args:
        document: The modified document.
        selection: Selection to update.
        snapshot: Snapshot taken by `capture_selection` before the edits.
        lines: Line snapshot of the modified document. Read fresh when omitted.
    """
    if lines is None:
        lines = read_lines(document)

    caret = restore_position(document, lines, snapshot.caret)
    if snapshot.is_empty:
        selection.set_caret(caret)
        return

    selection.select(
        restore_position(document, lines, snapshot.start),
        restore_position(document, lines, snapshot.end),
    )
    selection.set_caret(caret)
