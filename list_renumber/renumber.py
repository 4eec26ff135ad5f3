"""Block detection and marker renumbering."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .document import Document, Selection, TextDocument, read_lines
from .exceptions import DocumentContractError
from .models import Block, LineRecord, ListKind, OrderedListMatch, PrefixEdit
from .parser import build_letter_marker, match_ordered_list_prefix, renumbered_prefix
from .selection import capture_selection, restore_selection

P = TypeVar("P")


def _close_block(
    blocks: list[Block], kind: ListKind | None, start_line: int, matches: list[OrderedListMatch]
) -> None:
    if matches and kind is not None:
        blocks.append(Block(kind=kind, start_line=start_line, matches=tuple(matches)))


def find_blocks(lines: Sequence[LineRecord]) -> list[Block]:
    """Group consecutive numbered or lettered lines into blocks.

    A block ends at the first line that is not an ordered list line (plain
    text, a blank line, a bullet) or whose kind differs. A line that ends a
    block because its kind differs starts the next block.

    Args:
        lines: Line snapshot to scan.

    Returns:
        list[Block]: Maximal blocks in document order.

    Examples:
        blocks = find_blocks(read_lines(TextDocument("1. a\\nb) x\\n")))
        [block.kind for block in blocks]  # [ListKind.NUMBERED, ListKind.LETTERED]
    """
    blocks: list[Block] = []
    kind: ListKind | None = None
    start_line = 0
    matches: list[OrderedListMatch] = []

    for index, line in enumerate(lines):
        match = match_ordered_list_prefix(line.normalized_text)
        if match is None or match.kind is not kind:
            _close_block(blocks, kind, start_line, matches)
            kind, start_line, matches = None, index, []
        if match is None:
            continue

        if kind is None:
            kind = match.kind
            start_line = index
        matches.append(match)

    _close_block(blocks, kind, start_line, matches)
    return blocks


def marker_for(block: Block, position: int) -> str:
    """Return the canonical marker for a zero-based position within a block."""
    if block.kind is ListKind.NUMBERED:
        return str(position + 1)
    return build_letter_marker(position + 1, block.use_uppercase)


def plan_edits(blocks: Sequence[Block]) -> list[PrefixEdit]:
    """Compute the prefix replacements needed to renumber blocks.

    Only the marker changes; indentation, punctuation and spacing are kept.
    Lines whose prefix is already canonical get no edit.

    Args:
        blocks: Blocks produced by `find_blocks`.

    Returns:
        list[PrefixEdit]: Edits in document order.

    Examples:
        plan_edits(find_blocks(read_lines(TextDocument("1. a\\n1. b"))))
        # [PrefixEdit(line_index=1, old_prefix="1. ", new_prefix="2. ")]
    """
    edits: list[PrefixEdit] = []
    for block in blocks:
        for position, match in enumerate(block.matches):
            new_prefix = renumbered_prefix(match, marker_for(block, position))
            if new_prefix == match.prefix:
                continue
            edits.append(
                PrefixEdit(
                    line_index=block.start_line + position,
                    old_prefix=match.prefix,
                    new_prefix=new_prefix,
                )
            )
    return edits


def apply_edits(
    document: Document[P], lines: Sequence[LineRecord[P]], edits: Sequence[PrefixEdit]
) -> None:
    """Write planned prefix edits into the document.

    Edits are applied from the last line to the first so the start positions
    recorded in `lines` remain valid for every edit still pending.

    Args:
        document: Document to modify.
        lines: Snapshot the edits were planned against.
        edits: Edits from `plan_edits`.

    Raises:
        DocumentContractError: If the end of a prefix cannot be resolved
            within its line.
    """
    for edit in sorted(edits, key=lambda item: item.line_index, reverse=True):
        line = lines[edit.line_index]
        prefix_end = document.offset_position(line.start, len(edit.old_prefix))
        if prefix_end is None:
            raise DocumentContractError(
                f"Line {edit.line_index}: prefix {edit.old_prefix!r} extends past the line end"
            )
        document.replace(line.start, prefix_end, edit.new_prefix)


def renumber_lists(document: Document[P], selection: Selection[P] | None = None) -> None:
    """Renumber every numbered and lettered list block in a document.

    Numbered blocks become ``1, 2, 3, ...``; lettered blocks become
    ``a, b, c, ...`` (or uppercase, following the block's first line), clamped
    at ``z``. Bullet lines are never touched and interrupt blocks. Running the
    pass twice changes nothing the second time.

    Args:
        document: Document to renumber in place.
        selection: Selection to keep anchored to the same line and offset.
            Left untouched when the document is empty.

    Returns:
        None.

    Raises:
        DocumentContractError: If the document reports inconsistent lines or
            positions. Raised before any edit when detected while reading.

    Examples:
        document = TextDocument("1. a\\n1. b\\n1. c\\n")
        renumber_lists(document)
        document.text  # "1. a\\n2. b\\n3. c\\n"
    """
    lines = read_lines(document)
    if not lines:
        return

    snapshot = capture_selection(document, selection, lines) if selection is not None else None

    edits = plan_edits(find_blocks(lines))
    apply_edits(document, lines, edits)

    if selection is not None and snapshot is not None:
        restore_selection(document, selection, snapshot)


def renumber_text(text: str) -> str:
    """Return `text` with its list blocks renumbered.

    Examples:
        renumber_text("a) x\\nc) y\\n")  # "a) x\\nb) y\\n"
    """
    document = TextDocument(text)
    renumber_lists(document)
    return document.text
