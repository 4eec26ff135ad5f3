"""
list-renumber: keep numbered and lettered list markers consistent.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    list-renumber notes.md --in-place

Library Usage:
    from list_renumber import TextDocument, TextSelection, renumber_lists

    document = TextDocument("1. a\\n1. b\\n")
    selection = TextSelection.collapsed(7)
    renumber_lists(document, selection)
    document.text  # "1. a\\n2. b\\n"
"""

from .document import Document, Selection, TextDocument, TextSelection, read_lines
from .exceptions import (
    DocumentContractError,
    InvalidLineRangeError,
    InvalidPositionError,
    LineTooLongError,
    RenumberFileError,
)
from .models import (
    Block,
    LinePosition,
    LineRecord,
    ListKind,
    OrderedListMatch,
    ParsedListLine,
    PrefixEdit,
    SelectionSnapshot,
)
from .parser import (
    build_letter_marker,
    indent_level,
    is_list_line,
    match_ordered_list_prefix,
    parse_list_line,
    set_indent_level,
)
from .renumber import find_blocks, plan_edits, renumber_lists, renumber_text
from .selection import capture_selection, restore_selection

__version__ = "0.1.0"

__all__ = [
    # Line classification
    "is_list_line",
    "parse_list_line",
    "match_ordered_list_prefix",
    "indent_level",
    "set_indent_level",
    "build_letter_marker",
    # Renumbering
    "renumber_lists",
    "renumber_text",
    "find_blocks",
    "plan_edits",
    "capture_selection",
    "restore_selection",
    # Documents
    "Document",
    "Selection",
    "TextDocument",
    "TextSelection",
    "read_lines",
    # Data models
    "Block",
    "LinePosition",
    "LineRecord",
    "ListKind",
    "OrderedListMatch",
    "ParsedListLine",
    "PrefixEdit",
    "SelectionSnapshot",
    # Exceptions
    "DocumentContractError",
    "InvalidLineRangeError",
    "InvalidPositionError",
    "LineTooLongError",
    "RenumberFileError",
    # Version
    "__version__",
]
