"""Package-specific exception types."""

from __future__ import annotations


class DocumentContractError(ValueError):
    """Base class for errors caused by an inconsistent document collaborator.

    Represents structurally invalid data handed to the renumbering pass.
    Continuing after one of these would risk corrupting the document text.
    """


class InvalidLineRangeError(DocumentContractError):
    """Raised when a document reports an inconsistent line record.

    Args:
        line_index: Zero-based index of the offending line.
        start: Reported start position of the line.
        end: Reported end position of the line.
        reason: Short description of the inconsistency.
    """

    def __init__(self, line_index: int, start: object, end: object, reason: str):
        self.line_index = line_index
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_index} has an invalid range "
            f"({self.start!r}, {self.end!r}): {self.reason}"
        )


class InvalidPositionError(DocumentContractError):
    """Raised when a position falls outside the document.

    Args:
        position: The rejected position.
        length: Length of the document when the position was checked.
    """

    def __init__(self, position: int, length: int):
        self.position = position
        self.length = length
        super().__init__(f"Position {position} is outside the document (length: {length})")


class LineTooLongError(ValueError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )


class RenumberFileError(Exception):
    """Raised when a file cannot be loaded for renumbering."""
