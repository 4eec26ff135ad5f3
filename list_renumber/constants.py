"""Constants used across the list-renumber package."""

from __future__ import annotations

import re
import string

# Indentation
INDENT_SPACES_PER_LEVEL = 4
TAB_WIDTH = INDENT_SPACES_PER_LEVEL  # a tab is worth one level, regardless of column

# Marker grammar
DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
BULLET_CHARS = frozenset("*-")
PUNCTUATION_CHARS = frozenset(".)")
LINE_BREAK_CHARS = "\r\n"
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")
ALPHABET_SIZE = 26

# File handling defaults
DEFAULT_EXTENSIONS = (".txt", ".md", ".markdown", ".text")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_LINE_LENGTH = 10_000
