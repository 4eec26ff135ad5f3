"""Filesystem helpers for list-renumber."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH, LINE_BREAK_PATTERN
from .exceptions import LineTooLongError, RenumberFileError

MAX_FILE_SIZE_ENV_VAR = "LIST_RENUMBER_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "LIST_RENUMBER_MAX_LINE_LENGTH"


def _positive_int_from_env(name: str, default: int) -> int:
    env_value = os.environ.get(name)
    if env_value is None:
        return default

    try:
        value = int(env_value)
    except ValueError as error:
        raise ValueError(
            f"Invalid value for {name}: {env_value} (expected positive integer)"
        ) from error

    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}.")
    return value


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size in bytes.

    Raises:
        ValueError: If ``LIST_RENUMBER_MAX_FILE_SIZE`` is set but is not a
            positive integer.
    """
    return _positive_int_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum allowed line length in characters.

    Raises:
        ValueError: If ``LIST_RENUMBER_MAX_LINE_LENGTH`` is set but is not a
            positive integer.
    """
    return _positive_int_from_env(MAX_LINE_LENGTH_ENV_VAR, default)


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any of its parents is a symlink."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path, extensions: Iterable[str]) -> Path:
    """Resolve and validate a text file path under a base directory.

    Args:
        raw_path: User-supplied path (absolute or relative).
        base_dir: Working directory that constrains allowed paths.
        extensions: Accepted file suffixes, lowercase with a leading dot.

    Returns:
        Path: Absolute path to the file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, lies
            outside `base_dir`, has an unsupported suffix, or goes through a
            symlink.

    Examples:
        normalize_filepath("notes/todo.txt", Path.cwd(), (".txt", ".md"))
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.") from error

    extensions = tuple(extensions)
    if resolved.suffix.lower() not in extensions:
        raise ValueError(
            f"{resolved} is not a supported text file.\n"
            f"Supported extensions are: {', '.join(extensions)}"
        )

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file without following symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise IOError(f"Symlinks are not supported: {filepath}.")
    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")


def _fingerprint(stat_result: os.stat_result) -> tuple[object, ...]:
    return (
        getattr(stat_result, "st_ino", None),
        getattr(stat_result, "st_dev", None),
        stat_result.st_size,
        stat_result.st_mtime_ns,
    )


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Refuse to continue when a file changed between two stat snapshots.

    Raises:
        IOError: If inode, device, size, or modification time differ.
    """
    if _fingerprint(expected_stat) != _fingerprint(current_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def check_line_lengths(text: str, max_line_length: int) -> None:
    """Ensure no line of `text` exceeds `max_line_length` characters.

    Lines end at ``\\n``, ``\\r\\n`` or a lone ``\\r``, as in `TextDocument`;
    other Unicode separators stay part of the line. Line breaks do not count
    towards the length.

    Raises:
        LineTooLongError: For the first line that is too long.
    """
    for line_number, line in enumerate(LINE_BREAK_PATTERN.split(text), start=1):
        if len(line) > max_line_length:
            raise LineTooLongError(line_number, max_line_length)


def read_text(filepath: Path, max_line_length: int) -> str:
    """Read a UTF-8 text file, keeping its line breaks exactly as stored.

    Args:
        filepath: File to read.
        max_line_length: Maximum allowed line length in characters.

    Returns:
        str: File content.

    Raises:
        RenumberFileError: If the file cannot be read, is not valid UTF-8, or
            has a line longer than `max_line_length`.

    Examples:
        text = read_text(Path("notes.txt"), 10_000)
    """
    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as file:
            text = file.read()
    except UnicodeDecodeError as error:
        raise RenumberFileError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except OSError as error:
        raise RenumberFileError(f"Error accessing {filepath}: {error}") from error

    try:
        check_line_lengths(text, max_line_length)
    except LineTooLongError as error:
        raise RenumberFileError(
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        ) from error

    return text


def write_text_atomic(
    filepath: Path,
    text: str,
    expected_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Replace a file's content atomically, keeping its permissions.

    The new content goes to a temporary file in the same directory, which
    then replaces the original.

    Args:
        filepath: File to overwrite.
        text: New content, written with line breaks untouched.
        expected_stat: Stat captured when the file was read.
        warn: Optional callback for non-fatal warnings.

    Raises:
        IOError: If the file changed since `expected_stat` was taken or the
            replacement fails.
    """
    ensure_file_unchanged(expected_stat, collect_file_stat(filepath), filepath)

    permissions = stat.S_IMODE(expected_stat.st_mode)
    uid = getattr(expected_stat, "st_uid", None)
    gid = getattr(expected_stat, "st_gid", None)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", newline="", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

            if uid is not None and gid is not None and hasattr(os, "chown"):
                try:
                    os.chown(tmp_file.name, uid, gid)
                except PermissionError:
                    if warn is not None:
                        warn(f"Warning: Could not preserve file ownership for {filepath.name}")

        os.replace(temp_path, filepath)
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
