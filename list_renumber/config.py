"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_EXTENSIONS, DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH

TOOL_NAME = "list-renumber"


@dataclass
class RenumberConfig:
    """Configuration for renumbering lists in text files.

    Attributes:
        extensions: File suffixes accepted by the command line tool.
        max_file_size: Maximum file size in bytes that will be processed.
        max_line_length: Maximum line length allowed, excluding line breaks.

    Examples:
        RenumberConfig(extensions=[".md"], max_line_length=500)
    """

    extensions: list[str] | tuple[str, ...] = DEFAULT_EXTENSIONS
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


# Files checked in each directory, nearest directory first, and the tables
# read from each of them in order of preference.
_CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", TOOL_NAME),)),
    (f".{TOOL_NAME}.toml", ((TOOL_NAME,), ("tool", TOOL_NAME))),
)
_CONFIG_KEYS = frozenset(field.name for field in fields(RenumberConfig))


def load_config(search_path: Path) -> RenumberConfig:
    """Load configuration from the nearest config file.

    Each directory from `search_path` up to the filesystem root is checked
    for a ``[tool.list-renumber]`` table in `pyproject.toml`, then for a
    ``[list-renumber]`` or ``[tool.list-renumber]`` table in
    `.list-renumber.toml`. The first table found wins, even when empty, so a
    nested project can reset settings inherited from a parent. Files that
    cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for the lookup.

    Returns:
        RenumberConfig: Loaded configuration, or defaults when none is found.

    Raises:
        ConfigError: If the table found is not a mapping, has keys other than
            the `RenumberConfig` fields, or holds invalid values.

    Examples:
        load_config(Path("docs"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in _CONFIG_SOURCES:
            found = _find_table(directory / filename, table_paths)
            if found is not None:
                return _config_from_table(*found)
    return RenumberConfig()


def _read_toml(config_file: Path) -> dict | None:
    try:
        with open(config_file, "rb") as stream:
            return tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def _find_table(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> tuple[object, str] | None:
    """Return the first table present in `config_file` and where it was found."""
    data = _read_toml(config_file)
    if data is None:
        return None

    for table_path in table_paths:
        table: object = data
        for key in table_path:
            if not isinstance(table, dict) or key not in table:
                break
            table = table[key]
        else:
            return table, f"[{'.'.join(table_path)}] in {config_file}"
    return None


def _config_from_table(table: object, location: str) -> RenumberConfig:
    if not isinstance(table, dict):
        raise ConfigError(f"{location} must be a table")

    unknown = sorted(set(table) - _CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unsupported keys in {location}: {', '.join(unknown)}")

    config = RenumberConfig(**table)
    try:
        validate_config(config)
    except ConfigError as error:
        raise ConfigError(f"{location}: {error}") from error
    return normalize_config(config)


def normalize_config(config: RenumberConfig) -> RenumberConfig:
    """Lowercase extensions and add a missing leading dot.

    Examples:
        normalize_config(RenumberConfig(extensions=["MD"])).extensions  # (".md",)
    """
    if not isinstance(config.extensions, (list, tuple)):
        raise ConfigError("`extensions` must be a list of strings")

    extensions: list[str] = []
    for extension in config.extensions:
        if not isinstance(extension, str):
            raise ConfigError("`extensions` must be a list of strings")
        extension = extension.strip().lower()
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        extensions.append(extension)

    return replace(config, extensions=tuple(extensions))


def validate_config(config: RenumberConfig) -> None:
    """Validate a `RenumberConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If no usable extension is configured or numeric limits
            are not positive integers.

    Examples:
        validate_config(RenumberConfig(max_file_size=1024))
    """
    config = normalize_config(config)

    if not config.extensions:
        raise ConfigError("`extensions` must not be empty")
    if any(extension in ("", ".") for extension in config.extensions):
        raise ConfigError("`extensions` must not contain empty entries")

    limits = {"max_file_size": config.max_file_size, "max_line_length": config.max_line_length}
    for key, value in limits.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def apply_overrides(config: RenumberConfig, **overrides: object) -> RenumberConfig:
    """Apply override values to a `RenumberConfig`.

    Args:
        config: Base configuration to update.
        overrides: Values keyed by field name; values set to None are ignored.

    Returns:
        RenumberConfig: Updated configuration, or `config` itself when nothing
            changes.

    Raises:
        TypeError: If an override name is not a `RenumberConfig` field.

    Examples:
        apply_overrides(config, max_line_length=200, max_file_size=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenumberConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Values keyed by configuration field; None values are ignored.

    Returns:
        RenumberConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), max_line_length=500)
    """
    config = load_config(search_path)
    config = normalize_config(apply_overrides(config, **overrides))
    validate_config(config)
    return config
