"""
Renumbers numbered and lettered lists in a text file.
Prints the result to stdout, rewrites the file with --in-place, or only
reports whether changes are needed with --check.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, build_config
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    get_max_line_length,
    normalize_filepath,
    read_text,
    write_text_atomic,
)
from .exceptions import DocumentContractError, RenumberFileError
from .renumber import renumber_text

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="list-renumber")
@click.option("--in-place", "-i", is_flag=True, help="Rewrite the file instead of printing it")
@click.option("--check", is_flag=True, help="Exit with status 1 if lists need renumbering")
@click.option("--max-line-length", type=int, help="Maximum line length")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    in_place: bool = False,
    check: bool = False,
    max_line_length: int | None = None,
):
    """
    Entry point for renumbering the lists of a text file.

    Args:
        filepath: Path to the file to process.
        in_place: Rewrite the file when its lists change.
        check: Only report whether renumbering would change the file.
        max_line_length: Override for the maximum allowed line length.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path or configuration is invalid, or the
            flags conflict.
        click.ClickException: If the file cannot be read, is too large, or
            changes while it is being processed.

    Examples:
        list-renumber notes.md --in-place
    """
    if in_place and check:
        raise click.BadParameter("--in-place and --check cannot be used together")

    base_dir = Path.cwd().resolve()
    try:
        config = build_config(Path(filepath).parent, max_line_length=max_line_length)
    except ConfigError as error:
        raise click.BadParameter(f"Invalid configuration: {error}") from error
    try:
        path = normalize_filepath(filepath, base_dir, config.extensions)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        line_limit = (
            config.max_line_length
            if max_line_length is not None
            else get_max_line_length(default=config.max_line_length)
        )
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(path)
        enforce_file_size(initial_stat, max_file_size, path)
        original = read_text(path, line_limit)
        ensure_file_unchanged(initial_stat, collect_file_stat(path), path)
    except (IOError, RenumberFileError) as error:
        raise click.ClickException(str(error)) from error

    try:
        renumbered = renumber_text(original)
    except DocumentContractError as error:
        raise click.ClickException(f"{path}: {error}") from error

    if check:
        if renumbered != original:
            click.echo(f"{path} needs renumbering", err=True)
            click.get_current_context().exit(1)
        return

    if not in_place:
        click.echo(renumbered, nl=False)
        return

    if renumbered == original:
        return

    try:
        write_text_atomic(
            path, renumbered, initial_stat, warn=lambda message: click.echo(message, err=True)
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
