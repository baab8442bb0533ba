"""
Reformats the XML documentation comments of a source file in place.
The original file is copied to a backup location before it is overwritten.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .filesystem import (
    ReadSourceError,
    collect_file_stat,
    create_backup,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    normalize_filepath,
    read_source,
    write_source,
)
from .formatter import reformat_document

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(package_name="reformat-comments")
@click.option("--wrap-width", type=int, help="Target line length, comment prefix included")
@click.option("--indent-width", type=int, help="Spaces per nested block-level tag")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.argument("backup_dir", required=False, type=click.Path(file_okay=False))
def cli(
    filepath: str,
    backup_dir: str | None = None,
    wrap_width: int | None = None,
    indent_width: int | None = None,
    verbose: bool = False,
):
    """
    Reformat the documentation comments of FILEPATH.

    Args:
        filepath: Path to the source file to rewrite.
        backup_dir: Directory receiving a timestamped copy of the original file.
            Without it, the copy is written next to the file with a `.bak` suffix.
        wrap_width: Override for the target line length.
        indent_width: Override for the indentation of nested block-level tags.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path is rejected or the configuration is invalid.
        click.ClickException: If the file cannot be read, backed up, or rewritten.

    Examples:
        reformat-comments src/Widget.cs backups/
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            filepath.parent,
            wrap_width=wrap_width,
            indent_width=indent_width,
            backup_dir=backup_dir,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(filepath)
        enforce_file_size(initial_stat, max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        source = read_source(filepath)
    except ReadSourceError as error:
        raise click.ClickException(str(error)) from error

    try:
        post_read_stat = collect_file_stat(filepath)
        ensure_file_unchanged(initial_stat, post_read_stat, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    result = reformat_document(source, config)
    for failure in result.failures:
        click.echo(
            f"Warning: {filepath.name}:{failure.group.start + 1}: {failure.error}", err=True
        )

    try:
        backup = create_backup(
            filepath, Path(config.backup_dir) if config.backup_dir is not None else None
        )
        logger.info("Backed up %s to %s", filepath, backup)
        write_source(
            filepath,
            result.text,
            post_read_stat,
            initial_stat,
            warn=lambda message: click.echo(message, err=True),
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error

    logger.info("Rewrote %s (%d comments left unchanged)", filepath, len(result.failures))


if __name__ == "__main__":
    cli()
