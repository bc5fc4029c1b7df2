"""CLI entry point for respool.

Usage:
    respool dump <file>               Print a JSON summary of the pool
    respool list <file>               List every string with its index
    respool get <file> <index>        Print one string
    respool find <file> <text>        Print the index of a string
    respool export <file> -o <dir>    Write strings and metadata as JSON

Every command takes --offset for a pool chunk that does not start the file.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from . import __version__
from .exceptions import PoolFormatError
from .pool import StringPool

offset_option = click.option(
    "--offset",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Byte offset of the string pool chunk in FILE",
)


def _load(file: str, offset: int) -> StringPool:
    try:
        return StringPool.load(file, offset)
    except PoolFormatError as e:
        raise click.ClickException(f"Corrupt string pool in {file}: {e}") from e


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Decode Android resource string pool chunks."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(name)s %(levelname)s: %(message)s",
    )


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@offset_option
def dump(file: str, offset: int) -> None:
    """Print a JSON summary of the string pool."""
    pool = _load(file, offset)
    out = json.dumps(pool.summary(), indent=2, ensure_ascii=False)
    sys.stdout.buffer.write(out.encode("utf-8"))
    sys.stdout.buffer.write(b"\n")


@main.command(name="list")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@offset_option
@click.option("--html", "as_html", is_flag=True, help="Render style spans as tags")
def list_strings(file: str, offset: int, as_html: bool) -> None:
    """List every string in the pool."""
    pool = _load(file, offset)
    for i in range(pool.count()):
        text = pool.html(i) if as_html else pool.string(i)
        click.echo(f"[{i:5d}] {text!r}" if text is not None else f"[{i:5d}] <undecodable>")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("index", type=int)
@offset_option
@click.option("--html", "as_html", is_flag=True, help="Render style spans as tags")
def get(file: str, index: int, offset: int, as_html: bool) -> None:
    """Print the string at INDEX."""
    pool = _load(file, offset)
    text = pool.html(index) if as_html else pool.string(index)
    if text is None:
        click.echo(f"No string at index {index}", err=True)
        sys.exit(1)
    click.echo(text)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("text")
@offset_option
def find(file: str, text: str, offset: int) -> None:
    """Print the index of TEXT (UTF-16 pools only)."""
    pool = _load(file, offset)
    if pool.is_utf8:
        click.echo("Warning: search compares UTF-16 data, pool is UTF-8", err=True)
    index = pool.find(text)
    if index is None:
        click.echo(f"Not found: {text!r}", err=True)
        sys.exit(1)
    click.echo(str(index))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(),
    default=None,
    help="Output directory (default: <file>_strings/)",
)
@offset_option
@click.option("--no-html", is_flag=True, help="Skip rendering styled strings")
def export(file: str, output: str | None, offset: int, no_html: bool) -> None:
    """Export all strings and pool metadata as JSON."""
    from .export import export_pool

    pool = _load(file, offset)
    out_dir = Path(output) if output else Path(f"{Path(file).with_suffix('')}_strings")
    written = export_pool(pool, out_dir, html=not no_html)

    click.echo(f"Exported to {out_dir}")
    for kind, name in written.items():
        click.echo(f"  {kind}: {name}")


if __name__ == "__main__":
    main()
