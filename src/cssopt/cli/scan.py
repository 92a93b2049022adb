"""CLI command: cssopt scan -- list the utility classes a project uses."""

from __future__ import annotations

import sys

import click

from cssopt.classifier import utility_chunk
from cssopt.errors import ScanError
from cssopt.scanner import UsageScanner


@click.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--chunks", "show_chunks", is_flag=True, help="Show the chunk each class loads from")
def scan(source_dir: str, show_chunks: bool) -> None:
    """Scan SOURCE_DIR and print every utility class found, one per line."""
    scanner = UsageScanner()
    try:
        used = scanner.scan_directory(source_dir)
    except ScanError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for name in sorted(used):
        click.echo(f"{name}\t{utility_chunk(name)}" if show_chunks else name)
    click.echo(f"\n{len(used)} utilities", err=True)
