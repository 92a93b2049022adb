"""CLI command: cssopt check -- report problems in a stylesheet."""

from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

import click

from cssopt.errors import StylesheetReadError
from cssopt.model.diagnostic import Severity
from cssopt.optimizer import read_stylesheet
from cssopt.stylesheet import parse_stylesheet


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--quiet", "-q", is_flag=True, help="Hide INFO diagnostics")
def check(cssfile: str, quiet: bool) -> None:
    """Tokenize CSSFILE and print diagnostics.

    Exits with code 1 if the file cannot be read or has ERROR diagnostics.
    """
    css_path = Path(cssfile)
    try:
        sheet = parse_stylesheet(read_stylesheet(css_path))
    except StylesheetReadError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    counts = Counter(d.severity for d in sheet.diagnostics)
    for diag in sheet.diagnostics:
        if quiet and diag.severity is Severity.INFO:
            continue
        click.echo(str(diag))

    if sheet.diagnostics:
        click.echo()
    click.echo(
        f"{css_path.name}: {len(sheet.rules)} rule(s); "
        f"{counts[Severity.ERROR]} error(s), {counts[Severity.WARNING]} warning(s), "
        f"{counts[Severity.INFO]} info"
    )
    sys.exit(1 if counts[Severity.ERROR] else 0)
