"""cssopt CLI entry point: Click group with subcommands."""

import click

from cssopt import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cssopt")
def cli() -> None:
    """cssopt - tree-shake, split and measure utility-class stylesheets."""


# Import and register subcommands
from cssopt.cli.optimize import optimize  # noqa: E402
from cssopt.cli.scan import scan  # noqa: E402
from cssopt.cli.check import check  # noqa: E402

cli.add_command(optimize)
cli.add_command(scan)
cli.add_command(check)
