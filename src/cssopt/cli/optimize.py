"""CLI command: cssopt optimize -- run the full optimization pipeline."""

from __future__ import annotations

import logging
import sys

import click

from cssopt.config import OptimizerConfig
from cssopt.errors import OptimizerError
from cssopt.optimizer import ANALYTICS_NAME, BuildOptimizer


@click.command()
@click.option("--source-dir", default="./src", show_default=True, help="Directory scanned for class usage")
@click.option("--output-dir", default="./dist", show_default=True, help="Directory receiving the outputs")
@click.option("--source-css", default="./dist/index.css", show_default=True, help="Stylesheet to optimize")
@click.option("--chunks/--no-chunks", default=True, help="Write per-category chunk files")
@click.option("--critical/--no-critical", default=True, help="Write critical.css")
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline details to stderr")
def optimize(
    source_dir: str,
    output_dir: str,
    source_css: str,
    chunks: bool,
    critical: bool,
    verbose: bool,
) -> None:
    """Tree-shake the source stylesheet against the classes in use.

    With no options, scans ./src and optimizes ./dist/index.css into ./dist.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = OptimizerConfig(
        source_dir=source_dir,
        output_dir=output_dir,
        source_css=source_css,
        generate_chunks=chunks,
        extract_critical=critical,
    )
    optimizer = BuildOptimizer(config)

    click.echo("Starting build optimization...")
    try:
        report = optimizer.optimize()
    except OptimizerError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Found {report.total_utilities} used utilities")
    if report.chunks:
        click.echo(f"Chunks: {', '.join(report.chunks)}")
    savings = report.size_savings
    click.echo(
        f"Size: {savings['originalSize']} -> {savings['optimizedSize']} ({savings['savings']} saved)"
    )
    for violation in report.budget_violations:
        click.echo(
            f"Budget {violation.severity}: {violation.type} is {violation.actual} (budget {violation.budget})",
            err=True,
        )
    click.echo("Optimization complete!")
    click.echo(f"Analytics saved to {output_dir}/{ANALYTICS_NAME}")
