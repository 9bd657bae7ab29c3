"""Console script for pybaseline."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__ as _version
from .catalog import load_catalog
from .constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_WORKERS
from .exceptions import BaselineError
from .render import render_report, report_to_json
from .scanner import scan
from .util.log import debug_enabled


def _configure_logging() -> None:
    if not debug_enabled():
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("patterns", metavar="[PATTERN]...", nargs=-1, type=click.STRING)
@click.option(
    "--root",
    type=click.Path(file_okay=False, dir_okay=True),
    default=".",
    show_default=True,
    help="Directory the patterns are matched against.",
)
@click.option(
    "--catalog",
    "catalog_source",
    metavar="PATH_OR_URL",
    default=None,
    help="web-features data.json file or URL (defaults to the published package).",
)
@click.option(
    "--refresh-catalog",
    is_flag=True,
    help="Download the catalog again instead of using the cached copy.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=DEFAULT_WORKERS,
    show_default=True,
    help="Number of files scanned concurrently.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT_SECONDS,
    show_default=True,
    help="Catalog download timeout in seconds.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.version_option(_version, "-v", "--version")
def main(
    patterns: tuple[str, ...],
    root: str,
    catalog_source: str | None,
    refresh_catalog: bool,
    workers: int,
    timeout: float,
    as_json: bool,
) -> None:
    """
    Report which web platform features a project uses and their Baseline status

    \b
    Example usages:
      baseline-scan
      baseline-scan "src/**/*.css" "public/**/*.html"
      baseline-scan --json --catalog ./data.json
    """
    _configure_logging()
    try:
        catalog = load_catalog(catalog_source, refresh=refresh_catalog, timeout=timeout)
        report = scan(list(patterns) or None, catalog=catalog, root=root, workers=workers)
    except BaselineError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(report_to_json(report))
        return
    Console().print(render_report(report))
