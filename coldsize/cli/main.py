"""ColdSize command-line interface.

Entry point for the ``coldsize`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from coldsize import __app_name__, __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """ColdSize — Refrigeration Heat Load Sizing.

    Sizes the refrigeration plant of cold rooms, freezer rooms and
    blast freezers from room, product and ancillary load inputs.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


# Import and register sub-command groups
from coldsize.cli.calc_cmd import calc, init  # noqa: E402
from coldsize.cli.info_cmd import info  # noqa: E402
from coldsize.cli.report_cmd import report  # noqa: E402
from coldsize.cli.sweep_cmd import sweep  # noqa: E402

cli.add_command(init)
cli.add_command(calc)
cli.add_command(report)
cli.add_command(sweep)
cli.add_command(info)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
