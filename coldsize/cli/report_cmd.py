"""CLI command for heat load summary reports."""

from __future__ import annotations

import os

import click
from rich.console import Console

from coldsize.cli.calc_cmd import run_project
from coldsize.core.config import ProjectState, load_project_json
from coldsize.reports.summary import (
    generate_text_report,
    save_html_report,
    save_text_report,
)

_WRITERS = {"text": (".txt", save_text_report), "html": (".html", save_html_report)}


def _report_targets(fmt: str, project: str, output: str | None) -> list[tuple[str, str]]:
    """Resolve (format, path) pairs; paths default to the project file's stem."""
    kinds = ["text", "html"] if fmt == "both" else [fmt]
    stem = os.path.splitext(output or project)[0]
    if output and fmt != "both":
        return [(fmt, output)]
    return [(kind, stem + _WRITERS[kind][0]) for kind in kinds]


@click.command("report")
@click.option(
    "--project",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Project JSON to report on.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "html", "both"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Report format.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Report path (defaults to the project path with .txt/.html).",
)
@click.pass_context
def report(ctx: click.Context, project: str, fmt: str, output: str | None) -> None:
    """Recalculate a project and write its heat load summary.

    Stored results are never reused: the report always reflects the
    project's current inputs.
    """
    console: Console = ctx.obj.get("console", Console())

    try:
        state: ProjectState = load_project_json(project)
    except (KeyError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    run_project(console, state)

    fmt = fmt.lower()
    for kind, path in _report_targets(fmt, project, output):
        _WRITERS[kind][1](state, path)
        console.print(f"[green]{kind.upper()} report saved:[/green] {path}")

    if fmt == "text" and output is None:
        console.print(f"\n{generate_text_report(state)}")
