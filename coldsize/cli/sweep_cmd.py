"""CLI commands for parametric sweeps."""

from __future__ import annotations

import click
import numpy as np
from rich.console import Console
from rich.table import Table

from coldsize.analysis.sweep import (
    SweepResult,
    insulation_thickness_sweep,
    safety_factor_sweep,
)
from coldsize.cli.calc_cmd import VARIANT_CHOICE, resolve_project
from coldsize.core.config import dump_json


def _print_sweep(console: Console, title: str, column: str, result: SweepResult) -> None:
    table = Table(title=title)
    table.add_column(column, style="cyan", justify="right")
    table.add_column("Load [kW]", justify="right")
    table.add_column("Capacity [TR]", justify="right")
    table.add_column("Final [TR]", style="green", justify="right")
    table.add_column("Airflow [CFM]", style="dim", justify="right")

    for i, value in enumerate(result.values):
        if np.isnan(result["final_capacity_tr"][i]):
            table.add_row(f"{value:g}", "—", "—", "[red]rejected[/red]", "—")
            continue
        table.add_row(
            f"{value:g}",
            f"{result['total_load_kw'][i]:.3f}",
            f"{result['refrigeration_capacity_tr'][i]:.3f}",
            f"{result['final_capacity_tr'][i]:.3f}",
            f"{result['airflow_cfm'][i]:,.0f}",
        )
    console.print(table)

    if result.n_failed > 0:
        console.print(f"\n[yellow]Warning: {result.n_failed} points rejected[/yellow]")


def _grid(console: Console, vmin: float, vmax: float, steps: int) -> np.ndarray:
    if steps < 1 or vmax < vmin:
        console.print("[red]Error:[/red] need --steps >= 1 and --max >= --min.")
        raise SystemExit(1)
    return np.linspace(vmin, vmax, steps)


@click.group("sweep")
@click.pass_context
def sweep(ctx: click.Context) -> None:
    """Parametric sweeps of one input."""
    pass


@sweep.command("insulation")
@click.argument("variant", type=VARIANT_CHOICE)
@click.option("--min", "vmin", type=float, default=50.0, show_default=True, help="Min thickness [mm].")
@click.option("--max", "vmax", type=float, default=200.0, show_default=True, help="Max thickness [mm].")
@click.option("--steps", type=int, default=7, show_default=True, help="Number of points.")
@click.option("--project", type=click.Path(exists=True), default=None, help="Project JSON.")
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file (JSON).")
@click.pass_context
def sweep_insulation(
    ctx: click.Context,
    variant: str,
    vmin: float,
    vmax: float,
    steps: int,
    project: str | None,
    output: str | None,
) -> None:
    """Sweep wall, ceiling and floor insulation thickness together."""
    console: Console = ctx.obj.get("console", Console())
    state = resolve_project(console, variant.lower(), project)
    grid = _grid(console, vmin, vmax, steps)

    result = insulation_thickness_sweep(state.variant, *state.inputs(), grid)

    console.print(f"\n[bold]ColdSize — Insulation Sweep ({steps} points)[/bold]\n")
    _print_sweep(console, "Capacity vs Insulation Thickness", "Thickness [mm]", result)

    if output:
        dump_json(result.as_dict(), output)
        console.print(f"\n[dim]Saved to {output}[/dim]")


@sweep.command("safety")
@click.argument("variant", type=VARIANT_CHOICE)
@click.option("--min", "vmin", type=float, default=0.0, show_default=True, help="Min safety factor [%].")
@click.option("--max", "vmax", type=float, default=30.0, show_default=True, help="Max safety factor [%].")
@click.option("--steps", type=int, default=7, show_default=True, help="Number of points.")
@click.option("--project", type=click.Path(exists=True), default=None, help="Project JSON.")
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file (JSON).")
@click.pass_context
def sweep_safety(
    ctx: click.Context,
    variant: str,
    vmin: float,
    vmax: float,
    steps: int,
    project: str | None,
    output: str | None,
) -> None:
    """Sweep the safety factor."""
    console: Console = ctx.obj.get("console", Console())
    state = resolve_project(console, variant.lower(), project)
    grid = _grid(console, vmin, vmax, steps)

    result = safety_factor_sweep(state.variant, *state.inputs(), grid)

    console.print(f"\n[bold]ColdSize — Safety Factor Sweep ({steps} points)[/bold]\n")
    _print_sweep(console, "Capacity vs Safety Factor", "Safety [%]", result)

    if output:
        dump_json(result.as_dict(), output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
