"""CLI commands for creating projects and running a sizing calculation."""

from __future__ import annotations

from typing import Any

import click
from rich.console import Console
from rich.table import Table

from coldsize.core.config import ProjectState, load_project_json, save_project_json
from coldsize.core.models import CalculationResult
from coldsize.core.variants import Variant
from coldsize.reports.summary import COMPONENT_LABELS
from coldsize.utils.validation import InvalidInputError

VARIANT_CHOICE = click.Choice([v.value for v in Variant], case_sensitive=False)


def resolve_project(
    console: Console,
    variant: str,
    project: str | None,
    overrides: dict[str, dict[str, Any]] | None = None,
) -> ProjectState:
    """Load *project* (or start from defaults) and apply CLI overrides.

    Exits with status 1 if the project file holds a different variant.
    """
    if project:
        state = load_project_json(project)
        if state.variant != variant:
            console.print(
                f"[red]Error:[/red] {project} is a {state.variant} project, not {variant}."
            )
            raise SystemExit(1)
    else:
        state = ProjectState.from_defaults(variant)

    for section, values in (overrides or {}).items():
        getattr(state, section).update(values)
    return state


def run_project(console: Console, state: ProjectState) -> CalculationResult:
    """Calculate *state*, printing input errors and exiting on failure."""
    try:
        return state.run()
    except InvalidInputError as e:
        console.print("[red]Error:[/red] invalid inputs")
        for msg in e.result.errors:
            console.print(f"  • {msg.parameter}: {msg.message}")
        raise SystemExit(1)
    except (KeyError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)


def print_result(console: Console, result: CalculationResult) -> None:
    """Tabulate the load breakdown and sizing summary."""
    loads = Table(title=f"{result.variant.label} Heat Loads")
    loads.add_column("Load", style="cyan")
    loads.add_column("Energy [kJ]", style="green", justify="right")
    loads.add_column("Power [kW]", justify="right")
    loads.add_column("TR", style="dim", justify="right")

    for name, label in COMPONENT_LABELS.items():
        comp = result.components.get(name)
        if comp is None:
            continue
        loads.add_row(label, f"{comp.energy_kj:,.1f}", f"{comp.power_kw:.3f}", f"{comp.tr:.3f}")
    console.print(loads)

    table = Table(title="Refrigeration Capacity")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    table.add_row("Total Load", f"{result.total_load_kj:,.1f}", "kJ")
    table.add_row("Total Load", f"{result.total_load_kw:.3f}", "kW")
    table.add_row("Capacity", f"{result.refrigeration_capacity_tr:.3f}", "TR")
    table.add_row("Safety Factor", f"{result.safety_factor_percent:.1f}", "%")
    table.add_row("With Safety", f"{result.capacity_with_safety_tr:.3f}", "TR")
    if result.door_frequency_multiplier != 1.0:
        table.add_row(
            "Door Frequency",
            f"x{result.door_frequency_multiplier:.2f}",
            result.door_frequency.value,
        )
    table.add_row("Final Capacity", f"{result.final_capacity_tr:.3f}", "TR")
    table.add_row("Sensible Heat Ratio", f"{result.sensible_heat_ratio:.3f}", "—")
    table.add_row("Airflow", f"{result.airflow_cfm:,.0f}", "CFM")
    console.print(table)


@click.command("init")
@click.argument("variant", type=VARIANT_CHOICE)
@click.option("--name", type=str, default="Untitled", show_default=True, help="Project name.")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Project file to write (JSON).",
)
@click.pass_context
def init(ctx: click.Context, variant: str, name: str, output: str) -> None:
    """Write a project file pre-filled with reference inputs."""
    console: Console = ctx.obj.get("console", Console())
    state = ProjectState.from_defaults(variant.lower(), name=name)
    save_project_json(state, output)
    console.print(f"[green]Created {state.variant} project:[/green] {output}")


@click.command("calc")
@click.argument("variant", type=VARIANT_CHOICE)
@click.option(
    "--project",
    type=click.Path(exists=True),
    default=None,
    help="Project JSON with inputs (reference inputs if omitted).",
)
@click.option("--product", type=str, default=None, help="Product preset name.")
@click.option("--safety-factor", type=float, default=None, help="Safety factor [%].")
@click.option(
    "--door-frequency",
    type=click.Choice(["low", "medium", "high"], case_sensitive=False),
    default=None,
    help="Door opening frequency (blast freezer).",
)
@click.option("--insulation", type=str, default=None, help="Insulation material.")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Save project with results (JSON).",
)
@click.pass_context
def calc(
    ctx: click.Context,
    variant: str,
    project: str | None,
    product: str | None,
    safety_factor: float | None,
    door_frequency: str | None,
    insulation: str | None,
    output: str | None,
) -> None:
    """Calculate heat loads and refrigeration capacity."""
    console: Console = ctx.obj.get("console", Console())

    overrides: dict[str, dict[str, Any]] = {"room": {}, "product": {}, "ancillary": {}}
    if product:
        overrides["product"]["preset"] = product
    if safety_factor is not None:
        overrides["ancillary"]["safety_factor_percent"] = safety_factor
    if door_frequency:
        overrides["ancillary"]["door_frequency"] = door_frequency.lower()
    if insulation:
        overrides["room"]["insulation_material"] = insulation

    state = resolve_project(console, variant.lower(), project, overrides)
    if product:
        # A preset replaces the project's own thermal properties
        for key in ("cp_above", "cp_below", "freezing_point", "latent_heat", "respiration_watts"):
            state.product.pop(key, None)

    result = run_project(console, state)

    console.print(f"\n[bold]ColdSize — {result.variant.label} Sizing[/bold]\n")
    print_result(console, result)

    if output:
        save_project_json(state, output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
