"""CLI command for inspecting project files and listing materials/products."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from coldsize.core.config import load_project_json
from coldsize.core.insulation import get_material_info, list_materials
from coldsize.core.products import get_product_info, list_products
from coldsize.utils.units import length_to_si, mass_to_si
from coldsize.utils.validation import Severity, check_storage_capacity


@click.group("info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Inspect project files, insulation materials, and product presets."""
    pass


@info.command("project")
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--storage-density",
    type=float,
    default=250.0,
    show_default=True,
    help="Achievable storage density [kg/m³] for the capacity check.",
)
@click.pass_context
def info_project(ctx: click.Context, path: str, storage_density: float) -> None:
    """Display summary of a project file."""
    console: Console = ctx.obj.get("console", Console())
    state = load_project_json(path)

    tree = Tree(f"[bold]{state.meta.name}[/bold] ({state.variant})")
    meta = tree.add("[cyan]Metadata[/cyan]")
    meta.add(f"Author: {state.meta.author or '—'}")
    meta.add(f"Version: {state.meta.version}")
    meta.add(f"Modified: {state.meta.modified or '—'}")

    for title, section in (
        ("Room", state.room),
        ("Product", state.product),
        ("Ancillary", state.ancillary),
    ):
        if not section:
            continue
        node = tree.add(f"[cyan]{title}[/cyan]")
        for k, v in section.items():
            node.add(f"{k}: {v}")

    if state.results:
        res = tree.add("[cyan]Results[/cyan]")
        for k in ("total_load_kw", "refrigeration_capacity_tr", "final_capacity_tr", "airflow_cfm"):
            if k in state.results:
                res.add(f"{k}: {state.results[k]:.3f}")

    room, product, _ = state.inputs()
    volume = (
        length_to_si(room.length, room.length_unit)
        * length_to_si(room.width, room.length_unit)
        * length_to_si(room.height, room.length_unit)
    )
    check = check_storage_capacity(
        mass_to_si(product.mass, product.mass_unit), volume, storage_density
    )
    storage = tree.add("[cyan]Storage[/cyan]")
    for msg in check.messages:
        style = {Severity.INFO: "", Severity.WARNING: "yellow", Severity.ERROR: "red"}[msg.severity]
        storage.add(f"[{style}]{msg.message}[/{style}]" if style else msg.message)

    console.print(tree)


@info.command("materials")
@click.pass_context
def info_materials(ctx: click.Context) -> None:
    """List available insulation materials."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Insulation Materials")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Category", style="yellow")
    table.add_column("Density [kg/m³]", justify="right")
    table.add_column("k [W/m·K]", justify="right")

    for mat_id in list_materials():
        mat = get_material_info(mat_id)
        table.add_row(
            mat_id,
            mat["name"],
            mat["category"],
            str(mat["density"]),
            f"{mat['thermal_conductivity']:.3f}",
        )
    console.print(table)


@info.command("products")
@click.option("--category", type=str, default=None, help="Filter by category.")
@click.pass_context
def info_products(ctx: click.Context, category: str | None) -> None:
    """List product presets."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Product Presets")
    table.add_column("Name", style="cyan")
    table.add_column("Category", style="yellow")
    table.add_column("cp above", justify="right")
    table.add_column("cp below", justify="right")
    table.add_column("Tf [°C]", justify="right")
    table.add_column("Latent [kJ/kg]", justify="right")

    for name in list_products(category):
        p = get_product_info(name)
        table.add_row(
            name,
            p["category"],
            f"{p['cp_above']:.2f}",
            f"{p['cp_below']:.2f}",
            f"{p['freezing_point']:.1f}",
            f"{p['latent_heat']:.0f}",
        )
    console.print(table)
