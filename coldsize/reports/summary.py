"""Sizing summary report generation for ColdSize.

Produces text and HTML reports from a ProjectState, summarising the room,
product and sizing inputs, the heat load breakdown and the selected
refrigeration capacity.
"""

from __future__ import annotations

import html as html_mod
from datetime import datetime, timezone
from typing import Any

from coldsize import __version__
from coldsize.core.config import ProjectState
from coldsize.core.variants import parse_variant

# Display order and labels of the load components
COMPONENT_LABELS = {
    "wall": "Wall",
    "ceiling": "Ceiling",
    "floor": "Floor",
    "product": "Product",
    "before_freezing": "Product (before freezing)",
    "latent_heat": "Product (latent heat)",
    "after_freezing": "Product (after freezing)",
    "respiration": "Respiration",
    "air_change": "Air change",
    "equipment": "Equipment / fans",
    "occupancy": "Occupancy",
    "lighting": "Lighting",
    "peripheral_heater": "Peripheral heater",
    "door_heater": "Door heater",
    "tray_heater": "Tray heater",
    "drain_heater": "Drain heater",
}


def _ordered_components(results: dict[str, Any]) -> list[tuple[str, dict[str, float]]]:
    comps = results.get("components", {})
    return [(COMPONENT_LABELS[k], comps[k]) for k in COMPONENT_LABELS if k in comps]


# --- Plain-text report ---


def generate_text_report(state: ProjectState) -> str:
    """Generate a plain-text sizing summary report.

    Args:
        state: ProjectState with inputs and (optionally) results.

    Returns:
        Multi-line text report string.
    """
    lines: list[str] = []
    _hr = "=" * 60
    variant = parse_variant(state.variant)

    lines.append(_hr)
    lines.append(f"  ColdSize — {variant.label} Heat Load Report")
    lines.append(f"  {state.meta.name}")
    lines.append(_hr)
    lines.append("")

    room = state.room
    if room:
        length_unit = room.get("length_unit", "m")
        temp_unit = "°" + room.get("temp_unit", "C")
        lines.append("ROOM")
        lines.append("-" * 40)
        _add_param(lines, "Length", room, "length", length_unit)
        _add_param(lines, "Width", room, "width", length_unit)
        _add_param(lines, "Height", room, "height", length_unit)
        _add_param_str(lines, "Insulation", str(room.get("insulation_material", "—")))
        _add_param(lines, "Wall Insulation", room, "wall_insulation_mm", "mm")
        _add_param(lines, "Ceiling Insulation", room, "ceiling_insulation_mm", "mm")
        _add_param(lines, "Floor Insulation", room, "floor_insulation_mm", "mm")
        _add_param(lines, "Ambient Temp", room, "ambient_temp", temp_unit)
        _add_param(lines, "Room Temp", room, "room_temp", temp_unit)
        lines.append("")

    product = state.product
    if product:
        temp_unit = "°" + product.get("temp_unit", "C")
        lines.append("PRODUCT")
        lines.append("-" * 40)
        _add_param_str(lines, "Product", str(product.get("name", product.get("preset", "Custom"))))
        _add_param(lines, "Mass", product, "mass", product.get("mass_unit", "kg"))
        _add_param(lines, "Entering Temp", product, "entering_temp", temp_unit)
        _add_param(lines, "Final Temp", product, "final_temp", temp_unit)
        _add_param(lines, "cp Above Freezing", product, "cp_above", "kJ/kg·K")
        _add_param(lines, "cp Below Freezing", product, "cp_below", "kJ/kg·K")
        _add_param(lines, "Freezing Point", product, "freezing_point", temp_unit)
        _add_param(lines, "Latent Heat", product, "latent_heat", "kJ/kg")
        _add_param(lines, "Pull-down Time", product, "pull_down_hours", "h")
        _add_param(lines, "Batch Time", product, "batch_hours", "h")
        lines.append("")

    results = state.results
    if results:
        lines.append("HEAT LOADS")
        lines.append("-" * 40)
        for label, comp in _ordered_components(results):
            _add_param(lines, label, comp, "energy_kj", "kJ")
        lines.append("")

        lines.append("CAPACITY")
        lines.append("-" * 40)
        _add_param(lines, "Total Load", results, "total_load_kj", "kJ")
        _add_param(lines, "Total Load", results, "total_load_kw", "kW")
        _add_param(lines, "Capacity", results, "refrigeration_capacity_tr", "TR")
        _add_param(lines, "Safety Factor", results, "safety_factor_percent", "%")
        _add_param(lines, "With Safety", results, "capacity_with_safety_tr", "TR")
        _add_param_str(lines, "Door Frequency", str(results.get("door_frequency", "—")))
        _add_param(lines, "Final Capacity", results, "final_capacity_tr", "TR")
        _add_param(lines, "SHR", results, "sensible_heat_ratio")
        _add_param(lines, "Airflow", results, "airflow_cfm", "CFM")
        lines.append("")
    else:
        lines.append("  (not calculated)")
        lines.append("")

    lines.append(_hr)
    lines.append(f"  Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}")
    lines.append(f"  ColdSize v{__version__} · project v{state.meta.version}")
    lines.append(_hr)

    return "\n".join(lines)


def _add_param(
    lines: list[str],
    label: str,
    data: dict[str, Any],
    key: str,
    unit: str = "",
    scale: float = 1.0,
) -> None:
    """Add a parameter line if the key exists in data."""
    val = data.get(key)
    if val is not None:
        scaled = val * scale
        unit_str = f" {unit}" if unit else ""
        if isinstance(scaled, float):
            lines.append(f"  {label:<26s} {scaled:>14.3f}{unit_str}")
        else:
            lines.append(f"  {label:<26s} {scaled!s:>14}{unit_str}")


def _add_param_str(lines: list[str], label: str, value: str) -> None:
    """Add a string parameter line."""
    lines.append(f"  {label:<26s} {value:>14}")


# --- HTML report ---


def generate_html_report(state: ProjectState) -> str:
    """Generate an HTML sizing summary report.

    Produces a self-contained HTML document with inline CSS styling.
    """
    sections: list[str] = [_html_header(state)]

    room = state.room
    if room:
        lu = room.get("length_unit", "m")
        tu = "°" + room.get("temp_unit", "C")
        rows = []
        _html_row(rows, "Length", room, "length", lu)
        _html_row(rows, "Width", room, "width", lu)
        _html_row(rows, "Height", room, "height", lu)
        rows.append(("Insulation", str(room.get("insulation_material", "")), ""))
        _html_row(rows, "Wall Insulation", room, "wall_insulation_mm", "mm")
        _html_row(rows, "Ceiling Insulation", room, "ceiling_insulation_mm", "mm")
        _html_row(rows, "Floor Insulation", room, "floor_insulation_mm", "mm")
        _html_row(rows, "Ambient Temp", room, "ambient_temp", tu)
        _html_row(rows, "Room Temp", room, "room_temp", tu)
        sections.append(_html_table("Room", rows))

    product = state.product
    if product:
        tu = "°" + product.get("temp_unit", "C")
        rows = [("Product", str(product.get("name", product.get("preset", "Custom"))), "")]
        _html_row(rows, "Mass", product, "mass", product.get("mass_unit", "kg"))
        _html_row(rows, "Entering Temp", product, "entering_temp", tu)
        _html_row(rows, "Final Temp", product, "final_temp", tu)
        _html_row(rows, "Pull-down Time", product, "pull_down_hours", "h")
        sections.append(_html_table("Product", rows))

    results = state.results
    if results:
        rows = []
        for label, comp in _ordered_components(results):
            rows.append((label, f"{comp['energy_kj']:.1f}", "kJ"))
        sections.append(_html_table("Heat Loads", rows))

        rows = []
        _html_row(rows, "Total Load", results, "total_load_kw", "kW")
        _html_row(rows, "Capacity", results, "refrigeration_capacity_tr", "TR")
        _html_row(rows, "Safety Factor", results, "safety_factor_percent", "%")
        _html_row(rows, "With Safety", results, "capacity_with_safety_tr", "TR")
        rows.append(("Door Frequency", str(results.get("door_frequency", "")), ""))
        _html_row(rows, "Final Capacity", results, "final_capacity_tr", "TR")
        _html_row(rows, "Sensible Heat Ratio", results, "sensible_heat_ratio", "")
        _html_row(rows, "Airflow", results, "airflow_cfm", "CFM")
        sections.append(_html_table("Capacity", rows))

    sections.append(_html_footer(state))
    return "\n".join(sections)


def _html_header(state: ProjectState) -> str:
    title = html_mod.escape(state.meta.name)
    variant = html_mod.escape(parse_variant(state.variant).label)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>ColdSize — {title}</title>
<style>
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
       max-width: 800px; margin: 2em auto; padding: 0 1em; color: #222; }}
h1 {{ color: #1a365d; border-bottom: 2px solid #2b6cb0; padding-bottom: 0.3em; }}
h2 {{ color: #2b6cb0; margin-top: 1.5em; }}
table {{ width: 100%; border-collapse: collapse; margin: 0.5em 0 1.5em; }}
th, td {{ text-align: left; padding: 0.4em 0.8em; border-bottom: 1px solid #e2e8f0; }}
th {{ background: #ebf4ff; color: #1a365d; }}
td:nth-child(2) {{ text-align: right; font-family: "SF Mono", "Fira Code", monospace; }}
td:nth-child(3) {{ color: #718096; font-size: 0.9em; }}
.footer {{ margin-top: 2em; padding-top: 1em; border-top: 1px solid #e2e8f0;
           color: #a0aec0; font-size: 0.85em; }}
</style>
</head>
<body>
<h1>ColdSize &mdash; {variant} Heat Load Report</h1>
<p><strong>{title}</strong></p>
"""


def _html_table(title: str, rows: list[tuple[str, str, str]]) -> str:
    esc = html_mod.escape
    lines = [f"<h2>{esc(title)}</h2>", "<table>"]
    lines.append("<tr><th>Parameter</th><th>Value</th><th>Unit</th></tr>")
    for label, value, unit in rows:
        lines.append(f"<tr><td>{esc(label)}</td><td>{esc(value)}</td><td>{esc(unit)}</td></tr>")
    lines.append("</table>")
    return "\n".join(lines)


def _html_row(
    rows: list[tuple[str, str, str]],
    label: str,
    data: dict[str, Any],
    key: str,
    unit: str,
    scale: float = 1.0,
) -> None:
    val = data.get(key)
    if val is not None:
        scaled = val * scale
        if isinstance(scaled, float):
            rows.append((label, f"{scaled:.3f}", unit))
        else:
            rows.append((label, str(scaled), unit))


def _html_footer(state: ProjectState) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return f"""<div class="footer">
Generated: {ts} &middot; ColdSize v{__version__}
</div>
</body>
</html>"""


def save_text_report(state: ProjectState, filepath: str) -> None:
    """Generate and save a plain-text report to a file."""
    report = generate_text_report(state)
    with open(filepath, "w") as f:
        f.write(report)


def save_html_report(state: ProjectState, filepath: str) -> None:
    """Generate and save an HTML report to a file."""
    report = generate_html_report(state)
    with open(filepath, "w") as f:
        f.write(report)
