"""Input construction and project file I/O for ColdSize.

A project file is JSON holding the variant, the three input sections as
plain dictionaries (with unit strings), and optionally the last results.
``build_inputs`` is the single place where defaults are applied and unit
strings are parsed; the calculation modules only ever receive fully
specified records.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from coldsize.core.models import (
    AncillaryLoadProfile,
    CalculationResult,
    LoadCategory,
    ProductThermalProfile,
    RoomGeometry,
)
from coldsize.core.products import product_profile_fields
from coldsize.core.sizing import calculate
from coldsize.core.variants import Variant, get_profile, parse_door_frequency, parse_variant
from coldsize.utils.units import (
    TemperatureUnit,
    convert_temperature,
    parse_length_unit,
    parse_mass_unit,
    parse_temperature_unit,
)

logger = logging.getLogger(__name__)


# --- Reference defaults (spreadsheet worked examples) ---

_DEFAULTS: dict[Variant, dict[str, dict[str, Any]]] = {
    Variant.COLD_ROOM: {
        "room": {
            "length": 3.048,
            "width": 4.5,
            "height": 3.0,
            "length_unit": "m",
            "insulation_material": "PUF",
            "wall_insulation_mm": 100.0,
            "ceiling_insulation_mm": 100.0,
            "floor_insulation_mm": 100.0,
            "wall_hours": 24.0,
            "ceiling_hours": 24.0,
            "floor_hours": 24.0,
            "ambient_temp": 45.0,
            "room_temp": 2.0,
            "temp_unit": "C",
        },
        "product": {
            "mass": 4000.0,
            "mass_unit": "kg",
            "entering_temp": 30.0,
            "final_temp": 4.0,
            "temp_unit": "C",
            "cp_above": 4.1,
            "pull_down_hours": 24.0,
            "respiration_watts": 50.0,
            "daily_loading_percent": 100.0,
        },
        "ancillary": {
            "air_change": {"rate_lps": 3.4, "enthalpy_diff": 0.10, "hours": 20.0},
            "equipment": {"capacity_kw": 0.25, "quantity": 1, "hours": 20.0},
            "occupancy": {"capacity_kw": 0.275, "quantity": 1, "hours": 20.0},
            "lighting": {"power_w": 70.0, "hours": 20.0},
            "door_heater": {"quantity": 1, "hours": 20.0},
            "door_width": 900.0,
            "door_height": 2000.0,
            "door_unit": "mm",
            "door_frequency": "low",
            "compressor_running_hours": 24.0,
        },
    },
    Variant.FREEZER_ROOM: {
        "room": {
            "length": 5.0,
            "width": 4.0,
            "height": 3.0,
            "length_unit": "m",
            "insulation_material": "PUF",
            "wall_insulation_mm": 150.0,
            "ceiling_insulation_mm": 150.0,
            "floor_insulation_mm": 150.0,
            "wall_hours": 24.0,
            "ceiling_hours": 24.0,
            "floor_hours": 24.0,
            "ambient_temp": 45.0,
            "room_temp": -20.0,
            "temp_unit": "C",
        },
        "product": {
            "mass": 3000.0,
            "mass_unit": "kg",
            "entering_temp": 5.0,
            "final_temp": -18.0,
            "temp_unit": "C",
            "cp_above": 3.52,
            "cp_below": 2.14,
            "freezing_point": -1.7,
            "latent_heat": 233.0,
            "pull_down_hours": 24.0,
            "respiration_watts": 0.0,
            "daily_loading_percent": 100.0,
        },
        "ancillary": {
            "air_change": {"rate_lps": 4.2, "enthalpy_diff": 0.14, "hours": 20.0},
            "equipment": {"capacity_kw": 0.37, "quantity": 6, "hours": 24.0},
            "occupancy": {"capacity_kw": 0.407, "quantity": 4, "hours": 2.0},
            "lighting": {"capacity_kw": 0.14, "quantity": 1, "hours": 16.0},
            "peripheral_heater": {"capacity_kw": 1.5, "quantity": 8},
            "door_heater": {"quantity": 1, "hours": 24.0},
            "tray_heater": {"capacity_kw": 2.0, "quantity": 2},
            "drain_heater": {"capacity_kw": 0.04, "quantity": 1},
            "door_width": 900.0,
            "door_height": 1800.0,
            "door_unit": "mm",
            "door_frequency": "low",
            "compressor_running_hours": 24.0,
        },
    },
    Variant.BLAST_FREEZER: {
        "room": {
            "length": 5.0,
            "width": 5.0,
            "height": 3.5,
            "length_unit": "m",
            "insulation_material": "PUF",
            "wall_insulation_mm": 150.0,
            "ceiling_insulation_mm": 150.0,
            "floor_insulation_mm": 150.0,
            "wall_hours": 8.0,
            "ceiling_hours": 8.0,
            "floor_hours": 8.0,
            "ambient_temp": 43.0,
            "room_temp": -35.0,
            "temp_unit": "C",
        },
        "product": {
            "mass": 2000.0,
            "mass_unit": "kg",
            "entering_temp": -5.0,
            "final_temp": -30.0,
            "temp_unit": "C",
            "cp_above": 3.49,
            "cp_below": 2.14,
            "freezing_point": -1.7,
            "latent_heat": 233.0,
            "pull_down_hours": 8.0,
            "batch_hours": 8.0,
        },
        "ancillary": {
            "air_change": {"rate_lps": 4.2, "enthalpy_diff": 0.14, "hours": 2.0},
            "equipment": {"capacity_kw": 0.37, "quantity": 3, "hours": 8.0},
            "occupancy": {"capacity_kw": 0.5, "quantity": 1, "hours": 1.0},
            "lighting": {"capacity_kw": 0.1, "quantity": 1, "hours": 1.2},
            "peripheral_heater": {"capacity_kw": 1.5, "quantity": 1},
            "door_heater": {"quantity": 1, "hours": 8.0},
            "tray_heater": {"capacity_kw": 2.2, "quantity": 1},
            "drain_heater": {"capacity_kw": 0.04, "quantity": 1},
            "door_width": 1200.0,
            "door_height": 1800.0,
            "door_unit": "mm",
            "door_frequency": "low",
            "compressor_running_hours": 24.0,
        },
    },
}

_CATEGORY_NAMES = (
    "air_change",
    "equipment",
    "occupancy",
    "lighting",
    "peripheral_heater",
    "door_heater",
    "tray_heater",
    "drain_heater",
)


def default_inputs(variant: str | Variant) -> dict[str, dict[str, Any]]:
    """Return a deep copy of the reference inputs for *variant*.

    The safety factor is filled from the variant's formula table.
    """
    profile = get_profile(variant)
    data = copy.deepcopy(_DEFAULTS[profile.variant])
    data["ancillary"]["safety_factor_percent"] = profile.default_safety_factor_percent
    return data


def _merge(base: dict[str, Any], override: dict[str, Any] | None) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_category(data: dict[str, Any] | None) -> LoadCategory:
    """Build a LoadCategory from its dictionary form.

    Accepts ``capacity_kw``/``quantity``/``hours``, or the shorthands
    ``rate_lps`` × ``enthalpy_diff`` (air change) and ``power_w`` (lighting).
    """
    if not data:
        return LoadCategory()
    if "rate_lps" in data:
        capacity = data["rate_lps"] * data.get("enthalpy_diff", 0.0)
        quantity = 1.0
    elif "power_w" in data:
        capacity = data["power_w"] / 1000.0
        quantity = 1.0
    else:
        capacity = data.get("capacity_kw", 0.0)
        quantity = data.get("quantity", 0.0)
    return LoadCategory(
        capacity_kw=float(capacity),
        quantity=float(quantity),
        hours=float(data.get("hours", 0.0)),
    )


def build_room(data: dict[str, Any]) -> RoomGeometry:
    """Construct a RoomGeometry from a complete dictionary."""
    return RoomGeometry(
        length=float(data["length"]),
        width=float(data["width"]),
        height=float(data["height"]),
        length_unit=parse_length_unit(data.get("length_unit", "m")),
        insulation_material=str(data.get("insulation_material", "PUF")),
        wall_insulation_mm=float(data["wall_insulation_mm"]),
        ceiling_insulation_mm=float(data["ceiling_insulation_mm"]),
        floor_insulation_mm=float(data["floor_insulation_mm"]),
        wall_hours=float(data["wall_hours"]),
        ceiling_hours=float(data["ceiling_hours"]),
        floor_hours=float(data["floor_hours"]),
        ambient_temp=float(data["ambient_temp"]),
        room_temp=float(data["room_temp"]),
        temp_unit=parse_temperature_unit(data.get("temp_unit", "C")),
    )


def build_product(data: dict[str, Any]) -> ProductThermalProfile:
    """Construct a ProductThermalProfile from a dictionary.

    A ``preset`` key fills the thermal properties from the product
    database; explicit keys in *data* still win over the preset.
    """
    data = dict(data)
    temp_unit = parse_temperature_unit(data.get("temp_unit", "C"))

    preset = data.pop("preset", None)
    if preset:
        fields = product_profile_fields(preset)
        fields["freezing_point"] = convert_temperature(
            fields["freezing_point"], TemperatureUnit.C, temp_unit
        )
        for key, value in fields.items():
            data.setdefault(key, value)

    pull_down = float(data.get("pull_down_hours", 24.0))
    return ProductThermalProfile(
        mass=float(data["mass"]),
        entering_temp=float(data["entering_temp"]),
        final_temp=float(data["final_temp"]),
        cp_above=float(data["cp_above"]),
        mass_unit=parse_mass_unit(data.get("mass_unit", "kg")),
        temp_unit=temp_unit,
        cp_below=float(data.get("cp_below", data["cp_above"])),
        freezing_point=float(data.get("freezing_point", 0.0)),
        latent_heat=float(data.get("latent_heat", 0.0)),
        pull_down_hours=pull_down,
        batch_hours=float(data.get("batch_hours", pull_down)),
        respiration_watts=float(data.get("respiration_watts", 0.0)),
        daily_loading_percent=float(data.get("daily_loading_percent", 100.0)),
        name=str(data.get("name", preset or "Custom")),
    )


def build_ancillary(data: dict[str, Any]) -> AncillaryLoadProfile:
    """Construct an AncillaryLoadProfile from a complete dictionary."""
    categories = {name: _load_category(data.get(name)) for name in _CATEGORY_NAMES}
    return AncillaryLoadProfile(
        **categories,
        door_width=float(data["door_width"]),
        door_height=float(data["door_height"]),
        door_unit=parse_length_unit(data.get("door_unit", "mm")),
        safety_factor_percent=float(data["safety_factor_percent"]),
        door_frequency=parse_door_frequency(data.get("door_frequency", "low")),
        compressor_running_hours=float(data.get("compressor_running_hours", 24.0)),
    )


def build_inputs(
    variant: str | Variant,
    room: dict[str, Any] | None = None,
    product: dict[str, Any] | None = None,
    ancillary: dict[str, Any] | None = None,
) -> tuple[RoomGeometry, ProductThermalProfile, AncillaryLoadProfile]:
    """Merge caller dictionaries over the variant defaults and build records.

    Raises:
        ValueError: On unknown variant, unit or door frequency strings.
        KeyError: On an unknown product preset.
    """
    defaults = default_inputs(variant)
    product_data = _merge(defaults["product"], product)
    if product and "preset" in product:
        # Preset values replace the default product's thermal properties
        for key in ("cp_above", "cp_below", "freezing_point", "latent_heat", "respiration_watts"):
            if key not in product:
                product_data.pop(key, None)
    return (
        build_room(_merge(defaults["room"], room)),
        build_product(product_data),
        build_ancillary(_merge(defaults["ancillary"], ancillary)),
    )


# --- Project metadata ---


@dataclass
class ProjectMeta:
    """Top-level project metadata."""

    name: str = "Untitled"
    description: str = ""
    author: str = ""
    version: str = "0.1.0"
    created: str = ""
    modified: str = ""

    def touch(self) -> None:
        """Update the modified timestamp."""
        self.modified = datetime.now(timezone.utc).isoformat()


@dataclass
class ProjectState:
    """A sizing project: variant, raw inputs and last results.

    Inputs are kept in their dictionary form so files stay hand-editable.
    """

    meta: ProjectMeta = field(default_factory=ProjectMeta)
    variant: str = Variant.COLD_ROOM.value
    room: dict[str, Any] = field(default_factory=dict)
    product: dict[str, Any] = field(default_factory=dict)
    ancillary: dict[str, Any] = field(default_factory=dict)
    results: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_defaults(cls, variant: str | Variant, name: str = "Untitled") -> ProjectState:
        """Create a project pre-filled with the variant's reference inputs."""
        v = parse_variant(variant)
        data = default_inputs(v)
        meta = ProjectMeta(name=name, created=datetime.now(timezone.utc).isoformat())
        return cls(meta=meta, variant=v.value, **data)

    def inputs(self) -> tuple[RoomGeometry, ProductThermalProfile, AncillaryLoadProfile]:
        return build_inputs(self.variant, self.room, self.product, self.ancillary)

    def run(self, validate: bool = True) -> CalculationResult:
        """Calculate and store the flattened result in ``results``."""
        room, product, ancillary = self.inputs()
        result = calculate(self.variant, room, product, ancillary, validate=validate)
        self.results = result.as_dict()
        return result


# --- JSON serialization ---


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        return super().default(obj)


def dump_json(data: Any, path: str | Path) -> None:
    """Write *data* as indented JSON, converting numpy values."""
    with open(path, "w") as f:
        json.dump(data, f, indent=2, cls=_NumpyEncoder)


def save_project_json(state: ProjectState, path: str | Path) -> None:
    """Save a project to a JSON file."""
    path = Path(path)
    state.meta.touch()
    dump_json(asdict(state), path)
    logger.info("Saved project to %s", path)


def load_project_json(path: str | Path) -> ProjectState:
    """Load a project from a JSON file.

    Raises:
        ValueError: If the file names an unknown variant.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    meta = ProjectMeta(**data.pop("meta", {}))
    state = ProjectState(meta=meta, **data)
    state.variant = parse_variant(state.variant).value
    logger.info("Loaded %s project from %s", state.variant, path)
    return state
