"""Air change, equipment, occupancy, lighting and heater loads for ColdSize.

Every category follows ``capacity · quantity · 3600 · hours``; how the hours
enter depends on the variant's ``HoursMode`` for that category. The door
heater rating is derived from the door perimeter rather than entered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from coldsize.core.models import AncillaryLoadProfile, LoadCategory
from coldsize.core.variants import HoursMode, VariantProfile
from coldsize.utils.constants import (
    DOOR_HEATER_GATE_TEMP_C,
    DOOR_HEATER_KW_PER_M,
    DOOR_HEATER_KW_PER_M_COLD,
    HOURS_PER_DAY,
    MM_TO_M,
    SECONDS_PER_HOUR,
)
from coldsize.utils.units import LengthUnit, length_to_mm

# Categories that take their hours from the input as a direct multiplier
_DIRECT_CATEGORIES = ("air_change", "equipment", "occupancy", "lighting")


@dataclass(frozen=True)
class AncillaryLoads:
    """Ancillary loads by category [kJ] and the derived door heater rating."""

    loads: Mapping[str, float] = field(default_factory=dict)
    door_heater_capacity_kw: float = 0.0
    door_perimeter_m: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "loads", MappingProxyType(dict(self.loads)))

    @property
    def total(self) -> float:
        return sum(self.loads.values())

    @property
    def heaters(self) -> float:
        return sum(v for k, v in self.loads.items() if k.endswith("_heater"))


def hours_factor(hours: float, mode: HoursMode) -> float:
    """Effective hours multiplier for *mode*."""
    if mode is HoursMode.DIRECT:
        return hours
    if mode is HoursMode.DAY_FRACTION:
        return hours / HOURS_PER_DAY
    if mode is HoursMode.CONTINUOUS:
        return HOURS_PER_DAY
    raise ValueError(f"Unknown hours mode: {mode}")


def category_load(
    capacity_kw: float,
    quantity: float,
    hours: float,
    mode: HoursMode = HoursMode.DIRECT,
) -> float:
    """Energy of one load category [kJ].

    Q = capacity · quantity · 3600 · h, where h depends on *mode*.
    """
    return capacity_kw * quantity * SECONDS_PER_HOUR * hours_factor(hours, mode)


def door_perimeter_m(
    width: float,
    height: float,
    unit: str | LengthUnit = LengthUnit.MM,
) -> float:
    """Clear-opening perimeter of a door [m]: 2 · (w + h) with w, h in mm / 1000."""
    w_mm = length_to_mm(width, unit)
    h_mm = length_to_mm(height, unit)
    return 2.0 * (w_mm + h_mm) * MM_TO_M


def door_heater_factor(room_temp: float, gated: bool) -> float:
    """Door frame heater rating per metre of perimeter [kW/m].

    Gated variants use the heavier rating at or below 5 °C.
    """
    if gated and room_temp <= DOOR_HEATER_GATE_TEMP_C:
        return DOOR_HEATER_KW_PER_M_COLD
    return DOOR_HEATER_KW_PER_M


def door_heater_capacity(perimeter_m: float, room_temp: float, gated: bool) -> float:
    """Door heater rating [kW] for a door of the given perimeter."""
    return perimeter_m * door_heater_factor(room_temp, gated)


def category_power_kw(
    category: LoadCategory,
    energy_kj: float,
    mode: HoursMode,
    normalization_seconds: float,
) -> float:
    """Power form [kW] of a category load.

    ``DAY_FRACTION`` reports capacity · quantity · hours / 24; any other mode
    divides the energy by the variant's normalisation period.
    """
    if mode is HoursMode.DAY_FRACTION:
        return category.capacity_kw * category.quantity * category.hours / HOURS_PER_DAY
    return energy_kj / normalization_seconds


def ancillary_loads(
    ancillary: AncillaryLoadProfile,
    room_temp: float,
    profile: VariantProfile,
) -> AncillaryLoads:
    """Compute every ancillary load for a variant.

    Args:
        ancillary: Normalised AncillaryLoadProfile (door dimensions in mm).
        room_temp: Room temperature [°C], gates the door heater rating.
        profile: Formula table of the variant.
    """
    categories = ancillary.categories()
    loads: dict[str, float] = {}

    for name in _DIRECT_CATEGORIES:
        cat = categories[name]
        loads[name] = category_load(cat.capacity_kw, cat.quantity, cat.hours)

    perimeter = door_perimeter_m(ancillary.door_width, ancillary.door_height, ancillary.door_unit)
    door_capacity = door_heater_capacity(perimeter, room_temp, profile.gated_door_heater)

    for name, mode in profile.heater_hours.items():
        if mode is None:
            continue
        cat = categories[name]
        capacity = door_capacity if name == "door_heater" else cat.capacity_kw
        loads[name] = category_load(capacity, cat.quantity, cat.hours, mode)

    return AncillaryLoads(
        loads=loads,
        door_heater_capacity_kw=door_capacity,
        door_perimeter_m=perimeter,
    )
