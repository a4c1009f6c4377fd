"""Unit conversion utilities for ColdSize.

Provides a lightweight unit conversion system built on top of pint, with
closed enumerations for the unit pairs an input form exposes (length, mass,
temperature). Unit strings are parsed once at the input boundary; the
calculation modules only ever see canonical units (m, kg, °C, mm for door
openings).
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

import pint

from coldsize.utils.constants import LB_PER_KG

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()

# The reference spreadsheet rounds the pound to 1/2.20462 kg; keep its factor
# so converted masses match the spreadsheet to the last digit.
_ureg.define(f"spreadsheet_pound = kilogram / {LB_PER_KG}")


def get_unit_registry() -> pint.UnitRegistry:
    """Return the shared pint UnitRegistry instance."""
    return _ureg


Q_ = _ureg.Quantity


class LengthUnit(Enum):
    """Length units accepted for room and door dimensions."""

    M = "m"
    FT = "ft"
    MM = "mm"

    @property
    def pint_name(self) -> str:
        return {"m": "meter", "ft": "foot", "mm": "millimeter"}[self.value]


class MassUnit(Enum):
    """Mass units accepted for product throughput."""

    KG = "kg"
    LB = "lbs"

    @property
    def pint_name(self) -> str:
        return {"kg": "kilogram", "lbs": "spreadsheet_pound"}[self.value]


class TemperatureUnit(Enum):
    """Temperature scales accepted for room and product temperatures."""

    C = "C"
    F = "F"

    @property
    def pint_name(self) -> str:
        return {"C": "degC", "F": "degF"}[self.value]


_LENGTH_ALIASES = {"m": "m", "meter": "m", "ft": "ft", "feet": "ft", "mm": "mm"}
_MASS_ALIASES = {"kg": "kg", "lb": "lbs", "lbs": "lbs"}
_TEMPERATURE_ALIASES = {"c": "C", "degc": "C", "°c": "C", "f": "F", "degf": "F", "°f": "F"}


def parse_length_unit(unit: str | LengthUnit) -> LengthUnit:
    """Parse a length unit string.

    Raises:
        ValueError: If the unit is not one of m, ft, mm.
    """
    if isinstance(unit, LengthUnit):
        return unit
    key = _LENGTH_ALIASES.get(str(unit).strip().lower())
    if key is None:
        raise ValueError(f"Unsupported length unit '{unit}'. Use one of: m, ft, mm")
    return LengthUnit(key)


def parse_mass_unit(unit: str | MassUnit) -> MassUnit:
    """Parse a mass unit string.

    Raises:
        ValueError: If the unit is not kg or lbs.
    """
    if isinstance(unit, MassUnit):
        return unit
    key = _MASS_ALIASES.get(str(unit).strip().lower())
    if key is None:
        raise ValueError(f"Unsupported mass unit '{unit}'. Use one of: kg, lbs")
    return MassUnit(key)


def parse_temperature_unit(unit: str | TemperatureUnit) -> TemperatureUnit:
    """Parse a temperature unit string.

    Raises:
        ValueError: If the unit is not C or F.
    """
    if isinstance(unit, TemperatureUnit):
        return unit
    key = _TEMPERATURE_ALIASES.get(str(unit).strip().lower())
    if key is None:
        raise ValueError(f"Unsupported temperature unit '{unit}'. Use one of: C, F")
    return TemperatureUnit(key)


# --- Unit-pair conversions ---


def convert_length(
    value: float,
    from_unit: str | LengthUnit,
    to_unit: str | LengthUnit,
) -> float:
    """Convert a length between m, ft and mm.

    Args:
        value: Numeric length in *from_unit*.
        from_unit: Source unit.
        to_unit: Target unit.

    Returns:
        Length in *to_unit*. No rounding is applied.
    """
    src = parse_length_unit(from_unit)
    dst = parse_length_unit(to_unit)
    if src is dst:
        return value
    return convert(value, src.pint_name, dst.pint_name)


def convert_mass(
    value: float,
    from_unit: str | MassUnit,
    to_unit: str | MassUnit,
) -> float:
    """Convert a mass between kg and lbs (2.20462 lbs per kg)."""
    src = parse_mass_unit(from_unit)
    dst = parse_mass_unit(to_unit)
    if src is dst:
        return value
    return convert(value, src.pint_name, dst.pint_name)


def convert_temperature(
    value: float,
    from_unit: str | TemperatureUnit,
    to_unit: str | TemperatureUnit,
) -> float:
    """Convert a temperature between °C and °F (F = C·9/5 + 32)."""
    src = parse_temperature_unit(from_unit)
    dst = parse_temperature_unit(to_unit)
    if src is dst:
        return value
    return convert(value, src.pint_name, dst.pint_name)


def length_to_si(value: float, unit: str | LengthUnit) -> float:
    """Convert length to metres."""
    return convert_length(value, unit, LengthUnit.M)


def length_to_mm(value: float, unit: str | LengthUnit) -> float:
    """Convert length to millimetres."""
    return convert_length(value, unit, LengthUnit.MM)


def mass_to_si(value: float, unit: str | MassUnit) -> float:
    """Convert mass to kilograms."""
    return convert_mass(value, unit, MassUnit.KG)


def temperature_to_celsius(value: float, unit: str | TemperatureUnit) -> float:
    """Convert temperature to °C."""
    return convert_temperature(value, unit, TemperatureUnit.C)


@lru_cache(maxsize=256)
def convert(value: float, from_unit: str, to_unit: str) -> float:
    """General-purpose unit conversion.

    Args:
        value: Numeric value in *from_unit*.
        from_unit: Source unit string (pint syntax).
        to_unit: Target unit string (pint syntax).

    Returns:
        Converted numeric value.
    """
    return Q_(value, from_unit).to(to_unit).magnitude
