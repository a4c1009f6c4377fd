"""Input and result records for ColdSize.

All records are immutable. Input records carry their own units, parsed to
enums on construction so a bad unit fails at the boundary; the
``normalize_*`` functions return copies in canonical units (m, kg, °C, and
mm for door openings) and are the only place unit conversion happens.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Mapping

from coldsize.core.variants import DoorFrequency, Variant, parse_door_frequency
from coldsize.utils.constants import KW_TO_BTU_PER_HR
from coldsize.utils.units import (
    LengthUnit,
    MassUnit,
    TemperatureUnit,
    length_to_mm,
    length_to_si,
    mass_to_si,
    parse_length_unit,
    parse_mass_unit,
    parse_temperature_unit,
    temperature_to_celsius,
)


@dataclass(frozen=True)
class RoomGeometry:
    """Enclosure dimensions, insulation and design temperatures."""

    length: float
    width: float
    height: float
    length_unit: LengthUnit = LengthUnit.M

    insulation_material: str = "PUF"
    wall_insulation_mm: float = 100.0
    ceiling_insulation_mm: float = 100.0
    floor_insulation_mm: float = 100.0

    # Hours of transmission load per surface
    wall_hours: float = 24.0
    ceiling_hours: float = 24.0
    floor_hours: float = 24.0

    ambient_temp: float = 45.0
    room_temp: float = 2.0
    temp_unit: TemperatureUnit = TemperatureUnit.C

    def __post_init__(self) -> None:
        object.__setattr__(self, "length_unit", parse_length_unit(self.length_unit))
        object.__setattr__(self, "temp_unit", parse_temperature_unit(self.temp_unit))

    @property
    def volume(self) -> float:
        """Internal volume in the cube of ``length_unit``."""
        return self.length * self.width * self.height


@dataclass(frozen=True)
class ProductThermalProfile:
    """Stored or processed product and its thermal properties.

    Specific heats in kJ/(kg·K), latent heat in kJ/kg, respiration in
    W per tonne. ``freezing_point`` shares ``temp_unit`` with the entering
    and final temperatures.
    """

    mass: float
    entering_temp: float
    final_temp: float
    cp_above: float
    mass_unit: MassUnit = MassUnit.KG
    temp_unit: TemperatureUnit = TemperatureUnit.C
    cp_below: float = 0.0
    freezing_point: float = 0.0
    latent_heat: float = 0.0
    pull_down_hours: float = 24.0
    batch_hours: float = 24.0
    respiration_watts: float = 0.0
    daily_loading_percent: float = 100.0
    name: str = "Custom"

    def __post_init__(self) -> None:
        object.__setattr__(self, "mass_unit", parse_mass_unit(self.mass_unit))
        object.__setattr__(self, "temp_unit", parse_temperature_unit(self.temp_unit))


@dataclass(frozen=True)
class LoadCategory:
    """A capacity × quantity × hours triple.

    ``capacity_kw`` is the rating of one unit (for air change: rate in L/s
    times enthalpy difference in kJ/L, which is also kW).
    """

    capacity_kw: float = 0.0
    quantity: float = 0.0
    hours: float = 0.0


@dataclass(frozen=True)
class AncillaryLoadProfile:
    """Air change, equipment, people, lighting, heaters and sizing options.

    The door heater capacity is not an input: it is derived from the door
    perimeter, so ``door_heater.capacity_kw`` is ignored.
    """

    air_change: LoadCategory = field(default_factory=LoadCategory)
    equipment: LoadCategory = field(default_factory=LoadCategory)
    occupancy: LoadCategory = field(default_factory=LoadCategory)
    lighting: LoadCategory = field(default_factory=LoadCategory)
    peripheral_heater: LoadCategory = field(default_factory=LoadCategory)
    door_heater: LoadCategory = field(default_factory=LoadCategory)
    tray_heater: LoadCategory = field(default_factory=LoadCategory)
    drain_heater: LoadCategory = field(default_factory=LoadCategory)

    door_width: float = 900.0
    door_height: float = 2000.0
    door_unit: LengthUnit = LengthUnit.MM

    safety_factor_percent: float = 20.0
    door_frequency: DoorFrequency = DoorFrequency.LOW
    compressor_running_hours: float = 24.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "door_unit", parse_length_unit(self.door_unit))
        object.__setattr__(self, "door_frequency", parse_door_frequency(self.door_frequency))

    def categories(self) -> dict[str, LoadCategory]:
        """Return the load categories keyed by name."""
        return {
            "air_change": self.air_change,
            "equipment": self.equipment,
            "occupancy": self.occupancy,
            "lighting": self.lighting,
            "peripheral_heater": self.peripheral_heater,
            "door_heater": self.door_heater,
            "tray_heater": self.tray_heater,
            "drain_heater": self.drain_heater,
        }


# --- Normalisation to canonical units ---


def normalize_room(room: RoomGeometry) -> RoomGeometry:
    """Return *room* with dimensions in metres and temperatures in °C."""
    return replace(
        room,
        length=length_to_si(room.length, room.length_unit),
        width=length_to_si(room.width, room.length_unit),
        height=length_to_si(room.height, room.length_unit),
        length_unit=LengthUnit.M,
        ambient_temp=temperature_to_celsius(room.ambient_temp, room.temp_unit),
        room_temp=temperature_to_celsius(room.room_temp, room.temp_unit),
        temp_unit=TemperatureUnit.C,
    )


def normalize_product(product: ProductThermalProfile) -> ProductThermalProfile:
    """Return *product* with mass in kg and temperatures in °C."""
    unit = product.temp_unit
    return replace(
        product,
        mass=mass_to_si(product.mass, product.mass_unit),
        mass_unit=MassUnit.KG,
        entering_temp=temperature_to_celsius(product.entering_temp, unit),
        final_temp=temperature_to_celsius(product.final_temp, unit),
        freezing_point=temperature_to_celsius(product.freezing_point, unit),
        temp_unit=TemperatureUnit.C,
    )


def normalize_ancillary(ancillary: AncillaryLoadProfile) -> AncillaryLoadProfile:
    """Return *ancillary* with door dimensions in millimetres."""
    return replace(
        ancillary,
        door_width=length_to_mm(ancillary.door_width, ancillary.door_unit),
        door_height=length_to_mm(ancillary.door_height, ancillary.door_unit),
        door_unit=LengthUnit.MM,
    )


# --- Result ---


@dataclass(frozen=True)
class ComponentLoad:
    """One heat load in energy and power form."""

    energy_kj: float  # per 24 h, or per batch for the blast freezer
    power_kw: float
    tr: float  # energy / (3600 · 3.517 · 24)


@dataclass(frozen=True)
class CalculationResult:
    """Complete, immutable outcome of one sizing run.

    ``components`` maps load names (``wall``, ``ceiling``, ``floor``,
    ``product``, ``before_freezing``, ``latent_heat``, ``after_freezing``,
    ``respiration``, ``air_change``, ``equipment``, ``occupancy``,
    ``lighting``, ``peripheral_heater``, ``door_heater``, ``tray_heater``,
    ``drain_heater``) to their ``ComponentLoad``. Names that do not apply to
    a variant are absent.
    """

    variant: Variant
    components: Mapping[str, ComponentLoad]

    transmission_kj: float
    product_kj: float
    ancillary_kj: float

    total_load_kj: float
    total_load_kw: float
    refrigeration_capacity_tr: float
    capacity_with_safety_tr: float
    final_capacity_tr: float
    safety_factor_percent: float
    door_frequency: DoorFrequency
    door_frequency_multiplier: float

    sensible_heat_kj: float
    latent_heat_kj: float
    sensible_heat_ratio: float
    airflow_cfm: float

    wall_delta_t: float
    ceiling_delta_t: float
    floor_delta_t: float
    product_delta_t: float
    wall_u_factor: float
    ceiling_u_factor: float
    floor_u_factor: float
    internal_volume_m3: float
    door_heater_capacity_kw: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", MappingProxyType(dict(self.components)))

    def load(self, name: str) -> float:
        """Energy form [kJ] of component *name*; 0.0 when absent."""
        component = self.components.get(name)
        return component.energy_kj if component is not None else 0.0

    @property
    def total_load_tr(self) -> float:
        return sum(c.tr for c in self.components.values())

    @property
    def total_load_btu_per_hr(self) -> float:
        return self.total_load_kw * KW_TO_BTU_PER_HR

    def as_dict(self) -> dict[str, Any]:
        """Flatten to JSON-friendly primitives."""
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "components"}
        data["components"] = {name: asdict(c) for name, c in self.components.items()}
        data["variant"] = self.variant.value
        data["door_frequency"] = self.door_frequency.value
        return data
