"""Enclosure variants and their formula-coefficient tables.

Cold rooms, freezer rooms and blast freezers share one calculation pipeline;
everything that differs between them lives in a single frozen
``VariantProfile`` per variant, so the differences are explicit data rather
than three diverging copies of the formulas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Variant(Enum):
    """Enclosure variant."""

    COLD_ROOM = "cold-room"
    FREEZER_ROOM = "freezer-room"
    BLAST_FREEZER = "blast-freezer"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()


class ProductPolicy(Enum):
    """How the product load is split."""

    SINGLE_PHASE = "single-phase"
    THREE_PHASE = "three-phase"


class HoursMode(Enum):
    """How an hours field enters an ancillary load formula."""

    DIRECT = "direct"  # × hours
    DAY_FRACTION = "day-fraction"  # × hours / 24
    CONTINUOUS = "continuous"  # fixed 24 h duty, hours field ignored


class DoorFrequency(Enum):
    """Door opening frequency class for blast freezer sizing."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def multiplier(self) -> float:
        return _DOOR_FREQUENCY_MULTIPLIERS[self]


_DOOR_FREQUENCY_MULTIPLIERS = {
    DoorFrequency.LOW: 1.00,
    DoorFrequency.MEDIUM: 1.05,
    DoorFrequency.HIGH: 1.10,
}


def parse_variant(value: str | Variant) -> Variant:
    """Parse a variant name ("cold-room", "freezer_room", ...)."""
    if isinstance(value, Variant):
        return value
    key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
    try:
        return Variant(key)
    except ValueError:
        options = ", ".join(v.value for v in Variant)
        raise ValueError(f"Unknown variant '{value}'. Use one of: {options}") from None


def parse_door_frequency(value: str | DoorFrequency) -> DoorFrequency:
    """Parse a door opening frequency (low, medium, high)."""
    if isinstance(value, DoorFrequency):
        return value
    try:
        return DoorFrequency(str(value).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown door frequency '{value}'. Use one of: low, medium, high"
        ) from None


def _weights(**kwargs: float) -> Mapping[str, float]:
    return MappingProxyType(dict(kwargs))


@dataclass(frozen=True)
class VariantProfile:
    """Formula coefficients for one enclosure variant.

    Component keys used by the heat-split tables match the load names on
    ``CalculationResult``.
    """

    variant: Variant
    product_policy: ProductPolicy
    phase_gate: bool  # zero the above-freezing term when product arrives frozen
    batch: bool  # normalise per batch instead of per 24 h
    respiration: bool
    daily_loading: bool
    gated_door_heater: bool  # 0.025 / 0.045 kW/m by room temperature
    heater_hours: Mapping[str, HoursMode | None]
    ancillary_power_mode: HoursMode  # how per-category kW figures are derived
    compressor_hours_adjustment: bool
    door_frequency_adjustment: bool
    default_safety_factor_percent: float
    sensible_weights: Mapping[str, float] = field(default_factory=dict)
    latent_weights: Mapping[str, float] = field(default_factory=dict)

    @property
    def three_phase(self) -> bool:
        return self.product_policy is ProductPolicy.THREE_PHASE


_CONTINUOUS_HEATERS = MappingProxyType(
    {
        "peripheral_heater": HoursMode.CONTINUOUS,
        "door_heater": HoursMode.DIRECT,
        "tray_heater": HoursMode.CONTINUOUS,
        "drain_heater": HoursMode.CONTINUOUS,
    }
)

COLD_ROOM = VariantProfile(
    variant=Variant.COLD_ROOM,
    product_policy=ProductPolicy.SINGLE_PHASE,
    phase_gate=False,
    batch=False,
    respiration=True,
    daily_loading=True,
    gated_door_heater=False,
    heater_hours=MappingProxyType(
        {
            "peripheral_heater": None,
            "door_heater": HoursMode.DIRECT,
            "tray_heater": None,
            "drain_heater": None,
        }
    ),
    ancillary_power_mode=HoursMode.DAY_FRACTION,
    compressor_hours_adjustment=True,
    door_frequency_adjustment=False,
    default_safety_factor_percent=20.0,
    sensible_weights=_weights(
        transmission=1.0,
        product=1.0,
        equipment=1.0,
        occupancy=1.0,
        lighting=1.0,
        door_heater=1.0,
    ),
    latent_weights=_weights(respiration=1.0, air_change=1.0),
)

FREEZER_ROOM = VariantProfile(
    variant=Variant.FREEZER_ROOM,
    product_policy=ProductPolicy.THREE_PHASE,
    phase_gate=True,
    batch=False,
    respiration=True,
    daily_loading=True,
    gated_door_heater=True,
    heater_hours=_CONTINUOUS_HEATERS,
    ancillary_power_mode=HoursMode.DIRECT,
    compressor_hours_adjustment=False,
    door_frequency_adjustment=False,
    default_safety_factor_percent=20.0,
    sensible_weights=_weights(
        transmission=1.0,
        before_freezing=1.0,
        after_freezing=1.0,
        equipment=1.0,
        occupancy=1.0,
        lighting=1.0,
        peripheral_heater=1.0,
        door_heater=1.0,
        tray_heater=1.0,
        drain_heater=1.0,
    ),
    latent_weights=_weights(respiration=1.0, air_change=1.0, latent_heat=1.0),
)

BLAST_FREEZER = VariantProfile(
    variant=Variant.BLAST_FREEZER,
    product_policy=ProductPolicy.THREE_PHASE,
    phase_gate=False,
    batch=True,
    respiration=False,
    daily_loading=False,
    gated_door_heater=True,
    heater_hours=_CONTINUOUS_HEATERS,
    ancillary_power_mode=HoursMode.DIRECT,
    compressor_hours_adjustment=False,
    door_frequency_adjustment=True,
    default_safety_factor_percent=20.0,
    sensible_weights=_weights(
        transmission=1.0,
        before_freezing=1.0,
        after_freezing=1.0,
        air_change=0.4,
    ),
    latent_weights=_weights(latent_heat=1.0, air_change=0.6, occupancy=0.6),
)

_PROFILES = {
    Variant.COLD_ROOM: COLD_ROOM,
    Variant.FREEZER_ROOM: FREEZER_ROOM,
    Variant.BLAST_FREEZER: BLAST_FREEZER,
}


def get_profile(variant: str | Variant) -> VariantProfile:
    """Return the formula table for *variant*."""
    return _PROFILES[parse_variant(variant)]
