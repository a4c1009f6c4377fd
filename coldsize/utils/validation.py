"""Input rule checking for ColdSize.

The load formulas are unguarded arithmetic; the checks here run once at the
input boundary so that zero hours or negative dimensions are reported as
errors instead of surfacing as a ZeroDivisionError or a meaningless load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from coldsize.utils.constants import HOURS_PER_DAY

if TYPE_CHECKING:
    from coldsize.core.models import AncillaryLoadProfile, ProductThermalProfile, RoomGeometry
    from coldsize.core.variants import Variant


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def info(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, parameter, message, **kwargs)

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)


class InvalidInputError(ValueError):
    """Raised when inputs fail boundary validation.

    Attributes:
        result: The ValidationResult holding every finding.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        details = "; ".join(m.message for m in result.errors)
        super().__init__(f"Invalid input: {details}")


# --- Common validators ---


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}", value=value, limit=0)


def validate_non_negative(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is zero or positive."""
    if value < 0:
        result.error(name, f"{name} must not be negative, got {value}", value=value, limit=0)


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
    severity: Severity = Severity.ERROR,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.add(severity, name, f"{name} = {value} is outside [{low}, {high}]", value=value)


# --- Record validators ---


def validate_room(room: RoomGeometry, max_hours: float = HOURS_PER_DAY) -> ValidationResult:
    """Check room dimensions, insulation and surface hours.

    *max_hours* bounds the surface hours: a day, or the batch length when a
    blast freezer batch runs longer.
    """
    result = ValidationResult()
    validate_positive("length", room.length, result)
    validate_positive("width", room.width, result)
    validate_positive("height", room.height, result)
    validate_non_negative("wall_insulation_mm", room.wall_insulation_mm, result)
    validate_non_negative("ceiling_insulation_mm", room.ceiling_insulation_mm, result)
    validate_non_negative("floor_insulation_mm", room.floor_insulation_mm, result)
    validate_range("wall_hours", room.wall_hours, 0, max_hours, result)
    validate_range("ceiling_hours", room.ceiling_hours, 0, max_hours, result)
    validate_range("floor_hours", room.floor_hours, 0, max_hours, result)

    if room.room_temp >= room.ambient_temp:
        result.warning(
            "room_temp",
            f"Room temperature {room.room_temp} is not below ambient {room.ambient_temp}; "
            "wall and ceiling loads will be zero or negative",
        )
    return result


def validate_product(product: ProductThermalProfile, variant: Variant) -> ValidationResult:
    """Check product thermal properties and time windows."""
    from coldsize.core.variants import get_profile

    profile = get_profile(variant)
    result = ValidationResult()
    validate_non_negative("mass", product.mass, result)
    validate_positive("cp_above", product.cp_above, result)
    validate_positive("pull_down_hours", product.pull_down_hours, result)
    validate_non_negative("respiration_watts", product.respiration_watts, result)
    validate_range("daily_loading_percent", product.daily_loading_percent, 0, 100, result)

    if profile.three_phase:
        validate_positive("cp_below", product.cp_below, result)
        validate_non_negative("latent_heat", product.latent_heat, result)
    if profile.batch:
        validate_positive("batch_hours", product.batch_hours, result)

    if product.final_temp > product.entering_temp:
        result.warning(
            "final_temp",
            f"Final temperature {product.final_temp} is above entering temperature "
            f"{product.entering_temp}; product load terms will be negative",
        )
    return result


def validate_ancillary(
    ancillary: AncillaryLoadProfile, max_hours: float = HOURS_PER_DAY
) -> ValidationResult:
    """Check ancillary load triples, door opening and sizing parameters."""
    result = ValidationResult()
    for name, category in ancillary.categories().items():
        validate_non_negative(f"{name}.capacity_kw", category.capacity_kw, result)
        validate_non_negative(f"{name}.quantity", category.quantity, result)
        validate_range(f"{name}.hours", category.hours, 0, max_hours, result)
    validate_non_negative("door_width", ancillary.door_width, result)
    validate_non_negative("door_height", ancillary.door_height, result)
    validate_positive("compressor_running_hours", ancillary.compressor_running_hours, result)
    if ancillary.compressor_running_hours > 24:
        result.error(
            "compressor_running_hours",
            f"compressor_running_hours = {ancillary.compressor_running_hours} exceeds 24",
        )
    validate_range(
        "safety_factor_percent", ancillary.safety_factor_percent, 0, 50, result, Severity.WARNING
    )
    return result


def validate_inputs(
    variant: Variant,
    room: RoomGeometry,
    product: ProductThermalProfile,
    ancillary: AncillaryLoadProfile,
) -> ValidationResult:
    """Run every record validator and merge the findings."""
    from coldsize.core.variants import get_profile

    max_hours = HOURS_PER_DAY
    if get_profile(variant).batch:
        max_hours = max(max_hours, product.batch_hours)
    result = validate_room(room, max_hours)
    result.merge(validate_product(product, variant))
    result.merge(validate_ancillary(ancillary, max_hours))
    return result


def check_storage_capacity(
    stored_mass_kg: float,
    room_volume_m3: float,
    storage_density: float,
) -> ValidationResult:
    """Compare stored product mass with the room's theoretical capacity.

    Args:
        stored_mass_kg: Product mass held in the room [kg].
        room_volume_m3: Internal room volume [m³].
        storage_density: Achievable storage density [kg/m³].

    Returns:
        ValidationResult with an INFO line for utilisation and a WARNING
        when the mass exceeds the capacity.
    """
    result = ValidationResult()
    max_capacity = storage_density * room_volume_m3
    if max_capacity <= 0:
        result.error("storage_density", "Storage capacity must be positive")
        return result

    utilisation = stored_mass_kg / max_capacity * 100.0
    result.info(
        "storage",
        f"Storage utilisation {utilisation:.1f}% of {max_capacity:.0f} kg",
        value=utilisation,
        limit=max_capacity,
    )
    if stored_mass_kg > max_capacity:
        result.warning(
            "mass",
            f"Stored mass {stored_mass_kg:.0f} kg exceeds room capacity {max_capacity:.0f} kg",
            value=stored_mass_kg,
            limit=max_capacity,
        )
    return result
