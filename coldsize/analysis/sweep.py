"""One-parameter sweeps over a sizing calculation.

A sweep takes a fully built set of input records, replaces one field (or a
group of fields sharing a value, such as the three insulation thicknesses)
for each value in a grid, and collects the headline results as numpy arrays.

Targets are written ``"<record>.<field>"`` with record one of ``room``,
``product`` or ``ancillary``, e.g. ``"room.wall_insulation_mm"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Sequence

import numpy as np

from coldsize.core.models import (
    AncillaryLoadProfile,
    CalculationResult,
    ProductThermalProfile,
    RoomGeometry,
)
from coldsize.core.sizing import calculate
from coldsize.core.variants import Variant, parse_variant
from coldsize.utils.validation import InvalidInputError

logger = logging.getLogger(__name__)

_RECORDS = ("room", "product", "ancillary")

INSULATION_TARGETS = (
    "room.wall_insulation_mm",
    "room.ceiling_insulation_mm",
    "room.floor_insulation_mm",
)
SAFETY_TARGET = "ancillary.safety_factor_percent"

# Result attributes collected per sweep point
_OUTPUTS = (
    "total_load_kj",
    "total_load_kw",
    "refrigeration_capacity_tr",
    "capacity_with_safety_tr",
    "final_capacity_tr",
    "sensible_heat_ratio",
    "airflow_cfm",
    "transmission_kj",
)


@dataclass
class SweepResult:
    """Outcome of a one-parameter sweep.

    ``outputs`` maps result attribute names to arrays aligned with
    ``values``; points whose inputs were rejected hold NaN.
    """

    variant: Variant
    targets: tuple[str, ...]
    values: np.ndarray
    outputs: dict[str, np.ndarray] = field(default_factory=dict)
    n_failed: int = 0

    def __getitem__(self, key: str) -> np.ndarray:
        return self.outputs[key]

    def as_dict(self) -> dict:
        return {
            "variant": self.variant.value,
            "targets": list(self.targets),
            "values": self.values,
            "outputs": self.outputs,
            "n_failed": self.n_failed,
        }


def _split_target(target: str) -> tuple[str, str]:
    record, _, name = target.partition(".")
    if record not in _RECORDS or not name:
        raise ValueError(
            f"Invalid sweep target '{target}'. Use '<record>.<field>' with record in {_RECORDS}"
        )
    return record, name


def _check_targets(targets: Sequence[str], records: dict[str, object]) -> None:
    for target in targets:
        record, name = _split_target(target)
        names = {f.name for f in fields(records[record])}
        if name not in names:
            raise ValueError(f"'{type(records[record]).__name__}' has no field '{name}'")


def sweep_parameter(
    variant: str | Variant,
    room: RoomGeometry,
    product: ProductThermalProfile,
    ancillary: AncillaryLoadProfile,
    target: str | Sequence[str],
    values: Sequence[float] | np.ndarray,
) -> SweepResult:
    """Run the calculation once per value of *target*.

    Args:
        variant: Enclosure variant.
        room: Base room geometry.
        product: Base product profile.
        ancillary: Base ancillary profile.
        target: Field path, or several paths set to the same value.
        values: Grid of values to apply.

    Returns:
        SweepResult with one array per collected output.

    Raises:
        ValueError: If a target does not name a field of its record.
    """
    v = parse_variant(variant)
    targets = (target,) if isinstance(target, str) else tuple(target)
    base = {"room": room, "product": product, "ancillary": ancillary}
    _check_targets(targets, base)

    grid = np.asarray(values, dtype=float)
    outputs = {key: np.full(grid.shape, np.nan) for key in _OUTPUTS}
    n_failed = 0

    for i, value in enumerate(grid):
        changes: dict[str, dict[str, float]] = {r: {} for r in _RECORDS}
        for t in targets:
            record, name = _split_target(t)
            changes[record][name] = float(value)
        records = {r: replace(base[r], **changes[r]) for r in _RECORDS}

        try:
            result: CalculationResult = calculate(v, **records)
        except InvalidInputError as e:
            n_failed += 1
            logger.debug("Sweep point %s=%g rejected: %s", targets[0], value, e)
            continue

        for key in _OUTPUTS:
            outputs[key][i] = getattr(result, key)

    if n_failed:
        logger.warning("%d of %d sweep points were rejected", n_failed, len(grid))

    return SweepResult(variant=v, targets=targets, values=grid, outputs=outputs, n_failed=n_failed)


def insulation_thickness_sweep(
    variant: str | Variant,
    room: RoomGeometry,
    product: ProductThermalProfile,
    ancillary: AncillaryLoadProfile,
    thicknesses_mm: Sequence[float] | np.ndarray,
) -> SweepResult:
    """Sweep wall, ceiling and floor insulation together [mm]."""
    return sweep_parameter(variant, room, product, ancillary, INSULATION_TARGETS, thicknesses_mm)


def safety_factor_sweep(
    variant: str | Variant,
    room: RoomGeometry,
    product: ProductThermalProfile,
    ancillary: AncillaryLoadProfile,
    percents: Sequence[float] | np.ndarray,
) -> SweepResult:
    """Sweep the safety factor [%]."""
    return sweep_parameter(variant, room, product, ancillary, SAFETY_TARGET, percents)
