"""Load aggregation and refrigeration capacity sizing for ColdSize.

Entry points, one per enclosure variant:

- ``calculate_cold_room``
- ``calculate_freezer_room``
- ``calculate_blast_freezer``

each ``(RoomGeometry, ProductThermalProfile, AncillaryLoadProfile) ->
CalculationResult``. The pipeline normalises units, computes transmission,
product and ancillary loads, then reduces them to a capacity in tons of
refrigeration:

    kW        = Σ kJ / (24 · 3600)          continuous rooms
              = Σ kJ / (3600 · t_batch)     blast freezer
    TR        = kW / 3.517
    TR_safety = TR · (1 + sf / 100)
    TR_final  = TR_safety · door multiplier  (blast freezer only)
    CFM       = TR · 12000 · SHR / (5 · 1.08)
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Mapping

from coldsize.core.ancillary import AncillaryLoads, ancillary_loads, category_power_kw
from coldsize.core.models import (
    AncillaryLoadProfile,
    CalculationResult,
    ComponentLoad,
    ProductThermalProfile,
    RoomGeometry,
    normalize_ancillary,
    normalize_product,
    normalize_room,
)
from coldsize.core.product import ProductLoads, product_loads
from coldsize.core.transmission import TransmissionLoads, transmission_loads
from coldsize.core.variants import Variant, VariantProfile, get_profile
from coldsize.utils.constants import (
    AIRFLOW_DELTA_T_F,
    AIRFLOW_SENSIBLE_FACTOR,
    BTU_PER_HR_PER_TR,
    HOURS_PER_DAY,
    KW_PER_TR,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
)
from coldsize.utils.validation import InvalidInputError, validate_inputs

logger = logging.getLogger(__name__)

# Per-component TR always uses the 24 h spreadsheet divisor
_TR_DIVISOR = SECONDS_PER_HOUR * KW_PER_TR * HOURS_PER_DAY


# --- Sizing identities ---


def capacity_tr(load_kw: float) -> float:
    """Convert a load in kW to tons of refrigeration."""
    return load_kw / KW_PER_TR


def apply_safety_factor(tr: float, safety_factor_percent: float) -> float:
    """Capacity including the safety margin [TR]."""
    return tr * (1.0 + safety_factor_percent / 100.0)


def sensible_heat_ratio(sensible: float, latent: float) -> float:
    """SHR = S / (S + L); NaN when there is no load to split."""
    total = sensible + latent
    if total == 0:
        return math.nan
    return sensible / total


def airflow_cfm(tr: float, shr: float) -> float:
    """Evaporator air quantity [CFM] from capacity and SHR."""
    return tr * BTU_PER_HR_PER_TR * shr / (AIRFLOW_DELTA_T_F * AIRFLOW_SENSIBLE_FACTOR)


def weighted_sum(loads: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Σ weight · load over the components named in *weights*."""
    return sum(w * loads.get(name, 0.0) for name, w in weights.items())


def normalization_seconds(profile: VariantProfile, product: ProductThermalProfile) -> float:
    """Period the total energy is spread over [s]."""
    if profile.batch:
        return SECONDS_PER_HOUR * product.batch_hours
    return SECONDS_PER_DAY


# --- Pipeline ---


def _component_energies(
    profile: VariantProfile,
    trans: TransmissionLoads,
    prod: ProductLoads,
    anc: AncillaryLoads,
) -> dict[str, float]:
    energies = {"wall": trans.wall, "ceiling": trans.ceiling, "floor": trans.floor}
    if profile.three_phase:
        energies["before_freezing"] = prod.before_freezing
        energies["latent_heat"] = prod.latent_heat
        energies["after_freezing"] = prod.after_freezing
    else:
        energies["product"] = prod.total
    if profile.respiration:
        energies["respiration"] = prod.respiration
    energies.update(anc.loads)
    return energies


def _split_keys(energies: Mapping[str, float], trans: TransmissionLoads) -> dict[str, float]:
    """Add the aggregate keys the heat-split tables refer to."""
    keys = dict(energies)
    keys["transmission"] = trans.total
    keys["product"] = energies.get(
        "product",
        energies.get("before_freezing", 0.0)
        + energies.get("latent_heat", 0.0)
        + energies.get("after_freezing", 0.0),
    )
    return keys


def _power_forms(
    profile: VariantProfile,
    ancillary: AncillaryLoadProfile,
    anc: AncillaryLoads,
    energies: Mapping[str, float],
    period_s: float,
) -> dict[str, ComponentLoad]:
    categories = ancillary.categories()
    categories["door_heater"] = replace(
        categories["door_heater"], capacity_kw=anc.door_heater_capacity_kw
    )

    components: dict[str, ComponentLoad] = {}
    for name, energy in energies.items():
        if name in anc.loads:
            power = category_power_kw(
                categories[name], energy, profile.ancillary_power_mode, period_s
            )
        else:
            power = energy / period_s
        components[name] = ComponentLoad(energy_kj=energy, power_kw=power, tr=energy / _TR_DIVISOR)
    return components


def calculate(
    variant: str | Variant,
    room: RoomGeometry,
    product: ProductThermalProfile,
    ancillary: AncillaryLoadProfile,
    validate: bool = True,
) -> CalculationResult:
    """Size the refrigeration plant for one enclosure.

    Args:
        variant: Enclosure variant.
        room: Room geometry and design temperatures.
        product: Product thermal profile.
        ancillary: Ancillary loads and sizing options.
        validate: Reject invalid inputs with ``InvalidInputError``. With
            ``False`` the formulas run unguarded; a zero pull-down, batch
            or compressor time raises ``ZeroDivisionError``.

    Returns:
        A fresh CalculationResult.

    Raises:
        InvalidInputError: If ``validate`` is set and an input rule fails.
    """
    profile = get_profile(variant)

    if validate:
        findings = validate_inputs(profile.variant, room, product, ancillary)
        for msg in findings.warnings:
            logger.warning("%s: %s", msg.parameter, msg.message)
        if not findings.is_valid:
            raise InvalidInputError(findings)

    room = normalize_room(room)
    product = normalize_product(product)
    ancillary = normalize_ancillary(ancillary)

    trans = transmission_loads(room)
    prod = product_loads(product, profile)
    anc = ancillary_loads(ancillary, room.room_temp, profile)

    energies = _component_energies(profile, trans, prod, anc)
    total_kj = sum(energies.values())

    period_s = normalization_seconds(profile, product)
    total_kw = total_kj / period_s
    if profile.compressor_hours_adjustment:
        total_kw *= HOURS_PER_DAY / ancillary.compressor_running_hours

    tr = capacity_tr(total_kw)
    with_safety = apply_safety_factor(tr, ancillary.safety_factor_percent)
    multiplier = ancillary.door_frequency.multiplier if profile.door_frequency_adjustment else 1.0
    final = with_safety * multiplier

    split = _split_keys(energies, trans)
    sensible = weighted_sum(split, profile.sensible_weights)
    latent = weighted_sum(split, profile.latent_weights)
    shr = sensible_heat_ratio(sensible, latent)
    if math.isnan(shr):
        logger.warning(
            "%s: zero total heat load, SHR and airflow are undefined", profile.variant.label
        )

    logger.debug(
        "%s: total=%.1f kJ %.3f kW %.3f TR, safety %.3f TR, final %.3f TR (door x%.2f), SHR %.3f",
        profile.variant.label,
        total_kj,
        total_kw,
        tr,
        with_safety,
        final,
        multiplier,
        shr,
    )

    product_total = prod.total
    return CalculationResult(
        variant=profile.variant,
        components=_power_forms(profile, ancillary, anc, energies, period_s),
        transmission_kj=trans.total,
        product_kj=product_total + prod.respiration,
        ancillary_kj=anc.total,
        total_load_kj=total_kj,
        total_load_kw=total_kw,
        refrigeration_capacity_tr=tr,
        capacity_with_safety_tr=with_safety,
        final_capacity_tr=final,
        safety_factor_percent=ancillary.safety_factor_percent,
        door_frequency=ancillary.door_frequency,
        door_frequency_multiplier=multiplier,
        sensible_heat_kj=sensible,
        latent_heat_kj=latent,
        sensible_heat_ratio=shr,
        airflow_cfm=airflow_cfm(tr, shr),
        wall_delta_t=trans.wall_delta_t,
        ceiling_delta_t=trans.ceiling_delta_t,
        floor_delta_t=trans.floor_delta_t,
        product_delta_t=product.entering_temp - product.final_temp,
        wall_u_factor=trans.wall_u,
        ceiling_u_factor=trans.ceiling_u,
        floor_u_factor=trans.floor_u,
        internal_volume_m3=room.volume,
        door_heater_capacity_kw=anc.door_heater_capacity_kw,
    )


def calculate_cold_room(
    room: RoomGeometry,
    product: ProductThermalProfile,
    ancillary: AncillaryLoadProfile,
    validate: bool = True,
) -> CalculationResult:
    """Size a continuously held cold room (no phase change)."""
    return calculate(Variant.COLD_ROOM, room, product, ancillary, validate=validate)


def calculate_freezer_room(
    room: RoomGeometry,
    product: ProductThermalProfile,
    ancillary: AncillaryLoadProfile,
    validate: bool = True,
) -> CalculationResult:
    """Size a continuously held freezer room (three-phase product load)."""
    return calculate(Variant.FREEZER_ROOM, room, product, ancillary, validate=validate)


def calculate_blast_freezer(
    room: RoomGeometry,
    product: ProductThermalProfile,
    ancillary: AncillaryLoadProfile,
    validate: bool = True,
) -> CalculationResult:
    """Size a batch blast freezer (loads per batch, door-frequency margin)."""
    return calculate(Variant.BLAST_FREEZER, room, product, ancillary, validate=validate)
