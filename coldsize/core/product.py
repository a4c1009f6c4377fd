"""Product heat removal for ColdSize.

Two policies:

- single-phase (cold rooms): sensible cooling above freezing only,

      Q = m · cp_above · (T_in − T_out) · (24 / t_pull)

- three-phase (freezer rooms, blast freezers): above-freezing sensible heat,
  latent heat of fusion, and below-freezing sensible heat, each scaled by an
  hours ratio (operating hours / pull-down hours).

Signed results are kept as-is; a product that ends warmer than it entered
gives a negative load.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from coldsize.core.models import ProductThermalProfile
from coldsize.core.variants import VariantProfile
from coldsize.utils.constants import HOURS_PER_DAY, RESPIRATION_KJ_FACTOR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductLoads:
    """Product load breakdown [kJ per 24 h or per batch]."""

    before_freezing: float = 0.0
    latent_heat: float = 0.0
    after_freezing: float = 0.0
    respiration: float = 0.0
    mass_kg: float = 0.0  # mass the loads were computed for

    @property
    def total(self) -> float:
        """Sensible + latent product load, excluding respiration."""
        return self.before_freezing + self.latent_heat + self.after_freezing


def single_phase_load(
    mass: float,
    cp_above: float,
    entering_temp: float,
    final_temp: float,
    pull_down_hours: float,
) -> float:
    """Sensible product load with no phase change [kJ/24 h]."""
    return mass * cp_above * (entering_temp - final_temp) * (HOURS_PER_DAY / pull_down_hours)


def three_phase_loads(
    mass: float,
    cp_above: float,
    cp_below: float,
    latent_heat: float,
    entering_temp: float,
    final_temp: float,
    freezing_point: float,
    hours_ratio: float,
    phase_gate: bool = True,
) -> tuple[float, float, float]:
    """Before-freezing, latent and after-freezing product loads [kJ].

    With ``phase_gate`` a product arriving at or below its freezing point
    has no above-freezing heat to remove, and its below-freezing term runs
    from the entering temperature. Without the gate the spreadsheet formulas
    are applied literally.

    Args:
        mass: Product mass [kg].
        cp_above: Specific heat above freezing [kJ/(kg·K)].
        cp_below: Specific heat below freezing [kJ/(kg·K)].
        latent_heat: Latent heat of fusion [kJ/kg].
        entering_temp: Product entering temperature [°C].
        final_temp: Product final temperature [°C].
        freezing_point: Product freezing point [°C].
        hours_ratio: Operating hours / pull-down hours.
        phase_gate: Apply the arrives-frozen gate.

    Returns:
        (before_freezing, latent_heat, after_freezing).
    """
    arrives_frozen = phase_gate and entering_temp <= freezing_point

    if arrives_frozen:
        before = 0.0
        delta_below = entering_temp - final_temp
    else:
        before = mass * cp_above * (entering_temp - freezing_point) * hours_ratio
        delta_below = freezing_point - final_temp

    latent = mass * latent_heat * hours_ratio
    after = mass * cp_below * delta_below * hours_ratio

    logger.debug(
        "Three-phase product load: arrives_frozen=%s before=%.2f latent=%.2f after=%.2f kJ",
        arrives_frozen,
        before,
        latent,
        after,
    )
    return before, latent, after


def respiration_load(mass: float, watts_per_tonne: float) -> float:
    """Heat of respiration of stored produce [kJ/24 h]."""
    return mass * watts_per_tonne * RESPIRATION_KJ_FACTOR


def effective_mass(product: ProductThermalProfile, profile: VariantProfile) -> float:
    """Mass the product load is computed for [kg].

    Continuous rooms load only ``daily_loading_percent`` of their capacity
    per day; a blast batch is processed whole.
    """
    if profile.daily_loading:
        return product.mass * product.daily_loading_percent / 100.0
    return product.mass


def product_loads(product: ProductThermalProfile, profile: VariantProfile) -> ProductLoads:
    """Compute the product load breakdown for a variant.

    Args:
        product: Normalised ProductThermalProfile (kg, °C).
        profile: Formula table of the variant.
    """
    mass = effective_mass(product, profile)

    if profile.three_phase:
        operating_hours = product.batch_hours if profile.batch else HOURS_PER_DAY
        before, latent, after = three_phase_loads(
            mass=mass,
            cp_above=product.cp_above,
            cp_below=product.cp_below,
            latent_heat=product.latent_heat,
            entering_temp=product.entering_temp,
            final_temp=product.final_temp,
            freezing_point=product.freezing_point,
            hours_ratio=operating_hours / product.pull_down_hours,
            phase_gate=profile.phase_gate,
        )
    else:
        before = single_phase_load(
            mass,
            product.cp_above,
            product.entering_temp,
            product.final_temp,
            product.pull_down_hours,
        )
        latent = after = 0.0

    respiration = respiration_load(mass, product.respiration_watts) if profile.respiration else 0.0

    return ProductLoads(
        before_freezing=before,
        latent_heat=latent,
        after_freezing=after,
        respiration=respiration,
        mass_kg=mass,
    )
