"""Tests for load aggregation and refrigeration capacity sizing."""

import math
from dataclasses import replace

import pytest

from coldsize.core.config import build_inputs
from coldsize.core.models import (
    AncillaryLoadProfile,
    ComponentLoad,
    LoadCategory,
    ProductThermalProfile,
    RoomGeometry,
)
from coldsize.core.sizing import (
    airflow_cfm,
    apply_safety_factor,
    calculate,
    calculate_blast_freezer,
    calculate_cold_room,
    calculate_freezer_room,
    capacity_tr,
    sensible_heat_ratio,
    weighted_sum,
)
from coldsize.core.variants import DoorFrequency, Variant, get_profile, parse_variant
from coldsize.utils.units import convert_length, convert_mass, convert_temperature
from coldsize.utils.validation import InvalidInputError


@pytest.fixture
def cold_room_inputs():
    return build_inputs("cold-room")


@pytest.fixture
def freezer_inputs():
    return build_inputs("freezer-room")


@pytest.fixture
def blast_inputs():
    return build_inputs("blast-freezer")


class TestIdentities:
    def test_capacity_tr(self):
        assert capacity_tr(3.517) == pytest.approx(1.0)

    def test_safety_factor(self):
        assert apply_safety_factor(10.0, 20.0) == pytest.approx(12.0)

    def test_shr(self):
        assert sensible_heat_ratio(3.0, 1.0) == pytest.approx(0.75)

    def test_shr_without_load(self):
        assert math.isnan(sensible_heat_ratio(0.0, 0.0))

    def test_airflow(self):
        assert airflow_cfm(1.0, 1.0) == pytest.approx(12000.0 / 5.4)

    def test_weighted_sum_skips_missing(self):
        assert weighted_sum({"a": 10.0}, {"a": 0.4, "b": 1.0}) == pytest.approx(4.0)


class TestVariants:
    def test_parse(self):
        assert parse_variant("freezer_room") is Variant.FREEZER_ROOM
        assert parse_variant("Blast Freezer") is Variant.BLAST_FREEZER

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown variant"):
            parse_variant("walk-in")

    def test_door_frequency_multipliers(self):
        assert DoorFrequency.LOW.multiplier == 1.0
        assert DoorFrequency.MEDIUM.multiplier == pytest.approx(1.05)
        assert DoorFrequency.HIGH.multiplier == pytest.approx(1.10)

    def test_profiles(self):
        assert not get_profile("cold-room").three_phase
        assert get_profile("freezer-room").phase_gate
        assert get_profile("blast-freezer").batch


class TestColdRoom:
    def test_scenario(self, cold_room_inputs):
        room, product, ancillary = cold_room_inputs
        result = calculate_cold_room(room, product, ancillary)
        assert result.variant is Variant.COLD_ROOM
        assert result.total_load_kw > 0
        assert result.capacity_with_safety_tr == pytest.approx(
            result.refrigeration_capacity_tr * 1.20
        )
        assert result.final_capacity_tr == pytest.approx(result.capacity_with_safety_tr)

    def test_total_is_sum_of_components(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        total = sum(c.energy_kj for c in result.components.values())
        assert result.total_load_kj == pytest.approx(total)
        assert result.total_load_kw == pytest.approx(total / 86400.0)
        assert result.total_load_kj == pytest.approx(
            result.transmission_kj + result.product_kj + result.ancillary_kj
        )

    def test_components(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        assert result.load("product") == pytest.approx(426400.0)
        assert result.load("respiration") == pytest.approx(17280.0)
        assert "latent_heat" not in result.components
        assert "tray_heater" not in result.components
        assert result.load("tray_heater") == 0.0

    def test_ancillary_power_is_day_fraction(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        equipment = result.components["equipment"]
        assert equipment.energy_kj == pytest.approx(0.25 * 3600 * 20)
        assert equipment.power_kw == pytest.approx(0.25 * 20 / 24)

    def test_component_tr(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        wall = result.components["wall"]
        assert wall.tr == pytest.approx(wall.energy_kj / (3600 * 3.517 * 24))

    def test_derived_totals(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        assert result.total_load_tr == pytest.approx(result.refrigeration_capacity_tr)
        assert result.total_load_btu_per_hr == pytest.approx(result.total_load_kw * 3412.0)

    def test_compressor_running_hours(self, cold_room_inputs):
        room, product, ancillary = cold_room_inputs
        full = calculate_cold_room(room, product, ancillary)
        short = calculate_cold_room(room, product, replace(ancillary, compressor_running_hours=20.0))
        assert short.total_load_kw == pytest.approx(full.total_load_kw * 24.0 / 20.0)

    def test_door_frequency_has_no_effect(self, cold_room_inputs):
        room, product, ancillary = cold_room_inputs
        low = calculate_cold_room(room, product, ancillary)
        high = calculate_cold_room(room, product, replace(ancillary, door_frequency=DoorFrequency.HIGH))
        assert high.final_capacity_tr == pytest.approx(low.final_capacity_tr)
        assert high.door_frequency_multiplier == 1.0

    def test_safety_override(self, cold_room_inputs):
        room, product, ancillary = cold_room_inputs
        result = calculate_cold_room(room, product, replace(ancillary, safety_factor_percent=10.0))
        assert result.capacity_with_safety_tr == pytest.approx(result.refrigeration_capacity_tr * 1.10)

    def test_shr_split(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        latent = result.load("respiration") + result.load("air_change")
        sensible = (
            result.transmission_kj
            + result.load("product")
            + result.load("equipment")
            + result.load("occupancy")
            + result.load("lighting")
            + result.load("door_heater")
        )
        assert result.latent_heat_kj == pytest.approx(latent)
        assert result.sensible_heat_kj == pytest.approx(sensible)
        assert 0.0 < result.sensible_heat_ratio < 1.0

    def test_airflow(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        assert result.airflow_cfm == pytest.approx(
            result.refrigeration_capacity_tr * 12000 * result.sensible_heat_ratio / (5 * 1.08)
        )

    def test_units_do_not_change_result(self, cold_room_inputs):
        room, product, ancillary = cold_room_inputs
        imperial_room = replace(
            room,
            length=convert_length(room.length, "m", "ft"),
            width=convert_length(room.width, "m", "ft"),
            height=convert_length(room.height, "m", "ft"),
            length_unit="ft",
            ambient_temp=convert_temperature(room.ambient_temp, "C", "F"),
            room_temp=convert_temperature(room.room_temp, "C", "F"),
            temp_unit="F",
        )
        imperial_product = replace(
            product,
            mass=convert_mass(product.mass, "kg", "lbs"),
            mass_unit="lbs",
            entering_temp=convert_temperature(product.entering_temp, "C", "F"),
            final_temp=convert_temperature(product.final_temp, "C", "F"),
            temp_unit="F",
        )
        metric_door = replace(ancillary, door_width=0.9, door_height=2.0, door_unit="m")

        metric = calculate_cold_room(room, product, ancillary)
        imperial = calculate_cold_room(imperial_room, imperial_product, metric_door)
        assert imperial.total_load_kj == pytest.approx(metric.total_load_kj, rel=1e-9)


class TestFreezerRoom:
    def test_three_phase_components(self, freezer_inputs):
        result = calculate_freezer_room(*freezer_inputs)
        for name in ("before_freezing", "latent_heat", "after_freezing", "tray_heater"):
            assert name in result.components
        assert "product" not in result.components

    def test_phase_gate(self, freezer_inputs):
        room, product, ancillary = freezer_inputs
        result = calculate_freezer_room(room, replace(product, entering_temp=-5.0), ancillary)
        assert result.load("before_freezing") == 0.0
        assert result.load("after_freezing") == pytest.approx(3000.0 * 2.14 * 13.0)

    def test_heaters_ignore_hours(self, freezer_inputs):
        room, product, ancillary = freezer_inputs
        a = calculate_freezer_room(room, product, ancillary)
        b = calculate_freezer_room(
            room, product, replace(ancillary, tray_heater=LoadCategory(2.0, 2, 3))
        )
        assert b.load("tray_heater") == pytest.approx(a.load("tray_heater"))

    def test_gated_door_heater(self, freezer_inputs):
        result = calculate_freezer_room(*freezer_inputs)
        assert result.door_heater_capacity_kw == pytest.approx(5.4 * 0.045)

    def test_no_door_frequency_adjustment(self, freezer_inputs):
        room, product, ancillary = freezer_inputs
        result = calculate_freezer_room(
            room, product, replace(ancillary, door_frequency=DoorFrequency.HIGH)
        )
        assert result.final_capacity_tr == pytest.approx(result.capacity_with_safety_tr)

    def test_latent_includes_product_latent_heat(self, freezer_inputs):
        result = calculate_freezer_room(*freezer_inputs)
        expected = result.load("respiration") + result.load("air_change") + result.load("latent_heat")
        assert result.latent_heat_kj == pytest.approx(expected)


class TestBlastFreezer:
    def test_scenario(self, blast_inputs):
        result = calculate_blast_freezer(*blast_inputs)
        assert result.load("before_freezing") == pytest.approx(-23034.0)
        assert result.load("latent_heat") == pytest.approx(466000.0)
        assert result.load("after_freezing") == pytest.approx(121124.0, rel=1e-6)

    def test_batch_normalisation(self, blast_inputs):
        result = calculate_blast_freezer(*blast_inputs)
        assert result.total_load_kw == pytest.approx(result.total_load_kj / (3600.0 * 8.0))

    def test_negative_term_is_summed(self, blast_inputs):
        result = calculate_blast_freezer(*blast_inputs)
        total = sum(c.energy_kj for c in result.components.values())
        assert result.total_load_kj == pytest.approx(total)

    def test_door_frequency_composition(self, blast_inputs):
        room, product, ancillary = blast_inputs
        low = calculate_blast_freezer(room, product, replace(ancillary, door_frequency=DoorFrequency.LOW))
        high = calculate_blast_freezer(
            room, product, replace(ancillary, door_frequency=DoorFrequency.HIGH)
        )
        assert high.final_capacity_tr == pytest.approx(low.final_capacity_tr * 1.10)
        assert high.capacity_with_safety_tr == pytest.approx(low.capacity_with_safety_tr)

    def test_door_frequency_after_safety(self, blast_inputs):
        room, product, ancillary = blast_inputs
        result = calculate_blast_freezer(
            room, product, replace(ancillary, door_frequency=DoorFrequency.MEDIUM)
        )
        assert result.final_capacity_tr == pytest.approx(
            result.refrigeration_capacity_tr * 1.20 * 1.05
        )

    def test_shr_weights(self, blast_inputs):
        result = calculate_blast_freezer(*blast_inputs)
        air = result.load("air_change")
        sensible = (
            result.transmission_kj
            + result.load("before_freezing")
            + result.load("after_freezing")
            + 0.4 * air
        )
        latent = result.load("latent_heat") + 0.6 * air + 0.6 * result.load("occupancy")
        assert result.sensible_heat_kj == pytest.approx(sensible)
        assert result.latent_heat_kj == pytest.approx(latent)
        assert result.sensible_heat_ratio == pytest.approx(sensible / (sensible + latent))

    def test_no_respiration(self, blast_inputs):
        result = calculate_blast_freezer(*blast_inputs)
        assert "respiration" not in result.components


class TestBoundaryValidation:
    def test_zero_pull_down_rejected(self, cold_room_inputs):
        room, product, ancillary = cold_room_inputs
        with pytest.raises(InvalidInputError) as exc:
            calculate_cold_room(room, replace(product, pull_down_hours=0.0), ancillary)
        assert any(m.parameter == "pull_down_hours" for m in exc.value.result.errors)

    def test_unguarded_arithmetic(self, cold_room_inputs):
        room, product, ancillary = cold_room_inputs
        with pytest.raises(ZeroDivisionError):
            calculate_cold_room(room, replace(product, pull_down_hours=0.0), ancillary, validate=False)

    def test_negative_dimension_rejected(self, blast_inputs):
        room, product, ancillary = blast_inputs
        with pytest.raises(InvalidInputError):
            calculate_blast_freezer(replace(room, length=-5.0), product, ancillary)

    def test_generic_entry_point(self, blast_inputs):
        a = calculate("blast-freezer", *blast_inputs)
        b = calculate_blast_freezer(*blast_inputs)
        assert a == b

    def test_result_is_immutable(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        with pytest.raises(AttributeError):
            result.total_load_kw = 0.0

    def test_components_are_read_only(self, cold_room_inputs):
        result = calculate_cold_room(*cold_room_inputs)
        wall = result.load("wall")
        with pytest.raises(TypeError):
            result.components["wall"] = ComponentLoad(0.0, 0.0, 0.0)
        assert result.load("wall") == pytest.approx(wall)

    def test_zero_load_gives_undefined_shr(self):
        room = RoomGeometry(5.0, 4.0, 3.0, wall_hours=0.0, ceiling_hours=0.0, floor_hours=0.0)
        product = ProductThermalProfile(mass=0.0, entering_temp=10.0, final_temp=2.0, cp_above=3.6)
        result = calculate_cold_room(room, product, AncillaryLoadProfile())
        assert result.final_capacity_tr == 0.0
        assert math.isnan(result.sensible_heat_ratio)
        assert math.isnan(result.airflow_cfm)

    def test_as_dict(self, blast_inputs):
        data = calculate_blast_freezer(*blast_inputs).as_dict()
        assert data["variant"] == "blast-freezer"
        assert data["door_frequency"] == "low"
        assert data["components"]["latent_heat"]["energy_kj"] == pytest.approx(466000.0)
