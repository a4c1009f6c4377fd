"""Tests for product heat removal."""

import pytest

from coldsize.core.models import ProductThermalProfile
from coldsize.core.product import (
    effective_mass,
    product_loads,
    respiration_load,
    single_phase_load,
    three_phase_loads,
)
from coldsize.core.variants import BLAST_FREEZER, COLD_ROOM, FREEZER_ROOM


def _blast_product(**kwargs) -> ProductThermalProfile:
    base = dict(
        mass=2000.0,
        entering_temp=-5.0,
        final_temp=-30.0,
        cp_above=3.49,
        cp_below=2.14,
        freezing_point=-1.7,
        latent_heat=233.0,
        pull_down_hours=8.0,
        batch_hours=8.0,
    )
    base.update(kwargs)
    return ProductThermalProfile(**base)


class TestSinglePhase:
    def test_formula(self):
        assert single_phase_load(4000.0, 4.1, 30.0, 4.0, 24.0) == pytest.approx(426400.0)

    def test_pull_down_scaling(self):
        full = single_phase_load(4000.0, 4.1, 30.0, 4.0, 24.0)
        assert single_phase_load(4000.0, 4.1, 30.0, 4.0, 12.0) == pytest.approx(2.0 * full)

    def test_negative_when_warming(self):
        assert single_phase_load(1000.0, 4.0, 2.0, 4.0, 24.0) < 0.0

    def test_zero_pull_down_is_unguarded(self):
        with pytest.raises(ZeroDivisionError):
            single_phase_load(1000.0, 4.0, 30.0, 4.0, 0.0)


class TestThreePhase:
    def test_all_phases_when_entering_above_freezing(self):
        before, latent, after = three_phase_loads(
            1000.0, 3.5, 2.0, 250.0, 10.0, -18.0, -2.0, 1.0
        )
        assert before == pytest.approx(1000.0 * 3.5 * 12.0)
        assert latent == pytest.approx(250000.0)
        assert after == pytest.approx(1000.0 * 2.0 * 16.0)

    def test_gate_zeroes_before_freezing(self):
        before, latent, after = three_phase_loads(
            1000.0, 3.5, 2.0, 250.0, -5.0, -18.0, -2.0, 1.0
        )
        assert before == 0.0
        assert latent == pytest.approx(250000.0)
        # Below-freezing term runs from the entering temperature
        assert after == pytest.approx(1000.0 * 2.0 * 13.0)

    def test_gate_at_freezing_point(self):
        before, _, after = three_phase_loads(
            1000.0, 3.5, 2.0, 250.0, -2.0, -18.0, -2.0, 1.0
        )
        assert before == 0.0
        assert after == pytest.approx(1000.0 * 2.0 * 16.0)

    def test_hours_ratio(self):
        one = three_phase_loads(1000.0, 3.5, 2.0, 250.0, 10.0, -18.0, -2.0, 1.0)
        three = three_phase_loads(1000.0, 3.5, 2.0, 250.0, 10.0, -18.0, -2.0, 3.0)
        for a, b in zip(one, three):
            assert b == pytest.approx(3.0 * a)

    def test_ungated_keeps_signed_before_freezing(self):
        before, latent, after = three_phase_loads(
            2000.0, 3.49, 2.14, 233.0, -5.0, -30.0, -1.7, 1.0, phase_gate=False
        )
        assert before == pytest.approx(-23034.0)
        assert latent == pytest.approx(466000.0)
        assert after == pytest.approx(121124.0, rel=1e-6)


class TestRespiration:
    def test_formula(self):
        # 4 t at 50 W/t over a day
        assert respiration_load(4000.0, 50.0) == pytest.approx(4000.0 * 50.0 * 3.6 * 24.0 / 1000.0)

    def test_zero_rate(self):
        assert respiration_load(4000.0, 0.0) == 0.0


class TestProductLoads:
    def test_cold_room_single_phase(self):
        product = ProductThermalProfile(
            mass=4000.0, entering_temp=30.0, final_temp=4.0, cp_above=4.1, respiration_watts=50.0
        )
        loads = product_loads(product, COLD_ROOM)
        assert loads.before_freezing == pytest.approx(426400.0)
        assert loads.latent_heat == 0.0
        assert loads.after_freezing == 0.0
        assert loads.respiration == pytest.approx(17280.0)
        assert loads.total == pytest.approx(426400.0)

    def test_daily_loading_scales_mass(self):
        product = ProductThermalProfile(
            mass=4000.0,
            entering_temp=30.0,
            final_temp=4.0,
            cp_above=4.1,
            daily_loading_percent=50.0,
        )
        assert effective_mass(product, COLD_ROOM) == pytest.approx(2000.0)
        assert product_loads(product, COLD_ROOM).before_freezing == pytest.approx(213200.0)

    def test_blast_batch_ignores_daily_loading(self):
        product = _blast_product(daily_loading_percent=50.0)
        assert effective_mass(product, BLAST_FREEZER) == pytest.approx(2000.0)

    def test_blast_scenario(self):
        loads = product_loads(_blast_product(), BLAST_FREEZER)
        assert loads.before_freezing == pytest.approx(-23034.0)
        assert loads.latent_heat == pytest.approx(466000.0)
        assert loads.after_freezing == pytest.approx(121124.0, rel=1e-6)
        assert loads.respiration == 0.0

    def test_blast_hours_ratio_uses_batch(self):
        loads = product_loads(_blast_product(batch_hours=4.0), BLAST_FREEZER)
        assert loads.latent_heat == pytest.approx(233000.0)

    def test_freezer_room_applies_gate(self):
        loads = product_loads(_blast_product(pull_down_hours=24.0), FREEZER_ROOM)
        assert loads.before_freezing == 0.0
        assert loads.after_freezing == pytest.approx(2000.0 * 2.14 * 25.0)

    def test_freezer_room_phases_positive(self):
        product = _blast_product(entering_temp=5.0, final_temp=-18.0, pull_down_hours=24.0)
        loads = product_loads(product, FREEZER_ROOM)
        assert loads.before_freezing > 0.0
        assert loads.latent_heat > 0.0
        assert loads.after_freezing > 0.0
