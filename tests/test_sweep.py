"""Tests for parametric sweeps."""

from dataclasses import replace

import numpy as np
import pytest

from coldsize.analysis.sweep import (
    INSULATION_TARGETS,
    insulation_thickness_sweep,
    safety_factor_sweep,
    sweep_parameter,
)
from coldsize.core.config import build_inputs
from coldsize.core.sizing import calculate


@pytest.fixture
def freezer_inputs():
    return build_inputs("freezer-room")


class TestSweepParameter:
    def test_matches_single_runs(self, freezer_inputs):
        room, product, ancillary = freezer_inputs
        result = sweep_parameter(
            "freezer-room", room, product, ancillary, "room.ambient_temp", [35.0, 45.0]
        )
        single = calculate("freezer-room", replace(room, ambient_temp=35.0), product, ancillary)
        assert result["final_capacity_tr"][0] == pytest.approx(single.final_capacity_tr)
        assert result["total_load_kw"][1] > result["total_load_kw"][0]

    def test_output_shapes(self, freezer_inputs):
        result = sweep_parameter(
            "freezer-room", *freezer_inputs, "product.mass", np.linspace(1000, 5000, 5)
        )
        assert result.values.shape == (5,)
        for arr in result.outputs.values():
            assert arr.shape == (5,)
        assert result.n_failed == 0

    def test_invalid_record(self, freezer_inputs):
        with pytest.raises(ValueError, match="Invalid sweep target"):
            sweep_parameter("freezer-room", *freezer_inputs, "door.width", [1.0])

    def test_invalid_field(self, freezer_inputs):
        with pytest.raises(ValueError, match="no field"):
            sweep_parameter("freezer-room", *freezer_inputs, "room.colour", [1.0])

    def test_rejected_points_are_nan(self, freezer_inputs):
        result = sweep_parameter(
            "freezer-room", *freezer_inputs, "product.pull_down_hours", [0.0, 12.0, 24.0]
        )
        assert result.n_failed == 1
        assert np.isnan(result["final_capacity_tr"][0])
        assert np.all(np.isfinite(result["final_capacity_tr"][1:]))


class TestHelpers:
    def test_insulation_reduces_capacity(self, freezer_inputs):
        result = insulation_thickness_sweep(
            "freezer-room", *freezer_inputs, [50.0, 100.0, 150.0, 200.0]
        )
        assert result.targets == INSULATION_TARGETS
        assert np.all(np.diff(result["transmission_kj"]) < 0)
        assert np.all(np.diff(result["final_capacity_tr"]) < 0)

    def test_safety_factor_is_linear(self, freezer_inputs):
        percents = np.array([0.0, 10.0, 20.0, 30.0])
        result = safety_factor_sweep("freezer-room", *freezer_inputs, percents)
        base = result["refrigeration_capacity_tr"]
        np.testing.assert_allclose(result["capacity_with_safety_tr"], base * (1 + percents / 100))
        np.testing.assert_allclose(base, base[0])

    def test_as_dict(self, freezer_inputs):
        data = safety_factor_sweep("freezer-room", *freezer_inputs, [10.0]).as_dict()
        assert data["variant"] == "freezer-room"
        assert data["targets"] == ["ancillary.safety_factor_percent"]
