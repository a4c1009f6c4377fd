"""Tests for the insulation database and panel U-factor model."""

import logging

import pytest

from coldsize.core.insulation import (
    STANDARD_THICKNESSES_MM,
    get_material_info,
    list_materials,
    thermal_conductivity,
    thermal_resistance,
    u_factor,
)

# Inside film + structure + outside film
R_FILMS = 0.13 + 0.15 + 0.04


class TestInsulationDatabase:
    def test_list_materials(self):
        mats = list_materials()
        assert set(mats) >= {"PUF", "EPS", "XPS", "PIR", "Fiberglass"}

    @pytest.mark.parametrize(
        "material, k",
        [("PUF", 0.022), ("EPS", 0.036), ("XPS", 0.029), ("PIR", 0.022), ("Fiberglass", 0.040)],
    )
    def test_conductivity_table(self, material, k):
        assert thermal_conductivity(material) == pytest.approx(k)

    def test_case_insensitive_lookup(self):
        assert get_material_info("puf")["name"] == "Polyurethane foam"

    def test_unknown_material_info(self):
        with pytest.raises(KeyError, match="not found"):
            get_material_info("cork")

    def test_unknown_material_falls_back_to_puf(self, caplog):
        with caplog.at_level(logging.WARNING, logger="coldsize.core.insulation"):
            k = thermal_conductivity("cork")
        assert k == pytest.approx(0.022)
        assert "cork" in caplog.text


class TestUFactor:
    def test_resistance_network(self):
        assert thermal_resistance(100.0, 0.022) == pytest.approx(R_FILMS + 0.1 / 0.022)

    def test_puf_100mm(self):
        assert u_factor(100.0, "PUF") == pytest.approx(1.0 / (R_FILMS + 0.1 / 0.022))

    def test_zero_thickness_is_films_only(self):
        assert u_factor(0.0) == pytest.approx(1.0 / R_FILMS)

    def test_decreases_with_thickness(self):
        values = [u_factor(t, "EPS") for t in STANDARD_THICKNESSES_MM]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_increases_with_conductivity(self):
        ordered = ["PUF", "XPS", "EPS", "Fiberglass"]
        values = [u_factor(100.0, m) for m in ordered]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_unknown_material_matches_puf(self):
        assert u_factor(150.0, "Straw") == pytest.approx(u_factor(150.0, "PUF"))
