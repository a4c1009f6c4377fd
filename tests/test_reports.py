"""Tests for the report generation module."""

import pytest

from coldsize.core.config import ProjectState
from coldsize.reports.summary import (
    generate_html_report,
    generate_text_report,
    save_html_report,
    save_text_report,
)


def _make_state(variant: str = "blast-freezer") -> ProjectState:
    """Create a calculated ProjectState for testing."""
    state = ProjectState.from_defaults(variant, name="Test Store")
    state.run()
    return state


class TestTextReport:
    def test_contains_sections(self):
        report = generate_text_report(_make_state())
        assert "Test Store" in report
        assert "Blast Freezer" in report
        assert "ROOM" in report
        assert "PRODUCT" in report
        assert "HEAT LOADS" in report
        assert "CAPACITY" in report

    def test_lists_three_phase_loads(self):
        report = generate_text_report(_make_state())
        assert "Product (latent heat)" in report
        assert "Final Capacity" in report

    def test_cold_room_single_product_line(self):
        report = generate_text_report(_make_state("cold-room"))
        assert "Respiration" in report
        assert "latent heat" not in report

    def test_not_calculated(self):
        state = ProjectState.from_defaults("cold-room")
        report = generate_text_report(state)
        assert "(not calculated)" in report
        assert "HEAT LOADS" not in report

    def test_save(self, tmp_path):
        path = tmp_path / "report.txt"
        save_text_report(_make_state(), str(path))
        assert "HEAT LOADS" in path.read_text()


class TestHtmlReport:
    def test_valid_html(self):
        html = generate_html_report(_make_state())
        assert html.startswith("<!DOCTYPE html>")
        assert "</html>" in html
        assert "Heat Loads" in html
        assert "Capacity" in html

    def test_escapes_name(self):
        state = _make_state()
        state.meta.name = "<Store & Co>"
        html = generate_html_report(state)
        assert "&lt;Store &amp; Co&gt;" in html
        assert "<Store & Co>" not in html

    def test_save(self, tmp_path):
        path = tmp_path / "report.html"
        save_html_report(_make_state("freezer-room"), str(path))
        assert "Freezer Room" in path.read_text()
