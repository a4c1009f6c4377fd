"""Utility modules for ColdSize."""

from coldsize.utils.constants import KW_PER_TR, SECONDS_PER_DAY
from coldsize.utils.units import convert, get_unit_registry

__all__ = ["KW_PER_TR", "SECONDS_PER_DAY", "convert", "get_unit_registry"]
