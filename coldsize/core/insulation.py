"""Insulation database and panel U-factor model for ColdSize.

Loads insulation conductivities from the bundled JSON database and derives
the overall heat-transfer coefficient of a wall, ceiling or floor panel from
a 1-D series resistance network:

    inside air film -- insulation -- structure -- outside air film
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from coldsize.utils.constants import MM_TO_M, R_INSIDE_AIR, R_OUTSIDE_AIR, R_STRUCTURE

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_INSULATION_DB_PATH = _DATA_DIR / "insulation.json"

DEFAULT_MATERIAL = "PUF"

# Panel thicknesses offered by manufacturers [mm]
STANDARD_THICKNESSES_MM = (40, 60, 80, 100, 120, 150, 160)


@lru_cache(maxsize=1)
def _load_insulation_db() -> dict[str, Any]:
    if not _INSULATION_DB_PATH.exists():
        logger.warning("Insulation database not found at %s", _INSULATION_DB_PATH)
        return {}
    with open(_INSULATION_DB_PATH) as f:
        return json.load(f)


def list_materials() -> list[str]:
    """Return all insulation identifiers in the database."""
    return list(_load_insulation_db().keys())


def get_material_info(material_id: str) -> dict[str, Any]:
    """Return the full insulation record.

    Raises:
        KeyError: If material_id is not in the database.
    """
    db = _load_insulation_db()
    for key, val in db.items():
        if key.lower() == material_id.lower():
            return val
    raise KeyError(f"Insulation '{material_id}' not found. Available: {list(db.keys())}")


def thermal_conductivity(material_id: str) -> float:
    """Conductivity k [W/(m·K)] of an insulation material.

    Unknown materials fall back to PUF.
    """
    try:
        return get_material_info(material_id)["thermal_conductivity"]
    except KeyError:
        logger.warning("Unknown insulation '%s', using %s", material_id, DEFAULT_MATERIAL)
        return get_material_info(DEFAULT_MATERIAL)["thermal_conductivity"]


def thermal_resistance(thickness_mm: float, conductivity: float) -> float:
    """Total panel resistance R [m²·K/W] including air films and structure.

    R = R_inside + t/k + R_structure + R_outside
    """
    r_insulation = thickness_mm * MM_TO_M / conductivity
    return R_INSIDE_AIR + r_insulation + R_STRUCTURE + R_OUTSIDE_AIR


def u_factor(thickness_mm: float, material: str = DEFAULT_MATERIAL) -> float:
    """Overall heat-transfer coefficient U [W/(m²·K)] of an insulated panel.

    Args:
        thickness_mm: Insulation thickness [mm].
        material: Insulation identifier (PUF, EPS, XPS, PIR, Fiberglass).

    Returns:
        U = 1 / R_total.
    """
    return 1.0 / thermal_resistance(thickness_mm, thermal_conductivity(material))
