"""Product preset database for ColdSize.

Thermal properties of common stored products (ASHRAE-style tabulated
values) bundled as JSON. A preset fills the thermal fields of a
ProductThermalProfile; mass, temperatures and hours stay with the caller.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_PRODUCTS_DB_PATH = _DATA_DIR / "products.json"

_THERMAL_FIELDS = ("cp_above", "cp_below", "freezing_point", "latent_heat", "respiration_watts")


@lru_cache(maxsize=1)
def _load_products_db() -> dict[str, Any]:
    if not _PRODUCTS_DB_PATH.exists():
        logger.warning("Product database not found at %s", _PRODUCTS_DB_PATH)
        return {}
    with open(_PRODUCTS_DB_PATH) as f:
        return json.load(f)


def list_products(category: str | None = None) -> list[str]:
    """Return product names, optionally filtered by category."""
    db = _load_products_db()
    if category is None:
        return list(db.keys())
    return [name for name, info in db.items() if info["category"].lower() == category.lower()]


def list_categories() -> list[str]:
    """Return the distinct product categories in database order."""
    seen: dict[str, None] = {}
    for info in _load_products_db().values():
        seen.setdefault(info["category"], None)
    return list(seen)


def get_product_info(name: str) -> dict[str, Any]:
    """Return the full product record.

    Raises:
        KeyError: If name is not in the database.
    """
    db = _load_products_db()
    for key, val in db.items():
        if key.lower() == name.lower():
            return val
    raise KeyError(f"Product '{name}' not found. Available: {list(db.keys())}")


def product_profile_fields(name: str) -> dict[str, Any]:
    """Thermal fields of a preset, keyed like ProductThermalProfile.

    Temperatures are in °C.
    """
    info = get_product_info(name)
    fields = {key: info[key] for key in _THERMAL_FIELDS}
    fields["name"] = next(k for k in _load_products_db() if k.lower() == name.lower())
    return fields
