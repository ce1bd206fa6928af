"""Catalog registry — built-in reference tables, optionally overridden from JSON.

Loaded once at startup from ``settings.CATALOG_PATH``. A missing or malformed
override file leaves the built-in catalog in place.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from cyclesim.config import settings
from cyclesim.simulation.catalogs import DEFAULT_CATALOG, Catalog, catalog_from_dict

logger = logging.getLogger(__name__)


class CatalogRegistry:
    """Singleton holding the active catalog."""

    _instance: "CatalogRegistry | None" = None

    def __init__(self) -> None:
        self.catalog: Catalog = DEFAULT_CATALOG
        self.source: str = "builtin"
        self._loaded = False

    @classmethod
    def get(cls) -> "CatalogRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset singleton — mainly for testing."""
        cls._instance = None

    def load(self, path: str | Path | None = None) -> None:
        raw = path if path is not None else settings.CATALOG_PATH
        self._loaded = True
        if not raw:
            logger.info("No catalog override configured — using built-in catalog")
            return

        catalog_path = Path(raw).resolve()
        if not catalog_path.is_file():
            logger.warning("Catalog file %s not found — using built-in catalog", catalog_path)
            return

        try:
            data = json.loads(catalog_path.read_text())
            self.catalog = catalog_from_dict(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning("Failed to load catalog from %s: %s", catalog_path, e)
            return

        self.source = str(catalog_path)
        logger.info("Loaded catalog v%s from %s", self.catalog.version, catalog_path)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get_status(self) -> dict[str, Any]:
        if not self._loaded:
            return {"status": "not_loaded"}
        return {
            "status": "loaded",
            "version": self.catalog.version,
            "source": self.source,
        }


def initialize_catalog(path: str | None = None) -> None:
    """Load the active catalog at startup."""
    registry = CatalogRegistry.get()
    registry.load(path)
    logger.info("Catalog initialized — status: %s", registry.get_status().get("status"))


def get_catalog() -> Catalog:
    return CatalogRegistry.get().catalog


def describe_catalog(catalog: Catalog | None = None) -> dict[str, Any]:
    """Keys and labels of every table, for UI pickers."""
    catalog = catalog or get_catalog()
    return {
        "version": catalog.version,
        "markets": {k: {"label": m.label, "base_return": m.base_return} for k, m in catalog.markets.items()},
        "risks": {k: {"label": r.label, "risk_multiplier": r.risk_multiplier} for k, r in catalog.risks.items()},
        "locations": {k: {"label": loc.label, "multiplier": loc.multiplier} for k, loc in catalog.locations.items()},
        "life_events": [{"key": e.key, "label": e.label} for e in catalog.life_events],
        "expense_items": {
            category: [
                {"key": i.key, "label": i.label, "price_range": list(i.price_range), "unit": i.unit}
                for i in catalog.expense_items if i.category == category
            ]
            for category in catalog.categories()
        },
    }
