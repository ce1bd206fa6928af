"""Reference catalogs — market climates, risk profiles, life events, expense items.

Pure data. The engine receives a Catalog explicitly so alternate tables can be
swapped in without touching engine code. Lookups are lenient: unknown keys
resolve to the neutral entry instead of failing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MARKET = "neutral"
DEFAULT_RISK = "moderate"
DEFAULT_LOCATION = "mid"


@dataclass(frozen=True)
class MarketClimate:
    key: str
    label: str
    base_return: float  # monthly


@dataclass(frozen=True)
class RiskProfile:
    key: str
    label: str
    risk_multiplier: float


@dataclass(frozen=True)
class LocationCost:
    key: str
    label: str
    multiplier: float


@dataclass(frozen=True)
class LifeEventDef:
    """A life event and the impact it has on the cycle it fires in."""
    key: str
    label: str
    cash_delta: float = 0.0
    stress_delta: float = 0.0
    income_multiplier: float = 1.0
    expense_multiplier: float = 1.0
    fixed_cost_delta: float = 0.0
    market_shock: float = 0.0


@dataclass(frozen=True)
class ExpenseItem:
    key: str
    label: str
    category: str
    price_range: tuple[float, float]
    unit: str


@dataclass(frozen=True)
class LifeStageTemplate:
    label: str
    income_range: tuple[float, float]
    stability: str


@dataclass(frozen=True)
class DebtType:
    label: str
    rate: float


@dataclass(frozen=True)
class Catalog:
    """Bundle of read-only reference tables consumed by the engine."""
    markets: dict[str, MarketClimate]
    risks: dict[str, RiskProfile]
    locations: dict[str, LocationCost]
    life_events: tuple[LifeEventDef, ...]
    expense_items: tuple[ExpenseItem, ...]
    life_stage_templates: tuple[LifeStageTemplate, ...] = ()
    debt_types: tuple[DebtType, ...] = ()
    version: str = "builtin"

    def market(self, key: str) -> MarketClimate:
        """Return the market climate by key. Defaults to neutral if unknown."""
        if key not in self.markets:
            logger.warning("Unknown market climate %r, using %r", key, DEFAULT_MARKET)
        return self.markets.get(key, self.markets[DEFAULT_MARKET])

    def risk(self, key: str) -> RiskProfile:
        """Return the risk profile by key. Defaults to moderate if unknown."""
        if key not in self.risks:
            logger.warning("Unknown risk profile %r, using %r", key, DEFAULT_RISK)
        return self.risks.get(key, self.risks[DEFAULT_RISK])

    def location(self, key: str) -> LocationCost:
        """Return the location cost tier by key. Defaults to mid if unknown."""
        if key not in self.locations:
            logger.warning("Unknown location %r, using %r", key, DEFAULT_LOCATION)
        return self.locations.get(key, self.locations[DEFAULT_LOCATION])

    def expense_item(self, key: str) -> ExpenseItem | None:
        for item in self.expense_items:
            if item.key == key:
                return item
        return None

    def categories(self) -> list[str]:
        """Expense categories in catalog order."""
        seen: list[str] = []
        for item in self.expense_items:
            if item.category not in seen:
                seen.append(item.category)
        return seen


def _items(category: str, rows: list[tuple[str, str, float, float, str]]) -> list[ExpenseItem]:
    return [ExpenseItem(key, label, category, (lo, hi), unit) for key, label, lo, hi, unit in rows]


_EXPENSE_ITEMS: tuple[ExpenseItem, ...] = tuple(
    _items("food", [
        ("home_meals", "Home-cooked meals", 1.2, 3.2, "meal"),
        ("eating_out", "Eating out", 4.5, 12, "meal"),
        ("snacks", "Snacks / instant food", 0.8, 2.5, "item"),
    ])
    + _items("housing", [
        ("rent", "Rent", 220, 680, "month"),
        ("maintenance", "Maintenance", 20, 90, "month"),
        ("utilities", "Utilities (electricity/water/internet)", 45, 160, "month"),
    ])
    + _items("health", [
        ("gym", "Gym membership", 12, 45, "month"),
        ("doctor", "Doctor visits", 18, 60, "visit"),
        ("medicines", "Medicines", 8, 35, "set"),
    ])
    + _items("subscriptions", [
        ("streaming", "Streaming apps", 6, 18, "month"),
        ("productivity", "Productivity apps", 6, 20, "month"),
        ("cloud", "Cloud storage", 3, 12, "month"),
    ])
    + _items("transport", [
        ("fuel", "Fuel", 18, 120, "month"),
        ("public_transport", "Public transport", 18, 90, "month"),
        ("ride_hailing", "Ride-hailing", 6, 45, "ride"),
    ])
    + _items("lifestyle", [
        ("shopping", "Shopping", 20, 140, "month"),
        ("entertainment", "Entertainment", 12, 70, "month"),
        ("travel", "Travel", 0, 180, "month"),
    ])
    + _items("education", [
        ("courses", "Courses", 15, 160, "month"),
        ("books", "Books", 5, 40, "month"),
        ("exam_fees", "Exam fees", 0, 120, "month"),
    ])
)


DEFAULT_CATALOG = Catalog(
    markets={
        "bull": MarketClimate("bull", "Bull market", 0.012),
        "neutral": MarketClimate("neutral", "Stable market", 0.004),
        "bear": MarketClimate("bear", "Bear market", -0.008),
    },
    risks={
        "conservative": RiskProfile("conservative", "Conservative", 0.7),
        "moderate": RiskProfile("moderate", "Moderate", 1.0),
        "aggressive": RiskProfile("aggressive", "Aggressive", 1.4),
    },
    locations={
        "low": LocationCost("low", "Low-cost city", 0.85),
        "mid": LocationCost("mid", "Mid-cost city", 1.0),
        "high": LocationCost("high", "High-cost city", 1.25),
    },
    life_events=(
        LifeEventDef("bonus", "Unexpected bonus", cash_delta=900, stress_delta=-4),
        LifeEventDef("medical", "Medical emergency", cash_delta=-1400, stress_delta=10),
        LifeEventDef("salary_delay", "Salary delay", income_multiplier=0.7, stress_delta=8),
        LifeEventDef("market_crash", "Market dip", market_shock=-0.03, stress_delta=6),
        LifeEventDef("rent_hike", "Rent hike", fixed_cost_delta=120, stress_delta=4),
        LifeEventDef("family_need", "Family obligation", cash_delta=-500, stress_delta=6),
    ),
    expense_items=_EXPENSE_ITEMS,
    life_stage_templates=(
        LifeStageTemplate("School student", (200, 600), "low"),
        LifeStageTemplate("College student", (600, 1800), "low"),
        LifeStageTemplate("First job professional", (2800, 5200), "medium"),
        LifeStageTemplate("Freelancer", (2000, 5200), "low"),
        LifeStageTemplate("Family with dependents", (5200, 9000), "medium"),
        LifeStageTemplate("Entrepreneur", (3500, 8200), "medium"),
        LifeStageTemplate("Retired individual", (1800, 4200), "high"),
    ),
    debt_types=(
        DebtType("Education loan", 0.08),
        DebtType("Credit card", 0.24),
        DebtType("Personal loan", 0.14),
        DebtType("Vehicle loan", 0.11),
    ),
)


def list_market_climates(catalog: Catalog = DEFAULT_CATALOG) -> list[str]:
    """Return all market climate keys."""
    return list(catalog.markets.keys())


def list_risk_profiles(catalog: Catalog = DEFAULT_CATALOG) -> list[str]:
    """Return all risk profile keys."""
    return list(catalog.risks.keys())


def catalog_from_dict(data: dict) -> Catalog:
    """Build a Catalog from a JSON-style dict; missing tables keep the defaults.

    Raises ValueError if a table is malformed or lacks its neutral default entry.
    """
    base = DEFAULT_CATALOG
    try:
        markets = {
            key: MarketClimate(key, row.get("label", key), float(row["base_return"]))
            for key, row in data.get("markets", {}).items()
        } or base.markets
        risks = {
            key: RiskProfile(key, row.get("label", key), float(row["risk_multiplier"]))
            for key, row in data.get("risks", {}).items()
        } or base.risks
        locations = {
            key: LocationCost(key, row.get("label", key), float(row["multiplier"]))
            for key, row in data.get("locations", {}).items()
        } or base.locations
        events = tuple(
            LifeEventDef(
                key=row["key"],
                label=row.get("label", row["key"]),
                cash_delta=float(row.get("cash_delta", 0.0)),
                stress_delta=float(row.get("stress_delta", 0.0)),
                income_multiplier=float(row.get("income_multiplier", 1.0)),
                expense_multiplier=float(row.get("expense_multiplier", 1.0)),
                fixed_cost_delta=float(row.get("fixed_cost_delta", 0.0)),
                market_shock=float(row.get("market_shock", 0.0)),
            )
            for row in data.get("life_events", [])
        ) or base.life_events
        items = tuple(
            ExpenseItem(
                key=row["key"],
                label=row.get("label", row["key"]),
                category=row.get("category", "other"),
                price_range=(float(row["price_range"][0]), float(row["price_range"][1])),
                unit=row.get("unit", "month"),
            )
            for row in data.get("expense_items", [])
        ) or base.expense_items
    except (AttributeError, KeyError, TypeError, IndexError, ValueError) as e:
        raise ValueError(f"Malformed catalog: {e}") from e

    if DEFAULT_MARKET not in markets or DEFAULT_RISK not in risks or DEFAULT_LOCATION not in locations:
        raise ValueError(
            f"Catalog must define {DEFAULT_MARKET!r} market, {DEFAULT_RISK!r} risk "
            f"and {DEFAULT_LOCATION!r} location entries"
        )

    return Catalog(
        markets=markets,
        risks=risks,
        locations=locations,
        life_events=events,
        expense_items=items,
        life_stage_templates=base.life_stage_templates,
        debt_types=base.debt_types,
        version=str(data.get("version", "custom")),
    )
