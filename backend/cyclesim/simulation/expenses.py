"""Expense resolver — turns a consumption plan into a periodic outflow.

Unit prices come from each catalog item's price range by tier, scaled by the
life stage's location multiplier. Fixed costs are taken as-is from the life
stage, which already applied the location multiplier when it was created.
"""
from __future__ import annotations

import logging

from cyclesim.models.decision import ExpensePlan, PriceTier
from cyclesim.models.expenses import ExpenseBreakdown, ExpenseLine
from cyclesim.models.life_stage import LifeStage
from cyclesim.simulation.catalogs import DEFAULT_CATALOG, Catalog, ExpenseItem

logger = logging.getLogger(__name__)


def resolve_item_price(item: ExpenseItem, tier: PriceTier | str, location_multiplier: float) -> float:
    """Unit price for a tier: low=min, high=max, anything else=midpoint."""
    lo, hi = item.price_range
    tier = getattr(tier, "value", tier)
    if tier == PriceTier.low.value:
        price = lo
    elif tier == PriceTier.high.value:
        price = hi
    else:
        if tier != PriceTier.typical.value:
            logger.warning("Unknown price tier %r for %s, using %r", tier, item.key, PriceTier.typical.value)
        price = (lo + hi) / 2.0
    return price * location_multiplier


def resolve_expenses(
    life_stage: LifeStage,
    plan: ExpensePlan,
    catalog: Catalog = DEFAULT_CATALOG,
) -> ExpenseBreakdown:
    """Resolve the plan against the catalog into an itemized breakdown.

    Zero-cost lines are left out of the itemized list. Plan keys that are not
    in the catalog are ignored.
    """
    location_multiplier = catalog.location(life_stage.location).multiplier

    unknown = set(plan.quantities) - {item.key for item in catalog.expense_items}
    if unknown:
        logger.warning("Ignoring expense plan keys not in catalog: %s", sorted(unknown))

    items: list[ExpenseLine] = []
    variable_total = 0.0
    for item in catalog.expense_items:
        qty = plan.quantities.get(item.key, 0)
        tier = plan.price_tiers.get(item.key, PriceTier.typical)
        price = resolve_item_price(item, tier, location_multiplier)
        cost = qty * price
        if cost > 0:
            items.append(ExpenseLine(
                category=item.category,
                key=item.key,
                label=item.label,
                qty=qty,
                unit=item.unit,
                price=price,
                cost=cost,
            ))
            variable_total += cost

    fixed_total = life_stage.fixed_costs.total
    return ExpenseBreakdown(
        items=items,
        variable_total=variable_total,
        fixed_total=fixed_total,
        total=fixed_total + variable_total,
    )
