"""Life-stage generation and starting defaults.

A life stage is drawn once from the catalog's templates and then left alone
until the user asks for a new one. The helpers here also derive the default
expense plan, decision and starting state for a freshly drawn life.
"""
from __future__ import annotations

import random

from cyclesim.models.decision import Decision, ExpensePlan, PriceTier
from cyclesim.models.life_stage import Debt, FixedCosts, LifeStage
from cyclesim.models.state import SimulationState
from cyclesim.simulation.catalogs import DEFAULT_CATALOG, Catalog
from cyclesim.simulation.engine import round_half_up

_HOUSING_SHARE = 0.28
_BASE_UTILITIES = 120.0
_MIN_DUE_SHARE = 0.04
_MIN_DUE_FLOOR = 20


def _make_debt(rng: random.Random, max_balance: float, catalog: Catalog) -> Debt:
    debt_type = rng.choice(catalog.debt_types)
    balance = round_half_up((rng.random() * 0.6 + 0.2) * max_balance)
    return Debt(
        type=debt_type.label,
        balance=balance,
        rate=debt_type.rate,
        minimum_due=max(_MIN_DUE_FLOOR, round_half_up(balance * _MIN_DUE_SHARE)),
    )


def generate_life_stage(rng: random.Random | None = None, catalog: Catalog = DEFAULT_CATALOG) -> LifeStage:
    """Draw a random household profile from the catalog's templates."""
    rng = rng or random.Random()
    template = rng.choice(catalog.life_stage_templates)
    location = catalog.location(rng.choice(list(catalog.locations)))
    age = round_half_up(16 + rng.random() * 40)

    if "Family" in template.label:
        dependents = 2 + int(rng.random() * 2)
    else:
        dependents = 1 if rng.random() < 0.2 else 0

    lo, hi = template.income_range
    income = round_half_up((lo + rng.random() * (hi - lo)) * location.multiplier)

    roll = rng.random()
    if roll < 0.6:
        debt_count = 1
    else:
        debt_count = 2 if rng.random() < 0.8 else 0
    debts = [_make_debt(rng, income * 6, catalog) for _ in range(debt_count)] if catalog.debt_types else []

    return LifeStage(
        id=f"ls-{rng.getrandbits(32):08x}",
        label=template.label,
        age=age,
        stability=template.stability,
        location=location.key,
        dependents=dependents,
        income=income,
        fixed_costs=FixedCosts(
            housing=round_half_up(location.multiplier * income * _HOUSING_SHARE),
            utilities=round_half_up(location.multiplier * _BASE_UTILITIES),
        ),
        debts=debts,
        starting_cash=round_half_up(max(0.0, income * rng.random() * 0.6)),
    )


def build_expense_plan(life_stage: LifeStage, catalog: Catalog = DEFAULT_CATALOG) -> ExpensePlan:
    """Default consumption for a life stage, every item at the typical tier."""
    if "student" in life_stage.label.lower():
        multiplier = 0.8
    elif "family" in life_stage.label.lower():
        multiplier = 1.2
    else:
        multiplier = 1.0

    quantities: dict[str, int] = {}
    for item in catalog.expense_items:
        if item.key == "home_meals":
            base_qty = 24
        elif item.key == "eating_out":
            base_qty = 6
        elif item.unit == "month":
            base_qty = 1
        else:
            base_qty = 2
        quantities[item.key] = round_half_up(base_qty * multiplier)

    return ExpensePlan(
        quantities=quantities,
        price_tiers={item.key: PriceTier.typical.value for item in catalog.expense_items},
    )


def default_decision() -> Decision:
    return Decision()


def default_state() -> SimulationState:
    return SimulationState()


def start_state(life_stage: LifeStage) -> SimulationState:
    """Default state seeded with the life stage's starting cash and debts."""
    debts = sorted(life_stage.debts, key=lambda d: d.rate)
    return SimulationState(
        cash_on_hand=life_stage.starting_cash,
        debts=debts,
        debt_balance=sum(d.balance for d in debts),
    )
