"""Cycle engine — catalogs, expenses, debt repayment, sampling, projection."""
from cyclesim.simulation.catalogs import Catalog, DEFAULT_CATALOG, list_market_climates, list_risk_profiles
from cyclesim.simulation.expenses import resolve_expenses, resolve_item_price
from cyclesim.simulation.debt_ledger import apply_payment_cycle, DebtPaymentResult
from cyclesim.simulation.sampler import sample_cycle, CycleDraw
from cyclesim.simulation.engine import advance
from cyclesim.simulation.projector import project
from cyclesim.simulation.life_stage import (
    build_expense_plan,
    default_decision,
    default_state,
    generate_life_stage,
    start_state,
)

__all__ = [
    "Catalog",
    "DEFAULT_CATALOG",
    "list_market_climates",
    "list_risk_profiles",
    "resolve_expenses",
    "resolve_item_price",
    "apply_payment_cycle",
    "DebtPaymentResult",
    "sample_cycle",
    "CycleDraw",
    "advance",
    "project",
    "build_expense_plan",
    "default_decision",
    "default_state",
    "generate_life_stage",
    "start_state",
]
