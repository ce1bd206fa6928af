"""Cycle engine — advances a household's financial state by one month.

``advance`` is a pure state transition: it reads the life stage, decision,
resolved expenses and current state, and returns a new SimulationState with
the completed cycle appended to history. The caller's state is not mutated.
"""
from __future__ import annotations

import logging
import math
import random

from cyclesim.models.decision import Decision, EngineConfig
from cyclesim.models.expenses import ExpenseBreakdown
from cyclesim.models.life_stage import LifeStage
from cyclesim.models.state import SimulationState, Snapshot
from cyclesim.simulation.catalogs import DEFAULT_CATALOG, Catalog
from cyclesim.simulation.debt_ledger import apply_payment_cycle
from cyclesim.simulation.sampler import sample_cycle

logger = logging.getLogger(__name__)

STRESS_RANGE = (5, 95)
CREDIT_RANGE = (420, 850)
_STRESS_DEBT_SCALE = 25_000.0


def clamp(value, lo, hi):
    return min(max(value, lo), hi)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def compute_stress(cash_on_hand: float, expenses: float, debt_balance: float) -> int:
    """62 baseline, eased by months of cash buffer, raised by debt load."""
    safety_buffer = cash_on_hand / max(expenses, 1.0)
    debt_load = debt_balance / _STRESS_DEBT_SCALE
    raw = 62 - safety_buffer * 18 + debt_load * 28
    return int(clamp(round_half_up(raw), *STRESS_RANGE))


def credit_adjustment(missed: bool, utilization: float) -> int:
    if missed:
        return -20
    if utilization > 0.6:
        return -6
    if utilization < 0.3:
        return 6
    return 2


def advance(
    life_stage: LifeStage,
    decision: Decision,
    expenses: ExpenseBreakdown,
    state: SimulationState,
    rng: random.Random | None = None,
    catalog: Catalog = DEFAULT_CATALOG,
    config: EngineConfig | None = None,
) -> SimulationState:
    """Run one cycle and return the next state.

    Decision amounts are assumed non-negative; they are not re-checked here.
    """
    config = config or EngineConfig()
    rng = rng or random.Random()

    draw = sample_cycle(decision, state.last_event_key, rng, catalog, config)
    event = draw.event

    income = life_stage.income * (event.income_multiplier if event else 1.0)
    expense_total = expenses.total
    if event:
        expense_total = expense_total * event.expense_multiplier + event.fixed_cost_delta

    outflow = expense_total + decision.debt_payment + decision.emergency_cash + decision.investment
    cash_delta = income - outflow + (event.cash_delta if event else 0.0)
    next_cash = state.cash_on_hand + cash_delta

    ledger = apply_payment_cycle(
        state.debts,
        decision.debt_payment,
        strategy=config.repayment_strategy,
        missed_ratio=config.missed_payment_ratio,
    )
    next_savings = state.savings + decision.emergency_cash
    next_investments = (state.investments + decision.investment) * (1.0 + draw.market_return)
    total_debt = ledger.total_balance
    net_worth = next_cash + next_savings + next_investments - total_debt

    credit_limit = max(total_debt * 1.4, 1.0)
    utilization = total_debt / credit_limit
    credit_score = int(clamp(
        state.credit_score + credit_adjustment(ledger.missed, utilization), *CREDIT_RANGE
    ))
    stress_level = compute_stress(next_cash, expense_total, total_debt)

    snapshot = Snapshot(
        month=state.month,
        net_worth=round_half_up(net_worth),
        cash_on_hand=round_half_up(next_cash),
        savings=round_half_up(next_savings),
        investments=round_half_up(next_investments),
        debt_balance=round_half_up(total_debt),
        stress_level=stress_level,
        credit_score=credit_score,
        expenses=round_half_up(expense_total),
        income=round_half_up(income),
        market_return=draw.market_return,
        event=draw.event_label,
        event_key=draw.event_key,
        missed_payment=ledger.missed,
    )
    history = [*state.history, snapshot][-config.history_cap:]

    logger.debug(
        "Cycle %d: return=%.4f event=%s missed=%s net_worth=%.0f",
        state.month, draw.market_return, draw.event_key, ledger.missed, net_worth,
    )

    return SimulationState(
        month=state.month + 1,
        cash_on_hand=next_cash,
        savings=next_savings,
        investments=next_investments,
        debt_balance=total_debt,
        debts=ledger.debts,
        stress_level=stress_level,
        credit_score=credit_score,
        history=history,
    )
