"""Tests for the cycle engine — one-month state transition."""
import random

import pytest

from cyclesim.models.decision import Decision, EngineConfig
from cyclesim.models.expenses import ExpenseBreakdown
from cyclesim.models.life_stage import Debt, FixedCosts, LifeStage
from cyclesim.models.state import SimulationState
from cyclesim.simulation.catalogs import DEFAULT_CATALOG, Catalog, LifeEventDef
from cyclesim.simulation.engine import advance, compute_stress, credit_adjustment, round_half_up


def _make_life_stage(**overrides) -> LifeStage:
    defaults = dict(
        id="LS-1",
        label="First job professional",
        age=29,
        income=5200,
        fixed_costs=FixedCosts(housing=1900, utilities=200),
    )
    defaults.update(overrides)
    return LifeStage(**defaults)


def _make_expenses(total: float = 2100.0) -> ExpenseBreakdown:
    return ExpenseBreakdown(variable_total=0.0, fixed_total=total, total=total)


def _make_state(**overrides) -> SimulationState:
    defaults = dict(
        month=1,
        cash_on_hand=1000.0,
        savings=2000.0,
        investments=2500.0,
        debts=[Debt(type="Personal loan", balance=12_000.0, rate=0.12, minimum_due=480.0)],
        debt_balance=12_000.0,
    )
    defaults.update(overrides)
    return SimulationState(**defaults)


def _make_decision(**overrides) -> Decision:
    defaults = dict(
        market_mode="neutral",
        risk_profile="moderate",
        debt_payment=350,
        investment=500,
        emergency_cash=200,
    )
    defaults.update(overrides)
    return Decision(**defaults)


def _single_event_catalog(event: LifeEventDef) -> Catalog:
    return Catalog(
        markets=DEFAULT_CATALOG.markets,
        risks=DEFAULT_CATALOG.risks,
        locations=DEFAULT_CATALOG.locations,
        life_events=(event,),
        expense_items=DEFAULT_CATALOG.expense_items,
    )


# --- Reference scenario ---


def test_reference_cycle(quiet_rng):
    nxt = advance(_make_life_stage(), _make_decision(), _make_expenses(), _make_state(), quiet_rng)

    assert nxt.month == 2
    assert nxt.cash_on_hand == pytest.approx(1000 + 5200 - (2100 + 350 + 200 + 500))
    assert nxt.savings == pytest.approx(2200)
    assert nxt.investments == pytest.approx(3000 * 1.004)
    assert nxt.debts[0].balance == pytest.approx(11_770)
    assert nxt.debt_balance == pytest.approx(11_770)
    assert nxt.stress_level == 49


def test_reference_cycle_snapshot(quiet_rng):
    nxt = advance(_make_life_stage(), _make_decision(), _make_expenses(), _make_state(), quiet_rng)
    snap = nxt.history[-1]
    assert snap.month == 1
    assert snap.income == 5200
    assert snap.expenses == 2100
    assert snap.debt_balance == 11_770
    assert snap.net_worth == round(3050 + 2200 + 3012 - 11_770)
    assert snap.market_return == pytest.approx(0.004)
    assert snap.event == "Quiet month"
    assert snap.event_key == "none"


def test_payment_under_ninety_percent_of_minimum_is_penalized(quiet_rng):
    # 350 against a 480 minimum is below the 90% threshold
    nxt = advance(_make_life_stage(), _make_decision(), _make_expenses(), _make_state(), quiet_rng)
    assert nxt.history[-1].missed_payment is True
    assert nxt.credit_score == 680 - 20


def test_full_minimum_payment_avoids_penalty(quiet_rng):
    nxt = advance(
        _make_life_stage(), _make_decision(debt_payment=480), _make_expenses(), _make_state(), quiet_rng,
    )
    assert nxt.history[-1].missed_payment is False
    # Any outstanding debt sits at 1/1.4 utilization
    assert nxt.credit_score == 680 - 6


def test_debt_free_credit_rises(quiet_rng):
    nxt = advance(
        _make_life_stage(), _make_decision(debt_payment=0), _make_expenses(),
        _make_state(debts=[], debt_balance=0.0), quiet_rng,
    )
    assert nxt.credit_score == 686


def test_zero_payment_missed_and_clamped_at_floor(quiet_rng):
    state = _make_state(credit_score=430)
    nxt = advance(_make_life_stage(), _make_decision(debt_payment=0), _make_expenses(), state, quiet_rng)
    assert nxt.history[-1].missed_payment is True
    assert nxt.credit_score == 420


def test_credit_clamped_at_ceiling(quiet_rng):
    state = _make_state(credit_score=848, debts=[], debt_balance=0.0)
    nxt = advance(_make_life_stage(), _make_decision(), _make_expenses(), state, quiet_rng)
    assert nxt.credit_score == 850


def test_caller_state_not_mutated(quiet_rng):
    state = _make_state()
    before = state.model_dump()
    advance(_make_life_stage(), _make_decision(), _make_expenses(), state, quiet_rng)
    assert state.model_dump() == before


def test_life_stage_not_mutated(quiet_rng):
    ls = _make_life_stage()
    before = ls.model_dump()
    advance(ls, _make_decision(), _make_expenses(), _make_state(), quiet_rng)
    assert ls.model_dump() == before


# --- Life events ---


def test_cash_event_applied(scripted_rng):
    catalog = _single_event_catalog(LifeEventDef("medical", "Medical emergency", cash_delta=-1400, stress_delta=10))
    nxt = advance(
        _make_life_stage(), _make_decision(), _make_expenses(), _make_state(),
        scripted_rng([0.1, 0.0, 0.5]), catalog,
    )
    assert nxt.cash_on_hand == pytest.approx(3050 - 1400)
    assert nxt.history[-1].event_key == "medical"
    assert nxt.history[-1].event == "Medical emergency"


def test_income_event_applied(scripted_rng):
    catalog = _single_event_catalog(LifeEventDef("salary_delay", "Salary delay", income_multiplier=0.7))
    nxt = advance(
        _make_life_stage(), _make_decision(), _make_expenses(), _make_state(),
        scripted_rng([0.1, 0.0, 0.5]), catalog,
    )
    assert nxt.history[-1].income == round(5200 * 0.7)


def test_fixed_cost_event_raises_expenses(scripted_rng):
    catalog = _single_event_catalog(LifeEventDef("rent_hike", "Rent hike", fixed_cost_delta=120))
    nxt = advance(
        _make_life_stage(), _make_decision(), _make_expenses(), _make_state(),
        scripted_rng([0.1, 0.0, 0.5]), catalog,
    )
    assert nxt.history[-1].expenses == 2220
    assert nxt.cash_on_hand == pytest.approx(3050 - 120)


def test_market_shock_hits_investments(scripted_rng):
    catalog = _single_event_catalog(LifeEventDef("market_crash", "Market dip", market_shock=-0.03))
    nxt = advance(
        _make_life_stage(), _make_decision(), _make_expenses(), _make_state(),
        scripted_rng([0.1, 0.0, 0.5]), catalog,
    )
    assert nxt.investments == pytest.approx(3000 * (1 + 0.004 - 0.03))


def test_previous_event_not_repeated(scripted_rng):
    catalog = _single_event_catalog(LifeEventDef("bonus", "Unexpected bonus", cash_delta=900))
    rng = scripted_rng([0.1, 0.0, 0.5])
    first = advance(_make_life_stage(), _make_decision(), _make_expenses(), _make_state(), rng, catalog)
    second = advance(_make_life_stage(), _make_decision(), _make_expenses(), first, rng, catalog)
    assert first.history[-1].event_key == "bonus"
    assert second.history[-1].event_key == "none"


def test_event_rate_near_configured_probability():
    rng = random.Random(2024)
    state = _make_state(debts=[], debt_balance=0.0)
    fired = 0
    n = 3000
    for _ in range(n):
        state = advance(_make_life_stage(), _make_decision(), _make_expenses(), state, rng)
        fired += state.history[-1].event_key != "none"
    assert 0.17 < fired / n < 0.25


# --- History ---


def test_history_capped_at_most_recent(quiet_rng):
    state = _make_state()
    for _ in range(80):
        state = advance(_make_life_stage(), _make_decision(), _make_expenses(), state, quiet_rng)
    assert state.month == 81
    assert len(state.history) == 72
    assert [s.month for s in state.history] == list(range(9, 81))


def test_custom_history_cap(quiet_rng):
    config = EngineConfig(history_cap=3)
    state = _make_state()
    for _ in range(5):
        state = advance(_make_life_stage(), _make_decision(), _make_expenses(), state, quiet_rng, config=config)
    assert [s.month for s in state.history] == [3, 4, 5]


# --- Helpers ---


def test_stress_clamped():
    assert compute_stress(1_000_000, 100, 0) == 5
    assert compute_stress(-50_000, 100, 500_000) == 95


def test_stress_uses_expense_floor_of_one():
    assert compute_stress(0, 0, 0) == 62


def test_credit_adjustment_ladder():
    assert credit_adjustment(True, 0.1) == -20
    assert credit_adjustment(False, 0.7) == -6
    assert credit_adjustment(False, 0.1) == 6
    assert credit_adjustment(False, 0.45) == 2


def test_stress_rounds_halves_up():
    # Raw stress 30.5 and 12.5
    assert compute_stress(1750, 1000, 0) == 31
    assert compute_stress(2750, 1000, 0) == 13


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.49) == 2


def test_snapshot_amounts_round_halves_up(quiet_rng):
    state = _make_state(cash_on_hand=1000.5, savings=2000.5, debts=[], debt_balance=0.0)
    nxt = advance(
        _make_life_stage(income=5200.5), _make_decision(), _make_expenses(2100.5), state, quiet_rng,
    )
    snap = nxt.history[-1]
    assert snap.income == 5201
    assert snap.expenses == 2101
    assert snap.savings == 2201
    assert snap.cash_on_hand == 3051
