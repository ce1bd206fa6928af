"""Projector — forecasts by repeatedly applying the cycle engine.

The decision and expenses are held fixed across the horizon. Only the
returned points survive; the caller's state is never touched.
"""
from __future__ import annotations

import random

from cyclesim.models.decision import Decision, EngineConfig
from cyclesim.models.expenses import ExpenseBreakdown
from cyclesim.models.life_stage import LifeStage
from cyclesim.models.state import ForecastPoint, SimulationState
from cyclesim.simulation.catalogs import DEFAULT_CATALOG, Catalog
from cyclesim.simulation.engine import advance


def project(
    life_stage: LifeStage,
    decision: Decision,
    expenses: ExpenseBreakdown,
    state: SimulationState,
    periods: int = 12,
    rng: random.Random | None = None,
    catalog: Catalog = DEFAULT_CATALOG,
    config: EngineConfig | None = None,
) -> list[ForecastPoint]:
    """Return exactly ``periods`` points, months counting up from ``state.month``.

    Reproducible only when ``rng`` is seeded identically between calls.
    """
    rng = rng or random.Random()
    current = state
    points: list[ForecastPoint] = []
    for i in range(periods):
        current = advance(life_stage, decision, expenses, current, rng, catalog, config)
        latest = current.history[-1]
        points.append(ForecastPoint(
            month=state.month + i,
            net_worth=latest.net_worth,
            debt_balance=latest.debt_balance,
            investments=latest.investments,
        ))
    return points
