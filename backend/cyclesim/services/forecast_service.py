"""Forecast bands — repeated seeded projections summarised into percentiles."""
from __future__ import annotations

import random

from cyclesim.models.decision import Decision, EngineConfig
from cyclesim.models.expenses import ExpenseBreakdown
from cyclesim.models.life_stage import LifeStage
from cyclesim.models.state import ForecastBand, SimulationState
from cyclesim.simulation.catalogs import DEFAULT_CATALOG, Catalog
from cyclesim.simulation.projector import project

_PERCENTILES = [("p5", 0.05), ("p25", 0.25), ("p50", 0.50), ("p75", 0.75), ("p95", 0.95)]


def run_forecast_bands(
    life_stage: LifeStage,
    decision: Decision,
    expenses: ExpenseBreakdown,
    state: SimulationState,
    periods: int = 12,
    n_runs: int = 50,
    seed: int | None = 42,
    catalog: Catalog = DEFAULT_CATALOG,
    config: EngineConfig | None = None,
) -> list[ForecastBand]:
    """Project ``n_runs`` times and return net-worth percentiles per month.

    Run ``i`` uses ``random.Random(seed + i)`` so a fixed seed gives the same bands.
    """
    runs = []
    for i in range(n_runs):
        rng = random.Random(seed + i) if seed is not None else random.Random()
        runs.append(project(life_stage, decision, expenses, state, periods, rng, catalog, config))

    bands: list[ForecastBand] = []
    for m in range(periods):
        values = sorted(points[m].net_worth for points in runs)
        bands.append(ForecastBand(month=state.month + m, percentiles=_percentiles(values)))
    return bands


def _percentiles(values: list[float]) -> dict[str, float]:
    """Nearest-rank percentiles of an already sorted list; empty in, empty out."""
    last = len(values) - 1
    return {label: values[min(int(p * len(values)), last)] for label, p in _PERCENTILES} if values else {}
