#!/usr/bin/env python3
"""Write a CSV comparing projections across market climates and risk profiles.

Usage:
    python scripts/forecast_report.py                       # random life stage, seed 7
    python scripts/forecast_report.py --seed 11 --months 36
    python scripts/forecast_report.py --runs 100 --out grid.csv

Each (climate, risk) pair is projected ``--runs`` times from the same start
state; the report holds mean and p5/p50/p95 net worth per month.
Output lands in ``reports/`` at the project root.
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

import numpy as np
import pandas as pd

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
BACKEND_DIR = Path(__file__).resolve().parent.parent
PROJECT_DIR = BACKEND_DIR.parent
REPORTS_DIR = PROJECT_DIR / "reports"

sys.path.insert(0, str(BACKEND_DIR))

from cyclesim.models.decision import Decision  # noqa: E402
from cyclesim.simulation.catalogs import (  # noqa: E402
    DEFAULT_CATALOG,
    list_market_climates,
    list_risk_profiles,
)
from cyclesim.simulation.expenses import resolve_expenses  # noqa: E402
from cyclesim.simulation.life_stage import (  # noqa: E402
    build_expense_plan,
    generate_life_stage,
    start_state,
)
from cyclesim.simulation.projector import project  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def _default_decision(income: float, market: str, risk: str) -> Decision:
    """Split 20% of income across debt, investment and emergency cash."""
    budget = income * 0.20
    return Decision(
        market_mode=market,
        risk_profile=risk,
        debt_payment=round(budget * 0.4),
        investment=round(budget * 0.4),
        emergency_cash=round(budget * 0.2),
    )


def build_grid(seed: int, months: int, runs: int) -> pd.DataFrame:
    life_stage = generate_life_stage(random.Random(seed), DEFAULT_CATALOG)
    logger.info(
        "Life stage: %s, income %.0f, location %s, %d debts",
        life_stage.label, life_stage.income, life_stage.location, len(life_stage.debts),
    )
    expenses = resolve_expenses(life_stage, build_expense_plan(life_stage))
    state = start_state(life_stage)

    rows = []
    for market in list_market_climates():
        for risk in list_risk_profiles():
            decision = _default_decision(life_stage.income, market, risk)
            paths = np.array([
                [p.net_worth for p in project(
                    life_stage, decision, expenses, state, months, random.Random(seed * 1000 + r),
                )]
                for r in range(runs)
            ])
            for m in range(months):
                col = paths[:, m]
                rows.append({
                    "market": market,
                    "risk": risk,
                    "month": state.month + m,
                    "mean": float(col.mean()),
                    "p5": float(np.percentile(col, 5)),
                    "p50": float(np.percentile(col, 50)),
                    "p95": float(np.percentile(col, 95)),
                })
            logger.info("  %-8s %-12s final p50 net worth %.0f", market, risk, np.percentile(paths[:, -1], 50))
    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--months", type=int, default=24)
    parser.add_argument("--runs", type=int, default=50)
    parser.add_argument("--out", default="forecast_grid.csv")
    args = parser.parse_args()

    if args.months <= 0 or args.runs <= 0:
        parser.error("--months and --runs must be positive")

    df = build_grid(args.seed, args.months, args.runs)
    REPORTS_DIR.mkdir(exist_ok=True)
    out_path = REPORTS_DIR / args.out
    df.to_csv(out_path, index=False)
    logger.info("Wrote %d rows to %s", len(df), out_path)


if __name__ == "__main__":
    main()
