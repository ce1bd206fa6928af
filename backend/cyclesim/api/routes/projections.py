from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from cyclesim.api.deps import make_rng
from cyclesim.models.decision import Decision, EngineConfig
from cyclesim.models.expenses import ExpenseBreakdown
from cyclesim.models.life_stage import LifeStage
from cyclesim.models.state import ForecastBand, ForecastPoint, SimulationState
from cyclesim.services.catalog_service import get_catalog
from cyclesim.services.forecast_service import run_forecast_bands
from cyclesim.simulation.projector import project

router = APIRouter(tags=["projections"])


class ProjectionRequest(BaseModel):
    life_stage: LifeStage
    decision: Decision
    expenses: ExpenseBreakdown
    state: SimulationState
    periods: int = Field(default=12, ge=0, le=600)
    config: Optional[EngineConfig] = None
    seed: Optional[int] = None


class BandsRequest(ProjectionRequest):
    n_runs: int = Field(default=50, ge=1, le=1000)


@router.post("/projections", response_model=list[ForecastPoint])
def run_projection(request: ProjectionRequest):
    """Forecast net worth, debt and investments without touching the caller's state."""
    return project(
        request.life_stage,
        request.decision,
        request.expenses,
        request.state,
        request.periods,
        make_rng(request.seed),
        get_catalog(),
        request.config or EngineConfig(),
    )


@router.post("/forecasts/bands", response_model=list[ForecastBand])
def run_bands(request: BandsRequest):
    """Net-worth percentile bands across repeated seeded projections."""
    return run_forecast_bands(
        request.life_stage,
        request.decision,
        request.expenses,
        request.state,
        periods=request.periods,
        n_runs=request.n_runs,
        seed=request.seed if request.seed is not None else 42,
        catalog=get_catalog(),
        config=request.config or EngineConfig(),
    )
