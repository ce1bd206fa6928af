from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from cyclesim.api.deps import make_rng
from cyclesim.models.decision import Decision, EngineConfig
from cyclesim.models.expenses import ExpenseBreakdown
from cyclesim.models.life_stage import LifeStage
from cyclesim.models.state import SimulationState
from cyclesim.services.catalog_service import get_catalog
from cyclesim.simulation.engine import advance

router = APIRouter(tags=["cycles"])


class AdvanceRequest(BaseModel):
    """Everything one cycle needs. The caller owns and resends the state."""
    life_stage: LifeStage
    decision: Decision
    expenses: ExpenseBreakdown
    state: SimulationState
    config: Optional[EngineConfig] = None
    seed: Optional[int] = None


@router.post("/cycles/advance", response_model=SimulationState)
def advance_cycle(request: AdvanceRequest):
    """Run one cycle and return the next state."""
    return advance(
        request.life_stage,
        request.decision,
        request.expenses,
        request.state,
        make_rng(request.seed, salt=request.state.month),
        get_catalog(),
        request.config or EngineConfig(),
    )
