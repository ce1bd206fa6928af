from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from cyclesim.api.deps import make_rng
from cyclesim.models.decision import Decision, ExpensePlan
from cyclesim.models.life_stage import LifeStage
from cyclesim.models.state import SimulationState
from cyclesim.services.catalog_service import get_catalog
from cyclesim.simulation.life_stage import (
    build_expense_plan,
    default_decision,
    generate_life_stage,
    start_state,
)

router = APIRouter(tags=["life-stages"])


class GenerateRequest(BaseModel):
    seed: Optional[int] = None


class NewLife(BaseModel):
    """A freshly drawn life stage with everything needed to run its first cycle."""
    life_stage: LifeStage
    expense_plan: ExpensePlan
    decision: Decision
    state: SimulationState


@router.post("/life-stages/generate", response_model=NewLife)
def generate_life(request: Optional[GenerateRequest] = None):
    """Draw a new life stage, its default expense plan, decision and start state."""
    request = request or GenerateRequest()
    catalog = get_catalog()
    life_stage = generate_life_stage(make_rng(request.seed), catalog)
    return NewLife(
        life_stage=life_stage,
        expense_plan=build_expense_plan(life_stage, catalog),
        decision=default_decision(),
        state=start_state(life_stage),
    )
