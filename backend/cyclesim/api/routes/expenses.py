from fastapi import APIRouter
from pydantic import BaseModel

from cyclesim.models.decision import ExpensePlan
from cyclesim.models.expenses import ExpenseBreakdown
from cyclesim.models.life_stage import LifeStage
from cyclesim.services.catalog_service import get_catalog
from cyclesim.simulation.expenses import resolve_expenses

router = APIRouter(tags=["expenses"])


class ResolveRequest(BaseModel):
    life_stage: LifeStage
    expense_plan: ExpensePlan


@router.post("/expenses/resolve", response_model=ExpenseBreakdown)
def resolve_expenses_endpoint(request: ResolveRequest):
    """Resolve an expense plan into an itemized monthly breakdown."""
    return resolve_expenses(request.life_stage, request.expense_plan, get_catalog())
