from pydantic import BaseModel, Field


class Debt(BaseModel):
    type: str
    balance: float = Field(ge=0)
    rate: float = Field(ge=0)  # annual
    minimum_due: float = Field(ge=0)


class FixedCosts(BaseModel):
    """Location-adjusted monthly fixed costs, computed once per life stage."""
    housing: float = 0.0
    utilities: float = 0.0

    @property
    def total(self) -> float:
        return self.housing + self.utilities


class LifeStage(BaseModel):
    """Structural profile of a household. Regenerated, never edited in place."""
    id: str
    label: str
    age: int = Field(ge=0)
    stability: str = "medium"
    location: str = "mid"
    dependents: int = Field(default=0, ge=0)
    income: float = Field(ge=0)
    fixed_costs: FixedCosts = FixedCosts()
    debts: list[Debt] = []
    starting_cash: float = 0.0

    model_config = {"frozen": True}
