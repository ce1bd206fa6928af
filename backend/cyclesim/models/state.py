from pydantic import BaseModel

from cyclesim.models.life_stage import Debt


class Snapshot(BaseModel):
    """Recorded outcome of one completed cycle. Monetary values are rounded."""
    month: int
    net_worth: float
    cash_on_hand: float
    savings: float
    investments: float
    debt_balance: float
    stress_level: int
    credit_score: int
    expenses: float
    income: float
    market_return: float
    event: str = "Quiet month"
    event_key: str = "none"
    missed_payment: bool = False

    model_config = {"frozen": True}


class SimulationState(BaseModel):
    """One household's financial position between cycles."""
    month: int = 1
    cash_on_hand: float = 1000.0
    savings: float = 2000.0
    investments: float = 2000.0
    debt_balance: float = 0.0
    debts: list[Debt] = []
    stress_level: int = 40
    credit_score: int = 680
    history: list[Snapshot] = []

    @property
    def last_event_key(self) -> str | None:
        return self.history[-1].event_key if self.history else None


class ForecastPoint(BaseModel):
    month: int
    net_worth: float
    debt_balance: float
    investments: float


class ForecastBand(BaseModel):
    """Net-worth percentiles across repeated projections for one month."""
    month: int
    percentiles: dict[str, float]
