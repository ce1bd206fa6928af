from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field


class PriceTier(str, Enum):
    """Which end of an item's price range the household pays."""
    low = "low"
    typical = "typical"
    high = "high"


class RepaymentStrategy(str, Enum):
    """How a cycle's debt payment is spread across debts."""
    avalanche = "avalanche"            # Whole payment to the highest-rate debt first
    minimums_first = "minimums_first"  # Cover every minimum, then avalanche the rest


class Decision(BaseModel):
    """User allocation and risk choices for one cycle."""
    market_mode: str = "neutral"
    risk_profile: str = "moderate"
    debt_payment: float = Field(default=0.0, ge=0)
    investment: float = Field(default=0.0, ge=0)
    emergency_cash: float = Field(default=0.0, ge=0)


class ExpensePlan(BaseModel):
    """Owned quantity and price tier per catalog item key."""
    quantities: dict[str, Annotated[int, Field(ge=0)]] = {}
    price_tiers: dict[str, str] = {}  # Unknown tiers price at the midpoint


class EngineConfig(BaseModel):
    """Tunables for the cycle engine and sampler."""
    history_cap: int = Field(default=72, ge=1)
    event_probability: float = Field(default=0.22, ge=0, le=1)
    market_noise: float = Field(default=0.012, ge=0)  # Full width of the uniform noise band
    missed_payment_ratio: float = Field(default=0.9, ge=0)
    repayment_strategy: RepaymentStrategy = RepaymentStrategy.avalanche
