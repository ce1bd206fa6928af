from pydantic import BaseModel


class ExpenseLine(BaseModel):
    """Resolved cost of one catalog item for a single cycle."""
    category: str
    key: str
    label: str
    qty: int
    unit: str
    price: float
    cost: float


class ExpenseBreakdown(BaseModel):
    items: list[ExpenseLine] = []
    variable_total: float = 0.0
    fixed_total: float = 0.0
    total: float = 0.0
