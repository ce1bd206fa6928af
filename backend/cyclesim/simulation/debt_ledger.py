"""Debt ledger — one cycle of interest accrual and repayment.

Debts are worked highest annual rate first. Each accrues a month of interest,
then the cycle's payment is poured in according to the repayment strategy.
Balances never go below zero; a debt that reaches zero stays in the list.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from cyclesim.models.decision import RepaymentStrategy
from cyclesim.models.life_stage import Debt


@dataclass
class DebtPaymentResult:
    """Outcome of one repayment cycle."""
    debts: list[Debt]
    missed: bool
    interest: list[float] = field(default_factory=list)  # aligned with debts
    paid: list[float] = field(default_factory=list)      # aligned with debts

    @property
    def total_balance(self) -> float:
        return sum(d.balance for d in self.debts)

    @property
    def total_interest(self) -> float:
        return sum(self.interest)

    @property
    def total_paid(self) -> float:
        return sum(self.paid)


def monthly_interest(debt: Debt) -> float:
    return debt.balance * (debt.rate / 12.0)


def _allocate_avalanche(owed: list[float], payment: float) -> list[float]:
    """Pour the payment into each debt in turn, up to what it owes."""
    remaining = payment
    paid = []
    for amount in owed:
        p = min(remaining, amount)
        remaining -= p
        paid.append(p)
    return paid


def _allocate_minimums_first(owed: list[float], minimums: list[float], payment: float) -> list[float]:
    """Cover each minimum in rate order, then avalanche the surplus."""
    remaining = payment
    paid = []
    for minimum in minimums:
        p = min(remaining, minimum)
        remaining -= p
        paid.append(p)
    for i, amount in enumerate(owed):
        extra = min(remaining, amount - paid[i])
        remaining -= extra
        paid[i] += extra
    return paid


def apply_payment_cycle(
    debts: list[Debt],
    payment: float,
    strategy: RepaymentStrategy = RepaymentStrategy.avalanche,
    missed_ratio: float = 0.9,
) -> DebtPaymentResult:
    """Accrue interest and apply one cycle's payment across debts.

    With the avalanche strategy the highest-rate debt takes the whole payment
    (up to balance + interest) before any later debt is paid, so lower-rate
    debts can go unpaid for many cycles. The payment counts as missed when the
    total paid falls below ``missed_ratio`` of the summed minimums, each minimum
    capped at what the debt actually owes.

    Returned debts are in ascending rate order.
    """
    if not debts:
        return DebtPaymentResult(debts=[], missed=False)

    ordered = sorted(debts, key=lambda d: d.rate, reverse=True)
    interest = [monthly_interest(d) for d in ordered]
    owed = [d.balance + i for d, i in zip(ordered, interest)]
    minimums = [min(d.minimum_due, o) for d, o in zip(ordered, owed)]

    if strategy == RepaymentStrategy.minimums_first:
        paid = _allocate_minimums_first(owed, minimums, payment)
    else:
        paid = _allocate_avalanche(owed, payment)

    updated = [
        d.model_copy(update={"balance": max(o - p, 0.0)})
        for d, o, p in zip(ordered, owed, paid)
    ]
    missed = sum(paid) < sum(minimums) * missed_ratio

    # Back to ascending rate for display stability
    order = sorted(range(len(updated)), key=lambda i: updated[i].rate)
    return DebtPaymentResult(
        debts=[updated[i] for i in order],
        missed=missed,
        interest=[interest[i] for i in order],
        paid=[paid[i] for i in order],
    )
