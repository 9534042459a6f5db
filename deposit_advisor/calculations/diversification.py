"""Per-bank allocation snapshot and diversification bound checks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from deposit_advisor.models.deposit import Bank, Deposit
from deposit_advisor.utils.collections import group_by


def sum_amount(deposits: Iterable[Deposit]) -> float:
    return sum((d.amount for d in deposits), 0.0)


@dataclass(frozen=True)
class PortfolioAllocation:
    """Amounts currently held per bank and across the whole portfolio.

    Built fresh from a deposit list for each advisor run.
    """

    per_bank_totals: Mapping[str, float]
    total: float

    @classmethod
    def from_deposits(cls, deposits: Iterable[Deposit]) -> PortfolioAllocation:
        deposits = list(deposits)
        per_bank = {bank: sum_amount(group) for bank, group in group_by(deposits, lambda d: d.bank).items()}
        return cls(per_bank_totals=per_bank, total=sum_amount(deposits))

    def fits(self, bank: Bank, amount_delta: float, *, lower: bool = False, upper: bool = False) -> bool:
        return fits_diversification(bank, amount_delta, self.per_bank_totals, self.total, lower, upper)


def fits_diversification(
    bank: Bank,
    amount_delta: float,
    per_bank_totals: Mapping[str, float],
    portfolio_total: float,
    check_lower_bound: bool,
    check_upper_bound: bool,
) -> bool:
    """Return whether the bank's share stays within its capacity bounds after the change.

    Only the requested bounds are checked: withdrawing from a bank checks its
    floor, adding to a bank checks its ceiling. ``portfolio_total`` must be
    non-zero.
    """
    projected = per_bank_totals.get(bank.name, 0.0) + amount_delta
    share = projected / portfolio_total
    return (not check_lower_bound or bank.min_capacity <= share) and (
        not check_upper_bound or share <= bank.max_capacity
    )
