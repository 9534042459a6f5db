"""Portfolio model and convenience behavior."""

from __future__ import annotations

from dataclasses import dataclass, field

from deposit_advisor.models.deposit import Bank, Deposit, DepositStatus


@dataclass
class Portfolio:
    """Container for deposit and bank records with active-slice helpers."""

    deposits: list[Deposit] = field(default_factory=list)
    banks: list[Bank] = field(default_factory=list)

    def active_deposits(self) -> list[Deposit]:
        """Return deposits that are still open, in input order."""
        return [d for d in self.deposits if d.status == DepositStatus.ACTIVE]
