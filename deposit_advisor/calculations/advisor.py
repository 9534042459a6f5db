"""Reallocation advice for active deposits.

For each deposit the advisor looks for a bank with a better rate that can
take the money without breaking diversification bounds, then compares the
interest earned there (from today to the deposit's close date, less the
transfer commission) against what the deposit earns over its own schedule.
A move is suggested when the difference reaches ``MIN_BENEFIT``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import date, datetime

import pandas as pd

from deposit_advisor.calculations.accrual import calc_earn, earned_at_maturity
from deposit_advisor.calculations.diversification import PortfolioAllocation
from deposit_advisor.models.deposit import Bank, Deposit
from deposit_advisor.utils.collections import index_by, order_by
from deposit_advisor.utils.date_utils import local_now, to_timestamp
from deposit_advisor.utils.logging import get_logger

LOGGER = get_logger(__name__)

MIN_BENEFIT = 10.0
NO_SUGGESTIONS_MESSAGE = 'No suggestions'

SUGGESTION_COLUMNS = [
    'deposit_name',
    'amount',
    'source_bank',
    'target_bank',
    'source_rate',
    'target_rate',
    'net_benefit',
    'commission_amount',
]


class DataConsistencyError(ValueError):
    """Input records contradict each other."""


class UnknownBankError(DataConsistencyError):
    def __init__(self, deposit: Deposit) -> None:
        super().__init__(f'Unknown bank {deposit.bank!r} in deposit {deposit.name!r}')
        self.deposit = deposit


@dataclass(frozen=True)
class Suggestion:
    """Recommendation to reopen a deposit at another bank."""

    deposit_name: str
    amount: float
    source_bank: str
    target_bank: str
    source_rate: float
    target_rate: float
    net_benefit: float
    commission_amount: float


def _by_rate_desc(b1: Bank, b2: Bank) -> int:
    return (b2.rate > b1.rate) - (b2.rate < b1.rate)


def _best_bank(
    deposit: Deposit,
    own_bank: Bank,
    ranked_banks: Sequence[Bank],
    allocation: PortfolioAllocation,
) -> Bank:
    if not allocation.fits(own_bank, -deposit.amount, lower=True):
        LOGGER.debug('Deposit %r pinned to %s by its minimum capacity.', deposit.name, own_bank.name)
        return own_bank
    for bank in ranked_banks:
        # Banks are ranked by rate, nothing past the own bank can beat it.
        if bank.name == own_bank.name:
            break
        if allocation.fits(bank, deposit.amount, upper=True):
            return bank
    return own_bank


def suggest_reallocations(
    active_deposits: Sequence[Deposit],
    banks: Sequence[Bank],
    as_of: pd.Timestamp | datetime | date | str | None = None,
    min_benefit: float = MIN_BENEFIT,
) -> list[Suggestion]:
    """Return move suggestions for deposits, in input order.

    Raises UnknownBankError when a deposit names a bank missing from ``banks``.
    An empty result means no deposit clears ``min_benefit``.
    """
    if not active_deposits:
        LOGGER.info(NO_SUGGESTIONS_MESSAGE)
        return []

    now = local_now() if as_of is None else to_timestamp(as_of)
    ranked_banks = order_by(banks, _by_rate_desc)
    banks_by_name = index_by(ranked_banks, lambda b: b.name)
    allocation = PortfolioAllocation.from_deposits(active_deposits)
    if allocation.total <= 0.0:
        for deposit in active_deposits:
            if deposit.bank not in banks_by_name:
                raise UnknownBankError(deposit)
        LOGGER.warning('Portfolio total is %.2f; no shares to compare.', allocation.total)
        LOGGER.info(NO_SUGGESTIONS_MESSAGE)
        return []

    out: list[Suggestion] = []
    for deposit in active_deposits:
        own_bank = banks_by_name.get(deposit.bank)
        if own_bank is None:
            raise UnknownBankError(deposit)

        best_bank = _best_bank(deposit, own_bank, ranked_banks, allocation)
        commission_rate = 0.0 if best_bank is own_bank else best_bank.transfer_commission
        commission_amount = deposit.amount * commission_rate

        possible_earn = calc_earn(
            deposit.amount,
            best_bank.rate,
            now,
            deposit.date_close,
            best_bank.pay_strategy,
        ) - commission_amount
        current_earn = earned_at_maturity(deposit)
        benefit = possible_earn - current_earn
        LOGGER.debug(
            'Deposit %r: best bank %s, benefit %.2f (commission %.2f).',
            deposit.name,
            best_bank.name,
            benefit,
            commission_amount,
        )
        if benefit >= min_benefit:
            out.append(
                Suggestion(
                    deposit_name=deposit.name,
                    amount=deposit.amount,
                    source_bank=deposit.bank,
                    target_bank=best_bank.name,
                    source_rate=deposit.rate,
                    target_rate=best_bank.rate,
                    net_benefit=benefit,
                    commission_amount=commission_amount,
                )
            )

    if not out:
        LOGGER.info(NO_SUGGESTIONS_MESSAGE)
    return out


def suggestions_frame(suggestions: Sequence[Suggestion]) -> pd.DataFrame:
    """Tabular view of suggestions with a stable column order."""
    return pd.DataFrame([asdict(s) for s in suggestions], columns=SUGGESTION_COLUMNS)
