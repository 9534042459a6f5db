"""Interest accrual for term deposits."""

from __future__ import annotations

from datetime import date, datetime

import pandas as pd

from deposit_advisor.models.deposit import Deposit, PayStrategy
from deposit_advisor.utils.date_utils import add_months, to_timestamp, whole_days

DAYS_IN_YEAR = 365.25


def calc_earn(
    principal: float,
    annual_rate: float,
    start_date: pd.Timestamp | datetime | date | str,
    end_date: pd.Timestamp | datetime | date | str,
    pay_strategy: PayStrategy,
) -> float:
    """Total interest earned between two dates.

    The range is walked in calendar-month periods from ``start_date``; the
    period that would run past ``end_date`` is clipped to it and ends the
    walk. Each period earns ``amount * days * annual_rate / 365.25``. Under
    capitalization the period interest is added to the amount before the
    next period, otherwise the amount stays at ``principal``.

    A zero-length range produces one empty period and returns 0.0. A range
    ending before it starts is not accrued at all.
    """
    start = to_timestamp(start_date)
    end = to_timestamp(end_date)
    if end < start:
        return 0.0

    rate_per_day = float(annual_rate) / DAYS_IN_YEAR
    amount = float(principal)
    total = 0.0
    period_start = start
    while True:
        period_end = add_months(period_start, 1)
        last = period_end > end
        if last:
            period_end = end
        earn = amount * whole_days(period_start, period_end) * rate_per_day
        if pay_strategy == PayStrategy.CAPITALIZATION:
            amount += earn
        total += earn
        if last:
            return total
        period_start = period_end


def deposit_earn(deposit: Deposit, end_date: pd.Timestamp | datetime | date | str) -> float:
    """Interest a deposit earns on its own terms from its open date to ``end_date``."""
    return calc_earn(
        deposit.amount,
        deposit.rate,
        deposit.date_open,
        end_date,
        deposit.pay_strategy,
    )


def earned_to_date(deposit: Deposit, as_of: pd.Timestamp | datetime | date | str) -> float:
    return deposit_earn(deposit, as_of)


def earned_at_maturity(deposit: Deposit) -> float:
    return deposit_earn(deposit, deposit.date_close)
