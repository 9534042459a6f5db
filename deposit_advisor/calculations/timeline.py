"""Per-deposit timeline values and portfolio summary figures."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

import numpy as np
import pandas as pd

from deposit_advisor.calculations.accrual import earned_at_maturity, earned_to_date
from deposit_advisor.models.deposit import Deposit
from deposit_advisor.utils.date_utils import to_timestamp, whole_days

AVG_DAYS_IN_MONTH = 30.5

TIMELINE_COLUMNS = [
    'bank',
    'name',
    'amount',
    'rate',
    'date_open',
    'date_close',
    'duration_days',
    'opened_days_ago',
    'days_to_close',
    'earned_to_date',
    'earned_at_maturity',
    'is_expired',
]


def days_until(moment: pd.Timestamp | datetime | date | str, as_of: pd.Timestamp | datetime | date | str) -> int:
    """Whole days from ``as_of`` to ``moment``; negative once ``moment`` has passed."""
    return whole_days(as_of, moment)


def deposit_timeline_frame(
    deposits: Sequence[Deposit],
    as_of: pd.Timestamp | datetime | date | str,
) -> pd.DataFrame:
    """One row per deposit, latest closing first."""
    t = to_timestamp(as_of)
    rows = []
    for dep in deposits:
        close_days = days_until(dep.date_close, t)
        rows.append(
            {
                'bank': dep.bank,
                'name': dep.name,
                'amount': float(dep.amount),
                'rate': float(dep.rate),
                'date_open': dep.date_open,
                'date_close': dep.date_close,
                'duration_days': whole_days(dep.date_open, dep.date_close),
                'opened_days_ago': whole_days(dep.date_open, t),
                'days_to_close': close_days,
                'earned_to_date': earned_to_date(dep, t),
                'earned_at_maturity': earned_at_maturity(dep),
                'is_expired': close_days < 0,
            }
        )
    out = pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
    if out.empty:
        return out
    return out.sort_values('date_close', ascending=False, kind='stable').reset_index(drop=True)


def portfolio_summary(
    deposits: Sequence[Deposit],
    as_of: pd.Timestamp | datetime | date | str,
) -> dict[str, float]:
    """Total amount, amount-weighted average rate and expected monthly earn.

    Monthly earn spreads each deposit's maturity interest evenly over its
    duration; deposits opened and closed on the same day are left out.
    """
    frame = deposit_timeline_frame(deposits, as_of)
    if frame.empty:
        return {'total_amount': 0.0, 'weighted_rate': 0.0, 'monthly_earn': 0.0}

    amounts = frame['amount'].to_numpy(dtype=float)
    rates = frame['rate'].to_numpy(dtype=float)
    total_amount = float(amounts.sum())
    weighted_rate = float(np.dot(amounts, rates) / total_amount) if total_amount > 0.0 else 0.0

    durations = frame['duration_days'].to_numpy(dtype=float)
    earn_max = frame['earned_at_maturity'].to_numpy(dtype=float)
    has_duration = durations > 0
    earn_per_day = float(np.sum(earn_max[has_duration] / durations[has_duration]))

    return {
        'total_amount': total_amount,
        'weighted_rate': weighted_rate,
        'monthly_earn': earn_per_day * AVG_DAYS_IN_MONTH,
    }
