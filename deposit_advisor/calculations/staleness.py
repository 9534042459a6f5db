"""Checks for outdated input data and deposits past their close date."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path

import pandas as pd

from deposit_advisor.calculations.timeline import days_until
from deposit_advisor.models.deposit import Deposit
from deposit_advisor.utils.date_utils import to_timestamp

UP_TO_DATE_DAYS = 14


def data_age(path: str | Path, as_of: pd.Timestamp | datetime | date | str) -> pd.Timedelta:
    """Time elapsed since the file at ``path`` was last modified."""
    modified = pd.Timestamp.fromtimestamp(Path(path).stat().st_mtime)
    return to_timestamp(as_of) - modified


def age_days(age: pd.Timedelta) -> int:
    """Whole days of an age, truncated toward zero."""
    return int(age / pd.Timedelta(days=1))


def is_data_outdated(age: pd.Timedelta) -> bool:
    return age > pd.Timedelta(days=UP_TO_DATE_DAYS)


def expired_deposits(
    deposits: Sequence[Deposit],
    as_of: pd.Timestamp | datetime | date | str,
) -> list[Deposit]:
    """Deposits whose close date is at least a whole day behind ``as_of``."""
    return [d for d in deposits if days_until(d.date_close, as_of) < 0]
