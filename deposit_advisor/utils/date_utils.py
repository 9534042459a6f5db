"""Date helpers shared across calculations and dashboard layers."""

from __future__ import annotations

from datetime import date, datetime

import pandas as pd


def to_timestamp(value: pd.Timestamp | datetime | date | str) -> pd.Timestamp:
    """Convert an input value to a timezone-naive pandas Timestamp."""
    ts = pd.Timestamp(value)
    if ts.tz is not None:
        ts = ts.tz_convert(None)
    return ts


def add_months(value: pd.Timestamp, months: int = 1) -> pd.Timestamp:
    """Shift by calendar months, clamping the day to the target month's last day."""
    return to_timestamp(value) + pd.DateOffset(months=months)


def whole_days(start: pd.Timestamp, end: pd.Timestamp) -> int:
    """Whole days between two moments, truncated toward zero."""
    delta = to_timestamp(end) - to_timestamp(start)
    return int(delta / pd.Timedelta(days=1))


def local_now() -> pd.Timestamp:
    """Current local wall-clock time as a naive Timestamp."""
    return pd.Timestamp.now()
