"""Input data validation for deposit and bank tables."""

from __future__ import annotations

import pandas as pd

from deposit_advisor.models.deposit import DepositStatus, PayStrategy

DEPOSIT_REQUIRED_COLUMNS = [
    'bank',
    'name',
    'date_open',
    'date_close',
    'amount',
    'rate',
    'status',
    'pay_strategy',
]

BANK_REQUIRED_COLUMNS = [
    'name',
    'rate',
    'min_capacity',
    'max_capacity',
    'transfer_commission',
    'pay_strategy',
]

STATUS_VALUES = {s.value for s in DepositStatus}
PAY_STRATEGY_VALUES = {p.value for p in PayStrategy}


def _missing_columns(df: pd.DataFrame, required: list[str]) -> list[str]:
    cols = set(df.columns)
    return [col for col in required if col not in cols]


def _check_labels(df: pd.DataFrame, col: str, allowed: set[str]) -> None:
    unknown = sorted(set(df[col].astype(str)) - allowed)
    if unknown:
        raise ValueError(f'Unknown {col} values: {unknown}')


def validate_deposits(df: pd.DataFrame) -> list[str]:
    """Validate normalized deposits data and return non-fatal warnings."""
    missing = _missing_columns(df, DEPOSIT_REQUIRED_COLUMNS)
    if missing:
        raise ValueError(f'Missing required deposit columns: {missing}')

    if df[DEPOSIT_REQUIRED_COLUMNS].isna().any().any():
        raise ValueError('Deposits contain nulls in required columns.')

    for col in ['date_open', 'date_close']:
        if not pd.api.types.is_datetime64_any_dtype(df[col]):
            raise ValueError(f'Column {col} must be datetime64 dtype.')

    for col in ['amount', 'rate']:
        if not pd.api.types.is_numeric_dtype(df[col]):
            raise ValueError(f'Column {col} must be numeric dtype.')

    _check_labels(df, 'status', STATUS_VALUES)
    _check_labels(df, 'pay_strategy', PAY_STRATEGY_VALUES)

    inverted = int((df['date_close'] < df['date_open']).sum())
    if inverted:
        raise ValueError(f'{inverted} deposits have date_close before date_open.')

    non_positive = int((df['amount'] <= 0).sum())
    if non_positive:
        raise ValueError(f'{non_positive} deposits have non-positive amount.')

    warnings: list[str] = []

    high_rate = int((df['rate'].abs() > 1.0).sum())
    if high_rate:
        warnings.append(f'{high_rate} deposits have rate magnitude > 100%.')

    return warnings


def validate_banks(df: pd.DataFrame) -> list[str]:
    """Validate normalized banks data and return non-fatal warnings."""
    missing = _missing_columns(df, BANK_REQUIRED_COLUMNS)
    if missing:
        raise ValueError(f'Missing required bank columns: {missing}')

    if df[BANK_REQUIRED_COLUMNS].isna().any().any():
        raise ValueError('Banks contain nulls in required columns.')

    for col in ['rate', 'min_capacity', 'max_capacity', 'transfer_commission']:
        if not pd.api.types.is_numeric_dtype(df[col]):
            raise ValueError(f'Column {col} must be numeric dtype.')

    _check_labels(df, 'pay_strategy', PAY_STRATEGY_VALUES)

    warnings: list[str] = []

    # The advisor keeps the last bank per name, so duplicates are reported but not dropped.
    dupes = int(df['name'].duplicated().sum())
    if dupes:
        warnings.append(f'{dupes} duplicate bank names found; the last row per name is used.')

    inverted = int((df['min_capacity'] > df['max_capacity']).sum())
    if inverted:
        warnings.append(f'{inverted} banks have min_capacity > max_capacity.')

    out_of_range = int((~df['min_capacity'].between(0.0, 1.0) | ~df['max_capacity'].between(0.0, 1.0)).sum())
    if out_of_range:
        warnings.append(f'{out_of_range} banks have capacity bounds outside [0, 1].')

    return warnings
