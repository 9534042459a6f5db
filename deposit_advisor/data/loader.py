"""Workbook loader and schema normalization."""

from __future__ import annotations

import pandas as pd

from deposit_advisor.data.validator import validate_banks, validate_deposits
from deposit_advisor.models.deposit import Bank, Deposit, DepositStatus, PayStrategy
from deposit_advisor.models.portfolio import Portfolio
from deposit_advisor.utils.logging import get_logger

LOGGER = get_logger(__name__)

DEPOSITS_SHEET = 'Deposits'
BANKS_SHEET = 'Banks'

DEPOSIT_COLUMN_MAP = {
    'bank': 'bank',
    'name': 'name',
    'date_open': 'date_open',
    'date_close': 'date_close',
    'amount': 'amount',
    'percent': 'rate',
    'status': 'status',
    'pay_strategy': 'pay_strategy',
}

BANK_COLUMN_MAP = {
    'name': 'name',
    'percent': 'rate',
    'min_capacity': 'min_capacity',
    'max_capacity': 'max_capacity',
    'transfer_comission': 'transfer_commission',
    'pay_strategy': 'pay_strategy',
}


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out.columns = [str(c).strip().lower() for c in out.columns]
    return out


def _strip_labels(df: pd.DataFrame, cols: list[str]) -> None:
    for col in cols:
        if col in df.columns:
            df[col] = df[col].where(df[col].isna(), df[col].astype(str).str.strip())


def normalize_deposits(raw: pd.DataFrame) -> pd.DataFrame:
    deposits = _normalize_columns(raw).rename(columns=DEPOSIT_COLUMN_MAP)
    _strip_labels(deposits, ['bank', 'name', 'status', 'pay_strategy'])
    for col in ['date_open', 'date_close']:
        if col in deposits.columns:
            deposits[col] = pd.to_datetime(deposits[col], format='ISO8601')
    for col in ['amount', 'rate']:
        if col in deposits.columns:
            deposits[col] = pd.to_numeric(deposits[col])
    return deposits


def normalize_banks(raw: pd.DataFrame) -> pd.DataFrame:
    banks = _normalize_columns(raw).rename(columns=BANK_COLUMN_MAP)
    _strip_labels(banks, ['name', 'pay_strategy'])
    for col in ['rate', 'min_capacity', 'max_capacity', 'transfer_commission']:
        if col in banks.columns:
            banks[col] = pd.to_numeric(banks[col])
    return banks


def deposits_from_frame(df: pd.DataFrame) -> list[Deposit]:
    return [
        Deposit(
            bank=str(row['bank']),
            name=str(row['name']),
            date_open=pd.Timestamp(row['date_open']),
            date_close=pd.Timestamp(row['date_close']),
            amount=float(row['amount']),
            rate=float(row['rate']),
            status=DepositStatus(row['status']),
            pay_strategy=PayStrategy(row['pay_strategy']),
        )
        for row in df.to_dict(orient='records')
    ]


def banks_from_frame(df: pd.DataFrame) -> list[Bank]:
    return [
        Bank(
            name=str(row['name']),
            rate=float(row['rate']),
            min_capacity=float(row['min_capacity']),
            max_capacity=float(row['max_capacity']),
            transfer_commission=float(row['transfer_commission']),
            pay_strategy=PayStrategy(row['pay_strategy']),
        )
        for row in df.to_dict(orient='records')
    ]


def load_input_workbook(path: str) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Load, normalize, and validate deposit and bank sheets from workbook."""
    deposits = normalize_deposits(pd.read_excel(path, sheet_name=DEPOSITS_SHEET))
    banks = normalize_banks(pd.read_excel(path, sheet_name=BANKS_SHEET))

    deposit_warnings = validate_deposits(deposits)
    bank_warnings = validate_banks(banks)

    for warning in deposit_warnings + bank_warnings:
        LOGGER.warning(warning)

    return deposits, banks


def load_portfolio(path: str) -> Portfolio:
    """Load a workbook into typed deposit and bank records."""
    deposits, banks = load_input_workbook(path)
    portfolio = Portfolio(deposits=deposits_from_frame(deposits), banks=banks_from_frame(banks))
    LOGGER.info(
        'Loaded %s deposits (%s active) and %s banks from %s.',
        len(portfolio.deposits),
        len(portfolio.active_deposits()),
        len(portfolio.banks),
        path,
    )
    return portfolio
