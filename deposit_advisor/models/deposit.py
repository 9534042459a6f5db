"""Deposit and bank domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pandas as pd


class PayStrategy(str, Enum):
    """How interest is paid out over the life of a deposit."""

    CAPITALIZATION = 'Capitalization'
    ONCE = 'Once'


class DepositStatus(str, Enum):
    ACTIVE = 'Active'
    CLOSED = 'Closed'


@dataclass(frozen=True)
class Deposit:
    """A single term-deposit placement held at a bank."""

    bank: str
    name: str
    date_open: pd.Timestamp
    date_close: pd.Timestamp
    amount: float
    rate: float
    status: DepositStatus
    pay_strategy: PayStrategy


@dataclass(frozen=True)
class Bank:
    """A counterparty offering a deposit product.

    Capacity bounds are shares of the whole portfolio in [0, 1].
    """

    name: str
    rate: float
    min_capacity: float
    max_capacity: float
    transfer_commission: float
    pay_strategy: PayStrategy
