import pandas as pd
import pytest

from deposit_advisor.calculations.accrual import calc_earn
from deposit_advisor.calculations.advisor import (
    MIN_BENEFIT,
    SUGGESTION_COLUMNS,
    DataConsistencyError,
    UnknownBankError,
    suggest_reallocations,
    suggestions_frame,
)
from deposit_advisor.models.deposit import Bank, Deposit, DepositStatus, PayStrategy

OPEN = pd.Timestamp('2025-01-01')
CLOSE = pd.Timestamp('2026-01-01')


def _bank(
    name: str,
    rate: float,
    *,
    min_capacity: float = 0.0,
    max_capacity: float = 1.0,
    commission: float = 0.0,
    pay_strategy: PayStrategy = PayStrategy.ONCE,
) -> Bank:
    return Bank(
        name=name,
        rate=rate,
        min_capacity=min_capacity,
        max_capacity=max_capacity,
        transfer_commission=commission,
        pay_strategy=pay_strategy,
    )


def _deposit(bank: str, amount: float = 100000.0, rate: float = 0.05, name: str = 'Main') -> Deposit:
    return Deposit(
        bank=bank,
        name=name,
        date_open=OPEN,
        date_close=CLOSE,
        amount=amount,
        rate=rate,
        status=DepositStatus.ACTIVE,
        pay_strategy=PayStrategy.ONCE,
    )


def test_upper_bound_keeps_deposit_at_current_bank() -> None:
    banks = [
        _bank('A', 0.05),
        _bank('B', 0.08, max_capacity=0.5, commission=0.01),
    ]
    assert suggest_reallocations([_deposit('A')], banks, as_of=OPEN) == []


def test_suggests_move_when_ceiling_allows() -> None:
    banks = [
        _bank('A', 0.05),
        _bank('B', 0.08, max_capacity=1.0, commission=0.01),
    ]
    out = suggest_reallocations([_deposit('A')], banks, as_of=OPEN)

    assert len(out) == 1
    s = out[0]
    assert s.deposit_name == 'Main'
    assert s.source_bank == 'A'
    assert s.target_bank == 'B'
    assert s.source_rate == 0.05
    assert s.target_rate == 0.08
    assert s.amount == 100000.0
    assert s.commission_amount == pytest.approx(1000.0)
    expected = (
        calc_earn(100000.0, 0.08, OPEN, CLOSE, PayStrategy.ONCE)
        - 1000.0
        - calc_earn(100000.0, 0.05, OPEN, CLOSE, PayStrategy.ONCE)
    )
    assert s.net_benefit == pytest.approx(expected)
    assert s.net_benefit >= MIN_BENEFIT


def test_benefit_below_threshold_is_dropped() -> None:
    banks = [_bank('A', 0.05), _bank('B', 0.08, commission=0.01)]
    assert suggest_reallocations([_deposit('A')], banks, as_of=OPEN, min_benefit=5000.0) == []


def test_candidate_pay_strategy_drives_projection() -> None:
    banks = [_bank('A', 0.05), _bank('B', 0.08, pay_strategy=PayStrategy.CAPITALIZATION)]
    out = suggest_reallocations([_deposit('A')], banks, as_of=OPEN)
    expected = calc_earn(100000.0, 0.08, OPEN, CLOSE, PayStrategy.CAPITALIZATION) - calc_earn(
        100000.0, 0.05, OPEN, CLOSE, PayStrategy.ONCE
    )
    assert out[0].net_benefit == pytest.approx(expected)


def test_projection_starts_at_as_of_but_current_earn_uses_full_schedule() -> None:
    banks = [_bank('A', 0.05), _bank('B', 0.06)]
    midway = pd.Timestamp('2025-07-01')
    out = suggest_reallocations([_deposit('A')], banks, as_of=midway)
    # Half a year at 6% does not beat a full year at 5%.
    assert out == []


def test_source_floor_pins_deposit() -> None:
    deposits = [_deposit('A', 50000.0, name='a1'), _deposit('B', 50000.0, rate=0.08, name='b1')]
    pinned = [_bank('A', 0.05, min_capacity=0.5), _bank('B', 0.08)]
    free = [_bank('A', 0.05, min_capacity=0.0), _bank('B', 0.08)]

    assert suggest_reallocations(deposits, pinned, as_of=OPEN) == []
    out = suggest_reallocations(deposits, free, as_of=OPEN)
    assert [(s.deposit_name, s.target_bank) for s in out] == [('a1', 'B')]


def test_first_qualifying_bank_by_rate_is_chosen() -> None:
    banks = [
        _bank('A', 0.05),
        _bank('B', 0.08),
        _bank('C', 0.10, max_capacity=0.1),
        _bank('D', 0.09),
    ]
    out = suggest_reallocations([_deposit('A')], banks, as_of=OPEN)
    assert out[0].target_bank == 'D'


def test_search_stops_at_own_bank() -> None:
    banks = [_bank('A', 0.05), _bank('B', 0.08, max_capacity=0.1)]
    deposits = [_deposit('B', 100000.0, rate=0.08)]
    # B is already the best bank it can be, so the result only depends on its own rate.
    assert suggest_reallocations(deposits, banks, as_of=OPEN) == []


def test_equal_rates_follow_bank_input_order() -> None:
    deposit = _deposit('Y', rate=0.08)
    x = _bank('X', 0.08)
    y = _bank('Y', 0.08)

    ahead = suggest_reallocations([deposit], [x, y], as_of=OPEN, min_benefit=0.0)
    behind = suggest_reallocations([deposit], [y, x], as_of=OPEN, min_benefit=0.0)

    assert [s.target_bank for s in ahead] == ['X']
    assert [s.target_bank for s in behind] == ['Y']


def test_output_follows_deposit_order() -> None:
    deposits = [
        _deposit('A', 10000.0, name='first'),
        _deposit('B', 10000.0, rate=0.09, name='stays'),
        _deposit('A', 10000.0, name='third'),
    ]
    banks = [_bank('A', 0.05), _bank('B', 0.09)]
    out = suggest_reallocations(deposits, banks, as_of=OPEN)
    assert [s.deposit_name for s in out] == ['first', 'third']


def test_rerun_is_deterministic() -> None:
    deposits = [_deposit('A', 30000.0, name='a'), _deposit('B', 70000.0, rate=0.06, name='b')]
    banks = [_bank('B', 0.06, max_capacity=0.8), _bank('A', 0.05), _bank('C', 0.07, max_capacity=0.5)]
    first = suggest_reallocations(deposits, banks, as_of=OPEN)
    second = suggest_reallocations(deposits, banks, as_of=OPEN)
    assert first == second
    assert first


def test_unknown_bank_is_fatal() -> None:
    with pytest.raises(UnknownBankError, match='Unknown bank'):
        suggest_reallocations([_deposit('Missing')], [_bank('A', 0.05)], as_of=OPEN)


def test_unknown_bank_is_a_data_consistency_error() -> None:
    deposits = [_deposit('A', name='ok'), _deposit('Missing', name='bad')]
    with pytest.raises(DataConsistencyError):
        suggest_reallocations(deposits, [_bank('A', 0.05), _bank('B', 0.09)], as_of=OPEN)


def test_no_active_deposits_returns_empty() -> None:
    assert suggest_reallocations([], [_bank('A', 0.05)], as_of=OPEN) == []


def test_suggestions_frame_columns() -> None:
    banks = [_bank('A', 0.05), _bank('B', 0.08)]
    out = suggest_reallocations([_deposit('A')], banks, as_of=OPEN)
    frame = suggestions_frame(out)
    assert frame.columns.tolist() == SUGGESTION_COLUMNS
    assert frame['target_bank'].tolist() == ['B']
    assert suggestions_frame([]).empty


def test_zero_portfolio_total_returns_empty() -> None:
    deposits = [_deposit('A', 0.0, name='empty')]
    banks = [_bank('A', 0.05), _bank('B', 0.08)]
    assert suggest_reallocations(deposits, banks, as_of=OPEN) == []


def test_zero_portfolio_total_still_checks_bank_references() -> None:
    with pytest.raises(UnknownBankError):
        suggest_reallocations([_deposit('Missing', 0.0)], [_bank('A', 0.05)], as_of=OPEN)


def test_expired_deposit_projects_no_interest() -> None:
    expired = Deposit(
        bank='A',
        name='Expired',
        date_open=OPEN,
        date_close=pd.Timestamp('2025-03-01'),
        amount=100000.0,
        rate=0.05,
        status=DepositStatus.ACTIVE,
        pay_strategy=PayStrategy.ONCE,
    )
    banks = [_bank('A', 0.05), _bank('B', 0.08, commission=0.01)]
    as_of = pd.Timestamp('2025-04-01')

    assert suggest_reallocations([expired], banks, as_of=as_of) == []

    out = suggest_reallocations([expired], banks, as_of=as_of, min_benefit=float('-inf'))
    assert out[0].target_bank == 'B'
    # Close date already passed: the move earns nothing and only costs the commission.
    assert out[0].net_benefit == pytest.approx(-1000.0 - 100000.0 * 59 * (0.05 / 365.25))
