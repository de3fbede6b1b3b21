"""
Unit-тесты упрощения долгов.

ЦКП: Минимальный набор переводов по балансам.
"""

from decimal import Decimal

import pytest

from bonsplit.settlement import Transfer, simplify_debts

D = Decimal


def test_one_creditor_two_debtors():
    transfers = simplify_debts([D("20.00"), D("-10.00"), D("-10.00")])
    assert transfers == [
        Transfer(from_index=1, to_index=0, amount=D("10.00")),
        Transfer(from_index=2, to_index=0, amount=D("10.00")),
    ]


def test_largest_debtor_first():
    transfers = simplify_debts([D("30.00"), D("-10.00"), D("-5.00"), D("-15.00")])
    assert [(t.from_index, t.amount) for t in transfers] == [
        (3, D("15.00")), (1, D("10.00")), (2, D("5.00")),
    ]


def test_one_debtor_two_creditors():
    transfers = simplify_debts([D("10.00"), D("5.00"), D("-15.00")])
    assert [(t.from_index, t.to_index, t.amount) for t in transfers] == [
        (2, 0, D("10.00")), (2, 1, D("5.00")),
    ]


def test_settled_group_has_no_transfers():
    assert simplify_debts([D("0.00"), D("0.00")]) == []


def test_rounding_dust_dropped():
    assert simplify_debts([D("0.004"), D("-0.004")]) == []


def test_uncovered_residual_dropped():
    # Должник покрывает 10,00, оставшиеся 0,01 у кредитора - пыль
    transfers = simplify_debts([D("10.01"), D("-10.00")])
    assert transfers == [Transfer(from_index=1, to_index=0, amount=D("10.00"))]


@pytest.mark.parametrize("nets", [
    ["20.00", "-10.00", "-10.00"],
    ["7.50", "2.50", "-3.33", "-3.33", "-3.34"],
    ["-1.00", "-2.00", "-3.00", "6.00"],
    ["12.00", "-4.00", "4.00", "-6.00", "-6.00"],
    ["0.01", "-0.01", "0.00"],
])
def test_transfer_count_bounded(nets):
    nets = [D(n) for n in nets]
    transfers = simplify_debts(nets)
    assert len(transfers) <= len(nets) - 1
    assert all(t.amount > 0 for t in transfers)


def test_transfers_settle_balances():
    nets = [D("12.00"), D("-4.00"), D("4.00"), D("-6.00"), D("-6.00")]
    transfers = simplify_debts(nets)

    remaining = list(nets)
    for t in transfers:
        remaining[t.from_index] += t.amount
        remaining[t.to_index] -= t.amount
    assert all(abs(r) <= D("0.005") for r in remaining)
