from decimal import Decimal

import pytest

from bonsplit.parsing.extraction.money import (
    format_eur,
    format_price,
    money_sum,
    parse_amount,
    round_cent,
)


@pytest.mark.parametrize("raw, expected", [
    ("1,99", Decimal("1.99")),
    ("-0,90", Decimal("-0.90")),
    ("12.50", Decimal("12.50")),
    ("2,999", Decimal("2.99")),     # третий знак отбрасывается, не округляется
    ("12.345", Decimal("12.34")),
])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", None, "abc", "1,2,3"])
def test_parse_amount_invalid(raw):
    assert parse_amount(raw) is None


def test_round_cent_half_up():
    assert round_cent(Decimal("0.005")) == Decimal("0.01")
    assert round_cent(Decimal("2.675")) == Decimal("2.68")
    assert round_cent(Decimal("-1.005")) == Decimal("-1.01")


def test_money_sum():
    assert money_sum([Decimal("1.49"), Decimal("7.47"), Decimal("-6.50")]) == Decimal("2.46")
    assert money_sum([]) == Decimal("0.00")


def test_format_eur_signed():
    assert format_eur(Decimal("-0.90")) == "−0,90 €"
    assert format_eur(Decimal("1.2")) == "+1,20 €"


def test_format_price():
    assert format_price(Decimal("1.20")) == "1,20 €"
    assert format_price(Decimal("-6.5")) == "−6,50 €"
