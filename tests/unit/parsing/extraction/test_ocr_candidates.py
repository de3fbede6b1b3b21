"""
Unit-тесты генераторов OCR-кандидатов.

ЦКП: Каждое правило замены цифр даёт ожидаемые варианты.
"""

from decimal import Decimal

import pytest

from bonsplit.parsing.extraction.ocr_candidates import (
    discount_candidates,
    price_candidates,
    unit_price_candidates,
)


class TestPriceCandidates:
    """Кандидаты для цены товара."""

    def test_leading_nine_to_zero(self):
        assert price_candidates(Decimal("9.49")) == [Decimal("0.49")]

    def test_leading_eight_to_zero(self):
        assert price_candidates(Decimal("8.15")) == [Decimal("0.15")]

    def test_two_digit_amount_drops_leading_digit(self):
        """83,95 -> 3,95 -> 0,95 (две ошибки OCR подряд)."""
        candidates = price_candidates(Decimal("83.95"))
        assert Decimal("3.95") in candidates
        assert Decimal("0.95") in candidates

    def test_first_fraction_digit_nine(self):
        assert price_candidates(Decimal("1.99")) == [Decimal("1.09")]

    def test_both_rules(self):
        assert price_candidates(Decimal("9.95")) == [Decimal("0.95"), Decimal("9.05")]

    def test_no_candidates_for_plain_price(self):
        assert price_candidates(Decimal("2.50")) == []
        assert price_candidates(Decimal("12.00")) == []

    def test_candidates_are_non_negative(self):
        for value in ("9.49", "83.95", "99.99", "0.95", "8.00"):
            assert all(c >= 0 for c in price_candidates(Decimal(value)))


class TestUnitPriceCandidates:
    """Кандидаты для цены за штуку (6/8/9 -> 0)."""

    @pytest.mark.parametrize("value, expected", [
        ("6.29", [Decimal("0.29")]),
        ("8.29", [Decimal("0.29")]),
        ("9.25", [Decimal("0.25")]),
        ("1.29", []),
    ])
    def test_unit_price(self, value, expected):
        assert unit_price_candidates(Decimal(value)) == expected


class TestDiscountCandidates:
    """Кандидаты для суммы скидки."""

    def test_leading_eight(self):
        assert discount_candidates(Decimal("8.90")) == [Decimal("0.90")]

    def test_plain_discount(self):
        assert discount_candidates(Decimal("0.90")) == []
