"""
Unit-тесты MathChecker.

ЦКП: "цена за штуку x количество == сумма строки" с OCR-правками.
"""

from decimal import Decimal

import pytest

from bonsplit.parsing.extraction.math_checker import MathChecker


@pytest.fixture
def checker():
    return MathChecker()


def test_valid_without_correction(checker):
    result = checker.verify("Picco 1,99 x 3 5,97", Decimal("5.97"))
    assert result.is_valid
    assert not result.was_corrected
    assert result.total == Decimal("5.97")
    assert result.quantity == 3


def test_unit_price_six_read_as_zero(checker):
    """0,29 x 15 прочитано как 6,29 x 15: сумма строки 4,35 остаётся."""
    result = checker.verify("KongStrong Juneberry 6,29 x 15 4,35 B", Decimal("4.35"))
    assert result.is_valid
    assert result.was_corrected
    assert result.unit_price == Decimal("0.29")
    assert result.total == Decimal("4.35")


def test_line_total_corrected(checker):
    """Сумма строки 94,35 вместо 4,35."""
    result = checker.verify("Dose 0,29 x 15 94,35", Decimal("94.35"))
    assert result.is_valid
    assert result.was_corrected
    assert result.total == Decimal("4.35")


def test_mismatch_not_validated(checker):
    result = checker.verify("Ware 1,00 x 3 5,00", Decimal("5.00"))
    assert not result.is_valid
    assert not result.was_corrected
    assert result.total == Decimal("5.00")


def test_line_without_quantity(checker):
    result = checker.verify("Brot 2,50", Decimal("2.50"))
    assert not result.is_valid
    assert result.total == Decimal("2.50")
    assert result.quantity is None


def test_tolerance_one_cent(checker):
    # 0,333 обрезается до 0,33; 0,33 x 3 = 0,99 против 1,00
    assert checker.verify("Ei 0,333 x 3 1,00", Decimal("1.00")).is_valid


def test_has_quantity(checker):
    assert checker.has_quantity("Pizza 2,49 x 3 7,47")
    assert checker.has_quantity("Wasser 1,95:2 3,90")
    assert not checker.has_quantity("Brot 2,50")
