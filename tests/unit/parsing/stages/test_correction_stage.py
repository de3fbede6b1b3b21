"""
Unit-тесты для Stage 4: OCR Correction.

ЦКП: Жадный проход, парный проход и списание остатка сводят сумму к итогу.
"""

from decimal import Decimal

import pytest

from bonsplit.parsing.extraction.money import money_sum
from bonsplit.parsing.s3_items import ParsedItem
from bonsplit.parsing.s4_correction import CorrectionStage


def item(description, price, **flags):
    return ParsedItem(description=description, price=Decimal(price), **flags)


@pytest.fixture
def stage():
    return CorrectionStage()


class TestSkipped:
    """Коррекция не запускается."""

    def test_already_matching(self, stage):
        items = [item("Brot", "2.50"), item("Milch", "9.49")]
        result = stage.process(items, Decimal("11.99"))
        assert result.items == items
        assert result.corrections == []

    def test_total_not_found(self, stage):
        items = [item("Milch", "9.49")]
        result = stage.process(items, None)
        assert result.skipped
        assert result.items == items

    def test_non_positive_total(self, stage):
        items = [item("Milch", "9.49")]
        assert stage.process(items, Decimal("0")).skipped

    def test_input_list_not_mutated(self, stage):
        items = [item("Brot", "2.50"), item("Milch", "9.49")]
        stage.process(items, Decimal("2.99"))
        assert items[1].price == Decimal("9.49")


class TestGreedyPass:
    """Одна лучшая замена за итерацию."""

    def test_leading_nine_corrected(self, stage):
        items = [item("Brot", "2.50"), item("Milch", "9.49")]
        result = stage.process(items, Decimal("2.99"))

        assert result.items[0] == items[0]
        assert result.items[1].price == Decimal("0.49")
        assert result.items[1].was_ocr_corrected
        assert result.corrections[0].method == "greedy"
        assert result.final_difference == Decimal("0")

    def test_two_digit_misread(self, stage):
        items = [item("Wein", "83.95"), item("Brot", "2.00")]
        result = stage.process(items, Decimal("2.95"))
        assert result.items[0].price == Decimal("0.95")

    def test_deposit_return_candidates_sign_flipped(self, stage):
        items = [item("Brot", "2.00"), item("Pfandrückgabe", "-9.50", is_deposit_return=True)]
        result = stage.process(items, Decimal("1.50"))
        assert result.items[1].price == Decimal("-0.50")
        assert money_sum(i.price for i in result.items) == Decimal("1.50")

    def test_item_corrected_at_most_once(self, stage):
        items = [item("Wein", "99.99")]
        result = stage.process(items, Decimal("0.09"))
        assert len(result.corrections) == 1
        assert result.items[0].price == Decimal("0.99")

    @pytest.mark.parametrize("flags", [
        {"quantity_validated": True},
        {"is_deposit": True},
        {"note": "Preisvorteil (−0,50 €)"},
    ])
    def test_protected_items_untouched(self, stage, flags):
        items = [item("Ware", "9.49", **flags)]
        result = stage.process(items, Decimal("0.49"))
        assert result.items == items
        assert result.corrections == []
        assert result.final_difference == Decimal("9.00")


class TestPairPass:
    """Две правки, которые по отдельности не помогают."""

    def test_pair_closes_gap(self, stage):
        items = [
            item("Wein", "91.50"),
            item("Pfandrückgabe", "-99.50", is_deposit_return=True),
            item("Kiste", "20.00", quantity_validated=True),
        ]
        result = stage.process(items, Decimal("11.00"))

        assert [c.method for c in result.corrections] == ["pair", "pair"]
        assert result.items[0].price == Decimal("0.50")
        assert result.items[1].price == Decimal("-9.50")
        assert result.final_difference == Decimal("0")


class TestResidualAbsorption:
    """Остаток до 50 центов списывается на первую подходящую позицию."""

    def test_residual_added_to_first_item(self, stage):
        items = [item("Brot", "2.50"), item("Käse", "4.40")]
        result = stage.process(items, Decimal("6.99"))

        assert result.items[0].price == Decimal("2.59")
        assert result.items[0].was_ocr_corrected
        assert result.items[1] == items[1]
        assert result.corrections[0].method == "residual"

    def test_negative_residual(self, stage):
        items = [item("Brot", "2.50"), item("Käse", "4.40")]
        result = stage.process(items, Decimal("6.70"))
        assert result.items[0].price == Decimal("2.30")

    def test_skips_ineligible_item(self, stage):
        items = [item("Pizza", "2.50", quantity_validated=True), item("Käse", "4.40")]
        result = stage.process(items, Decimal("6.99"))
        assert result.items[1].price == Decimal("4.49")

    def test_residual_never_makes_price_negative(self, stage):
        items = [item("Bonbon", "0.10"), item("Kiste", "5.00", quantity_validated=True)]
        result = stage.process(items, Decimal("4.80"))
        assert result.items == items

    def test_gap_over_limit_left_unresolved(self, stage):
        items = [item("Brot", "2.50")]
        result = stage.process(items, Decimal("3.50"))
        assert result.items == items
        assert result.final_difference == Decimal("1.00")
