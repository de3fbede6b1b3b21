from decimal import Decimal

from bonsplit.parsing.s3_items import ParsedItem
from bonsplit.parsing.s5_validation import ValidationStage


ITEMS = [
    ParsedItem(description="Brot", price=Decimal("2.50")),
    ParsedItem(description="Pfandrückgabe", price=Decimal("-0.25"), is_deposit_return=True),
]


def test_reconciled():
    result = ValidationStage().process(ITEMS, Decimal("2.25"))
    assert result.reconciled
    assert result.items_sum == Decimal("2.25")
    assert result.difference == Decimal("0")
    assert result.error_message is None


def test_one_cent_tolerance():
    assert ValidationStage().process(ITEMS, Decimal("2.26")).reconciled


def test_mismatch_reported():
    result = ValidationStage().process(ITEMS, Decimal("3.00"))
    assert not result.reconciled
    assert result.difference == Decimal("0.75")
    assert "mismatch" in result.error_message


def test_total_missing():
    result = ValidationStage().process(ITEMS, None)
    assert not result.reconciled
    assert result.difference is None
    assert result.items_sum == Decimal("2.25")
