"""
Stage 5: Validation

ЦКП: Сходится ли сумма позиций с итогом чека (checksum).

Input: List[ParsedItem], итог чека
Output: ValidationResult (reconciled, difference)

Несовпадение - не ошибка: это расхождение, которое вызывающая сторона
показывает пользователю для ручной правки.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional
from loguru import logger

from config.settings import MATCH_TOLERANCE
from ..extraction.money import money_sum
from ..s3_items.models import ParsedItem


@dataclass(frozen=True)
class ValidationResult:
    """
    Результат Stage 5: Validation.

    ЦКП: Сверка суммы позиций с итогом.
    """
    reconciled: bool                        # Сумма сходится с итогом
    items_sum: Decimal                      # Сумма позиций
    receipt_total: Optional[Decimal]        # Итог из чека
    difference: Optional[Decimal]           # |items_sum - receipt_total|
    tolerance: Decimal = MATCH_TOLERANCE
    error_message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "reconciled": self.reconciled,
            "items_sum": str(self.items_sum),
            "receipt_total": str(self.receipt_total) if self.receipt_total is not None else None,
            "difference": str(self.difference) if self.difference is not None else None,
            "tolerance": str(self.tolerance),
            "error_message": self.error_message,
        }


class ValidationStage:
    """Stage 5: Validation (Checksum)."""

    def __init__(self, tolerance: Decimal = MATCH_TOLERANCE):
        self.tolerance = tolerance

    def process(self, items: List[ParsedItem], receipt_total: Optional[Decimal]) -> ValidationResult:
        """
        Сверяет сумму позиций с итогом чека.

        Args:
            items: Позиции после коррекции
            receipt_total: Итог чека или None

        Returns:
            ValidationResult
        """
        items_sum = money_sum(item.price for item in items)

        if receipt_total is None:
            return ValidationResult(
                reconciled=False,
                items_sum=items_sum,
                receipt_total=None,
                difference=None,
                tolerance=self.tolerance,
                error_message="Итоговая сумма чека не найдена",
            )

        difference = abs(items_sum - receipt_total)
        reconciled = difference <= self.tolerance

        error_message = None
        if not reconciled:
            error_message = (
                f"Checksum mismatch: items={items_sum}, receipt={receipt_total}, diff={difference}"
            )
            logger.warning(f"[ValidationStage] {error_message}")
        else:
            logger.info(f"[ValidationStage] PASSED: {items_sum} ≈ {receipt_total}")

        return ValidationResult(
            reconciled=reconciled,
            items_sum=items_sum,
            receipt_total=receipt_total,
            difference=difference,
            tolerance=self.tolerance,
            error_message=error_message,
        )
