"""
Math Checker - перекрёстная проверка строк количества.

ЦКП: Подтверждение "цена за штуку x количество == сумма строки".

Строка вида "KongStrong 0,29 x 15 4,35 B" содержит независимую
арифметическую проверку. Если она сходится (возможно, после
OCR-правки цены за штуку или суммы), позиция исключается из
последующей коррекции по итогу чека.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional
from loguru import logger

from config.settings import MATCH_TOLERANCE

from .money import parse_amount, round_cent
from .ocr_candidates import discount_candidates, price_candidates, unit_price_candidates

# "2,49 x 3", "0,25 x 15", "1,95:2"
QTY_INLINE_PATTERN = re.compile(r"(\d{1,4}[,.]\d{1,3})\s*[xX×:]\s*(\d{1,4})")


@dataclass
class MathResult:
    """Результат проверки строки количества."""
    total: Decimal                          # Итоговая сумма строки (возможно исправленная)
    is_valid: bool = False                  # Арифметика сошлась
    was_corrected: bool = False             # Понадобилась OCR-правка
    unit_price: Optional[Decimal] = None    # Принятая цена за штуку
    quantity: Optional[int] = None


class MathChecker:
    """Элемент-функция: Проверяет qty * unit_price == total (погрешность 1 цент)."""

    def __init__(self, tolerance: Decimal = MATCH_TOLERANCE):
        self.tolerance = tolerance

    def has_quantity(self, text: str) -> bool:
        return bool(QTY_INLINE_PATTERN.search(text))

    def verify(self, text: str, line_total: Decimal) -> MathResult:
        """
        Проверяет строку с inline-количеством.

        Порядок попыток:
        1. Как прочитано
        2. Исправленная цена за штуку (6/8/9 -> 0)
        3. Исправленная сумма строки (с исходной и исправленной ценой за штуку)

        Args:
            text: Полная строка чека
            line_total: Сумма в конце строки

        Returns:
            MathResult (is_valid=False если ни одна комбинация не сошлась)
        """
        match = QTY_INLINE_PATTERN.search(text)
        if not match:
            return MathResult(total=line_total)

        unit_price = parse_amount(match.group(1))
        quantity = int(match.group(2))
        if unit_price is None:
            return MathResult(total=line_total)

        if self._matches(unit_price, quantity, line_total):
            return MathResult(
                total=line_total, is_valid=True,
                unit_price=unit_price, quantity=quantity,
            )

        unit_options = self._unit_options(unit_price)
        for candidate in unit_options:
            if self._matches(candidate, quantity, line_total):
                logger.debug(
                    f"[MathChecker] Цена за штуку исправлена: {unit_price} -> {candidate} "
                    f"(x{quantity} = {line_total})"
                )
                return MathResult(
                    total=line_total, is_valid=True, was_corrected=True,
                    unit_price=candidate, quantity=quantity,
                )

        for total_candidate in price_candidates(line_total):
            for candidate in [unit_price] + unit_options:
                if self._matches(candidate, quantity, total_candidate):
                    logger.debug(
                        f"[MathChecker] Сумма строки исправлена: {line_total} -> {total_candidate} "
                        f"({candidate} x{quantity})"
                    )
                    return MathResult(
                        total=total_candidate, is_valid=True, was_corrected=True,
                        unit_price=candidate, quantity=quantity,
                    )

        logger.debug(f"[MathChecker] Не сошлось: {unit_price} x{quantity} != {line_total}")
        return MathResult(total=line_total, unit_price=unit_price, quantity=quantity)

    def _matches(self, unit_price: Decimal, quantity: int, total: Decimal) -> bool:
        expected = round_cent(unit_price * quantity)
        return abs(expected - total) <= self.tolerance

    @staticmethod
    def _unit_options(unit_price: Decimal) -> List[Decimal]:
        return unit_price_candidates(unit_price) + discount_candidates(unit_price)
