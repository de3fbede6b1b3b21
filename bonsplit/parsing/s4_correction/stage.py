"""
Stage 4: OCR Correction

ЦКП: Позиции, сумма которых сходится с итогом чека.

Input: List[ParsedItem], итог чека (Decimal или None)
Output: CorrectionResult

OCR путает ведущий 0 с 8/9. Итог чека служит эталоном: ищем минимальные
замены цифр, которые сводят сумму позиций к итогу. Это локальная жадная
эвристика с жёсткими лимитами, а не глобальный поиск:

1. Жадный проход (до MAX_GREEDY_PASSES итераций): одна лучшая замена за раз
2. Парный проход: две замены в разных позициях, компенсирующие друг друга
3. Остаток 1..50 центов целиком списывается на первую подходящую позицию

Не трогаем: залоги, позиции со слитой скидкой, позиции с подтверждённым
количеством. Каждая позиция исправляется не более одного раза.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import List, Optional, Set
from loguru import logger

from config.settings import (
    MATCH_TOLERANCE,
    MAX_GREEDY_PASSES,
    MIN_IMPROVEMENT,
    RESIDUAL_MIN,
    RESIDUAL_MAX,
)
from ..extraction.money import money_sum, round_cent
from ..extraction.ocr_candidates import CandidateSource, price_candidates
from ..s3_items.models import ParsedItem


@dataclass(frozen=True)
class Correction:
    """Одна применённая правка."""
    index: int
    description: str
    old_price: Decimal
    new_price: Decimal
    method: str                     # greedy / pair / residual

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "description": self.description,
            "old_price": str(self.old_price),
            "new_price": str(self.new_price),
            "method": self.method,
        }


@dataclass
class CorrectionResult:
    """
    Результат Stage 4: OCR Correction.

    ЦКП: Исправленные позиции и журнал правок.
    """
    items: List[ParsedItem] = field(default_factory=list)
    corrections: List[Correction] = field(default_factory=list)
    initial_difference: Optional[Decimal] = None
    final_difference: Optional[Decimal] = None
    skipped: bool = False

    def to_dict(self) -> dict:
        return {
            "corrections": [c.to_dict() for c in self.corrections],
            "initial_difference": str(self.initial_difference) if self.initial_difference is not None else None,
            "final_difference": str(self.final_difference) if self.final_difference is not None else None,
            "skipped": self.skipped,
        }


class CorrectionStage:
    """
    Stage 4: OCR Correction.

    Генератор кандидатов подставляется (по умолчанию price_candidates),
    форма поиска от него не зависит.
    """

    def __init__(
        self,
        candidate_source: CandidateSource = price_candidates,
        max_passes: int = MAX_GREEDY_PASSES,
        tolerance: Decimal = MATCH_TOLERANCE,
        residual_max: Decimal = RESIDUAL_MAX,
    ):
        self.candidate_source = candidate_source
        self.max_passes = max_passes
        self.tolerance = tolerance
        self.residual_max = residual_max

    def process(self, items: List[ParsedItem], receipt_total: Optional[Decimal]) -> CorrectionResult:
        """
        Сводит сумму позиций к итогу чека.

        Args:
            items: Позиции после Stage 3
            receipt_total: Итог чека (None - коррекция пропускается)

        Returns:
            CorrectionResult (items - новый список, исходный не меняется)
        """
        items = list(items)

        if receipt_total is None or receipt_total <= 0:
            logger.debug("[CorrectionStage] Нет итога чека, коррекция пропущена")
            return CorrectionResult(items=items, skipped=True)

        initial = abs(money_sum(i.price for i in items) - receipt_total)
        if initial <= self.tolerance:
            return CorrectionResult(items=items, initial_difference=initial, final_difference=initial)

        logger.debug(f"[CorrectionStage] Разница {initial} до итога {receipt_total}, ищем правки")

        corrections: List[Correction] = []
        corrected: Set[int] = {i for i, item in enumerate(items) if item.was_ocr_corrected}

        diff = self._greedy_pass(items, receipt_total, corrected, corrections, initial)

        if diff > self.tolerance:
            diff = self._pair_pass(items, receipt_total, corrected, corrections, diff)

        if RESIDUAL_MIN <= diff <= self.residual_max:
            diff = self._absorb_residual(items, receipt_total, corrected, corrections, diff)

        if diff > self.tolerance:
            logger.warning(f"[CorrectionStage] Расхождение не устранено: {diff} (итог {receipt_total})")
        else:
            logger.info(f"[CorrectionStage] Сумма сведена к итогу {receipt_total}: {len(corrections)} правок")

        return CorrectionResult(
            items=items,
            corrections=corrections,
            initial_difference=initial,
            final_difference=diff,
        )

    def is_eligible(self, item: ParsedItem) -> bool:
        """Позиция может быть исправлена по итогу чека."""
        return not (item.quantity_validated or item.is_deposit or item.has_fused_discount)

    def candidates(self, item: ParsedItem) -> List[Decimal]:
        """Кандидаты для позиции; для возврата залога - с обратным знаком."""
        if item.is_deposit_return:
            return [-c for c in self.candidate_source(abs(item.price))]
        return self.candidate_source(item.price)

    def _greedy_pass(
        self,
        items: List[ParsedItem],
        target: Decimal,
        corrected: Set[int],
        corrections: List[Correction],
        diff: Decimal,
    ) -> Decimal:
        for _ in range(self.max_passes):
            if diff <= self.tolerance:
                break

            current_sum = money_sum(i.price for i in items)
            best = None

            for index, item in enumerate(items):
                if index in corrected or not self.is_eligible(item):
                    continue
                for candidate in self.candidates(item):
                    new_diff = abs(current_sum - item.price + candidate - target)
                    if new_diff < diff - MIN_IMPROVEMENT and (best is None or new_diff < best[2]):
                        best = (index, candidate, new_diff)

            if best is None:
                break

            index, candidate, diff = best
            self._apply(items, index, candidate, "greedy", corrected, corrections)

        return diff

    def _pair_pass(
        self,
        items: List[ParsedItem],
        target: Decimal,
        corrected: Set[int],
        corrections: List[Correction],
        diff: Decimal,
    ) -> Decimal:
        deficit = target - money_sum(i.price for i in items)

        options = []
        for index, item in enumerate(items):
            if index in corrected or not self.is_eligible(item):
                continue
            for candidate in self.candidates(item):
                options.append((index, candidate, candidate - item.price))

        best_pair = None
        best_diff = diff
        for a in range(len(options)):
            for b in range(a + 1, len(options)):
                if options[a][0] == options[b][0]:
                    continue
                new_diff = abs(deficit - (options[a][2] + options[b][2]))
                if new_diff < best_diff - MIN_IMPROVEMENT:
                    best_pair = (options[a], options[b])
                    best_diff = new_diff

        if best_pair is None:
            return diff

        for index, candidate, _ in best_pair:
            self._apply(items, index, candidate, "pair", corrected, corrections)
        return abs(money_sum(i.price for i in items) - target)

    def _absorb_residual(
        self,
        items: List[ParsedItem],
        target: Decimal,
        corrected: Set[int],
        corrections: List[Correction],
        diff: Decimal,
    ) -> Decimal:
        deficit = round_cent(target - money_sum(i.price for i in items))

        for index, item in enumerate(items):
            if index in corrected or not self.is_eligible(item):
                continue
            new_price = round_cent(item.price + deficit)
            if new_price >= 0:
                self._apply(items, index, new_price, "residual", corrected, corrections)
                return abs(money_sum(i.price for i in items) - target)

        return diff

    @staticmethod
    def _apply(
        items: List[ParsedItem],
        index: int,
        new_price: Decimal,
        method: str,
        corrected: Set[int],
        corrections: List[Correction],
    ) -> None:
        item = items[index]
        logger.debug(f"[CorrectionStage] {method}: '{item.description}' {item.price} -> {new_price}")
        items[index] = replace(item, price=new_price, was_ocr_corrected=True)
        corrected.add(index)
        corrections.append(Correction(index, item.description, item.price, new_price, method))
