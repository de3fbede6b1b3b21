"""
Stage 2: Total Extraction

ЦКП: Итоговая сумма чека ("zu zahlen 34,99") или None.

Input: полный текст OCR
Output: TotalResult

Алгоритм:
1. Паттерны "ключевое слово + сумма" от самого специфичного к общему
   (zu zahlen > endbetrag > gesamtsumme > gesamt > total > оплата > summe)
2. Fallback: ключевое слово и сумма разорваны переносом строки -
   берём первое число в начале одной из следующих строк
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from loguru import logger

from ..extraction.money import parse_amount
from ..locales.config_loader import TotalConfig

LEADING_SEPARATOR_PATTERN = re.compile(r"^\s*:?\s*")
LINE_START_AMOUNT_PATTERN = re.compile(r"^(-?\d{1,6}[,.]\d{2})", re.MULTILINE)


@dataclass(frozen=True)
class TotalResult:
    """Результат извлечения итоговой суммы."""
    amount: Optional[Decimal]
    text: str = ""
    confidence: float = 0.0

    @property
    def found(self) -> bool:
        return self.amount is not None

    def to_dict(self) -> dict:
        return {
            "amount": str(self.amount) if self.amount is not None else None,
            "text": self.text,
            "confidence": self.confidence,
        }


class TotalStage:
    """
    Stage 2: Total Extraction.

    Работает по всему тексту независимо от классификации строк.
    """

    def __init__(self, config: TotalConfig):
        self.config = config

    def process(self, text: str) -> TotalResult:
        """
        Ищет итоговую сумму в тексте.

        Args:
            text: Сырой текст OCR

        Returns:
            TotalResult (amount=None если итог не найден)
        """
        if not text:
            return TotalResult(amount=None)

        for pattern in self.config.compiled_patterns:
            match = pattern.search(text)
            if match:
                amount = parse_amount(match.group(1))
                logger.debug(f"[TotalStage] Итог {amount} по паттерну '{pattern.pattern}'")
                return TotalResult(amount=amount, text=match.group(0).strip(), confidence=0.95)

        for keyword in self.config.compiled_fallback:
            keyword_match = keyword.search(text)
            if not keyword_match:
                continue

            tail = LEADING_SEPARATOR_PATTERN.sub("", text[keyword_match.end():], count=1)
            amount_match = LINE_START_AMOUNT_PATTERN.search(tail)
            if amount_match:
                amount = parse_amount(amount_match.group(1))
                logger.debug(f"[TotalStage] Итог {amount} через перенос строки после '{keyword_match.group(0)}'")
                return TotalResult(amount=amount, text=keyword_match.group(0), confidence=0.8)

        logger.warning("[TotalStage] Итоговая сумма не найдена")
        return TotalResult(amount=None)
