"""
Line Classifier - Классификация строк чека.

ЦКП: Тип строки (служебная / итог / скидка / залог / товар) и её сумма.

SRP: Только классификация строк, без сборки товаров.

Правила проверяются по порядку, первое совпадение выигрывает:
1. Служебная строка (налоги, дата, реквизиты, разделители)
2. Шум: обрывок "15 x 0,25" без названия (перенос строки количества)
3. Маркер итогового блока (Summe, zu zahlen, Kartenzahlung ...)
   После него принимаются только возвраты залога.
4. Строка с суммой в конце: скидка / возврат залога / залог / количество / товар
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from loguru import logger

from ..extraction.money import parse_amount
from ..extraction.math_checker import QTY_INLINE_PATTERN
from ..locales.config_loader import ClassificationConfig

# Сумма в конце строки, опционально с буквой налоговой группы (8 - это B после OCR)
PRICE_PATTERN = re.compile(r"(-?\d{1,4}[,.]\d{2,3})\s*[AB8]?\s*$")

# "15 x 0,25" без названия товара
NOISE_PATTERN = re.compile(r"^-?\d{1,3}\s*[xX×]\s+\d")

TAX_SUFFIX_PATTERN = re.compile(r"\s+[AB8]\s*$")
WEIGHT_SUFFIX_PATTERN = re.compile(r"\d[,:;]\d+\s*(Kg|kg|St|st|Stk|stk)[;,.]?\s*\d*$")
LETTER_PATTERN = re.compile(r"[a-zA-ZÀ-ɏ]")
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")


class LineType(Enum):
    SKIP = "skip"
    NOISE = "noise"
    TOTAL_MARKER = "total_marker"
    SUMMARY = "summary"
    DISCOUNT = "discount"
    IMPLICIT_DISCOUNT = "implicit_discount"
    DEPOSIT = "deposit"
    DEPOSIT_RETURN = "deposit_return"
    QUANTITY = "quantity"
    ITEM = "item"
    DESCRIPTION = "description"
    UNPRICED = "unpriced"


@dataclass(frozen=True)
class ClassifiedLine:
    """Классифицированная строка чека."""
    text: str
    line_type: LineType
    amount: Optional[Decimal] = None
    description: str = ""           # Текст до суммы
    starts_summary: bool = False    # Строка открывает итоговый блок
    line_number: int = 0

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "line_type": self.line_type.value,
            "amount": str(self.amount) if self.amount is not None else None,
            "description": self.description,
            "starts_summary": self.starts_summary,
            "line_number": self.line_number,
        }


def split_lines(text: str) -> List[str]:
    """Разбивает сырой текст OCR на непустые строки без пробелов по краям."""
    return [line.strip() for line in LINE_SPLIT_PATTERN.split(text) if line.strip()]


def clean_description(raw: str) -> str:
    """Убирает букву налоговой группы и схлопывает пробелы."""
    return re.sub(r"\s{2,}", " ", TAX_SUFFIX_PATTERN.sub("", raw)).strip()


def strip_quantity(description: str) -> str:
    """
    Убирает из названия фрагмент количества и веса.

    "Picco Pizzi 3Käse 2,49 x 3" -> "Picco Pizzi 3Käse"
    "Bananen 1,254 kg" -> "Bananen"
    """
    qty_match = QTY_INLINE_PATTERN.search(description)
    if qty_match:
        description = description[:qty_match.start()].strip()
    return WEIGHT_SUFFIX_PATTERN.sub("", description).strip()


class LineClassifier:
    """
    Классификатор строк чека.

    Не хранит состояния: всё, что зависит от предыдущих строк
    (прошли ли итог, есть ли уже товары), передаётся явно.
    """

    def __init__(self, config: ClassificationConfig):
        self.config = config

    def classify(
        self,
        text: str,
        reached_total: bool = False,
        has_items: bool = False,
        line_number: int = 0,
    ) -> ClassifiedLine:
        """
        Определяет тип строки.

        Args:
            text: Строка чека (без пробелов по краям)
            reached_total: Итоговый блок уже начался
            has_items: Уже есть хотя бы один товар (для неявной скидки)
            line_number: Номер строки (для трассировки)

        Returns:
            ClassifiedLine
        """
        cfg = self.config

        if cfg.skip_re.search(text):
            return ClassifiedLine(text, LineType.SKIP, line_number=line_number)

        if NOISE_PATTERN.search(text):
            logger.trace(f"[LineClassifier] Шум: '{text}'")
            return ClassifiedLine(text, LineType.NOISE, line_number=line_number)

        price_match = PRICE_PATTERN.search(text)
        amount = parse_amount(price_match.group(1)) if price_match else None
        description = text[:price_match.start()].strip() if price_match else text
        is_deposit_return = bool(cfg.deposit_return_re.search(text))

        if cfg.total_marker_re.search(text):
            logger.debug(f"[LineClassifier] Начало итогового блока: '{text}'")
            if is_deposit_return and amount is not None:
                return ClassifiedLine(
                    text, LineType.DEPOSIT_RETURN, amount, description,
                    starts_summary=True, line_number=line_number,
                )
            return ClassifiedLine(text, LineType.TOTAL_MARKER, amount, description, line_number=line_number)

        if reached_total:
            if is_deposit_return and amount is not None:
                return ClassifiedLine(text, LineType.DEPOSIT_RETURN, amount, description, line_number=line_number)
            return ClassifiedLine(text, LineType.SUMMARY, amount, description, line_number=line_number)

        if amount is None:
            if len(text) > 2 and LETTER_PATTERN.search(text):
                return ClassifiedLine(text, LineType.DESCRIPTION, line_number=line_number)
            return ClassifiedLine(text, LineType.UNPRICED, line_number=line_number)

        if cfg.discount_re.search(text):
            line_type = LineType.DISCOUNT
        elif amount < 0 and has_items and not is_deposit_return:
            line_type = LineType.IMPLICIT_DISCOUNT
        elif is_deposit_return:
            line_type = LineType.DEPOSIT_RETURN
        elif cfg.deposit_re.search(text):
            line_type = LineType.DEPOSIT
        elif QTY_INLINE_PATTERN.search(text):
            line_type = LineType.QUANTITY
        else:
            line_type = LineType.ITEM

        return ClassifiedLine(text, line_type, amount, description, line_number=line_number)
