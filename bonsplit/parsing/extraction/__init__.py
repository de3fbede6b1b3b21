"""
Extraction модуль: атомарные элементы работы с суммами.

Экспортирует парсинг денег, генераторы OCR-кандидатов и MathChecker.
"""

from .money import parse_amount, round_cent, money_sum, format_eur, format_price
from .ocr_candidates import (
    CandidateSource,
    discount_candidates,
    unit_price_candidates,
    price_candidates,
)
from .math_checker import MathChecker, MathResult, QTY_INLINE_PATTERN

__all__ = [
    "parse_amount",
    "round_cent",
    "money_sum",
    "format_eur",
    "format_price",
    "CandidateSource",
    "discount_candidates",
    "unit_price_candidates",
    "price_candidates",
    "MathChecker",
    "MathResult",
    "QTY_INLINE_PATTERN",
]
