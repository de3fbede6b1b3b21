"""
Discount Handler - Приклеивание скидок к товарам.

ЦКП: Скидка уменьшает цену предыдущего товара и оставляет пометку.

SRP: Только слияние скидок, без классификации строк.
"""

from dataclasses import replace
from decimal import Decimal
from loguru import logger

from ..extraction.money import format_eur, round_cent
from ..extraction.ocr_candidates import discount_candidates
from ..locales.config_loader import ClassificationConfig
from ..s1_classification.line_classifier import ClassifiedLine, clean_description
from .models import ParsedItem, ParserState


class DiscountHandler:
    """
    Слияние скидок (Rabatt, Preisvorteil, отрицательная сумма после товара).

    Приоритет:
    1. Есть ожидающее название без цены -> новая позиция с ценой = -скидка
    2. Иначе скидка вычитается из последнего товара
    3. Нет ни того, ни другого -> строка отбрасывается
    """

    def __init__(self, config: ClassificationConfig):
        self.config = config

    def apply(self, state: ParserState, line: ClassifiedLine) -> ParserState:
        discount = -abs(line.amount)
        label = clean_description(line.description) or self.config.discount_label

        if state.pending_description is not None:
            item = ParsedItem(
                description=clean_description(state.pending_description),
                price=discount,
                note=f"{label} ({format_eur(discount)})",
                raw_text=line.text,
            )
            logger.debug(f"[DiscountHandler] Скидка без цены товара: '{item.description}' {discount}")
            return replace(state, items=state.items + (item,), pending_description=None)

        if not state.items:
            logger.debug(f"[DiscountHandler] Скидка без товара отброшена: '{line.text}'")
            return state

        previous = state.items[-1]
        discount = self._fit_discount(previous.price, discount)
        note = f"{label} ({format_eur(discount)})"
        if previous.note:
            note = f"{previous.note}; {note}"

        fused = replace(previous, price=round_cent(previous.price + discount), note=note)
        logger.debug(f"[DiscountHandler] '{previous.description}': {previous.price} -> {fused.price}")
        return replace(state, items=state.items[:-1] + (fused,))

    def _fit_discount(self, price: Decimal, discount: Decimal) -> Decimal:
        """
        Скидка не может увести цену товара ниже нуля.

        Сначала пробуем OCR-прочтения суммы скидки (8,90 -> 0,90),
        если ни одно не подходит - скидка ограничивается ценой товара.
        """
        if price + discount >= 0:
            return discount

        for candidate in discount_candidates(abs(discount)):
            if price - candidate >= 0:
                logger.debug(f"[DiscountHandler] OCR-правка скидки: {discount} -> {-candidate}")
                return -candidate

        logger.warning(f"[DiscountHandler] Скидка {discount} больше цены {price}, ограничена ценой")
        return -max(price, Decimal("0"))
