"""
Item Builder - Сборка позиций из классифицированных строк.

ЦКП: Упорядоченный список ParsedItem.

SRP: Один шаг = одна строка. Состояние (ParserState) не хранится в
объекте, а передаётся явно: step(state, line) -> new_state.
"""

from dataclasses import replace
from loguru import logger

from ..extraction.math_checker import MathChecker
from ..locales.config_loader import ClassificationConfig
from ..s1_classification.line_classifier import (
    ClassifiedLine,
    LineType,
    clean_description,
    strip_quantity,
)
from .discount_handler import DiscountHandler
from .models import ParsedItem, ParserState


class ItemBuilder:
    """
    Сборщик позиций.

    Использует:
    - DiscountHandler: слияние скидок с предыдущим товаром
    - MathChecker: проверка строк количества
    """

    def __init__(
        self,
        config: ClassificationConfig,
        discount_handler: DiscountHandler = None,
        math_checker: MathChecker = None,
    ):
        self.config = config
        self.discount_handler = discount_handler or DiscountHandler(config)
        self.math_checker = math_checker or MathChecker()

    def step(self, state: ParserState, line: ClassifiedLine) -> ParserState:
        """
        Применяет одну строку к состоянию.

        Args:
            state: Текущее состояние
            line: Классифицированная строка

        Returns:
            Новое состояние (исходное не меняется)
        """
        line_type = line.line_type

        if line_type == LineType.SKIP:
            return replace(state, pending_description=None)

        if line_type == LineType.TOTAL_MARKER:
            return replace(state, pending_description=None, reached_total=True)

        if line_type in (LineType.DISCOUNT, LineType.IMPLICIT_DISCOUNT):
            return self.discount_handler.apply(state, line)

        if line_type == LineType.DEPOSIT_RETURN:
            item = ParsedItem(
                description=self.config.deposit_return_label,
                price=-abs(line.amount),
                is_deposit_return=True,
                raw_text=line.text,
            )
            return replace(
                state,
                items=state.items + (item,),
                pending_description=None,
                reached_total=state.reached_total or line.starts_summary,
            )

        if line_type == LineType.DEPOSIT:
            item = ParsedItem(
                description=clean_description(line.description) or self.config.deposit_label,
                price=abs(line.amount),
                is_deposit=True,
                raw_text=line.text,
            )
            return replace(state, items=state.items + (item,), pending_description=None)

        if line_type in (LineType.QUANTITY, LineType.ITEM):
            return self._add_item(state, line)

        if line_type == LineType.DESCRIPTION:
            return replace(state, pending_description=line.text)

        # NOISE, SUMMARY, UNPRICED: состояние не меняется
        return state

    def _add_item(self, state: ParserState, line: ClassifiedLine) -> ParserState:
        price = line.amount
        validated = False
        corrected = False

        if line.line_type == LineType.QUANTITY:
            math = self.math_checker.verify(line.text, price)
            price = math.total
            validated = math.is_valid
            corrected = math.was_corrected

        description = strip_quantity(clean_description(line.description))
        if not description:
            logger.debug(f"[ItemBuilder] Строка без названия пропущена: '{line.text}'")
            return state

        item = ParsedItem(
            description=description,
            price=price,
            quantity_validated=validated,
            was_ocr_corrected=corrected,
            raw_text=line.text,
        )
        return replace(state, items=state.items + (item,), pending_description=None)
