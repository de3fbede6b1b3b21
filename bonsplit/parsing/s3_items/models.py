"""
Модели товарных позиций и состояния сборки.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class ParsedItem:
    """
    Распарсенная позиция чека.

    Цена всегда округлена до цента. Флаги ортогональны:
    - is_deposit / is_deposit_return: залог и его возврат
    - note: к позиции приклеена скидка
    - quantity_validated: арифметика "цена x количество" сошлась
    - was_ocr_corrected: цена исправлена (OCR-правка или остаток)
    """
    description: str
    price: Decimal
    is_deposit: bool = False
    is_deposit_return: bool = False
    note: Optional[str] = None
    was_ocr_corrected: bool = False
    quantity_validated: bool = False
    raw_text: str = ""

    @property
    def has_fused_discount(self) -> bool:
        return self.note is not None

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "price": str(self.price),
            "is_deposit": self.is_deposit,
            "is_deposit_return": self.is_deposit_return,
            "note": self.note,
            "was_ocr_corrected": self.was_ocr_corrected,
            "quantity_validated": self.quantity_validated,
        }


@dataclass(frozen=True)
class ParserState:
    """
    Состояние сборки, которое протягивается через строки по порядку.

    pending_description - последняя строка "похожая на название, но без цены".
    Нужна, когда скидка напечатана отдельной строкой под товаром без цены.
    """
    items: Tuple[ParsedItem, ...] = ()
    pending_description: Optional[str] = None
    reached_total: bool = False

    @property
    def has_items(self) -> bool:
        return bool(self.items)
