"""
Stage 3: Item Building

ЦКП: Позиции чека (товары, залоги, возвраты, слитые скидки).
"""

from .models import ParsedItem, ParserState
from .item_builder import ItemBuilder
from .discount_handler import DiscountHandler
from .stage import ItemsStage, ItemsResult

__all__ = [
    "ParsedItem",
    "ParserState",
    "ItemBuilder",
    "DiscountHandler",
    "ItemsStage",
    "ItemsResult",
]
