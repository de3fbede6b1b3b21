"""
Stage 3: Item Building - Оркестратор

ЦКП: Позиции чека в порядке строк.

Input: сырой текст OCR
Output: ItemsResult (items, трассировка классификации)

Алгоритм:
1. Разбиение текста на строки
2. Классификация строки (LineClassifier) с учётом текущего состояния
3. Шаг сборки (ItemBuilder), включая слияние скидок и проверку количества
"""

from dataclasses import dataclass, field
from typing import List, Optional
from loguru import logger

from ..locales.config_loader import ClassificationConfig
from ..s1_classification.line_classifier import ClassifiedLine, LineClassifier, LineType, split_lines
from .item_builder import ItemBuilder
from .models import ParsedItem, ParserState


@dataclass
class ItemsResult:
    """
    Результат Stage 3: Item Building.

    ЦКП: Список позиций и трассировка классификации строк.
    """
    items: List[ParsedItem] = field(default_factory=list)
    lines: List[ClassifiedLine] = field(default_factory=list)

    @property
    def skipped_lines(self) -> int:
        skipped = (LineType.SKIP, LineType.NOISE, LineType.SUMMARY, LineType.UNPRICED)
        return sum(1 for line in self.lines if line.line_type in skipped)

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "lines": [line.to_dict() for line in self.lines],
            "items_count": len(self.items),
            "skipped_lines": self.skipped_lines,
        }


class ItemsStage:
    """
    Stage 3: Item Building.

    Строки обрабатываются строго по порядку: от предыдущих строк
    зависят ожидающее название и граница итогового блока.
    """

    def __init__(
        self,
        config: ClassificationConfig,
        classifier: Optional[LineClassifier] = None,
        builder: Optional[ItemBuilder] = None,
    ):
        self.classifier = classifier or LineClassifier(config)
        self.builder = builder or ItemBuilder(config)

    def process(self, text: str) -> ItemsResult:
        """
        Собирает позиции из сырого текста.

        Args:
            text: Сырой текст OCR

        Returns:
            ItemsResult
        """
        state = ParserState()
        classified: List[ClassifiedLine] = []

        for number, text_line in enumerate(split_lines(text or "")):
            line = self.classifier.classify(
                text_line,
                reached_total=state.reached_total,
                has_items=state.has_items,
                line_number=number,
            )
            classified.append(line)
            state = self.builder.step(state, line)

        logger.debug(f"[ItemsStage] {len(state.items)} позиций из {len(classified)} строк")
        return ItemsResult(items=list(state.items), lines=classified)
