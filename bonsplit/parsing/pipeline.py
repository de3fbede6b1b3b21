"""
Parsing Pipeline - Оркестратор этапов разбора чека.

Координирует выполнение этапов в строгом порядке:
1. Classification + 3. Items (построчно) -> 2. Total (независимо) ->
4. OCR Correction -> 5. Validation

Возвращает PipelineResult; контракт для вызывающей стороны - ParsedReceiptDTO.
"""

import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional
from loguru import logger

from config.settings import DEFAULT_LOCALE
from contracts.receipt_dto import ParsedReceiptDTO, ReceiptItemDTO

from .extraction.money import money_sum
from .locales.config_loader import ConfigLoader
from .s2_total import TotalStage, TotalResult
from .s3_items import ItemsStage, ItemsResult, ParsedItem
from .s4_correction import CorrectionStage, CorrectionResult
from .s5_validation import ValidationStage, ValidationResult


@dataclass
class ReceiptParseResult:
    """Итог разбора: позиции и итог чека (None, если не найден)."""
    items: List[ParsedItem] = field(default_factory=list)
    receipt_total: Optional[Decimal] = None

    @property
    def items_sum(self) -> Decimal:
        return money_sum(item.price for item in self.items)


@dataclass
class PipelineResult:
    """
    Полный результат пайплайна со всеми промежуточными данными.

    Используется для отладки и анализа (scripts/parse_receipt.py --debug).
    """
    items: List[ParsedItem] = field(default_factory=list)
    receipt_total: Optional[Decimal] = None

    # Промежуточные результаты этапов
    total: Optional[TotalResult] = None
    items_stage: Optional[ItemsResult] = None
    correction: Optional[CorrectionResult] = None
    validation: Optional[ValidationResult] = None

    # Метрики
    ocr_text: Optional[str] = None
    processing_time_ms: float = 0.0

    @property
    def receipt(self) -> ReceiptParseResult:
        return ReceiptParseResult(items=list(self.items), receipt_total=self.receipt_total)

    def to_dto(self) -> ParsedReceiptDTO:
        """Собирает ParsedReceiptDTO для вызывающей стороны."""
        items = [
            ReceiptItemDTO(
                description=item.description,
                price=item.price,
                is_deposit=item.is_deposit,
                is_deposit_return=item.is_deposit_return,
                note=item.note,
                was_ocr_corrected=item.was_ocr_corrected,
            )
            for item in self.items
        ]
        validation = self.validation
        return ParsedReceiptDTO(
            items=items,
            receipt_total=self.receipt_total,
            items_sum=validation.items_sum if validation else money_sum(i.price for i in self.items),
            difference=validation.difference if validation else None,
            reconciled=validation.reconciled if validation else False,
            ocr_text=self.ocr_text,
        )

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "receipt_total": str(self.receipt_total) if self.receipt_total is not None else None,
            "total": self.total.to_dict() if self.total else None,
            "items_stage": self.items_stage.to_dict() if self.items_stage else None,
            "correction": self.correction.to_dict() if self.correction else None,
            "validation": self.validation.to_dict() if self.validation else None,
            "processing_time_ms": self.processing_time_ms,
        }


class ParsingPipeline:
    """
    Пайплайн разбора чека.

    Не хранит состояния между вызовами: один экземпляр можно
    использовать из нескольких потоков.

    ЦКП: Позиции, сведённые к итогу чека.
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        config_loader: Optional[ConfigLoader] = None,
        items_stage: Optional[ItemsStage] = None,
        total_stage: Optional[TotalStage] = None,
        correction_stage: Optional[CorrectionStage] = None,
        validation_stage: Optional[ValidationStage] = None,
    ):
        """
        Инициализация пайплайна.

        Args:
            locale: Код локали конфигурации (de_DE)
            config_loader: Загрузчик конфигов локалей
            Этапы опциональны - по умолчанию создаются стандартные.
        """
        self.config_loader = config_loader or ConfigLoader()
        config = self.config_loader.load(locale)

        self.items_stage = items_stage or ItemsStage(config.classification)
        self.total_stage = total_stage or TotalStage(config.totals)
        self.correction_stage = correction_stage or CorrectionStage()
        self.validation_stage = validation_stage or ValidationStage()

        logger.debug(f"[ParsingPipeline] Инициализирован ({config.locale_code})")

    def process(self, text) -> PipelineResult:
        """
        Разбирает сырой текст OCR.

        Args:
            text: Текст чека. Не строка или пустая строка -> пустой результат.

        Returns:
            PipelineResult
        """
        if not isinstance(text, str) or not text.strip():
            logger.warning("[ParsingPipeline] Пустой текст, разбор пропущен")
            return PipelineResult(ocr_text=text if isinstance(text, str) else None)

        start_time = time.time()

        logger.debug("[ParsingPipeline] Stage 1-3: Classification + Items")
        items_result = self.items_stage.process(text)

        logger.debug("[ParsingPipeline] Stage 2: Total")
        total = self.total_stage.process(text)

        logger.debug("[ParsingPipeline] Stage 4: OCR Correction")
        correction = self.correction_stage.process(items_result.items, total.amount)

        logger.debug("[ParsingPipeline] Stage 5: Validation")
        validation = self.validation_stage.process(correction.items, total.amount)

        processing_time_ms = (time.time() - start_time) * 1000

        logger.info(
            f"[ParsingPipeline] {len(correction.items)} позиций, "
            f"сумма={validation.items_sum}, итог={total.amount}, "
            f"reconciled={validation.reconciled} ({processing_time_ms:.1f}ms)"
        )

        return PipelineResult(
            items=correction.items,
            receipt_total=total.amount,
            total=total,
            items_stage=items_result,
            correction=correction,
            validation=validation,
            ocr_text=text,
            processing_time_ms=processing_time_ms,
        )


def parse_receipt(text, locale: str = DEFAULT_LOCALE) -> ReceiptParseResult:
    """
    Разбирает текст чека: позиции и итоговая сумма.

    Args:
        text: Сырой текст OCR
        locale: Код локали

    Returns:
        ReceiptParseResult
    """
    return ParsingPipeline(locale=locale).process(text).receipt
