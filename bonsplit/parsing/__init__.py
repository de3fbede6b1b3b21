"""
Домен Parsing: разбор сырого текста OCR немецкого чека.

Архитектура: поэтапный пайплайн
- Stage 1: Classification (тип строки: служебная / итог / скидка / залог / товар)
- Stage 2: Total (итоговая сумма чека, независимо от строк)
- Stage 3: Items (сборка позиций, слияние скидок, проверка количества)
- Stage 4: OCR Correction (сведение суммы позиций к итогу)
- Stage 5: Validation (checksum)

Вход: str (текст после OCR)
Выход: contracts.ParsedReceiptDTO
"""

from bonsplit.parsing.pipeline import (
    ParsingPipeline,
    PipelineResult,
    ReceiptParseResult,
    parse_receipt,
)
from bonsplit.parsing.locales.config_loader import ConfigLoader, LocaleConfig

# Stage exports
from bonsplit.parsing.s1_classification import LineClassifier, LineType, ClassifiedLine
from bonsplit.parsing.s2_total import TotalStage, TotalResult
from bonsplit.parsing.s3_items import ItemsStage, ItemsResult, ParsedItem
from bonsplit.parsing.s4_correction import CorrectionStage, CorrectionResult
from bonsplit.parsing.s5_validation import ValidationStage, ValidationResult

__all__ = [
    # Pipeline
    "ParsingPipeline",
    "PipelineResult",
    "ReceiptParseResult",
    "parse_receipt",
    "ConfigLoader",
    "LocaleConfig",
    # Stages
    "LineClassifier",
    "LineType",
    "ClassifiedLine",
    "TotalStage",
    "TotalResult",
    "ItemsStage",
    "ItemsResult",
    "ParsedItem",
    "CorrectionStage",
    "CorrectionResult",
    "ValidationStage",
    "ValidationResult",
]
