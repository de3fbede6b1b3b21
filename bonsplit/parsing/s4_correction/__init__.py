"""
Stage 4: OCR Correction

ЦКП: Сумма позиций сведена к итогу чека.
"""

from .stage import CorrectionStage, CorrectionResult, Correction

__all__ = ["CorrectionStage", "CorrectionResult", "Correction"]
