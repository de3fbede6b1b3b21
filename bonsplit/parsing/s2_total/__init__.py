"""
Stage 2: Total Extraction

ЦКП: Итоговая сумма чека.
"""

from .stage import TotalStage, TotalResult

__all__ = ["TotalStage", "TotalResult"]
