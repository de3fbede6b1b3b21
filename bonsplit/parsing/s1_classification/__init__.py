"""
Stage 1: Line Classification

ЦКП: Тип каждой строки чека.
"""

from .line_classifier import (
    LineClassifier,
    LineType,
    ClassifiedLine,
    split_lines,
    clean_description,
    strip_quantity,
)

__all__ = [
    "LineClassifier",
    "LineType",
    "ClassifiedLine",
    "split_lines",
    "clean_description",
    "strip_quantity",
]
