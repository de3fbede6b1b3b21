"""
Stage 5: Validation

ЦКП: Checksum суммы позиций против итога чека.
"""

from .stage import ValidationStage, ValidationResult

__all__ = ["ValidationStage", "ValidationResult"]
