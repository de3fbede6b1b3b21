"""Домен: общие исключения."""

from .exceptions import (
    BonsplitError,
    ParsingError,
    ParsingConfigurationError,
    SettlementError,
    SettlementInputError,
)

__all__ = [
    "BonsplitError",
    "ParsingError",
    "ParsingConfigurationError",
    "SettlementError",
    "SettlementInputError",
]
