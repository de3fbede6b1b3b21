"""
Контракты DTO между ядром Bonsplit и вызывающей стороной.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- Parsing -> Caller: ParsedReceiptDTO (receipt_dto.py)
- Caller -> Settlement -> Caller: SettlementRequest / SettlementDTO (settlement_dto.py)
"""

# Parsing -> Caller
from .receipt_dto import ReceiptItemDTO, ParsedReceiptDTO

# Caller <-> Settlement
from .settlement_dto import (
    ItemAssignment,
    SettlementRequest,
    BalanceDTO,
    TransferDTO,
    SettlementDTO,
)

__all__ = [
    # Parsing
    "ReceiptItemDTO",
    "ParsedReceiptDTO",
    # Settlement
    "ItemAssignment",
    "SettlementRequest",
    "BalanceDTO",
    "TransferDTO",
    "SettlementDTO",
]
