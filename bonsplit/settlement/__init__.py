"""
Домен Settlement: расчёт долгов после совместной покупки.

- Allocation: доли участников по позициям (поровну или по весам)
- Debt Simplifier: минимальный набор переводов
- Engine: балансы и итоговый результат

Вход: позиции (после Parsing) + contracts.SettlementRequest
Выход: contracts.SettlementDTO
"""

from .models import Assignment, Balance, Transfer, SettlementResult
from .allocation import allocate_shares, item_portions, AllocationResult
from .debt_simplifier import simplify_debts
from .engine import SettlementEngine, settle

__all__ = [
    "Assignment",
    "Balance",
    "Transfer",
    "SettlementResult",
    "allocate_shares",
    "item_portions",
    "AllocationResult",
    "simplify_debts",
    "SettlementEngine",
    "settle",
]
