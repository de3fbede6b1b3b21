"""
Модели расчёта долгов.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, FrozenSet, List, Mapping, Sequence

from contracts.settlement_dto import BalanceDTO, ItemAssignment, SettlementDTO, TransferDTO
from bonsplit.parsing.extraction.money import format_price


@dataclass(frozen=True)
class Assignment:
    """
    Распределение одной позиции между участниками.

    - participants: поровну между указанными (пусто = между всеми)
    - quantities: пропорционально весам; если сумма весов > 0,
      имеет приоритет над participants
    """
    participants: FrozenSet[int] = frozenset()
    quantities: Mapping[int, int] = field(default_factory=dict)

    @classmethod
    def from_dto(cls, dto: ItemAssignment) -> "Assignment":
        return cls(participants=frozenset(dto.participants), quantities=dict(dto.quantities))


@dataclass(frozen=True)
class Balance:
    """Баланс участника: net > 0 - ему должны, net < 0 - должен он."""
    member: int
    name: str
    paid: Decimal
    share: Decimal
    net: Decimal

    def to_dto(self) -> BalanceDTO:
        return BalanceDTO(member=self.name, paid=self.paid, share=self.share, net=self.net)


@dataclass(frozen=True)
class Transfer:
    """Перевод от должника к кредитору."""
    from_index: int
    to_index: int
    amount: Decimal

    def describe(self, members: Sequence[str]) -> str:
        """'Bob bekommt 10,00 € von Alice'"""
        return f"{members[self.to_index]} bekommt {format_price(self.amount)} von {members[self.from_index]}"

    def to_dto(self) -> TransferDTO:
        return TransferDTO(from_index=self.from_index, to_index=self.to_index, amount=self.amount)


@dataclass
class SettlementResult:
    """
    Результат расчёта.

    ЦКП: Доли, балансы и минимальный набор переводов.
    """
    shares: List[Decimal] = field(default_factory=list)
    balances: List[Balance] = field(default_factory=list)
    transfers: List[Transfer] = field(default_factory=list)
    total_receipt: Decimal = Decimal("0.00")
    total_assigned: Decimal = Decimal("0.00")

    @property
    def unassigned(self) -> Decimal:
        return self.total_receipt - self.total_assigned

    def describe_transfers(self, members: Sequence[str]) -> List[str]:
        return [t.describe(members) for t in self.transfers]

    def to_dto(self) -> SettlementDTO:
        return SettlementDTO(
            shares=list(self.shares),
            balances=[b.to_dto() for b in self.balances],
            transfers=[t.to_dto() for t in self.transfers],
            total_receipt=self.total_receipt,
            total_assigned=self.total_assigned,
            unassigned=self.unassigned,
        )

    def to_dict(self) -> Dict:
        return self.to_dto().model_dump(mode="json", by_alias=True)
