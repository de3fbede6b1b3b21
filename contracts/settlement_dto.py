"""
DTO контракт: вызывающая сторона <-> Settlement

Запрос на расчёт (позиции, участники, плательщик, распределение)
и результат (доли, балансы, переводы).
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .receipt_dto import ReceiptItemDTO


class ItemAssignment(BaseModel):
    """
    Распределение одной позиции.

    quantities (вес участника) имеет приоритет над participants,
    если сумма весов больше нуля.
    """

    participants: list[int] = Field(
        default_factory=list, description="Индексы участников (пусто = все)"
    )
    quantities: dict[int, int] = Field(
        default_factory=dict, description="Индекс участника -> количество (вес)"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("quantities")
    @classmethod
    def validate_quantities(cls, v: dict[int, int]) -> dict[int, int]:
        for index, weight in v.items():
            if weight < 0:
                raise ValueError(f"Quantity for participant {index} must be non-negative")
        return v


class SettlementRequest(BaseModel):
    """
    Входные данные расчёта.

    assignments индексируется номером позиции; позиция без записи
    делится поровну между всеми.
    """

    items: list[ReceiptItemDTO] = Field(default_factory=list, description="Позиции с финальными ценами")
    members: list[str] = Field(..., min_length=1, description="Имена участников (порядок = индекс)")
    payer: int = Field(0, description="Индекс участника, оплатившего чек")
    assignments: dict[int, ItemAssignment] = Field(
        default_factory=dict, description="Индекс позиции -> распределение"
    )

    model_config = ConfigDict(frozen=True)


class BalanceDTO(BaseModel):
    member: str = Field(..., description="Имя участника")
    paid: Decimal = Field(..., description="Оплачено (итог чека у плательщика, иначе 0)")
    share: Decimal = Field(..., description="Доля участника в позициях")
    net: Decimal = Field(..., description="paid - share")

    model_config = ConfigDict(frozen=True, from_attributes=True)


class TransferDTO(BaseModel):
    """Перевод долга. Сериализуется с ключами from/to."""

    from_index: int = Field(..., alias="from", description="Индекс должника")
    to_index: int = Field(..., alias="to", description="Индекс получателя")
    amount: Decimal = Field(..., gt=0, description="Сумма перевода")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SettlementDTO(BaseModel):
    """
    Результат расчёта.
    """

    shares: list[Decimal] = Field(default_factory=list, description="Доля каждого участника")
    balances: list[BalanceDTO] = Field(default_factory=list, description="Балансы по участникам")
    transfers: list[TransferDTO] = Field(default_factory=list, description="Минимальный набор переводов")
    total_receipt: Decimal = Field(Decimal("0.00"), description="Сумма всех позиций")
    total_assigned: Decimal = Field(Decimal("0.00"), description="Сумма распределённых позиций")
    unassigned: Decimal = Field(Decimal("0.00"), description="total_receipt - total_assigned")

    model_config = ConfigDict(frozen=True)
