"""
DTO контракт: Parsing -> вызывающая сторона (UI / HTTP слой)

Результат разбора текста чека: позиции, итог и сверка суммы.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ReceiptItemDTO(BaseModel):
    """
    Позиция чека после разбора и OCR-коррекции.
    """

    description: str = Field(..., description="Название позиции как извлечено из чека")
    price: Decimal = Field(..., description="Цена позиции (со знаком, до цента)")
    is_deposit: bool = Field(False, description="Залог (Pfand), положительная сумма")
    is_deposit_return: bool = Field(False, description="Возврат залога, отрицательная сумма")
    note: str | None = Field(None, description="Пометка о приклеенной скидке")
    was_ocr_corrected: bool = Field(False, description="Цена исправлена по итогу чека")

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ParsedReceiptDTO(BaseModel):
    """
    DTO для результата разбора чека.

    difference/reconciled позволяют показать пользователю расхождение
    между суммой позиций и итогом для ручной правки.
    """

    items: list[ReceiptItemDTO] = Field(default_factory=list, description="Позиции в порядке строк")
    receipt_total: Decimal | None = Field(None, description="Итоговая сумма из чека")
    items_sum: Decimal = Field(Decimal("0.00"), description="Сумма цен позиций")
    difference: Decimal | None = Field(None, description="|items_sum - receipt_total|")
    reconciled: bool = Field(False, description="Сумма позиций совпала с итогом (±1 цент)")
    ocr_text: str | None = Field(None, description="Raw OCR текст для отладки")

    model_config = ConfigDict(frozen=True, from_attributes=True)
