"""
Allocation - распределение цен позиций между участниками.

ЦКП: Доля каждого участника в сумме чека.

Для каждой позиции:
1. Веса (quantities) с суммой > 0 -> цена делится пропорционально весам
2. Иначе поровну между participants (пусто или нет записи -> все)

Доля участника в позиции округляется до цента, остаток от округления
не перераспределяется: сумма долей может отличаться от цены позиции
на несколько центов.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence
from loguru import logger

from bonsplit.parsing.extraction.money import money_sum, round_cent
from .models import Assignment


@dataclass
class AllocationResult:
    shares: List[Decimal] = field(default_factory=list)
    total_assigned: Decimal = Decimal("0.00")


def item_portions(
    price: Decimal,
    member_count: int,
    assignment: Optional[Assignment] = None,
) -> Dict[int, Decimal]:
    """
    Доли участников в одной позиции.

    Индексы вне диапазона участников игнорируются.

    Args:
        price: Цена позиции
        member_count: Число участников
        assignment: Распределение (None = поровну между всеми)

    Returns:
        {индекс участника: доля}; пустой словарь, если позиция никому не досталась
    """
    assignment = assignment or Assignment()

    weights = {
        index: weight
        for index, weight in assignment.quantities.items()
        if 0 <= index < member_count and weight > 0
    }
    weight_sum = sum(weights.values())
    if weight_sum > 0:
        return {
            index: round_cent(price * weight / weight_sum)
            for index, weight in sorted(weights.items())
        }

    if assignment.participants:
        participants = sorted(i for i in assignment.participants if 0 <= i < member_count)
        if not participants:
            logger.warning(
                f"[Allocation] Все индексы участников вне диапазона: {sorted(assignment.participants)}"
            )
            return {}
    else:
        participants = list(range(member_count))

    if not participants:
        return {}

    portion = round_cent(price / len(participants))
    return {index: portion for index in participants}


def allocate_shares(
    prices: Sequence[Decimal],
    member_count: int,
    assignments: Optional[Mapping[int, Assignment]] = None,
) -> AllocationResult:
    """
    Складывает доли по всем позициям.

    Args:
        prices: Цены позиций (по порядку)
        member_count: Число участников
        assignments: {индекс позиции: Assignment}

    Returns:
        AllocationResult (доли округлены до цента)
    """
    assignments = assignments or {}
    shares = [Decimal("0")] * member_count
    assigned_prices = []

    for item_index, price in enumerate(prices):
        portions = item_portions(price, member_count, assignments.get(item_index))
        if not portions:
            continue
        assigned_prices.append(price)
        for member, portion in portions.items():
            shares[member] += portion

    return AllocationResult(
        shares=[round_cent(share) for share in shares],
        total_assigned=money_sum(assigned_prices),
    )
