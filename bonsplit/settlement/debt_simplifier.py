"""
Debt Simplifier - сведение балансов к минимальному набору переводов.

ЦКП: Список переводов "должник -> кредитор".

Алгоритм (жадный, два указателя):
1. Должники (net < -ε) и кредиторы (net > ε), каждый список по убыванию суммы
2. Перевод min(долг, требование) от текущего должника текущему кредитору
3. Указатель сдвигается, когда остаток падает ниже ε

Переводов не больше, чем участников минус один. Остаток меньше
полцента (пыль округления) отбрасывается.
"""

from decimal import Decimal
from typing import List, Sequence
from loguru import logger

from config.settings import CENT, SETTLEMENT_EPSILON
from bonsplit.parsing.extraction.money import round_cent
from .models import Transfer


def simplify_debts(nets: Sequence[Decimal], epsilon: Decimal = SETTLEMENT_EPSILON) -> List[Transfer]:
    """
    Строит переводы по балансам участников.

    Args:
        nets: net каждого участника (индекс = участник)
        epsilon: Балансы по модулю не больше epsilon считаются закрытыми

    Returns:
        Список Transfer в порядке построения
    """
    debtors = [[index, -net] for index, net in enumerate(nets) if net < -epsilon]
    creditors = [[index, net] for index, net in enumerate(nets) if net > epsilon]

    # sorted устойчив: при равных суммах порядок участников сохраняется
    debtors = sorted(debtors, key=lambda d: d[1], reverse=True)
    creditors = sorted(creditors, key=lambda c: c[1], reverse=True)

    transfers: List[Transfer] = []
    i, j = 0, 0

    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        amount = round_cent(min(debtor[1], creditor[1]))

        if amount >= CENT:
            transfers.append(Transfer(from_index=debtor[0], to_index=creditor[0], amount=amount))

        debtor[1] -= amount
        creditor[1] -= amount

        if debtor[1] < epsilon:
            i += 1
        if creditor[1] < epsilon:
            j += 1

    logger.debug(
        f"[DebtSimplifier] {len(debtors)} должников, {len(creditors)} кредиторов -> "
        f"{len(transfers)} переводов"
    )
    return transfers
