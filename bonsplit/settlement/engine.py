"""
Settlement Engine - расчёт долгов по чеку.

ЦКП: Кто кому сколько должен после совместной покупки.

Input: позиции с финальными ценами, участники, плательщик, распределение
Output: SettlementResult (доли, балансы, переводы)

Никаких исключений для плохих данных: индексы вне диапазона
игнорируются с предупреждением. Исключение бросается только на границе
контракта (невалидный SettlementRequest).
"""

from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence, Union
from loguru import logger
from pydantic import ValidationError

from config.settings import SETTLEMENT_EPSILON
from contracts.settlement_dto import SettlementDTO, SettlementRequest
from bonsplit.domain.exceptions import SettlementInputError
from bonsplit.parsing.extraction.money import money_sum, round_cent

from .allocation import allocate_shares
from .debt_simplifier import simplify_debts
from .models import Assignment, Balance, SettlementResult


class SettlementEngine:
    """
    Движок расчёта.

    Stateless: один экземпляр можно использовать для любых запросов.
    """

    def __init__(self, epsilon: Decimal = SETTLEMENT_EPSILON):
        self.epsilon = epsilon

    def settle(
        self,
        items: Sequence[Any],
        members: Sequence[str],
        payer: int,
        assignments: Optional[Mapping[int, Assignment]] = None,
    ) -> SettlementResult:
        """
        Считает доли, балансы и переводы.

        Args:
            items: Позиции (любые объекты с атрибутом price)
            members: Имена участников (индекс = участник)
            payer: Индекс плательщика
            assignments: {индекс позиции: Assignment}; нет записи = поровну между всеми

        Returns:
            SettlementResult
        """
        prices = [round_cent(item.price) for item in items]
        total_receipt = money_sum(prices)
        member_count = len(members)

        allocation = allocate_shares(prices, member_count, assignments)

        if not 0 <= payer < member_count:
            logger.warning(f"[SettlementEngine] Плательщик {payer} вне диапазона, оплату никто не внёс")

        balances = []
        for index, name in enumerate(members):
            paid = total_receipt if index == payer else Decimal("0.00")
            share = allocation.shares[index]
            balances.append(Balance(
                member=index,
                name=name,
                paid=paid,
                share=share,
                net=round_cent(paid - share),
            ))

        transfers = simplify_debts([b.net for b in balances], self.epsilon)

        result = SettlementResult(
            shares=allocation.shares,
            balances=balances,
            transfers=transfers,
            total_receipt=total_receipt,
            total_assigned=allocation.total_assigned,
        )

        logger.info(
            f"[SettlementEngine] {len(prices)} позиций на {member_count} участников: "
            f"итог={total_receipt}, распределено={allocation.total_assigned}, "
            f"{len(transfers)} переводов"
        )
        if result.unassigned != 0:
            logger.warning(f"[SettlementEngine] Не распределено: {result.unassigned}")

        return result

    def settle_request(self, request: Union[SettlementRequest, Mapping[str, Any]]) -> SettlementDTO:
        """
        Расчёт по контракту SettlementRequest.

        Args:
            request: SettlementRequest или dict (например, из JSON)

        Returns:
            SettlementDTO

        Raises:
            SettlementInputError: запрос не прошёл валидацию
        """
        if not isinstance(request, SettlementRequest):
            try:
                request = SettlementRequest.model_validate(request)
            except ValidationError as e:
                raise SettlementInputError(
                    f"Невалидный запрос на расчёт: {e.error_count()} ошибок",
                    component="SettlementEngine",
                    original_error=e,
                ) from e

        assignments = {
            index: Assignment.from_dto(assignment)
            for index, assignment in request.assignments.items()
        }
        return self.settle(request.items, request.members, request.payer, assignments).to_dto()


def settle(
    items: Sequence[Any],
    members: Sequence[str],
    payer: int,
    assignments: Optional[Mapping[int, Assignment]] = None,
) -> SettlementResult:
    """Расчёт с настройками по умолчанию."""
    return SettlementEngine().settle(items, members, payer, assignments)
