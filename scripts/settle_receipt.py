#!/usr/bin/env python3
"""
Точка входа для домена Settlement (расчёт долгов).

Использование:
    # Запрос в формате SettlementRequest (JSON)
    python scripts/settle_receipt.py --request request.json

    # Разобрать чек и поделить всё поровну
    python scripts/settle_receipt.py receipt.txt --members Anna Ben Carla --payer 0
"""

import sys
import argparse
import json
from pathlib import Path
from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import LOG_FORMAT, LOG_LEVEL
from bonsplit.domain.exceptions import BonsplitError, SettlementInputError
from bonsplit.parsing import ParsingPipeline
from bonsplit.parsing.extraction.money import format_eur, format_price
from bonsplit.settlement import SettlementEngine


def load_request(args) -> dict:
    """Собирает запрос: из JSON файла или из текста чека и списка участников."""
    if args.request:
        with open(args.request, "r", encoding="utf-8") as f:
            return json.load(f)

    if not args.members:
        raise SettlementInputError("Нужен --request или --members", component="settle_receipt")

    text = Path(args.path).read_text(encoding="utf-8") if args.path else sys.stdin.read()
    dto = ParsingPipeline().process(text).to_dto()
    return {
        "items": [item.model_dump() for item in dto.items],
        "members": args.members,
        "payer": args.payer,
    }


def main() -> int:
    """Главная функция запуска домена Settlement."""
    parser = argparse.ArgumentParser(description="Bonsplit: расчёт долгов по чеку")
    parser.add_argument("path", nargs="?", help="Файл с текстом OCR (по умолчанию stdin)")
    parser.add_argument("--request", help="JSON в формате SettlementRequest")
    parser.add_argument("--members", nargs="+", help="Имена участников")
    parser.add_argument("--payer", type=int, default=0, help="Индекс плательщика")
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG" if args.verbose else LOG_LEVEL)

    try:
        request = load_request(args)
        result = SettlementEngine().settle_request(request)
    except (BonsplitError, OSError, json.JSONDecodeError) as e:
        logger.error(f"[settle_receipt] {e}")
        return 1

    members = request["members"]
    for balance in result.balances:
        logger.info(f"   {balance.member:<16} {format_eur(balance.net):>12}")
    for transfer in result.transfers:
        logger.info(f"   {members[transfer.to_index]} bekommt {format_price(transfer.amount)} von {members[transfer.from_index]}")

    print(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
