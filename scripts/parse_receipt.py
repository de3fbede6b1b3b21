#!/usr/bin/env python3
"""
Точка входа для домена Parsing (разбор текста чека после OCR).

Использование:
    # Разобрать текст из файла
    python scripts/parse_receipt.py receipt.txt

    # Текст из stdin
    cat receipt.txt | python scripts/parse_receipt.py

    # С трассировкой этапов
    python scripts/parse_receipt.py receipt.txt --debug
"""

import sys
import argparse
import json
from pathlib import Path
from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import DEFAULT_LOCALE, LOG_FORMAT, LOG_LEVEL
from bonsplit.domain.exceptions import BonsplitError
from bonsplit.parsing import ParsingPipeline
from bonsplit.parsing.extraction.money import format_price


def read_text(path: str = None) -> str:
    """Читает текст чека из файла или stdin."""
    if path:
        return Path(path).read_text(encoding="utf-8")
    return sys.stdin.read()


def print_summary(result) -> None:
    """Краткая таблица позиций в stderr (stdout остаётся чистым JSON)."""
    for item in result.items:
        flags = []
        if item.was_ocr_corrected:
            flags.append("OCR")
        if item.note:
            flags.append(item.note)
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        logger.info(f"   {item.description:<32} {format_price(item.price):>10}{suffix}")

    validation = result.validation
    if validation is not None:
        status = "OK" if validation.reconciled else "РАСХОЖДЕНИЕ"
        logger.info(f"   Сумма: {validation.items_sum}, итог: {validation.receipt_total} -> {status}")


def main() -> int:
    """Главная функция запуска домена Parsing."""
    parser = argparse.ArgumentParser(description="Bonsplit: разбор текста чека")
    parser.add_argument("path", nargs="?", help="Файл с текстом OCR (по умолчанию stdin)")
    parser.add_argument("--locale", default=DEFAULT_LOCALE, help="Код локали конфигурации")
    parser.add_argument("--debug", action="store_true", help="Вывести трассировку всех этапов")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG" if args.debug else LOG_LEVEL)

    try:
        text = read_text(args.path)
        pipeline = ParsingPipeline(locale=args.locale)
        result = pipeline.process(text)
    except (BonsplitError, OSError) as e:
        logger.error(f"[parse_receipt] {e}")
        return 1

    print_summary(result)

    if args.debug:
        payload = result.to_dict()
    else:
        payload = result.to_dto().model_dump(mode="json", exclude={"ocr_text"})
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
