"""
Money - денежные суммы в немецком формате.

ЦКП: Decimal с точностью до цента и обратное форматирование "1,99 €".
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional

from config.settings import CENT

MINUS_SIGN = "−"
EURO_SIGN = "€"


def round_cent(value) -> Decimal:
    """Округляет до цента (половина - вверх)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount(raw: str) -> Optional[Decimal]:
    """
    Парсит сумму с десятичной запятой.

    Третий знак после запятой отбрасывается, а не округляется:
    "2,999" -> 2.99 (OCR часто дописывает лишнюю цифру).

    Args:
        raw: Строка вида "1,99", "-0,90" или "12.345"

    Returns:
        Decimal или None если строка не является числом
    """
    if not raw:
        return None

    clean = raw.strip().replace(",", ".", 1)
    dot = clean.find(".")
    if dot != -1 and len(clean) - dot - 1 > 2:
        clean = clean[:dot + 3]

    try:
        return round_cent(Decimal(clean))
    except InvalidOperation:
        return None


def money_sum(values: Iterable[Decimal]) -> Decimal:
    return round_cent(sum(values, Decimal("0")))


def format_eur(value: Decimal) -> str:
    """Со знаком, для пометок о скидках: "−0,90 €", "+1,20 €"."""
    sign = MINUS_SIGN if value < 0 else "+"
    return f"{sign}{abs(value):.2f}".replace(".", ",") + f" {EURO_SIGN}"


def format_price(value: Decimal) -> str:
    """Минус только для отрицательных: "−6,50 €", "1,20 €"."""
    sign = MINUS_SIGN if value < 0 else ""
    return f"{sign}{abs(value):.2f}".replace(".", ",") + f" {EURO_SIGN}"
