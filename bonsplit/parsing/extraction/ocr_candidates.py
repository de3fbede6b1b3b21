"""
OCR Candidates - варианты прочтения суммы при типичных ошибках OCR.

ЦКП: Список правдоподобных альтернатив для одной суммы.

Tesseract систематически путает ведущий 0 с 8 и 9 (в строках количества
ещё и с 6). Функции ниже - чистые преобразования "сумма -> список сумм",
поэтому поиск в CorrectionStage не зависит от того, какой генератор
используется.

Дубликаты не удаляются: поиск к ним идемпотентен.
"""

from decimal import Decimal
from typing import Callable, List

CandidateSource = Callable[[Decimal], List[Decimal]]

# Ведущие цифры, которые OCR путает с нулём
ZERO_LOOKALIKES = ("8", "9")


def _digits(value: Decimal) -> str:
    return f"{abs(value):.2f}"


def _valid(candidates: List[str]) -> List[Decimal]:
    result = [Decimal(c) for c in candidates]
    return [c for c in result if c >= 0]


def discount_candidates(value: Decimal) -> List[Decimal]:
    """
    Кандидаты для суммы скидки: только ведущая 8/9 -> 0.

    Пример: 8,90 -> 0,90
    """
    s = _digits(value)
    candidates = []
    if s[0] in ZERO_LOOKALIKES:
        candidates.append("0" + s[1:])
    return _valid(candidates)


def unit_price_candidates(value: Decimal) -> List[Decimal]:
    """
    Кандидаты для цены за штуку в строке количества.

    В строках "0,29 x 15" OCR часто читает 0 как 6: 6,29 -> 0,29.
    """
    s = _digits(value)
    candidates = []
    if s[0] == "6" and len(s) >= 4:
        candidates.append("0" + s[1:])
    if s[0] in ZERO_LOOKALIKES:
        candidates.append("0" + s[1:])
    return _valid(candidates)


def price_candidates(value: Decimal) -> List[Decimal]:
    """
    Кандидаты для цены товара (консервативные, чтобы не было ложных правок).

    Паттерны:
    - Ведущая 8/9 -> 0 (9,49 -> 0,49)
    - Многозначные "8X.YZ": отбросить ведущую цифру, затем заменить
      новую ведущую на 0 (83,95 -> 3,95 -> 0,95)
    - Первая цифра после запятой 9 -> 0 (1,99 -> 1,09)
    """
    s = _digits(value)
    candidates = []

    if s[0] in ZERO_LOOKALIKES:
        candidates.append("0" + s[1:])

        if len(s) > 4:
            rest = s[1:]
            if "." in rest:
                candidates.append(rest)
                if rest[0] != "0":
                    candidates.append("0" + rest[1:])

    if len(s) >= 4 and s[1] == "." and s[2] == "9":
        candidates.append(s[:2] + "0" + s[3])

    return _valid(candidates)
