"""
Настройки проекта Bonsplit.

Все пороги указаны в евро. Часть значений можно переопределить
через переменные окружения (удобно для экспериментов в scripts/).
"""

import os
from decimal import Decimal

# =============================================================================
# ЛОКАЛЬ
# =============================================================================
# Поддерживаются только немецкие чеки (десятичная запятая, евро)
DEFAULT_LOCALE = os.getenv("BONSPLIT_LOCALE", "de_DE")

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("BONSPLIT_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | <level>{message}</level>"
)

# =============================================================================
# ДЕНЬГИ
# =============================================================================
CENT = Decimal("0.01")

# Сумма позиций совпадает с итогом чека, если разница <= 1 цент
MATCH_TOLERANCE = Decimal(os.getenv("BONSPLIT_MATCH_TOLERANCE", "0.01"))

# =============================================================================
# OCR-КОРРЕКЦИЯ
# =============================================================================
# Лимит итераций жадного прохода
MAX_GREEDY_PASSES = int(os.getenv("BONSPLIT_MAX_GREEDY_PASSES", "30"))

# Замена принимается, только если уменьшает разницу больше чем на полцента
MIN_IMPROVEMENT = Decimal("0.005")

# Остаток до 50 центов списывается на первую подходящую позицию
RESIDUAL_MIN = Decimal("0.01")
RESIDUAL_MAX = Decimal(os.getenv("BONSPLIT_RESIDUAL_MAX", "0.50"))

# =============================================================================
# РАСЧЁТ ДОЛГОВ
# =============================================================================
# Балансы меньше полцента считаются нулевыми
SETTLEMENT_EPSILON = Decimal("0.005")
