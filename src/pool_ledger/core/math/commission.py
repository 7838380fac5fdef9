"""
Commission — комиссия с gains инвестора

ФОРМУЛА:
    commission = gains × (rate / 100)

ПРАВИЛА:
1. gains <= 0 → 0 (нет комиссии на убытки и нулевую доходность)
2. rate > 100 → rate = 100 (clamp, без ошибки)
3. rate <= 0 → вся сумма gains

Правило 3 — намеренный special case: инвестор с 0% ставкой (оператор/трейдер
пула) может реинвестировать 100% своих gains. "Комиссия не взимается"
отличается от "нет gains".
"""

from typing import Final

from pool_ledger.core.math.numerical_safeguards import clamp

# Максимальная ставка комиссии (%)
MAX_COMMISSION_RATE_PCT: Final[float] = 100.0

# Ставка по умолчанию, если у инвестора она не задана (%)
DEFAULT_COMMISSION_RATE_PCT: Final[float] = 0.0


def commission(
    gains: float,
    commission_rate: float,
    max_rate: float = MAX_COMMISSION_RATE_PCT,
) -> float:
    """
    Комиссия, доступная инвестору с его gains.

    Args:
        gains: Gains инвестора с момента последнего сброса entry ratio
        commission_rate: Ставка в процентах (например, 50 для 50%)
        max_rate: Верхняя граница ставки (default: 100)

    Returns:
        Сумма комиссии (>= 0)

    Examples:
        >>> commission(200.0, 50.0)
        100.0
        >>> commission(-100.0, 50.0)
        0.0
        >>> commission(200.0, 0.0)
        200.0
        >>> commission(200.0, 150.0)
        200.0
    """
    if gains <= 0:
        return 0.0

    rate = clamp(commission_rate, max_value=max_rate)

    if rate <= 0:
        # Оператор пула: 100% gains
        return gains

    return gains * (rate / 100.0)
