"""
Numerical Safeguards — безопасные примитивы для денежных расчётов пула

Модуль обеспечивает численную устойчивость операций движка:
- Безопасное отношение (ratio) с нейтральным fallback при нулевом/отрицательном знаменателе
- NaN/Inf проверки
- Округление "half away from zero" до центов и процентов
- Clamp значений в диапазон

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на неположительный знаменатель никогда не происходит (возвращается fallback)
2. Округление выполняется через Decimal от кратчайшего repr float,
   поэтому 100.455 → 100.46, а не 100.45 из-за бинарного представления
3. Все операции детерминированы и ничего не бросают для числовых входов
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ ОКРУГЛЕНИЯ
# =============================================================================

# Количество знаков после запятой для денежных сумм и процентов
MONEY_DECIMALS: Final[int] = 2
PERCENT_DECIMALS: Final[int] = 2


# =============================================================================
# БЕЗОПАСНОЕ ОТНОШЕНИЕ
# =============================================================================


def safe_ratio(numerator: float, denominator: float, fallback: float = 1.0) -> float:
    """
    Отношение numerator / denominator с нейтральным fallback.

    В отличие от epsilon-защиты, здесь неположительный знаменатель
    не подменяется малым числом: результат — fallback.
    Отрицательный знаменатель обрабатывается так же, как ноль.

    Args:
        numerator: Числитель
        denominator: Знаменатель (используется только если > 0)
        fallback: Значение при denominator <= 0 (default: 1.0)

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_ratio(11000.0, 10000.0)
        1.1
        >>> safe_ratio(1000.0, 0.0)
        1.0
        >>> safe_ratio(1000.0, -100.0)
        1.0
    """
    if denominator <= 0:
        return fallback

    return numerator / denominator


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Examples:
        >>> is_valid_float(1.0)
        True
        >>> is_valid_float(float('nan'))
        False
    """
    return not (math.isnan(value) or math.isinf(value))


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_half_away(value: float, decimals: int) -> float:
    """
    Округление "half away from zero" до заданного количества знаков.

    Decimal строится из repr(value), а не из точного бинарного значения:
    пользователь видит 100.455 и ожидает 100.46.

    Args:
        value: Значение для округления
        decimals: Количество знаков после запятой (>= 0)

    Returns:
        Округлённое значение (float). NaN/Inf возвращаются без изменений.

    Examples:
        >>> round_half_away(100.455, 2)
        100.46
        >>> round_half_away(-100.455, 2)
        -100.46
        >>> round_half_away(2.5, 0)
        3.0
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    if not is_valid_float(value):
        return value

    exact = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-decimals)

    # Точности контекста должно хватать на все цифры результата (до 1e308)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)

    result = float(rounded)

    # -0.0 → 0.0
    return result + 0.0


def round_to_cents(value: float) -> float:
    """
    Округление денежной суммы до центов.

    Examples:
        >>> round_to_cents(100.456)
        100.46
        >>> round_to_cents(100.454)
        100.45
    """
    return round_half_away(value, MONEY_DECIMALS)


def round_to_percent(value: float) -> float:
    """
    Округление процента до сотых.

    Examples:
        >>> round_to_percent(50.456)
        50.46
    """
    return round_half_away(value, PERCENT_DECIMALS)


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(150.0, max_value=100.0)
        100.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result
