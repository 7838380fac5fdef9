"""
Valuation — ratio и стоимость доли инвестора в пуле

Единственный допустимый способ вычисления:
- performance ratio пула (total_capital / initial_capital)
- entry ratio инвестора (тот же ratio, зафиксированный в момент входа или сброса)
- текущей стоимости капитала инвестора и его gains

ФОРМУЛЫ:
    ratio = total_capital / initial_capital       (1.0 если initial_capital <= 0)
    current_value = capital × (current_ratio / entry_ratio)
    gains = current_value - capital

КРИТИЧЕСКИЙ ИНВАРИАНТ:
    Капитал инвестора масштабируется производительностью пула С МОМЕНТА ЕГО ВХОДА,
    а не за всё время жизни пула. Два инвестора с одинаковым capital, но разным
    entry_ratio, имеют разную current_value.
"""

from typing import Final

from pool_ledger.core.math.numerical_safeguards import safe_ratio

# Ratio пула без истории (пустой пул или неположительный initial_capital)
NEUTRAL_RATIO: Final[float] = 1.0


# =============================================================================
# RATIO
# =============================================================================


def entry_ratio(total_capital: float, initial_capital: float) -> float:
    """
    Entry ratio для нового инвестора.

    Фиксирует производительность пула в момент входа, чтобы новый
    инвестор не унаследовал уже накопленные нереализованные gains.

    Args:
        total_capital: Текущая рыночная стоимость пула
        initial_capital: Текущая база (сумма вложенного капитала)

    Returns:
        total_capital / initial_capital, или 1.0 при initial_capital <= 0

    Examples:
        >>> entry_ratio(11000.0, 10000.0)
        1.1
        >>> entry_ratio(1000.0, 0.0)
        1.0
    """
    return safe_ratio(total_capital, initial_capital, fallback=NEUTRAL_RATIO)


def current_ratio(total_capital: float, initial_capital: float) -> float:
    """
    Текущий performance ratio пула.

    Формула идентична entry_ratio; отличается только момент, в который
    она применяется.

    Examples:
        >>> current_ratio(12000.0, 10000.0)
        1.2
        >>> current_ratio(1000.0, -100.0)
        1.0
    """
    return safe_ratio(total_capital, initial_capital, fallback=NEUTRAL_RATIO)


# =============================================================================
# СТОИМОСТЬ И GAINS
# =============================================================================


def current_value(capital: float, entry_ratio: float, current_ratio: float) -> float:
    """
    Текущая стоимость капитала инвестора.

    Args:
        capital: Вложенный капитал (cost basis)
        entry_ratio: Ratio пула в момент входа / последнего сброса
        current_ratio: Текущий ratio пула

    Returns:
        capital × (current_ratio / entry_ratio);
        capital без изменений, если entry_ratio <= 0

    Examples:
        >>> current_value(1000.0, 1.0, 1.2)
        1200.0
        >>> current_value(1000.0, 1.5, 1.5)
        1000.0
        >>> current_value(1000.0, 0.0, 1.2)
        1000.0
    """
    if entry_ratio <= 0:
        return capital

    performance_since_entry = current_ratio / entry_ratio
    return capital * performance_since_entry


def gains(capital: float, current_value: float) -> float:
    """
    Gains инвестора (отрицательные значения — убыток).

    Examples:
        >>> gains(1000.0, 1200.0)
        200.0
        >>> gains(1000.0, 800.0)
        -200.0
    """
    return current_value - capital
