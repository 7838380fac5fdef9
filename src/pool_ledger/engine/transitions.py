"""
Transitions — переходы состояния пула

Каждый переход — чистая функция (total, initial, ...) → новый (total, initial)
плюс побочные значения. Входные аргументы не изменяются, хранилище не
используется: сохранение результата — ответственность вызывающего слоя.

СВОДКА:
    add investor      total + c,          initial + c,      entry_ratio(до добавления)
    reinvest          total,              initial + a
    withdraw          total - a,          initial
    capital adjust    total,              initial + (new - old)
    remove investor   total - total×c/I,  initial - c
    market update     new_total,          initial
"""

import logging
from dataclasses import dataclass

from pool_ledger.core.math.numerical_safeguards import safe_ratio
from pool_ledger.core.math.valuation import NEUTRAL_RATIO, entry_ratio

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class PoolTransition:
    """Новое состояние пула после перехода."""

    total_capital: float
    initial_capital: float


@dataclass(frozen=True)
class AddInvestorTransition(PoolTransition):
    """Переход "добавление инвестора".

    entry_ratio вычислен по состоянию ДО добавления и записывается в нового инвестора.
    """

    entry_ratio: float


@dataclass(frozen=True)
class CapitalAdjustmentTransition(PoolTransition):
    """Переход "корректировка капитала инвестора"."""

    capital_diff: float


@dataclass(frozen=True)
class RemoveInvestorTransition(PoolTransition):
    """Переход "удаление инвестора".

    removed_value — часть total_capital, ушедшая вместе с инвестором.
    """

    removed_value: float


@dataclass(frozen=True)
class MarketUpdateTransition(PoolTransition):
    """Переход "новая рыночная стоимость пула".

    diff > 0 — прибыль, diff < 0 — убыток.
    """

    diff: float


# =============================================================================
# TRANSITIONS
# =============================================================================


def calculate_state_after_add_investor(
    current_total: float, current_initial: float, new_investor_capital: float
) -> AddInvestorTransition:
    """
    Состояние пула после добавления инвестора.

    Entry ratio фиксируется ДО того, как деньги нового инвестора разбавят пул.

    Examples:
        >>> calculate_state_after_add_investor(11000.0, 10000.0, 1000.0)
        AddInvestorTransition(total_capital=12000.0, initial_capital=11000.0, entry_ratio=1.1)
    """
    ratio = entry_ratio(current_total, current_initial)
    logger.debug("Add investor: capital=%s, entry_ratio=%s", new_investor_capital, ratio)

    return AddInvestorTransition(
        total_capital=current_total + new_investor_capital,
        initial_capital=current_initial + new_investor_capital,
        entry_ratio=ratio,
    )


def calculate_state_after_reinvest(
    current_total: float, current_initial: float, reinvest_amount: float
) -> PoolTransition:
    """
    Состояние пула после реинвестирования комиссии.

    Деньги не покидают пул (total без изменений), комиссия становится
    новым капиталом инвестора (initial растёт).

    Examples:
        >>> calculate_state_after_reinvest(11000.0, 10000.0, 500.0)
        PoolTransition(total_capital=11000.0, initial_capital=10500.0)
    """
    return PoolTransition(
        total_capital=current_total,
        initial_capital=current_initial + reinvest_amount,
    )


def calculate_state_after_withdraw(
    current_total: float, current_initial: float, withdraw_amount: float
) -> PoolTransition:
    """
    Состояние пула после вывода комиссии.

    Деньги покидают пул; cost basis не меняется.

    Examples:
        >>> calculate_state_after_withdraw(11000.0, 10000.0, 500.0)
        PoolTransition(total_capital=10500.0, initial_capital=10000.0)
    """
    return PoolTransition(
        total_capital=current_total - withdraw_amount,
        initial_capital=current_initial,
    )


def calculate_state_after_capital_adjustment(
    current_total: float,
    current_initial: float,
    old_capital: float,
    new_capital: float,
) -> CapitalAdjustmentTransition:
    """
    Состояние пула после корректировки капитала инвестора.

    Корректировка, а не новые деньги: total без изменений.

    Examples:
        >>> calculate_state_after_capital_adjustment(11000.0, 10000.0, 1000.0, 700.0)
        CapitalAdjustmentTransition(total_capital=11000.0, initial_capital=9700.0, capital_diff=-300.0)
    """
    capital_diff = new_capital - old_capital

    return CapitalAdjustmentTransition(
        total_capital=current_total,
        initial_capital=current_initial + capital_diff,
        capital_diff=capital_diff,
    )


def calculate_entry_ratio_after_reinvest(
    total_capital: float, new_initial_capital: float
) -> float:
    """
    Новый entry ratio инвестора после commission action (reinvest или withdraw).

    Равен ratio пула ПОСЛЕ применения действия, поэтому gains инвестора
    обнуляются и с уже полученных gains комиссия повторно не начисляется.

    Args:
        total_capital: total_capital после действия
        new_initial_capital: initial_capital после действия

    Examples:
        >>> calculate_entry_ratio_after_reinvest(12000.0, 10000.0)
        1.2
        >>> calculate_entry_ratio_after_reinvest(12000.0, 0.0)
        1.0
    """
    return safe_ratio(total_capital, new_initial_capital, fallback=NEUTRAL_RATIO)


def calculate_state_after_remove_investor(
    current_total: float, current_initial: float, investor_capital: float
) -> RemoveInvestorTransition:
    """
    Состояние пула после удаления инвестора.

    Пул уменьшается на пропорциональную долю total (capital / initial ДО
    удаления), то есть на текущую стоимость доли, а не только на principal.
    Ratio пула при этом сохраняется, поэтому entry ratio остальных инвесторов
    сбрасывать не нужно.

    Examples:
        >>> calculate_state_after_remove_investor(12000.0, 10000.0, 2000.0)
        RemoveInvestorTransition(total_capital=9600.0, initial_capital=8000.0, removed_value=2400.0)
    """
    share = safe_ratio(investor_capital, current_initial, fallback=0.0)
    removed_value = current_total * share

    logger.debug("Remove investor: capital=%s, removed_value=%s", investor_capital, removed_value)

    return RemoveInvestorTransition(
        total_capital=current_total - removed_value,
        initial_capital=current_initial - investor_capital,
        removed_value=removed_value,
    )


def calculate_state_after_market_update(
    current_total: float, current_initial: float, new_total: float
) -> MarketUpdateTransition:
    """
    Состояние пула после обновления рыночной стоимости.

    Examples:
        >>> calculate_state_after_market_update(10000.0, 10000.0, 10800.0)
        MarketUpdateTransition(total_capital=10800.0, initial_capital=10000.0, diff=800.0)
    """
    return MarketUpdateTransition(
        total_capital=new_total,
        initial_capital=current_initial,
        diff=new_total - current_total,
    )
