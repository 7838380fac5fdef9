"""
Metrics — метрики инвесторов на снапшот пула

Композиция ratio / valuation / commission в снапшот инвестора:
    current_ratio = total / initial
    current_value = capital × current_ratio / entry_ratio
    gains         = current_value - capital
    commission    = f(gains, rate)
    share         = capital / initial × 100

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Округление выполняется один раз, на выходе; промежуточные значения не округляются
2. Batch: все инвесторы считаются против ОДНОЙ пары (total, initial)
3. Метрики инвестора зависят только от его (capital, entry_ratio, commission_rate)
   и снапшота пула: порядок и состав roster на них не влияют
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from pool_ledger.core.domain.investor import Investor, InvestorMetrics, InvestorSnapshot
from pool_ledger.core.math.commission import DEFAULT_COMMISSION_RATE_PCT, commission
from pool_ledger.core.math.numerical_safeguards import (
    round_to_cents,
    round_to_percent,
    safe_ratio,
)
from pool_ledger.core.math.valuation import (
    NEUTRAL_RATIO,
    current_ratio,
    current_value,
    gains,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PER-INVESTOR
# =============================================================================


def _raw_metrics(
    investor: Investor, total_capital: float, initial_capital: float
) -> dict[str, float]:
    """Неокруглённые метрики инвестора."""
    ratio_now = current_ratio(total_capital, initial_capital)

    # Явная проверка на None: entry_ratio=0 и commission_rate=0 не заменяются
    ratio_at_entry = (
        investor.entry_ratio if investor.entry_ratio is not None else NEUTRAL_RATIO
    )
    rate = (
        investor.commission_rate
        if investor.commission_rate is not None
        else DEFAULT_COMMISSION_RATE_PCT
    )

    value = current_value(investor.capital, ratio_at_entry, ratio_now)
    investor_gains = gains(investor.capital, value)

    return {
        "current_ratio": ratio_now,
        "entry_ratio": ratio_at_entry,
        "current_value": value,
        "gains": investor_gains,
        "commission": commission(investor_gains, rate),
        "share": safe_ratio(investor.capital, initial_capital, fallback=0.0) * 100.0,
    }


def _rounded(raw: dict[str, float]) -> dict[str, float]:
    return {
        "current_ratio": raw["current_ratio"],
        "entry_ratio": raw["entry_ratio"],
        "current_value": round_to_cents(raw["current_value"]),
        "gains": round_to_cents(raw["gains"]),
        "commission": round_to_cents(raw["commission"]),
        "share": round_to_percent(raw["share"]),
    }


def investor_metrics(
    investor: Investor, total_capital: float, initial_capital: float
) -> InvestorMetrics:
    """
    Метрики одного инвестора.

    Args:
        investor: Запись инвестора
        total_capital: Текущая стоимость пула
        initial_capital: Cost basis пула

    Returns:
        InvestorMetrics (денежные значения и share округлены до 2 знаков)

    Examples:
        >>> inv = Investor(id="a", name="Alice", capital=1000.0, commission_rate=50.0)
        >>> m = investor_metrics(inv, 12000.0, 10000.0)
        >>> (m.current_value, m.gains, m.commission, m.share)
        (1200.0, 200.0, 100.0, 10.0)
    """
    raw = _raw_metrics(investor, total_capital, initial_capital)
    return InvestorMetrics(**_rounded(raw))


# =============================================================================
# BATCH
# =============================================================================


def batch_metrics(
    investors: Iterable[Investor], total_capital: float, initial_capital: float
) -> dict[str, InvestorSnapshot]:
    """
    Метрики всего roster на один снапшот пула.

    id инвесторов должны быть уникальны: при повторе id в snapshot остаётся
    последняя запись, о чём пишется warning.

    Args:
        investors: Roster инвесторов (порядок не важен)
        total_capital: Текущая стоимость пула
        initial_capital: Cost basis пула

    Returns:
        dict investor_id → InvestorSnapshot
    """
    snapshot: dict[str, InvestorSnapshot] = {}

    for investor in investors:
        if investor.id in snapshot:
            logger.warning("Duplicate investor id %s in roster, later entry wins", investor.id)
        raw = _raw_metrics(investor, total_capital, initial_capital)
        snapshot[investor.id] = InvestorSnapshot(
            **_rounded(raw),
            investor_id=investor.id,
            name=investor.name,
            capital=investor.capital,
        )

    logger.debug(
        "Batch metrics computed for %d investors (total=%s, initial=%s)",
        len(snapshot),
        total_capital,
        initial_capital,
    )
    return snapshot


# =============================================================================
# PORTFOLIO SUMMARY
# =============================================================================


@dataclass(frozen=True)
class PortfolioSummary:
    """Сводные показатели пула для отображения."""

    total_capital: float
    initial_capital: float
    current_ratio: float
    performance_pct: float  # (ratio - 1) × 100
    total_gains: float  # total - initial
    total_commission: float  # сумма доступных комиссий инвесторов
    investor_count: int


def portfolio_summary(
    total_capital: float,
    initial_capital: float,
    investors: Iterable[Investor],
) -> PortfolioSummary:
    """
    Сводка по пулу на один снапшот.

    total_commission суммирует неокруглённые комиссии и округляет результат
    один раз.

    Examples:
        >>> roster = [Investor(id="a", name="A", capital=10000.0, commission_rate=50.0)]
        >>> s = portfolio_summary(11000.0, 10000.0, roster)
        >>> (s.performance_pct, s.total_gains, s.total_commission)
        (10.0, 1000.0, 500.0)
    """
    ratio_now = current_ratio(total_capital, initial_capital)
    raw_commissions = [
        _raw_metrics(investor, total_capital, initial_capital)["commission"]
        for investor in investors
    ]

    return PortfolioSummary(
        total_capital=round_to_cents(total_capital),
        initial_capital=round_to_cents(initial_capital),
        current_ratio=ratio_now,
        performance_pct=round_to_percent((ratio_now - 1.0) * 100.0),
        total_gains=round_to_cents(total_capital - initial_capital),
        total_commission=round_to_cents(sum(raw_commissions)),
        investor_count=len(raw_commissions),
    )
