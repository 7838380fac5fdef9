"""
Investor — Модель инвестора и его производные метрики

Investor — persisted запись (capital, entry_ratio, commission_rate, mode).
InvestorMetrics / InvestorSnapshot — эфемерные значения, вычисленные из пары
(PoolState, Investor) в один момент времени; движок их не сохраняет.
"""

from pydantic import BaseModel, Field

from pool_ledger.core.domain.reinvestment import CommissionAction
from pool_ledger.core.math.commission import DEFAULT_COMMISSION_RATE_PCT
from pool_ledger.core.math.valuation import NEUTRAL_RATIO


# =============================================================================
# INVESTOR
# =============================================================================


class Investor(BaseModel):
    """
    Модель инвестора пула.

    capital — вложенный капитал (cost basis), а не текущая стоимость.
    entry_ratio — ratio пула в момент входа или последнего commission action.
    mode — предпочтение инвестора по комиссии; на расчёты не влияет.

    None в entry_ratio / commission_rate означает "не задано" и заменяется
    default-значением при расчёте метрик. Ноль — легитимное значение
    (commission_rate=0 у оператора пула) и не заменяется.

    Диапазоны entry_ratio и commission_rate не ограничиваются: вырожденные
    значения обрабатываются движком (entry_ratio <= 0 → без масштабирования,
    rate > 100 → clamp).
    """

    id: str = Field(..., min_length=1, description="Идентификатор инвестора (opaque)")
    name: str = Field(..., min_length=1, description="Имя для отображения")
    capital: float = Field(..., description="Вложенный капитал (cost basis)")
    entry_ratio: float | None = Field(
        default=NEUTRAL_RATIO, description="Ratio пула в момент входа / сброса"
    )
    commission_rate: float | None = Field(
        default=DEFAULT_COMMISSION_RATE_PCT, description="Ставка комиссии (%, 0-100)"
    )
    mode: CommissionAction = Field(
        default=CommissionAction.REINVEST,
        description="Предпочтение по комиссии (reinvest / withdraw)",
    )

    model_config = {"frozen": True}


# =============================================================================
# METRICS
# =============================================================================


class InvestorMetrics(BaseModel):
    """
    Метрики инвестора на один снапшот пула.

    Денежные значения и share округлены до 2 знаков; ratio не округляются.
    """

    current_ratio: float = Field(..., description="Текущий ratio пула")
    entry_ratio: float = Field(..., description="Entry ratio инвестора (после default)")
    current_value: float = Field(..., description="Текущая стоимость капитала")
    gains: float = Field(..., description="Gains с момента entry (может быть < 0)")
    commission: float = Field(..., ge=0, description="Доступная комиссия")
    share: float = Field(..., description="Доля capital в initial_capital (%)")

    model_config = {"frozen": True}


class InvestorSnapshot(InvestorMetrics):
    """
    Метрики инвестора в составе batch снапшота.

    Дополнительно несёт идентификацию и capital для отображения и валидации.
    """

    investor_id: str = Field(..., min_length=1, description="Идентификатор инвестора")
    name: str = Field(..., description="Имя инвестора")
    capital: float = Field(..., description="Вложенный капитал")
