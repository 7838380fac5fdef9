"""
Reinvestment — запросы на commission action и результаты их валидации

ReinvestmentRequest приходит от вызывающего слоя (API).
ReinvestmentError / ValidatedReinvestment / ReinvestmentValidation — результат
проверки batch запросов против одного снапшота метрик.
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class CommissionAction(str, Enum):
    """Действие с комиссией"""

    REINVEST = "reinvest"
    WITHDRAW = "withdraw"


# =============================================================================
# REQUEST
# =============================================================================


class ReinvestmentRequest(BaseModel):
    """
    Запрос на реинвестирование или вывод комиссии.

    amount=None → запросить максимум доступной комиссии.
    action=None → реинвестирование.
    """

    investor_id: str = Field(..., min_length=1, description="Идентификатор инвестора")
    amount: float | None = Field(default=None, description="Сумма (None = максимум)")
    action: CommissionAction | None = Field(default=None, description="reinvest/withdraw")

    model_config = {"frozen": True}


# =============================================================================
# VALIDATION RESULTS
# =============================================================================


@dataclass(frozen=True)
class ReinvestmentError:
    """Отклонённый запрос.

    requested/max заполнены только для превышения доступной комиссии.
    """

    investor_id: str
    error: str
    name: str | None = None
    requested: float | None = None
    max: float | None = None


@dataclass(frozen=True)
class ValidatedReinvestment:
    """Принятый запрос: сумма ограничена комиссией и округлена до центов."""

    investor_id: str
    name: str
    amount: float
    action: CommissionAction


@dataclass(frozen=True)
class ReinvestmentValidation:
    """Результат валидации batch.

    valid=False, если отклонён хотя бы один запрос. Вызывающий слой должен
    отклонить весь batch целиком.
    """

    valid: bool
    errors: tuple[ReinvestmentError, ...] = field(default_factory=tuple)
    validated: tuple[ValidatedReinvestment, ...] = field(default_factory=tuple)
