"""
HistoryEntry — запись журнала операций пула

Движок формирует записи, но не присваивает им timestamp и не сохраняет:
это ответственность вызывающего слоя.
"""

from enum import Enum

from pydantic import BaseModel, Field


class HistoryEventType(str, Enum):
    """Тип события журнала"""

    INVESTOR_ADDED = "investor_added"
    INVESTOR_REMOVED = "investor_removed"
    CAPITAL_ADJUSTED = "capital_adjusted"
    COMMISSION_REINVESTED = "commission_reinvested"
    COMMISSION_WITHDRAWN = "commission_withdrawn"
    PROFIT = "profit"
    LOSS = "loss"


class HistoryEntry(BaseModel):
    """
    Запись журнала.

    amount — знаковая сумма: положительная для притока в пул / роста,
    отрицательная для оттока / убытка.
    """

    event_type: HistoryEventType = Field(..., description="Тип события")
    investor_name: str | None = Field(default=None, description="Имя инвестора (nullable)")
    amount: float = Field(..., description="Знаковая сумма события")

    model_config = {"frozen": True}
