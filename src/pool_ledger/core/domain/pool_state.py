"""
PoolState — Модель состояния пула

Immutable Pydantic модель из двух скаляров:
- total_capital: текущая рыночная стоимость всех средств пула
- initial_capital: cost basis — сумма вложенного капитала (знаменатель для ratio и share)

Оба значения могут быть нулевыми. Неположительный initial_capital никогда
не используется как знаменатель (ratio = 1.0).
"""

from pydantic import BaseModel, Field

from pool_ledger.core.math.valuation import current_ratio


class PoolState(BaseModel):
    """
    Снапшот пула.

    Immutable модель (frozen=True). Каждый переход состояния создаёт
    новый экземпляр.
    """

    total_capital: float = Field(default=0.0, description="Рыночная стоимость пула")
    initial_capital: float = Field(
        default=0.0, description="Cost basis пула (сумма вложенного капитала)"
    )

    model_config = {"frozen": True}

    @property
    def ratio(self) -> float:
        """Текущий performance ratio пула."""
        return current_ratio(self.total_capital, self.initial_capital)
