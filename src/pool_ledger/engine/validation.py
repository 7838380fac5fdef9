"""
Validation — проверка batch запросов на commission action

Все запросы batch проверяются против ОДНОГО заранее вычисленного снапшота
метрик (batch_metrics), а не против живого состояния. Поэтому результат не
зависит от порядка запросов.

Ошибки возвращаются структурированными записями, а не исключениями: вызывающий
слой может показать все отказы batch сразу.
"""

import logging
from typing import Final, Iterable, Mapping

from pool_ledger.core.domain.investor import InvestorSnapshot
from pool_ledger.core.domain.reinvestment import (
    CommissionAction,
    ReinvestmentError,
    ReinvestmentRequest,
    ReinvestmentValidation,
    ValidatedReinvestment,
)
from pool_ledger.core.math.numerical_safeguards import is_valid_float, round_to_cents

logger = logging.getLogger(__name__)

# Абсолютная толерантность на округление при сравнении с доступной комиссией
REINVEST_TOLERANCE: Final[float] = 0.01

INVESTOR_NOT_FOUND: Final[str] = "Investor not found"
INVALID_AMOUNT: Final[str] = "Amount must be a finite number"


def validate_reinvestments(
    requests: Iterable[ReinvestmentRequest],
    metrics_map: Mapping[str, InvestorSnapshot],
    tolerance: float = REINVEST_TOLERANCE,
) -> ReinvestmentValidation:
    """
    Валидация запросов против снапшота метрик.

    Порядок проверок для каждого запроса:
    1. Инвестор есть в снапшоте, иначе ошибка "Investor not found"
    2. amount=None → вся доступная комиссия
    3. NaN/Inf amount → ошибка "Amount must be a finite number"
    4. amount > commission + tolerance → ошибка (requested, max)
    5. Принятая сумма = min(amount, commission), округлена до центов;
       неположительная сумма пропускается без ошибки (no-op)

    Args:
        requests: Запросы batch
        metrics_map: Снапшот investor_id → InvestorSnapshot
        tolerance: Допуск на округление (default: 0.01)

    Returns:
        ReinvestmentValidation (valid=True только при отсутствии ошибок)
    """
    errors: list[ReinvestmentError] = []
    validated: list[ValidatedReinvestment] = []

    for request in requests:
        snapshot = metrics_map.get(request.investor_id)

        if snapshot is None:
            logger.warning("Commission request for unknown investor %s", request.investor_id)
            errors.append(
                ReinvestmentError(investor_id=request.investor_id, error=INVESTOR_NOT_FOUND)
            )
            continue

        max_amount = snapshot.commission
        amount = request.amount if request.amount is not None else max_amount

        if not is_valid_float(amount):
            logger.warning(
                "Commission request for %s rejected: non-finite amount %s",
                request.investor_id,
                amount,
            )
            errors.append(
                ReinvestmentError(
                    investor_id=request.investor_id,
                    name=snapshot.name,
                    error=INVALID_AMOUNT,
                    requested=amount,
                    max=max_amount,
                )
            )
            continue

        if amount > max_amount + tolerance:
            logger.warning(
                "Commission request for %s rejected: requested %s, max %s",
                request.investor_id,
                amount,
                max_amount,
            )
            errors.append(
                ReinvestmentError(
                    investor_id=request.investor_id,
                    name=snapshot.name,
                    error=f"Cannot claim {amount}, max is {max_amount}",
                    requested=amount,
                    max=max_amount,
                )
            )
            continue

        if amount <= 0:
            continue

        validated.append(
            ValidatedReinvestment(
                investor_id=request.investor_id,
                name=snapshot.name,
                amount=round_to_cents(min(amount, max_amount)),
                action=request.action if request.action is not None else CommissionAction.REINVEST,
            )
        )

    return ReinvestmentValidation(
        valid=not errors,
        errors=tuple(errors),
        validated=tuple(validated),
    )
