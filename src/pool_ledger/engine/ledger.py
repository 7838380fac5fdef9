"""
Ledger — операции над пулом и roster как чистые функции

Каждая операция принимает неизменяемый LedgerState и возвращает новый
LedgerState вместе с записями журнала. Операции комбинируют переходы из
transitions.py с изменением записей инвесторов.

Движок не присваивает идентификаторы, не ставит timestamp и ничего не
сохраняет. Вызывающий слой обязан:
1. Прочитать состояние пула и roster один раз
2. Вызвать операцию
3. Сохранить результат атомарно (одна транзакция), не допуская
   промежуточных изменений между чтением и записью
"""

import logging
from dataclasses import dataclass, field
from typing import Final, Iterable, Mapping

from pydantic import BaseModel, Field

from pool_ledger.core.domain.history import HistoryEntry, HistoryEventType
from pool_ledger.core.domain.investor import Investor, InvestorSnapshot
from pool_ledger.core.domain.pool_state import PoolState
from pool_ledger.core.domain.reinvestment import (
    CommissionAction,
    ReinvestmentError,
    ReinvestmentRequest,
    ReinvestmentValidation,
    ValidatedReinvestment,
)
from pool_ledger.core.math.commission import DEFAULT_COMMISSION_RATE_PCT
from pool_ledger.core.math.numerical_safeguards import round_to_cents
from pool_ledger.engine.metrics import batch_metrics
from pool_ledger.engine.transitions import (
    calculate_entry_ratio_after_reinvest,
    calculate_state_after_add_investor,
    calculate_state_after_capital_adjustment,
    calculate_state_after_market_update,
    calculate_state_after_reinvest,
    calculate_state_after_remove_investor,
    calculate_state_after_withdraw,
)
from pool_ledger.engine.validation import REINVEST_TOLERANCE, validate_reinvestments

logger = logging.getLogger(__name__)

DUPLICATE_REQUEST: Final[str] = "Duplicate commission request"
NO_COMMISSION_AVAILABLE: Final[str] = "No commission available"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class PoolLedgerError(Exception):
    """Базовая ошибка операций над пулом."""


class InvestorNotFoundError(PoolLedgerError):
    """Инвестор с указанным id отсутствует в roster."""

    def __init__(self, investor_id: str):
        super().__init__(f"Investor not found: {investor_id}")
        self.investor_id = investor_id


class DuplicateInvestorError(PoolLedgerError):
    """Инвестор с указанным id уже есть в roster."""

    def __init__(self, investor_id: str):
        super().__init__(f"Investor already exists: {investor_id}")
        self.investor_id = investor_id


class InvalidCommissionBatchError(PoolLedgerError):
    """
    Batch commission actions отклонён целиком.

    Ни одно действие batch не применяется, если отклонён хотя бы один запрос.
    """

    def __init__(self, message: str, errors: tuple[ReinvestmentError, ...] = ()):
        super().__init__(message)
        self.errors = errors


# =============================================================================
# STATE
# =============================================================================


class LedgerState(BaseModel):
    """
    Снапшот пула и roster.

    Immutable модель (frozen=True); порядок investors сохраняется между операциями.
    """

    pool: PoolState = Field(default_factory=PoolState, description="Состояние пула")
    investors: tuple[Investor, ...] = Field(default=(), description="Roster инвесторов")

    model_config = {"frozen": True}

    def find(self, investor_id: str) -> Investor | None:
        """Инвестор по id или None."""
        for investor in self.investors:
            if investor.id == investor_id:
                return investor
        return None

    def require(self, investor_id: str) -> Investor:
        """Инвестор по id.

        Raises:
            InvestorNotFoundError: если инвестора нет в roster
        """
        investor = self.find(investor_id)
        if investor is None:
            raise InvestorNotFoundError(investor_id)
        return investor


@dataclass(frozen=True)
class LedgerUpdate:
    """Результат операции: новое состояние и записи журнала (без timestamp)."""

    state: LedgerState
    history: tuple[HistoryEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CommissionBatchResult:
    """Результат применения batch commission actions."""

    update: LedgerUpdate
    applied: int
    total_reinvested: float
    total_withdrawn: float
    snapshot: Mapping[str, InvestorSnapshot]
    details: tuple[ValidatedReinvestment, ...]


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация ledger операций."""

    # Допуск на округление при проверке суммы против доступной комиссии
    reinvest_tolerance: float = REINVEST_TOLERANCE

    # Отклонять batch, в котором после валидации не осталось действий
    reject_empty_batch: bool = False


# =============================================================================
# ROSTER OPERATIONS
# =============================================================================


def add_investor(
    state: LedgerState,
    investor_id: str,
    name: str,
    capital: float,
    commission_rate: float | None = None,
    mode: CommissionAction | None = None,
) -> LedgerUpdate:
    """
    Добавление инвестора в пул.

    Новый инвестор получает entry ratio пула ДО добавления своих денег.

    Args:
        state: Текущее состояние
        investor_id: Идентификатор, присвоенный вызывающим слоем
        name: Имя инвестора
        capital: Вкладываемый капитал (> 0)
        commission_rate: Ставка (%); None → DEFAULT_COMMISSION_RATE_PCT
        mode: Предпочтение по комиссии; None → reinvest

    Raises:
        DuplicateInvestorError: если id уже занят
        ValueError: если capital <= 0
    """
    if state.find(investor_id) is not None:
        raise DuplicateInvestorError(investor_id)

    if capital <= 0:
        raise ValueError(f"capital must be positive, got {capital}")

    transition = calculate_state_after_add_investor(
        state.pool.total_capital, state.pool.initial_capital, capital
    )

    investor = Investor(
        id=investor_id,
        name=name,
        capital=capital,
        entry_ratio=transition.entry_ratio,
        commission_rate=(
            commission_rate if commission_rate is not None else DEFAULT_COMMISSION_RATE_PCT
        ),
        mode=mode if mode is not None else CommissionAction.REINVEST,
    )

    logger.info("Investor %s added with capital %s", investor_id, capital)

    return LedgerUpdate(
        state=LedgerState(
            pool=PoolState(
                total_capital=transition.total_capital,
                initial_capital=transition.initial_capital,
            ),
            investors=state.investors + (investor,),
        ),
        history=(
            HistoryEntry(
                event_type=HistoryEventType.INVESTOR_ADDED,
                investor_name=name,
                amount=capital,
            ),
        ),
    )


def remove_investor(state: LedgerState, investor_id: str) -> LedgerUpdate:
    """
    Удаление инвестора из пула.

    Пул уменьшается на текущую стоимость доли инвестора. Entry ratio
    остальных инвесторов не меняется.

    Raises:
        InvestorNotFoundError: если инвестора нет в roster
    """
    investor = state.require(investor_id)

    transition = calculate_state_after_remove_investor(
        state.pool.total_capital, state.pool.initial_capital, investor.capital
    )

    logger.info(
        "Investor %s removed, pool released %s", investor_id, transition.removed_value
    )

    return LedgerUpdate(
        state=LedgerState(
            pool=PoolState(
                total_capital=transition.total_capital,
                initial_capital=transition.initial_capital,
            ),
            investors=tuple(inv for inv in state.investors if inv.id != investor_id),
        ),
        history=(
            HistoryEntry(
                event_type=HistoryEventType.INVESTOR_REMOVED,
                investor_name=investor.name,
                amount=-investor.capital,
            ),
        ),
    )


def adjust_investor_capital(
    state: LedgerState, investor_id: str, new_capital: float
) -> LedgerUpdate:
    """
    Корректировка капитала инвестора (исправление ошибки ввода, не новые деньги).

    Capital инвестора заменяется, entry ratio не меняется, total пула не меняется.

    Raises:
        InvestorNotFoundError: если инвестора нет в roster
        ValueError: если new_capital <= 0
    """
    if new_capital <= 0:
        raise ValueError(f"new_capital must be positive, got {new_capital}")

    investor = state.require(investor_id)

    transition = calculate_state_after_capital_adjustment(
        state.pool.total_capital,
        state.pool.initial_capital,
        investor.capital,
        new_capital,
    )

    adjusted = investor.model_copy(update={"capital": new_capital})

    logger.info("Investor %s capital adjusted by %s", investor_id, transition.capital_diff)

    return LedgerUpdate(
        state=LedgerState(
            pool=PoolState(
                total_capital=transition.total_capital,
                initial_capital=transition.initial_capital,
            ),
            investors=tuple(
                adjusted if inv.id == investor_id else inv for inv in state.investors
            ),
        ),
        history=(
            HistoryEntry(
                event_type=HistoryEventType.CAPITAL_ADJUSTED,
                investor_name=investor.name,
                amount=transition.capital_diff,
            ),
        ),
    )


def update_investor(
    state: LedgerState,
    investor_id: str,
    commission_rate: float | None = None,
    mode: CommissionAction | None = None,
) -> LedgerUpdate:
    """
    Изменение настроек инвестора: ставки комиссии и/или mode.

    Capital, entry ratio и пул не меняются. None означает "не менять";
    commission_rate=0 применяется как обычное значение.

    Raises:
        InvestorNotFoundError: если инвестора нет в roster
    """
    investor = state.require(investor_id)

    changes: dict[str, object] = {}
    if commission_rate is not None:
        changes["commission_rate"] = commission_rate
    if mode is not None:
        changes["mode"] = CommissionAction(mode)

    if not changes:
        return LedgerUpdate(state=state)

    updated = investor.model_copy(update=changes)

    logger.info("Investor %s updated: %s", investor_id, sorted(changes))

    return LedgerUpdate(
        state=LedgerState(
            pool=state.pool,
            investors=tuple(
                updated if inv.id == investor_id else inv for inv in state.investors
            ),
        ),
    )


def record_market_value(state: LedgerState, new_total: float) -> LedgerUpdate:
    """
    Фиксация новой рыночной стоимости пула (рост или падение рынка).

    Roster не меняется; gains всех инвесторов пересчитываются из нового ratio.
    """
    transition = calculate_state_after_market_update(
        state.pool.total_capital, state.pool.initial_capital, new_total
    )

    event_type = HistoryEventType.PROFIT if transition.diff >= 0 else HistoryEventType.LOSS

    return LedgerUpdate(
        state=LedgerState(
            pool=PoolState(
                total_capital=transition.total_capital,
                initial_capital=transition.initial_capital,
            ),
            investors=state.investors,
        ),
        history=(HistoryEntry(event_type=event_type, amount=transition.diff),),
    )


# =============================================================================
# COMMISSION ACTIONS
# =============================================================================


def _duplicate_errors(requests: list[ReinvestmentRequest]) -> tuple[ReinvestmentError, ...]:
    seen: set[str] = set()
    errors = []
    for request in requests:
        if request.investor_id in seen:
            errors.append(
                ReinvestmentError(investor_id=request.investor_id, error=DUPLICATE_REQUEST)
            )
        seen.add(request.investor_id)
    return tuple(errors)


def apply_commission_batch(
    state: LedgerState,
    requests: Iterable[ReinvestmentRequest],
    config: LedgerConfig | None = None,
) -> CommissionBatchResult:
    """
    Применение batch commission actions (all-or-nothing).

    Алгоритм:
    1. Один снапшот метрик (batch_metrics) для всего batch
    2. Валидация всех запросов против этого снапшота
    3. Любая ошибка → InvalidCommissionBatchError, состояние не меняется
    4. Применение действий: reinvest (capital +, initial +), withdraw (total -)
    5. Сброс entry ratio каждого участвовавшего инвестора на ratio пула
       ПОСЛЕ всего batch: их gains обнуляются

    Сброс на итоговый ratio, а не на промежуточный, делает результат
    независимым от порядка запросов.

    Args:
        state: Текущее состояние
        requests: Запросы batch (не более одного на инвестора)
        config: Конфигурация (optional)

    Returns:
        CommissionBatchResult

    Raises:
        InvalidCommissionBatchError: если хотя бы один запрос отклонён,
            есть повторные запросы для одного инвестора, или (при
            reject_empty_batch) не осталось действий
    """
    if config is None:
        config = LedgerConfig()
    requests = list(requests)

    duplicates = _duplicate_errors(requests)
    if duplicates:
        logger.warning("Commission batch refused: %d duplicate requests", len(duplicates))
        raise InvalidCommissionBatchError(DUPLICATE_REQUEST, duplicates)

    pool = state.pool
    snapshot = batch_metrics(state.investors, pool.total_capital, pool.initial_capital)

    validation: ReinvestmentValidation = validate_reinvestments(
        requests, snapshot, tolerance=config.reinvest_tolerance
    )

    if not validation.valid:
        logger.warning("Commission batch refused: %d invalid requests", len(validation.errors))
        raise InvalidCommissionBatchError(
            "; ".join(error.error for error in validation.errors), validation.errors
        )

    if not validation.validated and config.reject_empty_batch:
        raise InvalidCommissionBatchError(NO_COMMISSION_AVAILABLE)

    total = pool.total_capital
    initial = pool.initial_capital
    total_reinvested = 0.0
    total_withdrawn = 0.0
    reinvested_by_investor: dict[str, float] = {}
    history: list[HistoryEntry] = []

    for action in validation.validated:
        if action.action == CommissionAction.WITHDRAW:
            transition = calculate_state_after_withdraw(total, initial, action.amount)
            total_withdrawn += action.amount
            history.append(
                HistoryEntry(
                    event_type=HistoryEventType.COMMISSION_WITHDRAWN,
                    investor_name=action.name,
                    amount=-action.amount,
                )
            )
        else:
            transition = calculate_state_after_reinvest(total, initial, action.amount)
            total_reinvested += action.amount
            reinvested_by_investor[action.investor_id] = action.amount
            history.append(
                HistoryEntry(
                    event_type=HistoryEventType.COMMISSION_REINVESTED,
                    investor_name=action.name,
                    amount=action.amount,
                )
            )

        total = transition.total_capital
        initial = transition.initial_capital

    reset_ratio = calculate_entry_ratio_after_reinvest(total, initial)
    acting = {action.investor_id for action in validation.validated}

    investors = tuple(
        inv.model_copy(
            update={
                "capital": inv.capital + reinvested_by_investor.get(inv.id, 0.0),
                "entry_ratio": reset_ratio,
            }
        )
        if inv.id in acting
        else inv
        for inv in state.investors
    )

    logger.info(
        "Commission batch applied: %d actions, reinvested %s, withdrawn %s",
        len(validation.validated),
        total_reinvested,
        total_withdrawn,
    )

    return CommissionBatchResult(
        update=LedgerUpdate(
            state=LedgerState(
                pool=PoolState(total_capital=total, initial_capital=initial),
                investors=investors,
            ),
            history=tuple(history),
        ),
        applied=len(validation.validated),
        total_reinvested=round_to_cents(total_reinvested),
        total_withdrawn=round_to_cents(total_withdrawn),
        snapshot=snapshot,
        details=validation.validated,
    )


def apply_commission(
    state: LedgerState,
    investor_id: str,
    action: CommissionAction = CommissionAction.REINVEST,
    amount: float | None = None,
    config: LedgerConfig | None = None,
) -> CommissionBatchResult:
    """
    Commission action одного инвестора.

    Batch из одного запроса; пустой результат (нет доступной комиссии)
    считается ошибкой.

    Raises:
        InvestorNotFoundError: если инвестора нет в roster
        InvalidCommissionBatchError: если сумма превышает комиссию или комиссии нет
    """
    state.require(investor_id)

    if config is None:
        config = LedgerConfig()
    single_config = LedgerConfig(
        reinvest_tolerance=config.reinvest_tolerance,
        reject_empty_batch=True,
    )

    request = ReinvestmentRequest(investor_id=investor_id, amount=amount, action=action)
    return apply_commission_batch(state, [request], single_config)
