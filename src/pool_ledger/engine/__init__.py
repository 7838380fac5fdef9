"""Engine — метрики, валидация и переходы состояния пула.

- metrics: снапшот метрик инвесторов и сводка пула
- validation: проверка batch commission запросов
- transitions: чистые переходы (total, initial)
- ledger: операции над пулом и roster
"""

from .ledger import (
    CommissionBatchResult,
    DuplicateInvestorError,
    InvalidCommissionBatchError,
    InvestorNotFoundError,
    LedgerConfig,
    LedgerState,
    LedgerUpdate,
    PoolLedgerError,
    add_investor,
    adjust_investor_capital,
    apply_commission,
    apply_commission_batch,
    record_market_value,
    remove_investor,
    update_investor,
)
from .metrics import PortfolioSummary, batch_metrics, investor_metrics, portfolio_summary
from .transitions import (
    AddInvestorTransition,
    CapitalAdjustmentTransition,
    MarketUpdateTransition,
    PoolTransition,
    RemoveInvestorTransition,
    calculate_entry_ratio_after_reinvest,
    calculate_state_after_add_investor,
    calculate_state_after_capital_adjustment,
    calculate_state_after_market_update,
    calculate_state_after_reinvest,
    calculate_state_after_remove_investor,
    calculate_state_after_withdraw,
)
from .validation import REINVEST_TOLERANCE, validate_reinvestments

__all__ = [
    # Metrics
    "investor_metrics",
    "batch_metrics",
    "portfolio_summary",
    "PortfolioSummary",
    # Validation
    "REINVEST_TOLERANCE",
    "validate_reinvestments",
    # Transitions
    "PoolTransition",
    "AddInvestorTransition",
    "CapitalAdjustmentTransition",
    "RemoveInvestorTransition",
    "MarketUpdateTransition",
    "calculate_state_after_add_investor",
    "calculate_state_after_reinvest",
    "calculate_state_after_withdraw",
    "calculate_state_after_capital_adjustment",
    "calculate_state_after_remove_investor",
    "calculate_state_after_market_update",
    "calculate_entry_ratio_after_reinvest",
    # Ledger
    "LedgerState",
    "LedgerUpdate",
    "LedgerConfig",
    "CommissionBatchResult",
    "PoolLedgerError",
    "InvestorNotFoundError",
    "DuplicateInvestorError",
    "InvalidCommissionBatchError",
    "add_investor",
    "remove_investor",
    "update_investor",
    "adjust_investor_capital",
    "record_market_value",
    "apply_commission_batch",
    "apply_commission",
]
