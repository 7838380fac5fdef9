"""
Domain models and value objects.

Contains the pool state, investor records, commission requests and history entries.
"""

from pool_ledger.core.domain.history import HistoryEntry, HistoryEventType
from pool_ledger.core.domain.investor import (
    Investor,
    InvestorMetrics,
    InvestorSnapshot,
)
from pool_ledger.core.domain.pool_state import PoolState
from pool_ledger.core.domain.reinvestment import (
    CommissionAction,
    ReinvestmentError,
    ReinvestmentRequest,
    ReinvestmentValidation,
    ValidatedReinvestment,
)

__all__ = [
    # Pool state
    "PoolState",
    # Investor
    "Investor",
    "InvestorMetrics",
    "InvestorSnapshot",
    # Reinvestment
    "CommissionAction",
    "ReinvestmentRequest",
    "ReinvestmentError",
    "ValidatedReinvestment",
    "ReinvestmentValidation",
    # History
    "HistoryEntry",
    "HistoryEventType",
]
