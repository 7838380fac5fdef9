"""
Contract Validation Module

Модуль для валидации JSON payload на границе движка.
"""

from .validators import (
    CommissionBatchValidator,
    ContractValidator,
    InvestorValidator,
    PoolStateValidator,
    ReinvestmentRequestValidator,
    SchemaLoader,
    validate_commission_batch,
    validate_investor,
    validate_pool_state,
    validate_reinvestment_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PoolStateValidator",
    "InvestorValidator",
    "ReinvestmentRequestValidator",
    "CommissionBatchValidator",
    # Functions
    "validate_pool_state",
    "validate_investor",
    "validate_reinvestment_request",
    "validate_commission_batch",
]
