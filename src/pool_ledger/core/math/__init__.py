"""
Core math modules для pool-ledger

Чистые числовые примитивы: ratio, стоимость доли, комиссия, округление.
"""

# Numerical Safeguards
from pool_ledger.core.math.numerical_safeguards import (
    # Rounding constants
    MONEY_DECIMALS,
    PERCENT_DECIMALS,
    # Safe ratio
    safe_ratio,
    # NaN/Inf
    is_valid_float,
    # Rounding
    round_half_away,
    round_to_cents,
    round_to_percent,
    # Utilities
    clamp,
)

# Valuation
from pool_ledger.core.math.valuation import (
    NEUTRAL_RATIO,
    current_ratio,
    current_value,
    entry_ratio,
    gains,
)

# Commission
from pool_ledger.core.math.commission import (
    DEFAULT_COMMISSION_RATE_PCT,
    MAX_COMMISSION_RATE_PCT,
    commission,
)

__all__ = [
    # Numerical Safeguards — Constants
    "MONEY_DECIMALS",
    "PERCENT_DECIMALS",
    # Numerical Safeguards — Functions
    "safe_ratio",
    "is_valid_float",
    "round_half_away",
    "round_to_cents",
    "round_to_percent",
    "clamp",
    # Valuation
    "NEUTRAL_RATIO",
    "current_ratio",
    "current_value",
    "entry_ratio",
    "gains",
    # Commission
    "DEFAULT_COMMISSION_RATE_PCT",
    "MAX_COMMISSION_RATE_PCT",
    "commission",
]
