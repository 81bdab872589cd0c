"""
Domain models and value objects.

Contains curve configuration, fee schedule, trade request/quote models
and boundary unit conversions.
"""

from bonding_curve.core.domain.curve import (
    BASE_PRICE,
    EXPONENTIAL_GROWTH_RATE,
    LINEAR_SLOPE,
    CurveParameters,
    CurveType,
    SpotPrice,
    default_curve_parameters,
)
from bonding_curve.core.domain.fee_schedule import (
    CREATOR_FEE_RATE_DEFAULT,
    PROTOCOL_FEE_RATE_DEFAULT,
    FeeSchedule,
)
from bonding_curve.core.domain.trade import TradeDirection, TradeQuote, TradeRequest

# units импортируется последним: зависит от core.math, который зависит от моделей выше
from bonding_curve.core.domain.units import (
    DEFAULT_TOKEN_DECIMALS,
    LAMPORTS_PER_SOL,
    from_base_units,
    lamports_to_sol,
    sol_to_lamports,
    to_base_units,
)

__all__ = [
    # Curve model
    "BASE_PRICE",
    "LINEAR_SLOPE",
    "EXPONENTIAL_GROWTH_RATE",
    "CurveType",
    "CurveParameters",
    "SpotPrice",
    "default_curve_parameters",
    # Fee schedule
    "PROTOCOL_FEE_RATE_DEFAULT",
    "CREATOR_FEE_RATE_DEFAULT",
    "FeeSchedule",
    # Trade models
    "TradeDirection",
    "TradeRequest",
    "TradeQuote",
    # Units module
    "LAMPORTS_PER_SOL",
    "DEFAULT_TOKEN_DECIMALS",
    "to_base_units",
    "from_base_units",
    "sol_to_lamports",
    "lamports_to_sol",
]
