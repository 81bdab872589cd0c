"""
Core math modules для движка котировок

Математические примитивы и численные алгоритмы с гарантией воспроизводимости.
"""

# Numerical Safeguards
from bonding_curve.core.math.numerical_safeguards import (
    QUOTE_CONTEXT,
    QUOTE_PRECISION,
    is_close,
    quote_context,
    to_decimal,
    validate_in_range,
    validate_non_negative,
    validate_positive,
)

# Curve Functions
from bonding_curve.core.math.curves import (
    EXPONENT_SAFETY_LIMIT,
    exponential_price,
    linear_price,
    price_at_supply,
    spot_price,
)

# Integrator
from bonding_curve.core.math.integration import (
    INTEGRATION_STEPS,
    buy_cost,
    curve_cost,
    sell_proceeds,
)

# Fee Calculator
from bonding_curve.core.math.fees import (
    FeeBreakdown,
    bps_to_fraction,
    calculate_fees,
    calculate_fees_for_schedule,
)

# Trade Solver
from bonding_curve.core.math.solver import (
    SOLVER_MAX_ITERATIONS,
    SOLVER_TOLERANCE,
    SOLVER_UPPER_BOUND,
    TOKEN_QUANTUM,
    SolverResult,
    solve_tokens_for_budget,
)

# Price Impact
from bonding_curve.core.math.price_impact import (
    MAX_SLIPPAGE_WARNING,
    calculate_price_impact,
    exceeds_slippage_warning,
    minimum_received,
)

__all__ = [
    # Numerical Safeguards
    "QUOTE_CONTEXT",
    "QUOTE_PRECISION",
    "is_close",
    "quote_context",
    "to_decimal",
    "validate_in_range",
    "validate_non_negative",
    "validate_positive",
    # Curve Functions
    "EXPONENT_SAFETY_LIMIT",
    "exponential_price",
    "linear_price",
    "price_at_supply",
    "spot_price",
    # Integrator
    "INTEGRATION_STEPS",
    "buy_cost",
    "curve_cost",
    "sell_proceeds",
    # Fee Calculator
    "FeeBreakdown",
    "bps_to_fraction",
    "calculate_fees",
    "calculate_fees_for_schedule",
    # Trade Solver
    "SOLVER_MAX_ITERATIONS",
    "SOLVER_TOLERANCE",
    "SOLVER_UPPER_BOUND",
    "TOKEN_QUANTUM",
    "SolverResult",
    "solve_tokens_for_budget",
    # Price Impact
    "MAX_SLIPPAGE_WARNING",
    "calculate_price_impact",
    "exceeds_slippage_warning",
    "minimum_received",
]
