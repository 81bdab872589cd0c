"""Конфигурация движка котировок.

Все численные константы, влияющие на воспроизводимость котировок,
инжектируются через QuoteEngineConfig: шаги интегрирования, параметры
bisection, минимальные суммы сделок и порог предупреждения о проскальзывании.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from bonding_curve.core.errors import InvalidInput
from bonding_curve.core.math.integration import INTEGRATION_STEPS
from bonding_curve.core.math.numerical_safeguards import (
    validate_non_negative,
    validate_positive,
)
from bonding_curve.core.math.price_impact import MAX_SLIPPAGE_WARNING
from bonding_curve.core.math.solver import (
    SOLVER_MAX_ITERATIONS,
    SOLVER_TOLERANCE,
    SOLVER_UPPER_BOUND,
)

# =============================================================================
# МИНИМАЛЬНЫЕ СУММЫ СДЕЛОК (защита от dust)
# =============================================================================

# Минимальный бюджет покупки (SOL)
MIN_BUY_AMOUNT: Final[Decimal] = Decimal("0.001")

# Минимальное количество токенов для продажи
MIN_SELL_AMOUNT: Final[Decimal] = Decimal(1)

# Минимальное количество токенов в любой сделке (6 decimals)
MIN_TOKEN_AMOUNT: Final[Decimal] = Decimal("0.000001")


@dataclass(frozen=True)
class QuoteEngineConfig:
    """Конфигурация QuoteBuilder.

    Значения принимаются в любом числовом виде и нормализуются в Decimal.
    """

    integration_steps: int = INTEGRATION_STEPS
    solver_tolerance: Decimal = SOLVER_TOLERANCE
    solver_max_iterations: int = SOLVER_MAX_ITERATIONS
    solver_upper_bound: Decimal = SOLVER_UPPER_BOUND
    min_buy_amount: Decimal = MIN_BUY_AMOUNT
    min_sell_amount: Decimal = MIN_SELL_AMOUNT
    min_token_amount: Decimal = MIN_TOKEN_AMOUNT
    max_slippage_warning: Decimal = MAX_SLIPPAGE_WARNING

    def __post_init__(self) -> None:
        for name in ("integration_steps", "solver_max_iterations"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidInput(f"{name} must be an int >= 1, got {value!r}")

        # frozen dataclass: нормализация через object.__setattr__
        object.__setattr__(
            self, "solver_tolerance", validate_positive(self.solver_tolerance, "solver_tolerance")
        )
        object.__setattr__(
            self,
            "solver_upper_bound",
            validate_positive(self.solver_upper_bound, "solver_upper_bound"),
        )
        object.__setattr__(
            self, "min_buy_amount", validate_non_negative(self.min_buy_amount, "min_buy_amount")
        )
        object.__setattr__(
            self, "min_sell_amount", validate_non_negative(self.min_sell_amount, "min_sell_amount")
        )
        object.__setattr__(
            self,
            "min_token_amount",
            validate_non_negative(self.min_token_amount, "min_token_amount"),
        )
        object.__setattr__(
            self,
            "max_slippage_warning",
            validate_non_negative(self.max_slippage_warning, "max_slippage_warning"),
        )
