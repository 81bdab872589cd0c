"""
Trade Solver — Обращение интеграла кривой методом bisection

Задача (только BUY, для SELL есть прямая формула):
    по бюджету B (после комиссий) и from_supply найти tokens такое, что
    buy_cost(tokens, from_supply) == B с точностью tolerance

Алгоритм:
    bisection по tokens ∈ [0, upper_bound]
    - cost(mid) <  B → low = mid
    - cost(mid) >= B → high = mid
    - |cost(mid) - B| <= tolerance → результат
    - не более max_iterations итераций (гарантированное завершение)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Корректность опирается на строгую монотонность buy_cost по amount
   (см. контракт в integration.py)
2. Возвращённый результат всегда удовлетворяет |cost - B| <= tolerance
3. Неудача никогда не маскируется нулём: SolverFailure
4. NumericOverflow при оценке mid означает cost(mid) > любого бюджета → high = mid
"""

import logging
from decimal import Decimal
from typing import Final, NamedTuple

from bonding_curve.core.domain.curve import CurveParameters, CurveType
from bonding_curve.core.errors import InvalidInput, NumericOverflow, SolverFailure
from bonding_curve.core.math.integration import INTEGRATION_STEPS, buy_cost
from bonding_curve.core.math.numerical_safeguards import (
    QUOTE_PRECISION,
    TWO,
    DecimalLike,
    is_close,
    quote_context,
    validate_non_negative,
    validate_positive,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ SOLVER
# =============================================================================

# Абсолютная толерантность по стоимости (native currency, 1 millionth SOL)
SOLVER_TOLERANCE: Final[Decimal] = Decimal("0.000001")

# Максимальное количество итераций bisection
SOLVER_MAX_ITERATIONS: Final[int] = 100

# Начальная верхняя граница количества токенов
SOLVER_UPPER_BOUND: Final[Decimal] = Decimal(1_000_000_000)

# Шаг квантования кандидатов по токенам (18 знаков после запятой).
# supply ± tokens остаётся точным в QUOTE_CONTEXT, поэтому BUY → SELL
# того же количества возвращает supply ровно к исходному значению.
TOKEN_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-18)


class SolverResult(NamedTuple):
    """Результат bisection."""

    tokens: Decimal  # Найденное количество токенов
    cost: Decimal  # buy_cost(tokens, from_supply)
    iterations: int  # Количество вычислений стоимости в цикле


def solve_tokens_for_budget(
    budget: DecimalLike,
    from_supply: DecimalLike,
    curve_type: CurveType,
    params: CurveParameters,
    *,
    tolerance: DecimalLike = SOLVER_TOLERANCE,
    max_iterations: int = SOLVER_MAX_ITERATIONS,
    upper_bound: DecimalLike = SOLVER_UPPER_BOUND,
    integration_steps: int = INTEGRATION_STEPS,
) -> SolverResult:
    """
    Количество токенов, которое покупается на бюджет budget.

    Args:
        budget: Бюджет после комиссий (> 0)
        from_supply: Supply до покупки (>= 0)
        curve_type: Тип кривой
        params: Параметры кривой
        tolerance: Абсолютная толерантность по стоимости (> 0)
        max_iterations: Лимит итераций (>= 1)
        upper_bound: Верхняя граница поиска по токенам (> 0)
        integration_steps: Подынтервалы trapezoidal rule (EXPONENTIAL)

    Returns:
        SolverResult с |cost - budget| <= tolerance

    Raises:
        InvalidInput: Некорректные budget, from_supply или параметры solver
        SolverFailure: Бюджет недостижим в [0, upper_bound] или нет сходимости
    """
    budget_d = validate_positive(budget, "budget")
    supply_d = validate_non_negative(from_supply, "from_supply")
    tolerance_d = validate_positive(tolerance, "tolerance")
    upper_d = validate_positive(upper_bound, "upper_bound")

    # Квантованный кандидат должен помещаться в QUOTE_PRECISION цифр
    if upper_d.adjusted() - TOKEN_QUANTUM.adjusted() >= QUOTE_PRECISION:
        raise InvalidInput(f"upper_bound {upper_d} is too large for token quantum {TOKEN_QUANTUM}")

    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
        raise InvalidInput(f"max_iterations must be an int, got {max_iterations!r}")
    if max_iterations < 1:
        raise InvalidInput(f"max_iterations must be >= 1, got {max_iterations}")

    def cost_at(tokens: Decimal) -> Decimal | None:
        # None: стоимость выходит за порог экспоненты, т.е. больше любого бюджета
        try:
            return buy_cost(tokens, supply_d, curve_type, params, integration_steps)
        except NumericOverflow:
            return None

    # 1. Бюджет должен быть достижим внутри [0, upper_bound]
    cost_upper = cost_at(upper_d)
    if cost_upper is not None:
        if is_close(cost_upper, budget_d, tolerance_d):
            return SolverResult(tokens=upper_d, cost=cost_upper, iterations=0)
        if cost_upper < budget_d:
            raise SolverFailure(
                f"Budget {budget_d} exceeds cost {cost_upper} of upper bound "
                f"{upper_d} tokens at supply {supply_d}"
            )

    # 2. Bisection
    low = Decimal(0)
    high = upper_d

    for iteration in range(1, max_iterations + 1):
        with quote_context():
            mid = ((low + high) / TWO).quantize(TOKEN_QUANTUM)

        # Интервал схлопнулся до шага квантования
        if mid <= low or mid >= high:
            break

        cost = cost_at(mid)

        if cost is not None and is_close(cost, budget_d, tolerance_d):
            logger.debug(
                "solver converged: budget=%s supply=%s tokens=%s cost=%s iterations=%d",
                budget_d,
                supply_d,
                mid,
                cost,
                iteration,
            )
            return SolverResult(tokens=mid, cost=cost, iterations=iteration)

        if cost is not None and cost < budget_d:
            low = mid
        else:
            high = mid

    raise SolverFailure(
        f"Bisection did not converge within {max_iterations} iterations "
        f"(budget={budget_d}, supply={supply_d}, bracket=[{low}, {high}], "
        f"tolerance={tolerance_d})"
    )
