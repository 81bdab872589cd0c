"""
Integrator — Стоимость изменения supply на заданное количество токенов

Вычисляет определённый интеграл price(supply):
- BUY:  по [from_supply, from_supply + amount]
- SELL: по [from_supply - amount, from_supply]

Стратегии:
- LINEAR: замкнутая формула
      cost = base_price * amount + slope * (from_supply * amount + amount^2 / 2)
  SELL использует ту же формулу от new_supply = from_supply - amount
- EXPONENTIAL: trapezoidal rule с integration_steps подынтервалами
  (каждый подынтервал: среднее цен на концах * ширина)

КОНТРАКТ МОНОТОННОСТИ:
    buy_cost(amount, s) строго возрастает по amount при base_price > 0.
    На этом свойстве держится корректность bisection в solver.py;
    любая замена формул кривой/интегратора обязана его сохранить.
"""

from decimal import Decimal
from typing import Final

from bonding_curve.core.domain.curve import CurveParameters, CurveType
from bonding_curve.core.domain.trade import TradeDirection
from bonding_curve.core.errors import InvalidInput
from bonding_curve.core.math.curves import exponential_price
from bonding_curve.core.math.numerical_safeguards import (
    TWO,
    DecimalLike,
    quote_context,
    validate_non_negative,
    validate_positive,
)


# Количество подынтервалов trapezoidal rule для экспоненциальной кривой.
# Определяет воспроизводимость котировок между реализациями.
INTEGRATION_STEPS: Final[int] = 1000


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def _validate_integration_steps(integration_steps: int) -> None:
    if isinstance(integration_steps, bool) or not isinstance(integration_steps, int):
        raise InvalidInput(f"integration_steps must be an int, got {integration_steps!r}")
    if integration_steps < 1:
        raise InvalidInput(f"integration_steps must be >= 1, got {integration_steps}")


# =============================================================================
# LINEAR (замкнутая формула)
# =============================================================================


def _linear_integral(
    amount: Decimal, lower_supply: Decimal, params: CurveParameters
) -> Decimal:
    # ∫ (base + slope * x) dx по [lower, lower + amount]
    with quote_context():
        base_cost = params.base_price * amount
        variable_cost = params.rate * (lower_supply * amount + amount * amount / TWO)
        return base_cost + variable_cost


# =============================================================================
# EXPONENTIAL (trapezoidal rule)
# =============================================================================


def _exponential_trapezoid(
    amount: Decimal,
    start_supply: Decimal,
    direction: int,
    params: CurveParameters,
    integration_steps: int,
) -> Decimal:
    """
    Trapezoidal rule от start_supply в сторону direction (+1 вверх, -1 вниз).

    Цена в каждой узловой точке вычисляется один раз: правый конец
    подынтервала i совпадает с левым концом подынтервала i + 1.
    """
    with quote_context():
        steps = Decimal(integration_steps)
        step = amount / steps
        total = Decimal(0)

        price_prev = exponential_price(start_supply, params.base_price, params.rate)

        for i in range(integration_steps):
            if i + 1 == integration_steps:
                # n * step может отличаться от amount в последнем разряде
                supply_next = start_supply + direction * amount
            else:
                supply_next = start_supply + direction * (i + 1) * step
            price_next = exponential_price(supply_next, params.base_price, params.rate)

            total += (price_prev + price_next) / TWO * step
            price_prev = price_next

        return total


# =============================================================================
# PUBLIC API
# =============================================================================


def buy_cost(
    amount: DecimalLike,
    from_supply: DecimalLike,
    curve_type: CurveType,
    params: CurveParameters,
    integration_steps: int = INTEGRATION_STEPS,
) -> Decimal:
    """
    Стоимость покупки amount токенов начиная с from_supply (до комиссий).

    Args:
        amount: Количество покупаемых токенов (> 0)
        from_supply: Supply до покупки (>= 0)
        curve_type: Тип кривой
        params: Параметры кривой
        integration_steps: Подынтервалы trapezoidal rule (EXPONENTIAL)

    Returns:
        Стоимость в native currency

    Raises:
        InvalidInput: amount <= 0, from_supply < 0, integration_steps < 1
        NumericOverflow: экспонента выходит за EXPONENT_SAFETY_LIMIT
    """
    amount_d = validate_positive(amount, "amount")
    supply_d = validate_non_negative(from_supply, "from_supply")
    _validate_integration_steps(integration_steps)

    if curve_type == CurveType.LINEAR:
        return _linear_integral(amount_d, supply_d, params)

    return _exponential_trapezoid(amount_d, supply_d, +1, params, integration_steps)


def sell_proceeds(
    amount: DecimalLike,
    from_supply: DecimalLike,
    curve_type: CurveType,
    params: CurveParameters,
    integration_steps: int = INTEGRATION_STEPS,
) -> Decimal:
    """
    Выручка от продажи amount токенов при supply from_supply (до комиссий).

    Равна стоимости обратного выкупа от new_supply до from_supply.

    Args:
        amount: Количество продаваемых токенов (> 0, <= from_supply)
        from_supply: Supply до продажи (>= 0)
        curve_type: Тип кривой
        params: Параметры кривой
        integration_steps: Подынтервалы trapezoidal rule (EXPONENTIAL)

    Returns:
        Выручка в native currency

    Raises:
        InvalidInput: amount <= 0, from_supply < 0, amount > from_supply
    """
    amount_d = validate_positive(amount, "amount")
    supply_d = validate_non_negative(from_supply, "from_supply")
    _validate_integration_steps(integration_steps)

    if amount_d > supply_d:
        raise InvalidInput(
            f"Cannot sell more tokens than current supply: amount={amount_d}, supply={supply_d}"
        )

    if curve_type == CurveType.LINEAR:
        with quote_context():
            new_supply = supply_d - amount_d
        return _linear_integral(amount_d, new_supply, params)

    return _exponential_trapezoid(amount_d, supply_d, -1, params, integration_steps)


def curve_cost(
    direction: TradeDirection,
    amount: DecimalLike,
    from_supply: DecimalLike,
    curve_type: CurveType,
    params: CurveParameters,
    integration_steps: int = INTEGRATION_STEPS,
) -> Decimal:
    """Интеграл кривой для направления сделки (buy_cost / sell_proceeds)."""
    if direction == TradeDirection.BUY:
        return buy_cost(amount, from_supply, curve_type, params, integration_steps)
    return sell_proceeds(amount, from_supply, curve_type, params, integration_steps)
