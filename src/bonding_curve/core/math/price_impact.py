"""
Price Impact — Проскальзывание сделки относительно мгновенной цены

    price_impact = |average_price - start_price| / start_price

Плюс защита выхода сделки по допустимому отклонению:
    minimum_received = output_amount * (1 - slippage_tolerance)
"""

from decimal import Decimal
from typing import Final

from bonding_curve.core.errors import DivisionByZero
from bonding_curve.core.math.numerical_safeguards import (
    ONE,
    DecimalLike,
    quote_context,
    validate_in_range,
    validate_non_negative,
)

# Порог price impact, выше которого котировка помечается предупреждением (10%)
MAX_SLIPPAGE_WARNING: Final[Decimal] = Decimal("0.1")


def calculate_price_impact(start_price: DecimalLike, average_price: DecimalLike) -> Decimal:
    """
    Price impact как неотрицательная доля.

    Args:
        start_price: Цена кривой до сделки
        average_price: Средняя цена исполнения (>= 0)

    Returns:
        |average_price - start_price| / start_price (0.05 = 5%)

    Raises:
        DivisionByZero: Если start_price == 0 (вырожденная конфигурация)
        InvalidInput: Если цены отрицательные

    Examples:
        >>> calculate_price_impact("0.01", "0.0105")
        Decimal('0.05')
    """
    start = validate_non_negative(start_price, "start_price")
    average = validate_non_negative(average_price, "average_price")

    if start == 0:
        raise DivisionByZero("Start price is zero: price impact is undefined")

    with quote_context():
        return abs(average - start) / start


def minimum_received(output_amount: DecimalLike, slippage_tolerance: DecimalLike | None) -> Decimal:
    """
    Минимальный выход сделки с учётом допустимого отклонения.

    Args:
        output_amount: Ожидаемый выход (токены для BUY, native для SELL)
        slippage_tolerance: Доля в [0, 1]; None → без допуска

    Returns:
        output_amount * (1 - slippage_tolerance)
    """
    output = validate_non_negative(output_amount, "output_amount")
    if slippage_tolerance is None:
        return output

    tolerance = validate_in_range(slippage_tolerance, "slippage_tolerance", 0, 1)
    with quote_context():
        return output * (ONE - tolerance)


def exceeds_slippage_warning(
    price_impact: DecimalLike, threshold: DecimalLike = MAX_SLIPPAGE_WARNING
) -> bool:
    """Проверка, что price impact выше порога предупреждения."""
    impact = validate_non_negative(price_impact, "price_impact")
    return impact > validate_non_negative(threshold, "threshold")
