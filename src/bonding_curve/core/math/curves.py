"""
Curve Functions — Цена токена как функция circulating supply

Модуль вычисляет мгновенную цену bonding curve:
- LINEAR:      price = base_price + supply * slope
- EXPONENTIAL: price = base_price * e^(growth_rate * supply)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. price(supply) неубывающая по supply для обеих кривых при supply >= 0
2. price(0) == base_price для обеих кривых
3. growth_rate * supply > EXPONENT_SAFETY_LIMIT → NumericOverflow (никогда не Infinity)
"""

from decimal import Decimal
from typing import Final

from bonding_curve.core.domain.curve import CurveParameters, CurveType, SpotPrice
from bonding_curve.core.errors import NumericOverflow
from bonding_curve.core.math.numerical_safeguards import (
    DecimalLike,
    quote_context,
    validate_non_negative,
)

# Верхняя граница показателя экспоненты. Порог численной безопасности,
# должен совпадать во всех реализациях для воспроизводимости котировок.
EXPONENT_SAFETY_LIMIT: Final[Decimal] = Decimal(100)


def linear_price(supply: DecimalLike, base_price: DecimalLike, slope: DecimalLike) -> Decimal:
    """
    Цена на линейной кривой.

    Formula: price = base_price + supply * slope

    Args:
        supply: Текущий circulating supply (>= 0)
        base_price: Цена при нулевом supply (>= 0)
        slope: Прирост цены на один токен (>= 0)

    Returns:
        Цена одного токена в native currency

    Raises:
        InvalidInput: Если supply, base_price или slope отрицательные

    Examples:
        >>> linear_price(1_000_000, "0.0001", "0.00000001")
        Decimal('0.01010000')
    """
    supply_d = validate_non_negative(supply, "supply")
    base_d = validate_non_negative(base_price, "base_price")
    slope_d = validate_non_negative(slope, "slope")

    with quote_context():
        return base_d + supply_d * slope_d


def exponential_price(
    supply: DecimalLike, base_price: DecimalLike, growth_rate: DecimalLike
) -> Decimal:
    """
    Цена на экспоненциальной кривой.

    Formula: price = base_price * e^(growth_rate * supply)

    Args:
        supply: Текущий circulating supply (>= 0)
        base_price: Цена при нулевом supply (>= 0)
        growth_rate: Коэффициент роста (>= 0)

    Returns:
        Цена одного токена в native currency

    Raises:
        InvalidInput: Если supply, base_price или growth_rate отрицательные
        NumericOverflow: Если growth_rate * supply > EXPONENT_SAFETY_LIMIT
    """
    supply_d = validate_non_negative(supply, "supply")
    base_d = validate_non_negative(base_price, "base_price")
    rate_d = validate_non_negative(growth_rate, "growth_rate")

    with quote_context():
        exponent = rate_d * supply_d

        if exponent > EXPONENT_SAFETY_LIMIT:
            raise NumericOverflow(
                f"Exponential growth too large: exponent {exponent} exceeds "
                f"{EXPONENT_SAFETY_LIMIT} (supply={supply_d}, growth_rate={rate_d})"
            )

        return base_d * exponent.exp()


def price_at_supply(
    supply: DecimalLike,
    curve_type: CurveType,
    params: CurveParameters,
) -> Decimal:
    """
    Цена на кривой заданного типа.

    Args:
        supply: Текущий circulating supply
        curve_type: Тип кривой (LINEAR/EXPONENTIAL)
        params: Параметры кривой (rate = slope или growth_rate)

    Returns:
        Цена одного токена
    """
    if curve_type == CurveType.LINEAR:
        return linear_price(supply, params.base_price, params.rate)
    return exponential_price(supply, params.base_price, params.rate)


def spot_price(
    supply: DecimalLike,
    curve_type: CurveType,
    params: CurveParameters,
) -> SpotPrice:
    """Текущая цена вместе с supply и типом кривой (для отображения)."""
    supply_d = validate_non_negative(supply, "supply")
    return SpotPrice(
        price=price_at_supply(supply_d, curve_type, params),
        supply=supply_d,
        curve_type=curve_type,
    )
