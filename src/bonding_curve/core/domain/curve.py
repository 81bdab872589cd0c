"""
Curve — Тип и параметры bonding curve

Immutable Pydantic модели конфигурации кривой. Параметры задаются
на уровне деплоя и разделяются всеми вычислениями (только чтение).
"""

from decimal import Decimal
from enum import Enum
from typing import Final

from pydantic import BaseModel, Field


# =============================================================================
# DEFAULTS
# =============================================================================

# Цена токена при нулевом supply (SOL)
BASE_PRICE: Final[Decimal] = Decimal("0.0001")

# Прирост цены на один токен для линейной кривой
LINEAR_SLOPE: Final[Decimal] = Decimal("0.00000001")

# Коэффициент роста для экспоненциальной кривой
EXPONENTIAL_GROWTH_RATE: Final[Decimal] = Decimal("0.0000001")


# =============================================================================
# ENUMS
# =============================================================================


class CurveType(str, Enum):
    """Форма bonding curve"""

    LINEAR = "linear"
    EXPONENTIAL = "exponential"


# =============================================================================
# MODELS
# =============================================================================


class CurveParameters(BaseModel):
    """
    Параметры кривой.

    rate интерпретируется как slope для LINEAR и как growth_rate для EXPONENTIAL.
    base_price строго положительный: нулевая цена делает price impact неопределённым.
    """

    base_price: Decimal = Field(..., gt=0, description="Цена при нулевом supply")
    rate: Decimal = Field(..., ge=0, description="Slope (LINEAR) или growth rate (EXPONENTIAL)")

    model_config = {"frozen": True}


class SpotPrice(BaseModel):
    """Мгновенная цена на кривой при заданном supply."""

    price: Decimal = Field(..., ge=0, description="Цена одного токена")
    supply: Decimal = Field(..., ge=0, description="Circulating supply")
    curve_type: CurveType = Field(..., description="Тип кривой")

    model_config = {"frozen": True}


def default_curve_parameters(curve_type: CurveType) -> CurveParameters:
    """
    Параметры кривой по умолчанию для заданного типа.

    Args:
        curve_type: Тип кривой

    Returns:
        CurveParameters с BASE_PRICE и LINEAR_SLOPE / EXPONENTIAL_GROWTH_RATE
    """
    if curve_type == CurveType.LINEAR:
        return CurveParameters(base_price=BASE_PRICE, rate=LINEAR_SLOPE)
    return CurveParameters(base_price=BASE_PRICE, rate=EXPONENTIAL_GROWTH_RATE)
