"""
Units — Конверсия в целочисленные on-chain единицы

Единственный допустимый способ перевода decimal-сумм ядра в целые единицы:
- SOL ↔ lamports
- токены ↔ base units SPL токена (decimals)

Ядро не округляет. Округление выполняется здесь, на границе,
детерминированно вниз (ROUND_DOWN), чтобы пользователь никогда
не получил больше, чем посчитано.
"""

from decimal import ROUND_DOWN, Decimal
from typing import Final

from bonding_curve.core.errors import InvalidInput
from bonding_curve.core.math.numerical_safeguards import (
    DecimalLike,
    quote_context,
    validate_non_negative,
)

# Lamports в одном SOL
LAMPORTS_PER_SOL: Final[int] = 1_000_000_000

# Decimals SPL токена по умолчанию
DEFAULT_TOKEN_DECIMALS: Final[int] = 9

# Максимально допустимое количество decimals
MAX_TOKEN_DECIMALS: Final[int] = 18


def _validate_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise InvalidInput(f"decimals must be an int, got {decimals!r}")
    if decimals < 0 or decimals > MAX_TOKEN_DECIMALS:
        raise InvalidInput(f"decimals must be in [0, {MAX_TOKEN_DECIMALS}], got {decimals}")


def to_base_units(amount: DecimalLike, decimals: int = DEFAULT_TOKEN_DECIMALS) -> int:
    """
    Конверсия: decimal-количество → целые base units (округление вниз)

    Args:
        amount: Количество (>= 0)
        decimals: Число знаков после запятой у токена

    Returns:
        floor(amount * 10^decimals)

    Raises:
        InvalidInput: Если amount отрицательный или decimals вне диапазона

    Examples:
        >>> to_base_units("1.5", 9)
        1500000000
        >>> to_base_units("0.0000000019", 9)
        1
    """
    _validate_decimals(decimals)
    amount_d = validate_non_negative(amount, "amount")

    with quote_context():
        scaled = amount_d.scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def from_base_units(units: int, decimals: int = DEFAULT_TOKEN_DECIMALS) -> Decimal:
    """
    Конверсия: целые base units → decimal-количество

    Args:
        units: Количество base units (>= 0)
        decimals: Число знаков после запятой у токена

    Returns:
        units / 10^decimals (точно)
    """
    _validate_decimals(decimals)
    if isinstance(units, bool) or not isinstance(units, int):
        raise InvalidInput(f"units must be an int, got {units!r}")
    if units < 0:
        raise InvalidInput(f"units cannot be negative, got {units}")

    return Decimal(units).scaleb(-decimals)


def sol_to_lamports(amount_sol: DecimalLike) -> int:
    """Конверсия: SOL → lamports (округление вниз)"""
    return to_base_units(amount_sol, decimals=9)


def lamports_to_sol(lamports: int) -> Decimal:
    """Конверсия: lamports → SOL"""
    return from_base_units(lamports, decimals=9)
