"""
Numerical Safeguards — Decimal Math Primitives

Модуль обеспечивает воспроизводимость всех вычислений движка котировок:
- Единый decimal-контекст фиксированной точности (QUOTE_CONTEXT)
- Конверсия входов (int/str/float/Decimal) в Decimal без двоичного дрейфа float
- NaN/Inf отбраковка на входе
- Tolerance-сравнения для Decimal
- Валидация параметров с понятными сообщениями

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все вычисления выполняются в QUOTE_CONTEXT (одинаковые результаты на любой платформе)
2. NaN/Inf никогда не попадают в вычисления (InvalidInput)
3. float конвертируется через repr: 0.1 → Decimal("0.1"), а не 0.1000000000000000055...
4. Округление внутри ядра не применяется (только на границе, см. domain.units)
"""

from contextlib import contextmanager
from decimal import ROUND_HALF_EVEN, Context, Decimal, InvalidOperation, Overflow, localcontext
from typing import Final, Iterator, Union

from bonding_curve.core.errors import InvalidInput, NumericOverflow

# =============================================================================
# DECIMAL-КОНТЕКСТ
# =============================================================================

# Количество значащих цифр (как у IEEE 754 decimal128)
QUOTE_PRECISION: Final[int] = 34

# Контекст для всех вычислений котировок.
# Ловушки Overflow/InvalidOperation включены: переполнение никогда не даёт Infinity молча
# (используется через quote_context()).
QUOTE_CONTEXT: Final[Context] = Context(
    prec=QUOTE_PRECISION,
    rounding=ROUND_HALF_EVEN,
    Emax=999999,
    Emin=-999999,
)

DecimalLike = Union[Decimal, int, float, str]

ZERO: Final[Decimal] = Decimal(0)
ONE: Final[Decimal] = Decimal(1)
TWO: Final[Decimal] = Decimal(2)


@contextmanager
def quote_context() -> Iterator[Context]:
    """
    QUOTE_CONTEXT как локальный контекст с переводом ловушек decimal в NumericOverflow.

    Выход результата за Emax (Overflow) или за точность контекста
    (InvalidOperation, например quantize) не покидает математический слой
    как decimal-исключение: QuoteBuilder получает обычный QuoteError.

    Examples:
        >>> with quote_context():
        ...     Decimal("1e600000") * Decimal("1e600000")
        Traceback (most recent call last):
        ...
        bonding_curve.core.errors.NumericOverflow: Decimal result out of range: ...
    """
    with localcontext(QUOTE_CONTEXT) as ctx:
        try:
            yield ctx
        except (Overflow, InvalidOperation) as e:
            raise NumericOverflow(f"Decimal result out of range: {type(e).__name__}") from e


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_decimal(value: DecimalLike, name: str = "value") -> Decimal:
    """
    Конверсия значения в конечный Decimal.

    float конвертируется через str() (кратчайший repr), чтобы 0.1 оставался 0.1.
    bool отклоняется явно, так как является подклассом int.

    Args:
        value: Исходное значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Конечный Decimal

    Raises:
        InvalidInput: Если значение не число, NaN или Inf

    Examples:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal("1e-6")
        Decimal('0.000001')
    """
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be a number, got {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise InvalidInput(f"{name} must be a number, got {value!r}") from None
    else:
        raise InvalidInput(f"{name} must be a number, got {type(value).__name__}")

    if not result.is_finite():
        raise InvalidInput(f"{name} must be a finite number (not NaN/Inf), got {value!r}")

    return result


# =============================================================================
# TOLERANCE-СРАВНЕНИЯ
# =============================================================================


def is_close(a: Decimal, b: Decimal, abs_tol: Decimal) -> bool:
    """
    Сравнение двух Decimal с абсолютной толерантностью.

    Args:
        a: Первое значение
        b: Второе значение
        abs_tol: Абсолютная толерантность (>= 0)

    Returns:
        True если |a - b| <= abs_tol
    """
    return QUOTE_CONTEXT.abs(QUOTE_CONTEXT.subtract(a, b)) <= abs_tol


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: DecimalLike, name: str) -> Decimal:
    """
    Валидация, что значение строго положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Значение как Decimal

    Raises:
        InvalidInput: Если value <= 0 или NaN/Inf
    """
    result = to_decimal(value, name)
    if result <= 0:
        raise InvalidInput(f"{name} must be positive, got {value}")
    return result


def validate_non_negative(value: DecimalLike, name: str) -> Decimal:
    """
    Валидация, что значение неотрицательное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Значение как Decimal

    Raises:
        InvalidInput: Если value < 0 или NaN/Inf
    """
    result = to_decimal(value, name)
    if result < 0:
        raise InvalidInput(f"{name} cannot be negative, got {value}")
    return result


def validate_in_range(
    value: DecimalLike,
    name: str,
    min_value: DecimalLike | None = None,
    max_value: DecimalLike | None = None,
) -> Decimal:
    """
    Валидация, что значение в заданном диапазоне (границы включительно).

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение как Decimal

    Raises:
        InvalidInput: Если value вне диапазона или NaN/Inf
    """
    result = to_decimal(value, name)

    if min_value is not None and result < to_decimal(min_value, f"{name} min"):
        raise InvalidInput(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and result > to_decimal(max_value, f"{name} max"):
        raise InvalidInput(f"{name} must be <= {max_value}, got {value}")

    return result
