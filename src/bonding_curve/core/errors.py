"""
Quote Errors — Таксономия ошибок движка котировок

Четыре вида ошибок, которые может вернуть ядро:
- InvalidInput: отрицательный supply, неположительный amount, fee rate вне [0, 1],
  oversell, amount ниже сконфигурированного минимума
- NumericOverflow: экспонента кривой превышает порог безопасности или результат
  выходит за диапазон decimal-контекста
- SolverFailure: bisection не сошёлся за лимит итераций
- DivisionByZero: вырожденная конфигурация (start_price == 0)

Математический слой поднимает эти исключения, QuoteBuilder переводит их
в явные значения результата (QuoteResult), чтобы batch-котировка могла
сообщить, какая сделка и почему не прошла, не прерывая остальные.
"""

from enum import Enum


class QuoteErrorKind(str, Enum):
    """Вид ошибки котировки"""

    INVALID_INPUT = "InvalidInput"
    NUMERIC_OVERFLOW = "NumericOverflow"
    SOLVER_FAILURE = "SolverFailure"
    DIVISION_BY_ZERO = "DivisionByZero"


class QuoteError(Exception):
    """Базовая ошибка движка котировок."""

    kind: QuoteErrorKind = QuoteErrorKind.INVALID_INPUT


class InvalidInput(QuoteError, ValueError):
    """Невалидные входные данные (supply, amount, fee rate, минимумы)."""

    kind = QuoteErrorKind.INVALID_INPUT


class NumericOverflow(QuoteError, OverflowError):
    """
    Показатель экспоненты превышает EXPONENT_SAFETY_LIMIT либо результат
    выходит за диапазон QUOTE_CONTEXT.

    Порог численной безопасности, а не бизнес-правило: вместо Infinity
    вычисление явно завершается ошибкой.
    """

    kind = QuoteErrorKind.NUMERIC_OVERFLOW


class SolverFailure(QuoteError, ArithmeticError):
    """Bisection не нашёл положительное количество токенов в пределах tolerance."""

    kind = QuoteErrorKind.SOLVER_FAILURE


class DivisionByZero(QuoteError, ZeroDivisionError):
    """start_price == 0 при расчёте price impact."""

    kind = QuoteErrorKind.DIVISION_BY_ZERO
