"""
Fee Calculator — Разложение суммы на комиссии протокола и создателя

Чистое умножение без округления:
    total_fee    = gross_amount * (protocol_fee_rate + creator_fee_rate)
    protocol_fee = gross_amount * protocol_fee_rate
    creator_fee  = total_fee - protocol_fee

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. total_fee == gross_amount * (protocol_fee_rate + creator_fee_rate) одной операцией,
   поэтому равенство точное и при 34 значащих цифрах
2. Округление не применяется: целые lamports считаются на границе (domain.units)
"""

from decimal import Decimal
from typing import NamedTuple

from bonding_curve.core.domain.fee_schedule import FeeSchedule
from bonding_curve.core.math.numerical_safeguards import (
    DecimalLike,
    quote_context,
    validate_in_range,
    validate_non_negative,
)


class FeeBreakdown(NamedTuple):
    """Разложение комиссий по получателям."""

    protocol_fee: Decimal
    creator_fee: Decimal
    total_fee: Decimal
    fee_rate: Decimal  # protocol_fee_rate + creator_fee_rate


def bps_to_fraction(bps: DecimalLike) -> Decimal:
    """
    Конверсия basis points в дробь.

    Args:
        bps: Basis points (например, 100 bps = 1%)

    Returns:
        Дробь (например, 100 bps → 0.01)
    """
    bps_d = validate_non_negative(bps, "bps")
    with quote_context():
        return bps_d / Decimal(10000)


def calculate_fees(
    gross_amount: DecimalLike,
    protocol_fee_rate: DecimalLike,
    creator_fee_rate: DecimalLike,
) -> FeeBreakdown:
    """
    Расчёт комиссий для суммы сделки.

    Args:
        gross_amount: Сумма в native currency (>= 0)
        protocol_fee_rate: Ставка протокола в [0, 1]
        creator_fee_rate: Ставка создателя в [0, 1]

    Returns:
        FeeBreakdown

    Raises:
        InvalidInput: Если gross_amount < 0 или ставка вне [0, 1]

    Examples:
        >>> calculate_fees("1.0", "0.01", "0.01").total_fee
        Decimal('0.020')
    """
    amount = validate_non_negative(gross_amount, "gross_amount")
    protocol_rate = validate_in_range(protocol_fee_rate, "protocol_fee_rate", 0, 1)
    creator_rate = validate_in_range(creator_fee_rate, "creator_fee_rate", 0, 1)

    with quote_context():
        fee_rate = protocol_rate + creator_rate
        total_fee = amount * fee_rate
        protocol_fee = amount * protocol_rate
        return FeeBreakdown(
            protocol_fee=protocol_fee,
            creator_fee=total_fee - protocol_fee,
            total_fee=total_fee,
            fee_rate=fee_rate,
        )


def calculate_fees_for_schedule(gross_amount: DecimalLike, schedule: FeeSchedule) -> FeeBreakdown:
    """Расчёт комиссий по FeeSchedule."""
    return calculate_fees(gross_amount, schedule.protocol_fee_rate, schedule.creator_fee_rate)
