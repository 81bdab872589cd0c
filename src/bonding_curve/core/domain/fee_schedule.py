"""
FeeSchedule — Ставки комиссий протокола и создателя токена

Immutable Pydantic модель. Каждая ставка в [0, 1], сумма ставок <= 1.
"""

from decimal import Decimal
from typing import Final

from pydantic import BaseModel, Field, model_validator


# Комиссия протокола (1.0%)
PROTOCOL_FEE_RATE_DEFAULT: Final[Decimal] = Decimal("0.01")

# Комиссия создателя токена (1.0%)
CREATOR_FEE_RATE_DEFAULT: Final[Decimal] = Decimal("0.01")


class FeeSchedule(BaseModel):
    """
    Ставки комиссий.

    Применяются к каждой сделке: для BUY к отправленной сумме,
    для SELL к gross proceeds.
    """

    protocol_fee_rate: Decimal = Field(
        PROTOCOL_FEE_RATE_DEFAULT, ge=0, le=1, description="Доля комиссии протокола"
    )
    creator_fee_rate: Decimal = Field(
        CREATOR_FEE_RATE_DEFAULT, ge=0, le=1, description="Доля комиссии создателя"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_total_rate(self) -> "FeeSchedule":
        """Проверка, что суммарная ставка не превышает 100%"""
        total = self.protocol_fee_rate + self.creator_fee_rate
        if total > 1:
            raise ValueError(
                f"protocol_fee_rate + creator_fee_rate must be <= 1, got {total}"
            )
        return self

    @property
    def total_fee_rate(self) -> Decimal:
        """Суммарная ставка комиссий."""
        return self.protocol_fee_rate + self.creator_fee_rate
