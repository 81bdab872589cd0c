"""
Trade — Запрос на сделку и итоговая котировка

Immutable Pydantic модели входного и выходного контракта движка:
- TradeRequest: направление, сумма, текущий supply, кривая, комиссии
  (from_record() строит запрос из JSON-записи по trade_request.json)
- TradeQuote: полная fee-inclusive котировка с метриками price impact

TradeQuote создаётся один раз на вызов и никогда не изменяется.
to_record() сериализует котировку в JSON-совместимый dict для записи сделки
(схема contracts/schema/trade_quote.json).
"""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from bonding_curve.core.contracts import validate_trade_request
from bonding_curve.core.errors import InvalidInput

from .curve import CurveParameters, CurveType, default_curve_parameters
from .fee_schedule import FeeSchedule


# =============================================================================
# ENUMS
# =============================================================================


class TradeDirection(str, Enum):
    """Направление сделки"""

    BUY = "buy"
    SELL = "sell"


# =============================================================================
# TRADE REQUEST
# =============================================================================


class TradeRequest(BaseModel):
    """
    Запрос на котировку.

    amount для BUY — бюджет в native currency (включая комиссии),
    для SELL — количество продаваемых токенов.

    Если curve_parameters не заданы, используются параметры по умолчанию
    для curve_type (см. default_curve_parameters).
    """

    direction: TradeDirection = Field(..., description="Направление сделки (buy/sell)")
    amount: Decimal = Field(..., gt=0, description="Бюджет (BUY) или количество токенов (SELL)")
    current_supply: Decimal = Field(..., ge=0, description="Circulating supply до сделки")
    curve_type: CurveType = Field(CurveType.LINEAR, description="Тип кривой")
    curve_parameters: CurveParameters | None = Field(
        None, description="Параметры кривой (None → defaults для curve_type)"
    )
    fee_schedule: FeeSchedule = Field(default_factory=FeeSchedule, description="Ставки комиссий")
    slippage_tolerance: Decimal | None = Field(
        None, ge=0, le=1, description="Допустимое отклонение выхода для minimum_received"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "TradeRequest":
        """
        Построение запроса из внешней JSON-записи.

        Запись сначала проверяется по trade_request.json, затем моделью
        (сумма ставок комиссий и прочие межполевые правила).

        Raises:
            InvalidInput: Если запись нарушает контракт или правила модели
        """
        validate_trade_request(record)
        try:
            return cls.model_validate(record)
        except ValidationError as e:
            reasons = "; ".join(err["msg"] for err in e.errors())
            raise InvalidInput(f"trade_request rejected: {reasons}") from e

    def resolved_curve_parameters(self) -> CurveParameters:
        """Параметры кривой с учётом defaults."""
        if self.curve_parameters is not None:
            return self.curve_parameters
        return default_curve_parameters(self.curve_type)


# =============================================================================
# TRADE QUOTE
# =============================================================================


class TradeQuote(BaseModel):
    """
    Fee-inclusive котировка сделки.

    BUY:
        gross_amount  — отправленный бюджет
        net_principal — бюджет за вычетом комиссий (уходит в кривую)
        average_price — net_principal / tokens_exchanged
    SELL:
        gross_amount  — gross proceeds (интеграл кривой)
        net_principal — proceeds за вычетом комиссий (получает продавец)
        average_price — gross_amount / tokens_exchanged

    Базы комиссий асимметричны: BUY берёт комиссию с бюджета до решения
    солвера, SELL — с gross proceeds.
    """

    direction: TradeDirection = Field(..., description="Направление сделки")
    curve_type: CurveType = Field(..., description="Тип кривой")

    # Суммы
    gross_amount: Decimal = Field(..., ge=0, description="Gross сумма в native currency")
    net_principal: Decimal = Field(..., ge=0, description="Сумма после комиссий")
    tokens_exchanged: Decimal = Field(..., gt=0, description="Количество токенов в сделке")

    # Комиссии
    protocol_fee: Decimal = Field(..., ge=0, description="Комиссия протокола")
    creator_fee: Decimal = Field(..., ge=0, description="Комиссия создателя")
    total_fees: Decimal = Field(..., ge=0, description="Суммарная комиссия")

    # Цены
    average_price: Decimal = Field(..., ge=0, description="Средняя цена исполнения")
    start_price: Decimal = Field(..., gt=0, description="Цена кривой до сделки")
    end_price: Decimal = Field(..., gt=0, description="Цена кривой после сделки")
    price_impact: Decimal = Field(..., ge=0, description="|average - start| / start")

    # Состояние после сделки
    new_supply: Decimal = Field(..., ge=0, description="Supply после сделки")

    # Защита от проскальзывания
    minimum_received: Decimal = Field(
        ..., ge=0, description="Минимальный выход с учётом slippage_tolerance"
    )
    exceeds_max_slippage: bool = Field(
        ..., description="price_impact выше порога предупреждения"
    )

    model_config = {"frozen": True}

    def to_record(self) -> dict[str, Any]:
        """
        Сериализация для записи сделки.

        Returns:
            JSON-совместимый dict (Decimal → str, Enum → value)
        """
        return self.model_dump(mode="json")
