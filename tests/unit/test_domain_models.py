"""
Тесты для domain models

Проверяет:
1. Создание и валидацию CurveParameters, FeeSchedule, TradeRequest, TradeQuote
2. Defaults (параметры кривой, ставки комиссий)
3. Immutability (frozen=True)
4. Сериализацию TradeQuote.to_record()
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from bonding_curve.core.domain import (
    BASE_PRICE,
    CREATOR_FEE_RATE_DEFAULT,
    EXPONENTIAL_GROWTH_RATE,
    LINEAR_SLOPE,
    PROTOCOL_FEE_RATE_DEFAULT,
    CurveParameters,
    CurveType,
    FeeSchedule,
    SpotPrice,
    TradeDirection,
    TradeQuote,
    TradeRequest,
    default_curve_parameters,
)


def make_quote(**overrides) -> TradeQuote:
    """Валидная котировка SELL 5000 токенов при supply 50000 (линейная кривая)."""
    fields = dict(
        direction=TradeDirection.SELL,
        curve_type=CurveType.LINEAR,
        gross_amount=Decimal("2.875"),
        net_principal=Decimal("2.8175"),
        tokens_exchanged=Decimal(5000),
        protocol_fee=Decimal("0.02875"),
        creator_fee=Decimal("0.02875"),
        total_fees=Decimal("0.0575"),
        average_price=Decimal("0.000575"),
        start_price=Decimal("0.0006"),
        end_price=Decimal("0.00055"),
        price_impact=Decimal("0.04166666666666666666666666666666667"),
        new_supply=Decimal(45000),
        minimum_received=Decimal("2.8175"),
        exceeds_max_slippage=False,
    )
    fields.update(overrides)
    return TradeQuote(**fields)


class TestCurveParameters:
    """Тесты параметров кривой"""

    def test_defaults_per_curve_type(self) -> None:
        linear = default_curve_parameters(CurveType.LINEAR)
        exponential = default_curve_parameters(CurveType.EXPONENTIAL)
        assert linear.base_price == BASE_PRICE == Decimal("0.0001")
        assert linear.rate == LINEAR_SLOPE == Decimal("0.00000001")
        assert exponential.base_price == BASE_PRICE
        assert exponential.rate == EXPONENTIAL_GROWTH_RATE == Decimal("0.0000001")

    def test_string_inputs_parsed(self) -> None:
        params = CurveParameters(base_price="0.5", rate="0.01")
        assert params.base_price == Decimal("0.5")
        assert params.rate == Decimal("0.01")

    def test_zero_rate_allowed(self) -> None:
        """Плоская кривая"""
        assert CurveParameters(base_price="1", rate=0).rate == 0

    def test_non_positive_base_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CurveParameters(base_price=0, rate="0.01")

    def test_negative_rate_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CurveParameters(base_price="1", rate="-0.01")

    def test_immutable(self) -> None:
        params = default_curve_parameters(CurveType.LINEAR)
        with pytest.raises(ValidationError):
            params.base_price = Decimal(1)

    def test_curve_type_values(self) -> None:
        assert CurveType("linear") == CurveType.LINEAR
        assert CurveType("exponential") == CurveType.EXPONENTIAL


class TestFeeSchedule:
    """Тесты ставок комиссий"""

    def test_defaults(self) -> None:
        schedule = FeeSchedule()
        assert schedule.protocol_fee_rate == PROTOCOL_FEE_RATE_DEFAULT == Decimal("0.01")
        assert schedule.creator_fee_rate == CREATOR_FEE_RATE_DEFAULT == Decimal("0.01")
        assert schedule.total_fee_rate == Decimal("0.02")

    def test_sum_exactly_one_allowed(self) -> None:
        schedule = FeeSchedule(protocol_fee_rate="0.5", creator_fee_rate="0.5")
        assert schedule.total_fee_rate == 1

    def test_sum_above_one_rejected(self) -> None:
        """protocol + creator > 1 → ValidationError"""
        with pytest.raises(ValidationError, match="must be <= 1"):
            FeeSchedule(protocol_fee_rate="0.6", creator_fee_rate="0.5")

    @pytest.mark.parametrize("rate", ["-0.01", "1.5"])
    def test_rate_out_of_range_rejected(self, rate: str) -> None:
        with pytest.raises(ValidationError):
            FeeSchedule(protocol_fee_rate=rate)

    def test_immutable(self) -> None:
        schedule = FeeSchedule()
        with pytest.raises(ValidationError):
            schedule.protocol_fee_rate = Decimal("0.02")


class TestTradeRequest:
    """Тесты запроса на котировку"""

    def test_minimal_request_uses_defaults(self) -> None:
        request = TradeRequest(direction="buy", amount="1.0", current_supply=0)
        assert request.direction == TradeDirection.BUY
        assert request.curve_type == CurveType.LINEAR
        assert request.curve_parameters is None
        assert request.fee_schedule == FeeSchedule()
        assert request.slippage_tolerance is None

    def test_resolved_curve_parameters_default(self) -> None:
        request = TradeRequest(
            direction=TradeDirection.BUY,
            amount=1,
            current_supply=0,
            curve_type=CurveType.EXPONENTIAL,
        )
        assert request.resolved_curve_parameters() == default_curve_parameters(CurveType.EXPONENTIAL)

    def test_resolved_curve_parameters_explicit(self) -> None:
        params = CurveParameters(base_price="0.5", rate="0.01")
        request = TradeRequest(
            direction=TradeDirection.SELL,
            amount=10,
            current_supply=100,
            curve_parameters=params,
        )
        assert request.resolved_curve_parameters() is params

    @pytest.mark.parametrize("amount", [0, -1, "-0.001"])
    def test_non_positive_amount_rejected(self, amount) -> None:
        with pytest.raises(ValidationError):
            TradeRequest(direction=TradeDirection.BUY, amount=amount, current_supply=0)

    def test_negative_supply_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TradeRequest(direction=TradeDirection.BUY, amount=1, current_supply=-1)

    def test_unknown_direction_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TradeRequest(direction="hold", amount=1, current_supply=0)

    @pytest.mark.parametrize("tolerance", ["-0.01", "1.01"])
    def test_slippage_tolerance_out_of_range_rejected(self, tolerance: str) -> None:
        with pytest.raises(ValidationError):
            TradeRequest(
                direction=TradeDirection.BUY,
                amount=1,
                current_supply=0,
                slippage_tolerance=tolerance,
            )

    def test_immutable(self) -> None:
        request = TradeRequest(direction=TradeDirection.BUY, amount=1, current_supply=0)
        with pytest.raises(ValidationError):
            request.amount = Decimal(2)


class TestTradeQuote:
    """Тесты котировки"""

    def test_create_valid_quote(self) -> None:
        quote = make_quote()
        assert quote.direction == TradeDirection.SELL
        assert quote.total_fees == quote.protocol_fee + quote.creator_fee

    def test_zero_tokens_rejected(self) -> None:
        """Котировка на ноль токенов не существует"""
        with pytest.raises(ValidationError):
            make_quote(tokens_exchanged=Decimal(0))

    def test_zero_start_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_quote(start_price=Decimal(0))

    def test_negative_fee_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_quote(protocol_fee=Decimal("-0.01"))

    def test_immutable(self) -> None:
        quote = make_quote()
        with pytest.raises(ValidationError):
            quote.tokens_exchanged = Decimal(1)

    def test_to_record_is_json_compatible(self) -> None:
        """Decimal → str, Enum → value"""
        record = make_quote().to_record()
        assert record["direction"] == "sell"
        assert record["curve_type"] == "linear"
        assert record["gross_amount"] == "2.875"
        assert record["new_supply"] == "45000"
        assert record["exceeds_max_slippage"] is False
        assert Decimal(record["total_fees"]) == Decimal("0.0575")

    def test_to_record_round_trip(self) -> None:
        quote = make_quote()
        assert TradeQuote.model_validate(quote.to_record()) == quote


class TestSpotPrice:
    """Тесты SpotPrice"""

    def test_create(self) -> None:
        spot = SpotPrice(price="0.0101", supply=1_000_000, curve_type=CurveType.LINEAR)
        assert spot.price == Decimal("0.0101")

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SpotPrice(price="-1", supply=0, curve_type=CurveType.LINEAR)
