"""
Тесты для Integrator

Проверяет:
1. Замкнутую формулу для линейной кривой
2. Trapezoidal rule против аналитического интеграла экспоненты
3. Выручку от продажи как стоимость обратного выкупа
4. Отбраковку некорректных входов (amount <= 0, oversell, integration_steps)
5. Монотонность buy_cost по amount (property-based)
"""

import math
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bonding_curve.core.domain.curve import CurveParameters, CurveType, default_curve_parameters
from bonding_curve.core.domain.trade import TradeDirection
from bonding_curve.core.errors import InvalidInput, NumericOverflow
from bonding_curve.core.math.integration import (
    INTEGRATION_STEPS,
    buy_cost,
    curve_cost,
    sell_proceeds,
)

LINEAR = default_curve_parameters(CurveType.LINEAR)
EXPONENTIAL = default_curve_parameters(CurveType.EXPONENTIAL)


def analytic_exponential_integral(base: float, rate: float, lower: float, upper: float) -> float:
    """∫ base * e^(rate * x) dx по [lower, upper]"""
    return base / rate * (math.exp(rate * upper) - math.exp(rate * lower))


# =============================================================================
# ТЕСТЫ: Linear (замкнутая формула)
# =============================================================================


class TestLinearBuyCost:
    """Тесты стоимости покупки на линейной кривой"""

    def test_buy_cost_exact(self) -> None:
        """
        1000 токенов от supply 5000:
            0.0001 * 1000 + 0.00000001 * (5000 * 1000 + 1000^2 / 2) = 0.155
        """
        assert buy_cost(1000, 5000, CurveType.LINEAR, LINEAR) == Decimal("0.155")

    def test_buy_cost_from_zero_supply(self) -> None:
        """От нулевого supply: base * amount + slope * amount^2 / 2"""
        assert buy_cost(1_000_000, 0, CurveType.LINEAR, LINEAR) == Decimal("5100")

    def test_flat_curve_costs_base_price_per_token(self) -> None:
        """slope == 0: стоимость == base_price * amount"""
        params = CurveParameters(base_price="0.5", rate=0)
        assert buy_cost(123, 1000, CurveType.LINEAR, params) == Decimal("61.5")

    def test_cost_between_end_prices(self) -> None:
        """Средняя цена покупки лежит между ценами на концах интервала"""
        cost = buy_cost(10_000, 100_000, CurveType.LINEAR, LINEAR)
        average = cost / 10_000
        assert Decimal("0.0011") < average < Decimal("0.0012")


class TestLinearSellProceeds:
    """Тесты выручки от продажи на линейной кривой"""

    def test_sell_proceeds_exact(self) -> None:
        """
        5000 токенов при supply 50000 (new_supply = 45000):
            0.0001 * 5000 + 0.00000001 * (45000 * 5000 + 5000^2 / 2) = 2.875
        """
        assert sell_proceeds(5000, 50_000, CurveType.LINEAR, LINEAR) == Decimal("2.875")

    def test_sell_equals_buyback_from_new_supply(self) -> None:
        """sell_proceeds(a, s) == buy_cost(a, s - a)"""
        proceeds = sell_proceeds(7500, 80_000, CurveType.LINEAR, LINEAR)
        assert proceeds == buy_cost(7500, 72_500, CurveType.LINEAR, LINEAR)

    def test_sell_entire_supply(self) -> None:
        """Продажа всего supply допустима (new_supply == 0)"""
        proceeds = sell_proceeds(1_000_000, 1_000_000, CurveType.LINEAR, LINEAR)
        assert proceeds == buy_cost(1_000_000, 0, CurveType.LINEAR, LINEAR)

    def test_oversell_rejected(self) -> None:
        """amount > from_supply → InvalidInput"""
        with pytest.raises(InvalidInput, match="Cannot sell more tokens than current supply"):
            sell_proceeds(1001, 1000, CurveType.LINEAR, LINEAR)

    def test_result_beyond_decimal_range_is_numeric_overflow(self) -> None:
        """amount^2 за Emax контекста → NumericOverflow, а не decimal.Overflow"""
        huge = Decimal("1e600000")
        with pytest.raises(NumericOverflow, match="out of range"):
            sell_proceeds(huge, huge, CurveType.LINEAR, LINEAR)
        with pytest.raises(NumericOverflow):
            buy_cost(huge, 0, CurveType.LINEAR, LINEAR)


# =============================================================================
# ТЕСТЫ: Exponential (trapezoidal rule)
# =============================================================================


class TestExponentialIntegral:
    """Тесты trapezoidal rule для экспоненциальной кривой"""

    def test_buy_cost_matches_analytic(self) -> None:
        """1_000_000 токенов от нуля: ошибка trapezoid ~ (rate*amount)^2 / (12 * n^2)"""
        cost = buy_cost(1_000_000, 0, CurveType.EXPONENTIAL, EXPONENTIAL)
        expected = analytic_exponential_integral(0.0001, 0.0000001, 0, 1_000_000)
        assert float(cost) == pytest.approx(expected, rel=1e-8)

    def test_trapezoid_overestimates_convex_curve(self) -> None:
        """Для выпуклой экспоненты trapezoid даёт оценку сверху"""
        params = CurveParameters(base_price="0.0001", rate="0.000001")
        cost = buy_cost(1_000_000, 0, CurveType.EXPONENTIAL, params)
        expected = analytic_exponential_integral(0.0001, 0.000001, 0, 1_000_000)
        assert float(cost) > expected
        assert float(cost) == pytest.approx(expected, rel=1e-4)

    def test_sell_proceeds_matches_analytic(self) -> None:
        """Выручка == интеграл по [supply - amount, supply]"""
        proceeds = sell_proceeds(500_000, 2_000_000, CurveType.EXPONENTIAL, EXPONENTIAL)
        expected = analytic_exponential_integral(0.0001, 0.0000001, 1_500_000, 2_000_000)
        assert float(proceeds) == pytest.approx(expected, rel=1e-8)

    def test_sell_equals_buyback_from_new_supply(self) -> None:
        """Интеграл не зависит от направления обхода"""
        proceeds = sell_proceeds(300_000, 1_000_000, CurveType.EXPONENTIAL, EXPONENTIAL)
        buyback = buy_cost(300_000, 700_000, CurveType.EXPONENTIAL, EXPONENTIAL)
        # Узлы совпадают, различается только порядок суммирования
        assert abs(proceeds - buyback) < Decimal("1e-20")

    def test_zero_growth_rate_is_flat(self) -> None:
        """growth_rate == 0: стоимость == base_price * amount"""
        params = CurveParameters(base_price="0.25", rate=0)
        assert buy_cost(1000, 5000, CurveType.EXPONENTIAL, params) == Decimal("250")

    def test_single_step_is_one_trapezoid(self) -> None:
        """integration_steps == 1: (price(a) + price(b)) / 2 * amount"""
        params = CurveParameters(base_price="1", rate="0.1")
        cost = buy_cost(10, 0, CurveType.EXPONENTIAL, params, integration_steps=1)
        assert float(cost) == pytest.approx((1 + math.e) / 2 * 10, rel=1e-15)

    def test_more_steps_converge_to_analytic(self) -> None:
        """Ошибка уменьшается с ростом integration_steps"""
        params = CurveParameters(base_price="1", rate="0.1")
        expected = analytic_exponential_integral(1, 0.1, 0, 10)
        coarse = buy_cost(10, 0, CurveType.EXPONENTIAL, params, integration_steps=10)
        fine = buy_cost(10, 0, CurveType.EXPONENTIAL, params, integration_steps=100)
        assert abs(float(fine) - expected) < abs(float(coarse) - expected)

    def test_overflow_past_safety_limit(self) -> None:
        """Supply за порогом экспоненты → NumericOverflow"""
        with pytest.raises(NumericOverflow):
            buy_cost(1000, 1_000_000_001, CurveType.EXPONENTIAL, EXPONENTIAL)

    def test_default_steps(self) -> None:
        assert INTEGRATION_STEPS == 1000


# =============================================================================
# ТЕСТЫ: Валидация и dispatch
# =============================================================================


class TestIntegratorValidation:
    """Тесты отбраковки некорректных входов"""

    @pytest.mark.parametrize("curve_type", list(CurveType))
    @pytest.mark.parametrize("amount", [0, -1, "-0.5"])
    def test_non_positive_amount_rejected(self, curve_type: CurveType, amount) -> None:
        params = default_curve_parameters(curve_type)
        with pytest.raises(InvalidInput, match="amount must be positive"):
            buy_cost(amount, 0, curve_type, params)
        with pytest.raises(InvalidInput, match="amount must be positive"):
            sell_proceeds(amount, 1000, curve_type, params)

    def test_negative_supply_rejected(self) -> None:
        with pytest.raises(InvalidInput, match="from_supply cannot be negative"):
            buy_cost(1, -1, CurveType.LINEAR, LINEAR)

    @pytest.mark.parametrize("steps", [0, -10, True, 1.5])
    def test_invalid_integration_steps_rejected(self, steps) -> None:
        with pytest.raises(InvalidInput, match="integration_steps"):
            buy_cost(1, 0, CurveType.EXPONENTIAL, EXPONENTIAL, integration_steps=steps)

    def test_nan_amount_rejected(self) -> None:
        with pytest.raises(InvalidInput, match="finite"):
            buy_cost(float("nan"), 0, CurveType.LINEAR, LINEAR)

    def test_curve_cost_dispatch(self) -> None:
        """curve_cost выбирает buy_cost / sell_proceeds по направлению"""
        assert curve_cost(TradeDirection.BUY, 1000, 5000, CurveType.LINEAR, LINEAR) == Decimal("0.155")
        assert curve_cost(TradeDirection.SELL, 5000, 50_000, CurveType.LINEAR, LINEAR) == Decimal("2.875")


# =============================================================================
# ТЕСТЫ: Монотонность (property-based)
# =============================================================================


token_amounts = st.decimals(
    min_value=Decimal("0.000001"), max_value=Decimal(100_000_000), places=6,
    allow_nan=False, allow_infinity=False,
)


class TestMonotonicity:
    """buy_cost(a1, s) < buy_cost(a2, s) при a1 < a2: основа bisection"""

    @settings(max_examples=200, deadline=None)
    @given(
        a1=token_amounts,
        a2=token_amounts,
        supply=st.decimals(
            min_value=Decimal(0), max_value=Decimal(1_000_000_000), places=6,
            allow_nan=False, allow_infinity=False,
        ),
    )
    def test_linear_strictly_increasing(self, a1: Decimal, a2: Decimal, supply: Decimal) -> None:
        if a1 == a2:
            return
        low, high = min(a1, a2), max(a1, a2)
        assert buy_cost(low, supply, CurveType.LINEAR, LINEAR) < buy_cost(
            high, supply, CurveType.LINEAR, LINEAR
        )

    @settings(max_examples=25, deadline=None)
    @given(
        a1=st.integers(min_value=1, max_value=10_000_000),
        a2=st.integers(min_value=1, max_value=10_000_000),
        supply=st.integers(min_value=0, max_value=100_000_000),
    )
    def test_exponential_strictly_increasing(self, a1: int, a2: int, supply: int) -> None:
        if a1 == a2:
            return
        low, high = min(a1, a2), max(a1, a2)
        assert buy_cost(low, supply, CurveType.EXPONENTIAL, EXPONENTIAL) < buy_cost(
            high, supply, CurveType.EXPONENTIAL, EXPONENTIAL
        )
