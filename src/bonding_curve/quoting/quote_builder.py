"""Quote Builder — сборка fee-inclusive котировки сделки.

Компонует Curve Functions, Integrator, Fee Calculator и Trade Solver:

BUY (amount = бюджет в native currency):
    1. amount >= min_buy_amount
    2. Комиссии с отправленной суммы: net_principal = amount - total_fees
    3. tokens = solve_tokens_for_budget(net_principal)
    4. average_price = net_principal / tokens

SELL (amount = количество токенов):
    1. amount >= min_sell_amount, amount <= current_supply
    2. gross_proceeds = sell_proceeds(amount)
    3. Комиссии с gross proceeds: net_proceeds = gross - total_fees
    4. average_price = gross_proceeds / amount

Для обоих направлений:
    start_price = price(current_supply)
    price_impact = |average_price - start_price| / start_price
    new_supply = current_supply ± tokens

Ошибки ядра (InvalidInput, NumericOverflow, SolverFailure, DivisionByZero)
возвращаются как QuoteResult(ok=False), а не пробрасываются: batch-котировка
сообщает о каждой неудачной сделке отдельно.

build_record() принимает внешнюю JSON-запись (trade_request.json), а
QuoteResult.to_record() отдаёт результат, проверенный по trade_quote.json.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from bonding_curve.core.contracts import validate_trade_quote
from bonding_curve.core.domain.curve import (
    CurveParameters,
    CurveType,
    SpotPrice,
    default_curve_parameters,
)
from bonding_curve.core.domain.trade import TradeDirection, TradeQuote, TradeRequest
from bonding_curve.core.errors import InvalidInput, QuoteError, QuoteErrorKind
from bonding_curve.core.math.curves import price_at_supply, spot_price
from bonding_curve.core.math.fees import calculate_fees_for_schedule
from bonding_curve.core.math.integration import sell_proceeds
from bonding_curve.core.math.numerical_safeguards import DecimalLike, quote_context
from bonding_curve.core.math.price_impact import (
    calculate_price_impact,
    exceeds_slippage_warning,
    minimum_received,
)
from bonding_curve.core.math.solver import solve_tokens_for_budget
from bonding_curve.quoting.config import QuoteEngineConfig

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class QuoteResult:
    """Результат котировки: котировка или вид ошибки с причиной."""

    ok: bool
    quote: TradeQuote | None
    error_kind: QuoteErrorKind | None
    reason: str

    # Детали
    details: str

    def to_record(self) -> dict[str, Any]:
        """
        JSON-запись результата.

        Успешная котировка проверяется по trade_quote.json перед выдачей.

        Raises:
            InvalidInput: Если запись котировки нарушает контракт
        """
        if not self.ok or self.quote is None:
            return {"ok": False, "error_kind": self.error_kind.value, "reason": self.reason}

        record = self.quote.to_record()
        validate_trade_quote(record)
        return {"ok": True, "quote": record}


# =============================================================================
# QUOTE BUILDER
# =============================================================================


class QuoteBuilder:
    """Сборщик котировок.

    Stateless: хранит только неизменяемую конфигурацию, поэтому один экземпляр
    можно использовать из любого количества потоков без синхронизации.
    """

    def __init__(self, config: QuoteEngineConfig | None = None):
        """Инициализация QuoteBuilder.

        Args:
            config: конфигурация движка (опционально, используется default)
        """
        self.config = config or QuoteEngineConfig()

    def build(self, request: TradeRequest) -> QuoteResult:
        """Котировка одной сделки.

        Args:
            request: валидированный запрос на сделку

        Returns:
            QuoteResult с ok=True и quote, либо ok=False с error_kind и reason
        """
        params = request.resolved_curve_parameters()

        try:
            if request.direction == TradeDirection.BUY:
                quote = self._build_buy(request, params)
            else:
                quote = self._build_sell(request, params)
        except QuoteError as e:
            logger.warning(
                "quote failed: direction=%s amount=%s supply=%s curve=%s kind=%s reason=%s",
                request.direction.value,
                request.amount,
                request.current_supply,
                request.curve_type.value,
                e.kind.value,
                e,
            )
            return self._failed_result(e)

        if quote.exceeds_max_slippage:
            logger.warning(
                "quote price impact %s exceeds warning threshold %s",
                quote.price_impact,
                self.config.max_slippage_warning,
            )

        return QuoteResult(
            ok=True,
            quote=quote,
            error_kind=None,
            reason="",
            details=(
                f"{quote.direction.value}: tokens={quote.tokens_exchanged}, "
                f"gross={quote.gross_amount}, fees={quote.total_fees}, "
                f"avg_price={quote.average_price}, impact={quote.price_impact}"
            ),
        )

    def build_many(self, requests: Iterable[TradeRequest]) -> list[QuoteResult]:
        """Batch-котировка: ошибка одной сделки не прерывает остальные.

        Args:
            requests: запросы на сделки

        Returns:
            QuoteResult для каждого запроса в том же порядке
        """
        return [self.build(request) for request in requests]

    def build_record(self, record: dict[str, Any]) -> QuoteResult:
        """Котировка по внешней JSON-записи запроса.

        Запись, нарушающая trade_request.json или правила TradeRequest,
        возвращается как QuoteResult(ok=False, error_kind=InvalidInput).
        """
        try:
            request = TradeRequest.from_record(record)
        except InvalidInput as e:
            logger.warning("quote record rejected: %s", e)
            return self._failed_result(e)

        return self.build(request)

    def spot_price(
        self,
        supply: DecimalLike,
        curve_type: CurveType = CurveType.LINEAR,
        params: CurveParameters | None = None,
    ) -> SpotPrice:
        """Текущая цена кривой при заданном supply.

        Raises:
            InvalidInput: отрицательный supply
            NumericOverflow: экспонента за порогом безопасности
        """
        return spot_price(supply, curve_type, params or default_curve_parameters(curve_type))

    # -------------------------------------------------------------------------
    # BUY / SELL
    # -------------------------------------------------------------------------

    def _build_buy(self, request: TradeRequest, params: CurveParameters) -> TradeQuote:
        config = self.config
        supply = request.current_supply
        gross = request.amount

        if gross < config.min_buy_amount:
            raise InvalidInput(f"Minimum buy amount is {config.min_buy_amount}, got {gross}")

        # 1. Комиссии с отправленной суммы, до решения solver
        fees = calculate_fees_for_schedule(gross, request.fee_schedule)
        with quote_context():
            net_principal = gross - fees.total_fee

        if net_principal <= 0:
            raise InvalidInput(f"Amount after fees must be positive, got {net_principal}")

        # 2. Количество токенов на net_principal
        solved = solve_tokens_for_budget(
            net_principal,
            supply,
            request.curve_type,
            params,
            tolerance=config.solver_tolerance,
            max_iterations=config.solver_max_iterations,
            upper_bound=config.solver_upper_bound,
            integration_steps=config.integration_steps,
        )
        tokens = solved.tokens

        if tokens < config.min_token_amount:
            raise InvalidInput(
                f"Token amount {tokens} is below minimum {config.min_token_amount}"
            )

        # 3. Метрики
        start_price = price_at_supply(supply, request.curve_type, params)
        with quote_context():
            average_price = net_principal / tokens
            new_supply = supply + tokens
        price_impact = calculate_price_impact(start_price, average_price)
        end_price = price_at_supply(new_supply, request.curve_type, params)

        logger.debug(
            "buy quote: gross=%s net=%s tokens=%s start=%s avg=%s impact=%s",
            gross,
            net_principal,
            tokens,
            start_price,
            average_price,
            price_impact,
        )

        return TradeQuote(
            direction=TradeDirection.BUY,
            curve_type=request.curve_type,
            gross_amount=gross,
            net_principal=net_principal,
            tokens_exchanged=tokens,
            protocol_fee=fees.protocol_fee,
            creator_fee=fees.creator_fee,
            total_fees=fees.total_fee,
            average_price=average_price,
            start_price=start_price,
            end_price=end_price,
            price_impact=price_impact,
            new_supply=new_supply,
            minimum_received=minimum_received(tokens, request.slippage_tolerance),
            exceeds_max_slippage=exceeds_slippage_warning(
                price_impact, config.max_slippage_warning
            ),
        )

    def _build_sell(self, request: TradeRequest, params: CurveParameters) -> TradeQuote:
        config = self.config
        supply = request.current_supply
        tokens = request.amount

        if tokens < config.min_sell_amount:
            raise InvalidInput(f"Minimum sell amount is {config.min_sell_amount} tokens, got {tokens}")

        if tokens > supply:
            raise InvalidInput(
                f"Cannot sell more tokens than current supply: amount={tokens}, supply={supply}"
            )

        # 1. Gross proceeds по кривой
        gross_proceeds = sell_proceeds(
            tokens,
            supply,
            request.curve_type,
            params,
            integration_steps=config.integration_steps,
        )

        # 2. Комиссии с gross proceeds
        fees = calculate_fees_for_schedule(gross_proceeds, request.fee_schedule)
        with quote_context():
            net_proceeds = gross_proceeds - fees.total_fee
            average_price = gross_proceeds / tokens
            new_supply = supply - tokens

        # 3. Метрики
        start_price = price_at_supply(supply, request.curve_type, params)
        price_impact = calculate_price_impact(start_price, average_price)
        end_price = price_at_supply(new_supply, request.curve_type, params)

        logger.debug(
            "sell quote: tokens=%s gross=%s net=%s start=%s avg=%s impact=%s",
            tokens,
            gross_proceeds,
            net_proceeds,
            start_price,
            average_price,
            price_impact,
        )

        return TradeQuote(
            direction=TradeDirection.SELL,
            curve_type=request.curve_type,
            gross_amount=gross_proceeds,
            net_principal=net_proceeds,
            tokens_exchanged=tokens,
            protocol_fee=fees.protocol_fee,
            creator_fee=fees.creator_fee,
            total_fees=fees.total_fee,
            average_price=average_price,
            start_price=start_price,
            end_price=end_price,
            price_impact=price_impact,
            new_supply=new_supply,
            minimum_received=minimum_received(net_proceeds, request.slippage_tolerance),
            exceeds_max_slippage=exceeds_slippage_warning(
                price_impact, config.max_slippage_warning
            ),
        )

    def _failed_result(self, error: QuoteError) -> QuoteResult:
        """Создание failed result.

        Args:
            error: ошибка ядра

        Returns:
            QuoteResult с ok=False
        """
        return QuoteResult(
            ok=False,
            quote=None,
            error_kind=error.kind,
            reason=str(error),
            details=f"{error.kind.value}: {error}",
        )


def build_quote(request: TradeRequest, config: QuoteEngineConfig | None = None) -> QuoteResult:
    """Котировка одной сделки с конфигурацией по умолчанию."""
    return QuoteBuilder(config).build(request)
