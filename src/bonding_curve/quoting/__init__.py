"""
Quoting — сборка fee-inclusive котировок сделок.
"""

from bonding_curve.quoting.config import (
    MIN_BUY_AMOUNT,
    MIN_SELL_AMOUNT,
    MIN_TOKEN_AMOUNT,
    QuoteEngineConfig,
)
from bonding_curve.quoting.quote_builder import QuoteBuilder, QuoteResult, build_quote

__all__ = [
    # Config
    "MIN_BUY_AMOUNT",
    "MIN_SELL_AMOUNT",
    "MIN_TOKEN_AMOUNT",
    "QuoteEngineConfig",
    # Builder
    "QuoteBuilder",
    "QuoteResult",
    "build_quote",
]
