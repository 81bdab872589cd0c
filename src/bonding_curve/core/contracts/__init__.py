"""
Contract Validation Module

Модуль для валидации JSON записей на границе движка котировок.
"""

from .validators import (
    SCHEMA_DIR,
    TRADE_QUOTE_SCHEMA,
    TRADE_REQUEST_SCHEMA,
    contract_validator,
    contract_violations,
    validate_trade_quote,
    validate_trade_request,
)

__all__ = [
    # Constants
    "SCHEMA_DIR",
    "TRADE_REQUEST_SCHEMA",
    "TRADE_QUOTE_SCHEMA",
    # Functions
    "contract_validator",
    "contract_violations",
    "validate_trade_request",
    "validate_trade_quote",
]
