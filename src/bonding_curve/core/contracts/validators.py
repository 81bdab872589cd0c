"""
Trade Contracts — JSON Schema валидация записей запроса и котировки

Граница движка с внешним JSON:
- trade_request.json — входная запись {direction, amount, current_supply, ...},
  проверяется в TradeRequest.from_record() до построения модели
- trade_quote.json   — выходная запись TradeQuote.to_record(),
  проверяется в QuoteResult.to_record() перед выдачей наружу

Нарушение контракта — это InvalidInput: запись отклоняется тем же видом
ошибки, что и невалидные значения внутри ядра.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from bonding_curve.core.errors import InvalidInput

# Схемы поставляются вместе с пакетом
SCHEMA_DIR = Path(__file__).parent / "schema"

TRADE_REQUEST_SCHEMA = "trade_request"
TRADE_QUOTE_SCHEMA = "trade_quote"


# =============================================================================
# SCHEMA LOADING
# =============================================================================


@lru_cache(maxsize=None)
def contract_validator(schema_name: str) -> Draft202012Validator:
    """
    Валидатор для схемы из SCHEMA_DIR (кэшируется по имени).

    Args:
        schema_name: Имя схемы без расширения (например, 'trade_quote')

    Raises:
        FileNotFoundError: Если файл схемы не найден
        ValueError: Если файл не является валидной JSON Schema
    """
    schema_path = SCHEMA_DIR / f"{schema_name}.json"
    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    # Валидируем саму схему (meta-validation)
    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

    return Draft202012Validator(schema)


def contract_violations(schema_name: str, record: Dict[str, Any]) -> List[str]:
    """
    Все нарушения схемы в виде "<json path>: <message>", отсортированные по пути.

    Пустой список означает, что запись соответствует контракту.
    """
    errors = sorted(contract_validator(schema_name).iter_errors(record), key=lambda e: e.json_path)
    return [f"{e.json_path}: {e.message}" for e in errors]


def _check(schema_name: str, record: Dict[str, Any]) -> None:
    violations = contract_violations(schema_name, record)
    if violations:
        raise InvalidInput(f"{schema_name} contract violated: " + "; ".join(violations))


# =============================================================================
# TRADE CONTRACTS
# =============================================================================


def validate_trade_request(record: Dict[str, Any]) -> None:
    """
    Валидация входной записи запроса.

    Raises:
        InvalidInput: Если запись не соответствует trade_request.json
    """
    _check(TRADE_REQUEST_SCHEMA, record)


def validate_trade_quote(record: Dict[str, Any]) -> None:
    """
    Валидация записи котировки (TradeQuote.to_record()).

    Raises:
        InvalidInput: Если запись не соответствует trade_quote.json
    """
    _check(TRADE_QUOTE_SCHEMA, record)
