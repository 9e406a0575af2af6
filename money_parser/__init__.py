"""
Money Parser: amounts and currencies out of natural-language text.

Architecture: Negative pre-pass → Currency detection → Amount strategies (ordered) → Annotation
Entry points: parse_money() for one expression, parse_all() for every expression in a text.
"""

from .exceptions import (
    InvalidCurrencyError,
    MinorUnitError,
    MoneyError,
    MoneyParseError,
    ValueOverflowError,
)
from .extractor import parse_all
from .models import MAX_SAFE_INTEGER, ParseContext, SpanResult
from .name_index import CurrencyNameIndex, get_name_index
from .pipeline import AMOUNT_STRATEGIES, AmountStrategy, MoneyPipeline, parse_money
from .registry import CurrencyInfo, CurrencyRegistry, get_registry

__version__ = "1.0.0"

__all__ = [
    "AMOUNT_STRATEGIES",
    "MAX_SAFE_INTEGER",
    "AmountStrategy",
    "CurrencyInfo",
    "CurrencyNameIndex",
    "CurrencyRegistry",
    "InvalidCurrencyError",
    "MinorUnitError",
    "MoneyError",
    "MoneyParseError",
    "MoneyPipeline",
    "ParseContext",
    "SpanResult",
    "ValueOverflowError",
    "get_name_index",
    "get_registry",
    "parse_all",
    "parse_money",
]
