"""
Custom exception hierarchy for money parsing.

Two kinds of failure reach the caller:
  - structural / validation problems (bad default currency, invalid minor
    units, non-text input) → MoneyParseError and its subclasses
  - amounts beyond the exact-integer range of a float → ValueOverflowError

"This text is not my pattern" inside a sub-parser is NOT one of these:
sub-parsers raise a plain ValueError and the pipeline moves on.
"""

from __future__ import annotations


class MoneyError(Exception):
    """Base exception for all money parsing failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class MoneyParseError(MoneyError):
    """The input (or an option passed with it) cannot be parsed."""

    def __init__(
        self,
        message: str,
        input_text: object = None,
        details: dict | None = None,
        code: str = "PARSE_ERROR",
    ):
        self.input_text = input_text
        super().__init__(code, message, {"input": input_text, **(details or {})})


class InvalidCurrencyError(MoneyParseError):
    """A currency code is not in the registry."""

    def __init__(self, message: str, input_text: object = None, details: dict | None = None):
        super().__init__(message, input_text, details, code="INVALID_CURRENCY")


class MinorUnitError(MoneyParseError):
    """A minor-unit amount is out of range or unsupported for its currency."""

    def __init__(self, message: str, input_text: object = None, details: dict | None = None):
        super().__init__(message, input_text, details, code="INVALID_MINOR_UNIT")


class ValueOverflowError(MoneyError):
    """A parsed magnitude exceeds the safe-integer ceiling."""

    def __init__(self, value: float, limit: int, source: str | None = None):
        self.value = value
        self.limit = limit
        message = f"Number {value!r} exceeds maximum safe integer ({limit})"
        if source:
            message += f" in {source!r}"
        super().__init__(
            "VALUE_OVERFLOW",
            message,
            {"value": str(value), "limit": limit, "source": source},
        )
