"""
End-to-end tests for parse_money(): scenarios, defaults, negatives, errors.
"""

from __future__ import annotations

import pytest

from money_parser import parse_money
from money_parser.exceptions import (
    InvalidCurrencyError,
    MinorUnitError,
    MoneyParseError,
    ValueOverflowError,
)
from money_parser.models import MAX_SAFE_INTEGER
from money_parser.symbols import CURRENCY_SYMBOLS


# ═══════════════════════════════════════════════════════════════════════
# SCENARIOS
# ═══════════════════════════════════════════════════════════════════════


class TestScenarios:
    @pytest.mark.parametrize(
        ("text", "currency", "amount"),
        [
            ("$100", "USD", 100),
            ("a dollar and 23 cents", "USD", 1.23),
            ("quarter million dollars", "USD", 250_000),
            ("1.234,56 €", "EUR", 1234.56),
            ("$19.99", "USD", 19.99),
            ("£75.50", "GBP", 75.50),
            ("USD 250", "USD", 250),
            ("100 EUR", "EUR", 100),
            ("CHF 1'234.50", "CHF", 1234.50),
            ("₹12,34,567", "INR", 1_234_567),
            ("one hundred dollars", "USD", 100),
            ("twenty-five pounds", "GBP", 25),
            ("five hundred yen", "JPY", 500),
            ("fifty quid", "GBP", 50),
            ("a fiver", "GBP", 5),
            ("ten grand", "USD", 10_000),
            ("$5k", "USD", 5_000),
            ("500k EUR", "EUR", 500_000),
            ("1.2 billion USD", "USD", 1_200_000_000),
            ("The budget is 2 million dollars", "USD", 2_000_000),
            ("Invoice total: $1,234.56", "USD", 1234.56),
            ("5 dollars and 50 cents", "USD", 5.50),
            ("two pounds and 30 pence", "GBP", 2.30),
            ("5 pounds 20 pence", "GBP", 5.20),
            ("50 pence", "GBP", 0.50),
            ("a dollar fifty", "USD", 1.50),
            ("half a million euros", "EUR", 500_000),
            ("R$150", "BRL", 150),
            ("kr 500", "SEK", 500),
            ("MX$250", "MXN", 250),
        ],
    )
    def test_scenario(self, text, currency, amount):
        ctx = parse_money(text)
        assert ctx.currency == currency
        assert ctx.amount == pytest.approx(amount)
        assert ctx.original == text

    def test_fraction_of_magnitude_is_approximate(self):
        ctx = parse_money("two thirds of a million dollars")
        assert ctx.amount == pytest.approx(666_666.67, abs=0.01)

    def test_idempotent(self):
        first = parse_money("a dollar and 23 cents")
        second = parse_money("a dollar and 23 cents")
        assert (first.currency, first.amount, first.original) == (
            second.currency,
            second.amount,
            second.original,
        )

    def test_metadata(self):
        ctx = parse_money("$100")
        assert ctx.matches["currency_source"] == "symbol"
        assert ctx.matches["symbol"] == "$"
        assert ctx.matches["parser"] == "plain_number"
        assert ctx.matches["format"] == "us"
        assert ctx.matches["minor_units"] == 10_000


class TestEverySymbol:
    @pytest.mark.parametrize("symbol", sorted(CURRENCY_SYMBOLS))
    def test_symbol_then_digits(self, symbol):
        ctx = parse_money(f"{symbol}100")
        assert ctx.currency == CURRENCY_SYMBOLS[symbol][0]
        assert ctx.amount == 100


# ═══════════════════════════════════════════════════════════════════════
# NOTHING TO FIND
# ═══════════════════════════════════════════════════════════════════════


class TestNoMatch:
    def test_plain_text(self):
        ctx = parse_money("hello world")
        assert ctx.currency is None
        assert ctx.amount is None

    def test_empty_string(self):
        ctx = parse_money("")
        assert (ctx.original, ctx.currency, ctx.amount) == ("", None, None)

    def test_letter_symbol_without_number(self):
        assert parse_money("R and D").currency is None

    def test_lowercase_code_word(self):
        ctx = parse_money("try 3 times")
        assert ctx.currency is None
        assert ctx.amount == 3

    def test_letter_symbol_label(self):
        ctx = parse_money("Room R2")
        assert ctx.currency is None
        assert ctx.amount == 2

    def test_grand_as_adjective(self):
        ctx = parse_money("grand total: $100")
        assert (ctx.currency, ctx.amount) == ("USD", 100)


# ═══════════════════════════════════════════════════════════════════════
# DEFAULT CURRENCY
# ═══════════════════════════════════════════════════════════════════════


class TestDefaultCurrency:
    def test_applied_when_nothing_detected(self):
        ctx = parse_money("100", default_currency="EUR")
        assert ctx.currency == "EUR"
        assert ctx.currency_was_default is True
        assert ctx.matches["currency_source"] == "default"

    def test_lowercase_default_is_normalized(self):
        assert parse_money("100", default_currency="eur").currency == "EUR"

    def test_never_overrides_detected_currency(self):
        ctx = parse_money("£5", default_currency="EUR")
        assert ctx.currency == "GBP"
        assert not ctx.currency_was_default

    def test_disambiguates_shared_symbol(self):
        ctx = parse_money("$100", default_currency="CAD")
        assert ctx.currency == "CAD"
        assert not ctx.currency_was_default

    def test_disambiguates_shared_letter_symbol(self):
        assert parse_money("kr 500", default_currency="NOK").currency == "NOK"

    def test_hints_standalone_minor_units(self):
        ctx = parse_money("75 cents", default_currency="EUR")
        assert (ctx.currency, ctx.amount) == ("EUR", pytest.approx(0.75))

    def test_applied_to_empty_text(self):
        ctx = parse_money("", default_currency="USD")
        assert ctx.currency == "USD"
        assert ctx.amount is None

    def test_invalid_code_raises(self):
        with pytest.raises(InvalidCurrencyError, match="XYZ") as exc_info:
            parse_money("100", default_currency="XYZ")
        assert exc_info.value.code == "INVALID_CURRENCY"
        assert exc_info.value.input_text == "100"

    def test_invalid_code_is_a_parse_error(self):
        with pytest.raises(MoneyParseError):
            parse_money("100", default_currency="dollars")


# ═══════════════════════════════════════════════════════════════════════
# NEGATIVE AMOUNTS
# ═══════════════════════════════════════════════════════════════════════


class TestNegativeAmounts:
    def test_accounting_parentheses(self):
        ctx = parse_money("($1,234.56)")
        assert ctx.amount == pytest.approx(-1234.56)
        assert ctx.currency == "USD"
        assert ctx.is_negative is True
        assert ctx.original == "($1,234.56)"

    def test_parentheses_with_trailing_text(self):
        assert parse_money("($50) refund").amount == -50

    def test_hyphen(self):
        assert parse_money("-$100").amount == -100

    def test_minus_word(self):
        ctx = parse_money("minus 5 euros")
        assert (ctx.currency, ctx.amount) == ("EUR", -5)

    def test_embedded_hyphen_is_not_negative(self):
        ctx = parse_money("555-1234")
        assert ctx.amount == 555
        assert not ctx.is_negative

    def test_sign_without_amount(self):
        ctx = parse_money("-")
        assert ctx.amount is None
        assert ctx.is_negative is None


# ═══════════════════════════════════════════════════════════════════════
# ERRORS
# ═══════════════════════════════════════════════════════════════════════


class TestErrors:
    def test_non_string_input(self):
        with pytest.raises(MoneyParseError, match="must be a string"):
            parse_money(None)  # type: ignore[arg-type]

    def test_overflow(self):
        with pytest.raises(ValueOverflowError) as exc_info:
            parse_money("$999999999999999999")
        assert exc_info.value.limit == MAX_SAFE_INTEGER

    def test_overflow_from_words(self):
        with pytest.raises(ValueOverflowError):
            parse_money("ninety nine hundred trillion dollars")

    def test_overflow_is_not_a_parse_error(self):
        assert not issubclass(ValueOverflowError, MoneyParseError)

    def test_largest_safe_amount(self):
        assert parse_money(f"${MAX_SAFE_INTEGER}").amount == MAX_SAFE_INTEGER

    def test_minor_at_scale(self):
        with pytest.raises(MinorUnitError) as exc_info:
            parse_money("5 dollars and 100 cents")
        assert exc_info.value.code == "INVALID_MINOR_UNIT"

    def test_standalone_minor_at_scale(self):
        with pytest.raises(MinorUnitError):
            parse_money("150 pence")
