"""
Tests for the elementary pattern parsers.

Each parser is exercised on its own here; test_pipeline.py covers how
they compete with each other.
"""

from __future__ import annotations

import pytest

from money_parser.abbreviations import (
    find_currency_code,
    match_abbreviation,
    parse_abbreviation,
    resolve_code_token,
)
from money_parser.contextual import match_contextual_phrase, parse_contextual_phrase
from money_parser.exceptions import MinorUnitError, MoneyParseError, ValueOverflowError
from money_parser.minor_units import match_minor_unit_only, parse_minor_unit_only
from money_parser.negative import (
    detect_negative,
    has_negative_prefix,
    has_parentheses_notation,
    remove_negative_indicators,
)
from money_parser.numeric import (
    match_numeric_word_combo,
    match_plain_number,
    parse_numeric_word_combo,
    parse_plain_number,
    parse_quantity,
)
from money_parser.slang import match_slang_term, parse_slang_term
from money_parser.symbols import find_symbol, resolve_symbol, symbol_candidates


# ═══════════════════════════════════════════════════════════════════════
# SYMBOLS
# ═══════════════════════════════════════════════════════════════════════


class TestSymbols:
    def test_dollar_defaults_to_usd(self):
        assert resolve_symbol("$") == "USD"

    def test_default_currency_picks_candidate(self):
        assert resolve_symbol("$", "CAD") == "CAD"

    def test_default_currency_outside_candidates_is_ignored(self):
        assert resolve_symbol("$", "EUR") == "USD"

    def test_yen_sign_shared_with_yuan(self):
        assert resolve_symbol("¥") == "JPY"
        assert resolve_symbol("¥", "cny") == "CNY"

    def test_unknown_symbol_raises(self):
        with pytest.raises(ValueError, match="Unknown currency symbol"):
            resolve_symbol("@")

    def test_candidates_are_case_folded(self):
        assert symbol_candidates("KR") == ("SEK", "NOK", "DKK", "ISK")

    def test_longest_symbol_wins(self):
        found = find_symbol("R$150")
        assert found is not None
        assert (found.symbol, found.start, found.end) == ("R$", 0, 2)

    def test_letter_symbol_needs_adjacent_number(self):
        assert find_symbol("R and D budget") is None

    def test_letter_symbol_before_number(self):
        found = find_symbol("R 100")
        assert found is not None and found.symbol == "R"

    def test_letter_symbol_after_number(self):
        found = find_symbol("price 100kr")
        assert found is not None and found.symbol == "kr"

    def test_letter_symbol_inside_word_is_ignored(self):
        assert find_symbol("dollars 5") is None

    def test_single_letter_glued_to_one_digit_is_a_label(self):
        assert find_symbol("Room R2") is None
        assert find_symbol("the R2D2 unit") is None

    def test_single_letter_glued_to_longer_amount(self):
        assert find_symbol("R25").symbol == "R"
        assert find_symbol("R2.50").symbol == "R"

    def test_no_symbol(self):
        assert find_symbol("plain text") is None


# ═══════════════════════════════════════════════════════════════════════
# ISO ABBREVIATIONS
# ═══════════════════════════════════════════════════════════════════════


class TestAbbreviations:
    def test_code_is_case_insensitive(self):
        assert resolve_code_token("usd") == "USD"

    def test_unknown_code(self):
        assert resolve_code_token("XYZ") is None

    def test_lowercase_english_word_is_not_a_code(self):
        assert resolve_code_token("all") is None
        assert resolve_code_token("try") is None

    def test_uppercase_ambiguous_code_with_amount(self):
        assert resolve_code_token("ALL", " 500") == "ALL"

    def test_ambiguous_code_before_non_monetary_word(self):
        assert resolve_code_token("ALL", " 5 items") is None

    def test_code_before_number(self):
        result = parse_abbreviation("USD 100")
        assert (result.currency, result.amount) == ("USD", 100)

    def test_number_before_code(self):
        result = parse_abbreviation("50 gbp")
        assert (result.currency, result.amount) == ("GBP", 50)

    def test_regional_amount(self):
        assert parse_abbreviation("EUR 1.234,56").amount == pytest.approx(1234.56)

    def test_everyday_words_are_not_abbreviations(self):
        with pytest.raises(ValueError, match="No currency abbreviation"):
            parse_abbreviation("try 3 times")

    def test_match_returns_none(self):
        assert match_abbreviation("nothing") is None

    def test_find_first_code(self):
        assert find_currency_code("pay in EUR or GBP") == "EUR"


# ═══════════════════════════════════════════════════════════════════════
# PLAIN NUMBERS, COMBOS AND QUANTITIES
# ═══════════════════════════════════════════════════════════════════════


class TestPlainNumbers:
    def test_grouped(self):
        assert parse_plain_number("1,234.56") == pytest.approx(1234.56)

    def test_not_a_number(self):
        with pytest.raises(ValueError, match="Not a plain number"):
            parse_plain_number("12 apples")

    def test_first_number_in_text(self):
        assert match_plain_number("order 42 shipped") == 42

    def test_hyphen_does_not_join_numbers(self):
        assert match_plain_number("555-1234") == 555

    def test_no_number(self):
        assert match_plain_number("none") is None


class TestNumericWordCombo:
    def test_thousands(self):
        result = parse_numeric_word_combo("10k")
        assert result.value == 10_000
        assert result.currency is None

    def test_symbol_prefix(self):
        result = parse_numeric_word_combo("$5m")
        assert (result.value, result.currency) == (5_000_000, "USD")

    def test_bn_suffix(self):
        assert parse_numeric_word_combo("2bn").value == 2_000_000_000

    def test_uppercase_suffix_and_code(self):
        result = parse_numeric_word_combo("1.5B USD")
        assert (result.value, result.currency) == (1_500_000_000, "USD")

    def test_default_currency_for_shared_symbol(self):
        assert parse_numeric_word_combo("$10k", "CAD").currency == "CAD"

    def test_units_are_not_suffixes(self):
        with pytest.raises(ValueError, match="No numeric-word combo"):
            parse_numeric_word_combo("10kg of flour")

    def test_overflow(self):
        with pytest.raises(ValueOverflowError):
            parse_numeric_word_combo("99999999bn")

    def test_match_returns_none(self):
        assert match_numeric_word_combo("ten thousand") is None


class TestQuantity:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("a", 1),
            ("an", 1),
            ("5", 5),
            ("1,500", 1500),
            ("2.25 thousand", 2250),
            ("2 million", 2_000_000),
            ("half a million", 500_000),
            ("forty-five", 45),
            ("a hundred", 100),
        ],
    )
    def test_quantities(self, text, expected):
        assert parse_quantity(text) == pytest.approx(expected)

    def test_empty_is_not_a_quantity(self):
        with pytest.raises(ValueError, match="Missing quantity"):
            parse_quantity("")


# ═══════════════════════════════════════════════════════════════════════
# SLANG
# ═══════════════════════════════════════════════════════════════════════


class TestSlang:
    def test_bucks(self):
        result = parse_slang_term("five bucks")
        assert (result.currency, result.value) == ("USD", 5)

    def test_fiver(self):
        result = parse_slang_term("a fiver")
        assert (result.currency, result.value) == ("GBP", 5)

    def test_plural_multiplies_unit(self):
        assert parse_slang_term("three fivers").value == 15

    def test_grand(self):
        result = parse_slang_term("ten grand")
        assert (result.currency, result.value) == ("USD", 10_000)

    def test_fractional_quantity(self):
        assert parse_slang_term("half a million bucks").value == 500_000

    def test_fraction_of_magnitude(self):
        assert parse_slang_term("two thirds of a million bucks").value == pytest.approx(666_666.67, abs=0.01)

    def test_cents_word(self):
        assert parse_slang_term("two bucks fifty").value == pytest.approx(2.50)

    def test_cents_word_ignored_for_larger_units(self):
        assert parse_slang_term("a tenner fifty").value == 10

    def test_symbol_glued_to_quantity(self):
        assert parse_slang_term("$5 bucks").value == 5
        assert parse_slang_term("5€ bucks").value == 5

    def test_bare_term_means_one(self):
        assert parse_slang_term("bucks").value == 1

    def test_grand_needs_quantity(self):
        with pytest.raises(ValueError, match="No slang term"):
            parse_slang_term("grand total: $100")

    def test_match_returns_none(self):
        assert match_slang_term("no slang") is None


# ═══════════════════════════════════════════════════════════════════════
# MINOR UNITS
# ═══════════════════════════════════════════════════════════════════════


class TestMinorUnitsOnly:
    def test_cents(self):
        result = parse_minor_unit_only("75 cents")
        assert result.currency == "USD"
        assert result.value == pytest.approx(0.75)

    def test_worded_cents(self):
        assert parse_minor_unit_only("fifty cents").value == pytest.approx(0.5)

    def test_pence(self):
        result = parse_minor_unit_only("50 pence")
        assert (result.currency, result.value) == ("GBP", pytest.approx(0.5))

    def test_explicit_currency(self):
        assert parse_minor_unit_only("75 cents", "EUR").currency == "EUR"

    def test_amount_at_scale_raises(self):
        with pytest.raises(MinorUnitError, match=">= 100"):
            parse_minor_unit_only("100 cents")

    def test_zero_decimal_currency_raises(self):
        with pytest.raises(MinorUnitError, match="does not support minor units"):
            parse_minor_unit_only("50 cents", "JPY")

    def test_compound_phrase_is_deferred(self):
        with pytest.raises(ValueError, match="Compound"):
            parse_minor_unit_only("a dollar and 23 cents")

    def test_trailing_a_digit_amount_is_not_standalone(self):
        with pytest.raises(ValueError, match="major amount"):
            parse_minor_unit_only("$5 and 20 cents")

    def test_out_of_range_after_major_amount_is_declined(self):
        assert match_minor_unit_only("$5 or 120 cents") is None

    def test_match_returns_none(self):
        assert match_minor_unit_only("just cents") is None


# ═══════════════════════════════════════════════════════════════════════
# CONTEXTUAL PHRASES
# ═══════════════════════════════════════════════════════════════════════


class TestContextualPhrase:
    def test_article_means_one(self):
        result = parse_contextual_phrase("a dollar")
        assert (result.currency, result.value) == ("USD", 1)

    def test_worded_quantity_with_code(self):
        result = parse_contextual_phrase("one hundred forty five GBP")
        assert (result.currency, result.value) == ("GBP", 145)

    def test_fraction_of_magnitude(self):
        assert parse_contextual_phrase("quarter million dollars").value == 250_000

    def test_hybrid_quantity(self):
        assert parse_contextual_phrase("2.25 thousand dollars").value == pytest.approx(2250)

    def test_major_and_minor(self):
        result = parse_contextual_phrase("a dollar and 23 cents")
        assert result.value == pytest.approx(1.23)
        assert result.has_minor

    def test_juxtaposed_minor(self):
        result = parse_contextual_phrase("5 pounds 20 pence")
        assert (result.currency, result.value) == ("GBP", pytest.approx(5.20))

    def test_colloquial_minor(self):
        assert parse_contextual_phrase("two dollars seventy-five").value == pytest.approx(2.75)

    def test_colloquial_minor_after_article(self):
        assert parse_contextual_phrase("a dollar fifty").value == pytest.approx(1.50)

    def test_single_digit_word_is_not_a_colloquial_minor(self):
        assert match_contextual_phrase("5 dollars one").value == 5
        with pytest.raises(MinorUnitError):
            parse_contextual_phrase("5 dollars one")

    def test_fractional_quantity(self):
        result = parse_contextual_phrase("half a million euros")
        assert (result.currency, result.value) == ("EUR", 500_000)

    def test_minor_at_scale_raises(self):
        with pytest.raises(MinorUnitError, match=">= 100"):
            parse_contextual_phrase("5 dollars and 100 cents")

    def test_minor_on_zero_decimal_currency_raises(self):
        with pytest.raises(MinorUnitError, match="not supported"):
            parse_contextual_phrase("5 yen and 20 cents")

    def test_wrong_minor_unit_raises(self):
        with pytest.raises(MinorUnitError, match="Invalid minor unit"):
            parse_contextual_phrase("5 dollars and 20 pence")

    def test_minor_unit_error_is_a_parse_error(self):
        with pytest.raises(MoneyParseError):
            parse_contextual_phrase("5 dollars and 100 cents")

    def test_strict_parse_rejects_leading_words(self):
        with pytest.raises(ValueError):
            parse_contextual_phrase("I paid 5 dollars")

    def test_match_inside_text(self):
        result = match_contextual_phrase("I paid 5 dollars yesterday")
        assert result is not None
        assert (result.currency, result.value, result.raw) == ("USD", 5, "5 dollars")

    def test_match_without_currency(self):
        assert match_contextual_phrase("I paid 5 yesterday") is None

    def test_match_still_raises_on_bad_minor(self):
        with pytest.raises(MinorUnitError):
            match_contextual_phrase("it was 5 dollars and 150 cents")


# ═══════════════════════════════════════════════════════════════════════
# NEGATIVE AMOUNTS
# ═══════════════════════════════════════════════════════════════════════


class TestNegative:
    def test_parentheses(self):
        result = detect_negative("($1,234.56)")
        assert result.is_negative
        assert result.text == "$1,234.56"

    def test_parentheses_keep_trailing_text(self):
        assert detect_negative("($50) refund").text == "$50 refund"

    def test_hyphen_prefix(self):
        assert detect_negative("-$100").text == "$100"

    def test_unicode_minus(self):
        assert detect_negative("−5 EUR").is_negative

    def test_minus_word(self):
        result = detect_negative("Minus 5 dollars")
        assert result.is_negative
        assert result.text == "5 dollars"

    def test_embedded_hyphen_is_not_negative(self):
        result = detect_negative("555-1234")
        assert not result.is_negative
        assert result.text == "555-1234"

    def test_leading_whitespace_is_trimmed(self):
        assert detect_negative("   -5").is_negative

    def test_helpers(self):
        assert has_parentheses_notation("($5)")
        assert not has_parentheses_notation("($5) refund")
        assert has_negative_prefix("negative 5")
        assert not has_negative_prefix("nonnegative 5")
        assert remove_negative_indicators("(€20)") == "€20"
