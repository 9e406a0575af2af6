"""
Elementary numeric parsers.

  plain / separator-grouped digits   "1234", "1,234.56", "1.234,56"
  numeric-word combos                "10k", "$5m", "2bn", "1.5B USD"
  quantities                         anything that can stand before a
                                     currency word: "a", "2.25 thousand",
                                     "half a million", "forty-five"
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .abbreviations import resolve_code_token
from .models import check_overflow
from .regional_formats import NUMBER_PATTERN, normalize_regional_number
from .symbols import SYMBOL_ALTERNATION, canonical_symbol, resolve_symbol
from .word_to_number import MAGNITUDE_WORDS, parse_fractional, words_to_number

ARTICLES: frozenset[str] = frozenset({"a", "an", "the"})

_COMBO_MULTIPLIERS: dict[str, int] = {
    "k": 1_000,
    "m": 1_000_000,
    "b": 1_000_000_000,
    "bn": 1_000_000_000,
}

_MAGNITUDES: dict[str, int] = {
    "hundred": 100,
    "thousand": 1_000,
    "million": 1_000_000,
    "billion": 1_000_000_000,
    "trillion": 1_000_000_000_000,
}

_NUMBER_RE = re.compile(rf"(?<![\d.,])(?:{NUMBER_PATTERN})(?!\d)")
_FULL_NUMBER_RE = re.compile(rf"(?:{NUMBER_PATTERN})")

COMBO_PATTERN = r"\d+(?:\.\d+)?(?:bn|k|m|b)\b"
_COMBO_RE = re.compile(
    rf"(?:(?P<symbol>{SYMBOL_ALTERNATION})\s*)?"
    r"(?<![\w.])(?P<number>\d+(?:\.\d+)?)(?P<suffix>bn|k|m|b)\b"
    r"(?:\s*(?P<code>[A-Za-z]{3})\b)?",
    re.IGNORECASE,
)

_HYBRID_RE = re.compile(
    rf"(?P<number>\d+(?:\.\d+)?)\s+(?P<magnitude>{'|'.join(MAGNITUDE_WORDS)})",
    re.IGNORECASE,
)


# ─── Plain Numbers ──────────────────────────────────────────────────


def parse_plain_number(text: str) -> float:
    """Parse a string that is exactly one (possibly grouped) number.

    Raises:
        ValueError: If ``text`` is anything else.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str) or not _FULL_NUMBER_RE.fullmatch(text.strip()):
        raise ValueError(f"Not a plain number: {text!r}")
    return normalize_regional_number(text.strip())


def match_plain_number(text: str) -> float | None:
    """Value of the first number in ``text``, or None."""
    if not isinstance(text, str):
        return None
    found = _NUMBER_RE.search(text)
    if not found:
        return None
    try:
        return normalize_regional_number(found.group(0))
    except ValueError:
        return None


# ─── Numeric-Word Combos ────────────────────────────────────────────


@dataclass(frozen=True)
class ComboMatch:
    value: float
    currency: str | None  # From an adjacent symbol or code, if any
    raw: str


def parse_numeric_word_combo(text: str, default_currency: str | None = None) -> ComboMatch:
    """Parse the first "<digits><k|m|b|bn>" shorthand in ``text``.

    Raises:
        ValueError: If there is none.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str):
        raise ValueError("Input must be a string")
    found = _COMBO_RE.search(text)
    if not found:
        raise ValueError(f"No numeric-word combo in: {text!r}")

    multiplier = _COMBO_MULTIPLIERS[found.group("suffix").lower()]
    value = check_overflow(float(found.group("number")) * multiplier, found.group(0))

    currency = None
    if found.group("symbol") and canonical_symbol(found.group("symbol")):
        currency = resolve_symbol(found.group("symbol"), default_currency)
    elif found.group("code"):
        currency = resolve_code_token(found.group("code"), text[found.end("code"):])

    return ComboMatch(value=value, currency=currency, raw=found.group(0))


def match_numeric_word_combo(text: str, default_currency: str | None = None) -> ComboMatch | None:
    try:
        return parse_numeric_word_combo(text, default_currency)
    except ValueError:
        return None


# ─── Quantities ─────────────────────────────────────────────────────


def parse_quantity(text: str) -> float:
    """Parse the quantity written before a currency or slang word.

    Leading articles are dropped; an article with nothing after it means 1
    ("a dollar"). Then, in order: digits, digits + magnitude word
    ("2.25 thousand"), fraction phrase, worded number.

    Raises:
        ValueError: If ``text`` is not a quantity.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.
    """
    tokens = text.lower().split()
    had_article = False
    while tokens and tokens[0] in ARTICLES:
        tokens.pop(0)
        had_article = True

    if not tokens:
        if had_article:
            return 1.0
        raise ValueError("Missing quantity")

    phrase = " ".join(tokens)
    if _FULL_NUMBER_RE.fullmatch(phrase):
        return normalize_regional_number(phrase)

    hybrid = _HYBRID_RE.fullmatch(phrase)
    if hybrid:
        scale = _MAGNITUDES[hybrid.group("magnitude").lower()]
        return check_overflow(float(hybrid.group("number")) * scale, phrase)

    try:
        return parse_fractional(phrase)
    except ValueError:
        pass
    return float(words_to_number(phrase))


def parse_trailing_quantity(prefix: str, max_tokens: int) -> tuple[float, int]:
    """Longest quantity made of the last tokens of ``prefix``.

    Returns:
        (value, number_of_tokens_used)

    Raises:
        ValueError: If not even the last token is a quantity.
    """
    tokens = prefix.split()[-max_tokens:]
    for size in range(len(tokens), 0, -1):
        try:
            return parse_quantity(" ".join(tokens[-size:])), size
        except ValueError:
            continue
    raise ValueError(f"No quantity before: {prefix!r}")
