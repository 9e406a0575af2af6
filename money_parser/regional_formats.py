"""
Regional number formats: which character groups thousands, which marks decimals.

    "1,234.56"    us       comma thousands, period decimal
    "1.234,56"    eu       period thousands, comma decimal
    "1'234.56"    swiss    apostrophe thousands, period decimal
    "1 234,56"    french   space thousands, comma decimal
    "12,34,567"   indian   lakh/crore grouping

Classification rules (detect_regional_format):
  - apostrophe present                     → swiss
  - space + comma, no period               → french
  - comma AND period                       → rightmost one is the decimal;
                                             comma last → eu, otherwise us
                                             (or indian for 12,34,567.89)
  - comma only   → 1-2 trailing digits     → eu (decimal comma)
                 → otherwise               → us (thousands comma)
  - period only  → several periods         → eu (thousands periods)
                 → single period           → us decimal, even "1.234"
  - no separators                          → us

"1.234" is genuinely ambiguous. It is read as one-point-two-three-four;
no surrounding context is consulted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .models import check_overflow
from .symbols import SYMBOL_ALTERNATION, canonical_symbol, resolve_symbol

# ─── Format Types ───────────────────────────────────────────────────


class FormatType(str, Enum):
    """Separator convention of a number string."""

    US = "us"
    EU = "eu"
    SWISS = "swiss"
    FRENCH = "french"
    INDIAN = "indian"


@dataclass(frozen=True)
class FormatConfig:
    thousands_separator: str
    decimal_separator: str
    format_type: FormatType


_US = FormatConfig(",", ".", FormatType.US)
_EU = FormatConfig(".", ",", FormatType.EU)
_SWISS = FormatConfig("'", ".", FormatType.SWISS)
_FRENCH = FormatConfig(" ", ",", FormatType.FRENCH)
_INDIAN = FormatConfig(",", ".", FormatType.INDIAN)

_APOSTROPHES = "'’"
_SPACES = " \u00a0\u202f"

_INDIAN_RE = re.compile(r"^\d{1,3},\d{2}(?:,\d{2})*,\d{3}(?:\.\d+)?$")
_SPACES_RE = re.compile(f"[{_SPACES}]")

# Digits with optional grouping and decimal part, in any supported convention
NUMBER_PATTERN = (
    rf"\d{{1,3}}(?:[.,{_APOSTROPHES}{_SPACES}]\d{{2,3}})+(?:[.,]\d{{1,2}})?"
    r"|\d+[.,]\d+"
    r"|\d+"
)

_REGIONAL_RE = re.compile(
    rf"(?:(?P<symbol_before>{SYMBOL_ALTERNATION})\s*(?P<amount_after>{NUMBER_PATTERN}))"
    rf"|(?:(?P<amount_before>{NUMBER_PATTERN})\s*(?P<symbol_after>{SYMBOL_ALTERNATION}))",
    re.IGNORECASE,
)


# ─── Detection ──────────────────────────────────────────────────────


def detect_regional_format(number_str: str) -> FormatConfig:
    """Classify the separator convention of a bare number string."""
    has_comma = "," in number_str
    has_period = "." in number_str
    has_apostrophe = any(ch in number_str for ch in _APOSTROPHES)
    has_space = bool(_SPACES_RE.search(number_str))

    if has_apostrophe:
        return _SWISS

    if has_space and has_comma and not has_period:
        return _FRENCH

    if has_comma and has_period:
        if number_str.rfind(",") > number_str.rfind("."):
            return _EU
        return _INDIAN if _INDIAN_RE.match(number_str) else _US

    if has_comma:
        trailing = number_str.rsplit(",", 1)[1]
        if trailing.isdigit() and len(trailing) <= 2:
            return _EU
        return _US

    if has_period and number_str.count(".") > 1:
        return _EU

    return _US


def normalize_regional_number(number_str: str, config: FormatConfig | None = None) -> float:
    """Strip thousands separators, canonicalize the decimal mark, parse.

    Raises:
        ValueError: If what remains is not a number.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.
    """
    config = config or detect_regional_format(number_str)
    normalized = _SPACES_RE.sub("", number_str.strip())

    if config.format_type is FormatType.SWISS:
        for apostrophe in _APOSTROPHES:
            normalized = normalized.replace(apostrophe, "")
    elif config.thousands_separator.strip():
        normalized = normalized.replace(config.thousands_separator, "")

    if config.decimal_separator != ".":
        normalized = normalized.replace(config.decimal_separator, ".")

    if not re.fullmatch(r"\d+(?:\.\d+)?", normalized):
        raise ValueError(f"Failed to parse amount: {number_str!r}")
    return check_overflow(float(normalized), number_str)


def is_valid_regional_format(number_str: str) -> bool:
    """True if ``number_str`` uses separators consistently enough to parse."""
    if not isinstance(number_str, str):
        return False
    trimmed = number_str.strip()
    if not re.match(r"\d", trimmed) or not re.search(r"\d$", trimmed):
        return False
    if re.search(rf"[.,{_APOSTROPHES}{_SPACES}]{{2,}}", trimmed):
        return False
    try:
        normalize_regional_number(trimmed)
    except ValueError:
        return False
    return True


# ─── Symbol + Number ────────────────────────────────────────────────


@dataclass(frozen=True)
class RegionalMatch:
    amount: float
    currency: str
    symbol: str
    raw: str
    format_type: FormatType
    start: int
    end: int


def parse_regional_format(text: str, default_currency: str | None = None) -> RegionalMatch:
    """Parse the first currency symbol written next to a number.

    Args:
        text: e.g. "Total: 1.234,56 €"
        default_currency: Preferred code for ambiguous symbols ("$", "kr").

    Raises:
        ValueError: If no symbol/number pair is present.
        ValueOverflowError: If the amount exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Input must be a non-empty string")

    found = _REGIONAL_RE.search(text)
    if not found:
        raise ValueError(f"No regional format pattern found in: {text!r}")

    raw_symbol = found.group("symbol_before") or found.group("symbol_after")
    amount_str = found.group("amount_after") or found.group("amount_before")
    symbol = canonical_symbol(raw_symbol)
    if symbol is None:
        raise ValueError(f"Unknown currency symbol: {raw_symbol!r}")

    config = detect_regional_format(amount_str)
    return RegionalMatch(
        amount=normalize_regional_number(amount_str, config),
        currency=resolve_symbol(symbol, default_currency),
        symbol=symbol,
        raw=found.group(0),
        format_type=config.format_type,
        start=found.start(),
        end=found.end(),
    )


def match_regional_format(text: str, default_currency: str | None = None) -> RegionalMatch | None:
    try:
        return parse_regional_format(text, default_currency)
    except ValueError:
        return None
