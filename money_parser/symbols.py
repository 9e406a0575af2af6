"""
Currency symbols → candidate ISO codes.

A symbol maps to a tuple of codes; the first is the canonical default
used when nothing else disambiguates ("$" alone means USD). A caller's
default currency wins when it is one of the candidates:

    resolve_symbol("$")          → "USD"
    resolve_symbol("$", "CAD")   → "CAD"
    resolve_symbol("$", "EUR")   → "USD"   (EUR cannot be written "$")

Symbols containing letters ("R", "kr", "R$") only count when they are
not glued to other letters, and bare letter symbols additionally need a
number right next to them, so "R and D" is not South African rand.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# ─── Symbol Table ───────────────────────────────────────────────────

CURRENCY_SYMBOLS: dict[str, tuple[str, ...]] = {
    "$": ("USD", "CAD", "AUD", "NZD", "MXN", "HKD", "SGD"),
    "US$": ("USD",),
    "C$": ("CAD",),
    "CA$": ("CAD",),
    "A$": ("AUD",),
    "AU$": ("AUD",),
    "NZ$": ("NZD",),
    "HK$": ("HKD",),
    "S$": ("SGD",),
    "MX$": ("MXN",),
    "R$": ("BRL",),
    "€": ("EUR",),
    "£": ("GBP",),
    "¥": ("JPY", "CNY"),
    "₹": ("INR",),
    "₽": ("RUB",),
    "₩": ("KRW",),
    "฿": ("THB",),
    "₺": ("TRY",),
    "₪": ("ILS",),
    "₫": ("VND",),
    "₱": ("PHP",),
    "₴": ("UAH",),
    "₦": ("NGN",),
    "₡": ("CRC",),
    "₲": ("PYG",),
    "₵": ("GHS",),
    "₸": ("KZT",),
    "₼": ("AZN",),
    "₾": ("GEL",),
    "zł": ("PLN",),
    "Kč": ("CZK",),
    "kr": ("SEK", "NOK", "DKK", "ISK"),
    "Rs": ("INR", "PKR", "LKR", "NPR"),
    "Rp": ("IDR",),
    "RM": ("MYR",),
    "R": ("ZAR",),
    "lei": ("RON",),
}

_BY_FOLDED: dict[str, str] = {symbol.casefold(): symbol for symbol in CURRENCY_SYMBOLS}


def _has_letter(symbol: str) -> bool:
    return any(ch.isalpha() for ch in symbol)


def _symbol_regex(symbol: str) -> str:
    escaped = re.escape(symbol)
    if len(symbol) == 1 and symbol.isalpha():
        # "R2" is a label (room, road, model), "R25" and "R2.50" are amounts
        return rf"(?<![^\W\d_]){escaped}(?![^\W\d_])(?!\d(?![.,']?\d))"
    if _has_letter(symbol):
        return rf"(?<![^\W\d_]){escaped}(?![^\W\d_])"
    return escaped


# Longest first so "R$" wins over "R" and "$" at the same position
SYMBOL_ALTERNATION = "|".join(
    _symbol_regex(symbol) for symbol in sorted(CURRENCY_SYMBOLS, key=len, reverse=True)
)

_SYMBOL_RE = re.compile(SYMBOL_ALTERNATION, re.IGNORECASE)
_DIGIT_AFTER_RE = re.compile(r"\s*\d")
_DIGIT_BEFORE_RE = re.compile(r"\d\s*$")


# ─── Lookup ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SymbolMatch:
    symbol: str  # Canonical spelling from CURRENCY_SYMBOLS
    start: int
    end: int


def canonical_symbol(text: str) -> str | None:
    """The table spelling of ``text`` ("KR" → "kr"), or None if unknown."""
    if text in CURRENCY_SYMBOLS:
        return text
    return _BY_FOLDED.get(text.casefold())


def symbol_candidates(symbol: str) -> tuple[str, ...]:
    canonical = canonical_symbol(symbol)
    return CURRENCY_SYMBOLS[canonical] if canonical else ()


def resolve_symbol(symbol: str, default_currency: str | None = None) -> str:
    """Pick one ISO code for ``symbol``.

    Raises:
        ValueError: If the symbol is not in the table.
    """
    candidates = symbol_candidates(symbol)
    if not candidates:
        raise ValueError(f"Unknown currency symbol: {symbol!r}")
    if len(candidates) > 1 and default_currency:
        preferred = default_currency.upper()
        if preferred in candidates:
            return preferred
    return candidates[0]


def find_symbol(text: str) -> SymbolMatch | None:
    """Leftmost currency symbol in ``text``.

    Bare letter symbols ("R", "kr", "RM") are skipped unless a digit sits
    directly before or after them (whitespace allowed).
    """
    for found in _SYMBOL_RE.finditer(text):
        raw = found.group(0)
        symbol = canonical_symbol(raw)
        if symbol is None:
            continue
        if symbol.isalpha():
            adjacent = _DIGIT_AFTER_RE.match(text, found.end()) or _DIGIT_BEFORE_RE.search(
                text[: found.start()]
            )
            if not adjacent:
                continue
        return SymbolMatch(symbol=symbol, start=found.start(), end=found.end())
    return None
