"""
Contextual phrases: quantity + currency word + optional minor unit.

    "a dollar"                     → USD 1
    "one hundred forty five GBP"   → GBP 145
    "quarter million dollars"      → USD 250,000
    "2.25 thousand dollars"        → USD 2,250
    "a dollar and 23 cents"        → USD 1.23
    "5 pounds 20 pence"            → GBP 5.20
    "two dollars seventy-five"     → USD 2.75   (colloquial, nothing may follow)

The minor amount must be strictly below the currency's minor-unit scale:
"5 dollars and 100 cents" is rejected with MinorUnitError, as is any minor
unit on a currency without one ("5 yen and 20 cents").
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .abbreviations import iter_currency_codes
from .exceptions import MinorUnitError
from .models import check_overflow
from .name_index import get_name_index
from .numeric import parse_quantity, parse_trailing_quantity
from .registry import get_registry
from .word_to_number import words_to_number

# Minor-unit word → the only currency it belongs to (None: any 2-digit currency)
MINOR_UNITS: dict[str, str | None] = {
    "cent": None,
    "cents": None,
    "penny": "GBP",
    "pennies": "GBP",
    "pence": "GBP",
}

MAX_QUANTITY_TOKENS = 8
MAX_MINOR_TOKENS = 4

_TOKEN_RE = re.compile(r"\S+")
_TRAILING_PUNCTUATION = ".,;:!?)"


@dataclass(frozen=True)
class ContextualMatch:
    value: float
    currency: str
    raw: str
    has_minor: bool


def currency_occurrences(text: str) -> list[tuple[int, int, str]]:
    """Non-overlapping (start, end, code) for every currency word or code in ``text``.

    Names come from the currency name index, codes from the registry;
    at a shared start the longer match wins.
    """
    index = get_name_index()
    found: list[tuple[int, int, str]] = []
    for match in index.pattern.finditer(text):
        code = index.lookup(match.group(0))
        if code:
            found.append((match.start(), match.end(), code))
    found.extend(iter_currency_codes(text))
    found.sort(key=lambda item: (item[0], -item[1]))

    occurrences: list[tuple[int, int, str]] = []
    last_end = -1
    for start, end, code in found:
        if start >= last_end:
            occurrences.append((start, end, code))
            last_end = end
    return occurrences


# ─── Minor Units ────────────────────────────────────────────────────


def minor_unit_scale(currency: str, unit: str, source: str) -> int:
    """Scale (10 ** decimal digits) that ``unit`` divides ``currency`` into.

    Raises:
        MinorUnitError: Wrong unit for the currency, or the currency has none.
    """
    implied = MINOR_UNITS.get(unit)
    if unit not in MINOR_UNITS or (implied and implied != currency):
        raise MinorUnitError(f"Invalid minor unit {unit!r} for {currency}", source)

    info = get_registry().get_by_code(currency)
    if info is None or info.decimal_digits == 0:
        raise MinorUnitError(f"Minor unit not supported for currency {currency}", source)
    return info.minor_unit_scale


def _colloquial_minor(words: list[str], currency: str) -> float | None:
    """ "fifty" / "75" / "seventy-five" right after the currency word, or None."""
    if not 1 <= len(words) <= 2:
        return None
    info = get_registry().get_by_code(currency)
    if info is None or info.decimal_digits != 2:
        return None

    phrase = " ".join(words)
    if re.fullmatch(r"\d{2}", phrase):
        return int(phrase) / 100
    try:
        minor = words_to_number(phrase)
    except ValueError:
        return None
    # Two-digit values only: "a dollar fifty", not "5 dollars one"
    return minor / 100 if 10 <= minor < 100 else None


def _parse_minor(text: str, pos: int, currency: str, strict: bool) -> tuple[float, int]:
    """Parse what follows the currency word.

    Returns:
        (minor value in major units, end offset consumed); (0.0, pos) if none.
    """
    tokens = [
        (token.group(0).lower().rstrip(_TRAILING_PUNCTUATION), token.end())
        for token in _TOKEN_RE.finditer(text, pos)
    ]
    tokens = [(word, end) for word, end in tokens if word]
    if not tokens:
        return 0.0, pos

    words = [word for word, _ in tokens]
    begin = 1 if words[0] == "and" else 0

    for unit_at in range(begin + 1, min(len(words), begin + MAX_MINOR_TOKENS + 1)):
        if words[unit_at] not in MINOR_UNITS:
            continue
        try:
            minor = parse_quantity(" ".join(words[begin:unit_at]))
        except ValueError:
            break
        scale = minor_unit_scale(currency, words[unit_at], text)
        if minor >= scale:
            raise MinorUnitError(
                f"Invalid minor unit amount: {minor:g} {words[unit_at]} >= {scale}",
                text,
                {"minor": minor, "scale": scale},
            )
        return minor / scale, tokens[unit_at][1]

    if begin == 0:
        colloquial = _colloquial_minor(words, currency)
        if colloquial is not None:
            return colloquial, tokens[-1][1]

    if strict:
        raise MinorUnitError(f"Invalid minor unit in: {text!r}", text)
    return 0.0, pos


# ─── Phrase Parser ──────────────────────────────────────────────────


def _scan(text: str, strict: bool) -> ContextualMatch:
    for start, end, currency in currency_occurrences(text):
        prefix = text[:start]
        try:
            if strict:
                major = parse_quantity(prefix)
                phrase_start = 0
            else:
                major, used = parse_trailing_quantity(prefix, MAX_QUANTITY_TOKENS)
                phrase_start = [t.start() for t in _TOKEN_RE.finditer(prefix)][-used]
        except ValueError:
            if strict:
                raise
            continue

        minor, phrase_end = _parse_minor(text, end, currency, strict)
        return ContextualMatch(
            value=check_overflow(major + minor, text),
            currency=currency,
            raw=text[phrase_start:max(end, phrase_end)].strip(),
            has_minor=phrase_end > end,
        )

    raise ValueError(f"Unrecognized currency in: {text!r}")


def parse_contextual_phrase(text: str) -> ContextualMatch:
    """Parse ``text`` as one complete contextual phrase.

    Raises:
        ValueError: No currency word, or the quantity before it is not one.
        MinorUnitError: The minor-unit part is invalid.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Input must be a non-empty string")
    return _scan(text.strip(), strict=True)


def match_contextual_phrase(text: str) -> ContextualMatch | None:
    """First contextual phrase inside free text, or None.

    Structural errors (MinorUnitError) and overflow still propagate.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        return _scan(text, strict=False)
    except ValueError:
        return None
