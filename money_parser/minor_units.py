"""
Minor units standing alone: "75 cents", "fifty cents", "50 pence".

    "75 cents"   → USD 0.75
    "50 pence"   → GBP 0.50
    "75 cents" with currency="EUR" → EUR 0.75

A phrase that also names the major unit ("a dollar and 23 cents") is
not ours: it belongs to the contextual phrase parser. Neither is a minor
unit that trails a digit amount ("$5 and 20 cents"); the major amount
wins there.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .contextual import MINOR_UNITS, match_contextual_phrase
from .exceptions import MinorUnitError
from .models import check_overflow
from .numeric import parse_quantity
from .registry import get_registry
from .word_to_number import WORDED_NUMBER_PATTERN

# Currency a minor-unit word implies when nothing else says otherwise
IMPLIED_CURRENCIES: dict[str, str] = {
    "cent": "USD",
    "cents": "USD",
    "penny": "GBP",
    "pennies": "GBP",
    "pence": "GBP",
}

MINOR_UNIT_PATTERN = (
    rf"(?P<amount>\d+(?:\.\d+)?|{WORDED_NUMBER_PATTERN})\s+"
    rf"(?P<unit>{'|'.join(sorted(MINOR_UNITS, key=len, reverse=True))})\b"
)
_MINOR_UNIT_RE = re.compile(MINOR_UNIT_PATTERN, re.IGNORECASE)
_DIGIT_RE = re.compile(r"\d")


@dataclass(frozen=True)
class MinorUnitMatch:
    value: float
    currency: str
    raw: str


def parse_minor_unit_only(text: str, currency: str | None = None) -> MinorUnitMatch:
    """Parse "<amount> <cents|pence|pennies>" as a fraction of the major unit.

    Args:
        text: e.g. "that costs 75 cents"
        currency: Overrides the currency the unit word implies.

    Raises:
        ValueError: No standalone minor-unit amount in ``text``.
        MinorUnitError: Amount >= scale, or the currency has no minor unit.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Input must be a non-empty string")

    found = _MINOR_UNIT_RE.search(text)
    if not found:
        raise ValueError(f"Unrecognized minor unit in: {text!r}")

    if _DIGIT_RE.search(text, 0, found.start()):
        raise ValueError(f"Minor unit follows a major amount in: {text!r}")

    compound = match_contextual_phrase(text)
    if compound is not None and compound.has_minor:
        raise ValueError(f"Compound major/minor phrase in: {text!r}")

    unit = found.group("unit").lower()
    code = (currency or IMPLIED_CURRENCIES[unit]).upper()

    info = get_registry().get_by_code(code)
    if info is None or info.decimal_digits == 0:
        raise MinorUnitError(
            f"Currency {code!r} does not support minor units", text, {"currency": code}
        )

    amount = parse_quantity(found.group("amount"))
    scale = info.minor_unit_scale
    if amount >= scale:
        raise MinorUnitError(
            f"Invalid minor unit amount: {amount:g} {unit} >= {scale}",
            text,
            {"minor": amount, "scale": scale},
        )

    return MinorUnitMatch(
        value=check_overflow(amount / scale, text),
        currency=code,
        raw=found.group(0),
    )


def match_minor_unit_only(text: str, currency: str | None = None) -> MinorUnitMatch | None:
    try:
        return parse_minor_unit_only(text, currency)
    except ValueError:
        return None
