"""
Slang money terms: "ten bucks", "a fiver", "three quid", "two grand".

    "five bucks"                      → USD 5
    "two bucks fifty"                 → USD 2.50   (cents word, unit-1 terms only)
    "three fivers"                    → GBP 15
    "two thirds of a million bucks"   → USD 666,666.67
    "grand total: $100"               → no match  ("grand" needs a quantity)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import check_overflow
from .numeric import parse_trailing_quantity
from .symbols import SYMBOL_ALTERNATION

SLANG_TERMS: dict[str, tuple[str, int]] = {
    "buck": ("USD", 1),
    "bucks": ("USD", 1),
    "quid": ("GBP", 1),
    "quids": ("GBP", 1),
    "fiver": ("GBP", 5),
    "fivers": ("GBP", 5),
    "tenner": ("GBP", 10),
    "tenners": ("GBP", 10),
    "grand": ("USD", 1000),
    "grands": ("USD", 1000),
}

CENTS_WORDS: dict[str, float] = {
    "ten": 0.10,
    "twenty": 0.20,
    "thirty": 0.30,
    "forty": 0.40,
    "fifty": 0.50,
    "sixty": 0.60,
    "seventy": 0.70,
    "eighty": 0.80,
    "ninety": 0.90,
}

# Terms that are also everyday adjectives need an explicit quantity
_NEEDS_QUANTITY: frozenset[str] = frozenset({"grand", "grands"})

# Up to this many words may form the quantity before the slang word
MAX_QUANTITY_TOKENS = 6

SLANG_PATTERN = rf"\b(?:{'|'.join(sorted(SLANG_TERMS, key=len, reverse=True))})\b"
_SLANG_RE = re.compile(SLANG_PATTERN, re.IGNORECASE)
_CENTS_RE = re.compile(rf"\s+({'|'.join(CENTS_WORDS)})\b", re.IGNORECASE)

# A symbol glued to the quantity ("$5 bucks", "5€ bucks") is not part of it
_GLUED_SYMBOL_RE = re.compile(
    rf"(?:{SYMBOL_ALTERNATION})(?=\d)|(?<=\d)(?:{SYMBOL_ALTERNATION})", re.IGNORECASE
)


@dataclass(frozen=True)
class SlangMatch:
    value: float
    currency: str
    term: str


def _quantity_before(prefix: str) -> float | None:
    """Quantity preceding the slang word; None when the word stands alone."""
    prefix = _GLUED_SYMBOL_RE.sub("", prefix)
    words = prefix.split()
    if not words or words[-1].lower() == "the":
        return None
    try:
        value, _ = parse_trailing_quantity(prefix, MAX_QUANTITY_TOKENS)
    except ValueError:
        return None
    return value


def parse_slang_term(text: str) -> SlangMatch:
    """Parse the first slang money term in ``text``.

    Raises:
        ValueError: If no usable slang term is present.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Input must be a non-empty string")

    for found in _SLANG_RE.finditer(text):
        term = found.group(0).lower()
        currency, unit = SLANG_TERMS[term]

        quantity = _quantity_before(text[: found.start()])
        if quantity is None:
            if term in _NEEDS_QUANTITY:
                continue
            quantity = 1.0

        value = quantity * unit
        cents = _CENTS_RE.match(text, found.end())
        if cents and unit == 1:
            value += CENTS_WORDS[cents.group(1).lower()]

        return SlangMatch(value=check_overflow(value, text), currency=currency, term=term)

    raise ValueError(f"No slang term found in: {text!r}")


def match_slang_term(text: str) -> SlangMatch | None:
    try:
        return parse_slang_term(text)
    except ValueError:
        return None
