"""
ISO-4217 abbreviations written next to an amount: "USD 100", "50 gbp".

Some codes are also ordinary English words. Written in lowercase they
are never taken as currencies ("try 3 times", "all 5 items"), and in
any case they are rejected when a non-monetary word follows them
("ALL 5 items" is a count, "TRY of ..." a sentence).
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from .regional_formats import NUMBER_PATTERN, normalize_regional_number
from .registry import get_registry

AMBIGUOUS_CODE_WORDS: frozenset[str] = frozenset(
    {"ALL", "TRY", "TOP", "CUP", "GEL", "PEN", "RON", "MOP", "LAK", "MAD", "BOB", "BAM", "SOS", "COP"}
)

NON_MONETARY_CONTEXT_WORDS: frozenset[str] = frozenset(
    {
        "items", "things", "times", "ways", "people", "days", "years",
        "months", "hours", "minutes", "seconds", "pages", "steps",
        "options", "attempts", "tries", "more", "less", "of", "the",
        "to", "for", "at", "on", "in",
    }
)

_CODE_TOKEN_RE = re.compile(r"(?<![A-Za-z])[A-Za-z]{3}(?![A-Za-z])")
_NEXT_WORD_RE = re.compile(r"[\s\d.,'’]*([A-Za-z]+)")

_CODE_THEN_NUMBER_RE = re.compile(
    rf"(?<![A-Za-z])(?P<code>[A-Za-z]{{3}})\s*(?P<amount>{NUMBER_PATTERN})(?!\d)"
)
_NUMBER_THEN_CODE_RE = re.compile(
    rf"(?<![\d.,])(?P<amount>{NUMBER_PATTERN})\s*(?P<code>[A-Za-z]{{3}})(?![A-Za-z])"
)


def resolve_code_token(token: str, following: str = "") -> str | None:
    """Registry code for a three-letter ``token``, or None.

    Args:
        token: The candidate as written ("usd", "ALL").
        following: Text after the token, used to spot non-monetary context.
    """
    info = get_registry().get_by_code(token)
    if info is None:
        return None
    if info.code in AMBIGUOUS_CODE_WORDS:
        if token != token.upper():
            return None
        next_word = _NEXT_WORD_RE.match(following)
        if next_word and next_word.group(1).lower() in NON_MONETARY_CONTEXT_WORDS:
            return None
    return info.code


def iter_currency_codes(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield (start, end, code) for every three-letter token that is a currency."""
    for found in _CODE_TOKEN_RE.finditer(text):
        code = resolve_code_token(found.group(0), text[found.end():])
        if code:
            yield found.start(), found.end(), code


def find_currency_code(text: str) -> str | None:
    """First valid ISO code among the three-letter tokens of ``text``."""
    for _, _, code in iter_currency_codes(text):
        return code
    return None


# ─── Code + Number ──────────────────────────────────────────────────


@dataclass(frozen=True)
class AbbreviationMatch:
    amount: float
    currency: str
    raw: str


def parse_abbreviation(text: str) -> AbbreviationMatch:
    """Parse the first "<CODE> <number>" or "<number> <CODE>" pair.

    Raises:
        ValueError: If no valid pair is present.
        ValueOverflowError: If the amount exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Input must be a non-empty string")

    candidates = sorted(
        [*_CODE_THEN_NUMBER_RE.finditer(text), *_NUMBER_THEN_CODE_RE.finditer(text)],
        key=lambda found: found.start(),
    )
    for found in candidates:
        code = resolve_code_token(found.group("code"), text[found.end("code"):])
        if code is None:
            continue
        return AbbreviationMatch(
            amount=normalize_regional_number(found.group("amount")),
            currency=code,
            raw=found.group(0),
        )
    raise ValueError(f"No currency abbreviation found in: {text!r}")


def match_abbreviation(text: str) -> AbbreviationMatch | None:
    try:
        return parse_abbreviation(text)
    except ValueError:
        return None
