"""
Multi-occurrence extraction: every monetary expression in a longer text.

    parse_all("I have $100 and he has €50")
    → [SpanResult(currency="USD", amount=100, start=7, end=11, match="$100"),
       SpanResult(currency="EUR", amount=50, start=23, end=26, match="€50")]

Approach:
  1. Coarse candidate patterns (one family per expression type) propose
     windows. They are allowed to overlap each other freely.
  2. Each trimmed window is re-parsed by the full pipeline. Only windows
     that yield both a currency and an amount survive.
  3. Survivors are sorted by (start, longest first) and swept left to
     right; a candidate overlapping the last kept one is dropped.

An overflow in any candidate aborts the whole call.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from .contextual import MINOR_UNITS
from .exceptions import MoneyParseError
from .minor_units import MINOR_UNIT_PATTERN
from .models import SpanResult
from .name_index import get_name_index
from .numeric import COMBO_PATTERN
from .pipeline import MoneyPipeline
from .regional_formats import NUMBER_PATTERN
from .slang import CENTS_WORDS, SLANG_PATTERN
from .symbols import SYMBOL_ALTERNATION
from .word_to_number import FRACTIONAL_NUMBER_PATTERN, MAGNITUDE_WORDS, WORDED_NUMBER_PATTERN

logger = logging.getLogger(__name__)

_pipeline = MoneyPipeline.default()


# ─── Candidate Patterns ─────────────────────────────────────────────


@lru_cache(maxsize=1)
def candidate_patterns() -> tuple[re.Pattern[str], ...]:
    """Compile the candidate families once; currency names come from the name index."""
    names = get_name_index().pattern.pattern
    number = rf"(?<![\d.,])(?:{NUMBER_PATTERN})"
    code = r"\b[A-Za-z]{3}\b"
    quantity = rf"(?:{number}|{FRACTIONAL_NUMBER_PATTERN}|{WORDED_NUMBER_PATTERN})"
    magnitude = rf"(?:\s+(?:{'|'.join(MAGNITUDE_WORDS)})\b)?"
    minor_units = "|".join(sorted(MINOR_UNITS, key=len, reverse=True))
    minor_suffix = (
        rf"(?:\s+(?:and\s+)?(?:\d+|{WORDED_NUMBER_PATTERN})\s+(?:{minor_units})\b"
        rf"|\s+(?:\d{{2}}|{WORDED_NUMBER_PATTERN})(?=\s*(?:[.,;:!?]|$)))?"
    )
    slang_quantity = rf"(?:(?:\d+(?:\.\d+)?|{FRACTIONAL_NUMBER_PATTERN}|{WORDED_NUMBER_PATTERN}|\ban?)\s+)?"
    cents = "|".join(CENTS_WORDS)

    families = [
        # "$100", "R$ 1.234,56", "$5m"
        rf"(?:{SYMBOL_ALTERNATION})\s*{number}(?:(?:bn|k|m|b)\b)?",
        # "100 €", "1 234,56 €"
        rf"{number}\s*(?:{SYMBOL_ALTERNATION})",
        # "USD 100", "100 EUR"
        rf"{code}\s*{number}",
        rf"{number}\s*{code}",
        # "10k", "1.5bn USD"
        rf"(?<![\w.]){COMBO_PATTERN}(?:\s*{code})?",
        # "20 bucks", "half a million quid", "a buck fifty"
        rf"{slang_quantity}{SLANG_PATTERN}(?:\s+(?:{cents})\b)?",
        # "100 dollars", "two thirds of a million euros", "5 pounds 20 pence"
        rf"{quantity}{magnitude}\s+(?:{names}){minor_suffix}",
        rf"{quantity}{magnitude}\s+{code}",
        # "a dollar", "an euro and 5 cents"
        rf"\ban?\s+(?:{names}){minor_suffix}",
        # "75 cents"
        MINOR_UNIT_PATTERN,
    ]
    return tuple(re.compile(family, re.IGNORECASE) for family in families)


# ─── Extraction ─────────────────────────────────────────────────────


def _resolve_overlaps(candidates: list[SpanResult]) -> list[SpanResult]:
    candidates.sort(key=lambda span: (span.start, -span.end))
    kept: list[SpanResult] = []
    last_end = -1
    for span in candidates:
        if span.start >= last_end:
            kept.append(span)
            last_end = span.end
    return kept


def parse_all(text: str) -> list[SpanResult]:
    """Find every non-overlapping monetary expression in ``text``.

    Returns:
        Spans sorted ascending by start; empty when nothing is found.

    Raises:
        MoneyParseError: If ``text`` is not a string.
        ValueOverflowError: If any candidate's amount exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str):
        raise MoneyParseError(f"Input must be a string, got {type(text).__name__}", text)

    seen: set[tuple[int, int]] = set()
    candidates: list[SpanResult] = []

    for pattern in candidate_patterns():
        for found in pattern.finditer(text):
            span = found.span()
            if span in seen:
                continue
            window = found.group(0).strip()
            if not window:
                continue

            try:
                ctx = _pipeline.run(window)
            except MoneyParseError as e:
                logger.debug("Discarding candidate %r: %s", window, e)
                continue

            if ctx.currency is None or ctx.amount is None:
                continue
            seen.add(span)
            candidates.append(
                SpanResult(**ctx.model_dump(), start=span[0], end=span[1], match=found.group(0))
            )

    results = _resolve_overlaps(candidates)
    logger.debug("parse_all found %d expression(s) in %d candidates", len(results), len(candidates))
    return results
