"""
Pydantic models for parse results, plus the float safety ceiling.

Amounts are plain floats. Anything above 2**53 - 1 can no longer be
represented exactly, so every parser funnels its result through
check_overflow() before it reaches a ParseContext.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ValueOverflowError

# ─── Safe-Integer Ceiling ───────────────────────────────────────────

MAX_SAFE_INTEGER: int = 2**53 - 1


def check_overflow(value: float, source: str | None = None) -> float:
    """Return ``value`` unchanged, or raise if it is not a safe finite amount.

    Raises:
        ValueOverflowError: If the magnitude exceeds MAX_SAFE_INTEGER.
        ValueError: If the value is NaN.
    """
    if math.isnan(value):
        raise ValueError(f"Not a number: {source!r}")
    if abs(value) > MAX_SAFE_INTEGER:
        raise ValueOverflowError(value, MAX_SAFE_INTEGER, source)
    return value


# ─── Parse Context ──────────────────────────────────────────────────


class ParseContext(BaseModel):
    """State threaded through the pipeline for a single parse call.

    Frozen: every stage returns ``ctx.model_copy(update=...)`` rather than
    mutating what it was given.
    """

    model_config = ConfigDict(frozen=True)

    original: str
    currency: Optional[str] = None  # ISO-4217 code, always a registry code
    amount: Optional[float] = None
    currency_was_default: Optional[bool] = None
    is_negative: Optional[bool] = None
    matches: dict = Field(default_factory=dict)
    # Caller's fallback currency; consulted by stages, never serialized
    default_currency: Optional[str] = Field(default=None, exclude=True)

    def with_matches(self, **entries: object) -> ParseContext:
        """Derive a copy with extra metadata merged into ``matches``."""
        return self.model_copy(update={"matches": {**self.matches, **entries}})


class SpanResult(ParseContext):
    """A ParseContext located inside a larger text by parse_all()."""

    start: int  # Inclusive offset into the searched text
    end: int  # Exclusive offset
    match: str  # The raw candidate window, untrimmed
