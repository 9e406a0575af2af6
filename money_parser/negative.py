"""
Negative amounts: accounting parentheses and leading minus signs.

    "($1,234.56)"      → negative, "$1,234.56"
    "($50) refund"     → negative, "$50 refund"
    "-$100"            → negative, "$100"
    "minus 5 dollars"  → negative, "5 dollars"
    "555-1234"         → not negative (the hyphen is not at the start)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_PARENTHESES_RE = re.compile(r"^\(([^)]+)\)(.*)$", re.DOTALL)
_FULL_PARENTHESES_RE = re.compile(r"^\([^)]+\)$")
# Hyphen-minus, minus sign, en dash, em dash
_PREFIX_RE = re.compile(r"^(?:[-−–—]|minus\b|negative\b)\s*", re.IGNORECASE)


@dataclass(frozen=True)
class NegativeDetection:
    is_negative: bool
    text: str  # Input with the negative marker removed, trimmed


def detect_negative(text: str) -> NegativeDetection:
    """Recognize a negative marker at the very start of the trimmed text."""
    trimmed = text.strip()

    parenthesized = _PARENTHESES_RE.match(trimmed)
    if parenthesized:
        inner, trailing = parenthesized.groups()
        return NegativeDetection(True, f"{inner.strip()}{trailing}".strip())

    prefixed = _PREFIX_RE.match(trimmed)
    if prefixed:
        return NegativeDetection(True, trimmed[prefixed.end():].strip())

    return NegativeDetection(False, trimmed)


def has_parentheses_notation(text: str) -> bool:
    return bool(_FULL_PARENTHESES_RE.match(text.strip()))


def has_negative_prefix(text: str) -> bool:
    return bool(_PREFIX_RE.match(text.strip()))


def remove_negative_indicators(text: str) -> str:
    return detect_negative(text).text
