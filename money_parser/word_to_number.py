"""
Convert written-out English numbers to their numeric value.

Two converters live here:

  words_to_number()   short-scale cardinal numbers
      "One Million Two Hundred Fifty Thousand" → 1,250,000
      "three hundred and forty-five"           → 345
      "a hundred"                              → 100

  parse_fractional()  fractions, optionally scaled by a magnitude word
      "half"                     → 0.5
      "two thirds"               → 0.666…
      "quarter million"          → 250,000
      "two thirds of a billion"  → 666,666,666.67

Fractional results are floats and inherently approximate ("a third" has
no exact binary representation); compare them with a tolerance.
"""

from __future__ import annotations

import re

from .models import check_overflow

# ─── Word Lookup Tables ──────────────────────────────────────────────

_ONES: dict[str, int] = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
}

_TENS: dict[str, int] = {
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}

_SCALES: dict[str, int] = {
    "hundred": 100,
    "thousand": 1_000,
    "million": 1_000_000,
    "billion": 1_000_000_000,
    "trillion": 1_000_000_000_000,
}

FRACTIONS: dict[str, float] = {
    "half": 1 / 2,
    "halves": 1 / 2,
    "quarter": 1 / 4,
    "quarters": 1 / 4,
    "third": 1 / 3,
    "thirds": 1 / 3,
}

FRACTION_MULTIPLIERS: dict[str, int] = {
    word: value for word, value in _ONES.items() if 1 <= value <= 9
}

# Connectives that carry no numeric value ("one hundred and five", "a million")
_IGNORE: set[str] = {"and", "a"}

MAGNITUDE_WORDS: tuple[str, ...] = tuple(_SCALES)
NUMBER_WORDS: tuple[str, ...] = (*_ONES, *_TENS, *_SCALES)


# ─── Search Patterns ────────────────────────────────────────────────

_NUMBER_WORD_ALT = "|".join(sorted(NUMBER_WORDS, key=len, reverse=True))
_FRACTION_ALT = "|".join(sorted(FRACTIONS, key=len, reverse=True))
_MULTIPLIER_ALT = "|".join(FRACTION_MULTIPLIERS)
_MAGNITUDE_ALT = "|".join(MAGNITUDE_WORDS)

WORDED_NUMBER_PATTERN = (
    rf"(?:\ba\s+)?\b(?:{_NUMBER_WORD_ALT})"
    rf"(?:(?:\s+|-)(?:and\s+)?(?:{_NUMBER_WORD_ALT})){{0,20}}\b"
)

FRACTIONAL_NUMBER_PATTERN = (
    rf"\b(?:an?\s+)?(?:(?:{_MULTIPLIER_ALT})[\s-]+)?(?:{_FRACTION_ALT})"
    rf"(?:\s+(?:of\s+)?(?:an?\s+)?(?:{_MAGNITUDE_ALT}))?\b"
)

_WORDED_RE = re.compile(WORDED_NUMBER_PATTERN, re.IGNORECASE)
_FRACTIONAL_RE = re.compile(FRACTIONAL_NUMBER_PATTERN, re.IGNORECASE)


# ─── Word Classifier ─────────────────────────────────────────────────


def _classify_and_apply(
    word: str, current: int, result: int, source: str
) -> tuple[int, int]:
    """Classify a single number word and update the running accumulators.

    Returns:
        (new_current, new_result) after processing the word.

    Raises:
        ValueError: If the word is not a recognised number token.
    """
    if word in _ONES:
        return current + _ONES[word], result
    if word in _TENS:
        return current + _TENS[word], result
    if word == "hundred":
        effective = current if current else 1
        return effective * 100, result
    if word in _SCALES:
        effective = current if current else 1
        return 0, result + effective * _SCALES[word]
    raise ValueError(f"Unrecognized number word: {word!r} in {source!r}")


def _tokenize(text: str) -> list[str]:
    return text.strip().lower().replace("-", " ").split()


# ─── Cardinal Converter ─────────────────────────────────────────────


def words_to_number(text: str) -> int:
    """Convert English number words to an integer.

    Args:
        text: e.g. "two million three hundred thousand"

    Returns:
        2300000

    Raises:
        ValueError: If the text is empty or contains unrecognized words.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.

    Algorithm:
        We maintain two accumulators:
        - `result`: completed scale groups (e.g., after processing "million")
        - `current`: the number being built in the current scale group

        For each word:
        - ones/teens/tens → add to `current`
        - "hundred"       → multiply `current` (or 1) by 100
        - scale word      → flush `current * scale` into `result`, reset `current`

        At the end, `result + current` is the final value.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Empty text cannot be converted to a number")

    words = [w for w in _tokenize(text) if w not in _IGNORE]
    if not words:
        raise ValueError(f"No number words found in: {text!r}")

    result = 0  # Accumulator for completed scale groups
    current = 0  # Number being built in current group

    for word in words:
        current, result = _classify_and_apply(word, current, result, text)

    result += current
    check_overflow(result, text)
    return result


# ─── Fractional Converter ───────────────────────────────────────────


def parse_fractional(text: str) -> float:
    """Convert a fraction phrase to a float.

    Grammar, tried in order:
        1. fraction                        "half", "quarter"
        2. multiplier fraction             "two thirds", "nine thirds"
        3. [multiplier] fraction [of] mag  "quarter million", "two thirds of a billion"

    Articles ("a", "an") are ignored anywhere in the phrase.

    Raises:
        ValueError: If the phrase does not fit the grammar.
        ValueOverflowError: If the value exceeds MAX_SAFE_INTEGER.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("Empty text cannot be converted to a fraction")

    tokens = [t for t in _tokenize(text) if t not in ("a", "an")]

    if len(tokens) == 1 and tokens[0] in FRACTIONS:
        return FRACTIONS[tokens[0]]

    if len(tokens) == 2 and tokens[0] in FRACTION_MULTIPLIERS and tokens[1] in FRACTIONS:
        return FRACTION_MULTIPLIERS[tokens[0]] * FRACTIONS[tokens[1]]

    position = 0
    multiplier = 1
    if tokens and tokens[0] in FRACTION_MULTIPLIERS:
        multiplier = FRACTION_MULTIPLIERS[tokens[0]]
        position = 1

    if position >= len(tokens) or tokens[position] not in FRACTIONS:
        raise ValueError(f"Not a fractional amount: {text!r}")
    fraction = FRACTIONS[tokens[position]]
    position += 1

    if position < len(tokens) and tokens[position] == "of":
        position += 1

    if position != len(tokens) - 1 or tokens[position] not in _SCALES:
        raise ValueError(f"Not a fractional amount: {text!r}")

    return check_overflow(multiplier * fraction * _SCALES[tokens[position]], text)


# ─── Matchers (search inside free text) ─────────────────────────────


def match_fractional_number(text: str) -> float | None:
    """Value of the first fractional phrase in ``text``, or None."""
    if not isinstance(text, str):
        return None
    found = _FRACTIONAL_RE.search(text)
    if not found:
        return None
    try:
        return parse_fractional(found.group(0))
    except ValueError:
        return None


def match_worded_number(text: str) -> int | None:
    """Value of the first run of number words in ``text``, or None."""
    if not isinstance(text, str):
        return None
    found = _WORDED_RE.search(text)
    if not found:
        return None
    try:
        return words_to_number(found.group(0))
    except ValueError:
        return None
