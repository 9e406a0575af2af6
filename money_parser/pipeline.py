"""
Parsing pipeline: turns one monetary expression into a ParseContext.

Flow:
  ┌────────────┐
  │ Raw text   │
  └─────┬──────┘
        │   negative pre-pass ("($5)", "-$5", "minus 5")
  ┌─────▼──────┐
  │ Currency   │   symbol → ISO code → name index
  │ detection  │
  └─────┬──────┘
  ┌─────▼──────┐
  │ Amount     │   AMOUNT_STRATEGIES, first match wins:
  │ detection  │   combo → slang → contextual → minor unit
  └─────┬──────┘   → plain digits → fraction → worded number
  ┌─────▼──────┐
  │ Annotation │   reserved extension stage (minor-unit total)
  └─────┬──────┘
        │   default currency, sign
  ┌─────▼──────┐
  │ Context    │
  └────────────┘

Rules the stages follow:
  - Every stage is ``(text, ctx) -> ctx`` and never mutates ``ctx``.
  - Currency detection only ever sets the currency.
  - Amount strategies that carry their own currency (combo with an
    adjacent symbol, slang, contextual, minor unit) replace whatever
    currency detection guessed. The others only fill in the amount.
  - A strategy that raises ValueError simply did not match; the next one
    is tried. MoneyParseError and ValueOverflowError propagate.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional

from .abbreviations import find_currency_code, match_abbreviation
from .contextual import match_contextual_phrase
from .exceptions import InvalidCurrencyError, MoneyParseError
from .minor_units import match_minor_unit_only
from .models import ParseContext
from .name_index import get_name_index
from .numeric import match_numeric_word_combo, match_plain_number
from .negative import detect_negative
from .regional_formats import match_regional_format
from .registry import get_registry
from .slang import match_slang_term
from .symbols import find_symbol, resolve_symbol
from .word_to_number import match_fractional_number, match_worded_number

logger = logging.getLogger(__name__)

Stage = Callable[[str, ParseContext], ParseContext]

_NAME_TOKEN_RE = re.compile(r"\b[A-Za-z]{3,}\b")


# ─── Stage 1: Currency Detection ────────────────────────────────────


def detect_currency(text: str, ctx: ParseContext) -> ParseContext:
    """Symbols first, then three-letter ISO codes, then currency names."""
    symbol = find_symbol(text)
    if symbol is not None:
        currency = resolve_symbol(symbol.symbol, ctx.default_currency)
        return ctx.model_copy(update={"currency": currency}).with_matches(
            currency_source="symbol", symbol=symbol.symbol
        )

    code = find_currency_code(text)
    if code is not None:
        return ctx.model_copy(update={"currency": code}).with_matches(currency_source="code")

    index = get_name_index()
    for token in _NAME_TOKEN_RE.findall(text):
        code = index.lookup(token)
        if code is not None:
            return ctx.model_copy(update={"currency": code}).with_matches(currency_source="name")

    return ctx


# ─── Stage 2: Amount Detection ──────────────────────────────────────


@dataclass(frozen=True)
class AmountStrategy:
    """One sub-parser of amount detection.

    ``attempt`` returns a derived context when it matches, None otherwise.
    """

    name: str
    attempt: Callable[[str, ParseContext], Optional[ParseContext]]


def _attempt_combo(text: str, ctx: ParseContext) -> ParseContext | None:
    combo = match_numeric_word_combo(text, ctx.default_currency)
    if combo is None:
        return None
    return ctx.model_copy(update={"amount": combo.value, "currency": combo.currency or ctx.currency})


def _attempt_slang(text: str, ctx: ParseContext) -> ParseContext | None:
    slang = match_slang_term(text)
    if slang is None:
        return None
    return ctx.model_copy(update={"amount": slang.value, "currency": slang.currency})


def _attempt_contextual(text: str, ctx: ParseContext) -> ParseContext | None:
    phrase = match_contextual_phrase(text)
    if phrase is None:
        return None
    return ctx.model_copy(update={"amount": phrase.value, "currency": phrase.currency})


def _attempt_minor_unit(text: str, ctx: ParseContext) -> ParseContext | None:
    minor = match_minor_unit_only(text, ctx.currency or ctx.default_currency)
    if minor is None:
        return None
    return ctx.model_copy(update={"amount": minor.value, "currency": minor.currency})


def _attempt_plain_number(text: str, ctx: ParseContext) -> ParseContext | None:
    # A number written next to a symbol or code beats the first bare number
    regional = match_regional_format(text, ctx.default_currency)
    if regional is not None:
        return ctx.model_copy(
            update={"amount": regional.amount, "currency": regional.currency}
        ).with_matches(symbol=regional.symbol, format=regional.format_type.value)

    abbreviation = match_abbreviation(text)
    if abbreviation is not None:
        return ctx.model_copy(
            update={"amount": abbreviation.amount, "currency": ctx.currency or abbreviation.currency}
        )

    value = match_plain_number(text)
    if value is None:
        return None
    return ctx.model_copy(update={"amount": value})


def _attempt_fractional(text: str, ctx: ParseContext) -> ParseContext | None:
    value = match_fractional_number(text)
    if value is None:
        return None
    return ctx.model_copy(update={"amount": value})


def _attempt_worded(text: str, ctx: ParseContext) -> ParseContext | None:
    value = match_worded_number(text)
    if value is None:
        return None
    return ctx.model_copy(update={"amount": float(value)})


AMOUNT_STRATEGIES: tuple[AmountStrategy, ...] = (
    AmountStrategy("numeric_word_combo", _attempt_combo),
    AmountStrategy("slang_term", _attempt_slang),
    AmountStrategy("contextual_phrase", _attempt_contextual),
    AmountStrategy("minor_unit", _attempt_minor_unit),
    AmountStrategy("plain_number", _attempt_plain_number),
    AmountStrategy("fractional_number", _attempt_fractional),
    AmountStrategy("worded_number", _attempt_worded),
)


class AmountDetection:
    """Stage 2: try each strategy in order; the first match wins."""

    def __init__(self, strategies: Sequence[AmountStrategy] = AMOUNT_STRATEGIES):
        self.strategies = tuple(strategies)

    def __call__(self, text: str, ctx: ParseContext) -> ParseContext:
        if ctx.amount is not None:
            return ctx

        for strategy in self.strategies:
            try:
                result = strategy.attempt(text, ctx)
            except ValueError as e:
                logger.debug("%s did not match %r: %s", strategy.name, text, e)
                continue
            if result is not None:
                logger.debug("%s matched %r", strategy.name, text)
                return result.with_matches(parser=strategy.name)
        return ctx


# ─── Stage 3: Annotation ────────────────────────────────────────────


def annotate(text: str, ctx: ParseContext) -> ParseContext:
    """Record the amount as an integer count of minor units, when both fields are known."""
    if ctx.currency is None or ctx.amount is None:
        return ctx
    info = get_registry().get_by_code(ctx.currency)
    if info is None:
        return ctx
    return ctx.with_matches(minor_units=round(ctx.amount * info.minor_unit_scale))


# ─── Pipeline ───────────────────────────────────────────────────────


class MoneyPipeline:
    """Runs an ordered list of stages over one piece of text.

    Usage:
        pipeline = MoneyPipeline.default()
        ctx = pipeline.run("a dollar and 23 cents")
        ctx.currency, ctx.amount        # ("USD", 1.23)

        # Extension stages see the finished context
        pipeline = MoneyPipeline.default().add_stage(my_stage)
    """

    def __init__(self, stages: Sequence[Stage] = ()):
        self.stages: list[Stage] = list(stages)

    @classmethod
    def default(cls) -> MoneyPipeline:
        return cls([detect_currency, AmountDetection(), annotate])

    def add_stage(self, stage: Stage) -> MoneyPipeline:
        self.stages.append(stage)
        return self

    def run(self, text: str, default_currency: str | None = None) -> ParseContext:
        """Run every stage in order.

        Args:
            text: The monetary expression (already stripped of any sign).
            default_currency: Validated ISO code used to break symbol ties.

        Returns:
            The final ParseContext.
        """
        ctx = ParseContext(original=text, default_currency=default_currency)
        for stage in self.stages:
            ctx = stage(text, ctx)
        return ctx


_default_pipeline = MoneyPipeline.default()


# ─── Public Entry Point ─────────────────────────────────────────────


def _validate_default_currency(default_currency: object, text: object) -> str:
    if not isinstance(default_currency, str) or get_registry().get_by_code(default_currency) is None:
        raise InvalidCurrencyError(
            f'Invalid default_currency: "{default_currency}" is not a valid ISO-4217 currency code',
            text,
            {"default_currency": default_currency},
        )
    return default_currency.strip().upper()


def parse_money(text: str, default_currency: str | None = None) -> ParseContext:
    """Extract one amount and currency from ``text``.

    Args:
        text: Free-form text, e.g. "($1,234.56)" or "quarter million dollars".
        default_currency: ISO code applied only when no currency is detected
            (``currency_was_default`` is then True). Also picks between the
            candidates of an ambiguous symbol ("$" → CAD).

    Returns:
        ParseContext; ``currency``/``amount`` are None when nothing was found.

    Raises:
        InvalidCurrencyError: ``default_currency`` is not a registry code.
        MoneyParseError: ``text`` is not a string, or a minor unit is invalid.
        ValueOverflowError: The amount exceeds MAX_SAFE_INTEGER.
    """
    if default_currency is not None:
        default_currency = _validate_default_currency(default_currency, text)
    if not isinstance(text, str):
        raise MoneyParseError(f"Input must be a string, got {type(text).__name__}", text)

    negative = detect_negative(text)
    ctx = _default_pipeline.run(negative.text, default_currency)

    update: dict = {"original": text}
    if negative.is_negative and ctx.amount is not None:
        update["amount"] = -ctx.amount
        update["is_negative"] = True
    ctx = ctx.model_copy(update=update)

    if ctx.currency is None and default_currency is not None:
        ctx = ctx.model_copy(
            update={"currency": default_currency, "currency_was_default": True}
        ).with_matches(currency_source="default")

    return ctx
