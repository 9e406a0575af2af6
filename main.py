#!/usr/bin/env python3
"""
Money Parser — Entry Point
==========================

Runs a set of example expressions through the parser and prints the results.

Usage:
    python main.py                                  # Built-in examples
    python main.py "I owe you 5 bucks" "(€20)"      # Your own text
    MONEY_PARSER_DEFAULT_CURRENCY=EUR python main.py
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from money_parser.exceptions import MoneyError
from money_parser.extractor import parse_all
from money_parser.pipeline import parse_money

# ─── Load .env ───────────────────────────────────────────────────────

load_dotenv()


# ─── Example Prompts ────────────────────────────────────────────────

EXAMPLE_PROMPTS: dict[str, list[str]] = {
    "Symbols and codes": ["$100", "£75.50", "¥1000", "USD 250", "GBP 20.50", "R$150", "kr 500"],
    "Worded numbers": ["one hundred dollars", "twenty-five pounds", "five hundred yen"],
    "Slang": ["20 bucks", "fifty quid", "a fiver", "ten grand", "half a million bucks"],
    "Shorthand": ["10k", "$5k", "2.5m dollars", "1.2 billion USD", "500k EUR"],
    "Regional formats": ["1,234.56 USD", "€2.500,00", "CHF 1'234.50", "1 234,56 €", "₹12,34,567"],
    "Fractions and minor units": ["half a dollar", "quarter million dollars", "75 cents", "a dollar fifty"],
    "Compound": ["5 dollars and 50 cents", "two pounds and 30 pence", "a dollar and 23 cents"],
    "Negative": ["($1,234.56)", "-$100", "minus 5 euros", "($50) refund"],
}

PARSE_ALL_PROMPT = "Lunch was $12.50, the taxi 20 euros and I still owe Sam a fiver."


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer Helpers ─────────────────────────────────────────


def _format_amount(ctx) -> str:
    if ctx.amount is None:
        return f"{_DIM}(no amount){_RESET}"
    currency = ctx.currency or "???"
    color = _RED if ctx.amount < 0 else _GREEN
    return f"{color}{_BOLD}{currency} {ctx.amount:,.2f}{_RESET}"


def _print_parse(text: str, default_currency: str | None) -> bool:
    """Print one parse_money() result. Returns False on error."""
    try:
        ctx = parse_money(text, default_currency)
    except MoneyError as e:
        print(f"  {text:<28} {_RED}[{e.code}]{_RESET} {e}")
        return False

    notes = []
    if ctx.matches.get("parser"):
        notes.append(ctx.matches["parser"])
    if ctx.currency_was_default:
        notes.append("default currency")
    print(f"  {text:<28} {_format_amount(ctx)}  {_DIM}{', '.join(notes)}{_RESET}")
    return True


def _print_spans(text: str) -> None:
    print(f"  {_DIM}{text}{_RESET}")
    for span in parse_all(text):
        marker = f"[{span.start}:{span.end}]"
        print(f"    {_YELLOW}{marker:<10}{_RESET} {span.match!r:<16} {_format_amount(span)}")


# ─── Main ────────────────────────────────────────────────────────────


def main():
    """Parse the example prompts (or the command-line arguments) and print the results."""
    logging.basicConfig(level=os.getenv("MONEY_PARSER_LOG_LEVEL", "WARNING").upper())
    default_currency = os.getenv("MONEY_PARSER_DEFAULT_CURRENCY") or None

    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  MONEY PARSER{_RESET}")
    print(f"{'=' * _WIDTH}")

    failures = 0
    if len(sys.argv) > 1:
        for text in sys.argv[1:]:
            failures += not _print_parse(text, default_currency)
        print(f"{'─' * _WIDTH}")
        _print_spans(" ".join(sys.argv[1:]))
    else:
        for group, prompts in EXAMPLE_PROMPTS.items():
            print(f"\n  {_CYAN}{group}{_RESET}")
            for text in prompts:
                failures += not _print_parse(text, default_currency)
        print(f"\n{'─' * _WIDTH}")
        print(f"  {_CYAN}parse_all{_RESET}")
        _print_spans(PARSE_ALL_PROMPT)

    print(f"{'=' * _WIDTH}\n")
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
