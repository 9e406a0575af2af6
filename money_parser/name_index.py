"""
Currency name index: lowercase names and name fragments → ISO code.

Built lazily from the registry the first time a parse needs it, then
shared read-only for the life of the process.

What goes in:
    "swiss franc"  → CHF      full display name (and "swiss francs")
    "swiss"        → CHF      a fragment used by exactly one currency
    "rand", "rands" → ZAR     fragment plus naive plural
    "dollar"       → USD      manual override for a fragment many share

Fragments shared by several currencies ("south", "franc", "dinar") are
left out unless an override names a winner. Stopwords never map.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from .registry import CurrencyRegistry, get_registry

logger = logging.getLogger(__name__)

# ─── Lookup Tables ──────────────────────────────────────────────────

STOPWORDS: frozenset[str] = frozenset({"and", "of", "the", "real", "mark"})

OVERRIDES: dict[str, str] = {
    "dollar": "USD",
    "dollars": "USD",
    "euro": "EUR",
    "euros": "EUR",
    "pound": "GBP",
    "pounds": "GBP",
    "yen": "JPY",
    "rupee": "INR",
    "rupees": "INR",
    "peso": "MXN",
    "pesos": "MXN",
    "won": "KRW",
    "dirham": "AED",
    "dirhams": "AED",
    "reais": "BRL",
}

_WORD_RE = re.compile(r"[^\W\d_]+")


# ─── Index ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CurrencyNameIndex:
    """Immutable name → code map plus its pre-compiled search pattern."""

    names: Mapping[str, str]
    pattern: re.Pattern[str]  # Longest-first alternation of every key

    def lookup(self, token: str) -> str | None:
        return self.names.get(token.strip().lower())

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.lookup(token) is not None

    def __len__(self) -> int:
        return len(self.names)


def build_name_index(registry: CurrencyRegistry) -> CurrencyNameIndex:
    """Build the index from ``registry.get_all()`` (called exactly once)."""
    full_names: dict[str, str] = {}
    fragments: dict[str, set[str]] = defaultdict(set)

    for info in registry.get_all():
        name = info.name.lower()
        full_names[name] = info.code
        if not name.endswith("s"):
            full_names[f"{name}s"] = info.code

        for word in _WORD_RE.findall(name):
            if len(word) <= 2 or word in STOPWORDS:
                continue
            fragments[word].add(info.code)
            if not word.endswith("s"):
                fragments[f"{word}s"].add(info.code)

    names = {word: codes.pop() for word, codes in fragments.items() if len(codes) == 1}
    names.update(full_names)
    names.update(OVERRIDES)

    alternation = "|".join(re.escape(key) for key in sorted(names, key=len, reverse=True))
    pattern = re.compile(rf"(?<![^\W\d_])(?:{alternation})(?![^\W\d_])", re.IGNORECASE)

    return CurrencyNameIndex(names=MappingProxyType(names), pattern=pattern)


@lru_cache(maxsize=None)
def get_name_index() -> CurrencyNameIndex:
    """The process-wide index. Thread-safe; a racing first build yields an equal index."""
    index = build_name_index(get_registry())
    logger.info("Currency name index built: %d entries", len(index))
    return index
