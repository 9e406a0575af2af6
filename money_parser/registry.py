"""
ISO-4217 currency registry backed by Babel's CLDR data.

Only currencies that are active legal tender somewhere are registered:
withdrawn codes (DEM, FRF, ...) and fund codes (USN, XDR, ...) are not
something a person writes next to an amount today.

    registry = get_registry()
    registry.get_by_code("usd")   → CurrencyInfo(code="USD", numeric_code="840", ...)
    registry.get_by_code("XYZ")   → None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from babel import Locale
from babel.core import get_global
from babel.numbers import get_currency_precision

logger = logging.getLogger(__name__)

# ─── ISO Numeric Codes ──────────────────────────────────────────────
# CLDR does not carry ISO numeric codes; these cover the commonly traded
# currencies. Everything else reports numeric_code=None.

_ISO_NUMERIC: dict[str, str] = {
    "AED": "784", "ALL": "008", "ARS": "032", "AUD": "036", "AZN": "944",
    "BAM": "977", "BGN": "975", "BHD": "048", "BOB": "068", "BRL": "986",
    "CAD": "124", "CHF": "756", "CLP": "152", "CNY": "156", "COP": "170",
    "CRC": "188", "CUP": "192", "CZK": "203", "DKK": "208", "EGP": "818",
    "EUR": "978", "GBP": "826", "GEL": "981", "GHS": "936", "HKD": "344",
    "HUF": "348", "IDR": "360", "ILS": "376", "INR": "356", "ISK": "352",
    "JOD": "400", "JPY": "392", "KES": "404", "KRW": "410", "KWD": "414",
    "KZT": "398", "LAK": "418", "LKR": "144", "MAD": "504", "MOP": "446",
    "MXN": "484", "MYR": "458", "NGN": "566", "NOK": "578", "NPR": "524",
    "NZD": "554", "OMR": "512", "PEN": "604", "PHP": "608", "PKR": "586",
    "PLN": "985", "PYG": "600", "QAR": "634", "RON": "946", "RSD": "941",
    "RUB": "643", "SAR": "682", "SEK": "752", "SGD": "702", "SOS": "706",
    "THB": "764", "TND": "788", "TOP": "776", "TRY": "949", "TWD": "901",
    "UAH": "980", "USD": "840", "UYU": "858", "VND": "704", "ZAR": "710",
}


# ─── Currency Info ──────────────────────────────────────────────────


@dataclass(frozen=True)
class CurrencyInfo:
    """One registry entry. Read-only to everything outside this module."""

    code: str
    numeric_code: str | None
    name: str
    decimal_digits: int  # 0 for currencies without a minor unit (JPY, KRW)

    @property
    def minor_unit_scale(self) -> int:
        return 10**self.decimal_digits


# ─── Registry ───────────────────────────────────────────────────────


def _active_tender_codes() -> set[str]:
    """Codes that are currently legal tender in at least one territory."""
    territory_currencies = get_global("territory_currencies")
    return {
        entry[0]
        for entries in territory_currencies.values()
        for entry in entries
        if entry[2] is None and entry[3]
    }


class CurrencyRegistry:
    """Code → CurrencyInfo lookup, built once from CLDR."""

    def __init__(self, locale: str = "en"):
        names = Locale.parse(locale).currencies
        self._by_code: dict[str, CurrencyInfo] = {
            code: CurrencyInfo(
                code=code,
                numeric_code=_ISO_NUMERIC.get(code),
                name=names.get(code, code),
                decimal_digits=get_currency_precision(code),
            )
            for code in sorted(_active_tender_codes())
        }
        logger.info("Currency registry loaded: %d currencies", len(self._by_code))

    def get_by_code(self, code: str) -> CurrencyInfo | None:
        if not isinstance(code, str):
            return None
        return self._by_code.get(code.strip().upper())

    def get_all(self) -> list[CurrencyInfo]:
        return list(self._by_code.values())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.get_by_code(code) is not None

    def __len__(self) -> int:
        return len(self._by_code)


@lru_cache(maxsize=1)
def get_registry() -> CurrencyRegistry:
    """The process-wide registry (built on first call)."""
    return CurrencyRegistry()
