"""
Fiat exchange-rate table and locale presentation rules.

Holds the most recent price of 1 BTC in each supported currency together
with the rules for rendering that currency:

* **symbol**          — glyph or code shown next to the number
* **space**           — whether a space separates symbol and number
* **rtl**             — symbol goes after the number instead of before
* **separator_swap**  — thousands/decimal separators are ``.`` / ``,``

Fetching rates from an exchange is left to the caller; this module only
keeps whatever rates it has been given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

logger = logging.getLogger("satdisplay_fiat")


@dataclass(frozen=True)
class FiatRateEntry:
    """Price of 1 BTC in a single fiat currency."""
    code: str                # ISO 4217, e.g. "USD"
    rate: float

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "rate": self.rate}


@dataclass(frozen=True)
class SymbolInfo:
    """How a currency is written."""
    symbol: str
    space: bool = False
    rtl: bool = False
    separator_swap: bool = False


# @formatter:off
CURRENCY_SYMBOLS: dict[str, SymbolInfo] = {
    "USD": SymbolInfo("$"),
    "EUR": SymbolInfo("€", space=True, separator_swap=True),
    "GBP": SymbolInfo("£"),
    "JPY": SymbolInfo("¥"),
    "CNY": SymbolInfo("¥"),
    "CAD": SymbolInfo("CA$"),
    "AUD": SymbolInfo("A$"),
    "NZD": SymbolInfo("NZ$"),
    "CHF": SymbolInfo("CHF", space=True),
    "INR": SymbolInfo("₹"),
    "KRW": SymbolInfo("₩"),
    "BRL": SymbolInfo("R$", space=True, separator_swap=True),
    "ARS": SymbolInfo("$", space=True, separator_swap=True),
    "MXN": SymbolInfo("$"),
    "TRY": SymbolInfo("₺", separator_swap=True),
    "RUB": SymbolInfo("₽", space=True, rtl=True, separator_swap=True),
    "SEK": SymbolInfo("kr", space=True, rtl=True, separator_swap=True),
    "NOK": SymbolInfo("kr", space=True, rtl=True, separator_swap=True),
    "DKK": SymbolInfo("kr.", space=True, rtl=True, separator_swap=True),
    "PLN": SymbolInfo("zł", space=True, rtl=True, separator_swap=True),
    "CZK": SymbolInfo("Kč", space=True, rtl=True, separator_swap=True),
    "ILS": SymbolInfo("₪", space=True, rtl=True),
    "IRR": SymbolInfo("﷼", space=True, rtl=True),
    "NGN": SymbolInfo("₦"),
    "ZAR": SymbolInfo("R", space=True),
}
# @formatter:on

# Rules used when no currency is active at all.
DEFAULT_SYMBOL = CURRENCY_SYMBOLS["USD"]


def symbol_lookup(code: str | None) -> SymbolInfo:
    """Presentation rules for *code*; unknown codes are written as the code."""
    if not code:
        return DEFAULT_SYMBOL
    info = CURRENCY_SYMBOLS.get(code)
    if info is None:
        return SymbolInfo(symbol=code, space=True)
    return info


def _number_text(value: int | float | str) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def number_with_commas(value: int | float | str) -> str:
    """Group the integer digits of *value* in threes with ``,``.

    >>> number_with_commas(1234567)
    '1,234,567'
    >>> number_with_commas("-1234.56")
    '-1,234.56'
    """
    text = _number_text(value)
    sign = ""
    if text[:1] in ("-", "+"):
        sign, text = text[:1], text[1:]
    whole, dot, fraction = text.partition(".")
    if not whole.isdigit():
        # exponent notation and the like are left alone
        return f"{sign}{text}"
    return f"{sign}{int(whole):,}{dot}{fraction}"


def number_with_decimals(value: int | float | str) -> str:
    """Like :func:`number_with_commas` with ``,`` and ``.`` swapped.

    >>> number_with_decimals("1234.56")
    '1.234,56'
    """
    grouped = number_with_commas(value)
    return grouped.translate(str.maketrans({",": ".", ".": ","}))


class FiatRates:
    """
    In-memory fiat rate table.

    ``rates`` is ``None`` until a rate list has been supplied; that state
    means rate data is unavailable, which is different from a currency
    simply missing from the list.
    """

    def __init__(self, rates: Iterable[FiatRateEntry | dict[str, Any]] | None = None):
        self.rates: list[FiatRateEntry] | None = None
        if rates is not None:
            self.set_rates(rates)

    # ── Rate data ───────────────────────────────────────────────

    def set_rates(self, entries: Iterable[FiatRateEntry | dict[str, Any]]) -> None:
        """Replace the rate list.  Dict entries need ``code`` and ``rate``."""
        rates: list[FiatRateEntry] = []
        for entry in entries:
            if isinstance(entry, dict):
                entry = FiatRateEntry(code=str(entry["code"]),
                                      rate=float(entry["rate"]))
            rates.append(entry)
        self.rates = rates
        logger.debug(f"Loaded {len(rates)} fiat rates")

    def clear_rates(self) -> None:
        """Forget all rate data (as after a failed fetch)."""
        self.rates = None
        logger.info("Fiat rates cleared")

    @property
    def rates_available(self) -> bool:
        return self.rates is not None

    def get_rate(self, code: str | None) -> float:
        """Rate of the first entry for *code*, 0.0 when there is none."""
        for entry in self.rates or []:
            if entry.code == code:
                return entry.rate or 0.0
        if self.rates:
            logger.debug(f"No fiat rate for {code!r}")
        return 0.0

    # ── Presentation ────────────────────────────────────────────

    def symbol_lookup(self, code: str | None) -> SymbolInfo:
        return symbol_lookup(code)

    def number_with_commas(self, value: int | float | str) -> str:
        return number_with_commas(value)

    def number_with_decimals(self, value: int | float | str) -> str:
        return number_with_decimals(value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rates": None if self.rates is None else [e.to_dict() for e in self.rates],
        }
