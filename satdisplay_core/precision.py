"""
Precision constants and helpers for SatDisplay.

Amounts travel through the client as integer satoshis:

    1 BTC = 100,000,000 sats (smallest indivisible unit)

Bitcoin amounts are shown with up to 8 decimal places, fiat amounts with 2.
"""

from __future__ import annotations

import math

# Number of decimal places in a bitcoin amount.
BTC_DECIMALS: int = 8

# 1 sat = 0.00000001 BTC.
SATS_PER_BTC: int = 10 ** BTC_DECIMALS  # 100_000_000

# Decimal places used for every fiat amount.
FIAT_DECIMALS: int = 2


def to_fixed(value: float, show_all_decimal_places: bool = False) -> str:
    """Render *value* as a fixed-point bitcoin amount.

    Trailing zeros (and a dangling decimal point) are dropped unless
    *show_all_decimal_places* is set.

    >>> to_fixed(1.0)
    '1'
    >>> to_fixed(0.0001)
    '0.0001'
    >>> to_fixed(0.0001, show_all_decimal_places=True)
    '0.00010000'
    """
    fixed = f"{value:.{BTC_DECIMALS}f}"
    if show_all_decimal_places:
        return fixed
    fixed = fixed.rstrip("0").rstrip(".")
    if fixed in ("", "-0"):
        return "0"
    return fixed


def sats_to_btc(sats: float) -> float:
    """Convert a satoshi count to a BTC float."""
    return sats / SATS_PER_BTC


def parse_sats(value: int | float | str | None) -> float:
    """Coerce a raw amount (number or numeric text) to a float.

    ``None`` and empty text count as zero.  Anything that is not a finite
    number raises ``ValueError``.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid amount: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Amount must be finite: {value!r}")
    return number


def whole_sats(value: int | float | str | None) -> str:
    """Drop everything after the decimal point of a raw amount's text.

    >>> whole_sats("12.9")
    '12'
    >>> whole_sats(-5.5)
    '-5'
    >>> whole_sats(1.5e16)
    '15000000000000000'
    """
    if value is None:
        return "0"
    if isinstance(value, float) and math.isfinite(value):
        # str() of a float may use exponent notation
        return str(math.trunc(value))
    whole = str(value).strip().split(".")[0]
    if whole in ("", "-", "+"):
        return "0"
    return whole
