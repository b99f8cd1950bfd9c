"""
Display-unit selection and amount formatting.

The user flips the wallet between three ways of showing an amount:

* ``sats`` — integer satoshis with thousands grouping (``1,500 sats``)
* ``BTC``  — bitcoin with up to 8 decimals (``₿0.000015``)
* ``fiat`` — the configured fiat currency at the current rate (``$0.98``)

:class:`UnitDisplayController` owns the selected unit and turns raw satoshi
amounts into either a :class:`ValueDisplay` (pieces for a widget to lay out)
or a finished string.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Protocol

from satdisplay_core.config import is_fiat_enabled
from satdisplay_core.fiat import DEFAULT_SYMBOL, FiatRates
from satdisplay_core.precision import (
    FIAT_DECIMALS,
    parse_sats,
    sats_to_btc,
    to_fixed,
    whole_sats,
)

logger = logging.getLogger("satdisplay_units")

BTC_GLYPH = "₿"

# Rendered by format() when there is no rate data at all.
FIAT_UNAVAILABLE = "$N/A"

ERR_FIAT_DISABLED = "Disabled"
ERR_FIAT_RATES = "Error fetching fiat rates"


class DisplayUnit(Enum):
    SATS = "sats"
    BTC = "BTC"
    FIAT = "fiat"

    @classmethod
    def parse(cls, unit: DisplayUnit | str) -> DisplayUnit:
        """Accept a member or its tag, case-insensitively."""
        if isinstance(unit, cls):
            return unit
        for member in cls:
            if str(unit).lower() == member.value.lower():
                return member
        raise ValueError(f"Unknown display unit: {unit!r}")


@dataclass(frozen=True)
class ValueDisplay:
    """An amount split into the parts a widget renders separately."""
    amount: str
    unit: DisplayUnit
    symbol: str | None = None
    negative: bool = False
    plural: bool | None = None
    rtl: bool | None = None
    space: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["unit"] = self.unit.value
        return {k: v for k, v in d.items() if v is not None}


@dataclass(frozen=True)
class DisplayError:
    """Returned by :meth:`UnitDisplayController.describe` instead of an amount."""
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error}


class SettingsSource(Protocol):
    """What the controller reads from the user's settings."""

    @property
    def fiat(self) -> str | None: ...

    @property
    def show_all_decimal_places(self) -> bool: ...


UnitObserver = Callable[[DisplayUnit], Any]


class UnitDisplayController:
    """
    Holds the selected display unit and formats satoshi amounts with it.

    Settings and rates are read at call time, never cached, so a change of
    fiat currency or rate is picked up by the next call.
    """

    def __init__(self, settings: SettingsSource, fiat_rates: FiatRates):
        self.settings = settings
        self.fiat_rates = fiat_rates
        self._unit: DisplayUnit = DisplayUnit.SATS
        self._observers: list[UnitObserver] = []

    @property
    def current_unit(self) -> DisplayUnit:
        return self._unit

    # ── Observers ───────────────────────────────────────────────

    def subscribe(self, callback: UnitObserver) -> Callable[[], None]:
        """Call *callback(unit)* whenever the unit changes.

        Returns a function that removes the subscription.
        """
        if not callable(callback):
            raise TypeError("Observer must be callable")
        self._observers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: UnitObserver) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _set_unit(self, unit: DisplayUnit) -> None:
        if unit is self._unit:
            return
        previous, self._unit = self._unit, unit
        logger.debug(f"Display unit {previous.value} -> {unit.value}")
        for callback in list(self._observers):
            try:
                callback(unit)
            except Exception:
                logger.exception(f"Unit observer {callback!r} failed")
                raise

    # ── Unit selection ──────────────────────────────────────────

    def cycle_unit(self) -> None:
        """Advance to the next unit.

        With fiat off this toggles sats/BTC; with a fiat currency selected
        it goes sats -> BTC -> fiat -> sats.
        """
        if not is_fiat_enabled(self.settings.fiat):
            if self._unit is DisplayUnit.SATS:
                self._set_unit(DisplayUnit.BTC)
            else:
                self._set_unit(DisplayUnit.SATS)
            return

        if self._unit is DisplayUnit.SATS:
            self._set_unit(DisplayUnit.BTC)
        elif self._unit is DisplayUnit.BTC:
            self._set_unit(DisplayUnit.FIAT)
        else:
            self._set_unit(DisplayUnit.SATS)

    def reset_unit(self) -> None:
        self._set_unit(DisplayUnit.SATS)

    def _resolve(self, unit: DisplayUnit | str | None) -> DisplayUnit:
        if unit is None or unit == "":
            return self._unit
        return DisplayUnit.parse(unit)

    # ── Conversion ──────────────────────────────────────────────

    @staticmethod
    def _fiat_amount(abs_sats: float, rate: float) -> str:
        btc = float(to_fixed(sats_to_btc(abs_sats)))
        return f"{btc * rate:.{FIAT_DECIMALS}f}"

    def _group_fiat(self, amount: str, separator_swap: bool) -> str:
        if separator_swap:
            return self.fiat_rates.number_with_decimals(amount)
        return self.fiat_rates.number_with_commas(amount)

    def describe(
        self,
        value: int | float | str | None = 0,
        unit: DisplayUnit | str | None = None,
    ) -> ValueDisplay | DisplayError:
        """
        Convert *value* sats into display parts for *unit* (default: the
        current unit).

        The amount is always non-negative; the sign is carried in
        ``negative``.  Fiat problems come back as a :class:`DisplayError`:
        ``"Disabled"`` when no fiat currency is selected and
        ``"Error fetching fiat rates"`` when there is no rate data.  A
        currency missing from the rate list is priced at 0.
        """
        unit = self._resolve(unit)
        sats = parse_sats(value)
        negative = sats < 0
        abs_sats = abs(sats)

        if unit is DisplayUnit.BTC:
            return ValueDisplay(
                amount=to_fixed(sats_to_btc(abs_sats),
                                self.settings.show_all_decimal_places),
                unit=DisplayUnit.BTC,
                negative=negative,
                space=False,
            )

        if unit is DisplayUnit.SATS:
            return ValueDisplay(
                amount=self.fiat_rates.number_with_commas(abs_sats),
                unit=DisplayUnit.SATS,
                negative=negative,
                plural=abs_sats != 1,
            )

        currency = self.settings.fiat
        if not is_fiat_enabled(currency):
            return DisplayError(ERR_FIAT_DISABLED)
        if not self.fiat_rates.rates_available:
            logger.warning("No fiat rate data available")
            return DisplayError(ERR_FIAT_RATES)

        rate = self.fiat_rates.get_rate(currency)
        info = self.fiat_rates.symbol_lookup(currency)
        return ValueDisplay(
            amount=self._group_fiat(self._fiat_amount(abs_sats, rate),
                                    info.separator_swap),
            unit=DisplayUnit.FIAT,
            symbol=info.symbol,
            negative=negative,
            plural=False,
            rtl=info.rtl,
            space=info.space,
        )

    def format(
        self,
        value: int | float | str | None = 0,
        unit: DisplayUnit | str | None = None,
    ) -> str:
        """
        Render *value* sats as a finished string for *unit* (default: the
        current unit), e.g. ``"1,500 sats"``, ``"-₿0.12345678"``,
        ``"€ 1.234,56"``.

        Never fails on missing fiat data: ``"$N/A"`` is returned when there
        are no rates, and a disabled currency renders as ``"$0.00"``.
        """
        unit = self._resolve(unit)

        if unit is DisplayUnit.SATS:
            sats = parse_sats(value)
            label = "sat" if abs(sats) == 1 else "sats"
            shown = self.fiat_rates.number_with_commas(abs(sats))
            return f"{'-' if sats < 0 else ''}{shown} {label}"

        sats = parse_sats(whole_sats(value))
        negative = sats < 0
        abs_sats = abs(sats)

        if unit is DisplayUnit.BTC:
            btc = to_fixed(sats_to_btc(abs_sats),
                           self.settings.show_all_decimal_places)
            return f"{'-' if negative else ''}{BTC_GLYPH}{btc}"

        if not self.fiat_rates.rates_available:
            return FIAT_UNAVAILABLE

        currency = self.settings.fiat
        if is_fiat_enabled(currency):
            rate = self.fiat_rates.get_rate(currency)
            info = self.fiat_rates.symbol_lookup(currency)
        else:
            rate, info = 0.0, DEFAULT_SYMBOL

        amount = self._group_fiat(self._fiat_amount(abs_sats, rate),
                                  info.separator_swap)
        gap = " " if info.space else ""
        if info.rtl:
            text = f"{amount}{gap}{info.symbol}"
        else:
            text = f"{info.symbol}{gap}{amount}"
        return f"-{text}" if negative else text
