"""
TOML-based configuration for SatDisplay.

Loads display settings from a TOML file and/or environment variables.
Environment variables take precedence over file values.

Example ``satdisplay.toml``::

    [fiat]
    currency = "EUR"
    rates = { USD = 65000.0, EUR = 60000.0 }

    [display]
    show-all-decimal-places = true

    [logging]
    level = "DEBUG"

Usage:
    from satdisplay_core.config import load_config
    cfg = load_config("satdisplay.toml")
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from satdisplay_core.fiat import FiatRateEntry, FiatRates

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[import,no-redef]


# Sentinel the client stores when the user switches fiat display off.
FIAT_DISABLED = "Disabled"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class FiatConfig:
    """Fiat currency selection and seed rates (price of 1 BTC)."""
    currency: str | None = None        # ISO code, or "Disabled"
    rates: dict[str, float] = field(default_factory=dict)


@dataclass
class DisplayConfig:
    """Amount display preferences."""
    show_all_decimal_places: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    format: str = "human"   # "human" or "json"
    file: str | None = None


@dataclass
class SatDisplayConfig:
    """
    Top-level configuration container.

    Also serves as the settings source for
    :class:`~satdisplay_core.units.UnitDisplayController`, which only reads
    :attr:`fiat` and :attr:`show_all_decimal_places`.
    """
    fiat_config: FiatConfig = field(default_factory=FiatConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def fiat(self) -> str | None:
        return self.fiat_config.currency

    @fiat.setter
    def fiat(self, code: str | None) -> None:
        self.fiat_config.currency = code

    @property
    def fiat_enabled(self) -> bool:
        return is_fiat_enabled(self.fiat)

    @property
    def show_all_decimal_places(self) -> bool:
        return bool(self.display.show_all_decimal_places)


def is_fiat_enabled(code: str | None) -> bool:
    """A fiat selection counts only when set and not the disabled sentinel."""
    return bool(code) and code != FIAT_DISABLED


def _merge(dc: Any, raw: dict[str, Any]) -> None:
    """Merge a raw dict into a dataclass instance (in-place)."""
    for key, value in raw.items():
        key_under = key.replace("-", "_")
        if hasattr(dc, key_under):
            setattr(dc, key_under, value)


def _env_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def load_config(path: str | None = None) -> SatDisplayConfig:
    """
    Load configuration from a TOML file, then overlay environment variables.

    Env-var mapping:
        SATDISPLAY_FIAT               -> fiat.currency
        SATDISPLAY_SHOW_ALL_DECIMALS  -> display.show_all_decimal_places
        SATDISPLAY_LOG_LEVEL          -> logging.level
        SATDISPLAY_LOG_FMT            -> logging.format
        SATDISPLAY_LOG_FILE           -> logging.file
    """
    cfg = SatDisplayConfig()

    # ── TOML file ────────────────────────────────────────────────
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                data = tomllib.load(f)
            for section_name, section_dc in [
                ("fiat", cfg.fiat_config),
                ("display", cfg.display),
                ("logging", cfg.logging),
            ]:
                if section_name in data:
                    _merge(section_dc, data[section_name])
            cfg.fiat_config.rates = {
                str(code): float(rate)
                for code, rate in (cfg.fiat_config.rates or {}).items()
            }

    # ── Environment variable overrides ───────────────────────────
    if v := os.environ.get("SATDISPLAY_FIAT"):
        cfg.fiat_config.currency = v.strip()
    if v := os.environ.get("SATDISPLAY_SHOW_ALL_DECIMALS"):
        cfg.display.show_all_decimal_places = _env_bool(v)
    if v := os.environ.get("SATDISPLAY_LOG_LEVEL"):
        cfg.logging.level = v.upper()
    if v := os.environ.get("SATDISPLAY_LOG_FMT"):
        cfg.logging.format = v
    if v := os.environ.get("SATDISPLAY_LOG_FILE"):
        cfg.logging.file = v

    return cfg


def build_fiat_rates(cfg: SatDisplayConfig) -> FiatRates:
    """Rate table seeded from ``[fiat] rates``; unavailable when empty."""
    if not cfg.fiat_config.rates:
        return FiatRates()
    return FiatRates([
        FiatRateEntry(code=code, rate=rate)
        for code, rate in cfg.fiat_config.rates.items()
    ])
