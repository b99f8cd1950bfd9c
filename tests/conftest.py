"""
Shared pytest fixtures for the SatDisplay test suite.
"""

import pytest

from satdisplay_core.config import FIAT_DISABLED, SatDisplayConfig
from satdisplay_core.fiat import FiatRateEntry, FiatRates
from satdisplay_core.units import UnitDisplayController


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep SATDISPLAY_* variables from the shell out of the tests."""
    for name in ("SATDISPLAY_FIAT", "SATDISPLAY_SHOW_ALL_DECIMALS",
                 "SATDISPLAY_LOG_LEVEL", "SATDISPLAY_LOG_FMT",
                 "SATDISPLAY_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Settings with fiat display switched off."""
    cfg = SatDisplayConfig()
    cfg.fiat = FIAT_DISABLED
    return cfg


@pytest.fixture
def usd_settings():
    cfg = SatDisplayConfig()
    cfg.fiat = "USD"
    return cfg


@pytest.fixture
def rates():
    """Rate table with a handful of currencies."""
    return FiatRates([
        FiatRateEntry("USD", 50_000.0),
        FiatRateEntry("EUR", 45_000.0),
        FiatRateEntry("ILS", 200_000.0),
        FiatRateEntry("USD", 1.0),   # duplicate, never the first match
    ])


@pytest.fixture
def controller(settings, rates):
    """Controller with fiat disabled."""
    return UnitDisplayController(settings, rates)


@pytest.fixture
def usd_controller(usd_settings, rates):
    """Controller showing USD at 50k per BTC."""
    return UnitDisplayController(usd_settings, rates)
