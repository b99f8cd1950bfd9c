"""
Tests for satdisplay_core.precision — satoshi constants and the fixed-point
formatter used for bitcoin amounts.
"""

import pytest

from satdisplay_core.precision import (
    BTC_DECIMALS,
    FIAT_DECIMALS,
    SATS_PER_BTC,
    parse_sats,
    sats_to_btc,
    to_fixed,
    whole_sats,
)


# ═══════════════════════════════════════════════════════════════════════
#  Constants
# ═══════════════════════════════════════════════════════════════════════


class TestPrecisionConstants:

    def test_btc_decimals(self):
        assert BTC_DECIMALS == 8

    def test_sats_per_btc(self):
        assert SATS_PER_BTC == 100_000_000

    def test_fiat_decimals(self):
        assert FIAT_DECIMALS == 2

    def test_one_sat_value(self):
        assert sats_to_btc(1) == 0.00000001

    def test_one_btc(self):
        assert sats_to_btc(100_000_000) == 1.0


# ═══════════════════════════════════════════════════════════════════════
#  to_fixed
# ═══════════════════════════════════════════════════════════════════════


class TestToFixed:

    def test_whole_bitcoin_is_exact(self):
        assert to_fixed(100_000_000 / SATS_PER_BTC) == "1"

    def test_eight_places(self):
        assert to_fixed(0.12345678) == "0.12345678"

    def test_trailing_zeros_dropped(self):
        assert to_fixed(0.0001) == "0.0001"
        assert to_fixed(0.5) == "0.5"

    def test_trailing_zeros_kept_when_showing_all(self):
        assert to_fixed(0.0001, show_all_decimal_places=True) == "0.00010000"
        assert to_fixed(1.0, show_all_decimal_places=True) == "1.00000000"

    def test_zero(self):
        assert to_fixed(0.0) == "0"
        assert to_fixed(0.0, show_all_decimal_places=True) == "0.00000000"

    def test_zeros_before_point_survive(self):
        assert to_fixed(21_000_000.0) == "21000000"

    def test_rounds_beyond_eight_places(self):
        assert to_fixed(0.000000004) == "0"
        assert to_fixed(0.000000016) == "0.00000002"


# ═══════════════════════════════════════════════════════════════════════
#  Raw amount parsing
# ═══════════════════════════════════════════════════════════════════════


class TestParseSats:

    def test_int(self):
        assert parse_sats(42) == 42.0

    def test_numeric_text(self):
        assert parse_sats(" 42 ") == 42.0
        assert parse_sats("-12.5") == -12.5

    def test_empty_is_zero(self):
        assert parse_sats(None) == 0.0
        assert parse_sats("") == 0.0

    @pytest.mark.parametrize("bad", ["abc", "12abc", "nan", "inf", float("inf"), True, [1]])
    def test_rejects_non_numbers(self, bad):
        with pytest.raises(ValueError):
            parse_sats(bad)


class TestWholeSats:

    def test_truncates_text(self):
        assert whole_sats("12.9") == "12"

    def test_truncates_negative(self):
        assert whole_sats(-5.5) == "-5"

    def test_integer_unchanged(self):
        assert whole_sats(100) == "100"

    def test_fraction_only(self):
        assert whole_sats(".5") == "0"
        assert whole_sats("-.5") == "0"

    def test_none(self):
        assert whole_sats(None) == "0"

    def test_small_float_not_exponent(self):
        assert whole_sats(1.5e-05) == "0"

    def test_large_float_not_exponent(self):
        assert whole_sats(1.5e16) == "15000000000000000"

    def test_negative_small_float(self):
        assert whole_sats(-0.5) == "0"

    def test_non_finite_float_left_for_parsing(self):
        assert whole_sats(float("inf")) == "inf"
