"""Tests for the run_display command-line runner."""

import json
import logging
import textwrap

import pytest

from run_display import main, parse_args
from satdisplay_core.logging_config import JsonLineFormatter


def _owned(root=None):
    root = root or logging.getLogger()
    return [h for h in root.handlers if getattr(h, "_satdisplay_handler", False)]


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for h in _owned(root):
        root.removeHandler(h)
        h.close()
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "satdisplay.toml"
    path.write_text(textwrap.dedent("""\
        [fiat]
        currency = "USD"
        rates = { USD = 50000.0 }
    """), encoding="utf-8")
    return str(path)


def _lines(capsys):
    return capsys.readouterr().out.strip().splitlines()


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.amounts == ["0"]
        assert args.unit is None
        assert args.cycle == 0
        assert args.describe is False

    def test_negative_amount_is_positional(self):
        assert parse_args(["-12345678"]).amounts == ["-12345678"]

    def test_rejects_unknown_unit(self):
        with pytest.raises(SystemExit):
            parse_args(["--unit", "euro"])


class TestMain:
    def test_sats_default(self, capsys):
        assert main(["1", "1500"]) == 0
        assert _lines(capsys) == ["1 sat", "1,500 sats"]

    def test_btc(self, capsys):
        assert main(["--unit", "BTC", "-12345678"]) == 0
        assert _lines(capsys) == ["-₿0.12345678"]

    def test_fiat_from_config(self, capsys, config_file):
        assert main(["--config", config_file, "--unit", "fiat", "100000000"]) == 0
        assert _lines(capsys) == ["$50,000.00"]

    def test_fiat_without_rates(self, capsys):
        assert main(["--unit", "fiat", "500"]) == 0
        assert _lines(capsys) == ["$N/A"]

    def test_cycle(self, capsys, config_file):
        assert main(["--config", config_file, "--cycle", "2", "200000000"]) == 0
        assert _lines(capsys) == ["$100,000.00"]

    def test_describe_json(self, capsys):
        assert main(["--describe", "-1"]) == 0
        out = json.loads(_lines(capsys)[0])
        assert out == {"amount": "1", "unit": "sats", "negative": True, "plural": False}

    def test_describe_error(self, capsys):
        assert main(["--describe", "--unit", "fiat", "500"]) == 0
        assert json.loads(_lines(capsys)[0]) == {"error": "Disabled"}

    def test_bad_amount(self, capsys):
        assert main(["abc", "5"]) == 1
        captured = capsys.readouterr()
        assert captured.out.strip() == "5 sats"
        assert "Invalid amount" in captured.err

    def test_logging_section_applied(self, tmp_path, capsys):
        path = tmp_path / "satdisplay.toml"
        path.write_text(textwrap.dedent("""\
            [logging]
            level = "WARNING"
            format = "json"
        """), encoding="utf-8")
        assert main(["--config", str(path), "5"]) == 0
        assert logging.getLogger().level == logging.WARNING
        assert isinstance(_owned()[0].formatter, JsonLineFormatter)

    def test_log_level_flag_wins(self, capsys):
        assert main(["--log-level", "debug", "5"]) == 0
        assert logging.getLogger().level == logging.DEBUG
