"""Tests for price format selection."""

import math

import pytest

from coinchart.chart.price_format import PriceFormatSelector
from coinchart.chart.types import PriceFormat


class TestCurrencyPrefix:
    @pytest.mark.parametrize(
        "symbol,prefix",
        [
            ("BTCJPY", "¥"),
            ("ETHUSD", "$"),
            ("ETHBTC", "₿ "),
            ("BTCUSDT", ""),
            ("ETHEUR", ""),
        ],
    )
    def test_suffix_match(self, symbol, prefix):
        assert PriceFormatSelector.currency_prefix(symbol) == prefix


class TestDecimalPattern:
    def test_small_price_uses_four_decimals(self):
        fmt = PriceFormatSelector.select("BTCJPY", 50.1234)
        assert fmt == PriceFormat(currency_prefix="¥", decimal_pattern="%.4f")
        assert fmt.format(50.1234) == "¥50.1234"

    def test_large_price_uses_whole_units(self):
        fmt = PriceFormatSelector.select("ETHUSD", 3450.0)
        assert fmt == PriceFormat(currency_prefix="$", decimal_pattern="%4.0f")
        assert fmt.pattern == "$%4.0f"
        assert fmt.format(3450.0) == "$3450"

    def test_threshold_is_one_hundred_inclusive(self):
        assert PriceFormatSelector.decimal_pattern(100.0) == "%.4f"
        assert PriceFormatSelector.decimal_pattern(100.01) == "%4.0f"

    def test_bitcoin_quote_keeps_spacing(self):
        fmt = PriceFormatSelector.select("ETHBTC", 0.05)
        assert fmt.format(0.05) == "₿ 0.0500"

    def test_width_pads_short_values(self):
        assert PriceFormat("", "%4.0f").format(5.0) == "   5"

    @pytest.mark.parametrize("price", [0.0, -1.0, math.nan])
    def test_non_positive_price_falls_back_to_four_decimals(self, price):
        assert PriceFormatSelector.decimal_pattern(price) == "%.4f"
