"""Tests for pair canonicalisation and pip metadata."""

import pytest

from fxrates.quotes.pairs import (
    CROSS_PAIRS,
    USD_BASE_CURRENCIES,
    canonicalize,
    is_jpy_pair,
    is_valid_pair_code,
    pip_size,
    split_pair,
)


class TestCanonicalize:
    @pytest.mark.parametrize("leg", sorted(USD_BASE_CURRENCIES))
    def test_usd_base_legs(self, leg):
        assert canonicalize(leg) == "USD" + leg

    @pytest.mark.parametrize("leg", ["EUR", "GBP", "AUD", "NZD", "BRL"])
    def test_other_legs_quote_in_usd(self, leg):
        assert canonicalize(leg) == leg + "USD"

    @pytest.mark.parametrize("pair", CROSS_PAIRS)
    def test_cross_pairs_pass_through(self, pair):
        assert canonicalize(pair) == pair

    def test_six_letter_pair_passes_through(self):
        assert canonicalize("EURUSD") == "EURUSD"
        assert canonicalize("USDJPY") == "USDJPY"

    def test_normalises_case_and_whitespace(self):
        assert canonicalize(" jpy ") == "USDJPY"
        assert canonicalize("gbpcad") == "GBPCAD"

    @pytest.mark.parametrize("bad", ["", "E", "EURO", "BADCODE", "EUR/USD", "12345X"])
    def test_rejects_garbage(self, bad):
        with pytest.raises(ValueError, match="Not a currency or pair code"):
            canonicalize(bad)


class TestPairHelpers:
    def test_split_pair(self):
        assert split_pair("GBPJPY") == ("GBP", "JPY")

    def test_split_pair_rejects_short_code(self):
        with pytest.raises(ValueError):
            split_pair("EUR")

    def test_valid_pair_code(self):
        assert is_valid_pair_code("EURUSD")
        assert not is_valid_pair_code("eurusd")
        assert not is_valid_pair_code("BADCODE")

    def test_jpy_detection(self):
        assert is_jpy_pair("JPY")
        assert is_jpy_pair("cadjpy")
        assert not is_jpy_pair("EURUSD")

    def test_pip_size(self):
        assert pip_size("USDJPY") == 0.01
        assert pip_size("EURUSD") == 0.0001
