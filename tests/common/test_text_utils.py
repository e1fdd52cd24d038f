"""Tests for price_tracker/common/text_utils.py"""

import pytest

from price_tracker.common.text_utils import (
    clean_text,
    parse_percent,
    parse_price,
    round_half_up,
)


class TestParsePrice:
    def test_leading_currency_symbol(self):
        assert parse_price("₴199.99") == 199.99

    def test_comma_decimal_with_trailing_symbol(self):
        assert parse_price("199,99₴") == 199.99

    def test_empty_string(self):
        assert parse_price("") == 0

    def test_none(self):
        assert parse_price(None) == 0

    def test_text_without_digits(self):
        assert parse_price("Free") == 0

    def test_space_grouped_thousands(self):
        assert parse_price("1 299 ₴") == 1299

    def test_hryvnia_suffix(self):
        assert parse_price("2 499 грн") == 2499

    def test_thousands_comma_is_read_as_decimal(self):
        # Known limitation: comma is always a decimal separator
        assert parse_price("1,234") == pytest.approx(1.234)
        assert parse_price("12,500") == pytest.approx(12.5)

    def test_stops_at_second_dot(self):
        assert parse_price("1.234.50") == pytest.approx(1.234)

    def test_lone_separator(self):
        assert parse_price(",") == 0

    def test_never_negative(self):
        assert parse_price("-50 ₴") == 50

    def test_returns_float(self):
        assert isinstance(parse_price("100"), float)


class TestParsePercent:
    def test_discount_badge(self):
        assert parse_percent("-25%") == 25

    def test_whitespace(self):
        assert parse_percent("  -10 % ") == 10

    def test_empty(self):
        assert parse_percent("") is None

    def test_no_digits(self):
        assert parse_percent("sale") is None


class TestRoundHalfUp:
    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1

    def test_float_noise(self):
        assert round_half_up((1 - 800 / 1000) * 100) == 20


class TestCleanText:
    def test_collapses_whitespace(self):
        assert clean_text("  Half-Life\n\t 2 ") == "Half-Life 2"

    def test_empty(self):
        assert clean_text("") == ""
