"""
Tests for price normalization and currency inference.
Covers US and European separators, ambiguous grouping and garbage input.
"""
import pytest

from app.utils.price import normalize_price, infer_currency


@pytest.mark.parametrize("raw, expected", [
    ("$1,234.56", 1234.56),
    ("1.234,56 €", 1234.56),
    ("1,234", 1234.0),
    ("12,5", 12.5),
    ("1234", 1234.0),
    ("1,23", 1.23),
    ("19.99", 19.99),
    ("1.234", 1234.0),
    ("EUR 2.499.000,00", 2499000.0),
    ("USD 2,499,000.00", 2499000.0),
    ("£ 45", 45.0),
])
def test_normalize_price(raw, expected):
    assert normalize_price(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", None, "abc", "Call for price", "€"])
def test_normalize_price_without_digits_is_none(raw):
    assert normalize_price(raw) is None


def test_normalize_price_later_comma_is_decimal_mark():
    """Mixed separators: the one occurring last is the decimal mark."""
    assert normalize_price("1.000.000,5") == pytest.approx(1000000.5)
    assert normalize_price("1,000,000.5") == pytest.approx(1000000.5)


def test_normalize_price_ignores_minus_for_value():
    """Only the first unsigned number is read."""
    assert normalize_price("-5.00") == pytest.approx(5.0)


def test_normalize_price_mixed_input_keeps_last_separator_rule():
    """The last separator is the decimal mark even when the input makes no sense."""
    assert normalize_price("1.234,56.78") == pytest.approx(1.23456)


def test_normalize_price_overflowing_digits_is_none():
    """A digit run too long for a float is not a price."""
    assert normalize_price("9" * 400) is None
    assert normalize_price(str(10 ** 400)) is None


@pytest.mark.parametrize("raw, expected", [
    ("$19.99", "$"),
    ("19.99 USD", "USD"),
    ("€ 12,50", "€"),
    ("£5", "£"),
    ("¥1200", "¥"),
    ("GBP 5 or $7", "$"),
])
def test_infer_currency(raw, expected):
    assert infer_currency(raw) == expected


@pytest.mark.parametrize("raw", ["19.99", "", None, "usd 19.99", "USDT 5"])
def test_infer_currency_none(raw):
    assert infer_currency(raw) is None
