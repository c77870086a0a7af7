"""Tests for form input parsing."""

from __future__ import annotations

from decimal import Decimal

import pytest

from fintro.viewmodels.validation import format_amount_input, parse_amount, parse_day


@pytest.mark.parametrize(
    "text,expected",
    [
        ("10", Decimal("10.00")),
        (" 12.5 ", Decimal("12.50")),
        ("0", Decimal("0.00")),
        ("0.005", Decimal("0.01")),
        ("1e3", Decimal("1000.00")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", "12,5", "ten", "Infinity", "-0.01"])
def test_parse_amount_rejects(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_amount_uses_label():
    with pytest.raises(ValueError, match="Debt is required"):
        parse_amount("", label="Debt")


@pytest.mark.parametrize("text,expected", [("1", 1), (" 31 ", 31), ("15", 15)])
def test_parse_day(text, expected):
    assert parse_day(text) == expected


@pytest.mark.parametrize("text", ["0", "32", "-1", "1.5", "", "abc"])
def test_parse_day_rejects(text):
    with pytest.raises(ValueError):
        parse_day(text)


def test_format_amount_input():
    assert format_amount_input(Decimal("2000.00")) == "2000"
    assert format_amount_input(Decimal("120.50")) == "120.5"
    assert format_amount_input(Decimal("0.00")) == "0"
