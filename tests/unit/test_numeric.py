import math

import pytest

from mexgen.parsing.numeric import parse_numeric


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("123,45", 123.45),
        ("1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("500", 500.0),
        ("  42.5 ", 42.5),
        ("103 MW", 103.0),
        ("$ 1,000.50", 1000.5),
        ("-12.5", -12.5),
    ],
)
def test_parse_numeric_accepts_both_decimal_conventions(raw, expected):
    assert parse_numeric(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["N/D", "nd", "NULL", "n/a", "-", "", "   ", None, "abc"])
def test_parse_numeric_placeholders_are_absent(raw):
    assert parse_numeric(raw) is None


def test_parse_numeric_passes_finite_numbers_through():
    assert parse_numeric(7) == 7.0
    assert parse_numeric(2.5) == 2.5
    assert parse_numeric(math.inf) is None
    assert parse_numeric(math.nan) is None


def test_parse_numeric_takes_leading_number():
    assert parse_numeric("12.5.7") == 12.5
