"""Tests for wire date conversion (YYYY-MM-DD)."""

from datetime import date

import pytest

from contactbook.infrastructure.dates import (
    DateConversionError,
    format_contract_date,
    parse_contract_date,
)


def test_parse_iso_date():
    assert parse_contract_date("1990-05-01") == date(1990, 5, 1)
    assert parse_contract_date("  2000-12-31  ") == date(2000, 12, 31)


def test_parse_blank_returns_none():
    assert parse_contract_date(None) is None
    assert parse_contract_date("") is None
    assert parse_contract_date("   ") is None


@pytest.mark.parametrize(
    "raw",
    [
        "1990-05",
        "1990-05-01-07",
        "1990/05/01",
        "19x0-05-01",
        "1990-13-01",
        "1990-02-30",
        "1_990-05-01",
        "1990-+05-01",
        "1990- 05-01",
        "1990-05-\u0661\u0662",
    ],
)
def test_parse_malformed_raises(raw):
    with pytest.raises(DateConversionError):
        parse_contract_date(raw)


def test_conversion_error_is_value_error():
    with pytest.raises(ValueError):
        parse_contract_date("not-a-date")


def test_format_pads_components():
    assert format_contract_date(date(987, 3, 4)) == "0987-03-04"
    assert format_contract_date(None) is None
