"""Unit tests for money and date formatting"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from hire_purchase_portal.utils.date_utils import add_months, parse_date, parse_datetime
from hire_purchase_portal.utils.formatting import format_currency, format_date, format_date_time


def test_format_currency():
    """Test cedi formatting with grouping and two decimals"""
    assert format_currency(1234.5) == "GH₵1,234.50"
    assert format_currency(Decimal("1000000")) == "GH₵1,000,000.00"
    assert format_currency("99.999") == "GH₵100.00"


def test_format_currency_negative_and_missing():
    """Test sign placement and None as zero"""
    assert format_currency(-20) == "-GH₵20.00"
    assert format_currency(None) == "GH₵0.00"
    assert format_currency(0) == "GH₵0.00"


def test_format_date():
    """Test DD/MM/YYYY rendering of dates and timestamps"""
    assert format_date("2025-03-01") == "01/03/2025"
    assert format_date(date(2025, 12, 31)) == "31/12/2025"
    assert format_date("2025-03-01T10:30:00.000Z") == "01/03/2025"


@pytest.mark.parametrize("value", [None, ""])
def test_format_date_missing(value):
    """Test placeholder for missing dates"""
    assert format_date(value) == "-"
    assert format_date_time(value) == "-"


def test_format_date_time():
    """Test day, short month, year and 24h time"""
    assert format_date_time("2025-03-01T14:05:00Z") == "1 Mar 2025, 14:05"
    assert format_date_time(datetime(2025, 11, 20, 9, 0, tzinfo=timezone.utc)) == "20 Nov 2025, 09:00"


def test_parse_datetime_normalizes_to_utc():
    """Test plain dates become midnight UTC and offsets are converted"""
    assert parse_datetime("2025-03-01") == datetime(2025, 3, 1, tzinfo=timezone.utc)
    assert parse_datetime("2025-03-01T02:00:00+02:00") == datetime(2025, 3, 1, tzinfo=timezone.utc)
    assert parse_datetime(datetime(2025, 3, 1, 8, 0)).tzinfo == timezone.utc


def test_parse_date_from_timestamp():
    """Test backend timestamps reduce to their UTC date"""
    assert parse_date("2025-03-01T23:00:00.000Z") == date(2025, 3, 1)
    assert parse_date(date(2025, 3, 1)) == date(2025, 3, 1)


def test_add_months_clamps_day():
    """Test month arithmetic at month ends and across years"""
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)
