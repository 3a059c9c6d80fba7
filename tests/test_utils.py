from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from utils.currency import format_currency, format_signed
from utils.date_helpers import (
    add_months, last_of_quarter, month_range, parse_date, to_day,
)
from utils.money import parse_money


@pytest.mark.parametrize("start, n, expected", [
    (date(2024, 1, 31), 1, date(2024, 2, 29)),
    (date(2023, 1, 31), 1, date(2023, 2, 28)),
    (date(2024, 12, 15), 1, date(2025, 1, 15)),
    (date(2024, 3, 31), -1, date(2024, 2, 29)),
    (date(2020, 2, 29), 12, date(2021, 2, 28)),
])
def test_add_months_clamps(start, n, expected):
    assert add_months(start, n) == expected


@pytest.mark.parametrize("d, expected", [
    (date(2024, 1, 1), date(2024, 3, 31)),
    (date(2024, 6, 30), date(2024, 6, 30)),
    (date(2024, 8, 12), date(2024, 9, 30)),
    (date(2024, 12, 31), date(2024, 12, 31)),
])
def test_last_of_quarter(d, expected):
    assert last_of_quarter(d) == expected


def test_month_helpers():
    assert month_range("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(ValueError):
        month_range("2024-13")


def test_parse_date_ignores_time_part():
    assert parse_date("2024-01-31T00:00:00.000Z") == date(2024, 1, 31)
    assert parse_date("2024/01/31") == date(2024, 1, 31)
    assert parse_date("31/01/2024") is None
    assert parse_date("2024-01-31garbage") is None
    assert parse_date("") is None


@pytest.mark.parametrize("text, aware", [
    ("2024-01-31T23:00:00-05:00", datetime(2024, 1, 31, 23, 0, tzinfo=timezone(timedelta(hours=-5)))),
    ("2024-01-01T02:00:00+05:00", datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=5)))),
    ("2024-01-31T23:30:00Z", datetime(2024, 1, 31, 23, 30, tzinfo=timezone.utc)),
])
def test_offset_strings_match_aware_datetimes(text, aware):
    assert to_day(text) == to_day(aware)


def test_offset_strings_roll_to_utc_day():
    assert to_day("2024-01-31T23:00:00-05:00") == date(2024, 2, 1)
    assert to_day("2024-01-01T02:00:00+05:00") == date(2023, 12, 31)


def test_to_day_normalizes_aware_datetimes_to_utc():
    plus_five = timezone(timedelta(hours=5))
    assert to_day(datetime(2024, 1, 1, 2, 0, tzinfo=plus_five)) == date(2023, 12, 31)
    assert to_day(datetime(2024, 1, 1, 23, 59)) == date(2024, 1, 1)
    assert to_day(date(2024, 1, 1)) == date(2024, 1, 1)


@pytest.mark.parametrize("value", ["bad", None, 20240101])
def test_to_day_rejects_invalid(value):
    with pytest.raises(ValueError):
        to_day(value)


@pytest.mark.parametrize("raw, expected", [
    ("$1,234.565", Decimal("1234.57")),
    ("(12.50)", Decimal("-12.50")),
    (12.5, Decimal("12.50")),
    (Decimal("3"), Decimal("3.00")),
])
def test_parse_money(raw, expected):
    assert parse_money(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "NaN", "Infinity", None, True])
def test_parse_money_rejects(raw):
    with pytest.raises(ValueError):
        parse_money(raw)


def test_currency_formatting():
    assert format_currency(Decimal("1234.5")) == "$1,234.50"
    assert format_currency(Decimal("-3")) == "-$3.00"
    assert format_signed(Decimal("-3")) == "-$3.00"
    assert format_signed(Decimal("0")) == "+$0.00"
