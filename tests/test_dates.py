from datetime import date

import pytest

from paisatrack.dates import format_date, month_key, month_label, parse_date, parse_month, shift_month
from paisatrack.errors import DateParseError, ParseError


def test_parse_date_day_month_year():
    assert parse_date("05/03/2024") == date(2024, 3, 5)
    assert parse_date("5/3/2024") == date(2024, 3, 5)


def test_parse_date_orders_by_year_month_day():
    assert parse_date("31/12/2023") < parse_date("01/01/2024")
    assert parse_date("02/02/2024") > parse_date("31/01/2024")


@pytest.mark.parametrize("value", [
    "", "2024-03-05", "05/03", "aa/03/2024", "31/02/2024", "1/2/3/4",
    "01/03/24", "1_0/03/2024", "01/03/ 2024", "01/３/2024",
])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(DateParseError):
        parse_date(value)


def test_date_parse_error_is_parse_error():
    with pytest.raises(ParseError):
        parse_date(None)


def test_format_date_round_trip():
    d = date(2024, 1, 7)
    assert format_date(d) == "07/01/2024"
    assert parse_date(format_date(d)) == d


def test_month_helpers():
    assert month_key(date(2024, 3, 9)) == "2024-03"
    assert parse_month("2024-03") == (2024, 3)
    assert month_label(2023, 8) == "Aug 2023"
    with pytest.raises(DateParseError):
        parse_month("2024-13")
    with pytest.raises(DateParseError):
        parse_month("March")


def test_shift_month_rolls_years():
    assert shift_month(2024, 1, -1) == (2023, 12)
    assert shift_month(2024, 1, -5) == (2023, 8)
    assert shift_month(2023, 12, 1) == (2024, 1)
    assert shift_month(2024, 6, 0) == (2024, 6)
