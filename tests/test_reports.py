from datetime import date

import pytest

from paisatrack.errors import ValidationError
from paisatrack.reports import EMPTY_REPORT, expense_breakdown, run_report, safe_run_report
from conftest import make_tx


def make_sample():
    return (
        make_tx(1, "expense", 500.0, "food", date(2024, 3, 1)),
        make_tx(2, "income", 2000.0, "salary", date(2024, 3, 5)),
        make_tx(3, "expense", 120.0, "Transport", date(2024, 3, 31)),
        make_tx(4, "expense", 80.0, "Food", date(2024, 4, 1)),
    )


def test_run_report_without_filters():
    report = run_report(make_sample())
    assert report.total_income == 2000.0
    assert report.total_expense == 700.0
    assert report.net_flow == 1300.0
    assert len(report.transactions) == 4


def test_run_report_range_and_category():
    report = run_report(make_sample(), date(2024, 3, 1), date(2024, 3, 31), "food")
    assert report.total_income == 0.0
    assert report.total_expense == 500.0
    assert [t.id for t in report.transactions] == [1]


def test_run_report_end_date_is_inclusive():
    report = run_report(make_sample(), end=date(2024, 3, 31))
    assert [t.id for t in report.transactions] == [1, 2, 3]


def test_run_report_inverted_range():
    with pytest.raises(ValidationError):
        run_report(make_sample(), date(2024, 4, 1), date(2024, 3, 1))


def test_safe_run_report_returns_zeroed_report_on_error():
    report, error = safe_run_report(make_sample(), date(2024, 4, 1), date(2024, 3, 1), "all")
    assert isinstance(error, ValidationError)
    assert report is EMPTY_REPORT
    assert report.total_income == 0 and report.total_expense == 0
    assert report.is_empty


def test_empty_report():
    report, error = safe_run_report(())
    assert error is None
    assert report.is_empty
    assert expense_breakdown(report) == {}


def test_expense_breakdown():
    report = run_report(make_sample(), category="all")
    assert expense_breakdown(report) == {"food": 500.0, "Transport": 120.0, "Food": 80.0}
