from datetime import date

import plotly.graph_objects as go

from paisatrack.aggregates import rolling_months
from paisatrack.charts import ChartHolder, cash_flow_bar, category_pie
from paisatrack.formatting import format_currency, format_signed, transaction_label
from paisatrack.domain import TransactionType
from conftest import make_tx


def test_category_pie_none_without_data():
    assert category_pie({}) is None
    assert category_pie({"food": 0.0}) is None


def test_category_pie_figure():
    fig = category_pie({"food": 500.0, "rent": 1200.0})
    assert isinstance(fig, go.Figure)
    assert list(fig.data[0].labels) == ["food", "rent"]
    assert list(fig.data[0].values) == [500.0, 1200.0]


def test_cash_flow_bar():
    assert cash_flow_bar(rolling_months([], 6, date(2024, 1, 1))) is None
    trans = (make_tx(1, "income", 100.0, "salary", date(2023, 12, 1)),)
    fig = cash_flow_bar(rolling_months(trans, 6, date(2024, 1, 1)))
    assert [trace.name for trace in fig.data] == ["Income", "Expense"]
    assert list(fig.data[0].x)[-2:] == ["Dec 2023", "Jan 2024"]
    assert list(fig.data[0].y)[-2] == 100.0


def test_chart_holder_replaces_per_slot():
    holder = ChartHolder()
    fig = category_pie({"food": 1.0})
    assert holder.replace("pie", fig) is fig
    assert holder.get("pie") is fig
    holder.replace("pie", None)
    assert holder.get("pie") is None


def test_format_currency():
    assert format_currency(1234567.891) == "₹ 1,234,567.89"
    assert format_currency(0) == "₹ 0.00"
    assert format_currency(5, "$") == "$ 5.00"
    assert format_signed(10, TransactionType.INCOME) == "+ ₹ 10.00"
    assert format_signed(10, TransactionType.EXPENSE) == "- ₹ 10.00"


def test_transaction_label_keeps_identical_entries_apart():
    a = make_tx(1, "expense", 50.0, "food", date(2024, 3, 1), "Tea")
    b = make_tx(2, "expense", 50.0, "food", date(2024, 3, 1), "Tea")
    assert transaction_label(a) == "#1 · 01/03/2024 · Tea · ₹ 50.00"
    assert transaction_label(a) != transaction_label(b)
