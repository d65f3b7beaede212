"""Plotly figures for the dashboard and report pages.

Builders return None when there is nothing to plot so the page can show a
placeholder instead of an empty chart.
"""

from typing import Dict, Optional, Sequence

import plotly.express as px
import plotly.graph_objects as go

from paisatrack.aggregates import MonthFlow

PIE_COLORS = ["#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#9966FF", "#FF9F40", "#E7E9ED"]
INCOME_COLOR = "#00bfa5"
EXPENSE_COLOR = "#ff5252"


class ChartHolder:
    """Keeps the last figure drawn for each named slot, replacing it on redraw."""

    def __init__(self):
        self._figures: Dict[str, go.Figure] = {}

    def replace(self, slot: str, fig: Optional[go.Figure]) -> Optional[go.Figure]:
        if fig is None:
            self._figures.pop(slot, None)
        else:
            self._figures[slot] = fig
        return fig

    def get(self, slot: str) -> Optional[go.Figure]:
        return self._figures.get(slot)


def category_pie(
    totals: Dict[str, float], title: str = "Expense by Category", symbol: str = "₹"
) -> Optional[go.Figure]:
    if not totals or all(v == 0 for v in totals.values()):
        return None
    fig = px.pie(
        names=list(totals.keys()),
        values=list(totals.values()),
        title=title,
        color_discrete_sequence=PIE_COLORS,
    )
    fig.update_traces(hovertemplate=f"%{{label}}: {symbol} %{{value:,.2f}}<extra></extra>")
    fig.update_layout(legend=dict(orientation="v"), margin=dict(t=40, b=10, l=10, r=10))
    return fig


def cash_flow_bar(flows: Sequence[MonthFlow], symbol: str = "₹") -> Optional[go.Figure]:
    if all(f.income == 0 and f.expense == 0 for f in flows):
        return None
    labels = [f.label for f in flows]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=[f.income for f in flows], name="Income", marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(x=labels, y=[f.expense for f in flows], name="Expense", marker_color=EXPENSE_COLOR))
    fig.update_layout(
        barmode="group",
        yaxis=dict(rangemode="tozero", tickprefix=f"{symbol} ", tickformat=",.2f"),
        margin=dict(t=30, b=10, l=10, r=10),
    )
    return fig
