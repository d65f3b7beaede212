import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import streamlit as st
import pandas as pd

from paisatrack.charts import ChartHolder, cash_flow_bar, category_pie
from paisatrack.config import load_settings
from paisatrack.dates import format_date, month_key
from paisatrack.domain import TransactionType
from paisatrack.errors import NotFoundError, ParseError, ValidationError
from paisatrack.events import NOTIFICATION, EventBus, NotificationLog, register_default_handlers
from paisatrack.formatting import format_currency, format_signed, transaction_label
from paisatrack.reports import expense_breakdown
from paisatrack.services import BudgetService, ReportService, TransactionService
from paisatrack.store import open_store

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="PaisaTrack", layout="wide")

settings = load_settings()
symbol = settings.currency_symbol
store = open_store(settings)

if "bus" not in st.session_state:
    bus = EventBus()
    log = NotificationLog()
    bus.subscribe(NOTIFICATION, log)
    register_default_handlers(bus)
    st.session_state.bus = bus
    st.session_state.notifications = log
    st.session_state.charts = ChartHolder()

bus = st.session_state.bus
charts = st.session_state.charts
tx_svc = TransactionService(store, bus)
budget_svc = BudgetService(store, bus)
report_svc = ReportService(store, bus)


def money(amount):
    return format_currency(amount, symbol)


def show_notifications():
    for n in st.session_state.notifications.drain():
        st.toast(n.message, icon="🚫" if n.is_error else "✅")


def tx_to_df(tx_list):
    rows = [
        {
            "ID": t.id,
            "Date": format_date(t.date),
            "Description": t.description,
            "Category": t.category,
            "Type": t.type.value,
            "Amount": format_signed(t.amount, t.type, symbol),
        }
        for t in tx_list
    ]
    return pd.DataFrame(rows, columns=["ID", "Date", "Description", "Category", "Type", "Amount"])


def draw(slot, fig, placeholder):
    fig = charts.replace(slot, fig)
    if fig is None:
        st.info(placeholder)
    else:
        st.plotly_chart(fig, use_container_width=True)


show_notifications()

menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "🧾 Transactions", "🎯 Budgets", "📑 Reports"]
)

try:
    if menu == "🏠 Dashboard":
        st.title("🏠 Dashboard")
        dash = tx_svc.dashboard(months=settings.cash_flow_months, recent_limit=settings.recent_limit)

        k1, k2, k3, k4 = st.columns(4)
        with k1:
            st.metric("Total Balance", money(dash.balance))
        with k2:
            st.metric("Monthly Income", money(dash.month.income))
        with k3:
            st.metric("Monthly Expense", money(dash.month.expense))
        with k4:
            st.metric("Net Savings", money(dash.net_savings))

        col_pie, col_bar = st.columns(2)
        with col_pie:
            st.subheader("Expenses this month")
            draw("dashboard_pie", category_pie(dash.category_totals, symbol=symbol),
                 "No Expense Data this Month.")
        with col_bar:
            st.subheader(f"Cash flow, last {settings.cash_flow_months} months")
            draw("dashboard_bar", cash_flow_bar(dash.cash_flow, symbol=symbol),
                 f"No Cash Flow Data in the last {settings.cash_flow_months} months.")

        st.subheader("Recent Transactions")
        if dash.recent:
            for t in dash.recent:
                icon = "🟢" if t.type is TransactionType.INCOME else "🔴"
                st.markdown(f"{icon} {t.description} — **{format_signed(t.amount, t.type, symbol)}**")
        else:
            st.info("No recent transactions recorded.")

    elif menu == "🧾 Transactions":
        st.title("🧾 Transactions")

        with st.form("transaction_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            with col1:
                tx_type = st.selectbox("Type", [t.value for t in TransactionType])
                amount = st.number_input("Amount", min_value=0.0, step=100.0, format="%.2f")
            with col2:
                category = st.text_input("Category")
                description = st.text_input("Description")
            submitted = st.form_submit_button("Add Transaction")

        if submitted:
            try:
                tx_svc.add(tx_type, amount, category, description)
            except ValidationError:
                pass  # already reported as a notification
            st.rerun()

        st.subheader("History")
        trans = sorted(tx_svc.list(), key=lambda t: t.id, reverse=True)
        if trans:
            st.dataframe(tx_to_df(trans), use_container_width=True, hide_index=True)
            with st.expander("Delete a transaction"):
                options = {transaction_label(t, symbol): t.id for t in trans}
                choice = st.selectbox("Transaction", list(options.keys()))
                if st.button("🗑 Delete", key="btn_delete_tx"):
                    try:
                        tx_svc.delete(options[choice])
                    except NotFoundError:
                        pass
                    st.rerun()
        else:
            st.info("No transactions recorded yet.")

    elif menu == "🎯 Budgets":
        st.title("🎯 Budgets")

        with st.form("budget_form", clear_on_submit=True):
            col1, col2, col3 = st.columns(3)
            with col1:
                category = st.text_input("Category")
            with col2:
                limit = st.number_input("Monthly limit", min_value=0.0, step=500.0, format="%.2f")
            with col3:
                month = st.text_input("Month (YYYY-MM)", value=month_key(pd.Timestamp.today().date()))
            submitted = st.form_submit_button("Add Budget")

        if submitted:
            try:
                budget_svc.add(category, limit, month)
            except ValidationError:
                pass
            st.rerun()

        statuses = budget_svc.statuses()
        if not statuses:
            st.info("No active budgets. Add one above.")
        cols = st.columns(3)
        for idx, status in enumerate(statuses):
            b = status.budget
            with cols[idx % 3]:
                with st.container(border=True):
                    badge = {"ok": "🟢", "warning": "🟠", "danger": "🔴"}[status.level]
                    st.markdown(f"{badge} **{b.category.title()}** · {b.month}")
                    if status.stale:
                        st.caption("Evaluated against the current month's spending.")
                    st.write(f"Limit: {money(status.limit)}")
                    st.write(f"Spent: {money(status.spent)}")
                    st.progress(status.percentage / 100)
                    if status.overspent:
                        st.error(f"Over budget by {money(status.display_remaining)}")
                    else:
                        st.success(f"Remaining: {money(status.display_remaining)}")
                    if st.button("🗑 Delete", key=f"del_budget_{b.id}"):
                        try:
                            budget_svc.delete(b.id)
                        except NotFoundError:
                            pass
                        st.rerun()

    elif menu == "📑 Reports":
        st.title("📑 Reports")

        with st.form("report_form"):
            col1, col2, col3 = st.columns(3)
            with col1:
                start = st.date_input("Start Date", value=None)
            with col2:
                end = st.date_input("End Date", value=None)
            with col3:
                category = st.selectbox("Category", ["all"] + report_svc.categories())
            submitted = st.form_submit_button("Run Report")

        if submitted:
            report = report_svc.run(start, end, category)
            show_notifications()
        else:
            report = report_svc.run(announce=False)

        k1, k2, k3 = st.columns(3)
        k1.metric("Income", money(report.total_income))
        k2.metric("Expense", money(report.total_expense))
        k3.metric("Net Flow", money(report.net_flow),
                  delta="surplus" if report.net_flow >= 0 else "deficit",
                  delta_color="normal" if report.net_flow >= 0 else "inverse")

        draw("report_pie", category_pie(expense_breakdown(report), symbol=symbol),
             "No expense data found in the selected filter range.")

        if not report.is_empty:
            df = tx_to_df(report.transactions)
            st.dataframe(df, use_container_width=True, hide_index=True)
            st.download_button("⬇ Download CSV", df.to_csv(index=False),
                               file_name="report.csv", mime="text/csv")

except ParseError as e:
    st.error(f"Stored data could not be read: {e}")
    st.stop()
