"""Facades used by the presentation layer.

Each write validates first and only then touches the store, so a rejected
submission never leaves a partial write behind. Outcomes are reported on the
event bus as notifications; errors are also re-raised to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple

from paisatrack.aggregates import (
    MonthFlow,
    MonthTotals,
    category_totals,
    monthly_totals,
    net_balance,
    recent,
    rolling_months,
)
from paisatrack.budgets import BudgetStatus, add_budget, evaluate, remove_budget
from paisatrack.dates import month_key
from paisatrack.domain import Budget, Transaction
from paisatrack.errors import NotFoundError, ValidationError
from paisatrack.events import (
    BUDGET_ADDED,
    BUDGET_DELETED,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    EventBus,
)
from paisatrack.filters import in_month
from paisatrack.functional import safe_transaction, validate_budget_input, validate_transaction_input
from paisatrack.reports import Report, safe_run_report
from paisatrack.store import Store
from paisatrack.transforms import add_transaction, next_id, remove_transaction

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _timestamp_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


@dataclass(frozen=True)
class Dashboard:
    balance: float
    month: MonthTotals
    category_totals: Dict[str, float]
    cash_flow: List[MonthFlow]
    recent: List[Transaction]

    @property
    def net_savings(self) -> float:
        return self.month.net


class TransactionService:
    """Record, delete and summarise transactions."""

    def __init__(self, store: Store, bus: EventBus, clock: Clock = datetime.now):
        self.store = store
        self.bus = bus
        self.clock = clock

    def list(self) -> Tuple[Transaction, ...]:
        return self.store.load_transactions()

    def add(self, tx_type, amount, category, description) -> Transaction:
        checked = validate_transaction_input(tx_type, amount, category, description)
        if checked.is_left():
            error = checked.get_error()
            logger.warning("transaction rejected: %s", error)
            self.bus.notify(f"❌ {error}", is_error=True)
            raise error
        fields = checked.unwrap()

        trans = self.store.load_transactions()
        budgets = self.store.load_budgets()
        now = self.clock()
        t = Transaction(
            id=next_id((x.id for x in trans), _timestamp_ms(now)),
            date=now.date(),
            **fields,
        )
        trans = add_transaction(trans, t)
        self.store.save_transactions(trans)
        logger.info("recorded %s %s in %s (id=%d)", t.type.value, t.amount, t.category, t.id)

        results = self.bus.publish(TRANSACTION_ADDED, {
            "transaction": t,
            "transactions": trans,
            "budgets": budgets,
            "today": now.date(),
        })
        self.bus.notify(f"✅ Transaction Recorded: {t.description}")
        for result in results:
            if "alert" in result:
                self.bus.notify(f"⚠️ {result['alert']}", is_error=True)
        return t

    def delete(self, tid: int) -> None:
        trans = self.store.load_transactions()
        if safe_transaction(trans, tid).is_none():
            logger.warning("transaction %s not found", tid)
            self.bus.notify("Transaction not found.", is_error=True)
            raise NotFoundError(f"Transaction {tid} not found.")
        self.store.save_transactions(remove_transaction(trans, tid))
        logger.info("deleted transaction %d", tid)
        self.bus.publish(TRANSACTION_DELETED, {"id": tid})
        self.bus.notify("Transaction deleted successfully.")

    def dashboard(self, today: Optional[date] = None, months: int = 6, recent_limit: int = 5) -> Dashboard:
        today = today or self.clock().date()
        trans = self.store.load_transactions()
        return Dashboard(
            balance=net_balance(trans),
            month=monthly_totals(trans, today.year, today.month),
            category_totals=category_totals(trans, in_month(today.year, today.month)),
            cash_flow=rolling_months(trans, months, today),
            recent=recent(trans, recent_limit),
        )


class BudgetService:
    """Create, delete and evaluate monthly category budgets."""

    def __init__(self, store: Store, bus: EventBus, clock: Clock = datetime.now):
        self.store = store
        self.bus = bus
        self.clock = clock

    def list(self) -> Tuple[Budget, ...]:
        return self.store.load_budgets()

    def add(self, category, limit, month: Optional[str] = None) -> Budget:
        now = self.clock()
        month = month or month_key(now.date())
        checked = validate_budget_input(category, limit, month)
        try:
            fields = checked.unwrap()
            budgets = self.store.load_budgets()
            b = Budget(id=next_id((x.id for x in budgets), _timestamp_ms(now)), **fields)
            budgets = add_budget(budgets, b)
        except ValidationError as e:
            logger.warning("budget rejected: %s", e)
            self.bus.notify(f"❌ {e}", is_error=True)
            raise

        self.store.save_budgets(budgets)
        logger.info("added budget %s for %s (id=%d)", b.category, b.month, b.id)
        self.bus.publish(BUDGET_ADDED, {"budget": b})
        self.bus.notify(f"✅ Budget for {b.category} added successfully!")
        return b

    def delete(self, budget_id: int) -> None:
        budgets = self.store.load_budgets()
        try:
            remaining = remove_budget(budgets, budget_id)
        except NotFoundError as e:
            logger.warning("budget %s not found", budget_id)
            self.bus.notify(str(e), is_error=True)
            raise
        self.store.save_budgets(remaining)
        logger.info("deleted budget %d", budget_id)
        self.bus.publish(BUDGET_DELETED, {"id": budget_id})
        self.bus.notify("Budget deleted successfully.")

    def statuses(self, today: Optional[date] = None) -> List[BudgetStatus]:
        today = today or self.clock().date()
        trans = self.store.load_transactions()
        return [evaluate(b, trans, today) for b in self.store.load_budgets()]


class ReportService:
    """Ad-hoc date range and category reports."""

    def __init__(self, store: Store, bus: EventBus):
        self.store = store
        self.bus = bus

    def run(self, start: Optional[date] = None, end: Optional[date] = None,
            category: str = "all", announce: bool = True) -> Report:
        """Return the report, or a zeroed one after notifying a validation error."""
        report, error = safe_run_report(self.store.load_transactions(), start, end, category)
        if error is not None:
            logger.warning("report rejected: %s", error)
            self.bus.notify(f"❌ {error}", is_error=True)
            return report

        if announce:
            if report.is_empty:
                self.bus.notify("No transactions found matching your criteria.", is_error=True)
            else:
                self.bus.notify(
                    f"Report generated successfully! Showing {len(report.transactions)} transactions."
                )
        return report

    def categories(self) -> List[str]:
        names = {t.category for t in self.store.load_transactions()}
        names.update(b.category for b in self.store.load_budgets())
        return sorted(names, key=str.lower)
