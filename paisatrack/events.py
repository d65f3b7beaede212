from datetime import date, datetime
from typing import Callable, Dict, List, NamedTuple

from paisatrack.budgets import evaluate
from paisatrack.dates import month_key
from paisatrack.formatting import format_currency

__all__ = [
    'TRANSACTION_ADDED', 'TRANSACTION_DELETED', 'BUDGET_ADDED', 'BUDGET_DELETED',
    'NOTIFICATION', 'Event', 'EventBus', 'Notification', 'NotificationLog',
    'check_budget_handler', 'register_default_handlers',
]

TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
BUDGET_ADDED = "BUDGET_ADDED"
BUDGET_DELETED = "BUDGET_DELETED"
NOTIFICATION = "NOTIFICATION"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class Notification(NamedTuple):
    message: str
    is_error: bool = False


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []
        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) or {} for handler in list(handlers)]

    def notify(self, message: str, is_error: bool = False) -> None:
        self.publish(NOTIFICATION, {"notification": Notification(message, is_error)})


class NotificationLog:
    """Collects notifications so a page can display them after a rerun."""

    def __init__(self):
        self.items: List[Notification] = []

    def __call__(self, event: Event, payload: dict) -> dict:
        self.items.append(payload["notification"])
        return {}

    def drain(self) -> List[Notification]:
        items, self.items = self.items, []
        return items


def check_budget_handler(event: Event, payload: dict) -> dict:
    """Warn when a new expense takes its category over this month's budget.

    payload: transaction, transactions (including the new one), budgets, today
    """
    t = payload["transaction"]
    if not t.is_expense:
        return {}
    today: date = payload["today"]
    if (t.date.year, t.date.month) != (today.year, today.month):
        return {}

    wanted = t.category.lower()
    for b in payload.get("budgets", ()):
        if b.category.lower() != wanted or b.month != month_key(today):
            continue
        status = evaluate(b, payload["transactions"], today)
        if status.overspent and status.spent - t.amount <= b.limit:
            return {
                "alert": f"Budget exceeded for {b.category}: "
                         f"{format_currency(status.spent)} / {format_currency(b.limit)}",
                "category": b.category,
                "spent": status.spent,
                "limit": b.limit,
            }
    return {}


def register_default_handlers(bus: EventBus) -> None:
    bus.subscribe(TRANSACTION_ADDED, check_budget_handler)
