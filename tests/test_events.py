from datetime import date

from paisatrack.domain import Budget
from paisatrack.events import (
    NOTIFICATION, TRANSACTION_ADDED,
    Event, EventBus, Notification, NotificationLog, check_budget_handler,
)
from conftest import make_tx


def test_event_bus_subscribe_and_publish():
    bus = EventBus()
    seen = []

    def handler(event: Event, payload: dict) -> dict:
        seen.append(event.name)
        return {"processed": True}

    bus.subscribe(TRANSACTION_ADDED, handler)
    assert bus.publish(TRANSACTION_ADDED, {"amount": 50}) == [{"processed": True}]
    assert seen == [TRANSACTION_ADDED]

    bus.unsubscribe(TRANSACTION_ADDED, handler)
    assert bus.publish(TRANSACTION_ADDED, {}) == []


def test_publish_without_subscribers():
    assert EventBus().publish("NOBODY", {}) == []


def test_notification_log_collects_and_drains():
    bus = EventBus()
    log = NotificationLog()
    bus.subscribe(NOTIFICATION, log)
    bus.notify("saved")
    bus.notify("broken", is_error=True)
    assert log.drain() == [Notification("saved", False), Notification("broken", True)]
    assert log.drain() == []


def _payload(new_tx, trans, budgets, today):
    return {"transaction": new_tx, "transactions": trans, "budgets": budgets, "today": today}


def test_check_budget_handler_alerts_when_crossing_limit():
    today = date(2024, 3, 10)
    old = make_tx(1, "expense", 300.0, "food", date(2024, 3, 1))
    new = make_tx(2, "expense", 200.0, "Food", today)
    budgets = (Budget(9, "food", 400.0, "2024-03"),)
    event = Event(TRANSACTION_ADDED, "", {})

    result = check_budget_handler(event, _payload(new, (old, new), budgets, today))
    assert result["category"] == "food"
    assert result["spent"] == 500.0
    assert "Budget exceeded" in result["alert"]


def test_check_budget_handler_only_alerts_once():
    today = date(2024, 3, 10)
    first = make_tx(1, "expense", 500.0, "food", date(2024, 3, 1))
    second = make_tx(2, "expense", 20.0, "food", today)
    budgets = (Budget(9, "food", 400.0, "2024-03"),)
    event = Event(TRANSACTION_ADDED, "", {})
    assert check_budget_handler(event, _payload(second, (first, second), budgets, today)) == {}


def test_check_budget_handler_ignores_income_and_unbudgeted():
    today = date(2024, 3, 10)
    event = Event(TRANSACTION_ADDED, "", {})
    income = make_tx(1, "income", 5000.0, "food", today)
    assert check_budget_handler(event, _payload(income, (income,), (Budget(9, "food", 1.0, "2024-03"),), today)) == {}
    rent = make_tx(2, "expense", 5000.0, "rent", today)
    assert check_budget_handler(event, _payload(rent, (rent,), (Budget(9, "food", 1.0, "2024-03"),), today)) == {}
