from datetime import date

import pytest

from paisatrack.budgets import add_budget, evaluate, is_duplicate, remove_budget, spent_in_month
from paisatrack.domain import Budget
from paisatrack.errors import NotFoundError, ValidationError
from conftest import make_tx


def test_evaluate_overspent_is_clamped(march_trans, food_budget):
    status = evaluate(food_budget, march_trans, date(2024, 3, 20))
    assert status.limit == 400.0
    assert status.spent == 500.0
    assert status.percentage == 100.0
    assert status.remaining == -100.0
    assert status.display_remaining == 100.0
    assert status.overspent is True
    assert status.level == "danger"
    assert status.stale is False


def test_evaluate_uses_current_month_not_budget_month(march_trans):
    budget = Budget(id=1, category="food", limit=1000.0, month="2024-01")
    in_march = evaluate(budget, march_trans, date(2024, 3, 2))
    assert in_march.spent == 500.0
    assert in_march.stale is True

    in_april = evaluate(budget, march_trans, date(2024, 4, 2))
    assert in_april.spent == 0.0
    assert in_april.remaining == 1000.0
    assert in_april.percentage == 0.0


def test_evaluate_category_is_case_insensitive():
    trans = (
        make_tx(1, "expense", 100.0, "Food", date(2024, 3, 1)),
        make_tx(2, "expense", 50.0, "FOOD", date(2024, 3, 2)),
        make_tx(3, "income", 999.0, "food", date(2024, 3, 3)),
        make_tx(4, "expense", 70.0, "rent", date(2024, 3, 3)),
    )
    status = evaluate(Budget(1, "food", 200.0, "2024-03"), trans, date(2024, 3, 31))
    assert status.spent == 150.0
    assert status.percentage == 75.0
    assert status.level == "warning"
    assert status.overspent is False


def test_evaluate_non_positive_limit_uses_sentinel():
    status = evaluate(Budget(1, "food", 0.0, "2024-03"), (), date(2024, 3, 1))
    assert status.percentage == 100.0


def test_evaluate_with_no_transactions():
    status = evaluate(Budget(1, "food", 400.0, "2024-03"), (), date(2024, 3, 1))
    assert status.spent == 0.0
    assert status.remaining == 400.0
    assert status.level == "ok"


def test_spent_in_month_other_year_ignored():
    trans = (make_tx(1, "expense", 100.0, "food", date(2023, 3, 1)),)
    assert spent_in_month(trans, "food", 2024, 3) == 0.0


def test_duplicate_budget_is_rejected(food_budget):
    budgets = (food_budget,)
    dup = Budget(id=11, category="food", limit=999.0, month="2024-03")
    with pytest.raises(ValidationError):
        add_budget(budgets, dup)
    assert budgets == (food_budget,)


def test_duplicate_check_is_case_sensitive_and_per_month(food_budget):
    budgets = (food_budget,)
    assert is_duplicate(budgets, "food", "2024-03")
    assert not is_duplicate(budgets, "Food", "2024-03")
    assert not is_duplicate(budgets, "food", "2024-04")
    added = add_budget(budgets, Budget(id=12, category="food", limit=1.0, month="2024-04"))
    assert len(added) == 2


def test_remove_budget(food_budget):
    assert remove_budget((food_budget,), food_budget.id) == ()
    with pytest.raises(NotFoundError):
        remove_budget((food_budget,), 12345)
