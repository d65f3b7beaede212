from datetime import date

import pytest

from paisatrack.domain import Budget, Transaction, TransactionType


def make_tx(id, type, amount, category, d, description=""):
    return Transaction(
        id=id,
        date=d,
        type=TransactionType(type),
        amount=amount,
        category=category,
        description=description or category,
    )


@pytest.fixture
def march_trans():
    return (
        make_tx(1, "expense", 500.0, "food", date(2024, 3, 1), "Groceries"),
        make_tx(2, "income", 2000.0, "salary", date(2024, 3, 5), "March salary"),
    )


@pytest.fixture
def food_budget():
    return Budget(id=10, category="food", limit=400.0, month="2024-03")
