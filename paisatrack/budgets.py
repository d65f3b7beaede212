from dataclasses import dataclass
from datetime import date
from typing import Iterable, Tuple

from paisatrack.dates import month_key
from paisatrack.domain import Budget, Transaction
from paisatrack.errors import NotFoundError, ValidationError
from paisatrack.filters import all_of, by_category, in_month
from paisatrack.functional import safe_budget
from paisatrack.transforms import remove_budget_by_id
from paisatrack.aggregates import category_totals

WARNING_PERCENT = 70
DANGER_PERCENT = 90


@dataclass(frozen=True)
class BudgetStatus:
    budget: Budget
    spent: float
    remaining: float     # negative once the limit is exceeded
    percentage: float    # clamped to 100
    stale: bool          # budget.month differs from the evaluated month

    @property
    def limit(self) -> float:
        return self.budget.limit

    @property
    def overspent(self) -> bool:
        return self.remaining < 0

    @property
    def display_remaining(self) -> float:
        return abs(self.remaining)

    @property
    def level(self) -> str:
        if self.percentage > DANGER_PERCENT:
            return "danger"
        if self.percentage > WARNING_PERCENT:
            return "warning"
        return "ok"


def spent_in_month(trans: Iterable[Transaction], category: str, year: int, month: int) -> float:
    totals = category_totals(trans, all_of(by_category(category), in_month(year, month)))
    return sum(totals.values())


def evaluate(budget: Budget, trans: Iterable[Transaction], now: date) -> BudgetStatus:
    """Compare a budget against expenses of ``now``'s calendar month.

    The budget's own ``month`` is not used to pick transactions; ``stale``
    marks budgets whose month is not the evaluated one.
    """
    spent = spent_in_month(trans, budget.category, now.year, now.month)
    remaining = budget.limit - spent
    if budget.limit <= 0:
        percentage = 100.0
    else:
        percentage = min(100.0, spent / budget.limit * 100)
    return BudgetStatus(
        budget=budget,
        spent=spent,
        remaining=remaining,
        percentage=percentage,
        stale=budget.month != month_key(now),
    )


def is_duplicate(budgets: Iterable[Budget], category: str, month: str) -> bool:
    # exact category spelling, unlike matching against transactions
    return any(b.category == category and b.month == month for b in budgets)


def add_budget(budgets: Tuple[Budget, ...], budget: Budget) -> Tuple[Budget, ...]:
    if is_duplicate(budgets, budget.category, budget.month):
        raise ValidationError(
            f"Budget for '{budget.category}' for this month already exists."
        )
    return budgets + (budget,)


def remove_budget(budgets: Tuple[Budget, ...], budget_id: int) -> Tuple[Budget, ...]:
    if safe_budget(budgets, budget_id).is_none():
        raise NotFoundError("Budget not found.")
    return remove_budget_by_id(budgets, budget_id)
