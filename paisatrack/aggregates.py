"""Aggregations that turn the flat transaction list into dashboard and report figures.

Every function is a single pass over an in-memory sequence. Empty input is a
valid case and yields zero totals or empty collections.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from functools import reduce
from typing import Dict, Iterable, List, Optional, Sequence

from paisatrack.dates import month_label, shift_month
from paisatrack.domain import Transaction
from paisatrack.errors import ValidationError
from paisatrack.filters import (
    ALL_CATEGORIES,
    Predicate,
    all_of,
    by_category,
    by_date_range,
    in_month,
    iter_transactions,
)


@dataclass(frozen=True)
class MonthTotals:
    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass(frozen=True)
class MonthFlow:
    label: str   # e.g. "Aug 2023"
    year: int
    month: int
    income: float = 0.0
    expense: float = 0.0


def type_totals(trans: Iterable[Transaction]) -> MonthTotals:
    income = 0.0
    expense = 0.0
    for t in trans:
        if t.is_income:
            income += t.amount
        elif t.is_expense:
            expense += t.amount
    return MonthTotals(income=income, expense=expense)


def monthly_totals(trans: Iterable[Transaction], year: int, month: int) -> MonthTotals:
    return type_totals(iter_transactions(trans, in_month(year, month)))


def category_totals(
    trans: Iterable[Transaction], pred: Optional[Predicate] = None
) -> Dict[str, float]:
    """Sum expense amounts per category among transactions matching ``pred``.

    Keys keep the spelling of the first transaction seen for that category.
    Categories with no matching expenses are absent rather than zero.
    """
    totals: Dict[str, float] = defaultdict(float)
    for t in iter_transactions(trans, pred):
        if t.is_expense:
            totals[t.category] += t.amount
    return dict(totals)


def rolling_months(
    trans: Iterable[Transaction], count: int, anchor: date
) -> List[MonthFlow]:
    """Income/expense per month for ``count`` months ending at ``anchor``'s month, oldest first."""
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")

    months = [shift_month(anchor.year, anchor.month, -i) for i in range(count)]
    months.reverse()
    buckets = {ym: [0.0, 0.0] for ym in months}

    for t in trans:
        bucket = buckets.get((t.date.year, t.date.month))
        if bucket is None:
            continue
        if t.is_income:
            bucket[0] += t.amount
        else:
            bucket[1] += t.amount

    return [
        MonthFlow(label=month_label(y, m), year=y, month=m, income=inc, expense=exp)
        for (y, m), (inc, exp) in buckets.items()
    ]


def net_balance(trans: Iterable[Transaction]) -> float:
    return reduce(lambda acc, t: acc + t.signed_amount, trans, 0.0)


def range_filter(
    trans: Sequence[Transaction],
    start: Optional[date] = None,
    end: Optional[date] = None,
    category: str = ALL_CATEGORIES,
) -> List[Transaction]:
    """Inclusive date range plus optional case-insensitive category filter.

    Raises ValidationError when ``start`` is after ``end``.
    """
    if start is not None and end is not None and start > end:
        raise ValidationError("Start Date cannot be after End Date.")
    category = category or ALL_CATEGORIES
    pred = all_of(by_date_range(start, end), by_category(category))
    return list(iter_transactions(trans, pred))


def recent(trans: Iterable[Transaction], limit: int = 5) -> List[Transaction]:
    return sorted(trans, key=lambda t: t.id, reverse=True)[: max(0, limit)]
