from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Sequence, Tuple

from paisatrack.aggregates import category_totals, range_filter, type_totals
from paisatrack.domain import Transaction
from paisatrack.errors import ValidationError
from paisatrack.filters import ALL_CATEGORIES


@dataclass(frozen=True)
class Report:
    total_income: float = 0.0
    total_expense: float = 0.0
    transactions: Tuple[Transaction, ...] = field(default_factory=tuple)

    @property
    def net_flow(self) -> float:
        return self.total_income - self.total_expense

    @property
    def is_empty(self) -> bool:
        return not self.transactions


EMPTY_REPORT = Report()


def run_report(
    trans: Sequence[Transaction],
    start: Optional[date] = None,
    end: Optional[date] = None,
    category: str = ALL_CATEGORIES,
) -> Report:
    filtered = range_filter(trans, start, end, category)
    totals = type_totals(filtered)
    return Report(
        total_income=totals.income,
        total_expense=totals.expense,
        transactions=tuple(filtered),
    )


def safe_run_report(
    trans: Sequence[Transaction],
    start: Optional[date] = None,
    end: Optional[date] = None,
    category: str = ALL_CATEGORIES,
) -> Tuple[Report, Optional[ValidationError]]:
    """Like run_report but returns a zeroed report alongside a validation error."""
    try:
        return run_report(trans, start, end, category), None
    except ValidationError as e:
        return EMPTY_REPORT, e


def expense_breakdown(report: Report) -> Dict[str, float]:
    return category_totals(report.transactions)
