from datetime import date
from typing import Callable, Iterable, Iterator, Optional

from paisatrack.domain import Transaction

ALL_CATEGORIES = "all"

Predicate = Callable[[Transaction], bool]


def iter_transactions(
    trans: Iterable[Transaction], pred: Optional[Predicate]
) -> Iterator[Transaction]:
    for t in trans:
        if pred is None or pred(t):
            yield t


def by_category(category: str) -> Predicate:
    """Case-insensitive match; the ``"all"`` sentinel matches everything."""
    if category == ALL_CATEGORIES:
        return lambda t: True
    wanted = category.lower()

    def _filter(t: Transaction) -> bool:
        return t.category.lower() == wanted

    return _filter


def by_date_range(start: Optional[date], end: Optional[date]) -> Predicate:
    # bounds are inclusive on both ends
    def _filter(t: Transaction) -> bool:
        if start is not None and t.date < start:
            return False
        if end is not None and t.date > end:
            return False
        return True

    return _filter


def in_month(year: int, month: int) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.date.year == year and t.date.month == month

    return _filter


def all_of(*preds: Predicate) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return all(p(t) for p in preds)

    return _filter
