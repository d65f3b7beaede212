import math
from numbers import Real
from typing import Any, Mapping, Tuple

from paisatrack.dates import format_date, parse_date, parse_month
from paisatrack.domain import Budget, Transaction, TransactionType
from paisatrack.errors import ParseError

TRANSACTION_FIELDS = ("id", "date", "type", "amount", "category", "description")
BUDGET_FIELDS = ("id", "category", "limit", "month")


def _require(record: Mapping[str, Any], fields: Tuple[str, ...]) -> None:
    if not isinstance(record, Mapping):
        raise ParseError(f"Expected a mapping, got {type(record).__name__}")
    missing = [f for f in fields if f not in record]
    if missing:
        raise ParseError(f"Missing field(s): {', '.join(missing)}")


def _as_id(value: Any) -> int:
    # bool is an int subclass but never a valid id
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"Invalid id {value!r}")
    return value


def _as_amount(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ParseError(f"Invalid {name} {value!r}")
    amount = float(value)
    if not math.isfinite(amount) or amount <= 0:
        raise ParseError(f"Invalid {name} {value!r}: must be a positive number")
    return amount


def _as_text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ParseError(f"Invalid {name} {value!r}")
    return value


def transaction_from_record(record: Mapping[str, Any]) -> Transaction:
    _require(record, TRANSACTION_FIELDS)
    try:
        tx_type = TransactionType(record["type"])
    except ValueError:
        raise ParseError(f"Invalid transaction type {record['type']!r}") from None
    return Transaction(
        id=_as_id(record["id"]),
        date=parse_date(record["date"]),
        type=tx_type,
        amount=_as_amount(record["amount"], "amount"),
        category=_as_text(record["category"], "category"),
        description=_as_text(record["description"], "description"),
    )


def transaction_to_record(t: Transaction) -> dict:
    return {
        "id": t.id,
        "date": format_date(t.date),
        "type": t.type.value,
        "amount": t.amount,
        "category": t.category,
        "description": t.description,
    }


def budget_from_record(record: Mapping[str, Any]) -> Budget:
    _require(record, BUDGET_FIELDS)
    month = _as_text(record["month"], "month")
    parse_month(month)
    return Budget(
        id=_as_id(record["id"]),
        category=_as_text(record["category"], "category"),
        limit=_as_amount(record["limit"], "limit"),
        month=month,
    )


def budget_to_record(b: Budget) -> dict:
    return {"id": b.id, "category": b.category, "limit": b.limit, "month": b.month}


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return trans + (t,)


def remove_transaction(
    trans: Tuple[Transaction, ...], tid: int
) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.id != tid, trans))


def remove_budget_by_id(
    budgets: Tuple[Budget, ...], bid: int
) -> Tuple[Budget, ...]:
    return tuple(filter(lambda b: b.id != bid, budgets))


def next_id(existing_ids, candidate: int) -> int:
    """Keep ids strictly increasing even if the clock stalls or goes backwards."""
    highest = max(existing_ids, default=None)
    if highest is not None and candidate <= highest:
        return highest + 1
    return candidate
