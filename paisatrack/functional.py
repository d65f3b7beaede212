import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, TypeVar

from paisatrack.dates import parse_month
from paisatrack.domain import Budget, Transaction, TransactionType
from paisatrack.errors import DateParseError, ValidationError

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    @abstractmethod
    def unwrap(self) -> T:
        """Return the value, or raise the error if it is an exception."""

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def is_right(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self._value

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def is_right(self) -> bool:
        return False

    def unwrap(self) -> T:
        if isinstance(self._error, BaseException):
            raise self._error
        raise ValueError(self._error)

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def safe_budget(budgets: Iterable[Budget], budget_id: int) -> Maybe[Budget]:
    for b in budgets:
        if b.id == budget_id:
            return Some(b)
    return Nothing()


def safe_transaction(trans: Iterable[Transaction], tid: int) -> Maybe[Transaction]:
    for t in trans:
        if t.id == tid:
            return Some(t)
    return Nothing()


def _positive_number(value: Any) -> Either[ValidationError, float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return Left(ValidationError(f"Amount {value!r} is not a number."))
    if not math.isfinite(number) or number <= 0:
        return Left(ValidationError("Amount must be greater than zero."))
    return Right(number)


def _non_blank(value: Any, message: str) -> Either[ValidationError, str]:
    if not isinstance(value, str) or not value.strip():
        return Left(ValidationError(message))
    return Right(value.strip())


def validate_transaction_input(
    tx_type: Any, amount: Any, category: Any, description: Any
) -> Either[ValidationError, dict]:
    """Check a transaction form submission; Right carries the cleaned fields."""
    try:
        kind = TransactionType(tx_type)
    except ValueError:
        return Left(ValidationError(f"Unknown transaction type {tx_type!r}."))

    invalid = ValidationError("Please enter a valid amount and description.")
    checked_amount = _positive_number(amount)
    if checked_amount.is_left():
        return Left(invalid)
    checked_description = _non_blank(description, str(invalid))
    if checked_description.is_left():
        return checked_description

    return (
        _non_blank(category, "Please select a category.")
        .map(lambda cat: {
            "type": kind,
            "amount": checked_amount.unwrap(),
            "category": cat,
            "description": checked_description.unwrap(),
        })
    )


def validate_budget_input(
    category: Any, limit: Any, month: Any
) -> Either[ValidationError, dict]:
    invalid = ValidationError("Please select a category and enter a valid limit.")
    checked_limit = _positive_number(limit)
    checked_category = _non_blank(category, str(invalid))
    if checked_limit.is_left() or checked_category.is_left():
        return Left(invalid)
    try:
        parse_month(month)
    except DateParseError as e:
        return Left(ValidationError(str(e)))
    return Right({
        "category": checked_category.unwrap(),
        "limit": checked_limit.unwrap(),
        "month": month,
    })
