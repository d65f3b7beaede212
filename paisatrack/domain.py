from dataclasses import dataclass
from datetime import date
from enum import Enum


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    id: int                 # creation timestamp in ms, also the "recent" sort key
    date: date
    type: TransactionType
    amount: float           # always positive, the sign comes from type
    category: str
    description: str = ""

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @property
    def signed_amount(self) -> float:
        return self.amount if self.is_income else -self.amount


# Monthly spending ceiling for one category
@dataclass(frozen=True)
class Budget:
    id: int
    category: str
    limit: float
    month: str  # "YYYY-MM"
