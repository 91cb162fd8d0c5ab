"""Domain models for budget records read from and written to the store."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Direction of a one-off transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class SavingType(str, Enum):
    """Horizon of a recurring saving."""

    SHORT = "short"
    LONG = "long"
    RISK = "risk"


@dataclass(frozen=True)
class TransactionRecord:
    """Persisted one-off transaction. Amounts are stored unsigned."""

    id: str
    description: str
    amount: Decimal
    type: TransactionType
    date: date
    notes: str | None = None
    category_id: str | None = None


@dataclass(frozen=True)
class IncomeRecord:
    """Persisted recurring monthly income."""

    id: str
    name: str
    amount: Decimal
    notes: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class FixedExpenseRecord:
    """Persisted recurring fixed expense."""

    id: str
    name: str
    amount: Decimal
    budget: Decimal
    notes: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class SavingRecord:
    """Persisted recurring saving."""

    id: str
    name: str
    amount: Decimal
    saving_type: SavingType = SavingType.SHORT
    notes: str | None = None
    is_active: bool = True


RecurringRecord = IncomeRecord | FixedExpenseRecord | SavingRecord


@dataclass(frozen=True)
class NewTransaction:
    """Payload for creating a one-off transaction."""

    description: str
    amount: Decimal
    type: TransactionType
    date: date
    notes: str | None = None
    category_id: str | None = None


@dataclass(frozen=True)
class NewIncome:
    """Payload for creating a recurring income."""

    name: str
    amount: Decimal
    notes: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class NewFixedExpense:
    """Payload for creating a fixed expense."""

    name: str
    amount: Decimal
    budget: Decimal
    notes: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class NewSaving:
    """Payload for creating a saving."""

    name: str
    amount: Decimal
    saving_type: SavingType = SavingType.SHORT
    notes: str | None = None
    is_active: bool = True


@dataclass(frozen=True)
class RecordUpdate:
    """Amount and notes written back to a matched recurring record."""

    amount: Decimal
    notes: str


@dataclass(frozen=True)
class ExistingCorpora:
    """Snapshot of the user's records used as comparison data."""

    transactions: tuple[TransactionRecord, ...] = ()
    incomes: tuple[IncomeRecord, ...] = ()
    fixed_expenses: tuple[FixedExpenseRecord, ...] = ()
    savings: tuple[SavingRecord, ...] = ()


__all__ = [
    "TransactionType",
    "SavingType",
    "TransactionRecord",
    "IncomeRecord",
    "FixedExpenseRecord",
    "SavingRecord",
    "RecurringRecord",
    "NewTransaction",
    "NewIncome",
    "NewFixedExpense",
    "NewSaving",
    "RecordUpdate",
    "ExistingCorpora",
]
