"""Port for reading and writing the user's budget records."""

from typing import Protocol

from src.domain.models.records import (
    FixedExpenseRecord,
    IncomeRecord,
    NewFixedExpense,
    NewIncome,
    NewSaving,
    NewTransaction,
    RecordUpdate,
    SavingRecord,
    TransactionRecord,
)


class RecordStorePort(Protocol):
    """Port exposing per-kind list, create and update operations.

    Implementations raise RecordWriteError when a write fails.
    """

    def list_transactions(self) -> list[TransactionRecord]:
        """Return the user's one-off transactions."""

    def list_incomes(self) -> list[IncomeRecord]:
        """Return the user's recurring incomes."""

    def list_fixed_expenses(self) -> list[FixedExpenseRecord]:
        """Return the user's fixed expenses."""

    def list_savings(self) -> list[SavingRecord]:
        """Return the user's savings."""

    def create_transaction(self, payload: NewTransaction) -> TransactionRecord:
        """Persist a new one-off transaction."""

    def create_income(self, payload: NewIncome) -> IncomeRecord:
        """Persist a new income."""

    def create_fixed_expense(
        self,
        payload: NewFixedExpense,
    ) -> FixedExpenseRecord:
        """Persist a new fixed expense."""

    def create_saving(self, payload: NewSaving) -> SavingRecord:
        """Persist a new saving."""

    def update_income(
        self,
        record_id: str,
        changes: RecordUpdate,
    ) -> IncomeRecord:
        """Write a new amount and notes to an income."""

    def update_fixed_expense(
        self,
        record_id: str,
        changes: RecordUpdate,
    ) -> FixedExpenseRecord:
        """Write a new amount and notes to a fixed expense."""

    def update_saving(
        self,
        record_id: str,
        changes: RecordUpdate,
    ) -> SavingRecord:
        """Write a new amount and notes to a saving."""


__all__ = ["RecordStorePort"]
