"""SQLAlchemy-backed store for transactions and recurring budget records."""

from collections.abc import Callable
from datetime import date, datetime, timezone
import uuid

from sqlalchemy import Boolean, Date, DateTime, Numeric, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.record_store import RecordStorePort
from src.domain.errors import RecordWriteError
from src.domain.models.records import (
    FixedExpenseRecord,
    IncomeRecord,
    NewFixedExpense,
    NewIncome,
    NewSaving,
    NewTransaction,
    RecordUpdate,
    SavingRecord,
    SavingType,
    TransactionRecord,
    TransactionType,
)
from src.utils.decimal_utils import coerce_decimal, to_cents

_AMOUNT = Numeric(12, 2)

CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        category_id TEXT,
        amount NUMERIC(12, 2) NOT NULL,
        type TEXT NOT NULL,
        description TEXT,
        date DATE NOT NULL,
        notes TEXT,
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS incomes (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        amount NUMERIC(12, 2) NOT NULL,
        notes TEXT,
        is_active BOOLEAN NOT NULL,
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS fixed_expenses (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        amount NUMERIC(12, 2) NOT NULL,
        budget NUMERIC(12, 2) NOT NULL,
        notes TEXT,
        is_active BOOLEAN NOT NULL,
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS savings (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        amount NUMERIC(12, 2) NOT NULL,
        type TEXT NOT NULL,
        notes TEXT,
        is_active BOOLEAN NOT NULL,
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP
    )
    """,
)

SELECT_TRANSACTIONS_SQL = text(
    """
    SELECT id, description, amount, type, date, notes, category_id
    FROM transactions
    WHERE user_id = :user_id
    ORDER BY date, created_at, id
    """
).columns(amount=_AMOUNT, date=Date)

SELECT_INCOMES_SQL = text(
    """
    SELECT id, name, amount, notes, is_active
    FROM incomes
    WHERE user_id = :user_id
    ORDER BY created_at, id
    """
).columns(amount=_AMOUNT, is_active=Boolean)

SELECT_FIXED_EXPENSES_SQL = text(
    """
    SELECT id, name, amount, budget, notes, is_active
    FROM fixed_expenses
    WHERE user_id = :user_id
    ORDER BY created_at, id
    """
).columns(amount=_AMOUNT, budget=_AMOUNT, is_active=Boolean)

SELECT_SAVINGS_SQL = text(
    """
    SELECT id, name, amount, type, notes, is_active
    FROM savings
    WHERE user_id = :user_id
    ORDER BY created_at, id
    """
).columns(amount=_AMOUNT, is_active=Boolean)

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        id, user_id, category_id, amount, type, description, date, notes,
        created_at
    )
    VALUES (
        :id, :user_id, :category_id, :amount, :type, :description, :date,
        :notes, :created_at
    )
    """
).bindparams(
    bindparam("amount", type_=_AMOUNT),
    bindparam("date", type_=Date),
    bindparam("created_at", type_=DateTime),
)

INSERT_INCOME_SQL = text(
    """
    INSERT INTO incomes (
        id, user_id, name, amount, notes, is_active, created_at
    )
    VALUES (
        :id, :user_id, :name, :amount, :notes, :is_active, :created_at
    )
    """
).bindparams(
    bindparam("amount", type_=_AMOUNT),
    bindparam("is_active", type_=Boolean),
    bindparam("created_at", type_=DateTime),
)

INSERT_FIXED_EXPENSE_SQL = text(
    """
    INSERT INTO fixed_expenses (
        id, user_id, name, amount, budget, notes, is_active, created_at
    )
    VALUES (
        :id, :user_id, :name, :amount, :budget, :notes, :is_active,
        :created_at
    )
    """
).bindparams(
    bindparam("amount", type_=_AMOUNT),
    bindparam("budget", type_=_AMOUNT),
    bindparam("is_active", type_=Boolean),
    bindparam("created_at", type_=DateTime),
)

INSERT_SAVING_SQL = text(
    """
    INSERT INTO savings (
        id, user_id, name, amount, type, notes, is_active, created_at
    )
    VALUES (
        :id, :user_id, :name, :amount, :type, :notes, :is_active,
        :created_at
    )
    """
).bindparams(
    bindparam("amount", type_=_AMOUNT),
    bindparam("is_active", type_=Boolean),
    bindparam("created_at", type_=DateTime),
)

# Table names come from this module only, never from user input.
_UPDATE_TEMPLATE = """
    UPDATE {table}
    SET amount = :amount, notes = :notes, updated_at = :updated_at
    WHERE id = :id AND user_id = :user_id
"""


def _update_sql(table: str):
    return text(_UPDATE_TEMPLATE.format(table=table)).bindparams(
        bindparam("amount", type_=_AMOUNT),
        bindparam("updated_at", type_=DateTime),
    )


UPDATE_INCOME_SQL = _update_sql("incomes")
UPDATE_FIXED_EXPENSE_SQL = _update_sql("fixed_expenses")
UPDATE_SAVING_SQL = _update_sql("savings")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _coerce_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class SqlAlchemyRecordStore(RecordStorePort):
    """Record store backed by the budget database, scoped to one user."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        user_id: str,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the budget engine.
            user_id: Owner of every row read or written.
            clock: Source of created/updated timestamps.
            id_factory: Source of new record ids.
        """
        self._db_port = db_port
        self._user_id = user_id
        self._clock = clock
        self._id_factory = id_factory

    def prepare_storage(self) -> None:
        """Create the record tables when they do not exist."""
        engine = self._db_port.get_budget_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)

    def list_transactions(self) -> list[TransactionRecord]:
        return [
            TransactionRecord(
                id=row.id,
                description=row.description or "",
                amount=coerce_decimal(row.amount),
                type=TransactionType(row.type),
                date=_coerce_date(row.date),
                notes=row.notes,
                category_id=row.category_id,
            )
            for row in self._fetch(SELECT_TRANSACTIONS_SQL)
        ]

    def list_incomes(self) -> list[IncomeRecord]:
        return [
            self._income_from_row(row)
            for row in self._fetch(SELECT_INCOMES_SQL)
        ]

    def list_fixed_expenses(self) -> list[FixedExpenseRecord]:
        return [
            self._fixed_expense_from_row(row)
            for row in self._fetch(SELECT_FIXED_EXPENSES_SQL)
        ]

    def list_savings(self) -> list[SavingRecord]:
        return [
            self._saving_from_row(row)
            for row in self._fetch(SELECT_SAVINGS_SQL)
        ]

    def create_transaction(self, payload: NewTransaction) -> TransactionRecord:
        record_id = self._id_factory()
        amount = to_cents(payload.amount)
        self._write(
            INSERT_TRANSACTION_SQL,
            {
                "id": record_id,
                "user_id": self._user_id,
                "category_id": payload.category_id,
                "amount": amount,
                "type": payload.type.value,
                "description": payload.description,
                "date": payload.date,
                "notes": payload.notes,
                "created_at": self._clock(),
            },
        )
        return TransactionRecord(
            id=record_id,
            description=payload.description,
            amount=amount,
            type=payload.type,
            date=payload.date,
            notes=payload.notes,
            category_id=payload.category_id,
        )

    def create_income(self, payload: NewIncome) -> IncomeRecord:
        record_id = self._id_factory()
        amount = to_cents(payload.amount)
        self._write(
            INSERT_INCOME_SQL,
            {
                "id": record_id,
                "user_id": self._user_id,
                "name": payload.name,
                "amount": amount,
                "notes": payload.notes,
                "is_active": payload.is_active,
                "created_at": self._clock(),
            },
        )
        return IncomeRecord(
            id=record_id,
            name=payload.name,
            amount=amount,
            notes=payload.notes,
            is_active=payload.is_active,
        )

    def create_fixed_expense(
        self,
        payload: NewFixedExpense,
    ) -> FixedExpenseRecord:
        record_id = self._id_factory()
        amount = to_cents(payload.amount)
        budget = to_cents(payload.budget)
        self._write(
            INSERT_FIXED_EXPENSE_SQL,
            {
                "id": record_id,
                "user_id": self._user_id,
                "name": payload.name,
                "amount": amount,
                "budget": budget,
                "notes": payload.notes,
                "is_active": payload.is_active,
                "created_at": self._clock(),
            },
        )
        return FixedExpenseRecord(
            id=record_id,
            name=payload.name,
            amount=amount,
            budget=budget,
            notes=payload.notes,
            is_active=payload.is_active,
        )

    def create_saving(self, payload: NewSaving) -> SavingRecord:
        record_id = self._id_factory()
        amount = to_cents(payload.amount)
        self._write(
            INSERT_SAVING_SQL,
            {
                "id": record_id,
                "user_id": self._user_id,
                "name": payload.name,
                "amount": amount,
                "type": payload.saving_type.value,
                "notes": payload.notes,
                "is_active": payload.is_active,
                "created_at": self._clock(),
            },
        )
        return SavingRecord(
            id=record_id,
            name=payload.name,
            amount=amount,
            saving_type=payload.saving_type,
            notes=payload.notes,
            is_active=payload.is_active,
        )

    def update_income(
        self,
        record_id: str,
        changes: RecordUpdate,
    ) -> IncomeRecord:
        self._update(UPDATE_INCOME_SQL, "income", record_id, changes)
        return self._fetch_one(
            SELECT_INCOMES_SQL,
            record_id,
            self._income_from_row,
        )

    def update_fixed_expense(
        self,
        record_id: str,
        changes: RecordUpdate,
    ) -> FixedExpenseRecord:
        self._update(
            UPDATE_FIXED_EXPENSE_SQL,
            "fixed expense",
            record_id,
            changes,
        )
        return self._fetch_one(
            SELECT_FIXED_EXPENSES_SQL,
            record_id,
            self._fixed_expense_from_row,
        )

    def update_saving(
        self,
        record_id: str,
        changes: RecordUpdate,
    ) -> SavingRecord:
        self._update(UPDATE_SAVING_SQL, "saving", record_id, changes)
        return self._fetch_one(
            SELECT_SAVINGS_SQL,
            record_id,
            self._saving_from_row,
        )

    def _fetch(self, query) -> list:
        engine = self._db_port.get_budget_engine()
        with engine.connect() as conn:
            return conn.execute(query, {"user_id": self._user_id}).all()

    def _fetch_one(self, query, record_id: str, build):
        try:
            rows = self._fetch(query)
        except SQLAlchemyError as exc:
            raise RecordWriteError(
                f"Record {record_id} was updated but could not be reloaded: "
                f"{exc}"
            ) from exc
        for row in rows:
            if row.id == record_id:
                return build(row)
        raise RecordWriteError(f"Record {record_id} disappeared after update")

    def _write(self, statement, params: dict) -> int:
        engine = self._db_port.get_budget_engine()
        try:
            with engine.begin() as conn:
                result = conn.execute(statement, params)
        except SQLAlchemyError as exc:
            raise RecordWriteError(str(exc)) from exc
        return result.rowcount

    def _update(
        self,
        statement,
        label: str,
        record_id: str,
        changes: RecordUpdate,
    ) -> None:
        updated = self._write(
            statement,
            {
                "id": record_id,
                "user_id": self._user_id,
                "amount": to_cents(changes.amount),
                "notes": changes.notes,
                "updated_at": self._clock(),
            },
        )
        if updated == 0:
            raise RecordWriteError(f"No {label} with id {record_id}")

    @staticmethod
    def _income_from_row(row) -> IncomeRecord:
        return IncomeRecord(
            id=row.id,
            name=row.name,
            amount=coerce_decimal(row.amount),
            notes=row.notes,
            is_active=bool(row.is_active),
        )

    @staticmethod
    def _fixed_expense_from_row(row) -> FixedExpenseRecord:
        return FixedExpenseRecord(
            id=row.id,
            name=row.name,
            amount=coerce_decimal(row.amount),
            budget=coerce_decimal(row.budget),
            notes=row.notes,
            is_active=bool(row.is_active),
        )

    @staticmethod
    def _saving_from_row(row) -> SavingRecord:
        return SavingRecord(
            id=row.id,
            name=row.name,
            amount=coerce_decimal(row.amount),
            saving_type=SavingType(row.type),
            notes=row.notes,
            is_active=bool(row.is_active),
        )


__all__ = [
    "SqlAlchemyRecordStore",
    "CREATE_TABLES_SQL",
    "SELECT_TRANSACTIONS_SQL",
    "INSERT_TRANSACTION_SQL",
]
