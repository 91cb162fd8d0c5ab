"""Tests for the ExecuteImportUseCase."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.ports.record_store import RecordStorePort
from src.application.use_cases.execute_import import (
    ExecuteImportUseCase,
    eligible_rows,
    resolve_source_name,
)
from src.application.use_cases.preview_import import PreviewImportUseCase
from src.domain.errors import ImportAbortedError, RecordWriteError
from src.domain.models.import_rows import (
    ImportCounts,
    KindMatch,
    MatchAction,
    ParsedRow,
    TargetKind,
)
from src.domain.models.profiles import ColumnMappingProfile
from src.domain.models.records import (
    FixedExpenseRecord,
    IncomeRecord,
    SavingRecord,
    SavingType,
    TransactionRecord,
    TransactionType,
)
from src.domain.services.classification import reclassify
from src.domain.services.sheet_loader import load_sheet


class _InMemoryRecordStore(RecordStorePort):
    """Record store keeping rows in lists, optionally failing on a write."""

    def __init__(self, fail_on_write: int | None = None) -> None:
        self.transactions: list[TransactionRecord] = []
        self.incomes: list[IncomeRecord] = []
        self.fixed_expenses: list[FixedExpenseRecord] = []
        self.savings: list[SavingRecord] = []
        self.updates: list[tuple[str, str, object]] = []
        self.fail_on_write = fail_on_write
        self.writes = 0

    def _count_write(self) -> None:
        self.writes += 1
        if self.fail_on_write == self.writes:
            raise RecordWriteError("database unavailable")

    def list_transactions(self):
        return list(self.transactions)

    def list_incomes(self):
        return list(self.incomes)

    def list_fixed_expenses(self):
        return list(self.fixed_expenses)

    def list_savings(self):
        return list(self.savings)

    def create_transaction(self, payload):
        self._count_write()
        record = TransactionRecord(
            id=f"t{len(self.transactions) + 1}",
            description=payload.description,
            amount=payload.amount,
            type=payload.type,
            date=payload.date,
            notes=payload.notes,
        )
        self.transactions.append(record)
        return record

    def create_income(self, payload):
        self._count_write()
        record = IncomeRecord(
            id=f"i{len(self.incomes) + 1}",
            name=payload.name,
            amount=payload.amount,
            notes=payload.notes,
        )
        self.incomes.append(record)
        return record

    def create_fixed_expense(self, payload):
        self._count_write()
        record = FixedExpenseRecord(
            id=f"f{len(self.fixed_expenses) + 1}",
            name=payload.name,
            amount=payload.amount,
            budget=payload.budget,
            notes=payload.notes,
        )
        self.fixed_expenses.append(record)
        return record

    def create_saving(self, payload):
        self._count_write()
        record = SavingRecord(
            id=f"s{len(self.savings) + 1}",
            name=payload.name,
            amount=payload.amount,
            saving_type=payload.saving_type,
            notes=payload.notes,
        )
        self.savings.append(record)
        return record

    def _update(self, records, kind, record_id, changes):
        self._count_write()
        self.updates.append((kind, record_id, changes))
        for position, record in enumerate(records):
            if record.id == record_id:
                records[position] = replace(
                    record,
                    amount=changes.amount,
                    notes=changes.notes,
                )
                return records[position]
        raise RecordWriteError(f"No {kind} with id {record_id}")

    def update_income(self, record_id, changes):
        return self._update(self.incomes, "income", record_id, changes)

    def update_fixed_expense(self, record_id, changes):
        return self._update(self.fixed_expenses, "fixed", record_id, changes)

    def update_saving(self, record_id, changes):
        return self._update(self.savings, "saving", record_id, changes)


RENT = FixedExpenseRecord(
    id="f-rent",
    name="Hyra",
    amount=Decimal("8500"),
    budget=Decimal("8500"),
    notes="Landlord AB",
)


def _row(index, description, amount, kind=TargetKind.VARIABLE, **kwargs):
    return ParsedRow(
        index=index,
        date=date(2024, 3, index + 1),
        description=description,
        amount=Decimal(amount),
        raw={},
        target_kind=kind,
        **kwargs,
    )


def _use_case(store):
    return ExecuteImportUseCase(store, logger=MagicMock())


def test_variable_rows_become_transactions() -> None:
    """Signs pick the transaction type; amounts are stored unsigned."""
    store = _InMemoryRecordStore()
    rows = [_row(0, "Coop", "-89.00"), _row(1, "Refund", "25")]

    result = _use_case(store).execute(rows, frozenset({0, 1}), "Nordbank")

    assert result.counts == ImportCounts(variable=2)
    assert result.processed_rows == 2
    assert not result.interrupted
    assert [(t.amount, t.type) for t in store.transactions] == [
        (Decimal("89.00"), TransactionType.EXPENSE),
        (Decimal("25"), TransactionType.INCOME),
    ]
    assert store.transactions[0].notes == "Imported from Nordbank"
    assert store.transactions[0].date == date(2024, 3, 1)


def test_recurring_rows_create_with_kind_defaults() -> None:
    store = _InMemoryRecordStore()
    rows = [
        _row(0, "Lön", "25000", TargetKind.INCOME),
        _row(1, "Gym", "-399", TargetKind.FIXED),
        _row(2, "Buffert", "-1000", TargetKind.SAVING),
    ]

    result = _use_case(store).execute(rows, frozenset({0, 1, 2}), "SEB")

    assert result.counts == ImportCounts(income=1, fixed=1, saving=1)
    assert store.incomes[0].notes == "Imported from SEB (2024-03-01)"
    assert store.fixed_expenses[0].amount == Decimal("399")
    assert store.fixed_expenses[0].budget == Decimal("399")
    assert store.savings[0].saving_type is SavingType.SHORT
    assert store.savings[0].amount == Decimal("1000")


def test_update_action_appends_note_line() -> None:
    store = _InMemoryRecordStore()
    store.fixed_expenses.append(RENT)
    row = _row(
        4,
        "Hyra april",
        "-9000",
        TargetKind.FIXED,
        matches={
            TargetKind.FIXED: KindMatch(RENT, MatchAction.UPDATE),
        },
    )

    result = _use_case(store).execute([row], frozenset({4}), "SEB")

    assert result.counts == ImportCounts(fixed=1)
    assert store.fixed_expenses == [
        replace(
            RENT,
            amount=Decimal("9000"),
            notes="Landlord AB\nUpdated 2024-03-05: 9000",
        )
    ]


def test_update_without_previous_notes_has_no_leading_newline() -> None:
    store = _InMemoryRecordStore()
    plain = replace(RENT, notes=None)
    store.fixed_expenses.append(plain)
    row = _row(
        0,
        "Hyra",
        "-9000",
        TargetKind.FIXED,
        matches={TargetKind.FIXED: KindMatch(plain, MatchAction.UPDATE)},
    )

    _use_case(store).execute([row], frozenset({0}), "SEB")

    assert store.fixed_expenses[0].notes == "Updated 2024-03-01: 9000"


def test_skip_action_writes_nothing_and_is_not_counted() -> None:
    store = _InMemoryRecordStore()
    row = _row(
        0,
        "Lön",
        "25000",
        TargetKind.INCOME,
        matches={
            TargetKind.INCOME: KindMatch(
                IncomeRecord(id="i1", name="Lön", amount=Decimal("1")),
                MatchAction.SKIP,
            )
        },
    )

    result = _use_case(store).execute([row], frozenset({0}), "SEB")

    assert result.counts.total == 0
    assert result.processed_rows == 1
    assert store.writes == 0


def test_only_eligible_rows_are_written_in_index_order() -> None:
    """Unselected, invalid, duplicate and skipped rows are ignored."""
    rows = [
        _row(3, "Late", "-3"),
        _row(0, "Unselected", "-1"),
        _row(1, "Invalid", "-1", errors=("Missing description",)),
        _row(2, "Duplicate", "-1", duplicate=True),
        _row(4, "Skipped", "-1", TargetKind.SKIP),
        _row(5, "Early", "-5"),
    ]
    selection = frozenset({1, 2, 3, 4, 5})

    assert [row.index for row in eligible_rows(rows, selection)] == [3, 5]

    store = _InMemoryRecordStore()
    _use_case(store).execute(rows, selection, "SEB")

    assert [t.description for t in store.transactions] == ["Late", "Early"]


def test_should_stop_returns_partial_counts() -> None:
    store = _InMemoryRecordStore()
    rows = [_row(i, f"Row {i}", "-1") for i in range(4)]
    checks = iter([False, False, True])

    result = _use_case(store).execute(
        rows,
        frozenset(range(4)),
        "SEB",
        should_stop=lambda: next(checks),
    )

    assert result.interrupted
    assert result.counts == ImportCounts(variable=2)
    assert len(store.transactions) == 2


def test_write_failure_aborts_with_partial_counts() -> None:
    """Rows before the failure stay written and are reported."""
    store = _InMemoryRecordStore(fail_on_write=3)
    rows = [
        _row(0, "Coop", "-1"),
        _row(1, "Lön", "100", TargetKind.INCOME),
        _row(2, "Gym", "-399", TargetKind.FIXED),
        _row(3, "Never", "-1"),
    ]

    with pytest.raises(ImportAbortedError) as excinfo:
        _use_case(store).execute(rows, frozenset(range(4)), "SEB")

    assert excinfo.value.row_index == 2
    assert excinfo.value.counts == ImportCounts(variable=1, income=1)
    assert isinstance(excinfo.value.__cause__, RecordWriteError)
    assert len(store.transactions) == 1
    assert len(store.incomes) == 1
    assert store.fixed_expenses == []


@pytest.mark.parametrize(
    ("profile_name", "mapping_name", "expected"),
    [
        ("Nordbank", "Working copy", "Nordbank"),
        (None, "Working copy", "Working copy"),
        (None, "New profile", "mars_2024"),
        (None, None, "mars_2024"),
    ],
)
def test_resolve_source_name(profile_name, mapping_name, expected) -> None:
    assert resolve_source_name(
        profile_name,
        mapping_name,
        "mars_2024.xlsx",
    ) == expected


def test_preview_then_import_twice_is_idempotent() -> None:
    """A second run over the same file finds everything as duplicates."""
    store = _InMemoryRecordStore()
    store.fixed_expenses.append(RENT)
    profile = ColumnMappingProfile(
        name="Nordbank",
        date_column="Datum",
        description_column="Text",
        amount_column="Belopp",
    )
    sheet = load_sheet(
        [
            ["Kontoutdrag"],
            ["Datum", "Text", "Belopp"],
            ["2024-03-01", "ICA Maxi", "-452,10"],
            ["2024-03-25", "Lön ACME", "25 000,00"],
            ["2024-03-27", "Hyra", "-8500"],
            ["2024-03-28", "Netflix", "-119"],
        ]
    )
    preview_use_case = PreviewImportUseCase(store, logger=MagicMock())
    executor = _use_case(store)

    preview = preview_use_case.execute(sheet, profile)
    assert preview.selection == frozenset({0, 1, 3})
    assert preview.rows[2].duplicate
    rows = list(preview.rows)
    rows[3] = reclassify(rows[3], TargetKind.FIXED, preview.corpora)

    first = executor.execute(rows, preview.selection, "Nordbank")

    assert first.counts == ImportCounts(variable=1, income=1, fixed=1)
    assert store.incomes[0].amount == Decimal("25000.00")

    second_preview = preview_use_case.execute(sheet, profile)
    second = executor.execute(
        second_preview.rows,
        second_preview.selection,
        "Nordbank",
    )

    assert all(row.duplicate for row in second_preview.rows)
    assert second_preview.selection == frozenset()
    assert second.counts.total == 0
