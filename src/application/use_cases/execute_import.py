"""Use case to write the selected preview rows to the record store.

Rows are written one at a time in sheet order. Each write is independent:
a failing row aborts the remaining batch but everything written before it
stays written, and the partial counts travel with the raised error.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from src.application.ports.record_store import RecordStorePort
from src.domain.constants import DEFAULT_PROFILE_NAME
from src.domain.errors import ImportAbortedError, RecordWriteError
from src.domain.models.import_rows import (
    ImportCounts,
    MatchAction,
    ParsedRow,
    TargetKind,
)
from src.domain.models.records import (
    NewFixedExpense,
    NewIncome,
    NewSaving,
    NewTransaction,
    RecordUpdate,
    SavingType,
    TransactionType,
)
from src.domain.services.classification import Selection
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ImportResult:
    """Outcome of an import run.

    Attributes:
        counts: Rows written per kind.
        processed_rows: Eligible rows handled, including skipped matches.
        interrupted: True when the run stopped before the last row.
    """

    counts: ImportCounts
    processed_rows: int
    interrupted: bool = False


def resolve_source_name(
    profile_name: str | None,
    mapping_name: str | None,
    file_name: str,
) -> str:
    """Return the label written into the notes of imported records.

    Args:
        profile_name: Name of the selected saved profile.
        mapping_name: Working name of an unsaved mapping.
        file_name: Uploaded file name.

    Returns:
        str: Profile name, else mapping name, else file name stem.
    """
    if profile_name:
        return profile_name
    if mapping_name and mapping_name != DEFAULT_PROFILE_NAME:
        return mapping_name
    return Path(file_name).stem


def eligible_rows(
    rows: Sequence[ParsedRow],
    selection: Selection,
) -> list[ParsedRow]:
    """Return the rows an import run writes, in sheet order."""
    return sorted(
        (
            row
            for row in rows
            if row.is_valid
            and not row.duplicate
            and row.target_kind is not TargetKind.SKIP
            and row.index in selection
        ),
        key=lambda row: row.index,
    )


class ExecuteImportUseCase:
    """Create or update records for the selected preview rows."""

    def __init__(self, record_store: RecordStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            record_store: Port receiving the create and update calls.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._record_store = record_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        rows: Sequence[ParsedRow],
        selection: Selection,
        source_name: str,
        should_stop: Callable[[], bool] | None = None,
    ) -> ImportResult:
        """Write every eligible row.

        Args:
            rows: Rows of the preview.
            selection: Indices chosen for import.
            source_name: Label for the notes of created records.
            should_stop: Checked before each row; returning True ends the run
                with the counts reached so far.

        Returns:
            ImportResult: Counts per kind and whether the run was cut short.

        Raises:
            ImportAbortedError: If the record store rejects a write.
        """
        counts = ImportCounts()
        processed = 0
        for row in eligible_rows(rows, selection):
            if should_stop is not None and should_stop():
                self._logger.warning(
                    f"Import interrupted before row {row.index} "
                    f"after {counts.total} written rows"
                )
                return ImportResult(counts, processed, interrupted=True)
            try:
                written = self._write_row(row, source_name)
            except RecordWriteError as exc:
                self._logger.error(
                    f"Failed to import row {row.index} "
                    f"({row.description}): {exc}"
                )
                raise ImportAbortedError(row.index, counts) from exc
            if written:
                counts = counts.increment(row.target_kind)
            processed += 1

        self._logger.info(
            f"Imported {counts.total} rows from {source_name}: "
            f"variable={counts.variable}, income={counts.income}, "
            f"fixed={counts.fixed}, saving={counts.saving}"
        )
        return ImportResult(counts, processed)

    def _write_row(self, row: ParsedRow, source_name: str) -> bool:
        amount = abs(row.amount)
        notes = f"Imported from {source_name}"
        if row.target_kind is TargetKind.VARIABLE:
            self._record_store.create_transaction(
                NewTransaction(
                    description=row.description,
                    amount=amount,
                    type=(
                        TransactionType.EXPENSE
                        if row.amount < 0
                        else TransactionType.INCOME
                    ),
                    date=row.date,
                    notes=notes,
                )
            )
            return True

        match = row.match_for(row.target_kind)
        action = match.action if match else MatchAction.CREATE
        if action is MatchAction.SKIP:
            return False
        if action is MatchAction.UPDATE and match.record is not None:
            self._update_recurring(row, match.record, amount)
            return True
        self._create_recurring(
            row,
            amount,
            f"{notes} ({row.date.isoformat()})",
        )
        return True

    def _update_recurring(
        self,
        row: ParsedRow,
        record,
        amount: Decimal,
    ) -> None:
        line = f"Updated {row.date.isoformat()}: {amount}"
        changes = RecordUpdate(
            amount=amount,
            notes=f"{record.notes or ''}\n{line}".strip(),
        )
        if row.target_kind is TargetKind.INCOME:
            self._record_store.update_income(record.id, changes)
        elif row.target_kind is TargetKind.FIXED:
            self._record_store.update_fixed_expense(record.id, changes)
        else:
            self._record_store.update_saving(record.id, changes)

    def _create_recurring(
        self,
        row: ParsedRow,
        amount: Decimal,
        notes: str,
    ) -> None:
        if row.target_kind is TargetKind.INCOME:
            self._record_store.create_income(
                NewIncome(name=row.description, amount=amount, notes=notes)
            )
        elif row.target_kind is TargetKind.FIXED:
            self._record_store.create_fixed_expense(
                NewFixedExpense(
                    name=row.description,
                    amount=amount,
                    budget=amount,
                    notes=notes,
                )
            )
        else:
            self._record_store.create_saving(
                NewSaving(
                    name=row.description,
                    amount=amount,
                    saving_type=SavingType.SHORT,
                    notes=notes,
                )
            )


__all__ = [
    "ImportResult",
    "resolve_source_name",
    "eligible_rows",
    "ExecuteImportUseCase",
]
