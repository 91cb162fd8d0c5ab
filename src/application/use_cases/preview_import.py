"""Use case to classify sheet rows against the user's existing records."""

from dataclasses import dataclass

from src.application.ports.record_store import RecordStorePort
from src.domain.errors import InvalidProfileError
from src.domain.models.import_rows import ParsedRow
from src.domain.models.profiles import ColumnMappingProfile
from src.domain.models.records import ExistingCorpora
from src.domain.models.sheet import SheetTable
from src.domain.policies.matching import DEFAULT_THRESHOLDS, MatchingThresholds
from src.domain.services.classification import (
    Selection,
    classify_rows,
    default_selection,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ImportPreview:
    """Classified rows ready for review.

    Attributes:
        rows: Parsed rows in sheet order.
        selection: Default selection of row indices.
        corpora: Records used for matching, reused when rows are
            reclassified.
    """

    rows: list[ParsedRow]
    selection: Selection
    corpora: ExistingCorpora


class PreviewImportUseCase:
    """Parse and reconcile the rows of a sheet."""

    def __init__(
        self,
        record_store: RecordStorePort,
        thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port listing the user's existing records.
            thresholds: Matching tolerances.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._record_store = record_store
        self._thresholds = thresholds
        self._logger = logger or get_app_logger()

    def execute(
        self,
        sheet: SheetTable,
        profile: ColumnMappingProfile,
    ) -> ImportPreview:
        """Classify every row of the sheet.

        Args:
            sheet: Loaded sheet.
            profile: Column mapping to read rows with.

        Returns:
            ImportPreview: Rows, default selection and matching corpora.

        Raises:
            InvalidProfileError: If a required column is not mapped.
        """
        if not profile.has_required_columns:
            raise InvalidProfileError(
                "Choose columns for date, description and amount"
            )
        corpora = self.load_corpora()
        rows = classify_rows(sheet.rows, profile, corpora, self._thresholds)
        selection = default_selection(rows)

        invalid_count = sum(1 for row in rows if not row.is_valid)
        duplicate_count = sum(1 for row in rows if row.duplicate)
        self._logger.info(
            f"Previewed {len(rows)} rows: {len(selection)} selected, "
            f"{invalid_count} invalid, {duplicate_count} duplicates"
        )
        return ImportPreview(rows=rows, selection=selection, corpora=corpora)

    def load_corpora(self) -> ExistingCorpora:
        """Read the comparison records from the record store."""
        return ExistingCorpora(
            transactions=tuple(self._record_store.list_transactions()),
            incomes=tuple(self._record_store.list_incomes()),
            fixed_expenses=tuple(self._record_store.list_fixed_expenses()),
            savings=tuple(self._record_store.list_savings()),
        )


__all__ = ["ImportPreview", "PreviewImportUseCase"]
