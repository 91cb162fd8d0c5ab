"""Errors raised by the import engine and its adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.models.import_rows import ImportCounts


class BudgetImportError(Exception):
    """Base class for import engine errors."""


class FileDecodeError(BudgetImportError):
    """Raised when an uploaded file cannot be read as a spreadsheet."""


class ProfileValidationError(BudgetImportError):
    """Raised when a column mapping profile cannot be saved as given."""


class InvalidProfileError(ProfileValidationError):
    """Raised when a profile is missing required values."""


class ProfileNameConflict(ProfileValidationError):
    """Raised when a profile name is already used by the same user."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Profile name '{name}' is already in use. Choose another name."
        )
        self.name = name


class RecordWriteError(BudgetImportError):
    """Raised by a record store when a create or update fails."""


class ImportAbortedError(BudgetImportError):
    """Raised when a batch import stops on a failing row.

    Attributes:
        row_index: Index of the row whose write failed.
        counts: Rows written per kind before the failure.
    """

    def __init__(self, row_index: int, counts: ImportCounts) -> None:
        super().__init__(
            f"Import aborted at row {row_index} after "
            f"{counts.total} written rows"
        )
        self.row_index = row_index
        self.counts = counts


__all__ = [
    "BudgetImportError",
    "FileDecodeError",
    "ProfileValidationError",
    "InvalidProfileError",
    "ProfileNameConflict",
    "RecordWriteError",
    "ImportAbortedError",
]
