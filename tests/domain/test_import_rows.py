"""Tests for import row models and errors."""

import pytest

from src.domain.errors import ImportAbortedError
from src.domain.models.import_rows import ImportCounts, TargetKind


@pytest.mark.parametrize(
    "kind",
    [
        TargetKind.VARIABLE,
        TargetKind.INCOME,
        TargetKind.FIXED,
        TargetKind.SAVING,
    ],
)
def test_increment_only_touches_one_kind(kind) -> None:
    counts = ImportCounts(variable=2, income=1)

    incremented = counts.increment(kind)

    assert getattr(incremented, kind.value) == getattr(counts, kind.value) + 1
    assert incremented.total == counts.total + 1
    assert counts == ImportCounts(variable=2, income=1)


def test_import_aborted_error_reports_written_rows() -> None:
    counts = ImportCounts(variable=3, saving=1)

    error = ImportAbortedError(4, counts)

    assert str(error) == "Import aborted at row 4 after 4 written rows"
    assert error.row_index == 4
    assert error.counts is counts
