"""Tests for the PreviewImportUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.preview_import import PreviewImportUseCase
from src.domain.errors import InvalidProfileError
from src.domain.models.import_rows import TargetKind
from src.domain.models.profiles import ColumnMappingProfile
from src.domain.models.records import (
    FixedExpenseRecord,
    TransactionRecord,
    TransactionType,
)
from src.domain.policies.matching import MatchingThresholds
from src.domain.services.sheet_loader import load_sheet

PROFILE = ColumnMappingProfile(
    name="Nordbank",
    date_column="Datum",
    description_column="Text",
    amount_column="Belopp",
)

SHEET = load_sheet(
    [
        ["Datum", "Text", "Belopp"],
        ["2024-03-01", "ICA Maxi", "-452,10"],
        ["2024-03-02", "Coop", "-89,00"],
        ["2024-03-25", "Lön", "25000"],
        ["??", "Broken", "x"],
    ]
)


def _record_store() -> MagicMock:
    store = MagicMock()
    store.list_transactions.return_value = [
        TransactionRecord(
            id="t1",
            description="ICA Maxi",
            amount=Decimal("452.10"),
            type=TransactionType.EXPENSE,
            date=date(2024, 3, 1),
        )
    ]
    store.list_incomes.return_value = []
    store.list_fixed_expenses.return_value = [
        FixedExpenseRecord(
            id="f1",
            name="Coop medlem",
            amount=Decimal("50"),
            budget=Decimal("50"),
        )
    ]
    store.list_savings.return_value = []
    return store


def test_execute_classifies_rows_and_selects_defaults() -> None:
    """Duplicates and invalid rows should be left out of the selection."""
    logger = MagicMock()
    use_case = PreviewImportUseCase(_record_store(), logger=logger)

    preview = use_case.execute(SHEET, PROFILE)

    assert [row.index for row in preview.rows] == [0, 1, 2, 3]
    assert preview.rows[0].duplicate
    assert preview.rows[1].target_kind is TargetKind.VARIABLE
    assert preview.rows[2].target_kind is TargetKind.INCOME
    assert not preview.rows[3].is_valid
    assert preview.selection == frozenset({1, 2})
    assert len(preview.corpora.transactions) == 1
    assert "1 duplicates" in logger.info.call_args.args[0]


def test_execute_uses_configured_thresholds() -> None:
    """A wider tolerance should turn near matches into duplicates."""
    use_case = PreviewImportUseCase(
        _record_store(),
        thresholds=MatchingThresholds(amount_tolerance=Decimal("40")),
        logger=MagicMock(),
    )
    sheet = load_sheet(
        [
            ["Datum", "Text", "Belopp"],
            ["2024-03-02", "Coop", "-89,00"],
        ]
    )

    preview = use_case.execute(sheet, PROFILE)

    assert preview.rows[0].duplicate
    assert preview.rows[0].target_kind is TargetKind.FIXED


def test_execute_requires_mapped_columns() -> None:
    store = _record_store()
    use_case = PreviewImportUseCase(store, logger=MagicMock())

    with pytest.raises(InvalidProfileError):
        use_case.execute(
            SHEET,
            ColumnMappingProfile(date_column="Datum", amount_column="Belopp"),
        )

    store.list_transactions.assert_not_called()
