"""Tests for the LoadSheetUseCase."""

from unittest.mock import MagicMock

import pytest

from src.application.use_cases.load_sheet import LoadSheetUseCase
from src.domain.errors import FileDecodeError


def test_execute_detects_header_and_logs() -> None:
    """The use case should build a sheet from the decoded grid."""
    reader = MagicMock()
    reader.read_grid.return_value = [
        ["Export 2024-03", None],
        ["Date", "Amount"],
        ["2024-03-01", -10],
    ]
    logger = MagicMock()

    sheet = LoadSheetUseCase(reader, logger=logger).execute(
        "march.csv",
        b"raw",
    )

    reader.read_grid.assert_called_once_with("march.csv", b"raw")
    assert sheet.header_row_index == 1
    assert sheet.columns == ("Date", "Amount")
    assert sheet.rows == ({"Date": "2024-03-01", "Amount": -10},)
    logger.info.assert_called_once()
    assert "march.csv" in logger.info.call_args.args[0]


def test_execute_honours_explicit_header_row() -> None:
    reader = MagicMock()
    reader.read_grid.return_value = [["a", "b"], ["Date", "Amount"]]

    sheet = LoadSheetUseCase(reader, logger=MagicMock()).execute(
        "file.xlsx",
        b"raw",
        header_row_index=0,
    )

    assert sheet.columns == ("a", "b")
    assert sheet.rows == ({"a": "Date", "b": "Amount"},)


def test_execute_rejects_empty_files() -> None:
    """A file without rows cannot be imported."""
    reader = MagicMock()
    reader.read_grid.return_value = []

    with pytest.raises(FileDecodeError, match="empty.csv"):
        LoadSheetUseCase(reader, logger=MagicMock()).execute(
            "empty.csv",
            b"",
        )


def test_execute_propagates_decode_errors() -> None:
    reader = MagicMock()
    reader.read_grid.side_effect = FileDecodeError("Could not read x.xls")

    with pytest.raises(FileDecodeError):
        LoadSheetUseCase(reader, logger=MagicMock()).execute("x.xls", b"?")
