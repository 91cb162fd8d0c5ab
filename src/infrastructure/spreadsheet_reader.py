"""Pandas-backed decoder for uploaded CSV and Excel files."""

from collections import Counter
import csv
from datetime import date, datetime
from io import BytesIO, StringIO
from pathlib import Path
import zipfile

import pandas as pd
from xlrd import XLRDError

from src.application.ports.spreadsheet_reader import SpreadsheetReaderPort
from src.domain.errors import FileDecodeError
from src.domain.models.sheet import Cell
from src.infrastructure.logging.logger import get_app_logger

CSV_SUFFIXES = frozenset({".csv", ".txt"})
CSV_DELIMITERS = (",", ";", "\t", "|")


def _decode_text(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        # Nordic bank exports are often Latin-1.
        return content.decode("latin-1")


def _split_rows(text: str, delimiter: str) -> list[list[str]]:
    return list(csv.reader(StringIO(text), delimiter=delimiter))


def detect_delimiter(text: str) -> str:
    """Pick the delimiter that splits the most rows to one common width.

    Preamble lines above the header usually have fewer fields than the
    table, so the first line alone is not a reliable sample.

    Args:
        text: Decoded CSV content.

    Returns:
        str: One of ``CSV_DELIMITERS``; a comma when no candidate splits
        any row into more than one field.
    """
    best, best_score = ",", (0, 0)
    for delimiter in CSV_DELIMITERS:
        widths = Counter(
            len(row)
            for row in _split_rows(text, delimiter)
            if len(row) > 1
        )
        if not widths:
            continue
        width, rows = widths.most_common(1)[0]
        if (rows, width) > best_score:
            best, best_score = delimiter, (rows, width)
    return best


def normalize_cell(value) -> Cell:
    """Convert a pandas cell into a plain Python value.

    Args:
        value: Raw value from a DataFrame.

    Returns:
        Cell: None for missing values, ISO strings for dates, and native
        int, float or str otherwise.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return None if pd.isna(value) else value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value)
    if pd.isna(value):
        return None
    if hasattr(value, "item"):
        value = value.item()
    if isinstance(value, (int, float)):
        return value
    return str(value)


class PandasSpreadsheetReader(SpreadsheetReaderPort):
    """Read the first sheet of a CSV, XLSX or XLS upload."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()

    def read_grid(self, file_name: str, content: bytes) -> list[list[Cell]]:
        """Return every row of the first sheet as plain cells.

        Args:
            file_name: Uploaded file name; the suffix selects the decoder.
            content: Raw file bytes.

        Returns:
            list[list[Cell]]: Rows in file order, empty when the file is.

        Raises:
            FileDecodeError: If pandas cannot decode the content.
        """
        suffix = Path(file_name).suffix.lower()
        try:
            if suffix in CSV_SUFFIXES:
                frame = self._read_csv(content)
            else:
                frame = pd.read_excel(
                    BytesIO(content),
                    sheet_name=0,
                    header=None,
                )
        except pd.errors.EmptyDataError:
            return []
        except (
            ValueError,
            OSError,
            csv.Error,
            zipfile.BadZipFile,
            XLRDError,
        ) as exc:
            self._logger.error(f"Failed to decode {file_name}: {exc}")
            raise FileDecodeError(
                f"Could not read {file_name}: {exc}"
            ) from exc

        grid = [
            [normalize_cell(value) for value in row]
            for row in frame.itertuples(index=False, name=None)
        ]
        self._logger.debug(f"Decoded {len(grid)} rows from {file_name}")
        return grid

    @staticmethod
    def _read_csv(content: bytes) -> pd.DataFrame:
        text = _decode_text(content)
        if not text.strip():
            raise pd.errors.EmptyDataError("No columns to parse from file")
        delimiter = detect_delimiter(text)
        # Short preamble rows are padded up to the widest row.
        width = max(len(row) for row in _split_rows(text, delimiter))
        return pd.read_csv(
            StringIO(text),
            header=None,
            names=list(range(width)),
            sep=delimiter,
            dtype=object,
            skip_blank_lines=False,
        )


__all__ = [
    "PandasSpreadsheetReader",
    "normalize_cell",
    "detect_delimiter",
    "CSV_SUFFIXES",
    "CSV_DELIMITERS",
]
