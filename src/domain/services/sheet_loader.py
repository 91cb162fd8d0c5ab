"""Turn a raw spreadsheet grid into header-keyed rows."""

from collections.abc import Iterable, Sequence

from src.domain.constants import (
    HEADER_KEYWORDS,
    HEADER_SCAN_LIMIT,
    PLACEHOLDER_COLUMN_PREFIX,
)
from src.domain.models.sheet import Cell, Grid, RawRow, SheetTable
from src.domain.services.normalization import is_blank


def detect_header_row(
    grid: Sequence[Sequence[Cell]],
    keywords: Iterable[str] = HEADER_KEYWORDS,
    scan_limit: int = HEADER_SCAN_LIMIT,
) -> int:
    """Return the index of the first row that looks like a header.

    Bank exports often start with account details or blank lines, so the
    first rows are scanned for a cell mentioning a known column keyword.

    Args:
        grid: Raw rows of the sheet.
        keywords: Lower-case fragments identifying header cells.
        scan_limit: Number of leading rows to inspect.

    Returns:
        int: Header row index, 0 when no row matches.
    """
    lowered_keywords = tuple(keyword.lower() for keyword in keywords)
    for index, row in enumerate(grid[:scan_limit]):
        for cell in row or ():
            if is_blank(cell):
                continue
            text = str(cell).lower()
            if any(keyword in text for keyword in lowered_keywords):
                return index
    return 0


def load_sheet(
    grid: Sequence[Sequence[Cell]],
    header_row_index: int | None = None,
) -> SheetTable:
    """Build a SheetTable from a raw grid.

    Args:
        grid: Raw rows of the first sheet.
        header_row_index: Header row to use; auto-detected when None.

    Returns:
        SheetTable: Column labels and keyed rows below the header.
    """
    frozen_grid: Grid = tuple(tuple(row or ()) for row in grid)
    if header_row_index is None:
        header_row_index = detect_header_row(frozen_grid)
    return _derive_table(frozen_grid, header_row_index)


def rederive_sheet(sheet: SheetTable, header_row_index: int) -> SheetTable:
    """Re-read the rows of an already loaded sheet for another header row.

    Args:
        sheet: Previously loaded sheet.
        header_row_index: New header row index.

    Returns:
        SheetTable: Table derived from the same grid.
    """
    return _derive_table(sheet.grid, header_row_index)


def _derive_table(grid: Grid, header_row_index: int) -> SheetTable:
    if header_row_index < 0:
        raise ValueError(
            f"Header row index must be >= 0, got {header_row_index}"
        )
    if header_row_index >= len(grid):
        return SheetTable(
            grid=grid,
            header_row_index=header_row_index,
            columns=(),
            rows=(),
        )

    labels, placeholders = _header_labels(grid[header_row_index])
    rows: list[RawRow] = []
    for cells in grid[header_row_index + 1:]:
        if all(is_blank(cell) for cell in cells):
            continue
        row: dict[str, Cell] = {}
        for position, label in enumerate(labels):
            row[label] = cells[position] if position < len(cells) else None
        rows.append(row)

    columns = tuple(label for label in labels if label not in placeholders)
    return SheetTable(
        grid=grid,
        header_row_index=header_row_index,
        columns=columns,
        rows=tuple(rows),
    )


def _header_labels(header: Sequence[Cell]) -> tuple[list[str], set[str]]:
    labels = []
    placeholders = set()
    for position, cell in enumerate(header):
        if is_blank(cell):
            label = f"{PLACEHOLDER_COLUMN_PREFIX}{position + 1}"
            placeholders.add(label)
        else:
            label = str(cell).strip()
        labels.append(label)
    return labels, placeholders


__all__ = ["detect_header_row", "load_sheet", "rederive_sheet"]
