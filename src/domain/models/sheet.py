"""Domain models for decoded spreadsheet content."""

from collections.abc import Mapping
from dataclasses import dataclass

Cell = str | int | float | None
Grid = tuple[tuple[Cell, ...], ...]
RawRow = Mapping[str, Cell]


@dataclass(frozen=True)
class SheetTable:
    """Header-aware view of a raw grid.

    Attributes:
        grid: Every decoded row of the first sheet.
        header_row_index: Grid row used as column labels.
        columns: Real column labels, without synthesized placeholders.
        rows: Non-blank rows below the header, keyed by label.
    """

    grid: Grid
    header_row_index: int
    columns: tuple[str, ...]
    rows: tuple[RawRow, ...]


__all__ = ["Cell", "Grid", "RawRow", "SheetTable"]
