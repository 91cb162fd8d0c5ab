"""Port for decoding uploaded spreadsheet files."""

from typing import Protocol

from src.domain.models.sheet import Cell


class SpreadsheetReaderPort(Protocol):
    """Port turning file content into a raw grid of cells."""

    def read_grid(self, file_name: str, content: bytes) -> list[list[Cell]]:
        """Return every row of the first sheet.

        Raises:
            FileDecodeError: If the content is not a readable spreadsheet.
        """


__all__ = ["SpreadsheetReaderPort"]
