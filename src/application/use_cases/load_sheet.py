"""Use case to decode an uploaded file into a header-aware sheet."""

from src.application.ports.spreadsheet_reader import SpreadsheetReaderPort
from src.domain.errors import FileDecodeError
from src.domain.models.sheet import SheetTable
from src.domain.services.sheet_loader import load_sheet
from src.infrastructure.logging.logger import get_app_logger


class LoadSheetUseCase:
    """Read the first sheet of a file and derive its rows."""

    def __init__(self, reader: SpreadsheetReaderPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            reader: Port decoding file content into a grid.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._reader = reader
        self._logger = logger or get_app_logger()

    def execute(
        self,
        file_name: str,
        content: bytes,
        header_row_index: int | None = None,
    ) -> SheetTable:
        """Decode the file and build its SheetTable.

        Args:
            file_name: Uploaded file name, used to pick the decoder.
            content: Raw file bytes.
            header_row_index: Header row to use; auto-detected when None.

        Returns:
            SheetTable: Decoded rows keyed by header labels.

        Raises:
            FileDecodeError: If the file is unreadable or has no rows.
        """
        grid = self._reader.read_grid(file_name, content)
        if not grid:
            raise FileDecodeError(f"No rows found in {file_name}")
        sheet = load_sheet(grid, header_row_index)
        self._logger.info(
            f"Loaded {len(sheet.rows)} rows from {file_name} "
            f"(header row {sheet.header_row_index})"
        )
        return sheet


__all__ = ["LoadSheetUseCase"]
