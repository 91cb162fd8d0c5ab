"""Application ports package."""

from .database import DatabaseEnginePort
from .profile_repository import ProfileRepositoryPort
from .record_store import RecordStorePort
from .spreadsheet_reader import SpreadsheetReaderPort

__all__ = [
    "DatabaseEnginePort",
    "ProfileRepositoryPort",
    "RecordStorePort",
    "SpreadsheetReaderPort",
]
