"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.spreadsheet_reader import SpreadsheetReaderPort
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.profile_repository import SqlAlchemyProfileRepository
from src.infrastructure.record_store import SqlAlchemyRecordStore
from src.infrastructure.settings import BudgetSettings
from src.infrastructure.spreadsheet_reader import PandasSpreadsheetReader


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_settings() -> BudgetSettings:
    """Return settings sourced from the environment."""
    return BudgetSettings.from_env()


def build_record_store(
    db_port: DatabaseEnginePort | None = None,
    settings: BudgetSettings | None = None,
) -> SqlAlchemyRecordStore:
    """Return the record store for the configured user."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or build_settings()
    return SqlAlchemyRecordStore(resolved_db, resolved_settings.user_id)


def build_profile_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: BudgetSettings | None = None,
) -> SqlAlchemyProfileRepository:
    """Return the profile repository for the configured user."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or build_settings()
    return SqlAlchemyProfileRepository(resolved_db, resolved_settings.user_id)


def build_spreadsheet_reader() -> SpreadsheetReaderPort:
    """Return the spreadsheet decoder."""
    return PandasSpreadsheetReader(logger=get_app_logger())


__all__ = [
    "build_database_adapter",
    "build_settings",
    "build_record_store",
    "build_profile_repository",
    "build_spreadsheet_reader",
]
