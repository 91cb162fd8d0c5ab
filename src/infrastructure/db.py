"""Engine factory for the budget database.

The engine is created lazily from ``BUDGET_DB_URL`` (read from the
environment or a ``.env`` file) and shared by every repository.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Return a required setting from the environment.

    Args:
        name: Variable to look up after loading ``.env``.

    Returns:
        str: Non-empty value.

    Raises:
        RuntimeError: If the variable is unset or blank.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Build the pooled engine used for record and profile storage."""
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_budget_engine: Optional[Engine] = None


def get_budget_engine() -> Engine:
    """Return the process-wide budget engine, creating it on first use."""
    global _budget_engine
    if _budget_engine is None:
        _budget_engine = _create_engine(_get_env_var("BUDGET_DB_URL"))
    return _budget_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort backed by the shared budget engine."""

    def get_budget_engine(self) -> Engine:
        return get_budget_engine()


__all__ = [
    "get_budget_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
