"""SQLAlchemy-backed repository for column mapping profiles."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
import uuid

from sqlalchemy import Boolean, DateTime, Integer, bindparam, text
from sqlalchemy.exc import IntegrityError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.profile_repository import ProfileRepositoryPort
from src.domain.errors import InvalidProfileError, ProfileNameConflict
from src.domain.models.profiles import (
    ColumnMappingProfile,
    DateFormat,
    SourceKind,
)

CREATE_PROFILES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS import_profiles (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        source_type TEXT NOT NULL,
        date_column TEXT NOT NULL,
        description_column TEXT NOT NULL,
        amount_column TEXT NOT NULL,
        date_format TEXT NOT NULL,
        invert_amount BOOLEAN NOT NULL,
        skip_rows INTEGER NOT NULL,
        is_default BOOLEAN NOT NULL,
        created_at TIMESTAMP NOT NULL
    )
    """,
    """
    CREATE UNIQUE INDEX IF NOT EXISTS import_profiles_user_name_idx
    ON import_profiles (user_id, lower(name))
    """,
)

SELECT_PROFILES_SQL = text(
    """
    SELECT
        id,
        name,
        source_type,
        date_column,
        description_column,
        amount_column,
        date_format,
        invert_amount,
        skip_rows,
        is_default
    FROM import_profiles
    WHERE user_id = :user_id
    ORDER BY lower(name)
    """
).columns(invert_amount=Boolean, skip_rows=Integer, is_default=Boolean)

INSERT_PROFILE_SQL = text(
    """
    INSERT INTO import_profiles (
        id, user_id, name, source_type, date_column, description_column,
        amount_column, date_format, invert_amount, skip_rows, is_default,
        created_at
    )
    VALUES (
        :id, :user_id, :name, :source_type, :date_column,
        :description_column, :amount_column, :date_format, :invert_amount,
        :skip_rows, :is_default, :created_at
    )
    """
).bindparams(
    bindparam("invert_amount", type_=Boolean),
    bindparam("is_default", type_=Boolean),
    bindparam("created_at", type_=DateTime),
)

UPDATE_PROFILE_SQL = text(
    """
    UPDATE import_profiles
    SET
        name = :name,
        source_type = :source_type,
        date_column = :date_column,
        description_column = :description_column,
        amount_column = :amount_column,
        date_format = :date_format,
        invert_amount = :invert_amount,
        skip_rows = :skip_rows,
        is_default = :is_default
    WHERE id = :id AND user_id = :user_id
    """
).bindparams(
    bindparam("invert_amount", type_=Boolean),
    bindparam("is_default", type_=Boolean),
)

DELETE_PROFILE_SQL = text(
    """
    DELETE FROM import_profiles
    WHERE id = :id AND user_id = :user_id
    """
)


def _profile_from_row(row) -> ColumnMappingProfile:
    return ColumnMappingProfile(
        id=row.id,
        name=row.name,
        source_kind=SourceKind(row.source_type),
        date_column=row.date_column,
        description_column=row.description_column,
        amount_column=row.amount_column,
        date_format=DateFormat(row.date_format),
        invert_amount=bool(row.invert_amount),
        header_row_index=int(row.skip_rows),
        is_default=bool(row.is_default),
    )


class SqlAlchemyProfileRepository(ProfileRepositoryPort):
    """Profile repository stored in the ``import_profiles`` table."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        user_id: str,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ) -> None:
        self._db_port = db_port
        self._user_id = user_id
        self._id_factory = id_factory

    def prepare_storage(self) -> None:
        """Create the profile table and its name index if missing."""
        engine = self._db_port.get_budget_engine()
        with engine.begin() as conn:
            for statement in CREATE_PROFILES_SQL:
                conn.exec_driver_sql(statement)

    def list_profiles(self) -> list[ColumnMappingProfile]:
        engine = self._db_port.get_budget_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_PROFILES_SQL,
                {"user_id": self._user_id},
            ).all()
        return [_profile_from_row(row) for row in rows]

    def create_profile(
        self,
        profile: ColumnMappingProfile,
    ) -> ColumnMappingProfile:
        profile_id = self._id_factory()
        params = self._params(profile_id, profile)
        params["created_at"] = datetime.now(timezone.utc).replace(tzinfo=None)
        self._write(INSERT_PROFILE_SQL, params, profile.name)
        return replace(profile, id=profile_id)

    def update_profile(
        self,
        profile_id: str,
        profile: ColumnMappingProfile,
    ) -> ColumnMappingProfile:
        updated = self._write(
            UPDATE_PROFILE_SQL,
            self._params(profile_id, profile),
            profile.name,
        )
        if updated == 0:
            raise InvalidProfileError(f"No profile with id {profile_id}")
        return replace(profile, id=profile_id)

    def delete_profile(self, profile_id: str) -> None:
        engine = self._db_port.get_budget_engine()
        with engine.begin() as conn:
            conn.execute(
                DELETE_PROFILE_SQL,
                {"id": profile_id, "user_id": self._user_id},
            )

    def _params(self, profile_id: str, profile: ColumnMappingProfile) -> dict:
        return {
            "id": profile_id,
            "user_id": self._user_id,
            "name": profile.name,
            "source_type": profile.source_kind.value,
            "date_column": profile.date_column,
            "description_column": profile.description_column,
            "amount_column": profile.amount_column,
            "date_format": profile.date_format.value,
            "invert_amount": profile.invert_amount,
            "skip_rows": profile.header_row_index,
            "is_default": profile.is_default,
        }

    def _write(self, statement, params: dict, name: str) -> int:
        engine = self._db_port.get_budget_engine()
        try:
            with engine.begin() as conn:
                result = conn.execute(statement, params)
        except IntegrityError as exc:
            raise ProfileNameConflict(name) from exc
        return result.rowcount


__all__ = ["SqlAlchemyProfileRepository", "CREATE_PROFILES_SQL"]
