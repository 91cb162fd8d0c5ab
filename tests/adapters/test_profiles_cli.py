"""Tests for the profiles_cli adapter."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine

from src.adapters import profiles_cli
from src.application.ports.database import DatabaseEnginePort
from src.domain.models.profiles import ColumnMappingProfile, SourceKind
from src.infrastructure.profile_repository import SqlAlchemyProfileRepository


class _FakeDatabasePort(DatabaseEnginePort):
    def __init__(self, budget_url: str) -> None:
        self._budget_engine = create_engine(budget_url)

    def get_budget_engine(self):
        return self._budget_engine


@pytest.fixture
def repository(monkeypatch, tmp_path: Path) -> SqlAlchemyProfileRepository:
    db_port = _FakeDatabasePort(f"sqlite:///{tmp_path / 'profiles.db'}")
    repository = SqlAlchemyProfileRepository(db_port, "household")
    repository.prepare_storage()
    repository.create_profile(
        ColumnMappingProfile(
            name="Nordbank",
            date_column="Datum",
            description_column="Text",
            amount_column="Belopp",
            header_row_index=3,
            is_default=True,
        )
    )
    repository.create_profile(
        ColumnMappingProfile(name="Amex", source_kind=SourceKind.CREDIT_CARD)
    )
    monkeypatch.setattr(
        profiles_cli,
        "build_profile_repository",
        lambda: repository,
    )
    monkeypatch.setattr(profiles_cli, "get_app_logger", lambda: MagicMock())
    return repository


def test_list_prints_profiles_by_name(repository, capsys) -> None:
    assert profiles_cli.main(["list"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Amex: creditcard")
    assert lines[1].startswith("Nordbank (default): bank, date=Datum")
    assert "header_row=3" in lines[1]


def test_delete_by_name(repository, capsys) -> None:
    assert profiles_cli.main(["delete", "amex"]) == 0

    assert "Deleted profile 'Amex'." in capsys.readouterr().out
    assert [p.name for p in repository.list_profiles()] == ["Nordbank"]


def test_delete_unknown_profile(repository, capsys) -> None:
    assert profiles_cli.main(["delete", "Missing"]) == 2
    assert "No profile named 'Missing'." in capsys.readouterr().out
