"""Port for persisting column mapping profiles."""

from typing import Protocol

from src.domain.models.profiles import ColumnMappingProfile


class ProfileRepositoryPort(Protocol):
    """Port exposing the user's saved column mapping profiles."""

    def list_profiles(self) -> list[ColumnMappingProfile]:
        """Return saved profiles ordered by name."""

    def create_profile(
        self,
        profile: ColumnMappingProfile,
    ) -> ColumnMappingProfile:
        """Persist a new profile and return it with its id."""

    def update_profile(
        self,
        profile_id: str,
        profile: ColumnMappingProfile,
    ) -> ColumnMappingProfile:
        """Replace the stored fields of an existing profile."""

    def delete_profile(self, profile_id: str) -> None:
        """Remove a profile."""


__all__ = ["ProfileRepositoryPort"]
