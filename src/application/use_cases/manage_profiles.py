"""Use case to save, reload and delete column mapping profiles."""

from dataclasses import replace

from src.application.ports.profile_repository import ProfileRepositoryPort
from src.domain.errors import InvalidProfileError, ProfileNameConflict
from src.domain.models.profiles import ColumnMappingProfile
from src.domain.models.sheet import SheetTable
from src.domain.services.sheet_loader import rederive_sheet
from src.infrastructure.logging.logger import get_app_logger


class ManageProfilesUseCase:
    """Manage the user's column mapping profiles."""

    def __init__(self, repository: ProfileRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port persisting profiles for the current user.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def list_profiles(self) -> list[ColumnMappingProfile]:
        """Return saved profiles ordered by name."""
        return sorted(
            self._repository.list_profiles(),
            key=lambda profile: profile.name.lower(),
        )

    def find_profile(self, name: str) -> ColumnMappingProfile | None:
        """Return the profile with ``name``, ignoring case."""
        wanted = name.strip().lower()
        for profile in self._repository.list_profiles():
            if profile.name.lower() == wanted:
                return profile
        return None

    def save_profile(
        self,
        profile: ColumnMappingProfile,
        profile_id: str | None = None,
    ) -> ColumnMappingProfile:
        """Create a profile, or update ``profile_id`` when given.

        Args:
            profile: Mapping to persist.
            profile_id: Id of the profile being edited, if any.

        Returns:
            ColumnMappingProfile: Persisted profile.

        Raises:
            InvalidProfileError: If the name is blank or the header row
                index is negative.
            ProfileNameConflict: If another profile already uses the name.
        """
        name = profile.name.strip()
        if not name:
            raise InvalidProfileError("Enter a name for the profile")
        if profile.header_row_index < 0:
            raise InvalidProfileError("Header row index must be >= 0")

        for existing in self._repository.list_profiles():
            same_name = existing.name.lower() == name.lower()
            if same_name and existing.id != profile_id:
                raise ProfileNameConflict(name)

        cleaned = replace(profile, name=name)
        if profile_id:
            saved = self._repository.update_profile(profile_id, cleaned)
            self._logger.info(f"Updated import profile '{name}'")
        else:
            saved = self._repository.create_profile(cleaned)
            self._logger.info(f"Created import profile '{name}'")
        return saved

    def delete_profile(self, profile_id: str) -> None:
        """Delete a saved profile."""
        self._repository.delete_profile(profile_id)
        self._logger.info(f"Deleted import profile {profile_id}")

    @staticmethod
    def apply_profile(
        sheet: SheetTable,
        profile: ColumnMappingProfile,
    ) -> SheetTable:
        """Re-derive a loaded sheet for the profile's header row."""
        if sheet.header_row_index == profile.header_row_index:
            return sheet
        return rederive_sheet(sheet, profile.header_row_index)


__all__ = ["ManageProfilesUseCase"]
