"""Application use cases package."""

from .execute_import import (
    ExecuteImportUseCase,
    ImportResult,
    eligible_rows,
    resolve_source_name,
)
from .load_sheet import LoadSheetUseCase
from .manage_profiles import ManageProfilesUseCase
from .preview_import import ImportPreview, PreviewImportUseCase

__all__ = [
    "ExecuteImportUseCase",
    "ImportResult",
    "eligible_rows",
    "resolve_source_name",
    "LoadSheetUseCase",
    "ManageProfilesUseCase",
    "ImportPreview",
    "PreviewImportUseCase",
]
