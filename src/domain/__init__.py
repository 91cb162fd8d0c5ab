"""Domain package for import rules and core models."""

from .constants import DEFAULT_PROFILE_NAME, HEADER_KEYWORDS
from .errors import (
    BudgetImportError,
    FileDecodeError,
    ImportAbortedError,
    InvalidProfileError,
    ProfileNameConflict,
    RecordWriteError,
)
from .models import (
    ColumnMappingProfile,
    ExistingCorpora,
    ImportCounts,
    MatchAction,
    ParsedRow,
    SheetTable,
    TargetKind,
)
from .policies import DEFAULT_THRESHOLDS, MatchingThresholds

__all__ = [
    "DEFAULT_PROFILE_NAME",
    "HEADER_KEYWORDS",
    "BudgetImportError",
    "FileDecodeError",
    "ImportAbortedError",
    "InvalidProfileError",
    "ProfileNameConflict",
    "RecordWriteError",
    "ColumnMappingProfile",
    "ExistingCorpora",
    "ImportCounts",
    "MatchAction",
    "ParsedRow",
    "SheetTable",
    "TargetKind",
    "DEFAULT_THRESHOLDS",
    "MatchingThresholds",
]
