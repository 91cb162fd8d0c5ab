"""Domain models package."""

from .import_rows import (
    DuplicateHit,
    DuplicateKind,
    ImportCounts,
    KindMatch,
    MatchAction,
    ParsedRow,
    TargetKind,
)
from .profiles import ColumnMappingProfile, DateFormat, SourceKind
from .records import (
    ExistingCorpora,
    FixedExpenseRecord,
    IncomeRecord,
    NewFixedExpense,
    NewIncome,
    NewSaving,
    NewTransaction,
    RecordUpdate,
    SavingRecord,
    SavingType,
    TransactionRecord,
    TransactionType,
)
from .sheet import SheetTable

__all__ = [
    "DuplicateHit",
    "DuplicateKind",
    "ImportCounts",
    "KindMatch",
    "MatchAction",
    "ParsedRow",
    "TargetKind",
    "ColumnMappingProfile",
    "DateFormat",
    "SourceKind",
    "ExistingCorpora",
    "FixedExpenseRecord",
    "IncomeRecord",
    "NewFixedExpense",
    "NewIncome",
    "NewSaving",
    "NewTransaction",
    "RecordUpdate",
    "SavingRecord",
    "SavingType",
    "TransactionRecord",
    "TransactionType",
    "SheetTable",
]
