"""Domain models for rows moving through an import preview."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum

from src.domain.models.records import RecurringRecord
from src.domain.models.sheet import RawRow


class TargetKind(str, Enum):
    """Destination an imported row is written to."""

    VARIABLE = "variable"
    INCOME = "income"
    FIXED = "fixed"
    SAVING = "saving"
    SKIP = "skip"


class DuplicateKind(str, Enum):
    """Corpus in which an identical record was found."""

    TRANSACTION = "transaction"
    INCOME = "income"
    FIXED = "fixed"
    SAVING = "saving"


class MatchAction(str, Enum):
    """What to do with a row that may correspond to an existing record."""

    CREATE = "create"
    UPDATE = "update"
    SKIP = "skip"


RECURRING_KINDS = (TargetKind.INCOME, TargetKind.FIXED, TargetKind.SAVING)

DUPLICATE_TARGETS: Mapping[DuplicateKind, TargetKind] = {
    DuplicateKind.TRANSACTION: TargetKind.VARIABLE,
    DuplicateKind.INCOME: TargetKind.INCOME,
    DuplicateKind.FIXED: TargetKind.FIXED,
    DuplicateKind.SAVING: TargetKind.SAVING,
}


@dataclass(frozen=True)
class KindMatch:
    """Matched record and chosen action for one recurring target kind."""

    record: RecurringRecord | None
    action: MatchAction


@dataclass(frozen=True)
class ParsedRow:
    """Normalized spreadsheet row with its reconciliation state.

    Attributes:
        index: Position of the row in the raw row list.
        date: Parsed booking date.
        description: Trimmed description text.
        amount: Signed amount after optional inversion.
        raw: Original cell values keyed by column label.
        errors: Validation messages; empty for valid rows.
        duplicate: True when the row already exists in the user's data.
        duplicate_kind: Corpus holding the duplicate.
        target_kind: Destination chosen for the row.
        matches: Match state per recurring target kind.
    """

    index: int
    date: date | None
    description: str
    amount: Decimal | None
    raw: RawRow
    errors: tuple[str, ...] = ()
    duplicate: bool = False
    duplicate_kind: DuplicateKind | None = None
    target_kind: TargetKind = TargetKind.VARIABLE
    matches: Mapping[TargetKind, KindMatch] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """Return True when the row has no validation errors."""
        return not self.errors

    def match_for(self, kind: TargetKind) -> KindMatch | None:
        """Return the match state for a target kind, if any."""
        return self.matches.get(kind)


@dataclass(frozen=True)
class DuplicateHit:
    """Existing record an imported row duplicates."""

    kind: DuplicateKind
    record: object


@dataclass(frozen=True)
class ImportCounts:
    """Rows written per target kind during an import run."""

    variable: int = 0
    income: int = 0
    fixed: int = 0
    saving: int = 0

    @property
    def total(self) -> int:
        """Return the number of written rows across kinds."""
        return self.variable + self.income + self.fixed + self.saving

    def increment(self, kind: TargetKind) -> "ImportCounts":
        """Return counts with one more row for ``kind``."""
        return replace(self, **{kind.value: getattr(self, kind.value) + 1})


__all__ = [
    "TargetKind",
    "DuplicateKind",
    "MatchAction",
    "RECURRING_KINDS",
    "DUPLICATE_TARGETS",
    "KindMatch",
    "ParsedRow",
    "DuplicateHit",
    "ImportCounts",
]
