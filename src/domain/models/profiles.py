"""Domain models for column mapping profiles."""

from dataclasses import dataclass
from enum import Enum

from src.domain.constants import DEFAULT_PROFILE_NAME


class SourceKind(str, Enum):
    """Kind of export a profile describes."""

    BANK = "bank"
    CREDIT_CARD = "creditcard"


class DateFormat(str, Enum):
    """Date layouts a profile can declare for its date column."""

    ISO = "YYYY-MM-DD"
    DAY_MONTH_SLASH = "DD/MM/YYYY"
    DAY_MONTH_DOT = "DD.MM.YYYY"
    MONTH_DAY_SLASH = "MM/DD/YYYY"


@dataclass(frozen=True)
class ColumnMappingProfile:
    """Named mapping from spreadsheet columns to row fields.

    Attributes:
        name: Profile name, unique per user regardless of case.
        source_kind: Bank or credit card export.
        date_column: Column label holding the booking date.
        description_column: Column label holding the payee text.
        amount_column: Column label holding the signed amount.
        date_format: Expected layout of the date column.
        invert_amount: Flip amount signs on import.
        header_row_index: Grid row holding the column labels.
        id: Store identifier once persisted.
        is_default: Marks the user's preferred profile.
    """

    name: str = DEFAULT_PROFILE_NAME
    source_kind: SourceKind = SourceKind.BANK
    date_column: str = ""
    description_column: str = ""
    amount_column: str = ""
    date_format: DateFormat = DateFormat.ISO
    invert_amount: bool = False
    header_row_index: int = 0
    id: str | None = None
    is_default: bool = False

    @property
    def should_invert(self) -> bool:
        """Return True when amounts must change sign on import.

        Credit card exports list purchases as positive numbers.
        """
        return self.source_kind is SourceKind.CREDIT_CARD or self.invert_amount

    @property
    def has_required_columns(self) -> bool:
        """Return True when date, description and amount are mapped."""
        return bool(
            self.date_column and self.description_column and self.amount_column
        )


__all__ = ["SourceKind", "DateFormat", "ColumnMappingProfile"]
