"""Domain validation helpers."""

from datetime import date
from decimal import Decimal


def collect_row_errors(
    raw_date: object,
    parsed_date: date | None,
    description: str,
    raw_amount: object,
    parsed_amount: Decimal | None,
) -> tuple[str, ...]:
    """Collect validation messages for a parsed spreadsheet row.

    Args:
        raw_date: Date cell as read from the sheet.
        parsed_date: Result of date parsing.
        description: Trimmed description.
        raw_amount: Amount cell as read from the sheet.
        parsed_amount: Result of amount parsing.

    Returns:
        tuple[str, ...]: One message per invalid field, empty when valid.
    """
    errors = []
    if parsed_date is None:
        errors.append(f"Invalid date: {_display(raw_date)}")
    if not description:
        errors.append("Missing description")
    if parsed_amount is None:
        errors.append(f"Invalid amount: {_display(raw_amount)}")
    return tuple(errors)


def _display(value: object) -> str:
    return "" if value is None else str(value)


__all__ = ["collect_row_errors"]
