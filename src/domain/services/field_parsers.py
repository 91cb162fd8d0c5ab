"""Parsers turning raw date and amount cells into normalized values.

Both parsers are total: any input that cannot be understood yields ``None``
instead of raising, so row classification only has to check for missing
values.
"""

import math
import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation

from dateutil import parser as date_parser

from src.domain.constants import (
    EXCEL_SERIAL_MAX,
    EXCEL_SERIAL_MIN,
    FREE_TEXT_YEAR_MAX,
    FREE_TEXT_YEAR_MIN,
)
from src.domain.models.profiles import DateFormat
from src.domain.services.normalization import is_blank

_EXCEL_EPOCH = date(1899, 12, 30)

_DatePattern = tuple[re.Pattern[str], tuple[int, int, int]]

# Pattern and (year, month, day) group positions per declared format.
_DATE_PATTERNS: dict[DateFormat, _DatePattern] = {
    DateFormat.ISO: (re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), (1, 2, 3)),
    DateFormat.DAY_MONTH_SLASH: (
        re.compile(r"^(\d{2})/(\d{2})/(\d{4})$"),
        (3, 2, 1),
    ),
    DateFormat.DAY_MONTH_DOT: (
        re.compile(r"^(\d{2})\.(\d{2})\.(\d{4})$"),
        (3, 2, 1),
    ),
    DateFormat.MONTH_DAY_SLASH: (
        re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"),
        (3, 1, 2),
    ),
}

FALLBACK_DATE_FORMATS = (
    DateFormat.MONTH_DAY_SLASH,
    DateFormat.DAY_MONTH_SLASH,
    DateFormat.ISO,
    DateFormat.DAY_MONTH_DOT,
)

_AMOUNT_NOISE = re.compile(r"[^\d,.\-]")


def parse_date(
    raw: object,
    date_format: DateFormat | str | None,
) -> date | None:
    """Parse a date cell.

    The declared format is tried first, then an Excel serial number, then a
    free-text parse restricted to plausible years.

    Args:
        raw: Cell value (string, number, date or empty).
        date_format: Layout declared by the mapping profile.

    Returns:
        date | None: Parsed date, or None when nothing matches.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if is_blank(raw) or isinstance(raw, bool):
        return None

    cleaned = str(raw).strip()
    parsed = _parse_declared_format(cleaned, date_format)
    if parsed is not None:
        return parsed
    parsed = _parse_excel_serial(cleaned)
    if parsed is not None:
        return parsed
    return _parse_free_text(cleaned)


def parse_date_with_fallback(
    raw: object,
    date_format: DateFormat | str | None,
) -> date | None:
    """Parse a date, retrying the other known formats on failure.

    Args:
        raw: Cell value.
        date_format: Layout declared by the mapping profile.

    Returns:
        date | None: Parsed date, or None when no format matches.
    """
    parsed = parse_date(raw, date_format)
    if parsed is not None or is_blank(raw):
        return parsed
    for fallback in FALLBACK_DATE_FORMATS:
        parsed = parse_date(raw, fallback)
        if parsed is not None:
            return parsed
    return None


def parse_amount(raw: object, invert: bool = False) -> Decimal | None:
    """Parse an amount cell written with any common number formatting.

    Args:
        raw: Cell value such as ``-1 234,56``, ``"1234.56 kr"`` or a number.
        invert: Flip the sign of the parsed amount.

    Returns:
        Decimal | None: Signed amount, or None when the cell is not a number.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, Decimal)):
        amount = _number_to_decimal(raw)
    else:
        cleaned = _AMOUNT_NOISE.sub("", "".join(str(raw).split()))
        cleaned = cleaned.replace(",", ".", 1)
        amount = _text_to_decimal(cleaned)
    if amount is None:
        return None
    return -amount if invert else amount


def _parse_declared_format(
    cleaned: str,
    date_format: DateFormat | str | None,
) -> date | None:
    try:
        resolved = DateFormat(date_format)
    except ValueError:
        return None
    pattern, (year_group, month_group, day_group) = _DATE_PATTERNS[resolved]
    match = pattern.match(cleaned)
    if not match:
        return None
    try:
        return date(
            int(match.group(year_group)),
            int(match.group(month_group)),
            int(match.group(day_group)),
        )
    except ValueError:
        return None


def _parse_excel_serial(cleaned: str) -> date | None:
    try:
        serial = float(cleaned)
    except ValueError:
        return None
    if not EXCEL_SERIAL_MIN < serial < EXCEL_SERIAL_MAX:
        return None
    return _EXCEL_EPOCH + timedelta(days=math.floor(serial))


def _parse_free_text(cleaned: str) -> date | None:
    try:
        parsed = date_parser.parse(cleaned)
    except (ValueError, OverflowError):
        return None
    if not FREE_TEXT_YEAR_MIN < parsed.year < FREE_TEXT_YEAR_MAX:
        return None
    return parsed.date()


def _number_to_decimal(value: int | float | Decimal) -> Decimal | None:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    return Decimal(str(value))


def _text_to_decimal(cleaned: str) -> Decimal | None:
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


__all__ = [
    "FALLBACK_DATE_FORMATS",
    "parse_date",
    "parse_date_with_fallback",
    "parse_amount",
]
