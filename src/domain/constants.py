"""Domain constants for spreadsheet imports."""

HEADER_KEYWORDS = (
    "belopp",
    "text",
    "datum",
    "transaktion",
    "amount",
    "description",
    "date",
    "transaction",
)

HEADER_SCAN_LIMIT = 15

PLACEHOLDER_COLUMN_PREFIX = "Column_"

DEFAULT_PROFILE_NAME = "New profile"

EXCEL_SERIAL_MIN = 40000
EXCEL_SERIAL_MAX = 50000

FREE_TEXT_YEAR_MIN = 2000
FREE_TEXT_YEAR_MAX = 2100


__all__ = [
    "HEADER_KEYWORDS",
    "HEADER_SCAN_LIMIT",
    "PLACEHOLDER_COLUMN_PREFIX",
    "DEFAULT_PROFILE_NAME",
    "EXCEL_SERIAL_MIN",
    "EXCEL_SERIAL_MAX",
    "FREE_TEXT_YEAR_MIN",
    "FREE_TEXT_YEAR_MAX",
]
