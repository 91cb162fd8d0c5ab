"""Domain services package."""

from .classification import (
    bulk_reclassify,
    classify_rows,
    default_selection,
    reclassify,
    set_match_action,
)
from .field_parsers import parse_amount, parse_date, parse_date_with_fallback
from .matching import find_duplicate, find_fuzzy_match
from .normalization import first_token, is_blank, normalize_text
from .sheet_loader import detect_header_row, load_sheet, rederive_sheet
from .validation import collect_row_errors

__all__ = [
    "bulk_reclassify",
    "classify_rows",
    "default_selection",
    "reclassify",
    "set_match_action",
    "parse_amount",
    "parse_date",
    "parse_date_with_fallback",
    "find_duplicate",
    "find_fuzzy_match",
    "first_token",
    "is_blank",
    "normalize_text",
    "detect_header_row",
    "load_sheet",
    "rederive_sheet",
    "collect_row_errors",
]
