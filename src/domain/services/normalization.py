"""Domain normalization helpers."""

import math
import re

_TOKEN_SEPARATORS = re.compile(r"[\s,.\-]+")


def normalize_text(value: object) -> str:
    """Normalize descriptions and record names for comparison.

    Args:
        value: Raw text from a spreadsheet cell or a stored record.

    Returns:
        str: Trimmed, lower-cased text; empty for missing values.
    """
    if value is None:
        return ""
    return str(value).strip().lower()


def first_token(value: str) -> str:
    """Return the leading word of an already normalized string."""
    return _TOKEN_SEPARATORS.split(value, maxsplit=1)[0]


def is_blank(value: object) -> bool:
    """Return True for cells that carry no content.

    Args:
        value: Raw cell value.

    Returns:
        bool: True for None, NaN and whitespace-only strings.
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


__all__ = ["normalize_text", "first_token", "is_blank"]
