"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values read from storage to Decimal.

    Args:
        value: Raw numeric value from SQL drivers (Decimal, int, float, str).

    Returns:
        Decimal: Normalized numeric value, zero for missing values.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_cents(value: Decimal) -> Decimal:
    """Round an amount to two decimals for storage."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


__all__ = ["coerce_decimal", "to_cents"]
