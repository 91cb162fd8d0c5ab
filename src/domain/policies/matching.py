"""Thresholds used by duplicate detection and fuzzy matching."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MatchingThresholds:
    """Tunable limits for reconciling imported rows with existing records.

    Attributes:
        amount_tolerance: Absolute amount difference still treated as equal.
        description_ratio: Minimum shorter/longer length ratio for a
            substring description to count as a transaction duplicate.
        amount_proximity: Maximum relative amount difference for first-token
            matches on incomes and savings.
        income_token_min: Minimum first-token length for incomes.
        saving_token_min: Minimum first-token length for savings.
        fixed_token_min: Minimum first-token length for fixed expenses.
    """

    amount_tolerance: Decimal = Decimal("0.01")
    description_ratio: Decimal = Decimal("0.8")
    amount_proximity: Decimal = Decimal("0.20")
    income_token_min: int = 3
    saving_token_min: int = 3
    fixed_token_min: int = 4


DEFAULT_THRESHOLDS = MatchingThresholds()


__all__ = ["MatchingThresholds", "DEFAULT_THRESHOLDS"]
