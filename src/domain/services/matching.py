"""Duplicate detection and fuzzy matching against existing records.

Both searches are expressed as ordered tuples of rules. Duplicate rules run
transaction, income, fixed expense, saving; fuzzy tiers run exact name,
containment, first token. The first rule that finds a record wins.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.models.import_rows import (
    DuplicateHit,
    DuplicateKind,
    TargetKind,
)
from src.domain.models.records import (
    ExistingCorpora,
    RecurringRecord,
    TransactionRecord,
)
from src.domain.policies.matching import DEFAULT_THRESHOLDS, MatchingThresholds
from src.domain.services.normalization import first_token, normalize_text


@dataclass(frozen=True)
class MatchCandidate:
    """Normalized view of an imported row used by every rule."""

    date: date | None
    description: str
    amount: Decimal

    @property
    def absolute_amount(self) -> Decimal:
        return abs(self.amount)


def build_candidate(
    row_date: date | None,
    description: str,
    amount: Decimal,
) -> MatchCandidate:
    """Return a MatchCandidate with a normalized description."""
    return MatchCandidate(
        date=row_date,
        description=normalize_text(description),
        amount=amount,
    )


# ---------------------------------------------------------------------------
# Duplicate detection
# ---------------------------------------------------------------------------


def is_transaction_duplicate(
    candidate: MatchCandidate,
    existing: TransactionRecord,
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Return True when a stored transaction already represents the row.

    Args:
        candidate: Normalized imported row.
        existing: Stored one-off transaction.
        thresholds: Tolerances for amount and description comparison.

    Returns:
        bool: True for same date, amount within tolerance and a matching
        description.
    """
    if existing.date != candidate.date:
        return False
    difference = abs(abs(existing.amount) - candidate.absolute_amount)
    if difference > thresholds.amount_tolerance:
        return False
    existing_description = normalize_text(existing.description)
    if existing_description == candidate.description:
        return True
    return _is_close_substring(
        existing_description,
        candidate.description,
        thresholds.description_ratio,
    )


def is_recurring_duplicate(
    candidate: MatchCandidate,
    record: RecurringRecord,
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Return True when a recurring record has the row's name and amount."""
    name = normalize_text(record.name)
    if not name:
        return False
    difference = abs(record.amount - candidate.absolute_amount)
    if difference > thresholds.amount_tolerance:
        return False
    return _names_overlap(name, candidate.description)


@dataclass(frozen=True)
class DuplicateRule:
    """One corpus searched for duplicates, in precedence order."""

    kind: DuplicateKind
    records: Callable[[ExistingCorpora], Sequence[object]]
    predicate: Callable[[MatchCandidate, object, MatchingThresholds], bool]


DUPLICATE_RULES = (
    DuplicateRule(
        DuplicateKind.TRANSACTION,
        lambda corpora: corpora.transactions,
        is_transaction_duplicate,
    ),
    DuplicateRule(
        DuplicateKind.INCOME,
        lambda corpora: corpora.incomes,
        is_recurring_duplicate,
    ),
    DuplicateRule(
        DuplicateKind.FIXED,
        lambda corpora: corpora.fixed_expenses,
        is_recurring_duplicate,
    ),
    DuplicateRule(
        DuplicateKind.SAVING,
        lambda corpora: corpora.savings,
        is_recurring_duplicate,
    ),
)


def find_duplicate(
    candidate: MatchCandidate,
    corpora: ExistingCorpora,
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
    rules: Sequence[DuplicateRule] = DUPLICATE_RULES,
) -> DuplicateHit | None:
    """Search the corpora for a record identical to the imported row.

    Args:
        candidate: Normalized imported row.
        corpora: Existing records of the user.
        thresholds: Matching tolerances.
        rules: Ordered duplicate rules.

    Returns:
        DuplicateHit | None: First hit in rule order, if any.
    """
    if (
        candidate.date is None
        or not candidate.amount
        or not candidate.description
    ):
        return None
    for rule in rules:
        for record in rule.records(corpora):
            if rule.predicate(candidate, record, thresholds):
                return DuplicateHit(kind=rule.kind, record=record)
    return None


# ---------------------------------------------------------------------------
# Fuzzy matching
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FuzzyPolicy:
    """First-token constraints for one recurring kind."""

    token_min_length: int
    amount_proximity: Decimal | None


def fuzzy_policy(
    kind: TargetKind,
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> FuzzyPolicy:
    """Return the first-token policy for a recurring target kind."""
    if kind is TargetKind.FIXED:
        return FuzzyPolicy(thresholds.fixed_token_min, None)
    if kind is TargetKind.INCOME:
        return FuzzyPolicy(
            thresholds.income_token_min,
            thresholds.amount_proximity,
        )
    if kind is TargetKind.SAVING:
        return FuzzyPolicy(
            thresholds.saving_token_min,
            thresholds.amount_proximity,
        )
    raise ValueError(f"No fuzzy matching for target kind {kind.value}")


def matches_exact_name(
    candidate: MatchCandidate,
    record: RecurringRecord,
    policy: FuzzyPolicy,
) -> bool:
    """Tier 1: case-insensitive name equality."""
    return normalize_text(record.name) == candidate.description


def matches_containment(
    candidate: MatchCandidate,
    record: RecurringRecord,
    policy: FuzzyPolicy,
) -> bool:
    """Tier 2: name contained in the description or the reverse."""
    name = normalize_text(record.name)
    if not name:
        return False
    return _names_overlap(name, candidate.description)


def matches_first_token(
    candidate: MatchCandidate,
    record: RecurringRecord,
    policy: FuzzyPolicy,
) -> bool:
    """Tier 3: leading words agree, optionally with similar amounts."""
    description_token = first_token(candidate.description)
    if len(description_token) < policy.token_min_length:
        return False
    record_token = first_token(normalize_text(record.name))
    if not record_token:
        return False
    if not (
        record_token.startswith(description_token)
        or description_token.startswith(record_token)
    ):
        return False
    if policy.amount_proximity is None:
        return True
    return _amounts_close(
        record.amount,
        candidate.absolute_amount,
        policy.amount_proximity,
    )


FUZZY_TIERS = (matches_exact_name, matches_containment, matches_first_token)


def find_fuzzy_match(
    kind: TargetKind,
    candidate: MatchCandidate,
    records: Sequence[RecurringRecord],
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> RecurringRecord | None:
    """Find the best existing record for a row assigned to ``kind``.

    Args:
        kind: Recurring target kind (income, fixed or saving).
        candidate: Normalized imported row.
        records: Existing records of that kind.
        thresholds: Matching tolerances.

    Returns:
        RecurringRecord | None: First hit in tier order, if any.
    """
    if not candidate.description:
        return None
    policy = fuzzy_policy(kind, thresholds)
    for tier in FUZZY_TIERS:
        for record in records:
            if tier(candidate, record, policy):
                return record
    return None


def records_for_kind(
    corpora: ExistingCorpora,
    kind: TargetKind,
) -> Sequence[RecurringRecord]:
    """Return the recurring corpus a target kind is matched against."""
    if kind is TargetKind.INCOME:
        return corpora.incomes
    if kind is TargetKind.FIXED:
        return corpora.fixed_expenses
    if kind is TargetKind.SAVING:
        return corpora.savings
    return ()


def _names_overlap(name: str, description: str) -> bool:
    return name == description or name in description or description in name


def _is_close_substring(first: str, second: str, ratio: Decimal) -> bool:
    if not (first in second or second in first):
        return False
    shorter, longer = sorted((first, second), key=len)
    if not longer:
        return False
    return Decimal(len(shorter)) / Decimal(len(longer)) >= ratio


def _amounts_close(
    record_amount: Decimal,
    amount: Decimal,
    proximity: Decimal,
) -> bool:
    largest = max(record_amount, amount)
    if largest <= 0:
        return record_amount == amount
    return abs(record_amount - amount) / largest < proximity


__all__ = [
    "MatchCandidate",
    "build_candidate",
    "is_transaction_duplicate",
    "is_recurring_duplicate",
    "DuplicateRule",
    "DUPLICATE_RULES",
    "find_duplicate",
    "FuzzyPolicy",
    "fuzzy_policy",
    "matches_exact_name",
    "matches_containment",
    "matches_first_token",
    "FUZZY_TIERS",
    "find_fuzzy_match",
    "records_for_kind",
]
