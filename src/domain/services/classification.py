"""Classify parsed rows into target kinds and keep match state consistent.

Every operation returns new ``ParsedRow`` values. Selections are plain
frozensets of row indices owned by the caller; the helpers here only compute
the next selection.
"""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import Decimal

from src.domain.models.import_rows import (
    DUPLICATE_TARGETS,
    RECURRING_KINDS,
    DuplicateHit,
    KindMatch,
    MatchAction,
    ParsedRow,
    TargetKind,
)
from src.domain.models.profiles import ColumnMappingProfile
from src.domain.models.records import ExistingCorpora
from src.domain.models.sheet import RawRow
from src.domain.policies.matching import DEFAULT_THRESHOLDS, MatchingThresholds
from src.domain.services.field_parsers import (
    parse_amount,
    parse_date_with_fallback,
)
from src.domain.services.matching import (
    build_candidate,
    find_duplicate,
    find_fuzzy_match,
    records_for_kind,
)
from src.domain.services.normalization import is_blank
from src.domain.services.validation import collect_row_errors

Selection = frozenset[int]

# Default action when the fuzzy matcher finds a record.
_ACTION_ON_MATCH = {
    TargetKind.FIXED: MatchAction.UPDATE,
    TargetKind.INCOME: MatchAction.SKIP,
    TargetKind.SAVING: MatchAction.SKIP,
}


def classify_row(
    index: int,
    raw_row: RawRow,
    profile: ColumnMappingProfile,
    corpora: ExistingCorpora,
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> ParsedRow:
    """Parse one raw row and assign its default target kind.

    Args:
        index: Position of the row in the sheet rows.
        raw_row: Cell values keyed by column label.
        profile: Column mapping used to read the row.
        corpora: Existing records for duplicate detection.
        thresholds: Matching tolerances.

    Returns:
        ParsedRow: Row with validation errors, duplicate flag and defaults.
    """
    raw_date = raw_row.get(profile.date_column)
    raw_amount = raw_row.get(profile.amount_column)
    row_date = parse_date_with_fallback(raw_date, profile.date_format)
    description = _clean_description(raw_row.get(profile.description_column))
    amount = parse_amount(raw_amount, invert=profile.should_invert)
    errors = collect_row_errors(
        raw_date,
        row_date,
        description,
        raw_amount,
        amount,
    )
    row = ParsedRow(
        index=index,
        date=row_date,
        description=description,
        amount=amount,
        raw=raw_row,
        errors=errors,
    )

    hit = None
    if amount is not None:
        hit = find_duplicate(
            build_candidate(row_date, description, amount),
            corpora,
            thresholds,
        )
    if hit is not None:
        return _mark_duplicate(row, hit)
    if amount is not None and amount > 0:
        return reclassify(row, TargetKind.INCOME, corpora, thresholds)
    return replace(row, target_kind=TargetKind.VARIABLE)


def classify_rows(
    raw_rows: Iterable[RawRow],
    profile: ColumnMappingProfile,
    corpora: ExistingCorpora,
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> list[ParsedRow]:
    """Classify every raw row of a sheet in order."""
    return [
        classify_row(index, raw_row, profile, corpora, thresholds)
        for index, raw_row in enumerate(raw_rows)
    ]


def reclassify(
    row: ParsedRow,
    target_kind: TargetKind,
    corpora: ExistingCorpora,
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> ParsedRow:
    """Move a row to another target kind.

    All previous match state is dropped before recurring kinds are matched
    again, so no match from an earlier kind survives the change.

    Args:
        row: Row to update.
        target_kind: New destination.
        corpora: Existing records for fuzzy matching.
        thresholds: Matching tolerances.

    Returns:
        ParsedRow: Row with the new target kind and fresh match state.
    """
    cleared = replace(row, target_kind=target_kind, matches={})
    if target_kind not in RECURRING_KINDS:
        return cleared

    candidate = build_candidate(
        row.date,
        row.description,
        row.amount if row.amount is not None else Decimal("0"),
    )
    record = find_fuzzy_match(
        target_kind,
        candidate,
        records_for_kind(corpora, target_kind),
        thresholds,
    )
    action = _ACTION_ON_MATCH[target_kind] if record else MatchAction.CREATE
    return replace(
        cleared,
        matches={target_kind: KindMatch(record=record, action=action)},
    )


def set_match_action(
    row: ParsedRow,
    kind: TargetKind,
    action: MatchAction,
) -> ParsedRow:
    """Override the action for one recurring kind of a row."""
    if kind not in RECURRING_KINDS:
        raise ValueError(
            f"Match actions apply to recurring kinds, not {kind.value}"
        )
    current = row.match_for(kind)
    record = current.record if current else None
    matches = dict(row.matches)
    matches[kind] = KindMatch(record=record, action=action)
    return replace(row, matches=matches)


def bulk_reclassify(
    rows: Sequence[ParsedRow],
    selection: Selection,
    target_kind: TargetKind,
    corpora: ExistingCorpora,
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> list[ParsedRow]:
    """Reclassify the selected valid, non-duplicate rows.

    Args:
        rows: Rows of the current preview.
        selection: Indices currently selected for import.
        target_kind: New destination.
        corpora: Existing records for fuzzy matching.
        thresholds: Matching tolerances.

    Returns:
        list[ParsedRow]: Rows in the same order; untouched rows are reused.
    """
    return [
        reclassify(row, target_kind, corpora, thresholds)
        if row.index in selection and row.is_valid and not row.duplicate
        else row
        for row in rows
    ]


def default_selection(rows: Iterable[ParsedRow]) -> Selection:
    """Return indices of valid rows that are not duplicates."""
    return frozenset(
        row.index for row in rows if row.is_valid and not row.duplicate
    )


def select_all_valid(rows: Iterable[ParsedRow]) -> Selection:
    """Return indices of every valid row, duplicates included."""
    return frozenset(row.index for row in rows if row.is_valid)


def toggle_selection(selection: Selection, index: int) -> Selection:
    """Add or remove a single row index."""
    if index in selection:
        return selection - {index}
    return selection | {index}


def selection_after_target_change(
    selection: Selection,
    index: int,
    target_kind: TargetKind,
) -> Selection:
    """Drop a row from the selection when it is sent to skip."""
    if target_kind is TargetKind.SKIP:
        return selection - {index}
    return selection


def selection_after_bulk_change(
    selection: Selection,
    target_kind: TargetKind,
) -> Selection:
    """Clear the selection when every selected row is sent to skip."""
    if target_kind is TargetKind.SKIP:
        return frozenset()
    return selection


def selection_after_action_change(
    selection: Selection,
    index: int,
    action: MatchAction,
) -> Selection:
    """Drop a row from the selection when its match action is skip."""
    if action is MatchAction.SKIP:
        return selection - {index}
    return selection


def _mark_duplicate(row: ParsedRow, hit: DuplicateHit) -> ParsedRow:
    target_kind = DUPLICATE_TARGETS[hit.kind]
    matches = {}
    if target_kind in RECURRING_KINDS:
        matches[target_kind] = KindMatch(
            record=hit.record,
            action=MatchAction.SKIP,
        )
    return replace(
        row,
        duplicate=True,
        duplicate_kind=hit.kind,
        target_kind=target_kind,
        matches=matches,
    )


def _clean_description(value: object) -> str:
    if is_blank(value):
        return ""
    return str(value).strip()


__all__ = [
    "Selection",
    "classify_row",
    "classify_rows",
    "reclassify",
    "set_match_action",
    "bulk_reclassify",
    "default_selection",
    "select_all_valid",
    "toggle_selection",
    "selection_after_target_change",
    "selection_after_bulk_change",
    "selection_after_action_change",
]
