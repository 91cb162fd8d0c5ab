"""CLI adapter to preview and commit a spreadsheet import.

The command loads the file, applies a saved profile or the mapping given on
the command line, prints the classified rows and, with ``--commit``, writes
the default selection to the budget database.
"""

import argparse
from pathlib import Path

from src.application.use_cases.execute_import import (
    ExecuteImportUseCase,
    resolve_source_name,
)
from src.application.use_cases.load_sheet import LoadSheetUseCase
from src.application.use_cases.manage_profiles import ManageProfilesUseCase
from src.application.use_cases.preview_import import PreviewImportUseCase
from src.domain.errors import BudgetImportError, ImportAbortedError
from src.domain.models.profiles import (
    ColumnMappingProfile,
    DateFormat,
    SourceKind,
)
from src.infrastructure.container import (
    build_database_adapter,
    build_profile_repository,
    build_record_store,
    build_settings,
    build_spreadsheet_reader,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="budget-import",
        description="Preview and import bank or credit card exports.",
    )
    parser.add_argument("file", type=Path, help="CSV, XLSX or XLS file")
    parser.add_argument("--profile", help="Name of a saved mapping profile")
    parser.add_argument("--date-column")
    parser.add_argument("--description-column")
    parser.add_argument("--amount-column")
    parser.add_argument(
        "--date-format",
        choices=[item.value for item in DateFormat],
    )
    parser.add_argument(
        "--source-type",
        choices=[item.value for item in SourceKind],
    )
    parser.add_argument(
        "--invert",
        action="store_true",
        help="Flip the sign of every amount",
    )
    parser.add_argument(
        "--header-row",
        type=int,
        help="0-based header row; auto-detected when omitted",
    )
    parser.add_argument(
        "--save-profile",
        metavar="NAME",
        help="Save the resulting mapping under this name",
    )
    parser.add_argument(
        "--commit",
        action="store_true",
        help="Write the selected rows instead of only previewing them",
    )
    return parser


def build_mapping(
    args: argparse.Namespace,
    base: ColumnMappingProfile | None,
    header_row_index: int,
) -> ColumnMappingProfile:
    """Merge command-line mapping flags over a saved profile.

    Args:
        args: Parsed command-line arguments.
        base: Saved profile to start from, if any.
        header_row_index: Header row of the loaded sheet.

    Returns:
        ColumnMappingProfile: Working mapping for this run.
    """
    profile = base or ColumnMappingProfile()
    same_profile = not args.save_profile or (
        args.save_profile.strip().lower() == profile.name.lower()
    )
    return ColumnMappingProfile(
        id=profile.id if same_profile else None,
        name=args.save_profile or profile.name,
        source_kind=(
            SourceKind(args.source_type)
            if args.source_type
            else profile.source_kind
        ),
        date_column=args.date_column or profile.date_column,
        description_column=(
            args.description_column or profile.description_column
        ),
        amount_column=args.amount_column or profile.amount_column,
        date_format=(
            DateFormat(args.date_format)
            if args.date_format
            else profile.date_format
        ),
        invert_amount=args.invert or profile.invert_amount,
        header_row_index=header_row_index,
        is_default=profile.is_default,
    )


def _print_preview(preview) -> None:
    for row in preview.rows:
        marker = "x" if row.index in preview.selection else " "
        if not row.is_valid:
            status = "; ".join(row.errors)
        elif row.duplicate:
            status = f"duplicate ({row.duplicate_kind.value})"
        else:
            match = row.match_for(row.target_kind)
            status = row.target_kind.value
            if match is not None:
                status = f"{status} [{match.action.value}]"
        print(
            f"[{marker}] {row.index:>4} {row.date or '-'} "
            f"{row.description[:40]:<40} {row.amount} {status}"
        )
    print(
        f"{len(preview.rows)} rows, {len(preview.selection)} selected "
        "for import."
    )


def main(argv: list[str] | None = None) -> int:
    """Run the import command.

    Args:
        argv: Command-line arguments; defaults to ``sys.argv``.

    Returns:
        int: Process exit code.
    """
    args = _build_parser().parse_args(argv)
    logger = get_app_logger()
    usage_logger = get_usage_logger()

    try:
        content = args.file.read_bytes()
    except OSError as exc:
        logger.error(f"Cannot read {args.file}: {exc}")
        print(f"Cannot read {args.file}: {exc}")
        return 1

    settings = build_settings()
    db_adapter = build_database_adapter()
    record_store = build_record_store(db_adapter, settings)
    profile_repository = build_profile_repository(db_adapter, settings)
    profiles = ManageProfilesUseCase(profile_repository, logger=logger)

    try:
        record_store.prepare_storage()
        profile_repository.prepare_storage()

        saved_profile = None
        if args.profile:
            saved_profile = profiles.find_profile(args.profile)
            if saved_profile is None:
                print(f"No profile named '{args.profile}'.")
                return 2

        header_row = args.header_row
        if header_row is None and saved_profile is not None:
            header_row = saved_profile.header_row_index
        sheet = LoadSheetUseCase(
            build_spreadsheet_reader(),
            logger=logger,
        ).execute(args.file.name, content, header_row)
        mapping = build_mapping(args, saved_profile, sheet.header_row_index)

        if args.save_profile:
            saved_profile = profiles.save_profile(mapping, mapping.id)

        preview = PreviewImportUseCase(
            record_store,
            thresholds=settings.thresholds,
            logger=logger,
        ).execute(sheet, mapping)
        _print_preview(preview)
        if not args.commit:
            return 0

        source_name = resolve_source_name(
            saved_profile.name if saved_profile else None,
            mapping.name,
            args.file.name,
        )
        result = ExecuteImportUseCase(record_store, logger=logger).execute(
            preview.rows,
            preview.selection,
            source_name,
        )
    except ImportAbortedError as exc:
        usage_logger.warning(
            f"Import of {args.file.name} aborted at row {exc.row_index} "
            f"after {exc.counts.total} rows"
        )
        print(str(exc))
        return 1
    except BudgetImportError as exc:
        logger.error(str(exc))
        print(str(exc))
        return 1

    usage_logger.info(
        f"Imported {args.file.name} as {source_name}: "
        f"{result.counts.total} rows"
    )
    print(
        f"Imported {result.counts.variable} transactions, "
        f"{result.counts.income} incomes, {result.counts.fixed} fixed "
        f"expenses and {result.counts.saving} savings."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
