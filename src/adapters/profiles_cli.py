"""CLI adapter to list and delete saved column mapping profiles."""

import argparse

from src.application.use_cases.manage_profiles import ManageProfilesUseCase
from src.domain.errors import BudgetImportError
from src.infrastructure.container import build_profile_repository
from src.infrastructure.logging.logger import get_app_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="budget-profiles",
        description="Manage saved import profiles.",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List saved profiles")
    delete = commands.add_parser("delete", help="Delete a profile by name")
    delete.add_argument("name")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the profiles command and return the exit code."""
    args = _build_parser().parse_args(argv)
    logger = get_app_logger()
    repository = build_profile_repository()
    use_case = ManageProfilesUseCase(repository, logger=logger)

    try:
        repository.prepare_storage()
        if args.command == "list":
            for profile in use_case.list_profiles():
                default = " (default)" if profile.is_default else ""
                print(
                    f"{profile.name}{default}: {profile.source_kind.value}, "
                    f"date={profile.date_column}, "
                    f"description={profile.description_column}, "
                    f"amount={profile.amount_column}, "
                    f"format={profile.date_format.value}, "
                    f"header_row={profile.header_row_index}"
                )
            return 0

        profile = use_case.find_profile(args.name)
        if profile is None:
            print(f"No profile named '{args.name}'.")
            return 2
        use_case.delete_profile(profile.id)
    except BudgetImportError as exc:
        logger.error(str(exc))
        print(str(exc))
        return 1

    print(f"Deleted profile '{profile.name}'.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
