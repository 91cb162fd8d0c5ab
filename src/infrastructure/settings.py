"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
import os

import dotenv

from src.domain.policies.matching import DEFAULT_THRESHOLDS, MatchingThresholds
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class BudgetSettings:
    """Settings for the import engine.

    Attributes:
        user_id: Owner of the records and profiles being read and written.
        thresholds: Matching tolerances, overridable per installation.
    """

    user_id: str = "local"
    thresholds: MatchingThresholds = field(default=DEFAULT_THRESHOLDS)

    @classmethod
    def from_env(cls) -> "BudgetSettings":
        """Build settings from environment variables.

        Returns:
            BudgetSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        user_id = os.getenv("BUDGET_USER_ID", "local").strip() or "local"
        thresholds = MatchingThresholds(
            amount_tolerance=cls._decimal_override(
                "IMPORT_AMOUNT_TOLERANCE",
                DEFAULT_THRESHOLDS.amount_tolerance,
                logger,
            ),
            description_ratio=cls._decimal_override(
                "IMPORT_DESCRIPTION_RATIO",
                DEFAULT_THRESHOLDS.description_ratio,
                logger,
            ),
            amount_proximity=cls._decimal_override(
                "IMPORT_AMOUNT_PROXIMITY",
                DEFAULT_THRESHOLDS.amount_proximity,
                logger,
            ),
        )
        return cls(user_id=user_id, thresholds=thresholds)

    @staticmethod
    def _decimal_override(name: str, default: Decimal, logger) -> Decimal:
        """Read a non-negative Decimal override from the environment.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or invalid.
            logger: Logger used for warnings.

        Returns:
            Decimal: Parsed override or the default.
        """
        raw_value = os.getenv(name)
        if raw_value is None or not raw_value.strip():
            return default
        try:
            value = Decimal(raw_value.strip())
        except InvalidOperation:
            logger.warning(f"Ignoring invalid {name}={raw_value!r}")
            return default
        if not value.is_finite() or value < 0:
            logger.warning(f"Ignoring invalid {name}={raw_value!r}")
            return default
        return value


__all__ = ["BudgetSettings"]
