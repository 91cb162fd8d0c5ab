"""Domain policies package."""

from .matching import DEFAULT_THRESHOLDS, MatchingThresholds

__all__ = ["DEFAULT_THRESHOLDS", "MatchingThresholds"]
