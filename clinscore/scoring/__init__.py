"""Scoring engine and aggregation methods."""

from clinscore.scoring.engine import (
    ScoringEngine,
    ScoringError,
    UnsupportedScoringMethodError,
)
from clinscore.scoring.methods import (
    SUPPORTED_METHODS,
    average_values,
    resolve_custom_method,
    round_half_up,
    sum_values,
    weighted_sum_values,
)

__all__ = [
    "SUPPORTED_METHODS",
    "ScoringEngine",
    "ScoringError",
    "UnsupportedScoringMethodError",
    "average_values",
    "resolve_custom_method",
    "round_half_up",
    "sum_values",
    "weighted_sum_values",
]
