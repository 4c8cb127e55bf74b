"""Interpretation layer for applying score interpretation bands."""

from clinscore.interpretation.interpreter import (
    UNKNOWN_CATEGORY,
    Interpretation,
    find_range,
    interpret,
    unknown_interpretation,
)

__all__ = [
    "UNKNOWN_CATEGORY",
    "Interpretation",
    "find_range",
    "interpret",
    "unknown_interpretation",
]
