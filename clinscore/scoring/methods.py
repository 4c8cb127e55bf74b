"""Scoring methods for aggregating normalized values.

Values of None mark unscorable responses and are skipped, never counted
as zero.
"""

import math
from collections.abc import Iterable, Mapping

SUPPORTED_METHODS = ("sum", "average", "weighted_sum", "custom")

# custom_logic keywords that delegate to a built-in method
CUSTOM_DELEGATES = ("average", "weighted_sum")


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (0.125 -> 0.13, 2.5 -> 3).

    Python's round() rounds halves to even; scores are rounded the
    conventional way instead. Values too large to scale are returned as is.
    """
    factor = 10**digits
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def sum_values(values: Iterable[float | None]) -> float:
    """Sum the scorable values."""
    return sum(v for v in values if v is not None)


def average_values(values: Iterable[float | None]) -> float:
    """Average over the scorable values only; 0 when there are none."""
    scored = [v for v in values if v is not None]
    if not scored:
        return 0
    return sum(scored) / len(scored)


def weighted_sum_values(
    values: Mapping[str, float | None],
    weights: Mapping[str, float],
) -> float:
    """Sum of value times weight; questions without a weight count once."""
    total: float = 0
    for question_id, value in values.items():
        if value is None:
            continue
        total += value * weights.get(question_id, 1)
    return total


def resolve_custom_method(custom_logic: str | None) -> str:
    """Map a custom_logic keyword to the method it delegates to.

    Only "average" and "weighted_sum" (any case, surrounding whitespace
    ignored) are recognised; anything else scores as a sum.
    """
    keyword = (custom_logic or "").strip().lower()
    if keyword in CUSTOM_DELEGATES:
        return keyword
    return "sum"
