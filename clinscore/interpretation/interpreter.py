"""Interpreter for mapping a score onto its interpretation band.

Bands are closed on both ends and the first matching band wins. Overlap
and gaps are the template author's concern; a score outside every band
gets the Unknown fallback rather than an error.
"""

import logging

from pydantic import BaseModel

from clinscore.templates.models import InterpretationRange

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown"


class Interpretation(BaseModel):
    """Clinical interpretation of a score."""

    category: str
    description: str
    severity: str
    clinical_significance: str
    recommendations: str

    @property
    def is_unknown(self) -> bool:
        """Whether the score fell outside every band."""
        return self.category == UNKNOWN_CATEGORY


def unknown_interpretation() -> Interpretation:
    """Fallback for a score that matches no band."""
    return Interpretation(
        category=UNKNOWN_CATEGORY,
        description="Score interpretation not available",
        severity="unknown",
        clinical_significance="unknown",
        recommendations="Consult with the treating clinician.",
    )


def find_range(
    ranges: list[InterpretationRange],
    score: float,
) -> InterpretationRange | None:
    """Get the first band containing the score, or None."""
    for band in ranges:
        if band.min <= score <= band.max:
            return band
    return None


def interpret(ranges: list[InterpretationRange], score: float) -> Interpretation:
    """Interpret a score against a list of bands.

    Args:
        ranges: Interpretation bands in priority order.
        score: The score to interpret.

    Returns:
        The matching Interpretation, or the Unknown fallback.
    """
    band = find_range(ranges, score)
    if band is None:
        logger.debug("Score %s does not match any interpretation range", score)
        return unknown_interpretation()

    return Interpretation(
        category=band.label,
        description=band.description,
        severity=band.severity,
        clinical_significance=band.clinical_significance,
        recommendations=band.recommendations,
    )
