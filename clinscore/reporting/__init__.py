"""Narrative reports and display helpers."""

from clinscore.reporting.formatting import (
    estimate_completion_time,
    format_number,
    format_score,
    get_severity_style,
    percentage,
)
from clinscore.reporting.narrative import generate_narrative_report, generate_summary

__all__ = [
    "estimate_completion_time",
    "format_number",
    "format_score",
    "generate_narrative_report",
    "generate_summary",
    "get_severity_style",
    "percentage",
]
