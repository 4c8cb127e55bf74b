"""Display helpers for scores, dates and severities."""

import math
from datetime import date

# rich styles per interpretation severity
SEVERITY_STYLES: dict[str, str] = {
    "minimal": "green",
    "mild": "yellow",
    "moderate": "dark_orange",
    "moderately_severe": "red",
    "severe": "bold red",
    "very_severe": "bold white on red",
}
DEFAULT_SEVERITY_STYLE = "grey50"

MINUTES_PER_QUESTION = 0.5


def format_number(value: float) -> str:
    """Format a number without a trailing ``.0`` for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_date(day: date) -> str:
    """Short month/day/year date, e.g. ``3/7/2025``."""
    return f"{day.month}/{day.day}/{day.year}"


def percentage(score: float, max_score: float) -> int:
    """Score as a whole-number percentage of max_score; 0 without a max."""
    if not max_score or max_score <= 0:
        return 0
    ratio = score / max_score * 100
    if not math.isfinite(ratio):
        return 0
    # halves round up, as in the raw score
    return math.floor(ratio + 0.5)


def format_score(score: float, max_score: float, show_percentage: bool = True) -> str:
    """Format a score as ``score/max`` with an optional percentage."""
    text = f"{format_number(score)}/{format_number(max_score)}"
    if show_percentage:
        text += f" ({percentage(score, max_score)}%)"
    return text


def get_severity_style(severity: str) -> str:
    """rich style for an interpretation severity."""
    return SEVERITY_STYLES.get(severity, DEFAULT_SEVERITY_STYLE)


def estimate_completion_time(question_count: int) -> str:
    """Rough time needed to answer a questionnaire."""
    total_minutes = math.ceil(question_count * MINUTES_PER_QUESTION)
    if total_minutes < 1:
        return "< 1 minute"
    if total_minutes == 1:
        return "1 minute"
    return f"{total_minutes} minutes"
