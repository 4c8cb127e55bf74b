"""Narrative report generation.

Pure string formatting over a template, a score and its interpretation.
The date line is the only part that depends on when it is called.
"""

from datetime import date

from clinscore.interpretation.interpreter import Interpretation
from clinscore.reporting.formatting import format_date, format_number, percentage
from clinscore.templates.models import AssessmentTemplate


def generate_narrative_report(
    template: AssessmentTemplate,
    score: float,
    interpretation: Interpretation,
    report_date: date | None = None,
) -> str:
    """Generate a clinician-readable summary of a scored assessment.

    Args:
        template: The assessment template.
        score: The raw score.
        interpretation: The interpretation of the score.
        report_date: Date printed on the report (defaults to today).

    Returns:
        The multi-line narrative.
    """
    report_date = report_date or date.today()
    max_score = template.scoring_config.max_score or 0
    score_text = format_number(score)

    lines = [
        f"Assessment: {template.name} ({template.abbreviation})",
        f"Date: {format_date(report_date)}",
        f"Score: {score_text}/{format_number(max_score)} ({percentage(score, max_score)}%)",
        f"Interpretation: {interpretation.category}",
        "",
        "Clinical Summary:",
        f"The client completed the {template.name}. "
        f'The score of {score_text} falls within the "{interpretation.category}" range, '
        f"which is described as: {interpretation.description}.",
        "",
        "Recommendations:",
        interpretation.recommendations,
    ]
    return "\n".join(lines)


def generate_summary(
    template: AssessmentTemplate,
    score: float,
    interpretation: Interpretation,
) -> str:
    """One-line summary, e.g. ``PHQ-9: 9/27 - Mild``."""
    max_score = format_number(template.scoring_config.max_score)
    return f"{template.abbreviation}: {format_number(score)}/{max_score} - {interpretation.category}"
