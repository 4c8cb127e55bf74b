"""Clinical alert checks.

Alerts accumulate: the clinical cutoff, the suicide-risk item and every
template-authored rule are all evaluated, in that order, and any number of
them may fire together.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel

from clinscore.alerts.conditions import evaluate_condition
from clinscore.normalizing.normalizer import normalize
from clinscore.reporting.formatting import format_number
from clinscore.templates.models import AssessmentTemplate

CUTOFF_MESSAGE = "Score exceeds clinical cutoff ({cutoff}). Consider further evaluation."
SUICIDE_RISK_MESSAGE = "Suicide risk indicated. Immediate safety assessment required."


class ClinicalAlert(BaseModel):
    """An alert raised for the clinician."""

    type: Literal["info", "warning", "critical"]
    message: str
    action_required: bool


def check_clinical_alerts(
    template: AssessmentTemplate,
    responses: Mapping[str, Any],
    score: float,
) -> list[ClinicalAlert]:
    """Evaluate every alert source for a scored assessment.

    Args:
        template: The assessment template.
        responses: Raw responses keyed by question id.
        score: The overall score.

    Returns:
        All alerts that fired, in evaluation order.
    """
    alerts: list[ClinicalAlert] = []
    cutoffs = template.clinical_cutoffs

    if cutoffs.clinical_cutoff is not None and score >= cutoffs.clinical_cutoff:
        alerts.append(
            ClinicalAlert(
                type="warning",
                message=CUTOFF_MESSAGE.format(cutoff=format_number(cutoffs.clinical_cutoff)),
                action_required=True,
            )
        )

    # The risk item is checked on its own value, whatever the total score.
    if cutoffs.suicide_risk_item and cutoffs.suicide_risk_threshold is not None:
        value = normalize(
            template.get_question(cutoffs.suicide_risk_item),
            responses.get(cutoffs.suicide_risk_item),
        )
        if value is not None and value >= cutoffs.suicide_risk_threshold:
            alerts.append(
                ClinicalAlert(
                    type="critical",
                    message=SUICIDE_RISK_MESSAGE,
                    action_required=True,
                )
            )

    for rule in template.interpretation_rules.clinical_alerts:
        if evaluate_condition(rule.condition, score):
            alerts.append(
                ClinicalAlert(
                    type=rule.severity,
                    message=rule.message,
                    action_required=rule.action_required,
                )
            )

    return alerts
