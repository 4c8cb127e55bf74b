"""Score result returned to callers of the scoring engine."""

from pydantic import BaseModel, Field

from clinscore.alerts.checker import ClinicalAlert
from clinscore.interpretation.interpreter import Interpretation
from clinscore.validation.checks import ResponseValidationResult


class ScoreResult(BaseModel):
    """Everything computed for one scored assessment.

    Produced on demand; callers own persistence.
    """

    raw_score: float
    interpretation: Interpretation
    subscale_scores: dict[str, float] | None = None
    alerts: list[ClinicalAlert] = Field(default_factory=list)
    narrative: str
    completion_percentage: int
    validation: ResponseValidationResult

    @property
    def requires_action(self) -> bool:
        """Whether any alert asks the clinician to act."""
        return any(alert.action_required for alert in self.alerts)

    @property
    def has_critical_alert(self) -> bool:
        """Whether any alert is critical."""
        return any(alert.type == "critical" for alert in self.alerts)
