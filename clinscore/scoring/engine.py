"""Scoring engine for computing assessment scores.

The engine is generic: every rule comes from the assessment template.
It holds the template and the response map it was built with and nothing
else, so every operation can be called any number of times, in any order,
with the same result.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from clinscore.alerts.checker import ClinicalAlert, check_clinical_alerts
from clinscore.interpretation.interpreter import Interpretation, interpret
from clinscore.normalizing.normalizer import normalize
from clinscore.reporting.formatting import percentage
from clinscore.reporting.narrative import generate_narrative_report
from clinscore.result import ScoreResult
from clinscore.scoring.methods import (
    average_values,
    resolve_custom_method,
    round_half_up,
    sum_values,
    weighted_sum_values,
)
from clinscore.templates.models import AssessmentTemplate
from clinscore.validation.checks import ResponseValidationResult, Validator, is_empty

logger = logging.getLogger(__name__)


class ScoringError(Exception):
    """Raised when scoring fails."""

    pass


class UnsupportedScoringMethodError(ScoringError):
    """Raised when a template names a scoring method the engine lacks."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unsupported scoring method: {method}")


class ScoringEngine:
    """Scores one set of responses against one assessment template.

    Responsibilities:
    - Normalize each response to a number (unscorable ones are skipped)
    - Compute the raw score (sum, average, weighted_sum, custom)
    - Compute subscale totals
    - Interpret the score and raise clinical alerts
    - Validate the responses and report completion

    Neither input is copied or modified.
    """

    def __init__(
        self,
        template: AssessmentTemplate | Mapping[str, Any],
        responses: Mapping[str, Any],
    ) -> None:
        """Initialize the engine.

        Args:
            template: The assessment template, or a raw template document
                (validated into an AssessmentTemplate).
            responses: Raw responses keyed by question id.

        Raises:
            pydantic.ValidationError: If a raw template document is malformed.
        """
        if not isinstance(template, AssessmentTemplate):
            template = AssessmentTemplate.model_validate(template)
        self.template = template
        self.responses = responses

    def normalized_values(self) -> dict[str, float | None]:
        """Normalized value of every question, keyed by question id."""
        return {
            question.id: normalize(question, self.responses.get(question.id))
            for question in self.template.questions
        }

    def calculate_raw_score(self) -> float:
        """Compute the raw score with the template's scoring method.

        Returns:
            The score rounded to 2 decimal places.

        Raises:
            UnsupportedScoringMethodError: If the method is not one of
                sum, average, weighted_sum or custom.
        """
        config = self.template.scoring_config
        method = config.method
        if method == "custom":
            method = resolve_custom_method(config.custom_logic)
            logger.debug(
                "Custom scoring logic %r resolved to %s", config.custom_logic, method
            )

        values = self.normalized_values()
        if method == "sum":
            raw_score = sum_values(values.values())
        elif method == "average":
            raw_score = average_values(values.values())
        elif method == "weighted_sum":
            raw_score = weighted_sum_values(values, config.weighted_items)
        else:
            logger.warning(
                "Template %s uses unsupported scoring method %r",
                self.template.id or self.template.name,
                method,
            )
            raise UnsupportedScoringMethodError(method)

        return round_half_up(raw_score, 2)

    def calculate_subscale_scores(self) -> dict[str, float]:
        """Sum each subscale over its member questions.

        Subscales are always plain sums, whatever the main scoring method.
        Member ids that are not questions of the template are ignored.

        Returns:
            Mapping of subscale name to total.
        """
        scores: dict[str, float] = {}
        for subscale in self.template.scoring_config.subscales:
            scores[subscale.name] = sum_values(
                normalize(self.template.get_question(item_id), self.responses.get(item_id))
                for item_id in subscale.items
            )
        return scores

    def get_interpretation(self, score: float) -> Interpretation:
        """Interpret a score against the template's ranges.

        Never raises: a score outside every range gets the Unknown category.
        """
        return interpret(self.template.interpretation_rules.ranges, score)

    def check_clinical_alerts(self, score: float) -> list[ClinicalAlert]:
        """Evaluate the clinical cutoff, suicide-risk item and alert rules."""
        return check_clinical_alerts(self.template, self.responses, score)

    def generate_narrative_report(
        self,
        score: float,
        interpretation: Interpretation,
        report_date: date | None = None,
    ) -> str:
        """Generate the clinician-readable narrative for a score."""
        return generate_narrative_report(self.template, score, interpretation, report_date)

    def validate_responses(self) -> ResponseValidationResult:
        """Check responses for missing required answers and invalid shapes."""
        return Validator().validate(self.template, self.responses)

    def get_completion_percentage(self) -> int:
        """Percentage of questions with a non-empty answer."""
        total = len(self.template.questions)
        answered = sum(
            1
            for question in self.template.questions
            if not is_empty(self.responses.get(question.id))
        )
        return percentage(answered, total)

    def evaluate(self, report_date: date | None = None) -> ScoreResult:
        """Run every operation and collect the results.

        Args:
            report_date: Date printed on the narrative (defaults to today).

        Returns:
            ScoreResult for this template and response map.

        Raises:
            UnsupportedScoringMethodError: If the scoring method is unknown.
        """
        raw_score = self.calculate_raw_score()
        interpretation = self.get_interpretation(raw_score)
        subscale_scores = None
        if self.template.scoring_config.subscales:
            subscale_scores = self.calculate_subscale_scores()

        return ScoreResult(
            raw_score=raw_score,
            interpretation=interpretation,
            subscale_scores=subscale_scores,
            alerts=self.check_clinical_alerts(raw_score),
            narrative=self.generate_narrative_report(raw_score, interpretation, report_date),
            completion_percentage=self.get_completion_percentage(),
            validation=self.validate_responses(),
        )
