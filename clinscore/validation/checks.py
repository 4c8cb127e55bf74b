"""Validation checks for raw responses.

Reports missing required answers and answers whose shape does not fit the
question. Validation is advisory and independent of scoring: an invalid
answer is still skipped, not rejected, when the assessment is scored.
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from clinscore.normalizing.normalizer import (
    QuestionFamily,
    family_of,
    parse_float,
    resolve_option_index,
    to_number,
)
from clinscore.templates.models import AssessmentTemplate, Question

logger = logging.getLogger(__name__)

STEP_EPSILON = 1e-6


class ResponseValidationResult(BaseModel):
    """Result of validating a response map against its template."""

    is_complete: bool
    missing_questions: list[str]
    invalid_responses: list[str]

    @property
    def has_errors(self) -> bool:
        """Whether any answer failed a shape check."""
        return len(self.invalid_responses) > 0


def is_empty(response: Any) -> bool:
    """Whether a response counts as unanswered."""
    return response is None or response == ""


class Validator:
    """Validates raw responses for completeness and shape.

    Checks:
    1. Missing: required questions without an answer
    2. Numeric: parseable, within bounds, on the step grid
    3. Choice: every selection resolves to an option
    4. Text: pattern and numeric bounds from the question's validation block
    """

    def validate(
        self,
        template: AssessmentTemplate,
        responses: Mapping[str, Any],
    ) -> ResponseValidationResult:
        """Validate a response map against a template.

        Args:
            template: The assessment template.
            responses: Raw responses keyed by question id.

        Returns:
            ResponseValidationResult listing missing and invalid question ids.
        """
        missing: list[str] = []
        invalid: list[str] = []

        for question in template.questions:
            response = responses.get(question.id)

            if is_empty(response):
                if question.required:
                    missing.append(question.id)
                continue

            if self._is_invalid(question, response):
                invalid.append(question.id)

        return ResponseValidationResult(
            is_complete=len(missing) == 0,
            missing_questions=missing,
            invalid_responses=invalid,
        )

    def _is_invalid(self, question: Question, response: Any) -> bool:
        """Whether a present answer fails any check for its question type."""
        family = family_of(question)

        if family == QuestionFamily.NUMERIC:
            return self._check_numeric(question, response)
        if family == QuestionFamily.SINGLE_CHOICE:
            return resolve_option_index(question.options, response) is None
        if family == QuestionFamily.MULTI_CHOICE:
            return not self._choices_resolve(question, response)
        if question.type in ("text", "textarea"):
            return self._check_text(question, response)
        return False

    def _check_numeric(self, question: Question, response: Any) -> bool:
        value = parse_float(response)
        if value is None:
            return True

        low = question.lower_bound
        high = question.upper_bound
        if (low is not None and value < low) or (high is not None and value > high):
            return True

        if question.step and math.isfinite(value):
            return not _on_step_grid(value, low if low is not None else 0, question.step)

        return False

    def _choices_resolve(self, question: Question, response: Any) -> bool:
        if not isinstance(response, (list, tuple)):
            return False
        return all(
            resolve_option_index(question.options, selection) is not None
            for selection in response
        )

    def _check_text(self, question: Question, response: Any) -> bool:
        rules = question.validation
        if rules is None:
            return False

        if rules.pattern:
            try:
                compiled = re.compile(rules.pattern)
            except re.error:
                # A broken pattern must not block the respondent.
                logger.debug("Ignoring invalid pattern on %s: %r", question.id, rules.pattern)
            else:
                if compiled.search(_as_text(response)) is None:
                    return True

        if rules.min_value is not None or rules.max_value is not None:
            value = to_number(response)
            if value is None:
                return True
            if rules.min_value is not None and value < rules.min_value:
                return True
            if rules.max_value is not None and value > rules.max_value:
                return True

        return False


def _on_step_grid(value: float, origin: float, step: float) -> bool:
    """Whether value lies on origin + k * step, within STEP_EPSILON."""
    remainder = abs(math.fmod(value - origin, step))
    return remainder <= STEP_EPSILON or abs(step) - remainder <= STEP_EPSILON


def _as_text(response: Any) -> str:
    if isinstance(response, bool):
        return "true" if response else "false"
    return str(response)
