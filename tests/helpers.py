"""Template builders shared by the tests."""

from clinscore.templates import AssessmentTemplate


def make_template(
    questions: list[dict],
    method: str = "sum",
    max_score: float = 0,
    scoring: dict | None = None,
    **sections,
) -> AssessmentTemplate:
    """Build a small template for a test."""
    scoring_config = {"method": method, "max_score": max_score, **(scoring or {})}
    return AssessmentTemplate.model_validate(
        {
            "id": "test",
            "name": "Test Assessment",
            "abbreviation": "TA",
            "questions": questions,
            "scoring_config": scoring_config,
            **sections,
        }
    )


def scale_question(question_id: str, low: float = 0, high: float = 4, **extra) -> dict:
    """A scale question definition."""
    return {"id": question_id, "type": "scale", "min": low, "max": high, **extra}
