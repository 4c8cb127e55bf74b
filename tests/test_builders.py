"""Tests for the assessment instance builder."""

from datetime import datetime, timedelta, timezone

from clinscore.builders import AssessmentInstance, create_instance
from clinscore.templates import AssessmentTemplate


class TestCreateInstance:
    """Tests for create_instance."""

    def test_defaults(self, phq9_template: AssessmentTemplate) -> None:
        instance = create_instance(phq9_template, therapist_id="t-1", client_id="c-1")

        assert isinstance(instance, AssessmentInstance)
        assert instance.template_id == "phq9"
        assert instance.title == "Patient Health Questionnaire-9"
        assert instance.status == "assigned"
        assert instance.instructions == phq9_template.instructions
        assert instance.case_id is None
        assert instance.due_date is None
        assert instance.expires_at is None
        assert instance.reminder_frequency == "none"

    def test_expires_a_week_after_due(self, phq9_template: AssessmentTemplate) -> None:
        due = datetime(2025, 3, 1, 9, 0)
        instance = create_instance(
            phq9_template, therapist_id="t-1", client_id="c-1", due_date=due
        )

        assert instance.due_date == due
        assert instance.expires_at == due + timedelta(days=7)

    def test_iso_due_date(self, phq9_template: AssessmentTemplate) -> None:
        instance = create_instance(
            phq9_template,
            therapist_id="t-1",
            client_id="c-1",
            due_date="2025-03-01T09:00:00Z",
        )

        assert instance.due_date == datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
        assert instance.expires_at == datetime(2025, 3, 8, 9, 0, tzinfo=timezone.utc)

    def test_overrides(self, gad7_template: AssessmentTemplate) -> None:
        instance = create_instance(
            gad7_template,
            therapist_id="t-1",
            client_id="c-1",
            case_id="case-9",
            instructions="Answer for the past week.",
            reminder_frequency="daily",
        )

        assert instance.case_id == "case-9"
        assert instance.instructions == "Answer for the past week."
        assert instance.reminder_frequency == "daily"

    def test_serializes_to_json(self, phq9_template: AssessmentTemplate) -> None:
        instance = create_instance(
            phq9_template,
            therapist_id="t-1",
            client_id="c-1",
            due_date=datetime(2025, 3, 1),
        )
        data = instance.model_dump(mode="json")

        assert data["due_date"] == "2025-03-01T00:00:00"
        assert data["expires_at"] == "2025-03-08T00:00:00"
        assert data["metadata"] == {}
