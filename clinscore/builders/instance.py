"""Builder for assessment instances assigned to a client.

An instance is the record of one template being assigned to one client.
It is a JSON-serializable Pydantic model; storing it is the caller's job.
"""

from datetime import datetime, timedelta
from typing import Any, Literal

from pydantic import BaseModel, Field

from clinscore.templates.models import AssessmentTemplate

ReminderFrequency = Literal["none", "daily", "weekly", "before_due"]
AssessmentStatus = Literal["assigned", "in_progress", "completed", "expired", "cancelled"]

# Instances stay open for a week past their due date.
EXPIRY_GRACE = timedelta(days=7)


class AssessmentInstance(BaseModel):
    """A template assigned to a client."""

    template_id: str | None
    therapist_id: str
    client_id: str
    case_id: str | None = None
    title: str
    instructions: str | None = None
    status: AssessmentStatus = "assigned"
    due_date: datetime | None = None
    expires_at: datetime | None = None
    reminder_frequency: ReminderFrequency = "none"
    metadata: dict[str, Any] = Field(default_factory=dict)


def create_instance(
    template: AssessmentTemplate,
    therapist_id: str,
    client_id: str,
    case_id: str | None = None,
    due_date: datetime | str | None = None,
    instructions: str | None = None,
    reminder_frequency: ReminderFrequency = "none",
) -> AssessmentInstance:
    """Create an assessment instance from a template.

    Args:
        template: The template being assigned.
        therapist_id: Assigning therapist.
        client_id: Client who will complete the assessment.
        case_id: Optional case the assessment belongs to.
        due_date: Optional due date (datetime or ISO-8601 string).
        instructions: Instructions overriding the template's own.
        reminder_frequency: How often the client is reminded.

    Returns:
        The new AssessmentInstance with status ``assigned``.
    """
    if isinstance(due_date, str):
        due_date = datetime.fromisoformat(due_date.replace("Z", "+00:00"))

    return AssessmentInstance(
        template_id=template.id,
        therapist_id=therapist_id,
        client_id=client_id,
        case_id=case_id,
        title=template.name,
        instructions=instructions or template.instructions,
        status="assigned",
        due_date=due_date,
        expires_at=due_date + EXPIRY_GRACE if due_date else None,
        reminder_frequency=reminder_frequency or "none",
    )
