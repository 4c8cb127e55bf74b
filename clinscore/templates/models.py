"""Pydantic models for assessment templates and their questions."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

QuestionType = Literal[
    "scale",
    "likert",
    "slider",
    "number",
    "boolean",
    "single_choice",
    "multiple_choice",
    "multi_choice",  # compatibility alias of multiple_choice
    "text",
    "textarea",
    "date",
    "time",
]

AlertSeverity = Literal["info", "warning", "critical"]


class QuestionOption(BaseModel):
    """A choice item carrying an explicit value."""

    label: str
    value: Any


class QuestionValidation(BaseModel):
    """Free-text and numeric entry constraints."""

    required: bool = False
    min_value: float | None = None
    max_value: float | None = None
    pattern: str | None = None
    custom_validation: str | None = None


class Question(BaseModel):
    """A single item in an assessment template."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    text: str = ""
    type: QuestionType

    # Scale / slider bounds; min/max take precedence over scale_min/scale_max
    min: float | None = None
    max: float | None = None
    scale_min: float | None = None
    scale_max: float | None = None
    step: float | None = None

    labels: list[str] = Field(default_factory=list)
    options: list[str | QuestionOption] | None = None

    reverse_scored: bool = False
    required: bool = True
    validation: QuestionValidation | None = None

    help_text: str | None = None
    placeholder: str | None = None

    @property
    def lower_bound(self) -> float | None:
        """Lower bound, preferring ``min`` over ``scale_min``."""
        return self.min if self.min is not None else self.scale_min

    @property
    def upper_bound(self) -> float | None:
        """Upper bound, preferring ``max`` over ``scale_max``."""
        return self.max if self.max is not None else self.scale_max


class InterpretationRange(BaseModel):
    """Closed score band mapped to a clinical label."""

    min: float
    max: float
    label: str
    description: str = ""
    severity: str = ""
    clinical_significance: str = ""
    recommendations: str = ""
    color: str | None = None
    priority: int | None = None


class Subscale(BaseModel):
    """A named subset of questions scored as a plain sum."""

    name: str
    items: list[str]
    max_score: float | None = None
    interpretation_ranges: list[InterpretationRange] = Field(default_factory=list)


class ScoringConfig(BaseModel):
    """How a template's raw score is computed.

    ``method`` is kept as a plain string so that an unsupported method is
    reported by the scoring engine rather than at load time.
    """

    method: str
    max_score: float = 0
    min_score: float | None = None
    reverse_scored_items: list[str] = Field(default_factory=list)
    weighted_items: dict[str, float] = Field(default_factory=dict)
    subscales: list[Subscale] = Field(default_factory=list)
    custom_logic: str | None = None


class ClinicalAlertRule(BaseModel):
    """Template-authored alert fired when ``condition`` matches the score."""

    condition: str
    message: str
    severity: AlertSeverity
    action_required: bool = False


class InterpretationRules(BaseModel):
    """Interpretation bands and template-authored alert rules."""

    ranges: list[InterpretationRange] = Field(default_factory=list)
    clinical_alerts: list[ClinicalAlertRule] = Field(default_factory=list)


class ClinicalCutoffs(BaseModel):
    """Safety-relevant thresholds."""

    clinical_cutoff: float | None = None
    optimal_range: tuple[float, float] | None = None
    risk_thresholds: dict[str, float] = Field(default_factory=dict)
    suicide_risk_item: str | None = None
    suicide_risk_threshold: float | None = None


class AssessmentTemplate(BaseModel):
    """Complete questionnaire definition."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    abbreviation: str = ""
    category: str = "general"
    description: str = ""
    version: str = "1.0.0"
    instructions: str = ""
    estimated_duration_minutes: int | None = None
    evidence_level: (
        Literal["research_based", "clinical_consensus", "expert_opinion"] | None
    ) = None
    is_active: bool = True
    questions: list[Question]
    scoring_config: ScoringConfig
    interpretation_rules: InterpretationRules = Field(default_factory=InterpretationRules)
    clinical_cutoffs: ClinicalCutoffs = Field(default_factory=ClinicalCutoffs)

    @model_validator(mode="after")
    def check_unique_question_ids(self) -> "AssessmentTemplate":
        """Reject templates that reuse a question id."""
        seen: set[str] = set()
        for question in self.questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question id: {question.id}")
            seen.add(question.id)
        return self

    def get_question(self, question_id: str) -> Question | None:
        """Get a question by its ID."""
        for question in self.questions:
            if question.id == question_id:
                return question
        return None
