"""Assessment template models and registry."""

from clinscore.templates.models import (
    AssessmentTemplate,
    ClinicalAlertRule,
    ClinicalCutoffs,
    InterpretationRange,
    InterpretationRules,
    Question,
    QuestionOption,
    QuestionValidation,
    ScoringConfig,
    Subscale,
)
from clinscore.templates.registry import (
    TemplateCheck,
    TemplateNotFoundError,
    TemplateRegistry,
    TemplateValidationError,
    validate_template,
)

__all__ = [
    "AssessmentTemplate",
    "ClinicalAlertRule",
    "ClinicalCutoffs",
    "InterpretationRange",
    "InterpretationRules",
    "Question",
    "QuestionOption",
    "QuestionValidation",
    "ScoringConfig",
    "Subscale",
    "TemplateCheck",
    "TemplateNotFoundError",
    "TemplateRegistry",
    "TemplateValidationError",
    "validate_template",
]
