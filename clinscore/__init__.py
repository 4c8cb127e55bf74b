"""clinscore: Scoring and interpretation engine for clinical assessments."""

__version__ = "0.1.0"

# These imports must come after __version__ to avoid a circular import
from clinscore.callable import CallableResult, execute
from clinscore.scoring import ScoringEngine, ScoringError, UnsupportedScoringMethodError
from clinscore.templates import AssessmentTemplate, Question

__all__ = [
    "__version__",
    "AssessmentTemplate",
    "CallableResult",
    "Question",
    "ScoringEngine",
    "ScoringError",
    "UnsupportedScoringMethodError",
    "execute",
]
