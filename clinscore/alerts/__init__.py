"""Clinical alert rules and the condition evaluator."""

from clinscore.alerts.checker import ClinicalAlert, check_clinical_alerts
from clinscore.alerts.conditions import evaluate_condition

__all__ = ["ClinicalAlert", "check_clinical_alerts", "evaluate_condition"]
