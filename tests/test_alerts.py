"""Tests for clinical alerts and the condition evaluator."""

import pytest

from clinscore.alerts import ClinicalAlert, check_clinical_alerts, evaluate_condition
from clinscore.scoring import ScoringEngine
from helpers import make_template, scale_question


class TestEvaluateCondition:
    """Tests for the alert condition grammar."""

    @pytest.mark.parametrize(
        "score,expected",
        [(9, False), (10, True), (11, True)],
    )
    def test_greater_or_equal(self, score: float, expected: bool) -> None:
        assert evaluate_condition("score>=10", score) is expected

    @pytest.mark.parametrize(
        "condition,score,expected",
        [
            ("score <= 5", 5, True),
            ("score <= 5", 6, False),
            ("score > 5", 5, False),
            ("score > 5", 5.5, True),
            ("score < 5", 4, True),
            ("score == 7", 7, True),
            ("score == 7", 7.5, False),
            ("score != 7", 8, True),
            ("score != 7", 7, False),
            ("  score   >=   2.5 ", 2.5, True),
            ("score >= -1", 0, True),
        ],
    )
    def test_operators(self, condition: str, score: float, expected: bool) -> None:
        assert evaluate_condition(condition, score) is expected

    @pytest.mark.parametrize(
        "condition",
        [
            "score>=10 && score<20",
            "score >= 10 and score < 20",
            "total >= 10",
            "10 <= score",
            "score >= ten",
            "score >=",
            "score = 10",
            "score >= 1 >= 0",
            "__import__('os').system('true')",
            "",
        ],
    )
    def test_unsupported_forms_never_match(self, condition: str) -> None:
        for score in (-100, 0, 10, 15, 100):
            assert evaluate_condition(condition, score) is False

    def test_none_condition(self) -> None:
        assert evaluate_condition(None, 10) is False


@pytest.fixture
def alert_template():
    """Template with a cutoff, a suicide-risk item and an authored rule."""
    return make_template(
        [scale_question(f"q{i}", 0, 3) for i in range(1, 10)],
        interpretation_rules={
            "ranges": [
                {"min": 0, "max": 4, "label": "Minimal"},
                {"min": 5, "max": 27, "label": "Elevated"},
            ],
            "clinical_alerts": [
                {
                    "condition": "score >= 20",
                    "message": "Severe range",
                    "severity": "critical",
                    "action_required": True,
                },
                {
                    "condition": "score < 5",
                    "message": "Low range",
                    "severity": "info",
                    "action_required": False,
                },
            ],
        },
        clinical_cutoffs={
            "clinical_cutoff": 10,
            "suicide_risk_item": "q9",
            "suicide_risk_threshold": 2,
        },
    )


class TestCheckClinicalAlerts:
    """Tests for check_clinical_alerts."""

    def test_no_alerts_in_mid_range(self, alert_template) -> None:
        assert check_clinical_alerts(alert_template, {"q1": 3, "q2": 3}, 6) == []

    def test_cutoff_warning(self, alert_template) -> None:
        alerts = check_clinical_alerts(alert_template, {}, 10)
        assert alerts == [
            ClinicalAlert(
                type="warning",
                message="Score exceeds clinical cutoff (10). Consider further evaluation.",
                action_required=True,
            )
        ]

    def test_suicide_risk_independent_of_total(self, alert_template) -> None:
        """The risk item alone raises a critical alert in the Minimal band."""
        engine = ScoringEngine(alert_template, {"q9": 3})
        score = engine.calculate_raw_score()

        assert engine.get_interpretation(score).category == "Minimal"
        alerts = engine.check_clinical_alerts(score)
        critical = [a for a in alerts if a.type == "critical"]
        assert len(critical) == 1
        assert critical[0].message == (
            "Suicide risk indicated. Immediate safety assessment required."
        )
        assert critical[0].action_required is True

    def test_suicide_risk_below_threshold(self, alert_template) -> None:
        alerts = check_clinical_alerts(alert_template, {"q9": 1}, 1)
        assert all(a.type != "critical" for a in alerts)

    def test_suicide_risk_unanswered(self, alert_template) -> None:
        alerts = check_clinical_alerts(alert_template, {}, 1)
        assert [a.message for a in alerts] == ["Low range"]

    def test_suicide_risk_uses_normalized_value(self) -> None:
        template = make_template(
            [scale_question("q9", 0, 3, reverse_scored=True)],
            clinical_cutoffs={"suicide_risk_item": "q9", "suicide_risk_threshold": 2},
        )
        # raw 0 reverses to 3
        assert len(check_clinical_alerts(template, {"q9": 0}, 0)) == 1
        assert check_clinical_alerts(template, {"q9": 3}, 0) == []

    def test_alerts_accumulate_in_order(self, alert_template) -> None:
        alerts = check_clinical_alerts(alert_template, {"q9": 3}, 22)
        assert [a.type for a in alerts] == ["warning", "critical", "critical"]
        assert alerts[2].message == "Severe range"

    def test_authored_rule_without_action(self, alert_template) -> None:
        alerts = check_clinical_alerts(alert_template, {}, 2)
        assert alerts == [ClinicalAlert(type="info", message="Low range", action_required=False)]

    def test_missing_risk_question(self) -> None:
        template = make_template(
            [scale_question("q1")],
            clinical_cutoffs={"suicide_risk_item": "q9", "suicide_risk_threshold": 1},
        )
        assert check_clinical_alerts(template, {"q9": 3}, 0) == []
