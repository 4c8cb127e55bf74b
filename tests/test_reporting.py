"""Tests for narrative reports and display helpers."""

from datetime import date

import pytest

from clinscore.interpretation import Interpretation, unknown_interpretation
from clinscore.reporting import (
    estimate_completion_time,
    format_number,
    format_score,
    generate_narrative_report,
    generate_summary,
    get_severity_style,
    percentage,
)
from helpers import make_template, scale_question


@pytest.fixture
def template():
    return make_template(
        [scale_question("q1"), scale_question("q2")],
        max_score=8,
    )


@pytest.fixture
def interpretation() -> Interpretation:
    return Interpretation(
        category="Moderate",
        description="Moderate symptoms",
        severity="moderate",
        clinical_significance="moderate",
        recommendations="Consider treatment.",
    )


class TestNarrative:
    """Tests for generate_narrative_report."""

    def test_exact_format(self, template, interpretation: Interpretation) -> None:
        report = generate_narrative_report(
            template, 5, interpretation, report_date=date(2024, 11, 2)
        )

        assert report.split("\n") == [
            "Assessment: Test Assessment (TA)",
            "Date: 11/2/2024",
            "Score: 5/8 (63%)",
            "Interpretation: Moderate",
            "",
            "Clinical Summary:",
            "The client completed the Test Assessment. The score of 5 falls within the "
            '"Moderate" range, which is described as: Moderate symptoms.',
            "",
            "Recommendations:",
            "Consider treatment.",
        ]

    def test_fractional_score(self, template, interpretation: Interpretation) -> None:
        report = generate_narrative_report(
            template, 2.5, interpretation, report_date=date(2024, 1, 1)
        )
        assert "Score: 2.5/8 (31%)" in report
        assert "The score of 2.5 falls" in report

    def test_without_max_score(self, interpretation: Interpretation) -> None:
        template = make_template([scale_question("q1")])
        report = generate_narrative_report(
            template, 3, interpretation, report_date=date(2024, 1, 1)
        )
        assert "Score: 3/0 (0%)" in report

    def test_unknown_interpretation(self, template) -> None:
        report = generate_narrative_report(
            template, 99, unknown_interpretation(), report_date=date(2024, 1, 1)
        )
        assert "Interpretation: Unknown" in report
        assert report.endswith("Consult with the treating clinician.")

    def test_defaults_to_today(self, template, interpretation: Interpretation) -> None:
        today = date.today()
        report = generate_narrative_report(template, 5, interpretation)
        assert f"Date: {today.month}/{today.day}/{today.year}" in report

    def test_summary(self, template, interpretation: Interpretation) -> None:
        assert generate_summary(template, 5, interpretation) == "TA: 5/8 - Moderate"


class TestFormatting:
    """Tests for display helpers."""

    def test_format_number(self) -> None:
        assert format_number(9.0) == "9"
        assert format_number(9) == "9"
        assert format_number(1.33) == "1.33"

    @pytest.mark.parametrize(
        "score,max_score,expected",
        [
            (9, 27, 33),
            (1, 8, 13),
            (27, 27, 100),
            (5, 0, 0),
            (float("inf"), 10, 0),
            (1e308, 1e-10, 0),
        ],
    )
    def test_percentage(self, score: float, max_score: float, expected: int) -> None:
        assert percentage(score, max_score) == expected

    def test_format_score(self) -> None:
        assert format_score(9, 27) == "9/27 (33%)"
        assert format_score(9, 27, show_percentage=False) == "9/27"

    def test_severity_style(self) -> None:
        assert get_severity_style("severe") == "bold red"
        assert get_severity_style("unknown") == "grey50"

    @pytest.mark.parametrize(
        "count,expected",
        [(0, "< 1 minute"), (1, "1 minute"), (2, "1 minute"), (9, "5 minutes")],
    )
    def test_estimate_completion_time(self, count: int, expected: str) -> None:
        assert estimate_completion_time(count) == expected
