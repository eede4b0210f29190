"""Unit tests for verdict rendering."""
from datetime import datetime, timezone

from mindcheck.domain.models import AssessmentVerdict, ConditionShare, KeywordCount, Severity
from mindcheck.presentation.report import (
    chart_shares,
    confidence_band,
    format_verdict_markdown,
    severity_label,
)


def _verdict(**overrides):
    data = dict(
        primary_condition="Anxiety",
        confidence=0.72,
        all_conditions=[
            ConditionShare(condition="Anxiety", share=0.97),
            ConditionShare(condition="Normal", share=0.03),
        ],
        severity=Severity.MODERATE,
        recommendations=["Practice deep breathing exercises"],
        resources=["Wysa – AI Mental Health Support"],
        matched_keywords=[KeywordCount(keyword="worried", count=2)],
        timestamp=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
    )
    data.update(overrides)
    return AssessmentVerdict(**data)


def test_severity_label():
    assert severity_label(Severity.HIGH) == "High Priority"
    assert severity_label(Severity.MODERATE) == "Moderate Attention"
    assert severity_label(Severity.LOW) == "Low Priority"


def test_confidence_band():
    assert confidence_band(0.8)[0] == "high"
    assert confidence_band(0.5)[0] == "moderate"
    assert confidence_band(0.49) == ("low", "Lower confidence - Consider retaking")


def test_chart_shares_keep_slices_visible():
    assert chart_shares(_verdict()) == [("Anxiety", 97), ("Normal", 5)]


def test_chart_shares_without_conditions():
    assert chart_shares(_verdict(all_conditions=[], confidence=0.0)) == [("Anxiety", 100)]


def test_markdown_report_sections():
    report = format_verdict_markdown(_verdict())
    assert "**Anxiety**" in report
    assert "Assessment Confidence: 72%" in report
    assert "Moderate Attention" in report
    assert "worried ×2" in report
    assert "1. Practice deep breathing exercises" in report
    assert "## 📚 Resources" in report
    assert "May 01, 2024 09:30" in report


def test_markdown_report_without_resources_or_keywords():
    report = format_verdict_markdown(_verdict(resources=[], matched_keywords=[]))
    assert "## 📚 Resources" not in report
    assert "No specific keywords were flagged." in report


def test_markdown_report_crisis_banner():
    report = format_verdict_markdown(_verdict(primary_condition="Suicide Risk", severity=Severity.HIGH))
    assert "Please reach out for help now" in report
