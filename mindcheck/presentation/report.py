"""Text rendering of an assessment verdict."""
from typing import List, Tuple

from mindcheck.domain.models import AssessmentVerdict, Severity


DISCLAIMER = (
    "⚕️ **DISCLAIMER:** This assessment is for educational and awareness purposes only. "
    "It is NOT a medical diagnosis and not a substitute for professional advice. "
    "If you are in crisis, contact your local emergency number immediately."
)

SEVERITY_LABELS = {
    Severity.HIGH: "High Priority",
    Severity.MODERATE: "Moderate Attention",
    Severity.LOW: "Low Priority",
}

MIN_CHART_PERCENT = 5


def severity_label(severity: Severity) -> str:
    return SEVERITY_LABELS.get(severity, "Unknown")


def confidence_band(confidence: float) -> Tuple[str, str]:
    """Returns (band, explanation) for a confidence value."""
    if confidence >= 0.8:
        return "high", "High confidence - Reliable assessment"
    if confidence >= 0.5:
        return "moderate", "Moderate confidence - Reasonably certain"
    return "low", "Lower confidence - Consider retaking"


def chart_shares(verdict: AssessmentVerdict) -> List[Tuple[str, int]]:
    # every slice stays visible
    shares = [
        (c.condition, max(MIN_CHART_PERCENT, round(c.share * 100)))
        for c in verdict.all_conditions
    ]
    if not shares:
        pct = max(MIN_CHART_PERCENT, round(verdict.confidence * 100) or 100)
        shares = [(verdict.primary_condition or "Normal", pct)]
    return shares


def format_verdict_markdown(verdict: AssessmentVerdict) -> str:
    """Format a verdict as a markdown report for display or download."""
    _, band_text = confidence_band(verdict.confidence)
    lines = ["# 🧠 Your Mental Health Assessment\n"]
    lines.append(f"**Date:** {verdict.timestamp:%B %d, %Y %H:%M}\n")

    lines.append("## Primary Assessment")
    lines.append(f"**{verdict.primary_condition}**")
    lines.append(f"- Assessment Confidence: {verdict.confidence * 100:.0f}% ({band_text})")
    lines.append(f"- Severity: {severity_label(verdict.severity)}")
    lines.append("")

    if verdict.severity == Severity.HIGH and verdict.primary_condition == "Suicide Risk":
        lines.append("## ⚠️ Please reach out for help now")
        lines.append("**You do not have to go through this alone. Contact a crisis line or emergency services.**\n")

    lines.append("## 📊 Condition Breakdown")
    for condition in verdict.all_conditions:
        lines.append(f"- {condition.condition}: {condition.share * 100:.0f}%")
    if verdict.built_from_keywords:
        lines.append("_Built from flagged keywords because no condition could be classified._")
    lines.append("")

    lines.append("## 🔑 Key Signals")
    if verdict.matched_keywords:
        lines.append(", ".join(f"{k.keyword} ×{k.count}" for k in verdict.matched_keywords))
    else:
        lines.append("No specific keywords were flagged.")
    lines.append("")

    lines.append("## 📝 Recommendations")
    for i, recommendation in enumerate(verdict.recommendations, 1):
        lines.append(f"{i}. {recommendation}")
    lines.append("")

    if verdict.resources:
        lines.append("## 📚 Resources")
        for resource in verdict.resources:
            lines.append(f"- {resource}")
        lines.append("")

    lines.append("---")
    lines.append(DISCLAIMER)

    return "\n".join(lines)
