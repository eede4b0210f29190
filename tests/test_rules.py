"""Unit tests for severity, recommendation and resource rules."""
from mindcheck.domain.models import Severity
from mindcheck.domain.rules import (
    BASE_RECOMMENDATIONS,
    CRISIS_RECOMMENDATIONS,
    CRISIS_RESOURCES,
    GENERAL_RESOURCES,
    build_recommendations,
    build_resources,
    determine_severity,
)


class TestDetermineSeverity:
    """Test severity tiers."""

    def test_suicide_risk_is_high(self):
        assert determine_severity("Suicide Risk", 0.1, False) == Severity.HIGH
        assert determine_severity("Normal", 0.1, True) == Severity.HIGH

    def test_confidence_thresholds(self):
        assert determine_severity("Anxiety", 0.86, False) == Severity.HIGH
        assert determine_severity("Anxiety", 0.85, False) == Severity.MODERATE
        assert determine_severity("Anxiety", 0.51, False) == Severity.MODERATE
        assert determine_severity("Anxiety", 0.5, False) == Severity.LOW

    def test_no_evidence_is_low(self):
        assert determine_severity("Normal", 1.0, False, no_evidence=True) == Severity.LOW

    def test_risk_overrides_no_evidence(self):
        assert determine_severity("Normal", 1.0, True, no_evidence=True) == Severity.HIGH


class TestBuildRecommendations:
    """Test recommendation lists."""

    def test_crisis_list_replaces_generic(self):
        recommendations = build_recommendations("Depression", True)
        assert recommendations == CRISIS_RECOMMENDATIONS
        assert not set(BASE_RECOMMENDATIONS) & set(recommendations)

    def test_base_plus_condition_specific(self):
        recommendations = build_recommendations("Anxiety", False)
        assert recommendations[:5] == BASE_RECOMMENDATIONS
        assert "Practice deep breathing exercises" in recommendations
        assert len(recommendations) == 9

    def test_unmatched_label_gets_base_only(self):
        assert build_recommendations("Normal", False) == BASE_RECOMMENDATIONS
        # exact label match only
        assert build_recommendations("anxiety", False) == BASE_RECOMMENDATIONS

    def test_returns_fresh_list(self):
        recommendations = build_recommendations("Normal", True)
        recommendations.append("x")
        assert "x" not in CRISIS_RECOMMENDATIONS


class TestBuildResources:
    """Test resource lists."""

    def test_benign_conditions_have_no_resources(self):
        assert build_resources("Normal", False) == []
        assert build_resources("unknown", False) == []

    def test_crisis_resources(self):
        assert build_resources("Suicide Risk", False) == CRISIS_RESOURCES
        assert build_resources("Depression", True) == CRISIS_RESOURCES

    def test_condition_lookup_is_normalised(self):
        assert "Wysa – AI Mental Health Support" in build_resources("Anxiety", False)
        assert "Sleep hygiene tips" in build_resources(" STRESS ", False)

    def test_unmatched_label_gets_general_list(self):
        assert build_resources("Bipolar", False) == GENERAL_RESOURCES
