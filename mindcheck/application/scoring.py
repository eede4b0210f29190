from datetime import datetime, timezone
from typing import Optional, Sequence, Union

from mindcheck.domain.aggregation import aggregate_conditions
from mindcheck.domain.models import (
    AggregationSource,
    AnswerPrediction,
    AssessmentVerdict,
    ConditionShare,
    KeywordCount,
    PointRanking,
    WeightedRanking,
)
from mindcheck.domain.points import rank_by_points
from mindcheck.domain.risk import detect_risk
from mindcheck.domain.rules import build_recommendations, build_resources, determine_severity


def _normalize(conditions):
    total = sum(c.share for c in conditions) or 1
    return [ConditionShare(condition=c.condition, share=c.share / total) for c in conditions]


def finalize(weighted: WeightedRanking, point_based: PointRanking) -> Union[WeightedRanking, PointRanking]:
    """The point pass is authoritative whenever any answer scored points."""
    if point_based.has_any_tally:
        return point_based
    return weighted


def score_assessment(
    predictions: Sequence[AnswerPrediction],
    timestamp: Optional[datetime] = None,
) -> AssessmentVerdict:
    """Fuse per-answer predictions into one verdict.

    Pure: identical predictions give identical verdicts apart from the
    timestamp. History is not touched here.
    """
    predictions = list(predictions)
    signals = detect_risk(predictions)
    weighted = aggregate_conditions(predictions, signals)
    point_based = rank_by_points(predictions, signals, previous_confidence=weighted.confidence)
    final = finalize(weighted, point_based)

    primary = final.primary_condition
    confidence = min(1.0, max(0.0, final.confidence))
    no_evidence = final is weighted and weighted.source == AggregationSource.DEFAULT

    return AssessmentVerdict(
        primary_condition=primary,
        confidence=confidence,
        all_conditions=_normalize(final.conditions),
        severity=determine_severity(primary, confidence, signals.has_self_harm_risk, no_evidence),
        recommendations=build_recommendations(primary, signals.has_self_harm_risk),
        resources=build_resources(primary, signals.has_self_harm_risk),
        matched_keywords=[
            KeywordCount(keyword=k, count=c) for k, c in signals.keyword_counts.items()
        ],
        built_from_keywords=weighted.built_from_keywords,
        timestamp=timestamp or datetime.now(timezone.utc),
    )
