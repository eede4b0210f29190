from typing import Dict, List, Sequence

from .models import (
    AggregationSource,
    AnswerPrediction,
    ConditionScore,
    ConditionShare,
    RiskSignals,
    WeightedRanking,
)


SUICIDE_RISK = "Suicide Risk"
NORMAL = "Normal"

# Overweight clinically significant classes
CONDITION_PRIORS = {
    "Depression": 1.25,
    "Anxiety": 1.15,
    "Stress": 1.0,
    SUICIDE_RISK: 1.5,
    NORMAL: 0.75,
}

MAJORITY_WEIGHT = 0.4
AVG_CONFIDENCE_WEIGHT = 0.3
MAX_CONFIDENCE_WEIGHT = 0.3

KEYWORD_FALLBACK_LIMIT = 5
KEYWORD_FALLBACK_FLOOR = 0.05
SELF_HARM_MIN_CONFIDENCE = 0.95


def prior_for(label: str) -> float:
    return CONDITION_PRIORS.get(label, 1.0)


def score_conditions(predictions: Sequence[AnswerPrediction]) -> List[ConditionScore]:
    """Group predictions by label and rank them by prior-weighted score.

    The majority weight is relative to every answer, including the ones whose
    classification failed. Equal scores are ordered by label.
    """
    total_answers = len(predictions)
    groups: Dict[str, ConditionScore] = {}
    for prediction in predictions:
        if not prediction.has_condition:
            continue
        label = prediction.condition
        group = groups.get(label)
        if group is None:
            group = ConditionScore(label=label, occurrence_count=1,
                                   total_confidence=prediction.confidence,
                                   max_confidence=prediction.confidence)
            groups[label] = group
        else:
            group.occurrence_count += 1
            group.total_confidence += prediction.confidence
            group.max_confidence = max(group.max_confidence, prediction.confidence)

    for group in groups.values():
        majority_weight = group.occurrence_count / total_answers
        score = (
            MAJORITY_WEIGHT * majority_weight
            + AVG_CONFIDENCE_WEIGHT * group.avg_confidence
            + MAX_CONFIDENCE_WEIGHT * group.max_confidence
        )
        group.weighted_score = score * prior_for(group.label)

    return sorted(groups.values(), key=lambda g: (-g.weighted_score, g.label))


def _keyword_fallback(signals: RiskSignals) -> List[ConditionShare]:
    total = signals.total_keyword_occurrences
    ranked = sorted(signals.keyword_counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [
        ConditionShare(condition=keyword, share=max(KEYWORD_FALLBACK_FLOOR, count / total))
        for keyword, count in ranked[:KEYWORD_FALLBACK_LIMIT]
    ]


def aggregate_conditions(predictions: Sequence[AnswerPrediction], signals: RiskSignals) -> WeightedRanking:
    scores = score_conditions(predictions)
    source = AggregationSource.CLASSIFIER
    conditions = [ConditionShare(condition=s.label, share=s.weighted_score) for s in scores]

    if not conditions:
        if signals.keyword_counts:
            conditions = _keyword_fallback(signals)
            source = AggregationSource.KEYWORDS
        else:
            conditions = [ConditionShare(condition=NORMAL, share=1.0)]
            source = AggregationSource.DEFAULT

    primary = conditions[0].condition
    confidence = conditions[0].share

    # Self-harm risk always takes the top spot
    if signals.has_self_harm_risk:
        primary = SUICIDE_RISK
        confidence = max(SELF_HARM_MIN_CONFIDENCE, confidence)
        conditions = [ConditionShare(condition=SUICIDE_RISK, share=confidence)] + [
            c for c in conditions if c.condition != SUICIDE_RISK
        ]

    return WeightedRanking(
        primary_condition=primary,
        confidence=confidence,
        conditions=conditions,
        source=source,
    )
