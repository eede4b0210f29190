from typing import Dict, Optional, Sequence

from .aggregation import SELF_HARM_MIN_CONFIDENCE, SUICIDE_RISK
from .models import AnswerPrediction, ConditionShare, PointRanking, PointTally, RiskSignals
from .risk import is_self_harm_phrase


# suicidal >> depression/anxiety >> stress/normal
CATEGORY_POINTS = {
    SUICIDE_RISK: 12,
    "Depression": 3,
    "Anxiety": 3,
    "Stress": 1,
    "Normal": 1,
}

# Substring of the lowercased label -> category, checked in this order
LABEL_PATTERNS = (
    ("depress", "Depression"),
    ("anx", "Anxiety"),
    ("stress", "Stress"),
    ("normal", "Normal"),
)

FALLBACK_WINNER_CONFIDENCE = 0.8


def categorize(prediction: AnswerPrediction) -> Optional[str]:
    if any(is_self_harm_phrase(k) for k in prediction.keywords):
        return SUICIDE_RISK
    label = (prediction.condition or "unknown").lower()
    for pattern, category in LABEL_PATTERNS:
        if pattern in label:
            return category
    return None


def _add(tallies: Dict[str, PointTally], category: str, confidence: float) -> None:
    tally = tallies.setdefault(category, PointTally(category=category))
    tally.points += CATEGORY_POINTS[category]
    tally.total_confidence += confidence
    tally.occurrence_count += 1


def _rank_key(tally: PointTally):
    return (-tally.composite, -tally.avg_confidence, -tally.points, tally.category)


def rank_by_points(
    predictions: Sequence[AnswerPrediction],
    signals: RiskSignals,
    previous_confidence: float = 0.0,
) -> PointRanking:
    """Second, coarser pass that scores fixed points per category.

    Each answer lands in at most one category. When self-harm risk was
    detected the Suicide Risk tally ranks first whatever its composite.
    Returns an empty ranking when no answer scored.
    """
    tallies: Dict[str, PointTally] = {}
    for prediction in predictions:
        category = categorize(prediction)
        if category is None:
            continue
        confidence = prediction.confidence
        if category == SUICIDE_RISK:
            confidence = max(confidence, SELF_HARM_MIN_CONFIDENCE)
        _add(tallies, category, confidence)

    # Text-only detection still has to show up in the points
    if signals.has_self_harm_risk and SUICIDE_RISK not in tallies:
        _add(tallies, SUICIDE_RISK, SELF_HARM_MIN_CONFIDENCE)

    if not tallies:
        return PointRanking(confidence=previous_confidence)

    ranked = sorted(tallies.values(), key=_rank_key)
    if signals.has_self_harm_risk:
        ranked = [tallies[SUICIDE_RISK]] + [t for t in ranked if t.category != SUICIDE_RISK]

    winner = ranked[0]
    confidence = max(previous_confidence, winner.avg_confidence or FALLBACK_WINNER_CONFIDENCE)

    total_composite = sum(t.composite for t in ranked) or 1
    conditions = [
        ConditionShare(condition=t.category, share=t.composite / total_composite)
        for t in ranked
    ]

    return PointRanking(
        tallies=ranked,
        primary_condition=winner.category,
        confidence=confidence,
        conditions=conditions,
    )
