from typing import Dict, Iterable

from .models import AnswerPrediction, RiskSignals


SELF_HARM_PHRASES = (
    "suicide",
    "kill myself",
    "end my life",
    "not worth living",
    "better off dead",
    "want to die",
)


def is_self_harm_phrase(keyword: str) -> bool:
    return (keyword or "").strip().lower() in SELF_HARM_PHRASES


def text_mentions_self_harm(text: str) -> bool:
    lowered = (text or "").lower()
    return any(phrase in lowered for phrase in SELF_HARM_PHRASES)


def detect_risk(predictions: Iterable[AnswerPrediction]) -> RiskSignals:
    """Scan classifier keywords, then raw answer text, for self-harm phrases.

    Every flagged keyword is counted, denylisted or not, so the counts can be
    shown to the user. A hit found only in the answer text raises the flag but
    adds nothing to the counts.
    """
    predictions = list(predictions)
    keyword_counts: Dict[str, int] = {}
    for prediction in predictions:
        for keyword in prediction.keywords:
            keyword_counts[keyword] = keyword_counts.get(keyword, 0) + 1

    has_risk = any(is_self_harm_phrase(k) for k in keyword_counts)
    if not has_risk:
        has_risk = any(text_mentions_self_harm(p.answer_text) for p in predictions)

    return RiskSignals(has_self_harm_risk=has_risk, keyword_counts=keyword_counts)
