from typing import List

from .aggregation import SUICIDE_RISK
from .models import Severity


HIGH_CONFIDENCE_THRESHOLD = 0.85
MODERATE_CONFIDENCE_THRESHOLD = 0.5

CRISIS_RECOMMENDATIONS = [
    "🚨 IMMEDIATE ACTION REQUIRED: Contact emergency services or crisis hotline immediately",
    "Call Vandrevala Foundation Helpline: 1860-2662-345 or 1800-2333-330",
    "Call Emergency Services: 102 (Ambulance) or 112 (Emergency)",
    "Go to your nearest emergency room or hospital",
    "Stay with a trusted friend or family member",
    "Remove any means of self-harm from your environment",
    "Speak with a mental health professional as soon as possible",
]

BASE_RECOMMENDATIONS = [
    "Consider speaking with a mental health professional",
    "Practice regular self-care activities",
    "Maintain a consistent sleep schedule",
    "Engage in physical exercise regularly",
    "Connect with supportive friends and family",
]

CONDITION_RECOMMENDATIONS = {
    "Depression": [
        "Consider cognitive behavioral therapy (CBT)",
        "Try to maintain a daily routine",
        "Expose yourself to natural sunlight daily",
        "Consider medication evaluation with a psychiatrist",
    ],
    "Anxiety": [
        "Practice deep breathing exercises",
        "Try mindfulness meditation",
        "Consider exposure therapy for specific fears",
        "Limit caffeine and alcohol intake",
    ],
    "Stress": [
        "Identify and address stress triggers",
        "Practice time management techniques",
        "Learn relaxation techniques like progressive muscle relaxation",
        "Consider stress management therapy",
    ],
    SUICIDE_RISK: [
        "🚨 IMMEDIATE ACTION REQUIRED: Contact emergency services or crisis hotline immediately",
        "Call Vandrevala Foundation Helpline: 1860-2662-345 or 1800-2333-330",
        "Call Emergency Services: 102 (Ambulance) or 112 (Emergency)",
        "Go to your nearest emergency room or hospital",
    ],
}

CRISIS_RESOURCES = [
    "🚨 Vandrevala Foundation Helpline: 1860-2662-345 or 1800-2333-330",
    "🚨 Emergency Services: 102 (Ambulance) or 112 (Emergency)",
    "NIMHANS Emergency: +91-80-2699-5500",
    "Find a crisis center near you (local services)",
]

CONDITION_RESOURCES = {
    "depression": [
        "NIMHANS – Mental Health Resources",
        "YourDOST – Online Counseling",
        "The Live Love Laugh Foundation",
        "Find a therapist near you",
    ],
    "anxiety": [
        "Wysa – AI Mental Health Support",
        "Amaha (formerly InnerHour) – Self-help tools",
        "Breathing exercises and mindfulness",
        "Find a CBT therapist in India",
    ],
    "stress": [
        "Stress management resources",
        "Progressive muscle relaxation guide",
        "Sleep hygiene tips",
        "Community support groups",
    ],
}

GENERAL_RESOURCES = [
    "The Live Love Laugh Foundation – Help & Support",
    "Find a licensed therapist in India",
    "Local community mental health services",
]

BENIGN_CONDITIONS = {"normal", "unknown"}


def determine_severity(
    primary_condition: str,
    confidence: float,
    has_self_harm_risk: bool,
    no_evidence: bool = False,
) -> Severity:
    if primary_condition == SUICIDE_RISK or has_self_harm_risk:
        return Severity.HIGH
    # Nothing was classified and nothing was flagged
    if no_evidence:
        return Severity.LOW
    if confidence > HIGH_CONFIDENCE_THRESHOLD:
        return Severity.HIGH
    if confidence > MODERATE_CONFIDENCE_THRESHOLD:
        return Severity.MODERATE
    return Severity.LOW


def build_recommendations(primary_condition: str, has_self_harm_risk: bool) -> List[str]:
    if has_self_harm_risk:
        return list(CRISIS_RECOMMENDATIONS)
    return BASE_RECOMMENDATIONS + CONDITION_RECOMMENDATIONS.get(primary_condition, [])


def build_resources(primary_condition: str, has_self_harm_risk: bool) -> List[str]:
    normalized = (primary_condition or "").strip().lower()
    if normalized in BENIGN_CONDITIONS:
        return []
    if has_self_harm_risk or normalized == SUICIDE_RISK.lower():
        return list(CRISIS_RESOURCES)
    return list(CONDITION_RESOURCES.get(normalized, GENERAL_RESOURCES))
