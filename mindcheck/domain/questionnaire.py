"""The fixed self-assessment questionnaire and answer validation."""
from typing import List, Tuple

from pydantic import BaseModel


MIN_LENGTH = {
    "text": 5,
    "textarea": 10,
}


class SurveyQuestion(BaseModel):
    id: int
    question: str
    type: str = "textarea"  # "text" | "textarea"
    placeholder: str = ""
    required: bool = True
    category: str


QUESTIONS: List[SurveyQuestion] = [
    SurveyQuestion(
        id=1,
        question="How would you describe your overall mood today?",
        type="text",
        placeholder="Please describe how you're feeling right now...",
        category="mood",
    ),
    SurveyQuestion(
        id=2,
        question="What thoughts have been occupying your mind recently?",
        placeholder="Share what's been on your mind, any worries, concerns, or positive thoughts...",
        category="thoughts",
    ),
    SurveyQuestion(
        id=3,
        question="How has your sleep been lately?",
        placeholder="Describe your sleep patterns, any difficulties falling asleep, staying asleep, or feeling rested...",
        category="sleep",
    ),
    SurveyQuestion(
        id=4,
        question="What activities or hobbies do you enjoy?",
        placeholder="Tell us about things that bring you joy, your interests, or activities you find fulfilling...",
        category="interests",
    ),
    SurveyQuestion(
        id=5,
        question="How do you handle stress and difficult situations?",
        placeholder="Describe your coping mechanisms, how you deal with challenges, or what helps you through tough times...",
        category="coping",
    ),
    SurveyQuestion(
        id=6,
        question="What are your relationships like with family and friends?",
        placeholder="Share about your social connections, support system, or any relationship challenges...",
        category="relationships",
    ),
    SurveyQuestion(
        id=7,
        question="How do you feel about your work or daily responsibilities?",
        placeholder="Describe your work life, daily tasks, or any pressures you're experiencing...",
        category="work",
    ),
    SurveyQuestion(
        id=8,
        question="Is there anything else you'd like to share about your mental health?",
        placeholder="Any additional thoughts, concerns, or experiences you'd like to discuss...",
        required=False,
        category="additional",
    ),
]


def validate_answer(question: SurveyQuestion, answer: str) -> Tuple[bool, str]:
    """
    Validate one answer against its question.

    Args:
        question: The question being answered
        answer: Raw answer text

    Returns:
        Tuple of (is_valid, error_message)
    """
    answer = (answer or "").strip()
    if not answer:
        if question.required:
            return False, "This question is required"
        return True, ""

    min_length = MIN_LENGTH.get(question.type, MIN_LENGTH["textarea"])
    if len(answer) < min_length:
        return False, f"Please provide at least {min_length} characters"

    return True, ""
