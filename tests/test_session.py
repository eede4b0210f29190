"""Unit tests for the step-by-step assessment session."""
import pytest

from mindcheck.application.ports import ClassifierOutput
from mindcheck.application.session import AssessmentSession
from mindcheck.application.use_cases import SelfAssessmentUseCase
from mindcheck.domain.questionnaire import QUESTIONS


class CountingClassifier:
    def __init__(self):
        self.calls = 0

    def classify(self, text, timeout):
        self.calls += 1
        return ClassifierOutput(condition="Stress", confidence=0.6)


@pytest.fixture
def classifier():
    return CountingClassifier()


@pytest.fixture
def session(classifier):
    return AssessmentSession(SelfAssessmentUseCase(classifier=classifier))


def _answer_required(session):
    for i in range(len(QUESTIONS) - 1):
        assert session.submit_answer(f"answer for question {i + 1}") is None


class TestAssessmentSession:
    """Test questionnaire navigation and completion."""

    def test_starts_at_first_question(self, session):
        assert session.current_question.id == 1
        assert session.progress == pytest.approx(1 / 8)
        assert not session.is_complete

    def test_full_session(self, session, classifier):
        _answer_required(session)
        assert session.is_last_question
        verdict = session.submit_answer("one more thing I wanted to say")
        assert verdict is not None
        assert session.is_complete
        assert session.current_question is None
        assert classifier.calls == 8
        assert verdict.primary_condition == "Stress"

    def test_skipping_optional_last_question(self, session, classifier):
        _answer_required(session)
        verdict = session.submit_answer("")
        assert verdict is not None
        assert classifier.calls == 7
        assert len(session.predictions) == 7

    def test_required_question_cannot_be_empty(self, session, classifier):
        with pytest.raises(ValueError):
            session.submit_answer("  ")
        assert classifier.calls == 0
        assert session.current_step == 0

    def test_short_answer_rejected(self, session):
        with pytest.raises(ValueError, match="at least 5 characters"):
            session.submit_answer("ok")

    def test_go_back_replaces_previous_answer(self, session):
        session.submit_answer("first answer text")
        assert session.go_back() == "first answer text"
        assert session.current_step == 0
        assert session.predictions == []
        session.submit_answer("edited first answer")
        assert [p.question_id for p in session.predictions] == [1]

    def test_go_back_at_start(self, session):
        assert session.go_back() is None
        assert session.current_step == 0

    def test_submit_after_completion(self, session):
        _answer_required(session)
        session.submit_answer("")
        with pytest.raises(ValueError):
            session.submit_answer("too late for this")

    def test_start_new_resets(self, session):
        _answer_required(session)
        session.submit_answer("")
        session.start_new()
        assert session.current_step == 0
        assert session.predictions == []
        assert session.verdict is None
