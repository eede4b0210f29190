"""Unit tests for the questionnaire definition and answer validation."""
from mindcheck.domain.questionnaire import QUESTIONS, validate_answer


class TestQuestions:
    """Test the fixed questionnaire."""

    def test_eight_questions_with_unique_ids(self):
        assert len(QUESTIONS) == 8
        assert len({q.id for q in QUESTIONS}) == 8

    def test_only_last_question_optional(self):
        assert [q.required for q in QUESTIONS] == [True] * 7 + [False]


class TestValidateAnswer:
    """Test answer validation."""

    def test_required_empty(self):
        is_valid, error = validate_answer(QUESTIONS[0], "   ")
        assert not is_valid
        assert error == "This question is required"

    def test_text_minimum_length(self):
        assert not validate_answer(QUESTIONS[0], "meh")[0]
        assert validate_answer(QUESTIONS[0], "tired") == (True, "")

    def test_textarea_minimum_length(self):
        is_valid, error = validate_answer(QUESTIONS[1], "work stuff")
        assert is_valid
        is_valid, error = validate_answer(QUESTIONS[1], "work")
        assert not is_valid
        assert "10 characters" in error

    def test_optional_may_be_empty(self):
        assert validate_answer(QUESTIONS[-1], "") == (True, "")
        assert not validate_answer(QUESTIONS[-1], "short")[0]
