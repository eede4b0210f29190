import logging
from typing import List, Optional

from mindcheck.application.use_cases import SelfAssessmentUseCase
from mindcheck.domain.models import AnswerPrediction, AssessmentVerdict
from mindcheck.domain.questionnaire import SurveyQuestion, validate_answer


logger = logging.getLogger(__name__)


class AssessmentSession:
    """Walks the questionnaire one question at a time, classifying each answer as it arrives."""

    def __init__(self, use_case: SelfAssessmentUseCase):
        self.use_case = use_case
        self.questions: List[SurveyQuestion] = list(use_case.questions)
        self.current_step = 0
        self.predictions: List[AnswerPrediction] = []
        self.verdict: Optional[AssessmentVerdict] = None

    def start_new(self):
        self.current_step = 0
        self.predictions = []
        self.verdict = None

    @property
    def current_question(self) -> Optional[SurveyQuestion]:
        if self.is_complete:
            return None
        return self.questions[self.current_step]

    @property
    def is_last_question(self) -> bool:
        return self.current_step == len(self.questions) - 1

    @property
    def is_complete(self) -> bool:
        return self.verdict is not None

    @property
    def progress(self) -> float:
        return (self.current_step + 1) / len(self.questions)

    def answer_for(self, question_id: int) -> str:
        for prediction in self.predictions:
            if prediction.question_id == question_id:
                return prediction.answer_text
        return ""

    def submit_answer(self, answer_text: str) -> Optional[AssessmentVerdict]:
        """
        Record the answer to the current question.

        Returns the verdict once the last question is done, otherwise None.
        """
        question = self.current_question
        if question is None:
            raise ValueError("Assessment already complete")

        is_valid, error = validate_answer(question, answer_text)
        if not is_valid:
            raise ValueError(error)

        answer_text = (answer_text or "").strip()
        if answer_text:
            self.predictions.append(self.use_case.classify_answer(question.id, answer_text))
        elif not self.is_last_question:
            raise ValueError("Only the last question may be skipped")
        else:
            logger.info("Optional question %s skipped", question.id)

        if self.is_last_question:
            self.verdict = self.use_case.complete(self.predictions)
            return self.verdict

        self.current_step += 1
        return None

    def go_back(self) -> Optional[str]:
        """Step back one question. Returns the earlier answer so it can be edited."""
        if self.is_complete or self.current_step == 0:
            return None
        self.current_step -= 1
        question_id = self.questions[self.current_step].id
        previous = self.answer_for(question_id)
        self.predictions = [p for p in self.predictions if p.question_id != question_id]
        return previous
