import logging
from typing import List, Optional, Sequence, Tuple

from mindcheck.application.ports import ClassificationError, ClassifierPort, HistoryPort
from mindcheck.application.scoring import score_assessment
from mindcheck.domain.models import AnswerPrediction, AssessmentVerdict
from mindcheck.domain.questionnaire import QUESTIONS, SurveyQuestion


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_SECONDS = 15.0


class SelfAssessmentUseCase:
    def __init__(
        self,
        classifier: ClassifierPort,
        history: Optional[HistoryPort] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        questions: Optional[List[SurveyQuestion]] = None,
    ):
        self.classifier = classifier
        self.history_store = history
        self.timeout_seconds = timeout_seconds
        self.questions = questions or QUESTIONS

    def classify_answer(self, question_id: int, answer_text: str) -> AnswerPrediction:
        """Classify one answer. A failed call yields a condition-less, zero-confidence prediction."""
        try:
            output = self.classifier.classify(answer_text, timeout=self.timeout_seconds)
        except ClassificationError as e:
            logger.warning("Classification failed for question %s: %s", question_id, e)
            return AnswerPrediction(question_id=question_id, answer_text=answer_text)
        except Exception as e:
            logger.exception("Classifier raised unexpectedly for question %s: %s", question_id, e)
            return AnswerPrediction(question_id=question_id, answer_text=answer_text)

        return AnswerPrediction(
            question_id=question_id,
            answer_text=answer_text,
            condition=output.condition,
            confidence=output.confidence,
            keywords=output.keywords,
        )

    def run(self, answers: Sequence[Tuple[int, str]]) -> AssessmentVerdict:
        """
        Classify a complete ordered list of (question_id, answer_text) pairs and finish the session.

        An empty answer is accepted only as the last item, for an optional question;
        it is skipped without calling the classifier.
        """
        by_id = {q.id: q for q in self.questions}
        predictions: List[AnswerPrediction] = []
        seen = set()

        for position, (question_id, answer_text) in enumerate(answers):
            if question_id in seen:
                raise ValueError(f"Question {question_id} answered twice")
            seen.add(question_id)

            if not (answer_text or "").strip():
                question = by_id.get(question_id)
                is_last = position == len(answers) - 1
                if not is_last or (question is not None and question.required):
                    raise ValueError(f"Question {question_id} requires an answer")
                logger.info("Optional question %s skipped", question_id)
                continue

            predictions.append(self.classify_answer(question_id, answer_text))

        return self.complete(predictions)

    def complete(self, predictions: Sequence[AnswerPrediction]) -> AssessmentVerdict:
        verdict = score_assessment(predictions)
        logger.info(
            "Assessment complete: %s (confidence %.2f, severity %s)",
            verdict.primary_condition, verdict.confidence, verdict.severity.value,
        )

        if self.history_store is not None:
            try:
                evicted = self.history_store.append(verdict)
                if evicted is not None:
                    logger.debug("History full; evicted entry from %s", evicted.timestamp)
            except (OSError, ValueError) as e:
                logger.warning("Could not save assessment to history: %s", e)

        return verdict

    def history(self, limit: Optional[int] = None) -> List[AssessmentVerdict]:
        """Past verdicts, most recent first."""
        if self.history_store is None:
            return []
        return self.history_store.recent(limit)

    def delete_history_entry(self, index: int) -> AssessmentVerdict:
        if self.history_store is None:
            raise IndexError("No history store configured")
        return self.history_store.delete(index)

    def clear_history(self) -> None:
        if self.history_store is not None:
            self.history_store.clear()
