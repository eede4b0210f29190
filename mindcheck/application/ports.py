from typing import List, Optional, Protocol

from pydantic import BaseModel, Field

from mindcheck.domain.models import AssessmentVerdict


class ClassificationError(RuntimeError):
    """The classifier failed or timed out for one answer."""


class ClassifierOutput(BaseModel):
    condition: str
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    keywords: List[str] = []


class ClassifierPort(Protocol):
    def classify(self, text: str, timeout: float) -> ClassifierOutput:
        """
        Classify one free-text answer within `timeout` seconds.
        Raises ClassificationError on network failure, timeout or a malformed reply.
        """
        ...


class HistoryPort(Protocol):
    def load(self) -> List[AssessmentVerdict]:
        ...

    def append(self, verdict: AssessmentVerdict) -> Optional[AssessmentVerdict]:
        ...

    def recent(self, limit: Optional[int] = None) -> List[AssessmentVerdict]:
        ...

    def delete(self, index: int) -> AssessmentVerdict:
        ...

    def clear(self) -> None:
        ...
