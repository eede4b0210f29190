from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class AggregationSource(str, Enum):
    CLASSIFIER = "classifier"
    KEYWORDS = "keywords"
    DEFAULT = "default"


class AnswerPrediction(BaseModel):
    """One classified answer. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    question_id: int
    answer_text: str = ""
    condition: Optional[str] = None
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    keywords: List[str] = []

    @field_validator("condition", mode="before")
    @classmethod
    def validate_condition(cls, v: Optional[str]):
        if v is not None:
            v = str(v).strip()
            if len(v) == 0:
                return None
        return v

    @field_validator("confidence", mode="before")
    @classmethod
    def validate_confidence(cls, v):
        return 0.0 if v is None else v

    @field_validator("keywords", mode="before")
    @classmethod
    def validate_keywords(cls, v):
        if not v:
            return []
        cleaned = [str(k).strip().lower() for k in v]
        return [k for k in cleaned if k]

    @property
    def has_condition(self) -> bool:
        return self.condition is not None


class RiskSignals(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_self_harm_risk: bool = False
    keyword_counts: Dict[str, int] = {}

    @property
    def total_keyword_occurrences(self) -> int:
        return sum(self.keyword_counts.values())


class ConditionScore(BaseModel):
    label: str
    occurrence_count: int = Field(..., ge=1)
    total_confidence: float = 0.0
    max_confidence: float = 0.0
    weighted_score: float = Field(0.0, ge=0.0)

    @property
    def avg_confidence(self) -> float:
        return self.total_confidence / self.occurrence_count


class PointTally(BaseModel):
    category: str
    points: int = 0
    total_confidence: float = 0.0
    occurrence_count: int = 0

    @property
    def avg_confidence(self) -> float:
        return self.total_confidence / max(1, self.occurrence_count)

    @property
    def composite(self) -> float:
        # points dominate, then confidence (x2), then occurrences (x0.5)
        return self.points + 2 * self.avg_confidence + 0.5 * self.occurrence_count


class ConditionShare(BaseModel):
    condition: str
    share: float = Field(..., ge=0.0)


class KeywordCount(BaseModel):
    keyword: str
    count: int = Field(..., ge=1)


class WeightedRanking(BaseModel):
    """Provisional result of the weighted-majority pass."""

    primary_condition: str
    confidence: float
    conditions: List[ConditionShare] = []
    source: AggregationSource = AggregationSource.CLASSIFIER

    @property
    def built_from_keywords(self) -> bool:
        return self.source == AggregationSource.KEYWORDS


class PointRanking(BaseModel):
    """Result of the point-based pass. Empty when no answer scored points."""

    tallies: List[PointTally] = []
    primary_condition: Optional[str] = None
    confidence: float = 0.0
    conditions: List[ConditionShare] = []

    @property
    def has_any_tally(self) -> bool:
        return len(self.tallies) > 0


class AssessmentVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_condition: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    all_conditions: List[ConditionShare] = []
    severity: Severity
    recommendations: List[str] = []
    resources: List[str] = []
    matched_keywords: List[KeywordCount] = []
    built_from_keywords: bool = False
    timestamp: datetime
