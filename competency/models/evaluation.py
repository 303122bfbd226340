from pydantic import BaseModel, ConfigDict, Field, model_validator
from uuid import UUID, uuid4
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from competency.models.enumerations import EvaluationStatus, Grade, HistoryAction
from competency.scoring.rd_evaluator import grade_for_score


class CategoryScores(BaseModel):
    """Six R&D category scores, each 0-100."""

    technical_competency: float = Field(default=0.0, ge=0, le=100)
    project_experience: float = Field(default=0.0, ge=0, le=100)
    rd_achievement: float = Field(default=0.0, ge=0, le=100)
    global_competency: float = Field(default=0.0, ge=0, le=100)
    knowledge_sharing: float = Field(default=0.0, ge=0, le=100)
    innovation_proposal: float = Field(default=0.0, ge=0, le=100)


class CategoryDetails(BaseModel):
    """Free-text evidence per category."""

    technical_competency: Optional[str] = None
    project_experience: Optional[str] = None
    rd_achievement: Optional[str] = None
    global_competency: Optional[str] = None
    knowledge_sharing: Optional[str] = None
    innovation_proposal: Optional[str] = None


class RdEvaluationCreate(BaseModel):
    employee_id: UUID
    evaluation_year: int = Field(..., ge=2000, le=2100)
    scores: CategoryScores = Field(default_factory=CategoryScores)
    details: CategoryDetails = Field(default_factory=CategoryDetails)
    evaluated_by: Optional[str] = Field(default=None, max_length=255)
    comments: Optional[str] = None


class ScoreUpdate(BaseModel):
    """Partial score edit; omitted categories keep their stored value."""

    technical_competency: Optional[float] = Field(default=None, ge=0, le=100)
    project_experience: Optional[float] = Field(default=None, ge=0, le=100)
    rd_achievement: Optional[float] = Field(default=None, ge=0, le=100)
    global_competency: Optional[float] = Field(default=None, ge=0, le=100)
    knowledge_sharing: Optional[float] = Field(default=None, ge=0, le=100)
    innovation_proposal: Optional[float] = Field(default=None, ge=0, le=100)
    details: Optional[CategoryDetails] = None
    updated_by: Optional[str] = Field(default=None, max_length=255)
    comments: Optional[str] = None


class StatusTransitionRequest(BaseModel):
    target_status: EvaluationStatus
    performed_by: Optional[str] = Field(default=None, max_length=255)
    comments: Optional[str] = None


class RdEvaluationResponse(BaseModel):
    """
    Stored R&D evaluation.

    total_score and grade are derived from scores; a grade that disagrees
    with its total fails validation.
    """

    id: UUID = Field(default_factory=uuid4)
    employee_id: UUID
    evaluation_year: int
    scores: CategoryScores
    details: CategoryDetails = Field(default_factory=CategoryDetails)
    evaluated_by: Optional[str] = None
    status: EvaluationStatus = EvaluationStatus.DRAFT
    comments: Optional[str] = None
    total_score: float = Field(..., ge=0, le=100)
    grade: Grade
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def check_grade_matches_total(self):
        expected = grade_for_score(self.total_score)
        if self.grade != expected:
            raise ValueError(
                f"Grade {self.grade.value} does not match total score {self.total_score} "
                f"(expected {expected.value})"
            )
        return self


class EvaluationHistoryEntry(BaseModel):
    """One immutable audit record."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    evaluation_id: UUID
    action: HistoryAction
    performed_by: Optional[str] = None
    previous_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    comments: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RankedEvaluation(BaseModel):
    evaluation: RdEvaluationResponse
    employee_name: Optional[str] = None
    department: Optional[str] = None
    rank: int
    percentile: float


class RdEvaluationListResponse(BaseModel):
    items: List[RankedEvaluation]
    total: int


class RdEvaluationDetail(BaseModel):
    evaluation: RdEvaluationResponse
    history: List[EvaluationHistoryEntry]


class DepartmentStats(BaseModel):
    department: str
    count: int
    average_score: float


class RdEvaluationStats(BaseModel):
    total_evaluations: int
    average_score: float
    grade_distribution: Dict[str, int]
    department_stats: List[DepartmentStats]
    top_performers: List[RankedEvaluation]


class AutoEvaluationRequest(BaseModel):
    evaluation_year: Optional[int] = Field(default=None, ge=2000, le=2100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    save: bool = Field(default=False, description="Store the result as a draft evaluation")
    evaluated_by: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def check_period(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class AutoEvaluationResponse(BaseModel):
    employee_id: UUID
    evaluation_year: int
    raw_scores: Dict[str, float]
    capped_scores: Dict[str, float]
    converted_scores: Dict[str, float]
    details: Dict[str, str]
    total_score: float
    grade: Grade
    calculated_at: datetime
    evaluation: Optional[RdEvaluationResponse] = None


class BulkAutoEvaluationRequest(BaseModel):
    evaluation_year: Optional[int] = Field(default=None, ge=2000, le=2100)
    evaluated_by: Optional[str] = Field(default=None, max_length=255)


class SkippedEmployee(BaseModel):
    employee_id: UUID
    reason: str


class BulkAutoEvaluationResponse(BaseModel):
    """Outcome of scoring and saving every active employee for one year."""

    evaluation_year: int
    total_evaluations: int
    average_score: float
    s_grade_count: int
    departments: int
    evaluations: List[RdEvaluationResponse]
    skipped: List[SkippedEmployee] = Field(default_factory=list)
