from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class TrainingHoursLog(BaseModel):
    """Aggregate training hours for one year and training type."""

    year: int = Field(..., ge=1900, le=2200)
    training_type: str = Field(..., min_length=1, max_length=100)
    hours: float = Field(..., ge=0)


class TeamHeadcountLog(BaseModel):
    """R&D headcount of one team in one year."""

    year: int = Field(..., ge=1900, le=2200)
    team: str = Field(..., min_length=1, max_length=255)
    employee_count: int = Field(..., ge=0)


class TrainingPeriod(BaseModel):
    start_year: int
    end_year: int


class YearlyTrainingSummary(BaseModel):
    total_hours: float
    total_employees: int
    average_hours_per_person: float


class TrainingAnalysisResult(BaseModel):
    average_hours_per_person: float
    total_hours: float
    cumulative_employees: int
    period: TrainingPeriod
    training_type_breakdown: Optional[Dict[str, float]] = None
    yearly_breakdown: Optional[Dict[str, YearlyTrainingSummary]] = None


class TrainingHoursReplace(BaseModel):
    """Body of PUT /training-analysis/hours; replaces every stored log."""

    logs: List[TrainingHoursLog] = Field(default_factory=list)


class TeamHeadcountReplace(BaseModel):
    """Body of PUT /training-analysis/headcounts; replaces every stored log."""

    logs: List[TeamHeadcountLog] = Field(default_factory=list)
