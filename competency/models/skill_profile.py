from pydantic import BaseModel, Field
from uuid import UUID
from datetime import date, datetime, timezone
from typing import Optional


class CacheInfo(BaseModel):
    """Cache metadata for debugging - shows if Redis is working."""
    hit: bool
    source: str
    key: str
    latency_ms: float
    ttl_seconds: int
    message: str


class SkillProfileResponse(BaseModel):
    """Six category scores plus the weighted overall score."""

    employee_id: UUID
    as_of: date
    experience_score: float = Field(..., ge=0, le=100)
    certification_score: float = Field(..., ge=0, le=100)
    language_score: float = Field(..., ge=0, le=100)
    training_score: float = Field(..., ge=0, le=100)
    technical_score: float = Field(..., ge=0, le=100)
    soft_skill_score: float = Field(..., ge=0, le=100)
    overall_score: float = Field(..., ge=0, le=100)
    level: str = Field(..., description="high / medium / low / none")
    level_label: str = Field(..., description="Korean description band")
    calculated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    cache: Optional[CacheInfo] = None
