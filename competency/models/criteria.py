from pydantic import BaseModel, Field, model_validator
from datetime import datetime, timezone
from typing import Dict, List, Optional

from competency.models.enumerations import RdCategory


class ScoringRange(BaseModel):
    """One conversion band: raw scores in [range_min, range_max] map to converted_score."""

    range_min: float = Field(..., ge=0)
    range_max: Optional[float] = Field(
        default=None,
        ge=0,
        description="Upper bound (inclusive); omit for an open-ended top band"
    )
    converted_score: float = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def check_range_order(self):
        if self.range_max is not None and self.range_max < self.range_min:
            raise ValueError(
                f"range_max ({self.range_max}) must not be below range_min ({self.range_min})"
            )
        return self


class CategoryCriteria(BaseModel):
    """Weight, raw-score cap and conversion bands of one R&D category."""

    weight: float = Field(..., ge=0, le=1, description="Share of the total score")
    max_score: float = Field(default=100, gt=0, description="Raw score cap applied before conversion")
    description: Optional[str] = Field(default=None, max_length=500)
    scoring_ranges: List[ScoringRange] = Field(
        default_factory=list,
        description="Empty list disables conversion for the category"
    )


class CriteriaUpdate(BaseModel):
    """Replacement criteria for all six R&D categories."""

    categories: Dict[RdCategory, CategoryCriteria]
    updated_by: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def check_categories(self):
        missing = [c.value for c in RdCategory if c not in self.categories]
        if missing:
            raise ValueError(f"Criteria missing for categories: {', '.join(missing)}")

        total = sum(item.weight for item in self.categories.values())
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"Category weights must sum to 1.0, got {total:.3f}")
        return self


class RdEvaluationCriteria(CriteriaUpdate):
    """Criteria currently used to score R&D evaluations."""

    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
