"""
Criteria Repository - R&D Competency Platform
competency/repositories/criteria_repository.py

Holds the single active set of R&D evaluation criteria.
"""

from threading import RLock

from competency.config import settings
from competency.models.criteria import CategoryCriteria, RdEvaluationCriteria, ScoringRange
from competency.models.enumerations import RdCategory
from competency.scoring.rubric_scorer import DEFAULT_BANDS, DEFAULT_MAX_RAW_SCORE


def default_criteria() -> RdEvaluationCriteria:
    """Configured category weights with the default bands and caps."""
    ranges = [
        ScoringRange(
            range_min=float(band.range_min),
            range_max=None if band.range_max is None else float(band.range_max),
            converted_score=float(band.converted_score),
        )
        for band in DEFAULT_BANDS
    ]
    weights = settings.rd_category_weights
    return RdEvaluationCriteria(
        categories={
            category: CategoryCriteria(
                weight=weights[category.value],
                max_score=float(DEFAULT_MAX_RAW_SCORE),
                scoring_ranges=list(ranges),
            )
            for category in RdCategory
        },
    )


class CriteriaRepository:
    """Single-document store; a save replaces the whole criteria set."""

    def __init__(self):
        self._criteria = default_criteria()
        self._lock = RLock()

    def get(self) -> RdEvaluationCriteria:
        with self._lock:
            return self._criteria.model_copy(deep=True)

    def replace(self, criteria: RdEvaluationCriteria) -> RdEvaluationCriteria:
        with self._lock:
            self._criteria = criteria.model_copy(deep=True)
        return criteria

    def reset(self) -> None:
        with self._lock:
            self._criteria = default_criteria()
