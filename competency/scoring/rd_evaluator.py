# competency/scoring/rd_evaluator.py
"""
R&D Evaluator
-------------
Computes the R&D competency total and grade from six category scores.

Formula:
    total = Σ (weight_c × clamp(score_c, 0, 100))    truncated to 0.01

Truncation keeps the stored total on the same side of every grade
threshold as the exact sum (89.995 stays 89.99, grade A).

Category weights (config.py, sum = 1.0):
    technical_competency  0.25
    project_experience    0.20
    rd_achievement        0.25
    global_competency     0.10
    knowledge_sharing     0.10
    innovation_proposal   0.10

Grades (inclusive lower bounds, evaluated top-down):
    S ≥ 90, A ≥ 80, B ≥ 70, C ≥ 60, D otherwise
"""
import structlog
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Mapping, Optional, Union

from competency.config import settings
from competency.models.enumerations import Grade, RdCategory
from competency.scoring.utils import clamp, round_to, truncate_to

logger = structlog.get_logger(__name__)

Number = Union[Decimal, float, int]

GRADE_THRESHOLDS = (
    (Decimal("90"), Grade.S),
    (Decimal("80"), Grade.A),
    (Decimal("70"), Grade.B),
    (Decimal("60"), Grade.C),
)


def grade_for_score(total: Number) -> Grade:
    """Map a total score to its letter grade."""
    value = Decimal(str(total))
    for threshold, grade in GRADE_THRESHOLDS:
        if value >= threshold:
            return grade
    return Grade.D


@dataclass
class RdEvaluationResult:
    """Output of RdEvaluator.evaluate()."""
    total_score: Decimal
    grade: Grade
    category_scores: Dict[str, Decimal] = field(default_factory=dict)  # clamped inputs
    contributions: Dict[str, Decimal] = field(default_factory=dict)    # weight × score


class RdEvaluator:
    """Weighted six-category R&D rubric."""

    def __init__(self, weights: Optional[Mapping[str, float]] = None):
        raw = dict(weights) if weights is not None else settings.rd_category_weights
        self.weights: Dict[str, Decimal] = {}
        for category in RdCategory:
            if category.value not in raw:
                raise ValueError(f"Missing weight for category '{category.value}'")
            self.weights[category.value] = Decimal(str(raw[category.value]))

        total = sum(self.weights.values())
        if abs(total - Decimal("1")) > Decimal("0.001"):
            raise ValueError(f"R&D category weights must sum to 1.0, got {total}")

    def evaluate(
        self,
        category_scores: Mapping[str, Number],
        employee_id: str = "",
    ) -> RdEvaluationResult:
        """
        Args:
            category_scores: Mapping of RdCategory value → score (0-100).
                             Missing categories count as 0; unknown keys
                             are ignored.
            employee_id: Optional, only used for logging.

        Returns:
            RdEvaluationResult with total_score, grade and per-category
            contributions.
        """
        clamped: Dict[str, Decimal] = {}
        contributions: Dict[str, Decimal] = {}
        total = Decimal("0")

        for category, weight in self.weights.items():
            raw = category_scores.get(category)
            score = clamp(Decimal(str(raw))) if raw is not None else Decimal("0")
            clamped[category] = score
            contributions[category] = round_to(score * weight, 4)
            total += score * weight

        total = truncate_to(clamp(total), 2)
        grade = grade_for_score(total)

        logger.info(
            "rd_evaluation_scored",
            employee_id=employee_id,
            category_scores={k: float(v) for k, v in clamped.items()},
            total_score=float(total),
            grade=grade.value,
        )

        return RdEvaluationResult(
            total_score=total,
            grade=grade,
            category_scores=clamped,
            contributions=contributions,
        )
