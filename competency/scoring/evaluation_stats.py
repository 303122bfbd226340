"""
scoring/evaluation_stats.py

Ranking and summary statistics over a set of R&D evaluations.

Ranking:
    sort by total_score desc; ties share the better rank (1, 1, 3, ...)
    percentile = (n − rank + 1) / n × 100, rounded to 0.1
"""

from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence
from uuid import UUID

from competency.models.employee import EmployeeResponse
from competency.models.enumerations import Grade
from competency.models.evaluation import (
    DepartmentStats,
    RankedEvaluation,
    RdEvaluationResponse,
    RdEvaluationStats,
)
from competency.scoring.utils import round_to

UNASSIGNED_DEPARTMENT = "미지정"


def rank_evaluations(
    evaluations: Sequence[RdEvaluationResponse],
    employees: Optional[Mapping[UUID, EmployeeResponse]] = None,
) -> List[RankedEvaluation]:
    """Rank evaluations by total score; input order does not matter."""
    employees = employees or {}
    ordered = sorted(
        evaluations,
        key=lambda e: (-e.total_score, str(e.employee_id), e.evaluation_year),
    )
    n = len(ordered)

    ranked: List[RankedEvaluation] = []
    rank = 0
    previous_score = None
    for position, evaluation in enumerate(ordered, start=1):
        if evaluation.total_score != previous_score:
            rank = position
            previous_score = evaluation.total_score
        percentile = round_to(Decimal(n - rank + 1) / Decimal(n) * 100, 1)
        employee = employees.get(evaluation.employee_id)
        ranked.append(
            RankedEvaluation(
                evaluation=evaluation,
                employee_name=employee.name if employee else None,
                department=employee.department if employee else None,
                rank=rank,
                percentile=float(percentile),
            )
        )
    return ranked


def grade_distribution(evaluations: Sequence[RdEvaluationResponse]) -> Dict[str, int]:
    distribution = {grade.value: 0 for grade in Grade}
    for evaluation in evaluations:
        distribution[evaluation.grade.value] += 1
    return distribution


def department_stats(
    evaluations: Sequence[RdEvaluationResponse],
    employees: Mapping[UUID, EmployeeResponse],
) -> List[DepartmentStats]:
    totals: Dict[str, List[Decimal]] = {}
    for evaluation in evaluations:
        employee = employees.get(evaluation.employee_id)
        department = (employee.department if employee else None) or UNASSIGNED_DEPARTMENT
        totals.setdefault(department, []).append(Decimal(str(evaluation.total_score)))

    stats = [
        DepartmentStats(
            department=department,
            count=len(scores),
            average_score=float(round_to(sum(scores) / len(scores), 2)),
        )
        for department, scores in totals.items()
    ]
    return sorted(stats, key=lambda s: (-s.average_score, s.department))


def summarize_evaluations(
    evaluations: Sequence[RdEvaluationResponse],
    employees: Optional[Mapping[UUID, EmployeeResponse]] = None,
    top_n: int = 5,
) -> RdEvaluationStats:
    """Totals, grade distribution, department averages and top performers."""
    employees = employees or {}
    total = len(evaluations)
    if total:
        average = sum(Decimal(str(e.total_score)) for e in evaluations) / total
    else:
        average = Decimal("0")

    return RdEvaluationStats(
        total_evaluations=total,
        average_score=float(round_to(average, 2)),
        grade_distribution=grade_distribution(evaluations),
        department_stats=department_stats(evaluations, employees),
        top_performers=rank_evaluations(evaluations, employees)[:top_n],
    )
