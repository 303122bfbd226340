"""
R&D Evaluation Service - R&D Competency Platform
competency/services/rd_evaluation_service.py

Creates, edits, transitions and summarizes R&D evaluations. Every mutating
action appends one history entry with before/after snapshots.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional
from uuid import UUID

from competency.core.exceptions import EvaluationWorkflowException, RepositoryException
from competency.models.criteria import CriteriaUpdate, RdEvaluationCriteria
from competency.models.enumerations import EvaluationStatus, Grade, HistoryAction
from competency.models.evaluation import (
    AutoEvaluationRequest,
    AutoEvaluationResponse,
    BulkAutoEvaluationRequest,
    BulkAutoEvaluationResponse,
    CategoryDetails,
    CategoryScores,
    EvaluationHistoryEntry,
    RankedEvaluation,
    RdEvaluationCreate,
    RdEvaluationDetail,
    RdEvaluationResponse,
    RdEvaluationStats,
    ScoreUpdate,
    SkippedEmployee,
    StatusTransitionRequest,
)
from competency.repositories.criteria_repository import CriteriaRepository
from competency.repositories.employee_repository import EmployeeRepository
from competency.repositories.evaluation_repository import EvaluationRepository
from competency.scoring.evaluation_stats import rank_evaluations, summarize_evaluations
from competency.scoring.rd_auto_evaluator import RdAutoEvaluator
from competency.scoring.rd_evaluator import RdEvaluator
from competency.scoring.rubric_scorer import ScoreConversionRubric
from competency.services.evaluation_workflow import (
    EvaluationHistoryLog,
    ensure_editable,
    ensure_transition,
    evaluation_snapshot,
)

logger = logging.getLogger(__name__)

CATEGORY_FIELDS = tuple(CategoryScores.model_fields)


class RdEvaluationService:
    """Application service over the evaluation and employee repositories."""

    def __init__(
        self,
        evaluation_repo: EvaluationRepository,
        employee_repo: EmployeeRepository,
        evaluator: Optional[RdEvaluator] = None,
        auto_evaluator: Optional[RdAutoEvaluator] = None,
        criteria_repo: Optional[CriteriaRepository] = None,
    ):
        self.evaluation_repo = evaluation_repo
        self.employee_repo = employee_repo
        self.criteria_repo = criteria_repo or CriteriaRepository()
        if evaluator is None and auto_evaluator is None:
            self.apply_criteria(self.criteria_repo.get())
        else:
            self.evaluator = evaluator or RdEvaluator()
            self.auto_evaluator = auto_evaluator or RdAutoEvaluator(evaluator=self.evaluator)

    # ------------------------------------------------------------------
    # Criteria
    # ------------------------------------------------------------------

    def apply_criteria(self, criteria: RdEvaluationCriteria) -> None:
        """Rebuild the evaluator and rubric from a criteria set."""
        weights = {c.value: item.weight for c, item in criteria.categories.items()}
        bands = {
            c.value: [(r.range_min, r.range_max, r.converted_score) for r in item.scoring_ranges]
            for c, item in criteria.categories.items()
        }
        max_raw_scores = {c.value: item.max_score for c, item in criteria.categories.items()}

        self.evaluator = RdEvaluator(weights)
        self.auto_evaluator = RdAutoEvaluator(
            rubric=ScoreConversionRubric(bands=bands, max_raw_scores=max_raw_scores),
            evaluator=self.evaluator,
        )

    def get_criteria(self) -> RdEvaluationCriteria:
        return self.criteria_repo.get()

    def update_criteria(self, update: CriteriaUpdate) -> RdEvaluationCriteria:
        """
        Replace the active criteria. Stored evaluations keep their scores;
        later scoring uses the new weights, caps and bands.
        """
        criteria = RdEvaluationCriteria(**update.model_dump())
        self.apply_criteria(criteria)
        self.criteria_repo.replace(criteria)
        logger.info(f"R&D evaluation criteria updated by {update.updated_by or 'unknown'}")
        return criteria

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _history_log(self, evaluation_id: UUID) -> EvaluationHistoryLog:
        return EvaluationHistoryLog(evaluation_id, list(self.evaluation_repo.get_history(evaluation_id)))

    def _record(self, evaluation_id: UUID, action: HistoryAction, **kwargs) -> EvaluationHistoryEntry:
        entry = self._history_log(evaluation_id).append(action, **kwargs)
        return self.evaluation_repo.append_history(entry)

    def _score(self, evaluation: RdEvaluationResponse, scores: CategoryScores) -> RdEvaluationResponse:
        result = self.evaluator.evaluate(scores.model_dump(), employee_id=str(evaluation.employee_id))
        return evaluation.model_copy(update={
            "scores": scores,
            "total_score": float(result.total_score),
            "grade": result.grade,
            "updated_at": datetime.now(timezone.utc),
        })

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, payload: RdEvaluationCreate) -> RdEvaluationResponse:
        """
        Create a draft evaluation.

        Raises:
            EntityNotFoundException / EntityDeletedException: unknown or
                inactive employee.
            DuplicateEntityException: evaluation already exists for the year.
        """
        self.employee_repo.get_active(payload.employee_id)
        result = self.evaluator.evaluate(payload.scores.model_dump(), employee_id=str(payload.employee_id))

        evaluation = RdEvaluationResponse(
            employee_id=payload.employee_id,
            evaluation_year=payload.evaluation_year,
            scores=payload.scores,
            details=payload.details,
            evaluated_by=payload.evaluated_by,
            status=EvaluationStatus.DRAFT,
            comments=payload.comments,
            total_score=float(result.total_score),
            grade=result.grade,
        )
        self.evaluation_repo.create(evaluation)
        self._record(
            evaluation.id,
            HistoryAction.CREATED,
            performed_by=payload.evaluated_by,
            new_values=evaluation_snapshot(evaluation),
            comments=payload.comments,
        )
        logger.info(
            f"Created R&D evaluation {evaluation.id} for employee {payload.employee_id} "
            f"({payload.evaluation_year}): {evaluation.total_score} / {evaluation.grade.value}"
        )
        return evaluation

    def update_scores(self, evaluation_id: UUID, update: ScoreUpdate) -> RdEvaluationResponse:
        """
        Apply a partial score edit and recompute total and grade.

        Raises:
            EvaluationLockedException: evaluation is approved.
        """
        with self.evaluation_repo.transaction():
            current = self.evaluation_repo.get_or_raise(evaluation_id)
            ensure_editable(current)

            changes = update.model_dump(include=set(CATEGORY_FIELDS), exclude_none=True)
            scores = current.scores.model_copy(update=changes)
            updated = self._score(current, scores)
            if update.details is not None:
                updated.details = update.details
            if update.comments is not None:
                updated.comments = update.comments

            self.evaluation_repo.update(updated)
            self._record(
                evaluation_id,
                HistoryAction.UPDATED,
                performed_by=update.updated_by,
                previous_values=evaluation_snapshot(current),
                new_values=evaluation_snapshot(updated),
                comments=update.comments,
            )
        return updated

    def transition(self, evaluation_id: UUID, request: StatusTransitionRequest) -> RdEvaluationResponse:
        """
        Move an evaluation to a new status.

        Raises:
            InvalidStatusTransitionException: not an allowed transition.
        """
        with self.evaluation_repo.transaction():
            current = self.evaluation_repo.get_or_raise(evaluation_id)
            action = ensure_transition(current.status, request.target_status)

            updated = current.model_copy(update={
                "status": request.target_status,
                "updated_at": datetime.now(timezone.utc),
            })
            self.evaluation_repo.update(updated)
            self._record(
                evaluation_id,
                action,
                performed_by=request.performed_by,
                previous_values={"status": current.status.value},
                new_values={"status": updated.status.value},
                comments=request.comments,
            )
        logger.info(
            f"Evaluation {evaluation_id}: {current.status.value} -> {updated.status.value}"
        )
        return updated

    def auto_calculate(self, employee_id: UUID, request: AutoEvaluationRequest) -> AutoEvaluationResponse:
        """Score an employee from stored records; optionally save as a draft."""
        employee = self.employee_repo.get_active(employee_id)
        records = self.employee_repo.get_records(employee_id)

        result = self.auto_evaluator.calculate(
            employee,
            records,
            evaluation_year=request.evaluation_year,
            start_date=request.start_date,
            end_date=request.end_date,
        )
        response = AutoEvaluationResponse(
            employee_id=employee_id,
            evaluation_year=result.evaluation_year,
            raw_scores={k: float(v) for k, v in result.raw_scores.items()},
            capped_scores={k: float(v) for k, v in result.capped_scores.items()},
            converted_scores={k: float(v) for k, v in result.converted_scores.items()},
            details=result.details,
            total_score=float(result.total_score),
            grade=result.grade,
            calculated_at=result.calculated_at,
        )

        if request.save:
            scores = CategoryScores(**response.converted_scores)
            details = CategoryDetails(**result.details)
            existing = self.evaluation_repo.get_by_employee_year(employee_id, result.evaluation_year)
            if existing is None:
                response.evaluation = self.create(RdEvaluationCreate(
                    employee_id=employee_id,
                    evaluation_year=result.evaluation_year,
                    scores=scores,
                    details=details,
                    evaluated_by=request.evaluated_by,
                    comments="auto-calculated",
                ))
            else:
                response.evaluation = self.update_scores(existing.id, ScoreUpdate(
                    **scores.model_dump(),
                    details=details,
                    updated_by=request.evaluated_by,
                    comments="auto-calculated",
                ))
        return response

    def auto_calculate_all(self, request: BulkAutoEvaluationRequest) -> BulkAutoEvaluationResponse:
        """
        Auto-calculate and save the year's evaluation of every active employee.

        Employees whose evaluation cannot be saved (for example an approved,
        locked evaluation) are reported in `skipped`; the run continues.
        """
        year = request.evaluation_year or date.today().year
        single = AutoEvaluationRequest(evaluation_year=year, save=True, evaluated_by=request.evaluated_by)

        saved: List[RdEvaluationResponse] = []
        skipped: List[SkippedEmployee] = []
        departments = set()
        for employee in self.employee_repo.get_all():
            try:
                result = self.auto_calculate(employee.id, single)
            except (RepositoryException, EvaluationWorkflowException) as e:
                logger.warning(f"Auto-calculation skipped for employee {employee.id}: {e}")
                skipped.append(SkippedEmployee(employee_id=employee.id, reason=str(e)))
                continue
            saved.append(result.evaluation)
            if employee.department:
                departments.add(employee.department)

        total = len(saved)
        average = sum(e.total_score for e in saved) / total if total else 0.0
        logger.info(f"Auto-calculated {total} R&D evaluations for {year} ({len(skipped)} skipped)")
        return BulkAutoEvaluationResponse(
            evaluation_year=year,
            total_evaluations=total,
            average_score=round(average, 2),
            s_grade_count=sum(1 for e in saved if e.grade == Grade.S),
            departments=len(departments),
            evaluations=saved,
            skipped=skipped,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, evaluation_id: UUID) -> RdEvaluationResponse:
        return self.evaluation_repo.get_or_raise(evaluation_id)

    def get_detail(self, evaluation_id: UUID) -> RdEvaluationDetail:
        evaluation = self.get(evaluation_id)
        return RdEvaluationDetail(evaluation=evaluation, history=list(self.history(evaluation_id)))

    def history(self, evaluation_id: UUID):
        self.evaluation_repo.get_or_raise(evaluation_id)
        return self._history_log(evaluation_id).entries()

    def list_ranked(
        self,
        year: Optional[int] = None,
        status: Optional[EvaluationStatus] = None,
        department: Optional[str] = None,
        employee_id: Optional[UUID] = None,
    ) -> List[RankedEvaluation]:
        evaluations = self.evaluation_repo.find(year=year, status=status, employee_id=employee_id)
        employees = self.employee_repo.find_by_ids({e.employee_id for e in evaluations})
        if department is not None:
            evaluations = [
                e for e in evaluations
                if e.employee_id in employees and employees[e.employee_id].department == department
            ]
        return rank_evaluations(evaluations, employees)

    def stats(
        self,
        year: Optional[int] = None,
        approved_only: bool = True,
        top_n: int = 5,
    ) -> RdEvaluationStats:
        year = year or date.today().year
        status = EvaluationStatus.APPROVED if approved_only else None
        evaluations = self.evaluation_repo.find(year=year, status=status)
        employees = self.employee_repo.find_by_ids({e.employee_id for e in evaluations})
        return summarize_evaluations(evaluations, employees, top_n=top_n)
