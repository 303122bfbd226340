"""
R&D Evaluation Router - R&D Competency Platform
competency/routers/rd_evaluations.py

Endpoints:
  POST   /api/v1/rd-evaluations                              create draft
  GET    /api/v1/rd-evaluations                              ranked list
  GET    /api/v1/rd-evaluations/stats                        summary statistics
  GET    /api/v1/rd-evaluations/criteria                     active criteria
  PUT    /api/v1/rd-evaluations/criteria                     replace criteria
  POST   /api/v1/rd-evaluations/auto-calculate               score all employees
  POST   /api/v1/rd-evaluations/auto-calculate/{employee_id} score from records
  GET    /api/v1/rd-evaluations/{evaluation_id}              evaluation + history
  PATCH  /api/v1/rd-evaluations/{evaluation_id}/scores       edit scores
  POST   /api/v1/rd-evaluations/{evaluation_id}/transitions  change status
  GET    /api/v1/rd-evaluations/{evaluation_id}/history      audit trail
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from competency.config import settings
from competency.core.dependencies import get_rd_evaluation_service
from competency.core.exceptions import EvaluationWorkflowException, RepositoryException
from competency.models.criteria import CriteriaUpdate, RdEvaluationCriteria
from competency.models.enumerations import EvaluationStatus
from competency.models.evaluation import (
    AutoEvaluationRequest,
    AutoEvaluationResponse,
    BulkAutoEvaluationRequest,
    BulkAutoEvaluationResponse,
    EvaluationHistoryEntry,
    RdEvaluationCreate,
    RdEvaluationDetail,
    RdEvaluationListResponse,
    RdEvaluationResponse,
    RdEvaluationStats,
    ScoreUpdate,
    StatusTransitionRequest,
)
from competency.routers.errors import ErrorResponse, raise_domain_error
from competency.services.rd_evaluation_service import RdEvaluationService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/rd-evaluations", tags=["R&D Evaluations"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Evaluation not found"}}
CONFLICT = {409: {"model": ErrorResponse, "description": "Workflow or uniqueness conflict"}}


@router.post(
    "",
    response_model=RdEvaluationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Employee not found"},
        409: {"model": ErrorResponse, "description": "Evaluation already exists for this year"},
    },
    summary="Create R&D evaluation",
    description="Creates a draft evaluation. Total score and grade are computed from the six category scores.",
)
async def create_evaluation(
    payload: RdEvaluationCreate,
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> RdEvaluationResponse:
    try:
        return service.create(payload)
    except RepositoryException as e:
        raise_domain_error(e)


@router.get(
    "",
    response_model=RdEvaluationListResponse,
    summary="List R&D evaluations",
    description="Filtered evaluations ranked by total score (ties share a rank).",
)
async def list_evaluations(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    status_filter: Optional[EvaluationStatus] = Query(None, alias="status"),
    department: Optional[str] = Query(None),
    employee_id: Optional[UUID] = Query(None),
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> RdEvaluationListResponse:
    items = service.list_ranked(year=year, status=status_filter, department=department, employee_id=employee_id)
    return RdEvaluationListResponse(items=items, total=len(items))


@router.get(
    "/stats",
    response_model=RdEvaluationStats,
    summary="R&D evaluation statistics",
    description="Grade distribution, department averages and top performers. "
                "Defaults to the current year and approved evaluations.",
)
async def evaluation_stats(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    approved_only: bool = Query(True),
    top_n: int = Query(5, ge=1, le=100),
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> RdEvaluationStats:
    return service.stats(year=year, approved_only=approved_only, top_n=top_n)


@router.get(
    "/criteria",
    response_model=RdEvaluationCriteria,
    summary="Get R&D evaluation criteria",
    description="Active per-category weights, raw-score caps and conversion bands.",
)
async def get_criteria(
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> RdEvaluationCriteria:
    return service.get_criteria()


@router.put(
    "/criteria",
    response_model=RdEvaluationCriteria,
    responses={422: {"model": ErrorResponse, "description": "Invalid criteria"}},
    summary="Replace R&D evaluation criteria",
    description="All six categories are required and weights must sum to 1.0. "
                "Stored evaluations are not rescored.",
)
async def update_criteria(
    update: CriteriaUpdate,
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> RdEvaluationCriteria:
    return service.update_criteria(update)


@router.post(
    "/auto-calculate",
    response_model=BulkAutoEvaluationResponse,
    summary="Auto-calculate R&D evaluations for all employees",
    description="Scores every active employee from their records for the year and saves "
                "the results. Employees with an approved evaluation are skipped.",
)
async def auto_calculate_all(
    request: Optional[BulkAutoEvaluationRequest] = None,
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> BulkAutoEvaluationResponse:
    return service.auto_calculate_all(request or BulkAutoEvaluationRequest())



@router.post(
    "/auto-calculate/{employee_id}",
    response_model=AutoEvaluationResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Employee not found"},
        409: {"model": ErrorResponse, "description": "Existing evaluation is approved"},
    },
    summary="Auto-calculate R&D evaluation",
    description="Derives raw category scores from the employee's records, converts them "
                "through the rubric bands and computes total and grade. With save=true the "
                "result is stored as (or replaces the scores of) the year's evaluation.",
)
async def auto_calculate(
    employee_id: UUID,
    request: Optional[AutoEvaluationRequest] = None,
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> AutoEvaluationResponse:
    try:
        return service.auto_calculate(employee_id, request or AutoEvaluationRequest())
    except (RepositoryException, EvaluationWorkflowException) as e:
        raise_domain_error(e)


@router.get(
    "/{evaluation_id}",
    response_model=RdEvaluationDetail,
    responses=NOT_FOUND,
    summary="Get R&D evaluation with history",
)
async def get_evaluation(
    evaluation_id: UUID,
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> RdEvaluationDetail:
    try:
        return service.get_detail(evaluation_id)
    except RepositoryException as e:
        raise_domain_error(e)


@router.patch(
    "/{evaluation_id}/scores",
    response_model=RdEvaluationResponse,
    responses={**NOT_FOUND, **CONFLICT},
    summary="Update category scores",
    description="Partial update; approved evaluations are locked.",
)
async def update_scores(
    evaluation_id: UUID,
    update: ScoreUpdate,
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> RdEvaluationResponse:
    try:
        return service.update_scores(evaluation_id, update)
    except (RepositoryException, EvaluationWorkflowException) as e:
        raise_domain_error(e)


@router.post(
    "/{evaluation_id}/transitions",
    response_model=RdEvaluationResponse,
    responses={**NOT_FOUND, **CONFLICT},
    summary="Change evaluation status",
    description="Allowed: draft→submitted|rejected, submitted→approved|rejected|draft, rejected→draft.",
)
async def transition_evaluation(
    evaluation_id: UUID,
    request: StatusTransitionRequest,
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> RdEvaluationResponse:
    try:
        return service.transition(evaluation_id, request)
    except (RepositoryException, EvaluationWorkflowException) as e:
        raise_domain_error(e)


@router.get(
    "/{evaluation_id}/history",
    response_model=List[EvaluationHistoryEntry],
    responses=NOT_FOUND,
    summary="Get evaluation history",
)
async def evaluation_history(
    evaluation_id: UUID,
    service: RdEvaluationService = Depends(get_rd_evaluation_service),
) -> List[EvaluationHistoryEntry]:
    try:
        return list(service.history(evaluation_id))
    except RepositoryException as e:
        raise_domain_error(e)
