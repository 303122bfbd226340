"""
Training Analysis Router - R&D Competency Platform
competency/routers/training_analysis.py

Bulk replacement of training-hour and headcount logs, and per-head
training hour analysis over a year range.
"""

import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from competency.config import settings
from competency.core.dependencies import (
    get_employee_repository,
    get_training_analyzer,
    get_training_repository,
)
from competency.models.training import (
    TeamHeadcountReplace,
    TrainingAnalysisResult,
    TrainingHoursReplace,
)
from competency.repositories.employee_repository import EmployeeRepository
from competency.repositories.training_repository import TrainingRepository
from competency.routers.errors import ErrorResponse, raise_validation_error
from competency.scoring.training_analysis import TrainingHoursAnalyzer

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/training-analysis", tags=["Training Analysis"])


class ReplaceResult(BaseModel):
    stored: int


@router.put(
    "/hours",
    response_model=ReplaceResult,
    summary="Replace training-hour logs",
)
async def replace_hours(
    payload: TrainingHoursReplace,
    training_repo: TrainingRepository = Depends(get_training_repository),
) -> ReplaceResult:
    stored = training_repo.replace_hours(payload.logs)
    logger.info(f"Stored {stored} training-hour logs")
    return ReplaceResult(stored=stored)


@router.put(
    "/headcounts",
    response_model=ReplaceResult,
    summary="Replace team headcount logs",
)
async def replace_headcounts(
    payload: TeamHeadcountReplace,
    training_repo: TrainingRepository = Depends(get_training_repository),
) -> ReplaceResult:
    stored = training_repo.replace_headcounts(payload.logs)
    logger.info(f"Stored {stored} headcount logs")
    return ReplaceResult(stored=stored)


@router.get(
    "",
    response_model=TrainingAnalysisResult,
    response_model_exclude_none=True,
    responses={422: {"model": ErrorResponse, "description": "Invalid year range"}},
    summary="Analyze training hours per head",
    description="Average training hours per R&D head for [start_year, end_year]. "
                "With use_auto_headcount the denominator is the number of R&D members "
                "among all stored employees instead of the headcount logs.",
)
async def analyze_training_hours(
    start_year: int = Query(..., ge=1900, le=2200),
    end_year: int = Query(..., ge=1900, le=2200),
    include_type_breakdown: bool = Query(False),
    include_yearly_breakdown: bool = Query(False),
    use_auto_headcount: bool = Query(False),
    training_repo: TrainingRepository = Depends(get_training_repository),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
    analyzer: TrainingHoursAnalyzer = Depends(get_training_analyzer),
) -> TrainingAnalysisResult:
    if start_year > end_year:
        raise_validation_error(f"start_year ({start_year}) must not be after end_year ({end_year})")

    employees = employee_repo.get_all(include_inactive=True) if use_auto_headcount else None
    return analyzer.analyze(
        training_repo.get_hours(),
        training_repo.get_headcounts(),
        start_year,
        end_year,
        include_type_breakdown=include_type_breakdown,
        include_yearly_breakdown=include_yearly_breakdown,
        use_auto_headcount=use_auto_headcount,
        all_employees=employees,
    )
