"""
Employee Router - R&D Competency Platform
competency/routers/employees.py

Employee CRUD, record bundles and cached skill profiles.
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from competency.config import settings
from competency.core.dependencies import get_employee_repository, get_skill_profile_service
from competency.core.exceptions import RepositoryException
from competency.models.employee import EmployeeCreate, EmployeeRecords, EmployeeResponse
from competency.models.skill_profile import SkillProfileResponse
from competency.repositories.employee_repository import EmployeeRepository
from competency.routers.errors import ErrorResponse, raise_domain_error
from competency.services.cache import invalidate_skill_profile
from competency.services.skill_profile_service import SkillProfileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Employees"])

NOT_FOUND_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Employee not found"},
    410: {"model": ErrorResponse, "description": "Employee has been deleted"},
}


@router.post(
    "/employees",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new employee",
)
async def create_employee(
    employee: EmployeeCreate,
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeResponse:
    created = employee_repo.create(employee)
    logger.info(f"Created employee {created.id}")
    return created


@router.get(
    "/employees",
    response_model=List[EmployeeResponse],
    summary="List employees",
)
async def list_employees(
    include_inactive: bool = Query(False, description="Include soft-deleted employees"),
    department: Optional[str] = Query(None),
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> List[EmployeeResponse]:
    employees = employee_repo.get_all(include_inactive=include_inactive)
    if department is not None:
        employees = [e for e in employees if e.department == department]
    return sorted(employees, key=lambda e: (e.department or "", e.name))


@router.get(
    "/employees/{employee_id}",
    response_model=EmployeeResponse,
    responses=NOT_FOUND_RESPONSES,
    summary="Get employee by ID",
)
async def get_employee(
    employee_id: UUID,
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeResponse:
    try:
        return employee_repo.get_active(employee_id)
    except RepositoryException as e:
        raise_domain_error(e)


@router.delete(
    "/employees/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND_RESPONSES,
    summary="Soft-delete employee",
)
async def delete_employee(
    employee_id: UUID,
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> None:
    try:
        employee_repo.soft_delete(employee_id)
    except RepositoryException as e:
        raise_domain_error(e)
    invalidate_skill_profile(employee_id)


@router.get(
    "/employees/{employee_id}/records",
    response_model=EmployeeRecords,
    responses=NOT_FOUND_RESPONSES,
    summary="Get employee records",
)
async def get_employee_records(
    employee_id: UUID,
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeRecords:
    try:
        employee_repo.get_active(employee_id)
        return employee_repo.get_records(employee_id)
    except RepositoryException as e:
        raise_domain_error(e)


@router.put(
    "/employees/{employee_id}/records",
    response_model=EmployeeRecords,
    responses=NOT_FOUND_RESPONSES,
    summary="Replace employee records",
    description="Replaces certifications, languages, trainings, skills and R&D activity records. "
                "Invalidates the cached skill profile.",
)
async def replace_employee_records(
    employee_id: UUID,
    records: EmployeeRecords,
    employee_repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeRecords:
    try:
        stored = employee_repo.replace_records(employee_id, records)
    except RepositoryException as e:
        raise_domain_error(e)
    invalidate_skill_profile(employee_id)
    return stored


@router.get(
    "/employees/{employee_id}/skill-profile",
    response_model=SkillProfileResponse,
    responses=NOT_FOUND_RESPONSES,
    summary="Get skill profile",
    description="Six category scores and the weighted overall score. "
                "Today's profile is cached in Redis; passing as_of recalculates.",
)
async def get_skill_profile(
    employee_id: UUID,
    as_of: Optional[date] = Query(None, description="Reference date (YYYY-MM-DD)"),
    service: SkillProfileService = Depends(get_skill_profile_service),
) -> SkillProfileResponse:
    try:
        return service.get_profile(employee_id, as_of)
    except RepositoryException as e:
        raise_domain_error(e)
