"""
Employee Repository - R&D Competency Platform
competency/repositories/employee_repository.py

Data access layer for employees and their record bundles.
"""

from typing import Dict, List
from uuid import UUID

from competency.core.exceptions import EntityDeletedException, EntityNotFoundException
from competency.models.employee import EmployeeCreate, EmployeeRecords, EmployeeResponse
from competency.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeResponse]):
    """Repository for Employee CRUD operations."""

    ENTITY_NAME = "Employee"

    def __init__(self):
        super().__init__()
        self._records: Dict[UUID, EmployeeRecords] = {}

    def create(self, employee: EmployeeCreate) -> EmployeeResponse:
        """
        Store a new employee.

        Args:
            employee: Validated create payload

        Returns:
            Stored employee with generated id
        """
        created = EmployeeResponse(**employee.model_dump())
        with self.transaction():
            self.put(created.id, created)
            self._records[created.id] = EmployeeRecords()
        return created

    def get_active(self, employee_id: UUID) -> EmployeeResponse:
        """
        Retrieve an employee that has not been soft-deleted.

        Raises:
            EntityNotFoundException: Unknown id
            EntityDeletedException: Employee was soft-deleted
        """
        employee = self.get_or_raise(employee_id)
        if not employee.is_active:
            raise EntityDeletedException(self.ENTITY_NAME, str(employee_id))
        return employee

    def get_all(self, include_inactive: bool = False) -> List[EmployeeResponse]:
        employees = super().get_all()
        if include_inactive:
            return employees
        return [e for e in employees if e.is_active]

    def soft_delete(self, employee_id: UUID) -> EmployeeResponse:
        """Flag the employee inactive; records are kept."""
        with self.transaction():
            employee = self.get_active(employee_id)
            deleted = employee.model_copy(update={"is_active": False})
            self.put(employee_id, deleted)
        return deleted

    def get_records(self, employee_id: UUID) -> EmployeeRecords:
        with self.transaction():
            if not self.exists(employee_id):
                raise EntityNotFoundException(self.ENTITY_NAME, str(employee_id))
            return self._records.get(employee_id, EmployeeRecords()).model_copy(deep=True)

    def replace_records(self, employee_id: UUID, records: EmployeeRecords) -> EmployeeRecords:
        """Replace every record list of an active employee."""
        with self.transaction():
            self.get_active(employee_id)
            self._records[employee_id] = records.model_copy(deep=True)
        return records

    def find_by_ids(self, employee_ids) -> Dict[UUID, EmployeeResponse]:
        """Map of id to employee for the given ids, soft-deleted included."""
        found = {}
        for employee_id in employee_ids:
            employee = self.get(employee_id)
            if employee is not None:
                found[employee_id] = employee
        return found

    def clear(self) -> None:
        with self.transaction():
            super().clear()
            self._records.clear()

