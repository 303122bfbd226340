"""
R&D Evaluation Repository - R&D Competency Platform
competency/repositories/evaluation_repository.py

Stores R&D evaluations (one per employee and year) and their history.
"""

from typing import Dict, List, Optional, Tuple
from uuid import UUID

from competency.core.exceptions import DuplicateEntityException
from competency.models.enumerations import EvaluationStatus
from competency.models.evaluation import EvaluationHistoryEntry, RdEvaluationResponse
from competency.repositories.base import BaseRepository


class EvaluationRepository(BaseRepository[RdEvaluationResponse]):
    """Repository for R&D evaluations and their append-only history."""

    ENTITY_NAME = "RdEvaluation"

    def __init__(self):
        super().__init__()
        self._history: Dict[UUID, List[EvaluationHistoryEntry]] = {}

    def create(self, evaluation: RdEvaluationResponse) -> RdEvaluationResponse:
        """
        Store a new evaluation.

        Raises:
            DuplicateEntityException: The employee already has an
                evaluation for that year.
        """
        with self.transaction():
            existing = self.get_by_employee_year(evaluation.employee_id, evaluation.evaluation_year)
            if existing is not None:
                raise DuplicateEntityException(
                    f"Employee {evaluation.employee_id} already has an evaluation "
                    f"for {evaluation.evaluation_year}"
                )
            self.put(evaluation.id, evaluation)
            self._history.setdefault(evaluation.id, [])
        return evaluation

    def update(self, evaluation: RdEvaluationResponse) -> RdEvaluationResponse:
        with self.transaction():
            self.get_or_raise(evaluation.id)
            self.put(evaluation.id, evaluation)
        return evaluation

    def get_by_employee_year(self, employee_id: UUID, year: int) -> Optional[RdEvaluationResponse]:
        for evaluation in self.get_all():
            if evaluation.employee_id == employee_id and evaluation.evaluation_year == year:
                return evaluation
        return None

    def find(
        self,
        year: Optional[int] = None,
        status: Optional[EvaluationStatus] = None,
        employee_id: Optional[UUID] = None,
    ) -> List[RdEvaluationResponse]:
        """Filter evaluations; None means no filter."""
        results = []
        for evaluation in self.get_all():
            if year is not None and evaluation.evaluation_year != year:
                continue
            if status is not None and evaluation.status != status:
                continue
            if employee_id is not None and evaluation.employee_id != employee_id:
                continue
            results.append(evaluation)
        return results

    def append_history(self, entry: EvaluationHistoryEntry) -> EvaluationHistoryEntry:
        with self.transaction():
            self._history.setdefault(entry.evaluation_id, []).append(entry)
        return entry

    def get_history(self, evaluation_id: UUID) -> Tuple[EvaluationHistoryEntry, ...]:
        with self.transaction():
            return tuple(self._history.get(evaluation_id, ()))

    def clear(self) -> None:
        with self.transaction():
            super().clear()
            self._history.clear()
