"""
Repositories Package - R&D Competency Platform
competency/repositories/__init__.py

In-memory data access layer.
"""

from competency.repositories.base import BaseRepository
from competency.repositories.criteria_repository import CriteriaRepository
from competency.repositories.employee_repository import EmployeeRepository
from competency.repositories.evaluation_repository import EvaluationRepository
from competency.repositories.training_repository import TrainingRepository

__all__ = [
    "BaseRepository",
    "CriteriaRepository",
    "EmployeeRepository",
    "EvaluationRepository",
    "TrainingRepository",
]
