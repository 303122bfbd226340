"""
Dependencies - R&D Competency Platform
competency/core/dependencies.py

FastAPI dependency injection for repositories and services.
"""

from functools import lru_cache

from competency.repositories.criteria_repository import CriteriaRepository
from competency.repositories.employee_repository import EmployeeRepository
from competency.repositories.evaluation_repository import EvaluationRepository
from competency.repositories.training_repository import TrainingRepository
from competency.scoring.training_analysis import TrainingHoursAnalyzer
from competency.services.rd_evaluation_service import RdEvaluationService
from competency.services.skill_profile_service import SkillProfileService


@lru_cache()
def get_employee_repository() -> EmployeeRepository:
    """Get cached EmployeeRepository instance."""
    return EmployeeRepository()


@lru_cache()
def get_evaluation_repository() -> EvaluationRepository:
    """Get cached EvaluationRepository instance."""
    return EvaluationRepository()


@lru_cache()
def get_training_repository() -> TrainingRepository:
    """Get cached TrainingRepository instance."""
    return TrainingRepository()


@lru_cache()
def get_criteria_repository() -> CriteriaRepository:
    """Get cached CriteriaRepository instance."""
    return CriteriaRepository()


@lru_cache()
def get_skill_profile_service() -> SkillProfileService:
    return SkillProfileService(get_employee_repository())


@lru_cache()
def get_rd_evaluation_service() -> RdEvaluationService:
    return RdEvaluationService(
        get_evaluation_repository(),
        get_employee_repository(),
        criteria_repo=get_criteria_repository(),
    )


@lru_cache()
def get_training_analyzer() -> TrainingHoursAnalyzer:
    return TrainingHoursAnalyzer()
