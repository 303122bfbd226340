# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration and data for scoring, models and APIs
"""

import pytest
from datetime import date
from fastapi.testclient import TestClient

from competency.main import app
from competency.core.dependencies import (
    get_criteria_repository,
    get_employee_repository,
    get_evaluation_repository,
    get_rd_evaluation_service,
    get_training_repository,
)
from competency.models.employee import (
    Certification,
    EmployeeCreate,
    EmployeeRecords,
    EmployeeResponse,
    LanguageRecord,
    Project,
    SkillRecord,
    TrainingRecord,
)
from competency.models.enumerations import (
    CertificationLevel,
    Education,
    LanguageProficiency,
    ProjectRole,
    SkillType,
    TrainingStatus,
    TrainingType,
)
from competency.services.cache import reset_cache


AS_OF = date(2024, 6, 30)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Empty in-memory stores and run without Redis."""
    monkeypatch.setattr("competency.services.cache.get_cache", lambda: None)
    monkeypatch.setattr("competency.services.skill_profile_service.get_cache", lambda: None)
    monkeypatch.setattr("competency.routers.health.get_cache", lambda: None)
    get_employee_repository().clear()
    get_evaluation_repository().clear()
    get_training_repository().clear()
    get_criteria_repository().reset()
    get_rd_evaluation_service.cache_clear()
    yield
    reset_cache()


# =============================================================================
# EMPLOYEE FIXTURES
# =============================================================================

@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def valid_employee_data():
    """Valid employee payload for POST /employees."""
    return {
        "name": "김연구",
        "department": "기술연구소",
        "department_code": "rd",
        "team": "소프트웨어개발팀",
        "position": "선임연구원",
        "hire_date": "2016-03-02",
        "education": "master",
        "previous_experience_years": 2,
        "previous_experience_months": 6,
    }


@pytest.fixture
def rd_employee():
    """R&D employee with 10 years in company as of AS_OF."""
    return EmployeeResponse(
        **EmployeeCreate(
            name="이개발",
            department="기술연구소",
            department_code="RD",
            team="연구1팀",
            hire_date=date(2014, 7, 3),
            education=Education.MASTER,
            previous_experience_years=2,
        ).model_dump()
    )


@pytest.fixture
def sales_employee():
    return EmployeeResponse(name="박영업", department="영업본부", team="국내영업팀")


@pytest.fixture
def sample_records():
    """A realistic record bundle for one R&D engineer."""
    return EmployeeRecords(
        certifications=[
            Certification(
                name="정보처리기사",
                level=CertificationLevel.ADVANCED,
                issue_date=date(2024, 3, 15),
            ),
            Certification(
                name="AWS Solutions Architect",
                level=CertificationLevel.EXPERT,
                issue_date=date(2017, 5, 1),
                expiry_date=date(2020, 5, 1),
            ),
        ],
        languages=[
            LanguageRecord(
                language="English",
                proficiency_level=LanguageProficiency.ADVANCED,
                test_type="TOEIC",
                score=915,
                max_score=990,
            ),
        ],
        trainings=[
            TrainingRecord(
                course_name="정보보안 교육",
                type=TrainingType.REQUIRED,
                status=TrainingStatus.COMPLETED,
                duration=8,
                completion_date=date(2024, 2, 1),
            ),
            TrainingRecord(
                course_name="딥러닝 심화",
                type=TrainingType.OPTIONAL,
                status=TrainingStatus.COMPLETED,
                duration=32,
                completion_date=date(2023, 11, 20),
            ),
            TrainingRecord(
                course_name="리더십 과정",
                status=TrainingStatus.PLANNED,
                duration=16,
            ),
        ],
        skills=[
            SkillRecord(
                skill_name="Python",
                skill_type=SkillType.TECHNICAL,
                proficiency_level=85,
                years_of_experience=8,
                last_assessed_date=date(2024, 1, 10),
            ),
            SkillRecord(
                skill_name="커뮤니케이션",
                skill_type=SkillType.SOFT,
                proficiency_level=70,
            ),
        ],
        projects=[
            Project(name="차세대 플랫폼", role=ProjectRole.PROJECT_LEADER, start_date=date(2024, 1, 2)),
        ],
    )
