from pydantic import BaseModel, Field, field_validator
from uuid import UUID, uuid4
from datetime import date, datetime, timezone
from typing import Optional, List

from competency.models.enumerations import (
    CertificationLevel,
    Education,
    InstructorRole,
    LanguageProficiency,
    ProjectRole,
    SkillType,
    TrainingStatus,
    TrainingType,
)


class EmployeeBase(BaseModel):
    """
    Base Pydantic model for Employee.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Employee name"
    )

    department: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Department name (e.g. 기술연구소)"
    )

    department_code: Optional[str] = Field(
        default=None,
        max_length=20,
        description="Department code (e.g. RD)"
    )

    team: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Team name; department heads may have none"
    )

    team_code: Optional[str] = Field(
        default=None,
        max_length=20,
        description="Team code (e.g. IT01)"
    )

    position: Optional[str] = Field(default=None, max_length=100)

    hire_date: Optional[date] = Field(
        default=None,
        description="Hire date; drives the experience score"
    )

    education: Optional[Education] = Field(
        default=None,
        description="Highest degree"
    )

    previous_experience_years: int = Field(default=0, ge=0, le=60)
    previous_experience_months: int = Field(default=0, ge=0, le=11)

    @field_validator("team_code")
    @classmethod
    def uppercase_team_code(cls, value: Optional[str]) -> Optional[str]:
        return value.upper() if value else None


class EmployeeCreate(EmployeeBase):
    """
    Model for creating a new employee.
    """
    pass


class EmployeeResponse(EmployeeBase):
    """
    Model returned in API responses.
    """

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique employee identifier"
    )

    is_active: bool = Field(
        default=True,
        description="False once the employee is soft-deleted"
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Record creation timestamp"
    )

    class Config:
        from_attributes = True


# =============================================================================
# RECORDS CONSUMED BY SCORING
# =============================================================================

class Certification(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    issuer: Optional[str] = None
    level: Optional[CertificationLevel] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    is_active: bool = True


class LanguageRecord(BaseModel):
    language: str = Field(..., min_length=1, max_length=50, description="e.g. English")
    proficiency_level: LanguageProficiency
    test_type: Optional[str] = Field(default=None, description="e.g. TOEIC, JLPT, HSK")
    test_level: Optional[str] = Field(default=None, description="e.g. N1, HSK6")
    score: Optional[float] = Field(default=None, ge=0)
    max_score: Optional[float] = Field(default=None, ge=0)
    is_active: bool = True


class TrainingRecord(BaseModel):
    course_name: str = Field(..., min_length=1, max_length=255)
    type: TrainingType = TrainingType.OPTIONAL
    status: TrainingStatus = TrainingStatus.PLANNED
    duration: float = Field(default=0, ge=0, description="Hours")
    completion_date: Optional[date] = None
    instructor_role: Optional[InstructorRole] = Field(
        default=None,
        description="Set when the employee taught or mentored instead of attending"
    )


class SkillRecord(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=255)
    skill_type: SkillType
    proficiency_level: int = Field(..., ge=1, le=100)
    years_of_experience: Optional[float] = Field(default=None, ge=0)
    last_assessed_date: Optional[date] = None
    is_active: bool = True


class Project(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: ProjectRole = ProjectRole.MEMBER
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class Patent(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    status: str = Field(default="pending", description="pending / granted")
    application_date: Optional[date] = None


class Publication(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    publication_type: Optional[str] = Field(default=None, description="e.g. SCI(E), domestic")
    publication_date: Optional[date] = None


class Award(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    level: Optional[str] = Field(default=None, description="international / national / industry")
    award_date: Optional[date] = None


class Proposal(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    status: str = Field(default="submitted")
    submission_date: Optional[date] = None


class EmployeeRecords(BaseModel):
    """
    Every record list owned by one employee.

    Replaced as a whole by PUT /employees/{id}/records.
    """

    certifications: List[Certification] = Field(default_factory=list)
    languages: List[LanguageRecord] = Field(default_factory=list)
    trainings: List[TrainingRecord] = Field(default_factory=list)
    skills: List[SkillRecord] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    patents: List[Patent] = Field(default_factory=list)
    publications: List[Publication] = Field(default_factory=list)
    awards: List[Award] = Field(default_factory=list)
    proposals: List[Proposal] = Field(default_factory=list)
