from enum import Enum

class CertificationLevel(str, Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

class LanguageProficiency(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    NATIVE = "native"

class TrainingType(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    CERTIFICATION = "certification"

class TrainingStatus(str, Enum):
    PLANNED = "planned"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class InstructorRole(str, Enum):
    INSTRUCTOR = "instructor"        # lectured the course
    MENTOR = "mentor"                # mentored participants

class SkillType(str, Enum):
    TECHNICAL = "technical"
    SOFT = "soft"
    LEADERSHIP = "leadership"
    DOMAIN = "domain"

class Education(str, Enum):
    BACHELOR = "bachelor"
    MASTER = "master"
    DOCTOR = "doctor"
    OTHER = "other"

class ProjectRole(str, Enum):
    PROJECT_LEADER = "project_leader"
    CORE_MEMBER = "core_member"
    MEMBER = "member"

class EvaluationStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"

class HistoryAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    REOPENED = "reopened"            # back to draft

class RdCategory(str, Enum):
    TECHNICAL_COMPETENCY = "technical_competency"
    PROJECT_EXPERIENCE = "project_experience"
    RD_ACHIEVEMENT = "rd_achievement"
    GLOBAL_COMPETENCY = "global_competency"
    KNOWLEDGE_SHARING = "knowledge_sharing"
    INNOVATION_PROPOSAL = "innovation_proposal"

class Grade(str, Enum):
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
