"""Application configuration with comprehensive validation."""
from typing import Literal, List, Dict
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# ORGANIZATION POLICY DEFAULTS
# =============================================================================
# Language importance weights and R&D membership terms are organization
# policy, not algorithm. They are exposed as settings so a deployment can
# override them through the environment (JSON-encoded values).
# =============================================================================

DEFAULT_LANGUAGE_WEIGHTS: Dict[str, float] = {
    "English": 1.0,
    "Japanese": 0.9,
    "Chinese": 0.9,
    "German": 0.8,
    "French": 0.8,
    "Spanish": 0.7,
    "Korean": 0.3,  # native language for most staff
}

DEFAULT_RD_DEPARTMENT_TERMS: List[str] = ["기술연구소", "연구개발", "R&D", "연구"]
DEFAULT_RD_DEPARTMENT_CODES: List[str] = ["RD"]
DEFAULT_RD_TEAM_TERMS: List[str] = ["연구", "개발", "R&D"]


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "R&D Competency Platform"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_SKILL_PROFILE: int = Field(default=3600, ge=1)  # 1 hour

    # Skill profile weights
    W_EXPERIENCE: float = Field(default=0.20, ge=0.0, le=1.0)
    W_CERTIFICATION: float = Field(default=0.15, ge=0.0, le=1.0)
    W_LANGUAGE: float = Field(default=0.15, ge=0.0, le=1.0)
    W_TRAINING: float = Field(default=0.20, ge=0.0, le=1.0)
    W_TECHNICAL: float = Field(default=0.20, ge=0.0, le=1.0)
    W_SOFT_SKILL: float = Field(default=0.10, ge=0.0, le=1.0)

    # R&D evaluation category weights
    W_TECHNICAL_COMPETENCY: float = Field(default=0.25, ge=0.0, le=1.0)
    W_PROJECT_EXPERIENCE: float = Field(default=0.20, ge=0.0, le=1.0)
    W_RD_ACHIEVEMENT: float = Field(default=0.25, ge=0.0, le=1.0)
    W_GLOBAL_COMPETENCY: float = Field(default=0.10, ge=0.0, le=1.0)
    W_KNOWLEDGE_SHARING: float = Field(default=0.10, ge=0.0, le=1.0)
    W_INNOVATION_PROPOSAL: float = Field(default=0.10, ge=0.0, le=1.0)

    # Language scoring
    LANGUAGE_WEIGHTS: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_LANGUAGE_WEIGHTS)
    )
    DEFAULT_LANGUAGE_WEIGHT: float = Field(default=0.6, ge=0.0, le=1.0)

    # R&D headcount heuristic (substring match, case-sensitive)
    RD_DEPARTMENT_TERMS: List[str] = Field(
        default_factory=lambda: list(DEFAULT_RD_DEPARTMENT_TERMS)
    )
    RD_DEPARTMENT_CODES: List[str] = Field(
        default_factory=lambda: list(DEFAULT_RD_DEPARTMENT_CODES)
    )
    RD_TEAM_TERMS: List[str] = Field(
        default_factory=lambda: list(DEFAULT_RD_TEAM_TERMS)
    )

    @model_validator(mode="after")
    def validate_skill_weights(self):
        """Validate skill profile weights sum to 1.0."""
        total = sum(self.skill_weights.values())
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"Skill weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def validate_rd_weights(self):
        """Validate R&D category weights sum to 1.0."""
        total = sum(self.rd_category_weights.values())
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"R&D category weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def skill_weights(self) -> Dict[str, float]:
        """Skill category weights keyed by category name."""
        return {
            "experience": self.W_EXPERIENCE,
            "certification": self.W_CERTIFICATION,
            "language": self.W_LANGUAGE,
            "training": self.W_TRAINING,
            "technical": self.W_TECHNICAL,
            "soft_skill": self.W_SOFT_SKILL,
        }

    @property
    def rd_category_weights(self) -> Dict[str, float]:
        """R&D evaluation weights keyed by RdCategory value."""
        return {
            "technical_competency": self.W_TECHNICAL_COMPETENCY,
            "project_experience": self.W_PROJECT_EXPERIENCE,
            "rd_achievement": self.W_RD_ACHIEVEMENT,
            "global_competency": self.W_GLOBAL_COMPETENCY,
            "knowledge_sharing": self.W_KNOWLEDGE_SHARING,
            "innovation_proposal": self.W_INNOVATION_PROPOSAL,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
