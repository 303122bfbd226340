"""
scoring/skill_calculator.py

Calculates an employee's six skill category scores and the overall score.

Categories (each 0-100):
    experience      - tenure since hire date
    certification   - level, recency and expiry of active certifications
    language        - proficiency tier / test score × language importance
    training        - completed hours, recent hours, required courses
    technical       - weighted mean of technical/domain skill proficiency
    soft_skill      - weighted mean of soft/leadership skill proficiency

Formula:
    Overall = 0.20·experience + 0.15·certification + 0.15·language
            + 0.20·training + 0.20·technical + 0.10·soft_skill

Every method is total: empty or partial input degrades to 0.
"""

from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Mapping, Optional, Union

import structlog

from competency.config import settings
from competency.models.employee import (
    Certification,
    EmployeeRecords,
    EmployeeResponse,
    LanguageRecord,
    SkillRecord,
    TrainingRecord,
)
from competency.models.enumerations import (
    CertificationLevel,
    LanguageProficiency,
    SkillType,
    TrainingStatus,
    TrainingType,
)
from competency.scoring.utils import clamp, months_since, round_to, weighted_mean, years_since

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

Number = Union[Decimal, float, int]


@dataclass
class SkillScores:
    """Output of SkillCalculator.calculate_all(), each rounded to 0.1."""
    experience_score: Decimal
    certification_score: Decimal
    language_score: Decimal
    training_score: Decimal
    technical_score: Decimal
    soft_skill_score: Decimal
    overall_score: Decimal

    def as_dict(self) -> Dict[str, Decimal]:
        return asdict(self)


def _two_years_before(as_of: date) -> date:
    try:
        return as_of.replace(year=as_of.year - 2)
    except ValueError:  # Feb 29
        return as_of.replace(year=as_of.year - 2, day=28)


class SkillCalculator:
    """
    Calculate skill category scores from an employee's records.

    Weights and the language importance table default to application
    settings and can be injected for a different organization policy.
    """

    CATEGORIES = ("experience", "certification", "language", "training", "technical", "soft_skill")

    # Experience
    EXPERIENCE_LINEAR_YEARS = Decimal("10")
    EXPERIENCE_LINEAR_POINTS = Decimal("80")
    EXPERIENCE_CAP_YEARS = Decimal("15")

    # Certifications
    CERT_BASE_POINTS = Decimal("10")
    MAX_SCORED_CERTIFICATIONS = 10
    CERT_LEVEL_MULTIPLIER: Dict[CertificationLevel, Decimal] = {
        CertificationLevel.BASIC: Decimal("1.0"),
        CertificationLevel.INTERMEDIATE: Decimal("1.2"),
        CertificationLevel.ADVANCED: Decimal("1.5"),
        CertificationLevel.EXPERT: Decimal("2.0"),
    }
    EXPIRED_MULTIPLIER = Decimal("0.5")

    # Languages
    LANGUAGE_BASE_SCORES: Dict[LanguageProficiency, Decimal] = {
        LanguageProficiency.NATIVE: Decimal("100"),
        LanguageProficiency.ADVANCED: Decimal("80"),
        LanguageProficiency.INTERMEDIATE: Decimal("60"),
        LanguageProficiency.BEGINNER: Decimal("30"),
    }
    LANGUAGE_DEFAULT_BASE = Decimal("40")
    MAX_NORMALIZED_LANGUAGES = 3

    # Training
    TRAINING_FULL_HOURS = Decimal("200")
    TRAINING_BASE_MAX = Decimal("80")
    TRAINING_RECENT_FULL_HOURS = Decimal("40")
    TRAINING_RECENT_MAX = Decimal("20")
    REQUIRED_COURSE_POINTS = Decimal("2")
    REQUIRED_BONUS_MAX = Decimal("10")

    # Skills
    STALE_ASSESSMENT_MONTHS = Decimal("12")
    STALE_MULTIPLIER = Decimal("0.8")
    LEADERSHIP_WEIGHT = Decimal("1.5")
    LEADERSHIP_BONUS_RATE = Decimal("0.1")

    def __init__(
        self,
        weights: Optional[Mapping[str, float]] = None,
        language_weights: Optional[Mapping[str, float]] = None,
        default_language_weight: Optional[float] = None,
    ):
        raw_weights = dict(weights) if weights is not None else settings.skill_weights
        missing = set(self.CATEGORIES) - set(raw_weights)
        if missing:
            raise ValueError(f"Missing skill weights: {sorted(missing)}")
        self.weights = {k: Decimal(str(raw_weights[k])) for k in self.CATEGORIES}
        total = sum(self.weights.values())
        if abs(total - Decimal("1")) > Decimal("0.001"):
            raise ValueError(f"Skill weights must sum to 1.0, got {total}")

        table = language_weights if language_weights is not None else settings.LANGUAGE_WEIGHTS
        self.language_weights = {name: Decimal(str(w)) for name, w in table.items()}
        self.default_language_weight = Decimal(str(
            default_language_weight
            if default_language_weight is not None
            else settings.DEFAULT_LANGUAGE_WEIGHT
        ))

    # ------------------------------------------------------------------
    # Category scores
    # ------------------------------------------------------------------

    def score_experience(self, hire_date: Optional[date], as_of: Optional[date] = None) -> Decimal:
        """
        Score tenure since hire date.

        Linear 0→80 over the first 10 years, then a logarithmic taper
        80 + ln(years − 9)/ln(6) × 20 which reaches 100 at 15 years.

        Examples:
            >>> calc = SkillCalculator()
            >>> calc.score_experience(date(2014, 1, 3), as_of=date(2024, 1, 1))
            Decimal('80.00')
        """
        if hire_date is None:
            return ZERO
        as_of = as_of or date.today()
        years = years_since(hire_date, as_of)

        if years <= 0:
            return ZERO
        if years >= self.EXPERIENCE_CAP_YEARS:
            return round_to(HUNDRED, 2)
        if years <= self.EXPERIENCE_LINEAR_YEARS:
            score = years / self.EXPERIENCE_LINEAR_YEARS * self.EXPERIENCE_LINEAR_POINTS
        else:
            taper = (years - Decimal("9")).ln() / Decimal("6").ln()
            score = self.EXPERIENCE_LINEAR_POINTS + taper * Decimal("20")
        return round_to(clamp(score), 2)

    def certification_value(self, cert: Certification, as_of: date) -> Decimal:
        """Points for a single certification: 10 × level × recency × expiry."""
        points = self.CERT_BASE_POINTS
        points *= self.CERT_LEVEL_MULTIPLIER.get(cert.level, Decimal("1.0"))

        if cert.issue_date is not None:
            years_old = years_since(cert.issue_date, as_of)
            if years_old > 5:
                points *= Decimal("0.7")
            elif years_old > 3:
                points *= Decimal("0.85")

        if cert.expiry_date is not None and cert.expiry_date < as_of:
            points *= self.EXPIRED_MULTIPLIER
        return points

    def score_certifications(
        self,
        certifications: Iterable[Certification],
        as_of: Optional[date] = None,
    ) -> Decimal:
        """Sum of the 10 highest-valued active certifications, capped at 100."""
        as_of = as_of or date.today()
        values = sorted(
            (self.certification_value(c, as_of) for c in certifications if c.is_active),
            reverse=True,
        )
        if not values:
            return ZERO
        total = sum(values[: self.MAX_SCORED_CERTIFICATIONS], ZERO)
        return round_to(clamp(total), 2)

    def language_weight(self, language: str) -> Decimal:
        return self.language_weights.get(language, self.default_language_weight)

    def score_languages(self, languages: Iterable[LanguageRecord]) -> Decimal:
        """
        Weighted language score normalized by at most three languages.

        Each active language scores its proficiency tier, raised to its
        test-score ratio when that is higher, times the language weight.
        """
        active = [lang for lang in languages if lang.is_active]
        if not active:
            return ZERO

        total = ZERO
        for lang in active:
            lang_score = self.LANGUAGE_BASE_SCORES.get(lang.proficiency_level, self.LANGUAGE_DEFAULT_BASE)
            if lang.score and lang.max_score:
                ratio_score = Decimal(str(lang.score)) / Decimal(str(lang.max_score)) * HUNDRED
                lang_score = max(lang_score, ratio_score)
            total += lang_score * self.language_weight(lang.language)

        normalized = total / min(len(active), self.MAX_NORMALIZED_LANGUAGES)
        return round_to(clamp(normalized), 2)

    def score_training(
        self,
        trainings: Iterable[TrainingRecord],
        as_of: Optional[date] = None,
    ) -> Decimal:
        """
        Score completed training.

        Formula:
            min(total/200 × 80, 80) + min(recent/40 × 20, 20) + min(2 × required, 10)
        """
        as_of = as_of or date.today()
        completed = [t for t in trainings if t.status == TrainingStatus.COMPLETED]
        if not completed:
            return ZERO

        cutoff = _two_years_before(as_of)
        total_hours = ZERO
        recent_hours = ZERO
        for training in completed:
            hours = Decimal(str(training.duration or 0))
            total_hours += hours
            if training.completion_date is not None and training.completion_date > cutoff:
                recent_hours += hours

        base = min(total_hours / self.TRAINING_FULL_HOURS * self.TRAINING_BASE_MAX, self.TRAINING_BASE_MAX)
        recent_bonus = min(
            recent_hours / self.TRAINING_RECENT_FULL_HOURS * self.TRAINING_RECENT_MAX,
            self.TRAINING_RECENT_MAX,
        )
        required_count = sum(1 for t in completed if t.type == TrainingType.REQUIRED)
        required_bonus = min(required_count * self.REQUIRED_COURSE_POINTS, self.REQUIRED_BONUS_MAX)

        return round_to(clamp(base + recent_bonus + required_bonus), 2)

    def _stale(self, skill: SkillRecord, as_of: date) -> bool:
        return (
            skill.last_assessed_date is not None
            and months_since(skill.last_assessed_date, as_of) > self.STALE_ASSESSMENT_MONTHS
        )

    def score_technical(
        self,
        skills: Iterable[SkillRecord],
        as_of: Optional[date] = None,
    ) -> Decimal:
        """Weighted mean proficiency of active technical and domain skills."""
        as_of = as_of or date.today()
        technical = [
            s for s in skills
            if s.is_active and s.skill_type in (SkillType.TECHNICAL, SkillType.DOMAIN)
        ]
        if not technical:
            return ZERO

        values, weights = [], []
        for skill in technical:
            weight = Decimal("1")
            if skill.years_of_experience:
                weight = min(Decimal(str(skill.years_of_experience)) / Decimal("5"), Decimal("2"))
            if self._stale(skill, as_of):
                weight *= self.STALE_MULTIPLIER
            values.append(Decimal(skill.proficiency_level))
            weights.append(weight)

        return round_to(clamp(weighted_mean(values, weights)), 2)

    def score_soft_skills(
        self,
        skills: Iterable[SkillRecord],
        as_of: Optional[date] = None,
    ) -> Decimal:
        """
        Weighted mean proficiency of active soft and leadership skills.

        Leadership skills weigh 1.5× and add proficiency × 0.1 on top.
        """
        as_of = as_of or date.today()
        soft = [
            s for s in skills
            if s.is_active and s.skill_type in (SkillType.SOFT, SkillType.LEADERSHIP)
        ]
        if not soft:
            return ZERO

        values, weights = [], []
        leadership_bonus = ZERO
        for skill in soft:
            weight = Decimal("1")
            if skill.skill_type == SkillType.LEADERSHIP:
                weight = self.LEADERSHIP_WEIGHT
                leadership_bonus += Decimal(skill.proficiency_level) * self.LEADERSHIP_BONUS_RATE
            if self._stale(skill, as_of):
                weight *= self.STALE_MULTIPLIER
            values.append(Decimal(skill.proficiency_level))
            weights.append(weight)

        return round_to(clamp(weighted_mean(values, weights) + leadership_bonus), 2)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def aggregate_overall(self, scores: Mapping[str, Number]) -> Decimal:
        """
        Combine category scores with the fixed weight vector.

        Missing categories count as 0; inputs are clamped to [0, 100].
        Result rounded to one decimal place.

        Examples:
            >>> SkillCalculator().aggregate_overall({c: 100 for c in SkillCalculator.CATEGORIES})
            Decimal('100.0')
        """
        total = ZERO
        for category, weight in self.weights.items():
            value = Decimal(str(scores.get(category, 0) or 0))
            total += clamp(value) * weight
        return round_to(clamp(total), 1)

    def calculate_all(
        self,
        employee: EmployeeResponse,
        records: EmployeeRecords,
        as_of: Optional[date] = None,
    ) -> SkillScores:
        """Score every category for one employee and aggregate."""
        as_of = as_of or date.today()
        raw = {
            "experience": self.score_experience(employee.hire_date, as_of),
            "certification": self.score_certifications(records.certifications, as_of),
            "language": self.score_languages(records.languages),
            "training": self.score_training(records.trainings, as_of),
            "technical": self.score_technical(records.skills, as_of),
            "soft_skill": self.score_soft_skills(records.skills, as_of),
        }
        overall = self.aggregate_overall(raw)

        logger.info(
            "skill_scores_calculated",
            employee_id=str(employee.id),
            as_of=as_of.isoformat(),
            **{f"{k}_score": float(v) for k, v in raw.items()},
            overall_score=float(overall),
        )

        return SkillScores(
            experience_score=round_to(raw["experience"], 1),
            certification_score=round_to(raw["certification"], 1),
            language_score=round_to(raw["language"], 1),
            training_score=round_to(raw["training"], 1),
            technical_score=round_to(raw["technical"], 1),
            soft_skill_score=round_to(raw["soft_skill"], 1),
            overall_score=overall,
        )


def skill_level_label(score: float) -> str:
    """Korean description band used on dashboard cards."""
    if score >= 90:
        return "최우수"
    elif score >= 80:
        return "우수"
    elif score >= 70:
        return "양호"
    elif score >= 60:
        return "보통"
    elif score >= 50:
        return "개선필요"
    else:
        return "미달"


def skill_level(score: float) -> str:
    """Indicator level: high / medium / low / none."""
    if score >= 80:
        return "high"
    elif score >= 60:
        return "medium"
    elif score >= 40:
        return "low"
    return "none"
