"""
scoring/rd_auto_evaluator.py

Derives raw R&D category scores from an employee's records.

Pipeline:
    records ─► period filter ─► raw points per category
            ─► cap at max raw score ─► band conversion (ScoreConversionRubric)
            ─► RdEvaluator (weights, total, grade)

Raw point rules:
    technical_competency  education (bachelor 10 / master 20 / doctor 30)
                          + total experience (≥15y 50, ≥10y 40, ≥5y 30, else 20)
                          + per certification (expert/기술사 20, advanced/기사 10,
                            intermediate/산업기사 5, other 3)
    project_experience    per project role (leader 15, core member 10, member 5)
                          + count bonus (≥3 → 30, 2 → 20, 1 → 10)
    rd_achievement        patent 10, publication 15, award 20
    global_competency     TOEIC band, JLPT level, HSK level
    knowledge_sharing     attended hours, new certifications, mentoring, lectures
    innovation_proposal   10 per proposal
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, TypeVar

import structlog

from competency.models.employee import (
    Certification,
    EmployeeRecords,
    EmployeeResponse,
    LanguageRecord,
    Project,
    TrainingRecord,
)
from competency.models.enumerations import (
    CertificationLevel,
    Education,
    Grade,
    InstructorRole,
    LanguageProficiency,
    ProjectRole,
    RdCategory,
    TrainingStatus,
)
from competency.scoring.rd_evaluator import RdEvaluator
from competency.scoring.rubric_scorer import ScoreConversionRubric
from competency.scoring.utils import round_to, years_since

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class AutoEvaluationResult:
    """Output of RdAutoEvaluator.calculate()."""
    employee_id: str
    evaluation_year: int
    raw_scores: Dict[str, Decimal]
    capped_scores: Dict[str, Decimal]
    converted_scores: Dict[str, Decimal]
    details: Dict[str, str]
    total_score: Decimal
    grade: Grade
    calculated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class PeriodRecords:
    """Records that fall inside the evaluation period."""
    certifications: List[Certification]
    languages: List[LanguageRecord]
    trainings: List[TrainingRecord]
    projects: List[Project]
    patents: list
    publications: list
    awards: list
    proposals: list


def filter_by_period(
    items: Sequence[T],
    date_field: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[T]:
    """
    Keep items whose date_field lies within [start_date, end_date].

    With no bounds every item is kept; with any bound, undated items are
    dropped.
    """
    if start_date is None and end_date is None:
        return list(items)

    kept = []
    for item in items:
        value = getattr(item, date_field, None)
        if value is None:
            continue
        if start_date is not None and value < start_date:
            continue
        if end_date is not None and value > end_date:
            continue
        kept.append(item)
    return kept


class RdAutoEvaluator:
    """Compute an R&D evaluation from stored activity records."""

    EDUCATION_POINTS: Dict[Education, int] = {
        Education.BACHELOR: 10,
        Education.MASTER: 20,
        Education.DOCTOR: 30,
    }

    ROLE_POINTS: Dict[ProjectRole, int] = {
        ProjectRole.PROJECT_LEADER: 15,
        ProjectRole.CORE_MEMBER: 10,
        ProjectRole.MEMBER: 5,
    }

    PATENT_POINTS = 10
    PUBLICATION_POINTS = 15
    AWARD_POINTS = 20
    PROPOSAL_POINTS = 10

    # (min TOEIC score, points), evaluated top-down
    TOEIC_BANDS = ((950, 10), (900, 8), (800, 6), (700, 4))
    TOEIC_FLOOR_POINTS = 2
    JLPT_POINTS = {"N1": 10, "N2": 7, "N3": 4}
    JLPT_PROFICIENCY_FALLBACK = {
        LanguageProficiency.ADVANCED: "N1",
        LanguageProficiency.INTERMEDIATE: "N2",
        LanguageProficiency.BEGINNER: "N3",
    }
    HSK_POINTS = {"HSK6": 8, "HSK5": 5}

    NEW_CERT_POINTS = 5
    NEW_CERT_MAX = 25
    MENTORING_POINTS = 3
    MENTORING_MAX = 15

    def __init__(
        self,
        rubric: Optional[ScoreConversionRubric] = None,
        evaluator: Optional[RdEvaluator] = None,
    ):
        self.rubric = rubric or ScoreConversionRubric()
        self.evaluator = evaluator or RdEvaluator()

    def calculate(
        self,
        employee: EmployeeResponse,
        records: EmployeeRecords,
        evaluation_year: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        as_of: Optional[date] = None,
    ) -> AutoEvaluationResult:
        """
        Args:
            employee: Evaluated employee (education, hire date, prior experience).
            records: Every record list of the employee.
            evaluation_year: Defaults to the year of as_of.
            start_date, end_date: Optional period filter; languages are
                                  never filtered.
            as_of: Reference date for tenure; defaults to today.
        """
        as_of = as_of or date.today()
        evaluation_year = evaluation_year or as_of.year
        period = self.collect_period_records(records, start_date, end_date)

        # New certifications default to the calendar evaluation year
        new_cert_start = start_date or date(evaluation_year, 1, 1)
        new_cert_end = end_date or date(evaluation_year, 12, 31)

        raw: Dict[str, Decimal] = {}
        details: Dict[str, str] = {}

        raw[RdCategory.TECHNICAL_COMPETENCY.value], details[RdCategory.TECHNICAL_COMPETENCY.value] = \
            self.technical_competency(employee, period.certifications, as_of)
        raw[RdCategory.PROJECT_EXPERIENCE.value], details[RdCategory.PROJECT_EXPERIENCE.value] = \
            self.project_experience(period.projects)
        raw[RdCategory.RD_ACHIEVEMENT.value], details[RdCategory.RD_ACHIEVEMENT.value] = \
            self.rd_achievement(period.patents, period.publications, period.awards)
        raw[RdCategory.GLOBAL_COMPETENCY.value], details[RdCategory.GLOBAL_COMPETENCY.value] = \
            self.global_competency(period.languages)
        raw[RdCategory.KNOWLEDGE_SHARING.value], details[RdCategory.KNOWLEDGE_SHARING.value] = \
            self.knowledge_sharing(period.trainings, period.certifications, new_cert_start, new_cert_end)
        raw[RdCategory.INNOVATION_PROPOSAL.value], details[RdCategory.INNOVATION_PROPOSAL.value] = \
            self.innovation_proposal(period.proposals)

        conversions = self.rubric.convert_all(raw)
        capped = {k: c.capped_score for k, c in conversions.items()}
        converted = {k: c.converted_score for k, c in conversions.items()}

        evaluation = self.evaluator.evaluate(converted, employee_id=str(employee.id))

        logger.info(
            "rd_auto_evaluation_calculated",
            employee_id=str(employee.id),
            evaluation_year=evaluation_year,
            start_date=start_date.isoformat() if start_date else None,
            end_date=end_date.isoformat() if end_date else None,
            raw_scores={k: float(v) for k, v in raw.items()},
            converted_scores={k: float(v) for k, v in converted.items()},
            total_score=float(evaluation.total_score),
            grade=evaluation.grade.value,
        )

        return AutoEvaluationResult(
            employee_id=str(employee.id),
            evaluation_year=evaluation_year,
            raw_scores=raw,
            capped_scores=capped,
            converted_scores=converted,
            details=details,
            total_score=evaluation.total_score,
            grade=evaluation.grade,
        )

    @staticmethod
    def collect_period_records(
        records: EmployeeRecords,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> PeriodRecords:
        active_certs = [c for c in records.certifications if c.is_active]
        completed = [t for t in records.trainings if t.status == TrainingStatus.COMPLETED]
        return PeriodRecords(
            certifications=filter_by_period(active_certs, "issue_date", start_date, end_date),
            languages=[lang for lang in records.languages if lang.is_active],
            trainings=filter_by_period(completed, "completion_date", start_date, end_date),
            projects=filter_by_period(records.projects, "start_date", start_date, end_date),
            patents=filter_by_period(records.patents, "application_date", start_date, end_date),
            publications=filter_by_period(records.publications, "publication_date", start_date, end_date),
            awards=filter_by_period(records.awards, "award_date", start_date, end_date),
            proposals=filter_by_period(records.proposals, "submission_date", start_date, end_date),
        )

    # ------------------------------------------------------------------
    # Category rules
    # ------------------------------------------------------------------

    @staticmethod
    def certification_points(cert: Certification) -> int:
        name = cert.name or ""
        level = cert.level
        if "기술사" in name or level == CertificationLevel.EXPERT:
            return 20
        if ("기사" in name and "산업기사" not in name) or level == CertificationLevel.ADVANCED:
            return 10
        if "산업기사" in name or level == CertificationLevel.INTERMEDIATE:
            return 5
        return 3

    @staticmethod
    def experience_points(total_years: Decimal) -> int:
        if total_years >= 15:
            return 50
        elif total_years >= 10:
            return 40
        elif total_years >= 5:
            return 30
        return 20

    def technical_competency(self, employee: EmployeeResponse, certifications, as_of: date):
        points = self.EDUCATION_POINTS.get(employee.education, 0)

        in_company = max(years_since(employee.hire_date, as_of), Decimal("0"))
        total_years = (
            in_company
            + Decimal(employee.previous_experience_years)
            + Decimal(employee.previous_experience_months) / Decimal("12")
        )
        points += self.experience_points(total_years)
        points += sum(self.certification_points(c) for c in certifications)

        education = employee.education.value if employee.education else "미입력"
        detail = (
            f"학력: {education}, 경력: {round_to(total_years, 1)}년"
            f"(사내 {round_to(in_company, 1)}년 + 이전 {employee.previous_experience_years}년 "
            f"{employee.previous_experience_months}개월), 자격증: {len(certifications)}개"
        )
        return Decimal(points), detail

    def project_experience(self, projects: Sequence[Project]):
        points = sum(self.ROLE_POINTS.get(p.role, 0) for p in projects)
        count = len(projects)
        if count >= 3:
            points += 30
        elif count == 2:
            points += 20
        elif count == 1:
            points += 10

        leaders = sum(1 for p in projects if p.role == ProjectRole.PROJECT_LEADER)
        return Decimal(points), f"프로젝트: {count}개 (PL: {leaders}개)"

    def rd_achievement(self, patents, publications, awards):
        points = (
            len(patents) * self.PATENT_POINTS
            + len(publications) * self.PUBLICATION_POINTS
            + len(awards) * self.AWARD_POINTS
        )
        detail = f"특허: {len(patents)}건, 논문: {len(publications)}편, 수상: {len(awards)}건"
        return Decimal(points), detail

    def toeic_points(self, score: Optional[float]) -> int:
        value = score or 0
        for threshold, points in self.TOEIC_BANDS:
            if value >= threshold:
                return points
        return self.TOEIC_FLOOR_POINTS

    def language_points(self, lang: LanguageRecord) -> int:
        test_type = (lang.test_type or "").upper()
        if lang.language == "English" and test_type == "TOEIC":
            return self.toeic_points(lang.score)
        if lang.language == "Japanese" and test_type == "JLPT":
            level = lang.test_level or self.JLPT_PROFICIENCY_FALLBACK.get(lang.proficiency_level)
            return self.JLPT_POINTS.get((level or "").upper(), 0)
        if lang.language == "Chinese" and test_type == "HSK" and lang.test_level:
            return self.HSK_POINTS.get(lang.test_level.upper().replace(" ", ""), 0)
        return 0

    def global_competency(self, languages: Sequence[LanguageRecord]):
        points = sum(self.language_points(lang) for lang in languages)
        return Decimal(points), f"어학능력: {len(languages)}개 언어"

    def knowledge_sharing(
        self,
        trainings: Sequence[TrainingRecord],
        certifications: Sequence[Certification],
        new_cert_start: date,
        new_cert_end: date,
    ):
        points = 0

        attended = [t for t in trainings if t.instructor_role is None]
        attended_hours = sum(Decimal(str(t.duration or 0)) for t in attended)
        if attended_hours >= 40:
            points += 5
        elif attended_hours >= 20:
            points += 3
        elif attended_hours >= 10:
            points += 2

        new_certs = [
            c for c in certifications
            if c.issue_date is not None and new_cert_start <= c.issue_date <= new_cert_end
        ]
        points += min(len(new_certs) * self.NEW_CERT_POINTS, self.NEW_CERT_MAX)

        mentoring = sum(1 for t in trainings if t.instructor_role == InstructorRole.MENTOR)
        points += min(mentoring * self.MENTORING_POINTS, self.MENTORING_MAX)

        lectures = sum(1 for t in trainings if t.instructor_role == InstructorRole.INSTRUCTOR)
        if lectures >= 3:
            points += 15
        elif lectures == 2:
            points += 10
        elif lectures == 1:
            points += 5

        detail = (
            f"교육이수: {attended_hours}시간, 신규자격증: {len(new_certs)}개, "
            f"멘토링: {mentoring}회, 강의: {lectures}회"
        )
        return Decimal(points), detail

    def innovation_proposal(self, proposals):
        return Decimal(len(proposals) * self.PROPOSAL_POINTS), f"제안제도: {len(proposals)}건"
