# tests/test_rd_auto_evaluator.py

"""
R&D Auto-Evaluator Tests - raw points, period filtering and conversion
"""

import pytest
from datetime import date
from decimal import Decimal

from competency.models.employee import (
    Award,
    Certification,
    EmployeeRecords,
    EmployeeResponse,
    LanguageRecord,
    Patent,
    Project,
    Proposal,
    Publication,
    TrainingRecord,
)
from competency.models.enumerations import (
    CertificationLevel,
    Education,
    Grade,
    InstructorRole,
    LanguageProficiency,
    ProjectRole,
    TrainingStatus,
)
from competency.scoring.rd_auto_evaluator import RdAutoEvaluator, filter_by_period
from competency.scoring.rubric_scorer import ScoreConversionRubric


AS_OF = date(2024, 6, 30)


@pytest.fixture
def auto():
    return RdAutoEvaluator()


def _lang(language, test_type=None, score=None, test_level=None, proficiency=LanguageProficiency.INTERMEDIATE):
    return LanguageRecord(
        language=language,
        proficiency_level=proficiency,
        test_type=test_type,
        score=score,
        test_level=test_level,
    )


class TestFilterByPeriod:

    def test_no_bounds_keeps_everything(self):
        patents = [Patent(title="a"), Patent(title="b", application_date=date(2020, 1, 1))]
        assert len(filter_by_period(patents, "application_date")) == 2

    def test_bounds_inclusive_and_undated_dropped(self):
        patents = [
            Patent(title="before", application_date=date(2023, 12, 31)),
            Patent(title="start", application_date=date(2024, 1, 1)),
            Patent(title="end", application_date=date(2024, 12, 31)),
            Patent(title="undated"),
        ]
        kept = filter_by_period(patents, "application_date", date(2024, 1, 1), date(2024, 12, 31))
        assert [p.title for p in kept] == ["start", "end"]

    def test_open_ended_start(self):
        patents = [Patent(title="old", application_date=date(2010, 1, 1))]
        assert filter_by_period(patents, "application_date", date(2020, 1, 1)) == []


class TestCategoryRules:

    @pytest.mark.parametrize("name,level,points", [
        ("정보관리기술사", None, 20),
        ("PMP", CertificationLevel.EXPERT, 20),
        ("정보처리기사", None, 10),
        ("정보처리산업기사", None, 5),
        ("CCNA", CertificationLevel.INTERMEDIATE, 5),
        ("워드프로세서", None, 3),
    ])
    def test_certification_points(self, name, level, points):
        assert RdAutoEvaluator.certification_points(Certification(name=name, level=level)) == points

    @pytest.mark.parametrize("years,points", [
        (Decimal("15"), 50), (Decimal("10"), 40), (Decimal("9.9"), 30), (Decimal("5"), 30), (Decimal("1"), 20),
    ])
    def test_experience_points(self, years, points):
        assert RdAutoEvaluator.experience_points(years) == points

    def test_technical_competency(self, auto):
        employee = EmployeeResponse(
            name="최박사",
            hire_date=date(2019, 7, 2),  # 5 years before AS_OF
            education=Education.DOCTOR,
            previous_experience_years=4,
            previous_experience_months=6,
        )
        certs = [Certification(name="정보처리기사"), Certification(name="기타")]
        points, detail = auto.technical_competency(employee, certs, AS_OF)
        # doctor 30 + 9.5y → 30 + 10 + 3
        assert points == Decimal("73")
        assert "자격증: 2개" in detail

    def test_project_experience(self, auto):
        projects = [
            Project(name="a", role=ProjectRole.PROJECT_LEADER),
            Project(name="b", role=ProjectRole.CORE_MEMBER),
            Project(name="c", role=ProjectRole.MEMBER),
        ]
        points, detail = auto.project_experience(projects)
        assert points == Decimal("60")
        assert detail == "프로젝트: 3개 (PL: 1개)"

    def test_project_count_bonus(self, auto):
        assert auto.project_experience([])[0] == Decimal("0")
        assert auto.project_experience([Project(name="a")])[0] == Decimal("15")
        assert auto.project_experience([Project(name="a"), Project(name="b")])[0] == Decimal("30")

    def test_rd_achievement(self, auto):
        points, _ = auto.rd_achievement(
            [Patent(title="p1"), Patent(title="p2")],
            [Publication(title="paper")],
            [Award(name="장관상")],
        )
        assert points == Decimal("55")

    @pytest.mark.parametrize("score,points", [
        (990, 10), (950, 10), (949, 8), (900, 8), (850, 6), (700, 4), (650, 2), (None, 2),
    ])
    def test_toeic_points(self, auto, score, points):
        assert auto.toeic_points(score) == points

    def test_language_points(self, auto):
        assert auto.language_points(_lang("English", "toeic", score=910)) == 8
        assert auto.language_points(_lang("Japanese", "JLPT", test_level="N2")) == 7
        assert auto.language_points(_lang("Japanese", "JLPT", proficiency=LanguageProficiency.ADVANCED)) == 10
        assert auto.language_points(_lang("Chinese", "HSK", test_level="HSK 6")) == 8
        assert auto.language_points(_lang("Chinese", "HSK", test_level="HSK4")) == 0
        assert auto.language_points(_lang("German", "Goethe", test_level="C1")) == 0

    def test_global_competency(self, auto):
        points, detail = auto.global_competency([
            _lang("English", "TOEIC", score=960),
            _lang("Japanese", "JLPT", test_level="N3"),
        ])
        assert points == Decimal("14")
        assert detail == "어학능력: 2개 언어"

    def test_knowledge_sharing(self, auto):
        trainings = [
            TrainingRecord(course_name="수강", status=TrainingStatus.COMPLETED, duration=25),
            TrainingRecord(course_name="멘토링", status=TrainingStatus.COMPLETED, duration=10,
                           instructor_role=InstructorRole.MENTOR),
            TrainingRecord(course_name="강의1", status=TrainingStatus.COMPLETED, duration=4,
                           instructor_role=InstructorRole.INSTRUCTOR),
            TrainingRecord(course_name="강의2", status=TrainingStatus.COMPLETED, duration=4,
                           instructor_role=InstructorRole.INSTRUCTOR),
        ]
        certs = [
            Certification(name="new", issue_date=date(2024, 4, 1)),
            Certification(name="old", issue_date=date(2022, 4, 1)),
        ]
        points, _ = auto.knowledge_sharing(trainings, certs, date(2024, 1, 1), date(2024, 12, 31))
        # hours 25 → 3; one new cert → 5; one mentoring → 3; two lectures → 10
        assert points == Decimal("21")

    def test_knowledge_sharing_caps(self, auto):
        mentoring = [
            TrainingRecord(course_name=f"m{i}", status=TrainingStatus.COMPLETED,
                           instructor_role=InstructorRole.MENTOR)
            for i in range(10)
        ]
        certs = [Certification(name=f"c{i}", issue_date=date(2024, 2, 1)) for i in range(8)]
        points, _ = auto.knowledge_sharing(mentoring, certs, date(2024, 1, 1), date(2024, 12, 31))
        assert points == Decimal("40")

    def test_innovation_proposal(self, auto):
        points, detail = auto.innovation_proposal([Proposal(title="a"), Proposal(title="b")])
        assert points == Decimal("20")
        assert detail == "제안제도: 2건"


class TestCalculate:

    def test_full_calculation(self, auto, rd_employee, sample_records):
        result = auto.calculate(rd_employee, sample_records, evaluation_year=2024, as_of=AS_OF)

        # master 20 + 12y → 40 + 기사 10 + expert 20
        assert result.raw_scores["technical_competency"] == Decimal("90")
        assert result.raw_scores["project_experience"] == Decimal("25")
        assert result.raw_scores["global_competency"] == Decimal("8")
        # 40 attended hours → 5, 정보처리기사 issued 2024 → 5
        assert result.raw_scores["knowledge_sharing"] == Decimal("10")
        assert result.raw_scores["rd_achievement"] == Decimal("0")

        assert result.converted_scores["technical_competency"] == Decimal("100")
        assert result.converted_scores["project_experience"] == Decimal("40")
        # 25 + 8 + 10 + 4 + 4 + 4
        assert result.total_score == Decimal("55.00")
        assert result.grade == Grade.D
        assert result.evaluation_year == 2024
        assert set(result.details) == set(result.raw_scores)

    def test_period_filter_excludes_old_records(self, auto, rd_employee, sample_records):
        result = auto.calculate(
            rd_employee,
            sample_records,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
            as_of=AS_OF,
        )
        # only the 2024 기사 certification remains
        assert result.raw_scores["technical_competency"] == Decimal("70")
        # languages are never date-filtered
        assert result.raw_scores["global_competency"] == Decimal("8")

    def test_empty_records(self, auto, sales_employee):
        result = auto.calculate(sales_employee, EmployeeRecords(), evaluation_year=2024, as_of=AS_OF)
        assert result.raw_scores["technical_competency"] == Decimal("20")
        assert all(v == Decimal("40") for v in result.converted_scores.values())
        assert result.total_score == Decimal("40.00")

    def test_evaluation_year_defaults_to_as_of(self, auto, sales_employee):
        result = auto.calculate(sales_employee, EmployeeRecords(), as_of=AS_OF)
        assert result.evaluation_year == 2024

    def test_custom_rubric(self, rd_employee, sample_records):
        rubric = ScoreConversionRubric(bands={c: [] for c in (
            "technical_competency", "project_experience", "rd_achievement",
            "global_competency", "knowledge_sharing", "innovation_proposal",
        )})
        result = RdAutoEvaluator(rubric=rubric).calculate(
            rd_employee, sample_records, evaluation_year=2024, as_of=AS_OF
        )
        assert result.converted_scores == result.capped_scores
