# tests/test_training_analysis.py

"""
Training Hours Analyzer Tests - per-head hours, breakdowns and R&D headcount rule
"""

import pytest
from datetime import date

from competency.models.employee import EmployeeResponse
from competency.models.training import TeamHeadcountLog, TrainingHoursLog
from competency.scoring.training_analysis import RdMembershipRule, TrainingHoursAnalyzer


@pytest.fixture
def analyzer():
    return TrainingHoursAnalyzer()


@pytest.fixture
def hour_logs():
    return [
        TrainingHoursLog(year=2022, training_type="사내교육", hours=120),
        TrainingHoursLog(year=2022, training_type="외부교육", hours=40.5),
        TrainingHoursLog(year=2023, training_type="사내교육", hours=200),
        TrainingHoursLog(year=2024, training_type="온라인", hours=33.3),
        TrainingHoursLog(year=2020, training_type="사내교육", hours=999),
    ]


@pytest.fixture
def headcount_logs():
    return [
        TeamHeadcountLog(year=2022, team="연구1팀", employee_count=5),
        TeamHeadcountLog(year=2022, team="연구2팀", employee_count=3),
        TeamHeadcountLog(year=2023, team="연구1팀", employee_count=6),
        TeamHeadcountLog(year=2020, team="연구1팀", employee_count=4),
    ]


class TestAnalyze:

    def test_totals_and_average(self, analyzer, hour_logs, headcount_logs):
        result = analyzer.analyze(hour_logs, headcount_logs, 2022, 2023)
        assert result.total_hours == 360.5
        assert result.cumulative_employees == 14
        assert result.average_hours_per_person == 25.75
        assert result.period.start_year == 2022
        assert result.period.end_year == 2023
        assert result.training_type_breakdown is None
        assert result.yearly_breakdown is None

    def test_zero_headcount_average_is_zero(self, analyzer, hour_logs):
        result = analyzer.analyze(hour_logs, [], 2022, 2024)
        assert result.cumulative_employees == 0
        assert result.average_hours_per_person == 0
        assert result.total_hours == 393.8

    def test_no_logs_at_all(self, analyzer):
        result = analyzer.analyze([], [], 2024, 2024)
        assert result.total_hours == 0
        assert result.average_hours_per_person == 0

    def test_average_uses_unrounded_total(self, analyzer):
        hours = [TrainingHoursLog(year=2024, training_type="a", hours=10.04),
                 TrainingHoursLog(year=2024, training_type="a", hours=10.04)]
        heads = [TeamHeadcountLog(year=2024, team="연구팀", employee_count=1)]
        result = analyzer.analyze(hours, heads, 2024, 2024)
        assert result.total_hours == 20.1
        assert result.average_hours_per_person == 20.08

    def test_type_breakdown(self, analyzer, hour_logs, headcount_logs):
        result = analyzer.analyze(hour_logs, headcount_logs, 2022, 2023, include_type_breakdown=True)
        assert result.training_type_breakdown == {"사내교육": 320.0, "외부교육": 40.5}

    def test_yearly_breakdown_zero_filled(self, analyzer, hour_logs, headcount_logs):
        result = analyzer.analyze(hour_logs, headcount_logs, 2021, 2024, include_yearly_breakdown=True)
        assert list(result.yearly_breakdown) == ["2021", "2022", "2023", "2024"]

        empty = result.yearly_breakdown["2021"]
        assert empty.total_hours == 0
        assert empty.total_employees == 0
        assert empty.average_hours_per_person == 0

        year_2022 = result.yearly_breakdown["2022"]
        assert year_2022.total_hours == 160.5
        assert year_2022.total_employees == 8
        assert year_2022.average_hours_per_person == 20.06

        no_heads = result.yearly_breakdown["2024"]
        assert no_heads.total_hours == 33.3
        assert no_heads.average_hours_per_person == 0

    def test_inverted_range_yields_zeros(self, analyzer, hour_logs, headcount_logs):
        result = analyzer.analyze(hour_logs, headcount_logs, 2024, 2022, include_yearly_breakdown=True)
        assert result.total_hours == 0
        assert result.cumulative_employees == 0
        assert result.yearly_breakdown == {}

    def test_auto_headcount(self, analyzer, hour_logs, headcount_logs):
        employees = [
            EmployeeResponse(name="a", department="기술연구소"),
            EmployeeResponse(name="b", department="경영지원", team="개발팀"),
            EmployeeResponse(name="c", department="영업본부"),
        ]
        result = analyzer.analyze(
            hour_logs, headcount_logs, 2022, 2023,
            use_auto_headcount=True, all_employees=employees,
        )
        assert result.cumulative_employees == 2
        assert result.average_hours_per_person == 180.25

    def test_auto_headcount_without_employees_falls_back(self, analyzer, hour_logs, headcount_logs):
        result = analyzer.analyze(hour_logs, headcount_logs, 2022, 2023, use_auto_headcount=True)
        assert result.cumulative_employees == 14

    def test_log_order_irrelevant(self, analyzer, hour_logs, headcount_logs):
        forward = analyzer.analyze(hour_logs, headcount_logs, 2020, 2024)
        backward = analyzer.analyze(list(reversed(hour_logs)), list(reversed(headcount_logs)), 2020, 2024)
        assert forward == backward


class TestHelpers:

    def test_hours_by_type(self, hour_logs):
        assert TrainingHoursAnalyzer.hours_by_type(hour_logs, "사내교육", 2020, 2023) == 1319.0
        assert TrainingHoursAnalyzer.hours_by_type(hour_logs, "없는유형", 2020, 2024) == 0.0

    def test_headcount_for_year(self, headcount_logs):
        assert TrainingHoursAnalyzer.headcount_for_year(headcount_logs, 2022) == 8
        assert TrainingHoursAnalyzer.headcount_for_year(headcount_logs, 2019) == 0

    def test_auto_headcount_for_year(self, analyzer):
        employees = [
            EmployeeResponse(name="a", department="연구개발본부", hire_date=date(2020, 3, 1)),
            EmployeeResponse(name="b", department="연구개발본부", hire_date=date(2023, 1, 2)),
            EmployeeResponse(name="c", team="R&D 1팀"),
            EmployeeResponse(name="d", department="재무팀", hire_date=date(2010, 1, 1)),
        ]
        assert analyzer.auto_headcount_for_year(employees, 2022) == 1
        assert analyzer.auto_headcount_for_year(employees, 2023) == 2

    def test_auto_headcount_for_year_skips_missing_hire_date(self, analyzer):
        employees = [EmployeeResponse(name="c", team="R&D 1팀")]
        assert analyzer.auto_headcount_for_year(employees, 2022) == 0


class TestRdMembershipRule:

    @pytest.mark.parametrize("department,code,team,expected", [
        ("기술연구소", None, None, True),
        ("R&D센터", None, None, True),
        ("경영지원", "RD", None, True),
        ("경영지원", "rd", None, False),
        (None, "RD", None, False),
        ("영업본부", None, "연구지원팀", True),
        ("영업본부", None, "앱개발팀", True),
        ("영업본부", "SA", "영업1팀", False),
        ("r&d center", None, None, False),
        (None, None, None, False),
    ])
    def test_default_rule(self, department, code, team, expected):
        employee = EmployeeResponse(name="x", department=department, department_code=code, team=team)
        assert RdMembershipRule().is_member(employee) is expected

    def test_injected_rule(self):
        rule = RdMembershipRule(department_terms=["Lab"], department_codes=[], team_terms=[])
        analyzer = TrainingHoursAnalyzer(membership_rule=rule)
        employees = [
            EmployeeResponse(name="a", department="AI Lab"),
            EmployeeResponse(name="b", department="기술연구소"),
        ]
        assert analyzer.auto_headcount(employees) == 1
