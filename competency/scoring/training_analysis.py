"""
scoring/training_analysis.py

Training hours per R&D head over a closed year range.

Formula:
    total_hours          = Σ hours           for start_year ≤ year ≤ end_year
    cumulative_employees = Σ employee_count  for start_year ≤ year ≤ end_year
                           (or the auto R&D headcount from the employee list)
    average              = total_hours / cumulative_employees   (0 when headcount is 0)

Rounding: total hours to 0.1, averages to 0.01. The average is computed
from the unrounded total.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

import structlog

from competency.config import settings
from competency.models.employee import EmployeeResponse
from competency.models.training import (
    TeamHeadcountLog,
    TrainingAnalysisResult,
    TrainingHoursLog,
    TrainingPeriod,
    YearlyTrainingSummary,
)
from competency.scoring.utils import round_to

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


@dataclass
class RdMembershipRule:
    """
    Decides whether an employee belongs to R&D.

    Member when the department name contains any department term, or the
    department code equals one of the codes (only checked when a department
    name is present), or the team name contains any team term. Matching is
    case-sensitive substring containment.
    """
    department_terms: List[str] = field(default_factory=lambda: list(settings.RD_DEPARTMENT_TERMS))
    department_codes: List[str] = field(default_factory=lambda: list(settings.RD_DEPARTMENT_CODES))
    team_terms: List[str] = field(default_factory=lambda: list(settings.RD_TEAM_TERMS))

    def is_member(self, employee: EmployeeResponse) -> bool:
        in_department = bool(employee.department) and (
            any(term in employee.department for term in self.department_terms)
            or employee.department_code in self.department_codes
        )
        in_team = bool(employee.team) and any(term in employee.team for term in self.team_terms)
        return in_department or in_team


def _hours(value: float) -> Decimal:
    return Decimal(str(value))


def _average(total: Decimal, headcount: int) -> Decimal:
    if headcount <= 0:
        return ZERO
    return total / Decimal(headcount)


class TrainingHoursAnalyzer:
    """Compute per-head training hours from aggregate logs."""

    def __init__(self, membership_rule: Optional[RdMembershipRule] = None):
        self.membership_rule = membership_rule or RdMembershipRule()

    def analyze(
        self,
        hour_logs: Sequence[TrainingHoursLog],
        headcount_logs: Sequence[TeamHeadcountLog],
        start_year: int,
        end_year: int,
        include_type_breakdown: bool = False,
        include_yearly_breakdown: bool = False,
        use_auto_headcount: bool = False,
        all_employees: Optional[Sequence[EmployeeResponse]] = None,
    ) -> TrainingAnalysisResult:
        """
        Args:
            hour_logs: (year, training_type, hours) entries.
            headcount_logs: (year, team, employee_count) entries.
            start_year, end_year: Inclusive range. An inverted range
                                  matches nothing and yields zeros.
            use_auto_headcount: Count R&D members from all_employees
                                instead of summing headcount logs. Ignored
                                when all_employees is None.

        Returns:
            TrainingAnalysisResult; the yearly breakdown always uses the
            headcount logs.
        """
        total = self.total_hours(hour_logs, start_year, end_year)

        if use_auto_headcount and all_employees is not None:
            headcount = self.auto_headcount(all_employees)
        else:
            headcount = self.cumulative_headcount(headcount_logs, start_year, end_year)

        average = _average(total, headcount)

        result = TrainingAnalysisResult(
            average_hours_per_person=float(round_to(average, 2)),
            total_hours=float(round_to(total, 1)),
            cumulative_employees=headcount,
            period=TrainingPeriod(start_year=start_year, end_year=end_year),
        )

        if include_type_breakdown:
            result.training_type_breakdown = self.type_breakdown(hour_logs, start_year, end_year)
        if include_yearly_breakdown:
            result.yearly_breakdown = self.yearly_breakdown(hour_logs, headcount_logs, start_year, end_year)

        logger.info(
            "training_hours_analyzed",
            start_year=start_year,
            end_year=end_year,
            hour_log_count=len(hour_logs),
            headcount_log_count=len(headcount_logs),
            auto_headcount=use_auto_headcount and all_employees is not None,
            total_hours=result.total_hours,
            cumulative_employees=headcount,
            average_hours_per_person=result.average_hours_per_person,
        )
        return result

    # ------------------------------------------------------------------
    # Sums
    # ------------------------------------------------------------------

    @staticmethod
    def total_hours(hour_logs: Iterable[TrainingHoursLog], start_year: int, end_year: int) -> Decimal:
        return sum(
            (_hours(log.hours) for log in hour_logs if start_year <= log.year <= end_year),
            ZERO,
        )

    @staticmethod
    def cumulative_headcount(
        headcount_logs: Iterable[TeamHeadcountLog], start_year: int, end_year: int
    ) -> int:
        return sum(
            log.employee_count for log in headcount_logs if start_year <= log.year <= end_year
        )

    @staticmethod
    def hours_by_type(
        hour_logs: Iterable[TrainingHoursLog],
        training_type: str,
        start_year: int,
        end_year: int,
    ) -> float:
        """Total hours of one training type within the range."""
        total = sum(
            (
                _hours(log.hours)
                for log in hour_logs
                if start_year <= log.year <= end_year and log.training_type == training_type
            ),
            ZERO,
        )
        return float(total)

    @staticmethod
    def headcount_for_year(headcount_logs: Iterable[TeamHeadcountLog], year: int) -> int:
        return sum(log.employee_count for log in headcount_logs if log.year == year)

    def auto_headcount(self, employees: Iterable[EmployeeResponse]) -> int:
        """Number of employees the membership rule classifies as R&D."""
        return sum(1 for employee in employees if self.membership_rule.is_member(employee))

    def auto_headcount_for_year(self, employees: Iterable[EmployeeResponse], year: int) -> int:
        """R&D members with a hire date in or before the given year."""
        year_end = date(year, 12, 31)
        return sum(
            1
            for employee in employees
            if self.membership_rule.is_member(employee)
            and employee.hire_date is not None
            and employee.hire_date <= year_end
        )

    # ------------------------------------------------------------------
    # Breakdowns
    # ------------------------------------------------------------------

    @staticmethod
    def type_breakdown(
        hour_logs: Iterable[TrainingHoursLog], start_year: int, end_year: int
    ) -> Dict[str, float]:
        totals: Dict[str, Decimal] = {}
        for log in hour_logs:
            if start_year <= log.year <= end_year:
                totals[log.training_type] = totals.get(log.training_type, ZERO) + _hours(log.hours)
        return {training_type: float(hours) for training_type, hours in totals.items()}

    def yearly_breakdown(
        self,
        hour_logs: Sequence[TrainingHoursLog],
        headcount_logs: Sequence[TeamHeadcountLog],
        start_year: int,
        end_year: int,
    ) -> Dict[str, YearlyTrainingSummary]:
        """One entry per year in the range, zero-filled."""
        breakdown: Dict[str, YearlyTrainingSummary] = {}
        for year in range(start_year, end_year + 1):
            year_hours = self.total_hours(hour_logs, year, year)
            year_headcount = self.headcount_for_year(headcount_logs, year)
            breakdown[str(year)] = YearlyTrainingSummary(
                total_hours=float(round_to(year_hours, 1)),
                total_employees=year_headcount,
                average_hours_per_person=float(round_to(_average(year_hours, year_headcount), 2)),
            )
        return breakdown
