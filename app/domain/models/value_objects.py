"""
Value Objects for the domain layer.
Immutable objects that represent values and encapsulate business logic.

All week numbers in the system follow ISO 8601: weeks start on Monday and
week 1 is the week containing the year's first Thursday.
"""

import calendar
from typing import Optional, Dict, Tuple, Any
from decimal import Decimal
from datetime import date, timedelta
from dataclasses import dataclass, field
from enum import Enum

from app.domain.models.base import ValidationError


@dataclass(frozen=True)
class DateParts:
    """Year, month and week cached from a time entry's date."""

    year: int
    month: int
    week: int


def derive_date_parts(value: date) -> DateParts:
    """
    Derive year, month and ISO week from a date.

    The year and month are the calendar ones, so 2024-12-30 yields
    year 2024, month 12, week 1.
    """
    if not isinstance(value, date):
        raise ValidationError(f"Invalid date: {value!r}", "date")
    return DateParts(
        year=value.year,
        month=value.month,
        week=value.isocalendar()[1],
    )


def weeks_in_year(year: int) -> int:
    """Number of ISO weeks in a year (52 or 53)."""
    # 28 December always falls in the last ISO week of its year
    return date(year, 12, 28).isocalendar()[1]


class ReportPeriod(str, Enum):
    """Predefined reporting periods."""
    TODAY = "today"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    THIS_YEAR = "this_year"


def _month_range(value: date) -> Tuple[date, date]:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=1), value.replace(day=last_day)


def period_range(period: ReportPeriod, today: date) -> Tuple[date, date]:
    """
    Resolve a reporting period into an inclusive (start, end) date range.
    Weeks run Monday to Sunday.
    """
    period = ReportPeriod(period)

    if period == ReportPeriod.TODAY:
        return today, today

    if period in (ReportPeriod.THIS_WEEK, ReportPeriod.LAST_WEEK):
        monday = today - timedelta(days=today.weekday())
        if period == ReportPeriod.LAST_WEEK:
            monday -= timedelta(weeks=1)
        return monday, monday + timedelta(days=6)

    if period == ReportPeriod.THIS_MONTH:
        return _month_range(today)

    if period == ReportPeriod.LAST_MONTH:
        return _month_range(today.replace(day=1) - timedelta(days=1))

    return date(today.year, 1, 1), date(today.year, 12, 31)


@dataclass(frozen=True)
class TimeEntryFilter:
    """
    Conjunction of optional predicates used to select time entries.
    A predicate left as None imposes no constraint.
    """

    user_id: Optional[int] = None
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    year: Optional[int] = None
    month: Optional[int] = None
    week: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def __post_init__(self):
        """Validate the filter after creation."""
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValidationError("Month must be between 1 and 12", "month")
        if self.week is not None and not 1 <= self.week <= 53:
            raise ValidationError("Week must be between 1 and 53", "week")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("end_date must not be before start_date", "end_date")

    @property
    def is_empty(self) -> bool:
        """Check if no predicate is set."""
        return not self.predicates()

    def predicates(self) -> Dict[str, Any]:
        """Return only the predicates that are set."""
        return {
            name: value
            for name, value in self.__dict__.items()
            if value is not None
        }

    def matches(self, entry: Any) -> bool:
        """Check whether an entry satisfies every predicate that is set."""
        for name in ("user_id", "client_id", "project_id", "year", "month", "week"):
            expected = getattr(self, name)
            if expected is not None and getattr(entry, name) != expected:
                return False
        if self.start_date is not None and entry.date < self.start_date:
            return False
        if self.end_date is not None and entry.date > self.end_date:
            return False
        return True


@dataclass
class HoursSummary:
    """Total and grouped hours over a set of time entries."""

    total_hours: Decimal = Decimal("0")
    by_user: Dict[int, Decimal] = field(default_factory=dict)
    by_client: Dict[int, Decimal] = field(default_factory=dict)
    by_project: Dict[int, Decimal] = field(default_factory=dict)
    entry_count: int = 0

    def add(self, entry: Any) -> None:
        """Accumulate one entry's hours into the totals."""
        hours = entry.hours
        self.total_hours += hours
        self.entry_count += 1
        _accumulate(self.by_user, entry.user_id, hours)
        _accumulate(self.by_client, entry.client_id, hours)
        _accumulate(self.by_project, entry.project_id, hours)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_hours": self.total_hours,
            "by_user": dict(self.by_user),
            "by_client": dict(self.by_client),
            "by_project": dict(self.by_project),
            "entry_count": self.entry_count,
        }


def _accumulate(totals: Dict[int, Decimal], key: Optional[int], hours: Decimal) -> None:
    if key is None:
        return
    totals[key] = totals.get(key, Decimal("0")) + hours
