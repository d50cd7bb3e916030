"""
TimeEntry domain model.
Represents hours a user logged against a client and project on a given day.
"""

from dataclasses import dataclass, replace
from datetime import datetime, date
from decimal import Decimal, InvalidOperation
from typing import Optional, Dict, Any, FrozenSet

from app.domain.models.base import BaseEntity, ValidationError
from app.domain.models.value_objects import DateParts, derive_date_parts


MAX_HOURS_PER_ENTRY = Decimal("24")
HOURS_DECIMAL_PLACES = 2

# Fields a caller may change; year/month/week always follow date
MUTABLE_FIELDS: FrozenSet[str] = frozenset({
    "user_id",
    "client_id",
    "project_id",
    "date",
    "hours",
    "description",
})
DERIVED_FIELDS: FrozenSet[str] = frozenset({"year", "month", "week"})


def parse_hours(value: Any) -> Decimal:
    """Parse hours into a Decimal, never summing or storing them as text."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"Invalid hours value: {value!r}", "hours")
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid hours value: {value!r}", "hours")


def format_hours(hours: Decimal) -> str:
    """
    Canonical text for hours: no trailing zeros, at least one decimal place.
    Decimal("4.50") and Decimal("4.5") both give "4.5"; Decimal("6") gives "6.0".
    """
    normalized = hours.normalize()
    if normalized == normalized.to_integral_value():
        return f"{normalized.quantize(Decimal(1))}.0"
    return str(normalized)


@dataclass(eq=False, kw_only=True)
class TimeEntry(BaseEntity):
    """
    TimeEntry entity.

    year, month and week are cached projections of date and are recomputed
    every time an entry is built, so they can never disagree with it.
    """

    user_id: int
    client_id: int
    project_id: int
    date: date
    hours: Decimal
    description: str
    year: int = 0
    month: int = 0
    week: int = 0

    def __post_init__(self):
        """Normalize values, derive date parts and validate."""
        self.hours = parse_hours(self.hours)
        if isinstance(self.description, str):
            self.description = self.description.strip()
        if isinstance(self.date, datetime):
            self.date = self.date.date()
        parts = derive_date_parts(self.date)
        self.year = parts.year
        self.month = parts.month
        self.week = parts.week
        self.validate()

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        client_id: int,
        project_id: int,
        date: date,
        hours: Any,
        description: str,
        now: datetime,
        **ignored: Any,
    ) -> "TimeEntry":
        """
        Build a new, not yet persisted time entry.
        Caller-supplied year/month/week arrive in ``ignored`` and are dropped.
        """
        return cls(
            user_id=user_id,
            client_id=client_id,
            project_id=project_id,
            date=date,
            hours=hours,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def validate(self) -> None:
        """Validate time entry state."""
        for name in ("user_id", "client_id", "project_id"):
            if getattr(self, name) is None:
                raise ValidationError(f"{name} is required", name)

        if not isinstance(self.date, date):
            raise ValidationError(f"Invalid date: {self.date!r}", "date")

        if not self.hours.is_finite() or self.hours <= 0:
            raise ValidationError("Hours must be greater than 0", "hours")
        if self.hours > MAX_HOURS_PER_ENTRY:
            raise ValidationError("Hours cannot exceed 24", "hours")
        if self.hours.as_tuple().exponent < -HOURS_DECIMAL_PLACES:
            raise ValidationError("Hours cannot have more than 2 decimal places", "hours")

        if not isinstance(self.description, str) or not self.description:
            raise ValidationError("Description is required", "description")

    @property
    def date_parts(self) -> DateParts:
        """The cached year, month and week."""
        return DateParts(self.year, self.month, self.week)

    def apply_changes(self, changes: Dict[str, Any], now: datetime) -> "TimeEntry":
        """
        Merge a partial patch onto this entry and return the merged entry.

        Fields absent from ``changes`` keep their current value. The merged
        entry is rebuilt, so date parts are recomputed from its final date.
        This entry is left untouched.
        """
        unknown = set(changes) - MUTABLE_FIELDS - DERIVED_FIELDS
        if unknown:
            name = sorted(unknown)[0]
            raise ValidationError(f"Field '{name}' cannot be changed", name)

        patch = {k: v for k, v in changes.items() if k in MUTABLE_FIELDS}
        return replace(self, **patch, updated_at=now)

    def column_values(self) -> Dict[str, Any]:
        """Values of every stored column except id and created_at."""
        return {
            "user_id": self.user_id,
            "client_id": self.client_id,
            "project_id": self.project_id,
            "date": self.date,
            "year": self.year,
            "month": self.month,
            "week": self.week,
            "hours": self.hours,
            "description": self.description,
            "updated_at": self.updated_at,
        }

    def to_snapshot(self) -> Dict[str, Any]:
        """Full JSON-compatible snapshot used by the audit trail."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "client_id": self.client_id,
            "project_id": self.project_id,
            "date": self.date.isoformat(),
            "year": self.year,
            "month": self.month,
            "week": self.week,
            "hours": format_hours(self.hours),
            "description": self.description,
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<TimeEntry(id={self.id}, user={self.user_id}, date={self.date}, hours={self.hours})>"


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
