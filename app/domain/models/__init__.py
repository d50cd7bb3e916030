"""
Domain models for the time tracking system.
"""

from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    EntityNotFoundError,
    StorageError,
)
from .value_objects import (
    DateParts,
    derive_date_parts,
    weeks_in_year,
    period_range,
    ReportPeriod,
    TimeEntryFilter,
    HoursSummary,
)
from .time_entry import TimeEntry, parse_hours, format_hours
from .audit_log import AuditLog, AuditAction

__all__ = [
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "StorageError",
    "DateParts",
    "derive_date_parts",
    "weeks_in_year",
    "period_range",
    "ReportPeriod",
    "TimeEntryFilter",
    "HoursSummary",
    "TimeEntry",
    "parse_hours",
    "format_hours",
    "AuditLog",
    "AuditAction",
]
