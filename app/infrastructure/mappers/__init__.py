"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .time_entry_mapper import TimeEntryMapper
from .audit_log_mapper import AuditLogMapper

__all__ = [
    "TimeEntryMapper",
    "AuditLogMapper",
]
