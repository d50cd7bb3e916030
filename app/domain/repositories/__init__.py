"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .time_entry_repository import TimeEntryRepository
from .audit_log_repository import AuditLogRepository
from .unit_of_work import UnitOfWork

__all__ = [
    "TimeEntryRepository",
    "AuditLogRepository",
    "UnitOfWork",
]
