"""
Infrastructure repositories module.
Contains SQLAlchemy and in-memory implementations of domain repositories.
"""

from .time_entry_repository import SQLAlchemyTimeEntryRepository
from .audit_log_repository import SQLAlchemyAuditLogRepository
from .unit_of_work import SQLAlchemyUnitOfWork
from .memory import (
    InMemoryStore,
    InMemoryTimeEntryRepository,
    InMemoryAuditLogRepository,
    InMemoryUnitOfWork,
)

__all__ = [
    "SQLAlchemyTimeEntryRepository",
    "SQLAlchemyAuditLogRepository",
    "SQLAlchemyUnitOfWork",
    "InMemoryStore",
    "InMemoryTimeEntryRepository",
    "InMemoryAuditLogRepository",
    "InMemoryUnitOfWork",
]
