"""
Database infrastructure for the time tracking service.
"""

from .database import engine, SessionLocal, Base, build_engine
from .models import TimeEntryModel, AuditLogModel, create_all_tables

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "build_engine",
    "TimeEntryModel",
    "AuditLogModel",
    "create_all_tables",
]
