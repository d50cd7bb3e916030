"""
Domain services for the time tracking system.
This module exports all domain services for complex business logic.
"""

from .clock import Clock, SystemClock, DeterministicClock
from .audit_recorder import AuditRecorder
from .time_entry_service import TimeEntryService
from .aggregation_service import AggregationService

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "AuditRecorder",
    "TimeEntryService",
    "AggregationService",
]
