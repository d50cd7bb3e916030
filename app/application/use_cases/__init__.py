"""
Application layer use cases.
Business logic for the time tracking service.
"""

from .base_use_case import *
from .time_entry_use_cases import *
from .report_use_cases import *

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "PaginatedQueryUseCase",
    "UseCaseResult",
    "parse_request",
    # Time entry use cases
    "CreateTimeEntryUseCase",
    "UpdateTimeEntryUseCase",
    "DeleteTimeEntryUseCase",
    "GetTimeEntryUseCase",
    "ListTimeEntriesUseCase",
    "GetAuditTrailUseCase",
    "UpdateTimeEntryRequest",
    "TimeEntryPage",
    "AuditTrail",
    # Report use cases
    "SummarizeTimeEntriesUseCase",
    "ExportTimeEntriesUseCase",
    "SummaryReport",
    "render_csv",
]
