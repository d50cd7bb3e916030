"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .time_entry_dto import *
from .audit_log_dto import *
from .report_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "CreateRequestDTO",
    "UpdateRequestDTO",
    "ListRequestDTO",
    "ListResponseDTO",
    "HealthCheckResponseDTO",
    "Hours",
    # Time entry DTOs
    "CreateTimeEntryRequestDTO",
    "UpdateTimeEntryRequestDTO",
    "TimeEntryFilterRequestDTO",
    "ListTimeEntriesRequestDTO",
    "TimeEntryResponseDTO",
    # Audit DTOs
    "AuditLogResponseDTO",
    "AuditTrailResponseDTO",
    # Report DTOs
    "SummaryRequestDTO",
    "HoursSummaryResponseDTO",
]
