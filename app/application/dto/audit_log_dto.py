"""
Audit log DTOs for the application layer.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import Field

from app.application.dto.base_dto import BaseDTO
from app.domain.models.audit_log import AuditLog


class AuditLogResponseDTO(BaseDTO):
    """DTO for one audit log."""

    id: int = Field(description="Audit log ID")
    time_entry_id: int = Field(description="Time entry the log belongs to")
    user_id: int = Field(description="User who made the change")
    action: str = Field(description="create, update or delete")
    previous_value: Optional[Dict[str, Any]] = Field(default=None, description="Entry before the change")
    new_value: Optional[Dict[str, Any]] = Field(default=None, description="Entry after the change")
    timestamp: datetime = Field(description="When the change was recorded")

    @classmethod
    def from_domain(cls, audit_log: AuditLog) -> "AuditLogResponseDTO":
        return cls(**audit_log.to_dict())


class AuditTrailResponseDTO(BaseDTO):
    """DTO for the full history of a time entry, oldest first."""

    time_entry_id: int = Field(description="Time entry ID")
    entry_exists: bool = Field(description="Whether the entry still exists")
    logs: List[AuditLogResponseDTO] = Field(description="Audit logs, oldest first")
