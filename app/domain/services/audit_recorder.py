"""Audit recorder service.
Appends one immutable log per time entry mutation.
"""

import logging
from typing import List, Dict, Any, Optional

from app.domain.models.audit_log import AuditLog, AuditAction
from app.domain.repositories.audit_log_repository import AuditLogRepository
from app.domain.services.clock import Clock

logger = logging.getLogger(__name__)


class AuditRecorder:
    """
    Domain service writing the audit trail.

    Snapshots are stored as given; the recorder does not inspect them.
    The timestamp always comes from the clock, never from the caller.
    """

    def __init__(self, audit_logs: AuditLogRepository, clock: Clock):
        self.audit_logs = audit_logs
        self.clock = clock

    async def record(
        self,
        time_entry_id: int,
        user_id: int,
        action: AuditAction,
        previous_value: Optional[Dict[str, Any]],
        new_value: Optional[Dict[str, Any]]
    ) -> AuditLog:
        """
        Append an audit log for a mutation.
        Storage failures propagate to the caller.
        """
        audit_log = AuditLog(
            time_entry_id=time_entry_id,
            user_id=user_id,
            action=action,
            previous_value=previous_value,
            new_value=new_value,
            timestamp=self.clock.now(),
        )
        stored = await self.audit_logs.insert(audit_log)
        logger.debug(f"Recorded {stored.action.value} audit log {stored.id} for time entry {time_entry_id}")
        return stored

    async def get_logs_for_entry(self, time_entry_id: int) -> List[AuditLog]:
        """Get an entry's history, oldest first."""
        return await self.audit_logs.find_by_time_entry(time_entry_id)
