"""Audit log repository interface.
Append-only persistence for the time entry mutation history.
"""

from abc import ABC, abstractmethod
from typing import List

from app.domain.models.audit_log import AuditLog


class AuditLogRepository(ABC):
    """
    Repository interface for AuditLog records.
    There is deliberately no update or delete operation.
    """

    @abstractmethod
    async def insert(self, audit_log: AuditLog) -> AuditLog:
        """
        Append an audit log.
        Returns the stored log with its assigned ID.
        """
        pass

    @abstractmethod
    async def find_by_time_entry(self, time_entry_id: int) -> List[AuditLog]:
        """
        Find all logs for a time entry, oldest first.
        Returns an empty list if there are none.
        """
        pass
