"""
In-memory repository implementations.
Used for tests and for running the API without a database.
"""

import copy
import logging
from dataclasses import replace
from typing import Optional, List, Dict, Any

from app.domain.models.time_entry import TimeEntry
from app.domain.models.audit_log import AuditLog
from app.domain.models.value_objects import TimeEntryFilter
from app.domain.repositories.time_entry_repository import TimeEntryRepository
from app.domain.repositories.audit_log_repository import AuditLogRepository
from app.domain.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class InMemoryStore:
    """
    Shared storage for the in-memory repositories.
    ID counters only ever increase, even across rollbacks.
    """

    def __init__(self):
        self.time_entries: Dict[int, TimeEntry] = {}
        self.audit_logs: Dict[int, AuditLog] = {}
        self.next_entry_id = 1
        self.next_log_id = 1

    def snapshot(self) -> Dict[str, Any]:
        return {
            "time_entries": dict(self.time_entries),
            "audit_logs": dict(self.audit_logs),
        }

    def restore(self, state: Dict[str, Any]) -> None:
        self.time_entries = state["time_entries"]
        self.audit_logs = state["audit_logs"]


class InMemoryTimeEntryRepository(TimeEntryRepository):
    """
    Dict-backed time entry repository.
    Entries are copied on the way in and out so callers never share state with the store.
    """

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def insert(self, time_entry: TimeEntry) -> TimeEntry:
        entry_id = self.store.next_entry_id
        self.store.next_entry_id += 1
        stored = replace(time_entry, id=entry_id)
        self.store.time_entries[entry_id] = stored
        return copy.deepcopy(stored)

    async def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        entry = self.store.time_entries.get(entry_id)
        return copy.deepcopy(entry) if entry else None

    async def update_by_id(self, entry_id: int, changes: Dict[str, Any]) -> Optional[TimeEntry]:
        current = self.store.time_entries.get(entry_id)
        if current is None:
            return None
        fields = {key: value for key, value in changes.items() if key not in ("id", "created_at")}
        stored = replace(current, **fields)
        self.store.time_entries[entry_id] = stored
        return copy.deepcopy(stored)

    async def delete_by_id(self, entry_id: int) -> bool:
        return self.store.time_entries.pop(entry_id, None) is not None

    async def query(
        self,
        entry_filter: TimeEntryFilter,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[TimeEntry]:
        matches = [e for e in self.store.time_entries.values() if entry_filter.matches(e)]
        matches.sort(key=lambda e: (e.date, e.id), reverse=True)
        if offset:
            matches = matches[offset:]
        if limit is not None:
            matches = matches[:limit]
        return [copy.deepcopy(e) for e in matches]

    async def count(self, entry_filter: TimeEntryFilter) -> int:
        return sum(1 for e in self.store.time_entries.values() if entry_filter.matches(e))


class InMemoryAuditLogRepository(AuditLogRepository):
    """Dict-backed audit log repository."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def insert(self, audit_log: AuditLog) -> AuditLog:
        log_id = self.store.next_log_id
        self.store.next_log_id += 1
        stored = replace(audit_log, id=log_id)
        self.store.audit_logs[log_id] = stored
        return copy.deepcopy(stored)

    async def find_by_time_entry(self, time_entry_id: int) -> List[AuditLog]:
        logs = [log for log in self.store.audit_logs.values() if log.time_entry_id == time_entry_id]
        logs.sort(key=lambda log: (log.timestamp, log.id))
        return [copy.deepcopy(log) for log in logs]


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of work over an InMemoryStore.
    Rollback restores the state captured when the block was entered.
    """

    def __init__(self, store: Optional[InMemoryStore] = None):
        super().__init__()
        self.store = store or InMemoryStore()
        self.time_entries = InMemoryTimeEntryRepository(self.store)
        self.audit_logs = InMemoryAuditLogRepository(self.store)
        self._saved: Optional[Dict[str, Any]] = None

    async def _begin(self) -> None:
        self._saved = self.store.snapshot()

    async def _commit(self) -> None:
        self._saved = None

    async def rollback(self) -> None:
        if self._saved is None:
            return
        self.store.restore(self._saved)
        self._saved = None
        logger.debug("Rolled back in-memory unit of work")
