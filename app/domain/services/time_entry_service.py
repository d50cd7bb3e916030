"""Time entry mutation service.
Creates, updates and deletes time entries, writing one audit log per mutation.
"""

import logging
from typing import Dict, Any, List, Tuple

from app.domain.models.base import ValidationError, EntityNotFoundError
from app.domain.models.time_entry import TimeEntry, MUTABLE_FIELDS
from app.domain.models.audit_log import AuditLog, AuditAction
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.audit_recorder import AuditRecorder
from app.domain.services.clock import Clock

logger = logging.getLogger(__name__)


class TimeEntryService:
    """
    Domain service for time entry mutations.

    Every operation runs in a single unit of work: the entry write and its
    audit log are committed together, and a failure of either rolls both back.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def create(self, payload: Dict[str, Any]) -> TimeEntry:
        """
        Create a time entry.
        Any year, month or week in the payload is ignored and derived from date.
        """
        missing = sorted(name for name in MUTABLE_FIELDS if payload.get(name) is None)
        if missing:
            raise ValidationError(f"{missing[0]} is required", missing[0])

        entry = TimeEntry.create(**payload, now=self.clock.now())

        async with self.uow:
            stored = await self.uow.time_entries.insert(entry)
            await self._recorder().record(
                time_entry_id=stored.id,
                user_id=stored.user_id,
                action=AuditAction.CREATE,
                previous_value=None,
                new_value=stored.to_snapshot(),
            )
            await self.uow.commit()

        logger.info(f"Created time entry {stored.id} for user {stored.user_id} ({stored.hours}h on {stored.date})")
        return stored

    async def update(self, entry_id: int, changes: Dict[str, Any]) -> TimeEntry:
        """
        Apply a partial update to a time entry.

        The patch is merged onto the current stored state. The audit actor is
        the user_id carried by the patch, or the entry's owner before the change.
        """
        async with self.uow:
            current = await self.uow.time_entries.get_by_id(entry_id)
            if current is None:
                raise EntityNotFoundError("TimeEntry", entry_id)

            merged = current.apply_changes(changes, self.clock.now())
            stored = await self.uow.time_entries.update_by_id(entry_id, merged.column_values())
            if stored is None:
                raise EntityNotFoundError("TimeEntry", entry_id)

            actor = stored.user_id if "user_id" in changes else current.user_id

            await self._recorder().record(
                time_entry_id=entry_id,
                user_id=actor,
                action=AuditAction.UPDATE,
                previous_value=current.to_snapshot(),
                new_value=stored.to_snapshot(),
            )
            await self.uow.commit()

        logger.info(f"Updated time entry {entry_id} ({', '.join(sorted(changes)) or 'no fields'})")
        return stored

    async def delete(self, entry_id: int) -> bool:
        """
        Delete a time entry.
        The delete log keeps the last snapshot of the entry.
        """
        async with self.uow:
            current = await self.uow.time_entries.get_by_id(entry_id)
            if current is None:
                raise EntityNotFoundError("TimeEntry", entry_id)

            if not await self.uow.time_entries.delete_by_id(entry_id):
                raise EntityNotFoundError("TimeEntry", entry_id)

            await self._recorder().record(
                time_entry_id=entry_id,
                user_id=current.user_id,
                action=AuditAction.DELETE,
                previous_value=current.to_snapshot(),
                new_value=None,
            )
            await self.uow.commit()

        logger.info(f"Deleted time entry {entry_id}")
        return True

    async def get(self, entry_id: int) -> TimeEntry:
        """Get a time entry by ID."""
        async with self.uow:
            entry = await self.uow.time_entries.get_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError("TimeEntry", entry_id)
        return entry

    async def audit_trail(self, entry_id: int) -> Tuple[List[AuditLog], bool]:
        """
        Get an entry's audit logs, oldest first, and whether the entry still exists.
        The history of a deleted entry stays readable.
        """
        async with self.uow:
            logs = await self._recorder().get_logs_for_entry(entry_id)
            exists = await self.uow.time_entries.get_by_id(entry_id) is not None
        if not logs and not exists:
            raise EntityNotFoundError("TimeEntry", entry_id)
        return logs, exists

    def _recorder(self) -> AuditRecorder:
        return AuditRecorder(self.uow.audit_logs, self.clock)
