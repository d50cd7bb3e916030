"""Unit of work interface.
Groups time entry and audit log writes into one transaction.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from app.domain.repositories.time_entry_repository import TimeEntryRepository
from app.domain.repositories.audit_log_repository import AuditLogRepository

logger = logging.getLogger(__name__)


class UnitOfWork(ABC):
    """
    Transaction boundary for the time entry store.

    Usage:
        async with uow:
            await uow.time_entries.insert(entry)
            await uow.audit_logs.insert(log)
            await uow.commit()

    Leaving the block without a commit, or with an exception, rolls back
    every write made inside it.
    """

    time_entries: TimeEntryRepository
    audit_logs: AuditLogRepository

    def __init__(self):
        self._committed = False

    async def __aenter__(self) -> "UnitOfWork":
        self._committed = False
        await self._begin()
        return self

    async def __aexit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Any) -> None:
        try:
            if exc_type is not None:
                logger.warning(f"Rolling back unit of work after {exc_type.__name__}: {exc_val}")
                await self.rollback()
            elif not self._committed:
                await self.rollback()
        finally:
            await self._close()

    async def commit(self) -> None:
        """Commit every write made in this unit of work."""
        await self._commit()
        self._committed = True

    @abstractmethod
    async def rollback(self) -> None:
        """Discard every uncommitted write."""
        pass

    @abstractmethod
    async def _begin(self) -> None:
        """Open the transaction and bind the repositories."""
        pass

    @abstractmethod
    async def _commit(self) -> None:
        pass

    async def _close(self) -> None:
        """Release resources held by the transaction."""
        pass
