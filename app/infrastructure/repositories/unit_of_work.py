"""
Unit of work implementation using SQLAlchemy sessions.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.domain.models.base import StorageError
from app.domain.repositories.unit_of_work import UnitOfWork
from app.infrastructure.repositories.time_entry_repository import SQLAlchemyTimeEntryRepository
from app.infrastructure.repositories.audit_log_repository import SQLAlchemyAuditLogRepository

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    One SQLAlchemy session per unit of work.
    Repositories are bound to the session when the block is entered.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        super().__init__()
        self.session_factory = session_factory
        self.session: Optional[Session] = None

    async def _begin(self) -> None:
        self.session = self.session_factory()
        self.time_entries = SQLAlchemyTimeEntryRepository(self.session)
        self.audit_logs = SQLAlchemyAuditLogRepository(self.session)

    async def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Commit failed: {e}", exc_info=True)
            self.session.rollback()
            raise StorageError(f"Failed to commit transaction: {e}", "commit") from e

    async def rollback(self) -> None:
        if self.session is None:
            return
        try:
            self.session.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback failed: {e}", exc_info=True)
            raise StorageError(f"Failed to roll back transaction: {e}", "rollback") from e

    async def _close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None
