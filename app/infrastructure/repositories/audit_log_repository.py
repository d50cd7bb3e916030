"""
Audit log repository implementation using SQLAlchemy.
"""

from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError

from app.domain.models.audit_log import AuditLog
from app.domain.models.base import StorageError
from app.domain.repositories.audit_log_repository import AuditLogRepository as AuditLogRepositoryInterface
from app.infrastructure.db.models import AuditLogModel
from app.infrastructure.mappers.audit_log_mapper import AuditLogMapper


class SQLAlchemyAuditLogRepository(AuditLogRepositoryInterface):
    """SQLAlchemy implementation of the audit log repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = AuditLogMapper()

    async def insert(self, audit_log: AuditLog) -> AuditLog:
        """Append an audit log."""
        try:
            model = self.mapper.domain_to_model(audit_log)
            model.id = None
            self.session.add(model)
            self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write audit log: {e}", "audit_insert") from e
        return self.mapper.model_to_domain(model)

    async def find_by_time_entry(self, time_entry_id: int) -> List[AuditLog]:
        """Get audit logs for a time entry, oldest first."""
        try:
            models = self.session.query(AuditLogModel).filter_by(
                time_entry_id=time_entry_id
            ).order_by(asc(AuditLogModel.timestamp), asc(AuditLogModel.id)).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load audit logs for time entry {time_entry_id}: {e}", "audit_find") from e

        return [self.mapper.model_to_domain(model) for model in models]
