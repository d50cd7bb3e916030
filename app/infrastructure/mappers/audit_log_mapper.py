"""
Audit log mapper for converting between domain records and database models.
Snapshots are stored as JSON text.
"""

import json
from typing import Optional, Dict, Any

from app.domain.models.audit_log import AuditLog, AuditAction
from app.infrastructure.db.models import AuditLogModel
from app.infrastructure.mappers.time_entry_mapper import as_utc


class AuditLogMapper:
    """Maps between AuditLog domain record and AuditLogModel database model."""

    def domain_to_model(self, audit_log: AuditLog) -> AuditLogModel:
        """Convert AuditLog to AuditLogModel."""
        return AuditLogModel(
            id=audit_log.id,
            time_entry_id=audit_log.time_entry_id,
            user_id=audit_log.user_id,
            action=audit_log.action.value,
            previous_value=self._dump(audit_log.previous_value),
            new_value=self._dump(audit_log.new_value),
            timestamp=audit_log.timestamp,
        )

    def model_to_domain(self, model: AuditLogModel) -> AuditLog:
        """Convert AuditLogModel to AuditLog."""
        return AuditLog(
            id=model.id,
            time_entry_id=model.time_entry_id,
            user_id=model.user_id,
            action=AuditAction(model.action),
            previous_value=self._load(model.previous_value),
            new_value=self._load(model.new_value),
            timestamp=as_utc(model.timestamp),
        )

    def _dump(self, snapshot: Optional[Dict[str, Any]]) -> Optional[str]:
        if snapshot is None:
            return None
        return json.dumps(snapshot, sort_keys=True, default=str)

    def _load(self, text: Optional[str]) -> Optional[Dict[str, Any]]:
        if text is None:
            return None
        return json.loads(text)
