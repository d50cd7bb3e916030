"""
AuditLog domain model.
Immutable record of one create, update or delete of a time entry.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any


class AuditAction(str, Enum):
    """Mutation kinds recorded in the audit trail."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class AuditLog:
    """
    One entry of a time entry's mutation history.

    ``time_entry_id`` is a plain reference: logs outlive the entry they
    describe. ``previous_value`` is None for creates and ``new_value`` is
    None for deletes.
    """

    time_entry_id: int
    user_id: int
    action: AuditAction
    previous_value: Optional[Dict[str, Any]]
    new_value: Optional[Dict[str, Any]]
    timestamp: datetime
    id: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "action", AuditAction(self.action))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "time_entry_id": self.time_entry_id,
            "user_id": self.user_id,
            "action": self.action.value,
            "previous_value": self.previous_value,
            "new_value": self.new_value,
            "timestamp": self.timestamp.isoformat(),
        }
