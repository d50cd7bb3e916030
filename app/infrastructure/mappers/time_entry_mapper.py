"""
Time entry mapper for converting between domain entities and database models.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Any, Optional

from app.domain.models.time_entry import TimeEntry
from app.infrastructure.db.models import TimeEntryModel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes; SQLite drops the offset of timezone-aware columns."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class TimeEntryMapper:
    """Maps between TimeEntry domain entity and TimeEntryModel database model."""

    def domain_to_model(self, time_entry: TimeEntry) -> TimeEntryModel:
        """Convert TimeEntry domain entity to TimeEntryModel."""
        return TimeEntryModel(
            id=time_entry.id,
            created_at=time_entry.created_at,
            **self.to_columns(time_entry.column_values()),
        )

    def model_to_domain(self, model: TimeEntryModel) -> TimeEntry:
        """
        Convert TimeEntryModel to TimeEntry domain entity.
        Date parts are re-derived from the stored date when the entity is built.
        """
        return TimeEntry(
            id=model.id,
            user_id=model.user_id,
            client_id=model.client_id,
            project_id=model.project_id,
            date=model.date,
            hours=Decimal(model.hours),
            description=model.description,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def to_columns(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Filter a dict down to the columns the model actually has."""
        columns = TimeEntryModel.__table__.columns.keys()
        return {key: value for key, value in values.items() if key in columns and key != "id"}
