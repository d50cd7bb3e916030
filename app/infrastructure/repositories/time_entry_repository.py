"""
Time entry repository implementation using SQLAlchemy.
"""

from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session, Query
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from app.domain.models.time_entry import TimeEntry
from app.domain.models.value_objects import TimeEntryFilter
from app.domain.models.base import StorageError
from app.domain.repositories.time_entry_repository import TimeEntryRepository as TimeEntryRepositoryInterface
from app.infrastructure.db.models import TimeEntryModel
from app.infrastructure.mappers.time_entry_mapper import TimeEntryMapper


class SQLAlchemyTimeEntryRepository(TimeEntryRepositoryInterface):
    """SQLAlchemy implementation of time entry repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TimeEntryMapper()
        self.model = TimeEntryModel

    async def insert(self, time_entry: TimeEntry) -> TimeEntry:
        """Insert a time entry and return it with its new ID."""
        try:
            model = self.mapper.domain_to_model(time_entry)
            model.id = None
            self.session.add(model)
            self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to insert time entry: {e}", "insert") from e
        return self.mapper.model_to_domain(model)

    async def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        """Get time entry by ID."""
        try:
            model = self.session.query(TimeEntryModel).filter_by(id=entry_id).first()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load time entry {entry_id}: {e}", "get_by_id") from e

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    async def update_by_id(self, entry_id: int, changes: Dict[str, Any]) -> Optional[TimeEntry]:
        """Write column values onto an existing time entry."""
        try:
            model = self.session.query(TimeEntryModel).filter_by(id=entry_id).first()
            if not model:
                return None

            for attr, value in self.mapper.to_columns(changes).items():
                setattr(model, attr, value)

            self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to update time entry {entry_id}: {e}", "update_by_id") from e

        return self.mapper.model_to_domain(model)

    async def delete_by_id(self, entry_id: int) -> bool:
        """Delete time entry by ID."""
        try:
            model = self.session.query(TimeEntryModel).filter_by(id=entry_id).first()
            if not model:
                return False

            self.session.delete(model)
            self.session.flush()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete time entry {entry_id}: {e}", "delete_by_id") from e
        return True

    async def query(
        self,
        entry_filter: TimeEntryFilter,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[TimeEntry]:
        """Get time entries matching the filter, newest date first."""
        query = self._filtered(entry_filter).order_by(
            desc(TimeEntryModel.date),
            desc(TimeEntryModel.id)
        )

        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        try:
            models = query.all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to query time entries: {e}", "query") from e
        return [self.mapper.model_to_domain(model) for model in models]

    async def count(self, entry_filter: TimeEntryFilter) -> int:
        """Count time entries matching the filter."""
        try:
            return self._filtered(entry_filter).count()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to count time entries: {e}", "count") from e

    def _filtered(self, entry_filter: TimeEntryFilter) -> Query:
        query = self.session.query(TimeEntryModel)

        for name in ("user_id", "client_id", "project_id", "year", "month", "week"):
            value = getattr(entry_filter, name)
            if value is not None:
                query = query.filter(getattr(TimeEntryModel, name) == value)

        if entry_filter.start_date is not None:
            query = query.filter(TimeEntryModel.date >= entry_filter.start_date)
        if entry_filter.end_date is not None:
            query = query.filter(TimeEntryModel.date <= entry_filter.end_date)

        return query
