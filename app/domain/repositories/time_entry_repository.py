"""Time Entry repository interface.
Defines the contract for time entry data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any

from app.domain.models.time_entry import TimeEntry
from app.domain.models.value_objects import TimeEntryFilter


class TimeEntryRepository(ABC):
    """
    Repository interface for TimeEntry entity.
    Defines all operations needed for time entry data persistence.
    """

    @abstractmethod
    async def insert(self, time_entry: TimeEntry) -> TimeEntry:
        """
        Insert a new time entry.
        Returns the stored entry with its assigned ID.
        """
        pass

    @abstractmethod
    async def get_by_id(self, entry_id: int) -> Optional[TimeEntry]:
        """
        Find a time entry by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def update_by_id(self, entry_id: int, changes: Dict[str, Any]) -> Optional[TimeEntry]:
        """
        Write column values onto an existing entry.
        Returns the stored entry, or None if it does not exist.
        """
        pass

    @abstractmethod
    async def delete_by_id(self, entry_id: int) -> bool:
        """
        Delete a time entry.
        Returns False if there was nothing to delete.
        """
        pass

    @abstractmethod
    async def query(
        self,
        entry_filter: TimeEntryFilter,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[TimeEntry]:
        """
        Find entries matching every predicate set on the filter.
        Results are ordered by date descending, then by ID descending.
        """
        pass

    @abstractmethod
    async def count(self, entry_filter: TimeEntryFilter) -> int:
        """
        Count entries matching the filter.
        """
        pass
