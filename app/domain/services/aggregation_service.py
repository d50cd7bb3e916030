"""Aggregation service for reporting.
Selects time entries by filter and reduces them into hour totals.
"""

import logging
from typing import List, Iterable, Optional, Tuple

from app.domain.models.time_entry import TimeEntry
from app.domain.models.value_objects import TimeEntryFilter, HoursSummary
from app.domain.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AggregationService:
    """
    Read-only queries over time entries.
    Nothing here writes to the store.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def select_by_filter(
        self,
        entry_filter: TimeEntryFilter,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[TimeEntry]:
        """
        Get entries matching the filter, newest date first.
        Ties on date are ordered by ID descending so pages are stable.
        """
        async with self.uow:
            return await self.uow.time_entries.query(entry_filter, limit=limit, offset=offset)

    async def list_page(
        self,
        entry_filter: TimeEntryFilter,
        page: int,
        page_size: int
    ) -> Tuple[List[TimeEntry], int]:
        """Get one page of matching entries and the total match count."""
        offset = (page - 1) * page_size
        async with self.uow:
            entries = await self.uow.time_entries.query(entry_filter, limit=page_size, offset=offset)
            total = await self.uow.time_entries.count(entry_filter)
        return entries, total

    @staticmethod
    def summarize(entries: Iterable[TimeEntry]) -> HoursSummary:
        """Reduce entries into total and grouped hours."""
        summary = HoursSummary()
        for entry in entries:
            summary.add(entry)
        return summary

    async def summarize_by_filter(self, entry_filter: TimeEntryFilter) -> HoursSummary:
        """Select by filter, then summarize."""
        entries = await self.select_by_filter(entry_filter)
        summary = self.summarize(entries)
        logger.debug(f"Summarized {summary.entry_count} entries for {entry_filter.predicates()}")
        return summary

