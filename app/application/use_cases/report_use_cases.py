"""
Reporting use cases for the application layer.
"""

import csv
import io
from dataclasses import dataclass
from typing import Any, List

from app.application.use_cases.base_use_case import QueryUseCase, parse_request
from app.application.dto.time_entry_dto import TimeEntryFilterRequestDTO
from app.application.dto.report_dto import SummaryRequestDTO
from app.domain.models.time_entry import TimeEntry, format_hours
from app.domain.models.value_objects import HoursSummary, TimeEntryFilter
from app.domain.services.aggregation_service import AggregationService
from app.domain.services.clock import Clock


EXPORT_COLUMNS = ["id", "date", "user_id", "client_id", "project_id", "hours", "description"]


@dataclass
class SummaryReport:
    """An hours summary and the filter it was computed over."""
    summary: HoursSummary
    entry_filter: TimeEntryFilter


class SummarizeTimeEntriesUseCase(QueryUseCase[Any, SummaryReport]):
    """Summarize hours over the entries selected by a filter or a named period."""

    def __init__(self, aggregation: AggregationService, clock: Clock):
        super().__init__()
        self.aggregation = aggregation
        self.clock = clock

    async def _validate_request(self, request: Any) -> TimeEntryFilter:
        dto = parse_request(SummaryRequestDTO, request)
        return dto.to_filter_for(self.clock.now().date())

    async def _execute_business_logic(self, request: TimeEntryFilter) -> SummaryReport:
        summary = await self.aggregation.summarize_by_filter(request)
        return SummaryReport(summary=summary, entry_filter=request)


class ExportTimeEntriesUseCase(QueryUseCase[Any, str]):
    """Export the entries selected by a filter as CSV text."""

    def __init__(self, aggregation: AggregationService):
        super().__init__()
        self.aggregation = aggregation

    async def _validate_request(self, request: Any) -> TimeEntryFilter:
        return parse_request(TimeEntryFilterRequestDTO, request).to_filter()

    async def _execute_business_logic(self, request: TimeEntryFilter) -> str:
        entries = await self.aggregation.select_by_filter(request)
        return render_csv(entries)


def render_csv(entries: List[TimeEntry]) -> str:
    """Render entries as CSV with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    for entry in entries:
        writer.writerow([
            entry.id,
            entry.date.isoformat(),
            entry.user_id,
            entry.client_id,
            entry.project_id,
            format_hours(entry.hours),
            entry.description,
        ])
    return buffer.getvalue()
