"""
Time entry use cases for the application layer.
"""

from dataclasses import dataclass
from typing import Any, List

from app.application.use_cases.base_use_case import (
    CommandUseCase, QueryUseCase, PaginatedQueryUseCase, parse_request
)
from app.application.dto.time_entry_dto import (
    CreateTimeEntryRequestDTO,
    UpdateTimeEntryRequestDTO,
    ListTimeEntriesRequestDTO,
)
from app.domain.models.base import ValidationError
from app.domain.models.time_entry import TimeEntry
from app.domain.models.audit_log import AuditLog
from app.domain.services.time_entry_service import TimeEntryService
from app.domain.services.aggregation_service import AggregationService


@dataclass(frozen=True)
class UpdateTimeEntryRequest:
    """A partial update aimed at one entry."""
    entry_id: int
    changes: Any


@dataclass
class TimeEntryPage:
    """One page of time entries plus the total number of matches."""
    items: List[TimeEntry]
    total: int
    page: int
    page_size: int


@dataclass
class AuditTrail:
    """An entry's audit logs, oldest first."""
    time_entry_id: int
    logs: List[AuditLog]
    entry_exists: bool


def _check_entry_id(entry_id: Any) -> int:
    if isinstance(entry_id, bool) or not isinstance(entry_id, int):
        raise ValidationError(f"Invalid time entry ID: {entry_id!r}", "id")
    if entry_id <= 0:
        raise ValidationError("ID must be positive", "id")
    return entry_id


class CreateTimeEntryUseCase(CommandUseCase[Any, TimeEntry]):
    """Create a time entry and its create audit log."""

    def __init__(self, service: TimeEntryService):
        super().__init__()
        self.service = service

    async def _validate_request(self, request: Any) -> CreateTimeEntryRequestDTO:
        return parse_request(CreateTimeEntryRequestDTO, request)

    async def _execute_business_logic(self, request: CreateTimeEntryRequestDTO) -> TimeEntry:
        return await self.service.create(request.to_payload())


class UpdateTimeEntryUseCase(CommandUseCase[UpdateTimeEntryRequest, TimeEntry]):
    """Apply a partial update to a time entry and log it."""

    def __init__(self, service: TimeEntryService):
        super().__init__()
        self.service = service

    async def _validate_request(self, request: UpdateTimeEntryRequest) -> UpdateTimeEntryRequest:
        entry_id = _check_entry_id(request.entry_id)
        dto = parse_request(UpdateTimeEntryRequestDTO, request.changes)
        return UpdateTimeEntryRequest(entry_id, dto.to_changes())

    async def _execute_business_logic(self, request: UpdateTimeEntryRequest) -> TimeEntry:
        return await self.service.update(request.entry_id, request.changes)


class DeleteTimeEntryUseCase(CommandUseCase[int, bool]):
    """Delete a time entry and log its last state."""

    def __init__(self, service: TimeEntryService):
        super().__init__()
        self.service = service

    async def _validate_request(self, request: int) -> int:
        return _check_entry_id(request)

    async def _execute_business_logic(self, request: int) -> bool:
        return await self.service.delete(request)


class GetTimeEntryUseCase(QueryUseCase[int, TimeEntry]):
    """Get one time entry."""

    def __init__(self, service: TimeEntryService):
        super().__init__()
        self.service = service

    async def _validate_request(self, request: int) -> int:
        return _check_entry_id(request)

    async def _execute_business_logic(self, request: int) -> TimeEntry:
        return await self.service.get(request)


class ListTimeEntriesUseCase(PaginatedQueryUseCase[Any, TimeEntryPage]):
    """List filtered time entries, newest date first, one page at a time."""

    def __init__(self, aggregation: AggregationService, **kwargs):
        super().__init__(**kwargs)
        self.aggregation = aggregation

    async def _validate_request(self, request: Any) -> ListTimeEntriesRequestDTO:
        if isinstance(request, dict) and "page_size" not in request:
            request = {**request, "page_size": self.default_page_size}
        dto = parse_request(ListTimeEntriesRequestDTO, request)
        self._check_page_size(dto.page_size)
        return dto

    async def _execute_business_logic(self, request: ListTimeEntriesRequestDTO) -> TimeEntryPage:
        entries, total = await self.aggregation.list_page(
            request.to_filter(), request.page, request.page_size
        )
        return TimeEntryPage(items=entries, total=total, page=request.page, page_size=request.page_size)


class GetAuditTrailUseCase(QueryUseCase[int, AuditTrail]):
    """
    Get the audit trail of a time entry.
    Deleted entries keep their trail; only an ID with no entry and no logs is not found.
    """

    def __init__(self, service: TimeEntryService):
        super().__init__()
        self.service = service

    async def _validate_request(self, request: int) -> int:
        return _check_entry_id(request)

    async def _execute_business_logic(self, request: int) -> AuditTrail:
        logs, exists = await self.service.audit_trail(request)
        return AuditTrail(time_entry_id=request, logs=logs, entry_exists=exists)
