"""
Time tracking router.
Handles time entry management, their audit trail and CSV export.
"""

from datetime import date
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from app.application.use_cases.time_entry_use_cases import (
    CreateTimeEntryUseCase,
    UpdateTimeEntryUseCase,
    GetTimeEntryUseCase,
    ListTimeEntriesUseCase,
    DeleteTimeEntryUseCase,
    GetAuditTrailUseCase,
    UpdateTimeEntryRequest,
)
from app.application.use_cases.report_use_cases import ExportTimeEntriesUseCase
from app.application.dto.base_dto import ListResponseDTO
from app.application.dto.time_entry_dto import (
    CreateTimeEntryRequestDTO,
    UpdateTimeEntryRequestDTO,
    TimeEntryResponseDTO,
)
from app.application.dto.audit_log_dto import AuditLogResponseDTO, AuditTrailResponseDTO
from app.domain.services.time_entry_service import TimeEntryService
from app.domain.services.aggregation_service import AggregationService
from app.infrastructure.web.dependencies import (
    get_time_entry_service,
    get_aggregation_service,
    unwrap,
)


router = APIRouter()

TimeEntryServiceDep = Annotated[TimeEntryService, Depends(get_time_entry_service)]
AggregationServiceDep = Annotated[AggregationService, Depends(get_aggregation_service)]


def _filter_params(
    user_id: Optional[int] = Query(None, description="Filter by user ID"),
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    project_id: Optional[int] = Query(None, description="Filter by project ID"),
    year: Optional[int] = Query(None, description="Filter by year"),
    month: Optional[int] = Query(None, description="Filter by month (1-12)"),
    week: Optional[int] = Query(None, description="Filter by ISO week (1-53)"),
    start_date: Optional[date] = Query(None, description="Entries on or after this date"),
    end_date: Optional[date] = Query(None, description="Entries on or before this date"),
) -> dict:
    """Collect the filter query parameters that were given."""
    params = {
        "user_id": user_id,
        "client_id": client_id,
        "project_id": project_id,
        "year": year,
        "month": month,
        "week": week,
        "start_date": start_date,
        "end_date": end_date,
    }
    return {key: value for key, value in params.items() if value is not None}


FilterParams = Annotated[dict, Depends(_filter_params)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimeEntryResponseDTO)
async def create_time_entry(request: CreateTimeEntryRequestDTO, service: TimeEntryServiceDep):
    """
    Create a new time entry.

    - **user_id**, **client_id**, **project_id**: who worked, for whom, on what
    - **date**: day the work was performed (ISO format)
    - **hours**: more than 0 and at most 24, two decimal places
    - **description**: what was done

    year, month and week are always derived from date.
    """
    result = await CreateTimeEntryUseCase(service).execute(request)
    return TimeEntryResponseDTO.from_domain(unwrap(result))


@router.get("", response_model=ListResponseDTO[TimeEntryResponseDTO])
async def list_time_entries(
    filters: FilterParams,
    aggregation: AggregationServiceDep,
    page: int = Query(1, description="Page number"),
    page_size: Optional[int] = Query(None, description="Items per page"),
):
    """
    List time entries, newest date first.
    All filters are combined with AND; start_date and end_date are inclusive.
    """
    request = {**filters, "page": page}
    if page_size is not None:
        request["page_size"] = page_size

    result = await ListTimeEntriesUseCase(aggregation).execute(request)
    entries_page = unwrap(result)
    return ListResponseDTO[TimeEntryResponseDTO].create(
        items=[TimeEntryResponseDTO.from_domain(entry) for entry in entries_page.items],
        total=entries_page.total,
        page=entries_page.page,
        page_size=entries_page.page_size,
    )


@router.get("/export")
async def export_time_entries(filters: FilterParams, aggregation: AggregationServiceDep):
    """Export the filtered time entries as CSV."""
    result = await ExportTimeEntriesUseCase(aggregation).execute(filters)
    return Response(
        content=unwrap(result),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="time-entries.csv"'},
    )


@router.get("/{entry_id}", response_model=TimeEntryResponseDTO)
async def get_time_entry(entry_id: int, service: TimeEntryServiceDep):
    """Get a time entry by ID."""
    result = await GetTimeEntryUseCase(service).execute(entry_id)
    return TimeEntryResponseDTO.from_domain(unwrap(result))


@router.patch("/{entry_id}", response_model=TimeEntryResponseDTO)
async def update_time_entry(
    entry_id: int,
    request: UpdateTimeEntryRequestDTO,
    service: TimeEntryServiceDep,
):
    """
    Update a time entry.
    Only the fields sent are changed; changing date recomputes year, month and week.
    """
    result = await UpdateTimeEntryUseCase(service).execute(UpdateTimeEntryRequest(entry_id, request))
    return TimeEntryResponseDTO.from_domain(unwrap(result))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_time_entry(entry_id: int, service: TimeEntryServiceDep):
    """Delete a time entry. Its audit trail is kept."""
    unwrap(await DeleteTimeEntryUseCase(service).execute(entry_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{entry_id}/audit-logs", response_model=AuditTrailResponseDTO)
async def get_audit_trail(entry_id: int, service: TimeEntryServiceDep):
    """Get every change made to a time entry, oldest first."""
    trail = unwrap(await GetAuditTrailUseCase(service).execute(entry_id))
    return AuditTrailResponseDTO(
        time_entry_id=trail.time_entry_id,
        entry_exists=trail.entry_exists,
        logs=[AuditLogResponseDTO.from_domain(log) for log in trail.logs],
    )
