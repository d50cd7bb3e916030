"""
Reports router.
Hour summaries over filtered time entries.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query

from app.application.use_cases.report_use_cases import SummarizeTimeEntriesUseCase
from app.application.dto.report_dto import HoursSummaryResponseDTO
from app.domain.models.value_objects import ReportPeriod
from app.domain.services.aggregation_service import AggregationService
from app.domain.services.clock import Clock
from app.infrastructure.web.dependencies import get_aggregation_service, get_clock, unwrap
from app.infrastructure.web.routers.time_entries import FilterParams


router = APIRouter()


@router.get("/summary", response_model=HoursSummaryResponseDTO)
async def get_summary(
    filters: FilterParams,
    aggregation: Annotated[AggregationService, Depends(get_aggregation_service)],
    clock: Annotated[Clock, Depends(get_clock)],
    period: Optional[ReportPeriod] = Query(None, description="Predefined period, instead of start_date/end_date"),
):
    """
    Total hours, and hours per user, client and project.

    - **period**: today, this_week, last_week, this_month, last_month or this_year
    """
    request = dict(filters)
    if period is not None:
        request["period"] = period

    report = unwrap(await SummarizeTimeEntriesUseCase(aggregation, clock).execute(request))
    return HoursSummaryResponseDTO.from_domain(report.summary, report.entry_filter)
