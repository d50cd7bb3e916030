"""
Reporting DTOs for the application layer.
"""

from datetime import date
from typing import Dict, Optional
from pydantic import Field, model_validator

from app.application.dto.base_dto import BaseDTO, Hours
from app.application.dto.time_entry_dto import TimeEntryFilterRequestDTO, FILTER_FIELDS
from app.domain.models.value_objects import (
    HoursSummary, ReportPeriod, TimeEntryFilter, period_range
)


class SummaryRequestDTO(TimeEntryFilterRequestDTO):
    """
    DTO for an hours summary.
    A named period replaces start_date/end_date, so the two cannot be combined.
    """

    period: Optional[ReportPeriod] = Field(default=None, description="Predefined reporting period")

    @model_validator(mode="after")
    def validate_period(self):
        if self.period and (self.start_date or self.end_date):
            raise ValueError("period cannot be combined with start_date or end_date")
        return self

    def to_filter_for(self, today: date) -> TimeEntryFilter:
        """Convert to the domain filter, resolving period against today."""
        values = self.model_dump(include=FILTER_FIELDS)
        if self.period:
            values["start_date"], values["end_date"] = period_range(ReportPeriod(self.period), today)
        return TimeEntryFilter(**values)


class HoursSummaryResponseDTO(BaseDTO):
    """DTO for total and grouped hours."""

    total_hours: Hours = Field(description="Sum of hours")
    by_user: Dict[int, Hours] = Field(description="Hours per user ID")
    by_client: Dict[int, Hours] = Field(description="Hours per client ID")
    by_project: Dict[int, Hours] = Field(description="Hours per project ID")
    entry_count: int = Field(description="Number of entries summarized")
    start_date: Optional[date] = Field(default=None, description="Start of the reported range")
    end_date: Optional[date] = Field(default=None, description="End of the reported range")

    @classmethod
    def from_domain(
        cls,
        summary: HoursSummary,
        entry_filter: Optional[TimeEntryFilter] = None
    ) -> "HoursSummaryResponseDTO":
        return cls(
            **summary.to_dict(),
            start_date=entry_filter.start_date if entry_filter else None,
            end_date=entry_filter.end_date if entry_filter else None,
        )
