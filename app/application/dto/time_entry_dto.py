"""
Time entry DTOs for the application layer.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, Optional
from pydantic import Field, field_validator, model_validator

from app.application.dto.base_dto import (
    RequestDTO, ResponseDTO, CreateRequestDTO, UpdateRequestDTO, ListRequestDTO, Hours
)
from app.domain.models.time_entry import TimeEntry
from app.domain.models.value_objects import TimeEntryFilter


FILTER_FIELDS = {
    "user_id", "client_id", "project_id",
    "year", "month", "week",
    "start_date", "end_date",
}


def _clean_description(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Description cannot be empty")
    return v


class CreateTimeEntryRequestDTO(CreateRequestDTO):
    """DTO for creating a time entry."""

    user_id: int = Field(gt=0, description="User who did the work")
    client_id: int = Field(gt=0, description="Client ID")
    project_id: int = Field(gt=0, description="Project ID")
    date: dt.date = Field(description="Date the work was performed")
    hours: Decimal = Field(gt=0, le=24, decimal_places=2, description="Hours worked")
    description: str = Field(max_length=2000, description="Work description")

    # Accepted for compatibility, always recomputed from date
    year: Optional[int] = Field(default=None, exclude=True)
    month: Optional[int] = Field(default=None, exclude=True)
    week: Optional[int] = Field(default=None, exclude=True)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _clean_description(v)

    def to_payload(self) -> Dict[str, Any]:
        """Values for TimeEntryService.create."""
        return self.model_dump()


class UpdateTimeEntryRequestDTO(UpdateRequestDTO):
    """
    DTO for a partial time entry update.
    Only the fields present in the request are applied; explicit nulls are rejected.
    """

    user_id: Optional[int] = Field(default=None, gt=0, description="User ID")
    client_id: Optional[int] = Field(default=None, gt=0, description="Client ID")
    project_id: Optional[int] = Field(default=None, gt=0, description="Project ID")
    date: Optional[dt.date] = Field(default=None, description="Date the work was performed")
    hours: Optional[Decimal] = Field(default=None, gt=0, le=24, decimal_places=2, description="Hours worked")
    description: Optional[str] = Field(default=None, max_length=2000, description="Work description")

    year: Optional[int] = Field(default=None, exclude=True)
    month: Optional[int] = Field(default=None, exclude=True)
    week: Optional[int] = Field(default=None, exclude=True)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _clean_description(v)

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in sorted(self.model_fields_set):
            if name in ("year", "month", "week"):
                continue
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_changes(self) -> Dict[str, Any]:
        """The fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


class TimeEntryFilterRequestDTO(RequestDTO):
    """DTO for selecting time entries."""

    user_id: Optional[int] = Field(default=None, description="Filter by user ID")
    client_id: Optional[int] = Field(default=None, description="Filter by client ID")
    project_id: Optional[int] = Field(default=None, description="Filter by project ID")
    year: Optional[int] = Field(default=None, ge=1, le=9999, description="Filter by year")
    month: Optional[int] = Field(default=None, ge=1, le=12, description="Filter by month")
    week: Optional[int] = Field(default=None, ge=1, le=53, description="Filter by ISO week")
    start_date: Optional[dt.date] = Field(default=None, description="Entries on or after this date")
    end_date: Optional[dt.date] = Field(default=None, description="Entries on or before this date")

    @model_validator(mode="after")
    def validate_date_range(self):
        """Validate that end date is not before start date."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def to_filter(self) -> TimeEntryFilter:
        """Convert to the domain filter."""
        return TimeEntryFilter(**self.model_dump(include=FILTER_FIELDS))


class ListTimeEntriesRequestDTO(TimeEntryFilterRequestDTO, ListRequestDTO):
    """DTO for a page of filtered time entries."""
    pass


class TimeEntryResponseDTO(ResponseDTO):
    """DTO for time entry response."""

    user_id: int = Field(description="User ID")
    client_id: int = Field(description="Client ID")
    project_id: int = Field(description="Project ID")
    date: dt.date = Field(description="Date the work was performed")
    year: int = Field(description="Calendar year of date")
    month: int = Field(description="Calendar month of date")
    week: int = Field(description="ISO week of date")
    hours: Hours = Field(description="Hours worked")
    description: str = Field(description="Work description")

    @classmethod
    def from_domain(cls, entry: TimeEntry) -> "TimeEntryResponseDTO":
        """Build from a TimeEntry entity."""
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            client_id=entry.client_id,
            project_id=entry.project_id,
            date=entry.date,
            year=entry.year,
            month=entry.month,
            week=entry.week,
            hours=entry.hours,
            description=entry.description,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )
