"""
Unit tests for time entry and report DTOs.
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from pydantic import ValidationError

from app.application.dto.base_dto import ListResponseDTO
from app.application.dto.time_entry_dto import (
    CreateTimeEntryRequestDTO,
    UpdateTimeEntryRequestDTO,
    TimeEntryFilterRequestDTO,
    ListTimeEntriesRequestDTO,
    TimeEntryResponseDTO,
)
from app.application.dto.report_dto import SummaryRequestDTO, HoursSummaryResponseDTO
from app.domain.models.time_entry import TimeEntry
from app.domain.models.value_objects import HoursSummary, TimeEntryFilter


VALID = {
    "user_id": 1,
    "client_id": 2,
    "project_id": 3,
    "date": "2024-03-15",
    "hours": "7.25",
    "description": "  sprint planning  ",
}


class TestCreateTimeEntryRequestDTO:
    """Test cases for CreateTimeEntryRequestDTO."""

    def test_valid_request(self):
        dto = CreateTimeEntryRequestDTO(**VALID)

        assert dto.date == date(2024, 3, 15)
        assert dto.hours == Decimal("7.25")
        assert dto.description == "sprint planning"

    def test_date_parts_are_not_in_payload(self):
        """Test supplied year/month/week never reach the service."""
        dto = CreateTimeEntryRequestDTO(**VALID, year=2000, month=1, week=1)

        payload = dto.to_payload()

        assert "year" not in payload
        assert "week" not in payload
        assert payload["hours"] == Decimal("7.25")

    @pytest.mark.parametrize("hours", ["0", "-1", "24.01", "0.001"])
    def test_invalid_hours(self, hours):
        with pytest.raises(ValidationError):
            CreateTimeEntryRequestDTO(**{**VALID, "hours": hours})

    def test_max_hours_accepted(self):
        assert CreateTimeEntryRequestDTO(**{**VALID, "hours": 24}).hours == Decimal("24")

    def test_blank_description(self):
        with pytest.raises(ValidationError):
            CreateTimeEntryRequestDTO(**{**VALID, "description": "\t "})

    def test_non_positive_ids(self):
        with pytest.raises(ValidationError):
            CreateTimeEntryRequestDTO(**{**VALID, "client_id": 0})

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            CreateTimeEntryRequestDTO(**VALID, billable=True)


class TestUpdateTimeEntryRequestDTO:
    """Test cases for UpdateTimeEntryRequestDTO."""

    def test_only_sent_fields_are_changes(self):
        dto = UpdateTimeEntryRequestDTO(hours="3")

        assert dto.to_changes() == {"hours": Decimal("3")}

    def test_empty_update(self):
        assert UpdateTimeEntryRequestDTO().to_changes() == {}

    @pytest.mark.parametrize("field", ["hours", "description", "date", "user_id"])
    def test_explicit_null_rejected(self, field):
        with pytest.raises(ValidationError, match=f"{field} cannot be null"):
            UpdateTimeEntryRequestDTO(**{field: None})

    def test_null_date_parts_are_ignored(self):
        dto = UpdateTimeEntryRequestDTO(week=None, description="x")

        assert dto.to_changes() == {"description": "x"}


class TestTimeEntryFilterRequestDTO:
    """Test cases for filter validation."""

    @pytest.mark.parametrize("params", [
        {"month": 0},
        {"month": 13},
        {"week": 0},
        {"week": 54},
        {"start_date": "2024-03-02", "end_date": "2024-03-01"},
    ])
    def test_invalid_filters(self, params):
        with pytest.raises(ValidationError):
            TimeEntryFilterRequestDTO(**params)

    def test_to_filter(self):
        dto = TimeEntryFilterRequestDTO(user_id=4, start_date="2024-03-01", end_date="2024-03-01")

        assert dto.to_filter() == TimeEntryFilter(
            user_id=4, start_date=date(2024, 3, 1), end_date=date(2024, 3, 1)
        )


class TestSummaryRequestDTO:
    """Test cases for summary requests."""

    def test_period_resolves_against_today(self):
        dto = SummaryRequestDTO(period="last_week", user_id=1)

        entry_filter = dto.to_filter_for(date(2024, 3, 20))

        assert entry_filter.start_date == date(2024, 3, 11)
        assert entry_filter.end_date == date(2024, 3, 17)
        assert entry_filter.user_id == 1

    def test_period_with_dates(self):
        with pytest.raises(ValidationError):
            SummaryRequestDTO(period="this_year", end_date="2024-12-31")

    def test_unknown_period(self):
        with pytest.raises(ValidationError):
            SummaryRequestDTO(period="fortnight")


class TestResponseDTOs:
    """Test cases for response serialization."""

    def test_hours_serialize_as_numbers(self):
        entry = TimeEntry.create(
            user_id=1, client_id=2, project_id=3,
            date=date(2024, 12, 30), hours=Decimal("1.50"), description="release",
            now=datetime(2024, 12, 30, 10, 0, tzinfo=timezone.utc),
        )
        entry.id = 5

        data = TimeEntryResponseDTO.from_domain(entry).model_dump(mode="json")

        assert data["hours"] == 1.5
        assert (data["year"], data["month"], data["week"]) == (2024, 12, 1)
        assert data["date"] == "2024-12-30"

    def test_summary_response(self):
        summary = HoursSummary()
        summary.add(SimpleNamespace(user_id=1, client_id=2, project_id=3, hours=Decimal("2.5")))

        data = HoursSummaryResponseDTO.from_domain(
            summary, TimeEntryFilter(start_date=date(2024, 3, 1))
        ).model_dump(mode="json")

        assert data["total_hours"] == 2.5
        assert data["by_user"] == {"1": 2.5}
        assert data["start_date"] == "2024-03-01"
        assert data["end_date"] is None

    def test_list_response_pages(self):
        page = ListResponseDTO[int].create(items=[1, 2], total=5, page=2, page_size=2)

        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_prev is True


class TestListTimeEntriesRequestDTO:
    """Test cases for page parameters."""

    def test_page_size_has_no_fixed_upper_bound(self):
        """Test the page size limit is left to the configured maximum."""
        assert ListTimeEntriesRequestDTO(page_size=250).page_size == 250

    @pytest.mark.parametrize("params", [{"page": 0}, {"page_size": 0}])
    def test_non_positive_paging(self, params):
        with pytest.raises(ValidationError):
            ListTimeEntriesRequestDTO(**params)
