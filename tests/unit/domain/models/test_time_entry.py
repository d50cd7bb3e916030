"""
Unit tests for TimeEntry domain model.
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from app.domain.models.time_entry import TimeEntry, parse_hours, format_hours
from app.domain.models.base import ValidationError


NOW = datetime(2024, 3, 20, 9, 0, 0, tzinfo=timezone.utc)
LATER = datetime(2024, 3, 21, 9, 0, 0, tzinfo=timezone.utc)


def make_entry(**overrides) -> TimeEntry:
    values = {
        "user_id": 1,
        "client_id": 2,
        "project_id": 3,
        "date": date(2024, 3, 15),
        "hours": Decimal("4.5"),
        "description": "design review",
        "now": NOW,
    }
    values.update(overrides)
    return TimeEntry.create(**values)


class TestTimeEntry:
    """Test cases for TimeEntry domain model."""

    def test_create_time_entry_success(self):
        """Test successful time entry creation."""
        entry = make_entry()

        assert entry.id is None
        assert entry.is_new
        assert entry.user_id == 1
        assert entry.client_id == 2
        assert entry.project_id == 3
        assert entry.hours == Decimal("4.5")
        assert entry.description == "design review"
        assert entry.created_at == NOW
        assert entry.updated_at == NOW

    def test_date_parts_are_derived(self):
        """Test year, month and ISO week come from the date."""
        entry = make_entry()

        assert (entry.year, entry.month, entry.week) == (2024, 3, 11)

    def test_caller_date_parts_are_ignored(self):
        """Test supplied year/month/week never override the derived ones."""
        entry = make_entry(year=1999, month=1, week=1)

        assert (entry.year, entry.month, entry.week) == (2024, 3, 11)

    def test_year_boundary_uses_calendar_year_and_iso_week(self):
        """Test 2024-12-30 is in ISO week 1 while keeping calendar year 2024."""
        entry = make_entry(date=date(2024, 12, 30))

        assert (entry.year, entry.month, entry.week) == (2024, 12, 1)

    def test_description_is_stripped(self):
        """Test surrounding whitespace is removed from the description."""
        entry = make_entry(description="  standup  ")

        assert entry.description == "standup"

    def test_datetime_date_is_truncated(self):
        """Test a datetime given as date is reduced to its calendar day."""
        entry = make_entry(date=datetime(2024, 3, 15, 18, 30))

        assert entry.date == date(2024, 3, 15)

    @pytest.mark.parametrize("hours", ["0", "-1", "24.01", "25"])
    def test_hours_out_of_range(self, hours):
        """Test hours must be in (0, 24]."""
        with pytest.raises(ValidationError) as exc_info:
            make_entry(hours=hours)

        assert exc_info.value.field == "hours"

    def test_hours_upper_bound_is_inclusive(self):
        """Test 24 hours is accepted."""
        assert make_entry(hours="24").hours == Decimal("24")

    def test_hours_with_too_many_decimals(self):
        """Test hours are limited to two decimal places."""
        with pytest.raises(ValidationError, match="2 decimal places"):
            make_entry(hours="1.234")

    def test_empty_description(self):
        """Test blank descriptions are rejected."""
        with pytest.raises(ValidationError, match="Description is required"):
            make_entry(description="   ")

    def test_malformed_date(self):
        """Test a non-date value is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            make_entry(date="2024-13-45")

        assert exc_info.value.field == "date"

    def test_missing_reference(self):
        """Test client_id is required."""
        with pytest.raises(ValidationError, match="client_id is required"):
            make_entry(client_id=None)

    def test_apply_changes_keeps_untouched_fields(self):
        """Test a partial patch only changes the fields it names."""
        entry = make_entry()
        entry.id = 7

        updated = entry.apply_changes({"hours": Decimal("6.0")}, LATER)

        assert updated.id == 7
        assert updated.hours == Decimal("6.0")
        assert updated.description == "design review"
        assert updated.date_parts == entry.date_parts
        assert updated.created_at == NOW
        assert updated.updated_at == LATER

    def test_apply_changes_does_not_mutate_original(self):
        """Test the original entry is left untouched."""
        entry = make_entry()

        entry.apply_changes({"description": "other"}, LATER)

        assert entry.description == "design review"
        assert entry.updated_at == NOW

    def test_apply_changes_recomputes_date_parts(self):
        """Test a date change moves year, month and week with it."""
        entry = make_entry()

        updated = entry.apply_changes({"date": date(2024, 4, 1)}, LATER)

        assert (updated.year, updated.month, updated.week) == (2024, 4, 14)

    def test_apply_changes_ignores_derived_fields(self):
        """Test year/month/week in a patch are dropped."""
        entry = make_entry()

        updated = entry.apply_changes({"week": 40, "month": 10}, LATER)

        assert (updated.month, updated.week) == (3, 11)

    def test_apply_changes_rejects_unknown_field(self):
        """Test identity fields cannot be patched."""
        entry = make_entry()

        with pytest.raises(ValidationError, match="Field 'id' cannot be changed"):
            entry.apply_changes({"id": 99}, LATER)

    def test_apply_changes_validates_result(self):
        """Test the merged entry is validated."""
        entry = make_entry()

        with pytest.raises(ValidationError):
            entry.apply_changes({"hours": "0"}, LATER)

    def test_snapshot_format(self):
        """Test the audit snapshot is JSON compatible."""
        entry = make_entry()
        entry.id = 5

        snapshot = entry.to_snapshot()

        assert snapshot == {
            "id": 5,
            "user_id": 1,
            "client_id": 2,
            "project_id": 3,
            "date": "2024-03-15",
            "year": 2024,
            "month": 3,
            "week": 11,
            "hours": "4.5",
            "description": "design review",
            "created_at": NOW.isoformat(),
            "updated_at": NOW.isoformat(),
        }

    def test_entities_with_same_id_are_equal(self):
        """Test equality is by ID."""
        first = make_entry()
        second = make_entry(description="other")
        first.id = second.id = 3

        assert first == second
        assert hash(first) == hash(second)

    def test_new_entities_are_not_equal(self):
        """Test unsaved entities never compare equal."""
        assert make_entry() != make_entry()


class TestParseHours:
    """Test cases for hours parsing."""

    def test_parse_float_keeps_its_decimal_text(self):
        assert parse_hours(0.1) == Decimal("0.1")

    def test_parse_string(self):
        assert parse_hours(" 7.25 ") == Decimal("7.25")

    def test_parse_rejects_text(self):
        with pytest.raises(ValidationError, match="Invalid hours value"):
            parse_hours("four")

    def test_parse_rejects_bool(self):
        with pytest.raises(ValidationError):
            parse_hours(True)


class TestFormatHours:
    """Test cases for the canonical hours text used in snapshots."""

    @pytest.mark.parametrize("hours,text", [
        ("4.5", "4.5"),
        ("4.50", "4.5"),
        ("6", "6.0"),
        ("6.00", "6.0"),
        ("10", "10.0"),
        ("24.00", "24.0"),
        ("0.25", "0.25"),
        ("0.10", "0.1"),
    ])
    def test_format(self, hours, text):
        assert format_hours(Decimal(hours)) == text

    def test_snapshot_ignores_stored_scale(self):
        """Test entries that differ only in hours scale snapshot the same."""
        first = make_entry(hours=Decimal("4.5"))
        second = make_entry(hours=Decimal("4.50"))

        assert first.to_snapshot()["hours"] == second.to_snapshot()["hours"] == "4.5"
