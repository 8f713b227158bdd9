"""Tests for the entry service.

**Feature: entry-management**
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from doctracker.db.store import EntryStore
from doctracker.entries import EXPORT_COLUMNS, EntryService
from doctracker.errors import (
    EntryNotFoundError,
    EntryValidationError,
    UnauthorizedEntryError,
)
from doctracker.models import DayType, UserContext

UTC = timezone.utc
DAY = datetime(2026, 2, 3, tzinfo=UTC)

ANA = UserContext(id="u-ana", name="Ana")
BO = UserContext(id="u-bo", name="Bo")
ADMIN = UserContext(id="u-admin", name="Admin", is_admin=True)


@pytest.fixture
def service():
    """Entry service over a temporary store."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield EntryService(EntryStore(Path(tmpdir) / "test.db"))


ROWS = [{"platform": "Portal", "docType": "Invoice", "queue": "AP", "count": 12, "timeInMins": 40}]


class TestCreateEntry:
    """Creation, validation and display-name attribution."""

    def test_create(self, service: EntryService):
        entry = service.create_entry(ANA, DAY, "Full Day", ROWS)

        assert entry.id is not None
        assert entry.owner_id == ANA.id
        assert entry.display_name == "Ana"
        assert entry.day_type == DayType.FULL_DAY
        assert entry.productive_lines[0].count == 12

    @pytest.mark.parametrize(
        "date,day_type,rows",
        [(None, "Full Day", ROWS), (DAY, None, ROWS), (DAY, "", ROWS), (DAY, "Full Day", None)],
    )
    def test_required_fields(self, service: EntryService, date, day_type, rows):
        with pytest.raises(EntryValidationError) as exc_info:
            service.create_entry(ANA, date, day_type, rows)
        assert exc_info.value.status_code == 400

    def test_invalid_day_type(self, service: EntryService):
        with pytest.raises(EntryValidationError):
            service.create_entry(ANA, DAY, "Weekend", ROWS)

    def test_empty_rows_allowed(self, service: EntryService):
        entry = service.create_entry(ANA, DAY, DayType.PTO, [])
        assert entry.productive_lines == []

    def test_non_admin_cannot_attribute(self, service: EntryService):
        entry = service.create_entry(ANA, DAY, "Full Day", ROWS, display_name="Someone Else")
        assert entry.display_name == "Ana"

    def test_admin_attribution(self, service: EntryService):
        entry = service.create_entry(ADMIN, DAY, "Full Day", ROWS, display_name="Processor 7")
        assert entry.display_name == "Processor 7"
        assert entry.owner_id == ADMIN.id

    def test_non_productive_rows(self, service: EntryService):
        entry = service.create_entry(
            ANA, DAY, "Half Day", ROWS,
            non_productive_rows=[{"activityType": "Training", "duration": "45", "comments": "onboarding"}],
        )
        assert entry.non_productive_lines[0].duration == 45.0


class TestOwnership:
    """Read, update and delete are restricted to the owner."""

    def test_get_entry(self, service: EntryService):
        created = service.create_entry(ANA, DAY, "Full Day", ROWS)
        assert service.get_entry(created.id, ANA) == created

        with pytest.raises(UnauthorizedEntryError) as exc_info:
            service.get_entry(created.id, BO)
        assert exc_info.value.status_code == 403

        with pytest.raises(EntryNotFoundError) as exc_info:
            service.get_entry(9999, ANA)
        assert exc_info.value.status_code == 404

    def test_update_entry(self, service: EntryService):
        created = service.create_entry(ANA, DAY, "Full Day", ROWS)

        updated = service.update_entry(
            created.id, ANA,
            day_type="Half Day",
            rows=[{"platform": "Mail", "count": 3}],
        )

        assert updated.day_type == DayType.HALF_DAY
        assert [line.platform for line in updated.productive_lines] == ["Mail"]
        assert updated.date == created.date
        assert updated.display_name == created.display_name
        assert updated.created_at == created.created_at

    def test_update_without_changes(self, service: EntryService):
        created = service.create_entry(ANA, DAY, "Full Day", ROWS)
        assert service.update_entry(created.id, ANA) == created

    def test_update_other_owner(self, service: EntryService):
        created = service.create_entry(ANA, DAY, "Full Day", ROWS)
        with pytest.raises(UnauthorizedEntryError):
            service.update_entry(created.id, BO, day_type="PTO")

    def test_update_invalid_day_type(self, service: EntryService):
        created = service.create_entry(ANA, DAY, "Full Day", ROWS)
        with pytest.raises(EntryValidationError):
            service.update_entry(created.id, ANA, day_type="Holiday")

    def test_update_missing(self, service: EntryService):
        with pytest.raises(EntryNotFoundError):
            service.update_entry(12345, ANA, day_type="PTO")

    def test_delete_entry(self, service: EntryService):
        created = service.create_entry(ANA, DAY, "Full Day", ROWS)

        with pytest.raises(UnauthorizedEntryError):
            service.delete_entry(created.id, BO)

        service.delete_entry(created.id, ANA)
        with pytest.raises(EntryNotFoundError):
            service.get_entry(created.id, ANA)


class TestListing:
    """Listing and recent entries."""

    def test_recent_entries(self, service: EntryService):
        for day in range(1, 8):
            service.create_entry(ANA, datetime(2026, 2, day, tzinfo=UTC), "Full Day", ROWS)
        service.create_entry(BO, datetime(2026, 2, 9, tzinfo=UTC), "Full Day", ROWS)

        recent = service.get_recent_entries(ANA.id)
        assert [entry.date.day for entry in recent] == [7, 6, 5, 4, 3]

    def test_date_range(self, service: EntryService):
        for day in range(1, 8):
            service.create_entry(ANA, datetime(2026, 2, day, tzinfo=UTC), "Full Day", ROWS)

        entries = service.get_user_entries(
            ANA.id,
            start=datetime(2026, 2, 2, tzinfo=UTC),
            end=datetime(2026, 2, 4, tzinfo=UTC),
            newest_first=False,
        )
        assert [entry.date.day for entry in entries] == [2, 3, 4]


class TestExport:
    """Flattened export rows."""

    def test_rows_per_line(self, service: EntryService):
        service.create_entry(ANA, DAY, "Full Day", ROWS + [{"platform": "Mail", "count": 2}])

        rows = service.export_rows(ANA)

        assert len(rows) == 2
        assert list(rows[0]) == EXPORT_COLUMNS
        assert rows[0] == {
            "username": "Ana",
            "date": "2026-02-03",
            "dayType": "Full Day",
            "platform": "Portal",
            "queue": "AP",
            "docType": "Invoice",
            "count": 12,
            "timeInMins": 40,
        }
        assert rows[1]["timeInMins"] is None

    def test_users_only_export_their_own(self, service: EntryService):
        service.create_entry(ANA, DAY, "Full Day", ROWS)
        service.create_entry(BO, DAY, "Full Day", ROWS)

        assert {row["username"] for row in service.export_rows(ANA)} == {"Ana"}
        assert {row["username"] for row in service.export_rows(ADMIN)} == {"Ana", "Bo"}

    def test_newest_first(self, service: EntryService):
        service.create_entry(ANA, datetime(2026, 1, 1, tzinfo=UTC), "Full Day", ROWS)
        service.create_entry(ANA, datetime(2026, 1, 3, tzinfo=UTC), "Full Day", ROWS)

        assert [row["date"] for row in service.export_rows(ANA)] == ["2026-01-03", "2026-01-01"]
