"""Entry management: create, list, update, delete and export.

Ownership is enforced here: users may only read or change their own
entries. Admins may attribute new entries to another display name and
export every user's data.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from doctracker.db.base import EntryRepository
from doctracker.errors import (
    EntryNotFoundError,
    EntryValidationError,
    UnauthorizedEntryError,
)
from doctracker.models import (
    DayType,
    EntryRecord,
    NonProductiveLine,
    ProductiveLine,
    UserContext,
)

logger = logging.getLogger(__name__)

LineInput = Union[ProductiveLine, dict[str, Any]]
NonProductiveInput = Union[NonProductiveLine, dict[str, Any]]

EXPORT_COLUMNS = [
    "username",
    "date",
    "dayType",
    "platform",
    "queue",
    "docType",
    "count",
    "timeInMins",
]


class EntryService:
    """Entry operations on behalf of an acting user."""

    def __init__(self, repository: EntryRepository):
        self.repository = repository

    def create_entry(
        self,
        user: UserContext,
        date: Optional[datetime],
        day_type: Optional[Union[DayType, str]],
        rows: Optional[Iterable[LineInput]],
        non_productive_rows: Iterable[NonProductiveInput] = (),
        display_name: Optional[str] = None,
    ) -> EntryRecord:
        """Create an entry owned by ``user``.

        Args:
            user: Acting user; always the owner of the new entry.
            date: Day the entry represents.
            day_type: Half Day, Full Day or PTO.
            rows: Productive lines (models or alias-keyed dicts).
            non_productive_rows: Non-productive lines.
            display_name: Name to record on the entry. Honoured only for
                admins; everyone else gets their own name.

        Returns:
            The stored entry.

        Raises:
            EntryValidationError: If required fields are missing or invalid.
        """
        if date is None or not day_type or rows is None:
            raise EntryValidationError()

        name = display_name if (user.is_admin and display_name) else user.name
        try:
            entry = EntryRecord(
                owner_id=user.id,
                display_name=name,
                date=date,
                day_type=day_type,
                productive_lines=list(rows),
                non_productive_lines=list(non_productive_rows),
            )
        except ValidationError as e:
            raise EntryValidationError(f"Invalid entry: {e}") from e

        created = self.repository.create(entry)
        logger.info("Saved entry %s for %s (%s)", created.id, user.id, name)
        return created

    def get_user_entries(
        self,
        owner_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
        newest_first: bool = True,
    ) -> list[EntryRecord]:
        """List a user's entries, optionally within an inclusive date range."""
        return self.repository.find_all(
            owner_id=owner_id,
            start=start,
            end=end,
            newest_first=newest_first,
            limit=limit,
            skip=skip,
        )

    def get_recent_entries(self, owner_id: str, limit: int = 5) -> list[EntryRecord]:
        """The user's ``limit`` most recent entries."""
        return self.get_user_entries(owner_id, limit=limit)

    def get_entry(self, entry_id: int, user: UserContext) -> EntryRecord:
        """Get one of the user's entries.

        Raises:
            EntryNotFoundError: If no such entry exists.
            UnauthorizedEntryError: If the user does not own it.
        """
        entry = self.repository.find_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError()
        if entry.owner_id != user.id:
            raise UnauthorizedEntryError()
        return entry

    def update_entry(
        self,
        entry_id: int,
        user: UserContext,
        day_type: Optional[Union[DayType, str]] = None,
        rows: Optional[Iterable[LineInput]] = None,
        non_productive_rows: Optional[Iterable[NonProductiveInput]] = None,
    ) -> EntryRecord:
        """Replace the day type and/or lines of one of the user's entries.

        Owner, display name, date and creation time never change.
        """
        entry = self.repository.find_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError()
        if entry.owner_id != user.id:
            raise UnauthorizedEntryError("Unauthorized to update this entry")

        changes: dict[str, Any] = {}
        if day_type is not None:
            changes["day_type"] = day_type
        if rows is not None:
            changes["productive_lines"] = list(rows)
        if non_productive_rows is not None:
            changes["non_productive_lines"] = list(non_productive_rows)
        if not changes:
            return entry

        try:
            updated = EntryRecord.model_validate({**entry.model_dump(), **changes})
        except ValidationError as e:
            raise EntryValidationError(f"Invalid entry: {e}") from e

        try:
            stored = self.repository.update(updated)
        except LookupError as e:
            raise EntryNotFoundError() from e
        logger.info("Updated entry %s for %s", entry_id, user.id)
        return stored

    def delete_entry(self, entry_id: int, user: UserContext) -> None:
        """Delete one of the user's entries."""
        entry = self.repository.find_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError()
        if entry.owner_id != user.id:
            raise UnauthorizedEntryError("Unauthorized to delete this entry")

        self.repository.delete(entry_id)
        logger.info("Deleted entry %s for %s", entry_id, user.id)

    def export_rows(self, user: UserContext) -> list[dict[str, Any]]:
        """Flatten entries to one row per productive line, newest first.

        Admins export every user's entries; everyone else only their own.
        """
        owner_id = None if user.is_admin else user.id
        rows = []
        for entry in self.repository.find_all(owner_id=owner_id, newest_first=True):
            for line in entry.productive_lines:
                rows.append(
                    {
                        "username": entry.display_name,
                        "date": entry.day_key,
                        "dayType": entry.day_type.value,
                        "platform": line.platform,
                        "queue": line.queue,
                        "docType": line.doc_type,
                        "count": line.count,
                        "timeInMins": line.time_in_mins,
                    }
                )
        return rows
