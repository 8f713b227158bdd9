"""Storage interface for entry records."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from doctracker.models import EntryRecord


class EntryRepository(ABC):
    """Abstract base class for entry storage.

    The productivity engine only needs ``fetch_entries``; the remaining
    methods are the generic CRUD capability set used by the entry service.
    """

    @abstractmethod
    def create(self, entry: EntryRecord) -> EntryRecord:
        """Persist a new entry.

        Args:
            entry: Entry to store. Its ``id`` is ignored.

        Returns:
            The stored entry with its assigned ``id``.
        """
        pass

    @abstractmethod
    def find_by_id(self, entry_id: int) -> Optional[EntryRecord]:
        """Get an entry by ID.

        Args:
            entry_id: Entry ID.

        Returns:
            The entry if found, None otherwise.
        """
        pass

    @abstractmethod
    def find_all(
        self,
        owner_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        newest_first: bool = True,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> list[EntryRecord]:
        """Query entries.

        Args:
            owner_id: Only entries owned by this user. None for all users.
            start: Inclusive lower bound on ``date``.
            end: Inclusive upper bound on ``date``.
            newest_first: Sort descending by date when True.
            limit: Maximum number of entries to return.
            skip: Number of entries to skip.

        Returns:
            Matching entries.
        """
        pass

    @abstractmethod
    def update(self, entry: EntryRecord) -> EntryRecord:
        """Replace the mutable parts of a stored entry.

        Only productive lines, non-productive lines and day type are written.

        Raises:
            LookupError: If the entry does not exist.
        """
        pass

    @abstractmethod
    def delete(self, entry_id: int) -> bool:
        """Delete an entry.

        Returns:
            True if an entry was deleted, False otherwise.
        """
        pass

    def fetch_entries(
        self, owner_id: str, start: datetime, end: datetime
    ) -> list[EntryRecord]:
        """Entries for one owner with ``date`` in [start, end], oldest first."""
        return self.find_all(owner_id=owner_id, start=start, end=end, newest_first=False)
