"""Entry storage for DocTracker."""

from doctracker.db.base import EntryRepository
from doctracker.db.store import EntryStore

__all__ = ["EntryRepository", "EntryStore"]
