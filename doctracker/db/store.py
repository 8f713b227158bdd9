"""SQLite entry store for DocTracker."""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from doctracker.db.base import EntryRepository
from doctracker.models import EntryRecord, NonProductiveLine, ProductiveLine
from doctracker.models.entry import ensure_utc

logger = logging.getLogger(__name__)

_DB_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"


def _to_db(value: datetime) -> str:
    """Fixed-width UTC text so that string comparison orders by time."""
    return ensure_utc(value).strftime(_DB_DATETIME_FORMAT)


def _from_db(value: str) -> datetime:
    return datetime.strptime(value, _DB_DATETIME_FORMAT).replace(tzinfo=timezone.utc)


class EntryStore(EntryRepository):
    """SQLite-based entry store."""

    REQUIRED_TABLES = ["entries"]

    def __init__(self, db_path: Path):
        """Initialize the entry store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id TEXT NOT NULL,
                    display_name TEXT NOT NULL,
                    date TEXT NOT NULL,
                    day_type TEXT NOT NULL,
                    productive_lines TEXT NOT NULL DEFAULT '[]',
                    non_productive_lines TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_entries_owner_date ON entries (owner_id, date)"
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> EntryRecord:
        return EntryRecord(
            id=row["id"],
            owner_id=row["owner_id"],
            display_name=row["display_name"],
            date=_from_db(row["date"]),
            day_type=row["day_type"],
            productive_lines=[
                ProductiveLine.model_validate(line)
                for line in json.loads(row["productive_lines"])
            ],
            non_productive_lines=[
                NonProductiveLine.model_validate(line)
                for line in json.loads(row["non_productive_lines"])
            ],
            created_at=_from_db(row["created_at"]),
        )

    @staticmethod
    def _dump_lines(lines: list) -> str:
        return json.dumps([line.model_dump(by_alias=True) for line in lines])

    # ==================== Entries ====================

    def create(self, entry: EntryRecord) -> EntryRecord:
        """Insert an entry and return it with its new ID."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO entries
                (owner_id, display_name, date, day_type,
                 productive_lines, non_productive_lines, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.owner_id,
                    entry.display_name,
                    _to_db(entry.date),
                    entry.day_type.value,
                    self._dump_lines(entry.productive_lines),
                    self._dump_lines(entry.non_productive_lines),
                    _to_db(entry.created_at),
                ),
            )
            conn.commit()
            entry_id = cursor.lastrowid or 0
        finally:
            conn.close()

        logger.debug("Created entry %s for owner %s", entry_id, entry.owner_id)
        return entry.model_copy(update={"id": entry_id})

    def find_by_id(self, entry_id: int) -> Optional[EntryRecord]:
        """Get an entry by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM entries WHERE id = ?", (entry_id,))
            row = cursor.fetchone()
            if row:
                return self._row_to_entry(row)
            return None
        finally:
            conn.close()

    def find_all(
        self,
        owner_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        newest_first: bool = True,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> list[EntryRecord]:
        """Query entries, optionally by owner and inclusive date range."""
        clauses = []
        params: list = []
        if owner_id is not None:
            clauses.append("owner_id = ?")
            params.append(owner_id)
        if start is not None:
            clauses.append("date >= ?")
            params.append(_to_db(start))
        if end is not None:
            clauses.append("date <= ?")
            params.append(_to_db(end))

        query = "SELECT * FROM entries"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        direction = "DESC" if newest_first else "ASC"
        query += f" ORDER BY date {direction}, id {direction}"
        if limit is not None or skip is not None:
            query += " LIMIT ? OFFSET ?"
            params.extend([limit if limit is not None else -1, skip or 0])

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [self._row_to_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update(self, entry: EntryRecord) -> EntryRecord:
        """Write lines and day type of an existing entry."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE entries
                SET day_type = ?, productive_lines = ?, non_productive_lines = ?
                WHERE id = ?
                """,
                (
                    entry.day_type.value,
                    self._dump_lines(entry.productive_lines),
                    self._dump_lines(entry.non_productive_lines),
                    entry.id,
                ),
            )
            conn.commit()
            updated = cursor.rowcount
        finally:
            conn.close()

        if not updated:
            raise LookupError(f"Entry {entry.id} does not exist")
        return self.find_by_id(entry.id) or entry

    def delete(self, entry_id: int) -> bool:
        """Delete an entry."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
