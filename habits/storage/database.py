"""Simple SQLite key-value store for entries and settings."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from habits.tracking.models import DailyEntry, HabitSettings

logger = logging.getLogger(__name__)

ENTRIES_KEY = "habits_entries"
SETTINGS_KEY = "habits_settings"

_entries_adapter = TypeAdapter(list[DailyEntry])
_settings_adapter = TypeAdapter(HabitSettings)


class StorageError(Exception):
    """A stored value could not be decoded."""


class HabitDatabase:
    """SQLite-backed store for daily entries and user settings."""

    def __init__(self, db_path: str = "data/habits.db"):
        """Initialize database."""
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Create database tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        logger.info(f"Database initialized at {self.db_path}")

    # Entries

    def get_entries(self) -> list[DailyEntry]:
        """All stored entries, in save order."""
        raw = self._get(ENTRIES_KEY)
        if raw is None:
            return []

        try:
            return _entries_adapter.validate_json(raw)
        except ValidationError as e:
            raise StorageError(f"Stored entries are invalid: {e}") from e

    def save_entries(self, entries: list[DailyEntry]):
        """Replace all stored entries."""
        self._set(ENTRIES_KEY, _entries_adapter.dump_json(list(entries)).decode())
        logger.info(f"Saved {len(entries)} entries")

    def get_entry(self, entry_date: str) -> Optional[DailyEntry]:
        """Get entry by date (YYYY-MM-DD)."""
        for entry in self.get_entries():
            if entry.date == entry_date:
                return entry
        return None

    def save_entry(self, entry: DailyEntry):
        """Insert entry, or replace the existing one with the same date."""
        entries = self.get_entries()
        for index, existing in enumerate(entries):
            if existing.date == entry.date:
                entries[index] = entry
                break
        else:
            entries.append(entry)

        self.save_entries(entries)

    # Settings

    def get_settings(self) -> Optional[HabitSettings]:
        """Stored settings, or None if never saved."""
        raw = self._get(SETTINGS_KEY)
        if raw is None:
            return None

        try:
            return _settings_adapter.validate_json(raw)
        except ValidationError as e:
            raise StorageError(f"Stored settings are invalid: {e}") from e

    def save_settings(self, settings: HabitSettings):
        self._set(SETTINGS_KEY, _settings_adapter.dump_json(settings).decode())
        logger.info("Saved settings")

    def clear_all(self):
        """Remove all entries and settings."""
        self._delete(ENTRIES_KEY)
        self._delete(SETTINGS_KEY)
        logger.info("Cleared all stored data")

    # Key-value primitives

    def _get(self, key: str) -> Optional[str]:
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()

            if not row:
                return None

            return row["value"]

    def _set(self, key: str, value: str):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.now().isoformat()),
            )
            conn.commit()

    def _delete(self, key: str):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
