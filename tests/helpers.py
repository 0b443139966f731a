"""Builders shared by the test modules."""

from __future__ import annotations

from habits.tracking.models import DailyEntry


def make_entry(date: str, **fields) -> DailyEntry:
    """Build an entry with an id derived from its date."""
    fields.setdefault("id", f"entry-{date}")
    return DailyEntry(date=date, **fields)
