"""Shared fixtures."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

# habits.main opens its database at import time; keep it out of the repo
os.environ.setdefault(
    "DATABASE_PATH", str(Path(tempfile.mkdtemp(prefix="habits-")) / "habits.db")
)

from habits.storage.database import HabitDatabase  # noqa: E402
from habits.tracking.tracker import HabitTracker  # noqa: E402


@pytest.fixture()
def db(tmp_path: Path) -> HabitDatabase:
    return HabitDatabase(str(tmp_path / "habits.db"))


@pytest.fixture()
def tracker(db: HabitDatabase) -> HabitTracker:
    return HabitTracker(db)
