"""Tests for HabitTracker read-modify-persist operations."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from tests.helpers import make_entry
from habits.storage.database import SETTINGS_KEY
from habits.tracking.models import DEFAULT_SETTINGS, CustomCheckbox, Goal, Tag
from habits.tracking.tracker import HabitTracker


def test_initialize_saves_defaults(tracker, db):
    settings = tracker.initialize()
    assert settings == DEFAULT_SETTINGS
    assert db.get_settings() == DEFAULT_SETTINGS


def test_initialize_keeps_stored_settings(tracker, db):
    stored = replace(DEFAULT_SETTINGS, reminder_time="07:00")
    db.save_settings(stored)
    assert tracker.initialize() == stored


def test_initialize_with_custom_defaults(db):
    defaults = replace(DEFAULT_SETTINGS, reminder_time="21:00")
    assert HabitTracker(db, default_settings=defaults).initialize().reminder_time == "21:00"


def test_initialize_survives_corrupt_settings(tracker, db, caplog):
    db._set(SETTINGS_KEY, "garbage")
    with caplog.at_level(logging.ERROR):
        settings = tracker.initialize()

    assert settings == DEFAULT_SETTINGS
    assert "Failed to load settings" in caplog.text
    # the corrupt value is left for inspection
    assert db._get(SETTINGS_KEY) == "garbage"


def test_tag_operations_persist(tracker, db):
    tracker.initialize()
    tracker.add_tag(Tag(id="6", text="Tired", color="#111111"))
    tracker.update_tag("6", color="#222222")
    tracker.delete_tag("1")

    tags = db.get_settings().tags
    assert [t.id for t in tags] == ["2", "3", "4", "5", "6"]
    assert tags[-1].color == "#222222"


def test_checkbox_operations_persist(tracker):
    tracker.add_custom_checkbox(CustomCheckbox(id="walk", text="Walk"))
    tracker.add_custom_checkbox(CustomCheckbox(id="gym", text="Gym"))
    tracker.update_custom_checkbox("walk", enabled=False)

    assert [cb.id for cb in tracker.enabled_checkboxes()] == ["gym"]

    tracker.delete_custom_checkbox("gym")
    assert [cb.id for cb in tracker.settings().custom_checkboxes] == ["walk"]


def test_goal_operations_persist(tracker):
    tracker.add_goal(Goal(id="g1", field_key="didPray", label="Pray", target_per_week=3))
    tracker.update_goal("g1", label="Prayer")
    assert tracker.settings().goals[0].label == "Prayer"

    tracker.delete_goal("g1")
    assert tracker.settings().goals == ()


def test_goal_on_unknown_field_warns(tracker, caplog):
    with caplog.at_level(logging.WARNING):
        tracker.add_goal(Goal(id="g1", field_key="run", label="Run", target_per_week=1))
    assert "unknown field 'run'" in caplog.text


def test_update_settings(tracker):
    tracker.initialize()
    settings = tracker.update_settings(reminder_time="19:15")
    assert settings.reminder_time == "19:15"
    assert tracker.settings().reminder_time == "19:15"


def test_entries_in_range(tracker):
    for d in ("2025-03-08", "2025-03-09", "2025-03-10"):
        tracker.save_entry(make_entry(d))
    assert [e.date for e in tracker.get_entries_in_range("2025-03-09", "2025-03-31")] == [
        "2025-03-09",
        "2025-03-10",
    ]


def test_stats_uses_current_settings(tracker):
    tracker.initialize()
    tracker.add_goal(Goal(id="g1", field_key="didPray", label="Pray", target_per_week=1))
    tracker.save_entry(make_entry("2025-03-09", did_pray=True, feelings=("1",)))
    tracker.save_entry(make_entry("2025-04-01", reading_minutes=40))

    summary = tracker.stats()
    assert summary.total_entries == 2
    assert summary.goals_achieved == 1
    assert summary.mood_distribution_with_labels[0].tag.text == "Great"

    april = tracker.stats(start_date="2025-04-01")
    assert april.total_entries == 1
    assert april.average_reading_minutes == 40
    assert april.goals_achieved == 0


def test_week_and_month_stats(tracker):
    tracker.initialize()
    tracker.save_entry(make_entry("2025-03-09", calories=2000))
    tracker.save_entry(make_entry("2025-03-20", calories=1000))

    week = tracker.week_stats(date(2025, 3, 10))
    assert week.week_start == "2025-03-09"
    assert week.entries == 1
    assert week.average_calories == 2000

    month = tracker.month_stats(2025, 2)
    assert month.month == "2025-03"
    assert month.entries == 2
    assert month.average_calories == 1500


def test_clear_all(tracker):
    tracker.initialize()
    tracker.save_entry(make_entry("2025-03-09"))
    tracker.clear_all()

    assert tracker.entries() == []
    assert tracker.settings() == DEFAULT_SETTINGS
