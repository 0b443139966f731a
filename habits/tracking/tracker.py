"""Habit tracking operations on top of the store."""

import logging
from datetime import date
from typing import Any, Callable, Optional

from habits.storage.database import HabitDatabase, StorageError

from . import settings_ops
from .models import DEFAULT_SETTINGS, CustomCheckbox, DailyEntry, Goal, HabitSettings, Tag
from .stats import (
    MonthlyStats,
    StatsSummary,
    WeeklyStats,
    calculate_stats,
    entries_in_range,
    monthly_stats,
    weekly_stats,
)

logger = logging.getLogger(__name__)


class HabitTracker:
    """
    Reads, transforms and persists habit data.

    Holds no state besides the store: every operation loads what it needs,
    applies a pure transformation and saves the result.
    """

    def __init__(
        self,
        database: HabitDatabase,
        default_settings: HabitSettings = DEFAULT_SETTINGS,
    ):
        """
        Initialize tracker.

        Args:
            database: Store for entries and settings
            default_settings: Settings used until the user saves their own
        """
        self.database = database
        self.default_settings = default_settings

    def initialize(self) -> HabitSettings:
        """
        Make sure settings exist in the store.

        Saves the defaults on first run. Unreadable stored settings are
        logged and the defaults are returned without overwriting the store.
        """
        try:
            stored = self.database.get_settings()
        except StorageError as e:
            logger.error(f"Failed to load settings, using defaults: {e}")
            return self.default_settings

        if stored is None:
            logger.info("No settings found, saving defaults")
            self.database.save_settings(self.default_settings)
            return self.default_settings

        self._warn_unknown_goal_fields(stored)
        return stored

    # Entries

    def entries(self) -> list[DailyEntry]:
        return self.database.get_entries()

    def save_entry(self, entry: DailyEntry):
        """Insert or replace the entry for entry.date."""
        self.database.save_entry(entry)
        logger.info(f"Saved entry for {entry.date}")

    def get_entry(self, entry_date: str) -> Optional[DailyEntry]:
        return self.database.get_entry(entry_date)

    def get_entries_in_range(self, start_date: str, end_date: str) -> list[DailyEntry]:
        return entries_in_range(self.entries(), start_date, end_date)

    # Settings

    def settings(self) -> HabitSettings:
        return self.database.get_settings() or self.default_settings

    def update_settings(self, **changes: Any) -> HabitSettings:
        return self._apply(settings_ops.update_settings, **changes)

    def add_tag(self, tag: Tag) -> HabitSettings:
        return self._apply(settings_ops.add_tag, tag)

    def update_tag(self, tag_id: str, **updates: Any) -> HabitSettings:
        return self._apply(settings_ops.update_tag, tag_id, **updates)

    def delete_tag(self, tag_id: str) -> HabitSettings:
        return self._apply(settings_ops.delete_tag, tag_id)

    def add_custom_checkbox(self, checkbox: CustomCheckbox) -> HabitSettings:
        return self._apply(settings_ops.add_custom_checkbox, checkbox)

    def update_custom_checkbox(self, checkbox_id: str, **updates: Any) -> HabitSettings:
        return self._apply(settings_ops.update_custom_checkbox, checkbox_id, **updates)

    def delete_custom_checkbox(self, checkbox_id: str) -> HabitSettings:
        return self._apply(settings_ops.delete_custom_checkbox, checkbox_id)

    def add_goal(self, goal: Goal) -> HabitSettings:
        return self._apply(settings_ops.add_goal, goal)

    def update_goal(self, goal_id: str, **updates: Any) -> HabitSettings:
        return self._apply(settings_ops.update_goal, goal_id, **updates)

    def delete_goal(self, goal_id: str) -> HabitSettings:
        return self._apply(settings_ops.delete_goal, goal_id)

    def enabled_checkboxes(self) -> list[CustomCheckbox]:
        return settings_ops.enabled_checkboxes(self.settings())

    # Statistics

    def stats(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> StatsSummary:
        """
        Aggregate entries with the current goals and tags.

        Args:
            start_date: Inclusive lower bound (YYYY-MM-DD), or None for no bound
            end_date: Inclusive upper bound (YYYY-MM-DD), or None for no bound

        Returns:
            StatsSummary over the selected entries
        """
        entries = self.entries()
        if start_date or end_date:
            entries = entries_in_range(
                entries, start_date or "0000-00-00", end_date or "9999-99-99"
            )

        settings = self.settings()
        return calculate_stats(entries, settings.goals, settings.tags)

    def week_stats(self, day: date) -> WeeklyStats:
        return weekly_stats(self.entries(), self.settings(), day)

    def month_stats(self, year: int, month_index: int) -> MonthlyStats:
        return monthly_stats(self.entries(), self.settings(), year, month_index)

    def clear_all(self):
        self.database.clear_all()

    def _apply(
        self, transform: Callable[..., HabitSettings], *args: Any, **kwargs: Any
    ) -> HabitSettings:
        """Load settings, apply a pure transformation and persist the result."""
        updated = transform(self.settings(), *args, **kwargs)
        self.database.save_settings(updated)
        self._warn_unknown_goal_fields(updated)
        return updated

    def _warn_unknown_goal_fields(self, settings: HabitSettings):
        for goal in settings_ops.unknown_goal_fields(settings):
            logger.warning(
                f"Goal {goal.label!r} tracks unknown field {goal.field_key!r}, "
                f"it will always count 0"
            )
