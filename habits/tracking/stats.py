"""Statistics aggregation over daily entries."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from .dates import (
    calculate_sleep_hours,
    format_date,
    get_month_end,
    get_month_start,
    get_week_end,
    get_week_start,
)
from .models import BuiltInField, CustomField, DailyEntry, Goal, HabitSettings, Tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoodCount:
    """How often one tag was logged."""
    tag_id: str
    tag: Optional[Tag]  # None if the id has no tag definition
    count: int
    percentage: int  # of total entries, not of total tag uses


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a single goal over the given entries."""
    goal: Goal
    count: int
    target: float
    percentage: int  # 0 when target is 0
    achieved: bool  # always True when target is 0


@dataclass(frozen=True)
class StatsSummary:
    """All derived metrics for one set of entries."""
    total_entries: int
    average_reading_minutes: Optional[int]
    average_calories: Optional[int]
    average_sleep_hours: Optional[str]  # one decimal, e.g. "7.5"
    mood_distribution: dict[str, int]
    mood_distribution_with_labels: list[MoodCount]
    goals_achieved: int
    total_goals: int
    goal_progress: list[GoalProgress]


@dataclass(frozen=True)
class WeeklyStats:
    """Summary of a Sunday-Saturday week."""
    week_start: str
    entries: int
    goals_achieved: int
    total_goals: int
    average_reading_minutes: Optional[int]
    average_calories: Optional[int]
    average_sleep: Optional[float]
    mood_distribution: dict[str, int]


@dataclass(frozen=True)
class MonthlyStats:
    """Summary of a calendar month."""
    month: str  # YYYY-MM
    entries: int
    goals_achieved: int
    total_goals: int
    average_reading_minutes: Optional[int]
    average_calories: Optional[int]
    average_sleep: Optional[float]
    mood_distribution: dict[str, int]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return math.floor(value + 0.5)


def format_one_decimal(value: float) -> str:
    """Format with exactly one decimal, rounding the exact binary value half up."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class StatsCalculator:
    """
    Derives metrics from entries, goals and tags.

    Every method recomputes from the inputs; nothing is cached between calls.
    """

    def __init__(
        self,
        entries: Iterable[DailyEntry],
        goals: Iterable[Goal],
        tags: Iterable[Tag],
    ):
        """Initialize with snapshots of the caller's collections."""
        self.entries = tuple(entries)
        self.goals = tuple(goals)
        self.tags = tuple(tags)

    def total_entries(self) -> int:
        return len(self.entries)

    def average_reading_minutes(self) -> Optional[int]:
        """Mean reading minutes over entries that logged it, or None."""
        return self._average([e.reading_minutes for e in self.entries])

    def average_calories(self) -> Optional[int]:
        """Mean calories over entries that logged it, or None."""
        return self._average([e.calories for e in self.entries])

    def average_sleep_hours(self) -> Optional[str]:
        """
        Mean sleep over entries with both bed and wake times.

        Returns:
            String with one decimal (e.g. "7.5"), or None if no entry qualifies
        """
        hours = [
            calculate_sleep_hours(e.bed_time, e.wake_time)
            for e in self.entries
            if e.bed_time and e.wake_time
        ]
        if not hours:
            return None
        return format_one_decimal(sum(hours) / len(hours))

    def mood_distribution(self) -> dict[str, int]:
        """
        Count tag occurrences across all entries.

        Tags never logged are absent. Keys follow first-occurrence order.
        """
        distribution: dict[str, int] = {}
        for entry in self.entries:
            for tag_id in entry.feelings:
                distribution[tag_id] = distribution.get(tag_id, 0) + 1
        return distribution

    def mood_distribution_with_labels(self) -> list[MoodCount]:
        """Mood distribution joined with tag definitions and entry percentages."""
        tags_by_id: dict[str, Tag] = {}
        for tag in self.tags:
            tags_by_id.setdefault(tag.id, tag)

        total = self.total_entries()
        return [
            MoodCount(
                tag_id=tag_id,
                tag=tags_by_id.get(tag_id),
                count=count,
                percentage=round_half_up(count / total * 100),
            )
            for tag_id, count in self.mood_distribution().items()
        ]

    def goals_achieved(self) -> int:
        """Number of goals whose count meets or exceeds the target."""
        achieved = 0
        for goal in self.goals:
            if self._count_goal(goal) >= goal.target:
                achieved += 1
        return achieved

    def total_goals(self) -> int:
        return len(self.goals)

    def goal_progress(self) -> list[GoalProgress]:
        """
        Progress of every goal, in input order.

        achieved and percentage are computed independently: a target of 0 is
        achieved but reports 0%.
        """
        progress = []
        for goal in self.goals:
            count = self._count_goal(goal)
            target = goal.target
            progress.append(
                GoalProgress(
                    goal=goal,
                    count=count,
                    target=target,
                    percentage=round_half_up(count / target * 100) if target > 0 else 0,
                    achieved=count >= target,
                )
            )
        return progress

    def summary(self) -> StatsSummary:
        """Compute every metric at once."""
        logger.debug(
            f"Calculating stats for {len(self.entries)} entries, {len(self.goals)} goals"
        )
        return StatsSummary(
            total_entries=self.total_entries(),
            average_reading_minutes=self.average_reading_minutes(),
            average_calories=self.average_calories(),
            average_sleep_hours=self.average_sleep_hours(),
            mood_distribution=self.mood_distribution(),
            mood_distribution_with_labels=self.mood_distribution_with_labels(),
            goals_achieved=self.goals_achieved(),
            total_goals=self.total_goals(),
            goal_progress=self.goal_progress(),
        )

    def _average(self, values: list[Optional[float]]) -> Optional[int]:
        """Rounded mean of the present values; None distinguishes "no data" from 0."""
        present = [v for v in values if v is not None]
        if not present:
            return None
        return round_half_up(sum(present) / len(present))

    def _count_goal(self, goal: Goal) -> int:
        """
        Count entries that satisfy the goal's field.

        Built-in fields fall back to a custom checkbox with the same key.
        Custom fields that match no checkbox simply count 0.
        """
        target_field = goal.field
        count = 0

        for entry in self.entries:
            if target_field is BuiltInField.PRAYER:
                hit = entry.did_pray or entry.custom_checkboxes.get(goal.field_key, False)
            elif target_field is BuiltInField.BIBLE:
                hit = entry.did_read_bible or entry.custom_checkboxes.get(
                    goal.field_key, False
                )
            elif isinstance(target_field, CustomField):
                hit = entry.custom_checkboxes.get(target_field.checkbox_id, False)
            else:
                raise TypeError(f"Unhandled goal field: {target_field!r}")

            if hit:
                count += 1

        return count


def calculate_stats(
    entries: Iterable[DailyEntry],
    goals: Iterable[Goal],
    tags: Iterable[Tag],
) -> StatsSummary:
    """Shortcut for StatsCalculator(entries, goals, tags).summary()."""
    return StatsCalculator(entries, goals, tags).summary()


def entries_in_range(
    entries: Iterable[DailyEntry], start_date: str, end_date: str
) -> list[DailyEntry]:
    """Entries whose date lies in [start_date, end_date] (YYYY-MM-DD, inclusive)."""
    return [e for e in entries if start_date <= e.date <= end_date]


def weekly_stats(
    entries: Iterable[DailyEntry], settings: HabitSettings, day: date
) -> WeeklyStats:
    """
    Aggregate the Sunday-Saturday week containing day.

    Args:
        entries: All entries; filtered to the week here
        settings: Supplies goals and tags
        day: Any date in the week

    Returns:
        WeeklyStats for that week
    """
    week_start = format_date(get_week_start(day))
    week_end = format_date(get_week_end(day))
    window = entries_in_range(entries, week_start, week_end)
    logger.debug(f"Week {week_start} to {week_end}: {len(window)} entries")

    summary = calculate_stats(window, settings.goals, settings.tags)
    return WeeklyStats(
        week_start=week_start,
        entries=summary.total_entries,
        goals_achieved=summary.goals_achieved,
        total_goals=summary.total_goals,
        average_reading_minutes=summary.average_reading_minutes,
        average_calories=summary.average_calories,
        average_sleep=_as_float(summary.average_sleep_hours),
        mood_distribution=summary.mood_distribution,
    )


def monthly_stats(
    entries: Iterable[DailyEntry],
    settings: HabitSettings,
    year: int,
    month_index: int,
) -> MonthlyStats:
    """Aggregate a calendar month (month_index 0=January)."""
    month_start = format_date(get_month_start(year, month_index))
    month_end = format_date(get_month_end(year, month_index))
    window = entries_in_range(entries, month_start, month_end)
    logger.debug(f"Month {month_start[:7]}: {len(window)} entries")

    summary = calculate_stats(window, settings.goals, settings.tags)
    return MonthlyStats(
        month=month_start[:7],
        entries=summary.total_entries,
        goals_achieved=summary.goals_achieved,
        total_goals=summary.total_goals,
        average_reading_minutes=summary.average_reading_minutes,
        average_calories=summary.average_calories,
        average_sleep=_as_float(summary.average_sleep_hours),
        mood_distribution=summary.mood_distribution,
    )


def _as_float(value: Optional[str]) -> Optional[float]:
    return float(value) if value is not None else None
