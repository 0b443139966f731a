"""Data models for daily entries, goals and user settings."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class Tag:
    """A selectable mood label."""
    id: str
    text: str
    color: str


@dataclass(frozen=True)
class CustomCheckbox:
    """A user-defined boolean habit field."""
    id: str
    text: str
    enabled: bool = True


@dataclass(frozen=True)
class DailyEntry:
    """One day's logged habit data."""
    id: str
    date: str  # YYYY-MM-DD, one entry per date
    feelings: tuple[str, ...] = ()  # tag ids
    bed_time: Optional[str] = None  # HH:MM
    wake_time: Optional[str] = None  # HH:MM
    calories: Optional[float] = None
    foods_eaten: str = ""
    reading_minutes: Optional[float] = None
    did_pray: bool = False
    did_read_bible: bool = False
    # excluded from __hash__, dicts are unhashable
    custom_checkboxes: dict[str, bool] = field(default_factory=dict, hash=False)


class BuiltInField(Enum):
    """Boolean fields every entry carries."""
    PRAYER = "didPray"
    BIBLE = "didReadBible"


@dataclass(frozen=True)
class CustomField:
    """Goal target backed by a custom checkbox."""
    checkbox_id: str


GoalField = Union[BuiltInField, CustomField]


@dataclass(frozen=True)
class Goal:
    """A target frequency for a tracked boolean field."""
    id: str
    field_key: str  # "didPray", "didReadBible" or a custom checkbox id
    label: str
    target_per_week: Optional[float] = None
    target_per_month: Optional[float] = None

    @property
    def field(self) -> GoalField:
        """Resolve field_key into a built-in or custom field."""
        for builtin in BuiltInField:
            if builtin.value == self.field_key:
                return builtin
        return CustomField(self.field_key)

    @property
    def target(self) -> float:
        """Weekly target if set, otherwise monthly target, otherwise 0."""
        if self.target_per_week is not None:
            return self.target_per_week
        if self.target_per_month is not None:
            return self.target_per_month
        return 0


@dataclass(frozen=True)
class FieldsEnabled:
    """Which entry fields the user tracks."""
    feelings: bool = True
    sleep: bool = True
    calories: bool = True
    reading: bool = True
    prayer: bool = True
    bible: bool = True


@dataclass(frozen=True)
class HabitSettings:
    """Everything the user configures: tags, checkboxes, goals and reminders."""
    tags: tuple[Tag, ...] = ()
    custom_checkboxes: tuple[CustomCheckbox, ...] = ()
    goals: tuple[Goal, ...] = ()
    reminder_time: str = "20:00"  # HH:MM
    fields_enabled: FieldsEnabled = field(default_factory=FieldsEnabled)


DEFAULT_TAGS = (
    Tag(id="1", text="Great", color="#22c55e"),
    Tag(id="2", text="Good", color="#3b82f6"),
    Tag(id="3", text="Ok", color="#eab308"),
    Tag(id="4", text="Bad", color="#f97316"),
    Tag(id="5", text="Terrible", color="#ef4444"),
)

DEFAULT_SETTINGS = HabitSettings(tags=DEFAULT_TAGS)
