"""HTTP request models."""

import secrets
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from habits.tracking.models import CustomCheckbox, DailyEntry, FieldsEnabled, Goal, Tag


def generate_id() -> str:
    """Generate short random record ID."""
    return secrets.token_hex(8)


class EntryRequest(BaseModel):
    """Body of PUT /api/entries/{date}."""

    id: Optional[str] = None
    feelings: list[str] = []
    bed_time: Optional[str] = None
    wake_time: Optional[str] = None
    calories: Optional[float] = Field(None, ge=0)
    foods_eaten: str = ""
    reading_minutes: Optional[float] = Field(None, ge=0)
    did_pray: bool = False
    did_read_bible: bool = False
    custom_checkboxes: dict[str, bool] = {}

    def to_entry(self, entry_date: str) -> DailyEntry:
        return DailyEntry(
            id=self.id or generate_id(),
            date=entry_date,
            feelings=tuple(self.feelings),
            bed_time=self.bed_time,
            wake_time=self.wake_time,
            calories=self.calories,
            foods_eaten=self.foods_eaten,
            reading_minutes=self.reading_minutes,
            did_pray=self.did_pray,
            did_read_bible=self.did_read_bible,
            custom_checkboxes=dict(self.custom_checkboxes),
        )


class TagRequest(BaseModel):
    id: Optional[str] = None
    text: str
    color: str = "#6b7280"

    def to_tag(self) -> Tag:
        return Tag(id=self.id or generate_id(), text=self.text, color=self.color)


class TagUpdate(BaseModel):
    text: Optional[str] = None
    color: Optional[str] = None


class CheckboxRequest(BaseModel):
    id: Optional[str] = None
    text: str
    enabled: bool = True

    def to_checkbox(self) -> CustomCheckbox:
        return CustomCheckbox(id=self.id or generate_id(), text=self.text, enabled=self.enabled)


class CheckboxUpdate(BaseModel):
    text: Optional[str] = None
    enabled: Optional[bool] = None


class GoalRequest(BaseModel):
    """Body of POST /api/goals."""

    id: Optional[str] = None
    field_key: str
    label: str
    target_per_week: Optional[float] = Field(None, ge=0)
    target_per_month: Optional[float] = Field(None, ge=0)

    def to_goal(self) -> Goal:
        return Goal(
            id=self.id or generate_id(),
            field_key=self.field_key,
            label=self.label,
            target_per_week=self.target_per_week,
            target_per_month=self.target_per_month,
        )


class GoalUpdate(BaseModel):
    """Body of PATCH /api/goals/{goal_id}. Only the targets may be cleared with null."""

    field_key: Optional[str] = None
    label: Optional[str] = None
    target_per_week: Optional[float] = Field(None, ge=0)
    target_per_month: Optional[float] = Field(None, ge=0)

    @field_validator("field_key", "label")
    @classmethod
    def reject_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class FieldsEnabledRequest(BaseModel):
    feelings: bool = True
    sleep: bool = True
    calories: bool = True
    reading: bool = True
    prayer: bool = True
    bible: bool = True

    def to_fields_enabled(self) -> FieldsEnabled:
        return FieldsEnabled(**self.model_dump())


class SettingsUpdate(BaseModel):
    """Body of PATCH /api/settings."""

    reminder_time: Optional[str] = None
    fields_enabled: Optional[FieldsEnabledRequest] = None
